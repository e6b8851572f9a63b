"""In-memory store for projects, columns, tasks and comments."""

from __future__ import annotations

import logging
from collections.abc import Iterator
from contextlib import contextmanager
from operator import attrgetter
from typing import Any

from ..errors import ConstraintViolationError, NotFoundError
from ..models import Column, Comment, Project, Task

from .locking import ReadWriteLock

logger = logging.getLogger(__name__)

_by_index = attrgetter("index")


class MemoryStore:
    """
    Store keeping one dict per entity type, keyed by ID.

    The four repositories share a single readers-writer lock: lookups take the
    read side, writes take the write side. ``transaction()`` holds the write
    side for a whole service operation and puts the dicts back the way they
    were if the operation raises.

    Stored models are private copies. Nothing handed out by a repository
    aliases stored state, so a shallow copy of the dicts is a full snapshot.
    """

    def __init__(self) -> None:
        self.lock = ReadWriteLock()
        self._projects: dict[int, Project] = {}
        self._columns: dict[int, Column] = {}
        self._tasks: dict[int, Task] = {}
        self._comments: dict[int, Comment] = {}
        # IDs are never reused, even after deletes
        self._next_ids: dict[str, int] = {"project": 1, "column": 1, "task": 1, "comment": 1}
        self._in_transaction = False

        self.projects = MemoryProjectRepository(self)
        self.columns = MemoryColumnRepository(self)
        self.tasks = MemoryTaskRepository(self)
        self.comments = MemoryCommentRepository(self)

    @contextmanager
    def transaction(self) -> Iterator[None]:
        """Run a block as one unit of work (see StoreProtocol.transaction)."""
        with self.lock.write_locked():
            if self._in_transaction:
                yield
                return

            saved = self._capture()
            self._in_transaction = True
            try:
                yield
            except Exception:
                self._restore(saved)
                logger.debug("Transaction rolled back")
                raise
            finally:
                self._in_transaction = False

    # --- Snapshot Support ---

    def to_dict(self) -> dict[str, Any]:
        """Dump every record to plain data, ordered by ID."""
        with self.lock.read_locked():
            return {
                "next_ids": dict(self._next_ids),
                "projects": _dump_rows(self._projects),
                "columns": _dump_rows(self._columns),
                "tasks": _dump_rows(self._tasks),
                "comments": _dump_rows(self._comments),
            }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> MemoryStore:
        """Build a store from data produced by ``to_dict()``.

        Raises:
            pydantic.ValidationError: A record is malformed.
            ValueError: A section has the wrong shape, or two records share an ID.
            ConstraintViolationError: A record references a missing parent.
        """
        store = cls()
        store._projects = _load_rows(Project, data.get("projects"))
        store._columns = _load_rows(Column, data.get("columns"))
        store._tasks = _load_rows(Task, data.get("tasks"))
        store._comments = _load_rows(Comment, data.get("comments"))

        for column in store._columns.values():
            if column.project_id not in store._projects:
                raise ConstraintViolationError("column", "project_id", column.project_id)
        for task in store._tasks.values():
            if task.column_id not in store._columns:
                raise ConstraintViolationError("task", "column_id", task.column_id)
        for comment in store._comments.values():
            if comment.task_id not in store._tasks:
                raise ConstraintViolationError("comment", "task_id", comment.task_id)

        saved_ids = data.get("next_ids") or {}
        if not isinstance(saved_ids, dict):
            raise ValueError(f"next_ids must be a mapping, got {type(saved_ids).__name__}")
        tables = {
            "project": store._projects,
            "column": store._columns,
            "task": store._tasks,
            "comment": store._comments,
        }
        for kind, rows in tables.items():
            floor = max(rows, default=0) + 1
            store._next_ids[kind] = max(int(saved_ids.get(kind, 1)), floor)

        return store

    # --- Private Methods ---

    def _allocate_id(self, kind: str) -> int:
        """Hand out the next ID for an entity type. Caller holds the write side."""
        value = self._next_ids[kind]
        self._next_ids[kind] = value + 1
        return value

    def _capture(self) -> tuple[dict, ...]:
        return (
            dict(self._projects),
            dict(self._columns),
            dict(self._tasks),
            dict(self._comments),
            dict(self._next_ids),
        )

    def _restore(self, saved: tuple[dict, ...]) -> None:
        (
            self._projects,
            self._columns,
            self._tasks,
            self._comments,
            self._next_ids,
        ) = saved


class MemoryProjectRepository:
    """Project repository for the in-memory store."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    def list_all(self) -> list[Project]:
        with self._store.lock.read_locked():
            return [p.model_copy() for p in self._store._projects.values()]

    def create(self, project: Project) -> Project:
        with self._store.lock.write_locked():
            stored = project.model_copy(update={"id": self._store._allocate_id("project")})
            self._store._projects[stored.id] = stored
            return stored.model_copy()

    def get_by_id(self, project_id: int) -> Project:
        with self._store.lock.read_locked():
            project = self._store._projects.get(project_id)
            if project is None:
                raise NotFoundError("project", project_id)
            return project.model_copy()

    def update(self, project: Project) -> Project:
        with self._store.lock.write_locked():
            if project.id not in self._store._projects:
                raise NotFoundError("project", project.id)
            self._store._projects[project.id] = project.model_copy()
            return project.model_copy()

    def delete_by_id(self, project_id: int) -> None:
        with self._store.lock.write_locked():
            if self._store._projects.pop(project_id, None) is None:
                raise NotFoundError("project", project_id)


class MemoryColumnRepository:
    """Column repository for the in-memory store."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    def list_by_project(self, project_id: int) -> list[Column]:
        with self._store.lock.read_locked():
            if project_id not in self._store._projects:
                raise NotFoundError("project", project_id)
            columns = [c for c in self._store._columns.values() if c.project_id == project_id]
            return [c.model_copy() for c in sorted(columns, key=_by_index)]

    def create(self, column: Column) -> Column:
        with self._store.lock.write_locked():
            if column.project_id not in self._store._projects:
                raise ConstraintViolationError("column", "project_id", column.project_id)
            stored = column.model_copy(update={"id": self._store._allocate_id("column")})
            self._store._columns[stored.id] = stored
            return stored.model_copy()

    def get_by_id(self, column_id: int) -> Column:
        with self._store.lock.read_locked():
            column = self._store._columns.get(column_id)
            if column is None:
                raise NotFoundError("column", column_id)
            return column.model_copy()

    def get_by_index_and_project(self, index: int, project_id: int) -> Column:
        with self._store.lock.read_locked():
            for column in self._store._columns.values():
                if column.index == index and column.project_id == project_id:
                    return column.model_copy()
        raise NotFoundError("column", f"index {index} of project {project_id}")

    def update(self, column: Column) -> Column:
        with self._store.lock.write_locked():
            if column.id not in self._store._columns:
                raise NotFoundError("column", column.id)
            if column.project_id not in self._store._projects:
                raise ConstraintViolationError("column", "project_id", column.project_id)
            self._store._columns[column.id] = column.model_copy()
            return column.model_copy()

    def delete_by_id(self, column_id: int) -> None:
        with self._store.lock.write_locked():
            if self._store._columns.pop(column_id, None) is None:
                raise NotFoundError("column", column_id)


class MemoryTaskRepository:
    """Task repository for the in-memory store."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    def list_by_column(self, column_id: int) -> list[Task]:
        with self._store.lock.read_locked():
            if column_id not in self._store._columns:
                raise NotFoundError("column", column_id)
            tasks = [t for t in self._store._tasks.values() if t.column_id == column_id]
            return [t.model_copy() for t in sorted(tasks, key=_by_index)]

    def create(self, task: Task) -> Task:
        with self._store.lock.write_locked():
            if task.column_id not in self._store._columns:
                raise ConstraintViolationError("task", "column_id", task.column_id)
            stored = task.model_copy(update={"id": self._store._allocate_id("task")})
            self._store._tasks[stored.id] = stored
            return stored.model_copy()

    def get_by_id(self, task_id: int) -> Task:
        with self._store.lock.read_locked():
            task = self._store._tasks.get(task_id)
            if task is None:
                raise NotFoundError("task", task_id)
            return task.model_copy()

    def get_by_index_and_column(self, index: int, column_id: int) -> Task:
        with self._store.lock.read_locked():
            for task in self._store._tasks.values():
                if task.index == index and task.column_id == column_id:
                    return task.model_copy()
        raise NotFoundError("task", f"index {index} of column {column_id}")

    def update(self, task: Task) -> Task:
        with self._store.lock.write_locked():
            if task.id not in self._store._tasks:
                raise NotFoundError("task", task.id)
            if task.column_id not in self._store._columns:
                raise ConstraintViolationError("task", "column_id", task.column_id)
            self._store._tasks[task.id] = task.model_copy()
            return task.model_copy()

    def delete_by_id(self, task_id: int) -> None:
        with self._store.lock.write_locked():
            if self._store._tasks.pop(task_id, None) is None:
                raise NotFoundError("task", task_id)


class MemoryCommentRepository:
    """Comment repository for the in-memory store."""

    def __init__(self, store: MemoryStore) -> None:
        self._store = store

    def list_by_task(self, task_id: int) -> list[Comment]:
        with self._store.lock.read_locked():
            if task_id not in self._store._tasks:
                raise NotFoundError("task", task_id)
            return [c.model_copy() for c in self._store._comments.values() if c.task_id == task_id]

    def create(self, comment: Comment) -> Comment:
        with self._store.lock.write_locked():
            if comment.task_id not in self._store._tasks:
                raise ConstraintViolationError("comment", "task_id", comment.task_id)
            stored = comment.model_copy(update={"id": self._store._allocate_id("comment")})
            self._store._comments[stored.id] = stored
            return stored.model_copy()

    def get_by_id(self, comment_id: int) -> Comment:
        with self._store.lock.read_locked():
            comment = self._store._comments.get(comment_id)
            if comment is None:
                raise NotFoundError("comment", comment_id)
            return comment.model_copy()

    def update(self, comment: Comment) -> Comment:
        with self._store.lock.write_locked():
            if comment.id not in self._store._comments:
                raise NotFoundError("comment", comment.id)
            if comment.task_id not in self._store._tasks:
                raise ConstraintViolationError("comment", "task_id", comment.task_id)
            self._store._comments[comment.id] = comment.model_copy()
            return comment.model_copy()

    def delete_by_id(self, comment_id: int) -> None:
        with self._store.lock.write_locked():
            if self._store._comments.pop(comment_id, None) is None:
                raise NotFoundError("comment", comment_id)


def _dump_rows(rows: dict[int, Any]) -> list[dict[str, Any]]:
    return [rows[key].model_dump(mode="json") for key in sorted(rows)]


def _load_rows(model: Any, raw_rows: Any) -> dict[int, Any]:
    if raw_rows is None:
        return {}
    if not isinstance(raw_rows, list):
        raise ValueError(f"{model.__name__} records must be a list, got {type(raw_rows).__name__}")

    rows: dict[int, Any] = {}
    for raw in raw_rows:
        record = model.model_validate(raw)
        if record.id is None:
            raise ValueError(f"{model.__name__} record without an id: {raw}")
        if record.id in rows:
            raise ValueError(f"Duplicate {model.__name__} id: {record.id}")
        rows[record.id] = record
    return rows
