"""Repository protocols for board storage backends."""

from contextlib import AbstractContextManager
from typing import Protocol

from ..models import Column, Comment, Project, Task


class ProjectRepositoryProtocol(Protocol):
    """Interface for project storage."""

    def list_all(self) -> list[Project]:
        """Load all projects, in no particular order."""
        ...

    def create(self, project: Project) -> Project:
        """Store a new project and return it with its assigned ID."""
        ...

    def get_by_id(self, project_id: int) -> Project:
        """Get a project by ID.

        Raises:
            NotFoundError: No project has this ID.
        """
        ...

    def update(self, project: Project) -> Project:
        """Overwrite the project with the same ID.

        Raises:
            NotFoundError: No project has this ID.
        """
        ...

    def delete_by_id(self, project_id: int) -> None:
        """Delete a project. Its columns are not touched.

        Raises:
            NotFoundError: No project has this ID.
        """
        ...


class ColumnRepositoryProtocol(Protocol):
    """Interface for column storage.

    Every method call is atomic on its own. Several calls that must succeed or
    fail together belong inside ``StoreProtocol.transaction()``.
    """

    def list_by_project(self, project_id: int) -> list[Column]:
        """Load the columns of a project, ordered by index.

        Raises:
            NotFoundError: The project does not exist.
        """
        ...

    def create(self, column: Column) -> Column:
        """Store a new column and return it with its assigned ID.

        The index is stored as given; callers compute it.

        Raises:
            ConstraintViolationError: column.project_id does not resolve.
        """
        ...

    def get_by_id(self, column_id: int) -> Column:
        """Get a column by ID.

        Raises:
            NotFoundError: No column has this ID.
        """
        ...

    def get_by_index_and_project(self, index: int, project_id: int) -> Column:
        """Get the column occupying a position in a project.

        This is the lookup used to find the neighbour during a move.

        Raises:
            NotFoundError: No column sits at this index.
        """
        ...

    def update(self, column: Column) -> Column:
        """Overwrite the column with the same ID.

        Raises:
            NotFoundError: No column has this ID.
            ConstraintViolationError: column.project_id does not resolve.
        """
        ...

    def delete_by_id(self, column_id: int) -> None:
        """Delete a column. Its tasks are not touched.

        Raises:
            NotFoundError: No column has this ID.
        """
        ...


class TaskRepositoryProtocol(Protocol):
    """Interface for task storage. Mirrors the column contract one level down."""

    def list_by_column(self, column_id: int) -> list[Task]:
        """Load the tasks of a column, ordered by index.

        Raises:
            NotFoundError: The column does not exist.
        """
        ...

    def create(self, task: Task) -> Task:
        """Store a new task and return it with its assigned ID.

        Raises:
            ConstraintViolationError: task.column_id does not resolve.
        """
        ...

    def get_by_id(self, task_id: int) -> Task:
        """Get a task by ID.

        Raises:
            NotFoundError: No task has this ID.
        """
        ...

    def get_by_index_and_column(self, index: int, column_id: int) -> Task:
        """Get the task occupying a position in a column.

        Raises:
            NotFoundError: No task sits at this index.
        """
        ...

    def update(self, task: Task) -> Task:
        """Overwrite the task with the same ID.

        Raises:
            NotFoundError: No task has this ID.
            ConstraintViolationError: task.column_id does not resolve.
        """
        ...

    def delete_by_id(self, task_id: int) -> None:
        """Delete a task. Its comments are not touched.

        Raises:
            NotFoundError: No task has this ID.
        """
        ...


class CommentRepositoryProtocol(Protocol):
    """Interface for comment storage."""

    def list_by_task(self, task_id: int) -> list[Comment]:
        """Load the comments of a task, in no particular order.

        Raises:
            NotFoundError: The task does not exist.
        """
        ...

    def create(self, comment: Comment) -> Comment:
        """Store a new comment.

        Raises:
            ConstraintViolationError: comment.task_id does not resolve.
        """
        ...

    def get_by_id(self, comment_id: int) -> Comment:
        """Get a comment by ID.

        Raises:
            NotFoundError: No comment has this ID.
        """
        ...

    def update(self, comment: Comment) -> Comment:
        """Overwrite the comment with the same ID.

        Raises:
            NotFoundError: No comment has this ID.
        """
        ...

    def delete_by_id(self, comment_id: int) -> None:
        """Delete a comment.

        Raises:
            NotFoundError: No comment has this ID.
        """
        ...


class StoreProtocol(Protocol):
    """A backing store: the four repositories plus a unit of work.

    Services receive a store at construction and never reach past it.
    """

    projects: ProjectRepositoryProtocol
    columns: ColumnRepositoryProtocol
    tasks: TaskRepositoryProtocol
    comments: CommentRepositoryProtocol

    def transaction(self) -> AbstractContextManager[None]:
        """Open a unit of work.

        Repository calls made inside the block are isolated from other
        threads and are undone if the block raises. Nested calls join the
        outermost unit of work.
        """
        ...
