"""Service for task ordering within and across columns."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models import HORIZONTAL, VERTICAL, Direction, Task
from .cascade import delete_task_comments
from .ordering import close_gap, neighbour_index, next_index, swap_positions
from .validation import (
    TASK_DESCRIPTION_MAX_LENGTH,
    TASK_NAME_MAX_LENGTH,
    coerce_direction,
    limit_length,
    require_text,
)

if TYPE_CHECKING:
    from ..repositories import StoreProtocol

logger = logging.getLogger(__name__)


class TaskService:
    """Service for task creation, moves and deletion."""

    def __init__(self, store: StoreProtocol) -> None:
        self.store = store

    def list_tasks(self, column_id: int) -> list[Task]:
        """Get a column's tasks, ordered by index."""
        return sorted(self.store.tasks.list_by_column(column_id), key=lambda t: t.index)

    def get_task(self, task_id: int) -> Task:
        """Get a task by ID."""
        return self.store.tasks.get_by_id(task_id)

    def create_task(self, name: str, description: str, column_id: int) -> Task:
        """
        Append a new task to the bottom of a column.

        Raises:
            ValidationError: Name is empty or over 500 characters, or the
                description is over 5000 characters.
            NotFoundError: The column does not exist.
        """
        self._validate(name, description)

        with self.store.transaction():
            self.store.columns.get_by_id(column_id)
            siblings = self.store.tasks.list_by_column(column_id)
            task = self.store.tasks.create(
                Task(
                    name=name,
                    description=description,
                    index=next_index(siblings),
                    column_id=column_id,
                )
            )

        logger.info("Task created: %s (column=%s, index=%d)", task.id, column_id, task.index)
        return task

    def update_task(self, task_id: int, name: str, description: str) -> Task:
        """Change a task's name and description. Position and column are kept."""
        self._validate(name, description)

        with self.store.transaction():
            task = self.store.tasks.get_by_id(task_id)
            task.name = name
            task.description = description
            task = self.store.tasks.update(task)

        logger.info("Task updated: %s", task_id)
        return task

    def move_task_within_column(self, task_id: int, direction: Direction | str) -> None:
        """
        Swap a task with the one above or below it.

        Raises:
            ValidationError: Direction is not up or down.
            NotFoundError: The task does not exist, or it is already at the
                top (up) or bottom (down) of its column.
        """
        direction = coerce_direction(direction, VERTICAL)

        with self.store.transaction():
            task = self.store.tasks.get_by_id(task_id)
            neighbour = self.store.tasks.get_by_index_and_column(
                neighbour_index(task.index, direction), task.column_id
            )
            swap_positions(task, neighbour)
            self.store.tasks.update(neighbour)
            self.store.tasks.update(task)

        logger.debug(
            "Task reordered %s: %s (pos %d -> %d)",
            direction.value,
            task_id,
            neighbour.index,
            task.index,
        )

    def move_task_across_columns(self, task_id: int, direction: Direction | str) -> None:
        """
        Move a task to the end of the column on its left or right.

        The tasks below it in the source column shift up to close the gap,
        keeping their relative order.

        Args:
            task_id: Task to move
            direction: "left" or "right"

        Raises:
            ValidationError: Direction is not left or right.
            NotFoundError: The task does not exist, or its column is already
                the first (left) or last (right) column of the project.
        """
        direction = coerce_direction(direction, HORIZONTAL)

        with self.store.transaction():
            task = self.store.tasks.get_by_id(task_id)
            source = self.store.columns.get_by_id(task.column_id)
            destination = self.store.columns.get_by_index_and_project(
                neighbour_index(source.index, direction), source.project_id
            )

            siblings = self.store.tasks.list_by_column(source.id)
            for sibling in close_gap(siblings, task.index):
                self.store.tasks.update(sibling)

            old_index = task.index
            task.column_id = destination.id
            task.index = next_index(self.store.tasks.list_by_column(destination.id))
            self.store.tasks.update(task)

        logger.info(
            "Task moved %s: %s (column %s pos %d -> column %s pos %d)",
            direction.value,
            task_id,
            source.id,
            old_index,
            destination.id,
            task.index,
        )

    def delete_task(self, task_id: int) -> None:
        """
        Delete a task and its comments.

        The tasks below it shift up by one.

        Raises:
            NotFoundError: The task does not exist.
        """
        with self.store.transaction():
            task = self.store.tasks.get_by_id(task_id)
            siblings = self.store.tasks.list_by_column(task.column_id)
            for sibling in close_gap(siblings, task.index):
                self.store.tasks.update(sibling)

            delete_task_comments(self.store, task.id)
            self.store.tasks.delete_by_id(task.id)

        logger.info("Task deleted: %s (column=%s)", task_id, task.column_id)

    def _validate(self, name: str, description: str) -> None:
        require_text(name, TASK_NAME_MAX_LENGTH)
        limit_length(description, TASK_DESCRIPTION_MAX_LENGTH, "description")
