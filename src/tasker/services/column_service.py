"""Service for column ordering within a project."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..errors import DuplicateNameError, LastColumnError, ValidationError
from ..models import HORIZONTAL, Column, Direction
from .ordering import append_all, close_gap, neighbour_index, next_index, swap_positions
from .validation import COLUMN_NAME_MAX_LENGTH, coerce_direction, require_text

if TYPE_CHECKING:
    from ..repositories import StoreProtocol

logger = logging.getLogger(__name__)


class ColumnService:
    """Service for column creation, moves and deletion."""

    def __init__(self, store: StoreProtocol) -> None:
        self.store = store

    def list_columns(self, project_id: int) -> list[Column]:
        """Get a project's columns, ordered by index."""
        return sorted(self.store.columns.list_by_project(project_id), key=lambda c: c.index)

    def get_column(self, column_id: int) -> Column:
        """Get a column by ID."""
        return self.store.columns.get_by_id(column_id)

    def create_column(self, name: str, project_id: int) -> Column:
        """
        Append a new column to the end of a project's board.

        Raises:
            ValidationError: Name is empty or longer than 255 characters.
            DuplicateNameError: Another column of the project has this name.
            NotFoundError: The project does not exist.
        """
        require_text(name, COLUMN_NAME_MAX_LENGTH)

        with self.store.transaction():
            siblings = self.store.columns.list_by_project(project_id)
            self._ensure_unique_name(name, project_id, siblings)
            column = self.store.columns.create(
                Column(name=name, index=next_index(siblings), project_id=project_id)
            )

        logger.info(
            "Column created: %s '%s' (project=%s, index=%d)",
            column.id,
            column.name,
            project_id,
            column.index,
        )
        return column

    def rename_column(self, column_id: int, name: str) -> Column:
        """Change a column's name. Position and project are kept."""
        require_text(name, COLUMN_NAME_MAX_LENGTH)

        with self.store.transaction():
            column = self.store.columns.get_by_id(column_id)
            siblings = self.store.columns.list_by_project(column.project_id)
            others = [s for s in siblings if s.id != column.id]
            self._ensure_unique_name(name, column.project_id, others)
            column.name = name
            column = self.store.columns.update(column)

        logger.info("Column renamed: %s -> '%s'", column_id, name)
        return column

    def move_column(self, column_id: int, direction: Direction | str) -> None:
        """
        Swap a column with its neighbour to the left or right.

        Args:
            column_id: Column to move
            direction: "left" or "right"

        Raises:
            ValidationError: Direction is not left or right.
            NotFoundError: The column does not exist, or it is already the
                first (left) or last (right) column.
        """
        direction = coerce_direction(direction, HORIZONTAL)

        with self.store.transaction():
            column = self.store.columns.get_by_id(column_id)
            neighbour = self.store.columns.get_by_index_and_project(
                neighbour_index(column.index, direction), column.project_id
            )
            swap_positions(column, neighbour)
            self.store.columns.update(neighbour)
            self.store.columns.update(column)

        logger.info(
            "Column moved %s: %s (index %d -> %d)",
            direction.value,
            column_id,
            neighbour.index,
            column.index,
        )

    def delete_column(self, column_id: int) -> None:
        """
        Delete a column, handing its tasks to a neighbouring column.

        The tasks go to the column on the left. When the first column is
        deleted they go to the column at index 2, which then becomes first.
        They are appended after the destination's own tasks in their original
        order, and the columns to the right of the deleted one shift left.

        Raises:
            NotFoundError: The column does not exist.
            LastColumnError: It is the project's only column.
        """
        with self.store.transaction():
            column = self.store.columns.get_by_id(column_id)
            siblings = self.store.columns.list_by_project(column.project_id)
            if len(siblings) == 1:
                logger.debug("delete_column: refusing to delete last column %s", column_id)
                raise LastColumnError(column_id, column.project_id)

            destination = self._absorbing_column(column)
            moved = self.relocate_tasks(column.id, destination.id)

            for sibling in close_gap(siblings, column.index):
                self.store.columns.update(sibling)

            self.store.columns.delete_by_id(column.id)

        logger.info(
            "Column deleted: %s (project=%s, %d task(s) moved to column %s)",
            column_id,
            column.project_id,
            moved,
            destination.id,
        )

    def relocate_tasks(self, source_id: int, destination_id: int) -> int:
        """
        Move every task of one column to the end of another.

        Both columns must belong to the same project.

        Returns:
            Number of tasks moved

        Raises:
            NotFoundError: Either column does not exist.
            ValidationError: The columns are the same, or in different projects.
        """
        with self.store.transaction():
            source = self.store.columns.get_by_id(source_id)
            destination = self.store.columns.get_by_id(destination_id)
            if source.id == destination.id:
                raise ValidationError(
                    "destination_id", "destination", "cannot relocate tasks into their own column"
                )
            if source.project_id != destination.project_id:
                raise ValidationError(
                    "destination_id",
                    "destination",
                    f"column {destination_id} is not in project {source.project_id}",
                )

            tasks = self.store.tasks.list_by_column(source_id)
            existing = len(self.store.tasks.list_by_column(destination_id))
            for task in append_all(tasks, existing):
                task.column_id = destination_id
                self.store.tasks.update(task)

        logger.debug("Relocated %d task(s): column %s -> %s", len(tasks), source_id, destination_id)
        return len(tasks)

    def _absorbing_column(self, column: Column) -> Column:
        """Pick the column that receives the tasks of a column being deleted."""
        target = column.index - 1 if column.index > 1 else 2
        return self.store.columns.get_by_index_and_project(target, column.project_id)

    def _ensure_unique_name(self, name: str, project_id: int, siblings: list[Column]) -> None:
        if any(sibling.name == name for sibling in siblings):
            logger.debug("Duplicate column name '%s' in project %s", name, project_id)
            raise DuplicateNameError(name, project_id)
