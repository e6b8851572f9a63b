"""Cascading deletes across entity types.

Children are found by parent ID through the store; no model holds a reference
to its parent object. Callers run these inside a transaction.
"""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..repositories import StoreProtocol

logger = logging.getLogger(__name__)


def delete_task_comments(store: StoreProtocol, task_id: int) -> int:
    """Delete every comment on a task. Returns how many were deleted."""
    comments = store.comments.list_by_task(task_id)
    for comment in comments:
        store.comments.delete_by_id(comment.id)
    if comments:
        logger.debug("Deleted %d comment(s) of task %s", len(comments), task_id)
    return len(comments)


def delete_column_tasks(store: StoreProtocol, column_id: int) -> int:
    """Delete every task in a column, with their comments."""
    tasks = store.tasks.list_by_column(column_id)
    for task in tasks:
        delete_task_comments(store, task.id)
        store.tasks.delete_by_id(task.id)
    if tasks:
        logger.debug("Deleted %d task(s) of column %s", len(tasks), column_id)
    return len(tasks)


def delete_project_columns(store: StoreProtocol, project_id: int) -> int:
    """Delete every column of a project, with their tasks and comments."""
    columns = store.columns.list_by_project(project_id)
    for column in columns:
        delete_column_tasks(store, column.id)
        store.columns.delete_by_id(column.id)
    return len(columns)
