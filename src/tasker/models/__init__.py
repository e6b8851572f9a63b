"""Data models."""

from .column import DEFAULT_COLUMN_NAME, Column
from .comment import Comment
from .enums import HORIZONTAL, VERTICAL, Direction
from .project import Project
from .task import Task

__all__ = [
    "DEFAULT_COLUMN_NAME",
    "HORIZONTAL",
    "VERTICAL",
    "Column",
    "Comment",
    "Direction",
    "Project",
    "Task",
]
