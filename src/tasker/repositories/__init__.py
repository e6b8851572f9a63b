"""Repository layer for data access."""

from .memory import MemoryStore
from .protocol import (
    ColumnRepositoryProtocol,
    CommentRepositoryProtocol,
    ProjectRepositoryProtocol,
    StoreProtocol,
    TaskRepositoryProtocol,
)

__all__ = [
    "ColumnRepositoryProtocol",
    "CommentRepositoryProtocol",
    "MemoryStore",
    "ProjectRepositoryProtocol",
    "StoreProtocol",
    "TaskRepositoryProtocol",
]
