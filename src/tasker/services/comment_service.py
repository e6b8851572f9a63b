"""Service for task comments."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models import Comment
from ..utils import now_utc
from .cascade import delete_task_comments
from .validation import COMMENT_TEXT_MAX_LENGTH, require_text

if TYPE_CHECKING:
    from ..repositories import StoreProtocol

logger = logging.getLogger(__name__)


class CommentService:
    """Service for comment CRUD operations. Comments carry no position."""

    def __init__(self, store: StoreProtocol) -> None:
        self.store = store

    def list_comments(self, task_id: int) -> list[Comment]:
        """Get a task's comments, newest first."""
        comments = self.store.comments.list_by_task(task_id)
        return sorted(comments, key=lambda c: (c.created_at, c.id), reverse=True)

    def get_comment(self, comment_id: int) -> Comment:
        """Get a comment by ID."""
        return self.store.comments.get_by_id(comment_id)

    def create_comment(self, task_id: int, text: str) -> Comment:
        """
        Add a comment to a task, stamped with the current time.

        Raises:
            ValidationError: Text is empty or over 5000 characters.
            NotFoundError: The task does not exist.
        """
        require_text(text, COMMENT_TEXT_MAX_LENGTH, "text")

        with self.store.transaction():
            self.store.tasks.get_by_id(task_id)
            comment = self.store.comments.create(
                Comment(text=text, created_at=now_utc(), task_id=task_id)
            )

        logger.info("Comment created: %s (task=%s)", comment.id, task_id)
        return comment

    def update_comment(self, comment_id: int, text: str) -> Comment:
        """Replace a comment's text. The timestamp is kept."""
        require_text(text, COMMENT_TEXT_MAX_LENGTH, "text")

        with self.store.transaction():
            comment = self.store.comments.get_by_id(comment_id)
            comment.text = text
            comment = self.store.comments.update(comment)

        logger.info("Comment updated: %s", comment_id)
        return comment

    def delete_comment(self, comment_id: int) -> None:
        """Delete a comment by ID."""
        logger.info("Deleting comment: %s", comment_id)
        self.store.comments.delete_by_id(comment_id)

    def delete_comments_for_task(self, task_id: int) -> int:
        """Delete every comment of a task. Returns how many were deleted."""
        with self.store.transaction():
            return delete_task_comments(self.store, task_id)
