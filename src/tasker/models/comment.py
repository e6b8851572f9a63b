"""Comment domain model."""

from datetime import datetime

from pydantic import BaseModel, Field

from ..utils import now_utc


class Comment(BaseModel):
    """A comment left on a task."""

    id: int | None = None
    text: str
    created_at: datetime = Field(default_factory=now_utc)
    task_id: int
