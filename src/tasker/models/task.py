"""Task domain model."""

from pydantic import BaseModel


class Task(BaseModel):
    """A task that moves across columns by progress and within a column by priority."""

    id: int | None = None  # Assigned by the repository on create
    name: str
    description: str = ""
    index: int = 0  # 1-based position among the column's tasks
    column_id: int
