"""Column domain model."""

from pydantic import BaseModel

# Name given to the column every new project starts with
DEFAULT_COLUMN_NAME = "default"


class Column(BaseModel):
    """A column on a project board, grouping tasks by their progress."""

    id: int | None = None  # Assigned by the repository on create
    name: str
    index: int = 0  # 1-based position among the project's columns
    project_id: int
