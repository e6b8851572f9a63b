"""Project domain model."""

from pydantic import BaseModel


class Project(BaseModel):
    """A project; visually a board of columns."""

    id: int | None = None  # Assigned by the repository on create
    name: str
    description: str = ""
