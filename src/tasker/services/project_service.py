"""Service for projects and their mandatory first column."""

from __future__ import annotations

import logging
from typing import TYPE_CHECKING

from ..models import DEFAULT_COLUMN_NAME, Column, Project
from .cascade import delete_project_columns
from .validation import (
    PROJECT_DESCRIPTION_MAX_LENGTH,
    PROJECT_NAME_MAX_LENGTH,
    limit_length,
    require_text,
)

if TYPE_CHECKING:
    from ..repositories import StoreProtocol

logger = logging.getLogger(__name__)


class ProjectService:
    """Service for project CRUD operations."""

    def __init__(self, store: StoreProtocol) -> None:
        self.store = store

    def list_projects(self) -> list[Project]:
        """Get all projects sorted alphabetically by name."""
        return sorted(self.store.projects.list_all(), key=lambda p: (p.name, p.id))

    def get_project(self, project_id: int) -> Project:
        """Get a project by ID."""
        return self.store.projects.get_by_id(project_id)

    def create_project(self, name: str, description: str = "") -> Project:
        """
        Create a project together with its default column.

        A project never exists without a column, so both records are written
        in one unit of work.
        """
        self._validate(name, description)

        with self.store.transaction():
            project = self.store.projects.create(Project(name=name, description=description))
            self.store.columns.create(
                Column(name=DEFAULT_COLUMN_NAME, index=1, project_id=project.id)
            )

        logger.info("Project created: %s '%s'", project.id, project.name)
        return project

    def update_project(self, project_id: int, name: str, description: str = "") -> Project:
        """Change a project's name and description."""
        self._validate(name, description)

        with self.store.transaction():
            project = self.store.projects.get_by_id(project_id)
            project.name = name
            project.description = description
            project = self.store.projects.update(project)

        logger.info("Project updated: %s", project_id)
        return project

    def delete_project(self, project_id: int) -> None:
        """Delete a project with all of its columns, tasks and comments."""
        with self.store.transaction():
            self.store.projects.get_by_id(project_id)
            removed = delete_project_columns(self.store, project_id)
            self.store.projects.delete_by_id(project_id)

        logger.info("Project deleted: %s (%d column(s))", project_id, removed)

    def _validate(self, name: str, description: str) -> None:
        require_text(name, PROJECT_NAME_MAX_LENGTH)
        limit_length(description, PROJECT_DESCRIPTION_MAX_LENGTH, "description")
