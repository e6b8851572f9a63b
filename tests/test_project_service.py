"""Integration tests for ProjectService."""

import pytest

from tasker.errors import NotFoundError, ValidationError
from tasker.models import DEFAULT_COLUMN_NAME
from tasker.repositories import MemoryStore
from tasker.services import ColumnService, CommentService, ProjectService, TaskService


@pytest.fixture
def store() -> MemoryStore:
    """Create an empty store."""
    return MemoryStore()


@pytest.fixture
def project_service(store: MemoryStore) -> ProjectService:
    """Create a ProjectService over the store."""
    return ProjectService(store)


class TestProjectServiceCreate:
    """Tests for project creation."""

    def test_create_adds_default_column(self, project_service: ProjectService, store: MemoryStore):
        """A new project starts with exactly one column, 'default', at index 1."""
        project = project_service.create_project("Website", "Marketing site")

        columns = store.columns.list_by_project(project.id)
        assert [(c.name, c.index) for c in columns] == [(DEFAULT_COLUMN_NAME, 1)]
        assert project.description == "Marketing site"

    def test_create_validates_name(self, project_service: ProjectService):
        """Empty or over-long names are rejected."""
        with pytest.raises(ValidationError):
            project_service.create_project("")
        with pytest.raises(ValidationError):
            project_service.create_project("p" * 501)

    def test_create_validates_description(self, project_service: ProjectService):
        """Descriptions over 1000 characters are rejected."""
        project_service.create_project("ok", "d" * 1000)

        with pytest.raises(ValidationError) as exc_info:
            project_service.create_project("too long", "d" * 1001)
        assert exc_info.value.field == "description"

    def test_failed_default_column_rolls_back_project(
        self, project_service: ProjectService, store: MemoryStore, monkeypatch
    ):
        """If the default column cannot be written, no project is left behind."""

        def broken_create(column):
            raise RuntimeError("disk full")

        monkeypatch.setattr(store.columns, "create", broken_create)

        with pytest.raises(RuntimeError):
            project_service.create_project("Website")

        assert project_service.list_projects() == []


class TestProjectServiceQueries:
    """Tests for listing and fetching projects."""

    def test_list_sorted_by_name(self, project_service: ProjectService):
        """list_projects sorts alphabetically."""
        for name in ("beta", "alpha", "gamma"):
            project_service.create_project(name)

        assert [p.name for p in project_service.list_projects()] == ["alpha", "beta", "gamma"]

    def test_get_missing(self, project_service: ProjectService):
        """get_project raises NotFoundError for unknown IDs."""
        with pytest.raises(NotFoundError):
            project_service.get_project(3)

    def test_update(self, project_service: ProjectService):
        """update_project replaces name and description."""
        project = project_service.create_project("old")

        updated = project_service.update_project(project.id, "new", "desc")

        assert project_service.get_project(project.id) == updated
        assert (updated.name, updated.description) == ("new", "desc")


class TestProjectServiceDelete:
    """Tests for cascading project deletion."""

    def test_delete_cascades(self, project_service: ProjectService, store: MemoryStore):
        """Deleting a project removes its columns, tasks and comments."""
        project = project_service.create_project("Board")
        other = project_service.create_project("Other")
        column = ColumnService(store).create_column("doing", project.id)
        task = TaskService(store).create_task("t", "", column.id)
        comment = CommentService(store).create_comment(task.id, "note")

        project_service.delete_project(project.id)

        with pytest.raises(NotFoundError):
            store.projects.get_by_id(project.id)
        with pytest.raises(NotFoundError):
            store.columns.get_by_id(column.id)
        with pytest.raises(NotFoundError):
            store.tasks.get_by_id(task.id)
        with pytest.raises(NotFoundError):
            store.comments.get_by_id(comment.id)
        assert len(store.columns.list_by_project(other.id)) == 1

    def test_delete_missing(self, project_service: ProjectService):
        """Deleting an unknown project raises NotFoundError."""
        with pytest.raises(NotFoundError):
            project_service.delete_project(8)
