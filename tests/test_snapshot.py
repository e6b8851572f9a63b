"""Tests for YAML snapshots of the in-memory store."""

from pathlib import Path

import pytest
import yaml

from tasker.errors import SnapshotError
from tasker.repositories import MemoryStore
from tasker.repositories.snapshot import load_store, save_store
from tasker.services import ColumnService, CommentService, ProjectService, TaskService


@pytest.fixture
def board_file(tmp_path: Path) -> Path:
    """Path for a snapshot inside a temporary directory."""
    return tmp_path / "data" / "tasker.yaml"


@pytest.fixture
def populated() -> MemoryStore:
    """Store with a project, two columns, tasks and a comment."""
    store = MemoryStore()
    project = ProjectService(store).create_project("Board", "demo")
    doing = ColumnService(store).create_column("doing", project.id)
    task_service = TaskService(store)
    task = task_service.create_task("write docs", "", doing.id)
    task_service.create_task("ship", "", doing.id)
    CommentService(store).create_comment(task.id, "started")
    return store


class TestSnapshot:
    """Tests for load_store/save_store."""

    def test_missing_file_gives_empty_store(self, board_file: Path):
        """Loading a path that does not exist yields an empty store."""
        store = load_store(board_file)
        assert store.projects.list_all() == []

    def test_save_then_load_preserves_board(self, populated: MemoryStore, board_file: Path):
        """A saved board loads back with the same records."""
        save_store(populated, board_file)

        loaded = load_store(board_file)

        assert loaded.to_dict() == populated.to_dict()

    def test_ids_continue_after_load(self, populated: MemoryStore, board_file: Path):
        """New records after a reload do not reuse IDs."""
        save_store(populated, board_file)
        loaded = load_store(board_file)

        project = ProjectService(loaded).create_project("Second")

        assert project.id == 2

    def test_save_writes_yaml_with_version(self, populated: MemoryStore, board_file: Path):
        """The snapshot is YAML with a version key."""
        save_store(populated, board_file)

        data = yaml.safe_load(board_file.read_text())

        assert data["version"] == 1
        assert [c["name"] for c in data["columns"]] == ["default", "doing"]
        assert not board_file.with_suffix(".yaml.tmp").exists()

    def test_invalid_yaml(self, board_file: Path):
        """Unparseable YAML raises SnapshotError."""
        board_file.parent.mkdir(parents=True)
        board_file.write_text("projects: [unclosed")

        with pytest.raises(SnapshotError):
            load_store(board_file)

    def test_unknown_version(self, board_file: Path):
        """Snapshots from another format version are refused."""
        board_file.parent.mkdir(parents=True)
        board_file.write_text("version: 99\n")

        with pytest.raises(SnapshotError):
            load_store(board_file)

    def test_dangling_reference(self, board_file: Path):
        """A task pointing at a missing column raises SnapshotError."""
        board_file.parent.mkdir(parents=True)
        board_file.write_text(
            "version: 1\n"
            "tasks:\n"
            "  - {id: 1, name: orphan, description: '', index: 1, column_id: 9}\n"
        )

        with pytest.raises(SnapshotError):
            load_store(board_file)

    def test_gap_in_positions(self, board_file: Path):
        """Column indices that are not 1..n raise SnapshotError."""
        board_file.parent.mkdir(parents=True)
        board_file.write_text(
            "version: 1\n"
            "projects:\n"
            "  - {id: 1, name: p, description: ''}\n"
            "columns:\n"
            "  - {id: 1, name: a, index: 1, project_id: 1}\n"
            "  - {id: 2, name: b, index: 3, project_id: 1}\n"
        )

        with pytest.raises(SnapshotError) as exc_info:
            load_store(board_file)
        assert "not 1..n" in str(exc_info.value)

    def test_malformed_record(self, board_file: Path):
        """A record failing model validation raises SnapshotError."""
        board_file.parent.mkdir(parents=True)
        board_file.write_text("version: 1\nprojects:\n  - {id: one}\n")

        with pytest.raises(SnapshotError):
            load_store(board_file)

    @pytest.mark.parametrize(
        "content",
        [
            "version: 1\nprojects: 5\n",
            "version: 1\ncolumns: {id: 1}\n",
            "version: 1\nnext_ids: [1, 2]\n",
            "version: 1\nnext_ids: {project: [1]}\n",
        ],
    )
    def test_wrong_section_shape(self, board_file: Path, content: str):
        """Sections of the wrong type raise SnapshotError."""
        board_file.parent.mkdir(parents=True)
        board_file.write_text(content)

        with pytest.raises(SnapshotError):
            load_store(board_file)

    def test_duplicate_ids(self, board_file: Path):
        """Two records sharing an ID raise SnapshotError instead of one being dropped."""
        board_file.parent.mkdir(parents=True)
        board_file.write_text(
            "version: 1\n"
            "projects:\n"
            "  - {id: 1, name: P}\n"
            "  - {id: 1, name: Q}\n"
        )

        with pytest.raises(SnapshotError) as exc_info:
            load_store(board_file)
        assert "Duplicate" in str(exc_info.value)

    def test_comment_without_timestamp(self, board_file: Path):
        """A comment with a null created_at is refused."""
        board_file.parent.mkdir(parents=True)
        board_file.write_text(
            "version: 1\n"
            "projects:\n"
            "  - {id: 1, name: p}\n"
            "columns:\n"
            "  - {id: 1, name: default, index: 1, project_id: 1}\n"
            "tasks:\n"
            "  - {id: 1, name: t, index: 1, column_id: 1}\n"
            "comments:\n"
            "  - {id: 1, text: hi, created_at: null, task_id: 1}\n"
        )

        with pytest.raises(SnapshotError):
            load_store(board_file)
