"""YAML snapshots of an in-memory store."""

from __future__ import annotations

import logging
import os
from collections import defaultdict
from pathlib import Path

import yaml
from pydantic import ValidationError as PydanticValidationError

from ..errors import ConstraintViolationError, SnapshotError
from ..services.ordering import is_contiguous
from .memory import MemoryStore

logger = logging.getLogger(__name__)

SNAPSHOT_VERSION = 1


def load_store(path: Path) -> MemoryStore:
    """
    Load a store from a YAML snapshot.

    A missing file yields an empty store. The loaded positions are checked:
    every project's columns and every column's tasks must be numbered 1..n.

    Raises:
        SnapshotError: The file is unreadable, malformed or inconsistent.
    """
    if not path.exists():
        logger.debug("No snapshot at %s, starting empty", path)
        return MemoryStore()

    try:
        with path.open(encoding="utf-8") as f:
            data = yaml.safe_load(f) or {}
    except yaml.YAMLError as e:
        raise SnapshotError(f"Invalid YAML in {path}: {e}") from e

    if not isinstance(data, dict):
        raise SnapshotError(f"Snapshot {path} must contain a mapping")

    version = data.get("version", SNAPSHOT_VERSION)
    if version != SNAPSHOT_VERSION:
        raise SnapshotError(f"Unsupported snapshot version {version} in {path}")

    try:
        store = MemoryStore.from_dict(data)
    except (PydanticValidationError, ConstraintViolationError, ValueError, TypeError) as e:
        raise SnapshotError(f"Invalid snapshot {path}: {e}") from e

    _check_positions(store, path)
    logger.info("Loaded snapshot: %s", path)
    return store


def save_store(store: MemoryStore, path: Path) -> None:
    """Write a store to a YAML snapshot, replacing the file atomically."""
    payload = {"version": SNAPSHOT_VERSION, **store.to_dict()}

    path.parent.mkdir(parents=True, exist_ok=True)
    tmp_path = path.with_suffix(f"{path.suffix}.tmp")
    with tmp_path.open("w", encoding="utf-8") as f:
        f.write("# Auto-generated by tasker\n")
        yaml.safe_dump(payload, f, default_flow_style=False, sort_keys=False)
        f.flush()
        os.fsync(f.fileno())
    os.replace(tmp_path, path)
    logger.debug("Saved snapshot: %s", path)


def _check_positions(store: MemoryStore, path: Path) -> None:
    data = store.to_dict()

    columns_by_project: dict[int, list[int]] = defaultdict(list)
    for column in data["columns"]:
        columns_by_project[column["project_id"]].append(column["index"])
    for project_id, indices in columns_by_project.items():
        if not is_contiguous(indices):
            raise SnapshotError(
                f"Column positions of project {project_id} in {path} are not 1..n: {sorted(indices)}"
            )

    tasks_by_column: dict[int, list[int]] = defaultdict(list)
    for task in data["tasks"]:
        tasks_by_column[task["column_id"]].append(task["index"])
    for column_id, indices in tasks_by_column.items():
        if not is_contiguous(indices):
            raise SnapshotError(
                f"Task positions of column {column_id} in {path} are not 1..n: {sorted(indices)}"
            )
