"""Exceptions raised by tasker repositories and services."""

from __future__ import annotations


class TaskerError(Exception):
    """Base exception for all tasker errors."""

    pass


class NotFoundError(TaskerError):
    """Referenced entity, or the neighbour at an expected index, does not exist."""

    def __init__(self, resource: str, key: object) -> None:
        super().__init__(f"{resource} not found: {key}")
        self.resource = resource
        self.key = key


class ConstraintViolationError(TaskerError):
    """A foreign reference (project, column, task) does not resolve."""

    def __init__(self, resource: str, field: str, value: object) -> None:
        super().__init__(f"{resource}.{field} references a missing record: {value}")
        self.resource = resource
        self.field = field
        self.value = value


class DuplicateNameError(TaskerError):
    """A sibling column already uses this name."""

    def __init__(self, name: str, project_id: int) -> None:
        super().__init__(f"Column '{name}' already exists in project {project_id}")
        self.name = name
        self.project_id = project_id


class LastColumnError(TaskerError):
    """The only column of a project cannot be deleted."""

    def __init__(self, column_id: int, project_id: int) -> None:
        super().__init__(f"Column {column_id} is the last column of project {project_id}")
        self.column_id = column_id
        self.project_id = project_id


class ValidationError(TaskerError):
    """Field value breaks a validation rule.

    Attributes:
        field: Name of the offending field (e.g., "name", "direction")
        rule: Rule that was broken: "required", "too_long", "direction"
            or "destination"
    """

    def __init__(self, field: str, rule: str, message: str) -> None:
        super().__init__(message)
        self.field = field
        self.rule = rule


class SnapshotError(TaskerError):
    """A board snapshot file could not be loaded."""

    pass
