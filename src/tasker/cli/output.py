"""Colorful CLI output helpers."""

from __future__ import annotations

import sys
from typing import TYPE_CHECKING

if TYPE_CHECKING:
    from ..services import ColumnService, ProjectService, TaskService

# ANSI color codes
GREEN = "\033[32m"
YELLOW = "\033[33m"
BLUE = "\033[34m"
RED = "\033[31m"
RESET = "\033[0m"
CHECK = "\u2713"  # ✓
BULLET = "\u2022"  # •
CROSS = "\u2717"  # ✗


def _supports_color() -> bool:
    """Check if stdout is a TTY."""
    return hasattr(sys.stdout, "isatty") and sys.stdout.isatty()


def _colorize(text: str, color: str) -> str:
    if _supports_color():
        return f"{color}{text}{RESET}"
    return text


def success(message: str) -> None:
    """Print success message with green checkmark."""
    print(f"{_colorize(CHECK, GREEN)} {message}")


def info(message: str) -> None:
    """Print info message with yellow bullet."""
    print(f"{_colorize(BULLET, YELLOW)} {message}")


def header(message: str) -> None:
    """Print header message in blue."""
    print(_colorize(message, BLUE))


def error(message: str) -> None:
    """Print error message with red cross to stderr."""
    print(f"{_colorize(CROSS, RED)} {message}", file=sys.stderr)


def format_board(
    projects: ProjectService,
    columns: ColumnService,
    tasks: TaskService,
    project_id: int | None = None,
) -> list[str]:
    """
    Render projects as indented text, columns and tasks in board order.

    Example:
        Project #1: Website
          [1] default (#1)
              1. Fix login (#1)
    """
    if project_id is not None:
        selected = [projects.get_project(project_id)]
    else:
        selected = projects.list_projects()

    lines: list[str] = []
    for project in selected:
        lines.append(f"Project #{project.id}: {project.name}")
        for column in columns.list_columns(project.id):
            lines.append(f"  [{column.index}] {column.name} (#{column.id})")
            for task in tasks.list_tasks(column.id):
                lines.append(f"      {task.index}. {task.name} (#{task.id})")
    return lines
