"""Board commands run by the tasker CLI."""

from __future__ import annotations

import argparse
import logging
from dataclasses import dataclass

from ..models import VERTICAL, Direction
from ..repositories import StoreProtocol
from ..services import ColumnService, CommentService, ProjectService, TaskService
from .output import format_board, header, info, success

logger = logging.getLogger(__name__)

# Commands that only read the board; the snapshot is not rewritten after them
READ_ONLY_COMMANDS = frozenset({"show"})


@dataclass
class BoardServices:
    """The services of one store, wired together for a CLI run."""

    projects: ProjectService
    columns: ColumnService
    tasks: TaskService
    comments: CommentService

    @classmethod
    def from_store(cls, store: StoreProtocol) -> BoardServices:
        return cls(
            projects=ProjectService(store),
            columns=ColumnService(store),
            tasks=TaskService(store),
            comments=CommentService(store),
        )


def add_command_parsers(parser: argparse.ArgumentParser) -> None:
    """Register the board subcommands on ``parser``."""
    commands = parser.add_subparsers(dest="command", required=True, metavar="COMMAND")

    show = commands.add_parser("show", help="Print projects with their columns and tasks")
    show.add_argument("--project", type=int, default=None, help="Only show this project")

    project_add = commands.add_parser("project-add", help="Create a project")
    project_add.add_argument("name")
    project_add.add_argument("--description", default="")

    column_add = commands.add_parser("column-add", help="Append a column to a project")
    column_add.add_argument("project_id", type=int)
    column_add.add_argument("name")

    column_rename = commands.add_parser("column-rename", help="Rename a column")
    column_rename.add_argument("column_id", type=int)
    column_rename.add_argument("name")

    column_move = commands.add_parser("column-move", help="Swap a column with a neighbour")
    column_move.add_argument("column_id", type=int)
    column_move.add_argument("direction", choices=["left", "right"])

    column_delete = commands.add_parser("column-delete", help="Delete a column")
    column_delete.add_argument("column_id", type=int)

    task_add = commands.add_parser("task-add", help="Append a task to a column")
    task_add.add_argument("column_id", type=int)
    task_add.add_argument("name")
    task_add.add_argument("--description", default="")

    task_move = commands.add_parser(
        "task-move", help="Move a task up/down in its column or left/right across columns"
    )
    task_move.add_argument("task_id", type=int)
    task_move.add_argument("direction", choices=[d.value for d in Direction])

    task_delete = commands.add_parser("task-delete", help="Delete a task")
    task_delete.add_argument("task_id", type=int)

    comment_add = commands.add_parser("comment-add", help="Comment on a task")
    comment_add.add_argument("task_id", type=int)
    comment_add.add_argument("text")


def run_command(args: argparse.Namespace, services: BoardServices) -> None:
    """
    Apply one parsed command to the board.

    Domain errors (TaskerError subclasses) propagate to the caller.
    """
    logger.debug("Running command: %s", args.command)

    if args.command == "show":
        lines = format_board(services.projects, services.columns, services.tasks, args.project)
        if not lines:
            info("No projects yet")
        for line in lines:
            if line.startswith("Project"):
                header(line)
            else:
                print(line)

    elif args.command == "project-add":
        project = services.projects.create_project(args.name, args.description)
        success(f"Created project #{project.id} '{project.name}'")

    elif args.command == "column-add":
        column = services.columns.create_column(args.name, args.project_id)
        success(f"Created column #{column.id} '{column.name}' at position {column.index}")

    elif args.command == "column-rename":
        column = services.columns.rename_column(args.column_id, args.name)
        success(f"Renamed column #{column.id} to '{column.name}'")

    elif args.command == "column-move":
        services.columns.move_column(args.column_id, args.direction)
        success(f"Moved column #{args.column_id} {args.direction}")

    elif args.command == "column-delete":
        services.columns.delete_column(args.column_id)
        success(f"Deleted column #{args.column_id}")

    elif args.command == "task-add":
        task = services.tasks.create_task(args.name, args.description, args.column_id)
        success(f"Created task #{task.id} '{task.name}' at position {task.index}")

    elif args.command == "task-move":
        direction = Direction(args.direction)
        if direction in VERTICAL:
            services.tasks.move_task_within_column(args.task_id, direction)
        else:
            services.tasks.move_task_across_columns(args.task_id, direction)
        success(f"Moved task #{args.task_id} {direction.value}")

    elif args.command == "task-delete":
        services.tasks.delete_task(args.task_id)
        success(f"Deleted task #{args.task_id}")

    elif args.command == "comment-add":
        comment = services.comments.create_comment(args.task_id, args.text)
        success(f"Added comment #{comment.id} to task #{args.task_id}")
