from __future__ import annotations

import argparse
import sys
from typing import List, Optional

from task_manager.commands import OK, TaskCommands
from task_manager.core.env import Settings, load_local_env, load_settings
from task_manager.core.errors import UsageError
from task_manager.core.logging_setup import setup_logging
from task_manager.integrations.task_api import TaskApiClient

COMMANDS = ("new", "list", "remove", "start", "help")

# conventional status for termination by SIGINT
INTERRUPTED = 130


class _Parser(argparse.ArgumentParser):
    def error(self, message: str) -> None:  # type: ignore[override]
        raise UsageError(f"Invalid argument! {message}.")


def build_parser() -> argparse.ArgumentParser:
    parser = _Parser(
        prog="task-manager",
        description="Task Manager - create, list, remove and time tasks",
        add_help=False,
    )
    parser.add_argument(
        "--new",
        action="append",
        nargs="+",
        metavar=("DESCRIPTION", "AUTOSTART"),
        help="Create a new task. Optionally start the task (AUTOSTART: true/false).",
    )
    parser.add_argument(
        "--start", action="append", type=int, metavar="ID", help="Start an existing task."
    )
    parser.add_argument(
        "--remove",
        action="append",
        type=int,
        metavar="ID",
        help="Remove (delete) a task from the task manager.",
    )
    parser.add_argument(
        "--list",
        action="count",
        help="List all tasks, most recent first.",
    )
    parser.add_argument(
        "--help", action="count", help="List command line options."
    )
    return parser


def select_command(args: argparse.Namespace) -> str:
    """Return the single requested command; anything else is a usage error.

    A flag given twice counts as two commands.
    """
    occurrences = {name: _occurrences(getattr(args, name)) for name in COMMANDS}
    selected = [name for name in COMMANDS if occurrences[name]]
    if not selected:
        raise UsageError("")
    if sum(occurrences.values()) > 1:
        raise UsageError("ERROR: Only one command may be executed at a time!")

    command = selected[0]
    if command == "new" and len(args.new[0]) > 2:
        raise UsageError(
            "Invalid argument! --new takes a description and an optional autostart flag."
        )
    return command


def _occurrences(value) -> int:
    # append actions collect a list per occurrence, count actions an int
    if value is None:
        return 0
    if isinstance(value, list):
        return len(value)
    return int(value)


def parse_autostart(values: List[str]) -> bool:
    if len(values) < 2:
        return False
    return values[1].strip().lower() == "true"


def print_help(parser: argparse.ArgumentParser, message: str = "") -> None:
    if message:
        print(message)
    parser.print_help(sys.stdout)
    print()


def _exit_status(status: int, settings: Settings) -> int:
    # Failures are reported by message; distinct codes only on request.
    if settings.strict_exit:
        return status
    return OK


def main(argv: Optional[List[str]] = None) -> int:
    load_local_env()
    settings = load_settings()
    setup_logging(console_level=settings.log_level, log_dir=settings.log_dir)

    parser = build_parser()
    try:
        args = parser.parse_args(argv)
        command = select_command(args)
    except UsageError as e:
        print_help(parser, str(e))
        return _exit_status(e.exit_code, settings)

    if command == "help":
        print_help(parser)
        return OK

    commands = TaskCommands(TaskApiClient(settings.api_url, settings.timeout))

    try:
        status = run_command(commands, command, args)
    except KeyboardInterrupt:
        # interrupted before the timer display took over the signals
        print()
        print("Interrupted.")
        status = INTERRUPTED

    return _exit_status(status, settings)


def run_command(commands: TaskCommands, command: str, args: argparse.Namespace) -> int:
    if command == "new":
        values = args.new[0]
        return commands.new_task(values[0], autostart=parse_autostart(values))
    if command == "list":
        return commands.list_tasks()
    if command == "remove":
        return commands.remove_task(args.remove[0])
    return commands.start_task(args.start[0])


if __name__ == "__main__":
    sys.exit(main())
