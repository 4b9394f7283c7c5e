from __future__ import annotations


class TaskManagerError(Exception):
    """Base class for every failure the client reports to the user."""

    exit_code = 1


class UsageError(TaskManagerError):
    """Absent, duplicate or malformed command-line flags."""

    exit_code = 2


class TransportError(TaskManagerError):
    """Network failure or an unreadable response from the task service."""

    exit_code = 3


class TaskNotFound(TaskManagerError):
    exit_code = 4

    def __init__(self, task_id: int):
        super().__init__(f"Task {task_id} does not exist")
        self.task_id = task_id


class TimerConflictInconsistent(TaskManagerError):
    """The server refused a start as already running, yet lists no running entry."""

    exit_code = 5

    def __init__(self, task_id: int):
        super().__init__(
            f"Task {task_id} reports a running timer but none could be found"
        )
        self.task_id = task_id
