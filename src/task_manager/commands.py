from __future__ import annotations

import logging
from typing import Callable, Optional

from task_manager.core.errors import (
    TaskNotFound,
    TimerConflictInconsistent,
    TransportError,
)
from task_manager.integrations.task_api import TaskApiClient
from task_manager.timer.cancellation import CancellationToken, cancel_on_signals
from task_manager.timer.display import Clock, TimerDisplay, utc_now
from task_manager.timer.reconciler import TimerReconciler

logger = logging.getLogger(__name__)

OK = 0


class TaskCommands:
    """The four task actions. Each prints its outcome and returns an exit status.

    Failures are reported as a printed message; the returned status is the
    error's exit code so the CLI can decide whether to surface it.
    """

    def __init__(
        self,
        api: TaskApiClient,
        clock: Clock = utc_now,
        token_factory: Callable[[], CancellationToken] = CancellationToken,
    ):
        self.api = api
        self.reconciler = TimerReconciler(api)
        self.clock = clock
        self.token_factory = token_factory

    def new_task(self, description: str, autostart: bool = False) -> int:
        try:
            task = self.api.create_task(description)
        except TransportError as e:
            logger.debug("create failed: %s", e)
            print("Failed to add new task.")
            return e.exit_code

        print(f"Task added with ID {task.id}")

        if autostart:
            print("Starting task")
            return self.start_task(task.id)
        return OK

    def list_tasks(self) -> int:
        try:
            tasks = self.api.list_tasks()
        except TransportError as e:
            logger.debug("list failed: %s", e)
            print("Failed to load tasks!")
            return e.exit_code

        print("Your tasks (recent first):")
        for task in tasks:
            print(f"{task.id}. {task.description}")
        return OK

    def remove_task(self, task_id: int) -> int:
        try:
            result = self.api.delete_task(task_id)
        except TransportError as e:
            logger.debug("delete failed: %s", e)
            print("Failed to delete task. It may have already been deleted.")
            return e.exit_code

        if result.success:
            print(f"Task {task_id} deleted!")
        else:
            print(f"Failed to delete task: {result.message or 'unknown error'}")
        return OK

    def start_task(self, task_id: int, token: Optional[CancellationToken] = None) -> int:
        try:
            task = self.reconciler.load_task(task_id)
        except TaskNotFound as e:
            print("ERROR: That task doesn't exist.")
            return e.exit_code
        except TransportError as e:
            logger.debug("task lookup failed: %s", e)
            print("Failed to load task.")
            return e.exit_code

        try:
            start = self.reconciler.resolve_start_for(task)
        except TimerConflictInconsistent as e:
            print(f"ERROR: {e}.")
            return e.exit_code
        except TransportError as e:
            logger.debug("timer start failed: %s", e)
            print("Failed to start task.")
            return e.exit_code

        display = TimerDisplay(task, start, clock=self.clock)
        if token is not None:
            display.run(token)
            return OK

        with cancel_on_signals(self.token_factory()) as signal_token:
            display.run(signal_token)
        return OK
