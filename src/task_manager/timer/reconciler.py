from __future__ import annotations

import datetime as dt
import logging
from typing import Tuple

from task_manager.core.errors import TaskNotFound, TimerConflictInconsistent
from task_manager.integrations.task_api import TaskApiClient
from task_manager.models import Task, TimerConflict

logger = logging.getLogger(__name__)


class TimerReconciler:
    """Decide whether a start request creates a timer or adopts a running one.

    The server owns start times. A conflict answer to the start request is
    followed by one read of the running entry; that entry's start is kept
    as-is.
    """

    def __init__(self, api: TaskApiClient):
        self.api = api

    def resolve_start(self, task_id: int) -> Tuple[Task, dt.datetime]:
        task = self.load_task(task_id)
        return task, self.resolve_start_for(task)

    def load_task(self, task_id: int) -> Task:
        task = self.api.get_task(task_id)
        if task is None:
            raise TaskNotFound(task_id)
        return task

    def resolve_start_for(self, task: Task) -> dt.datetime:
        started = self.api.start_timer(task.id)
        if not isinstance(started, TimerConflict):
            logger.debug("Started new timer for task %s at %s", task.id, started.start)
            return started.start

        logger.debug(
            "Timer for task %s already running (%s), looking it up",
            task.id,
            started.error,
        )
        running = self.api.get_running_timer(task.id)
        if running is None:
            logger.warning(
                "Task %s: start refused as running, but no running entry exists",
                task.id,
            )
            raise TimerConflictInconsistent(task.id)

        logger.debug("Adopted running timer for task %s from %s", task.id, running.start)
        return running.start
