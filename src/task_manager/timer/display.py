from __future__ import annotations

import datetime as dt
import logging
import sys
from typing import Callable, Optional, TextIO

from task_manager.models import Task
from task_manager.timer.cancellation import CancellationToken
from task_manager.timer.constants import (
    HOURS_WRAP,
    INITIALIZING_TEXT,
    STOP_HINT,
    TICK_MILLIS,
)

logger = logging.getLogger(__name__)

Clock = Callable[[], dt.datetime]

EPOCH = dt.datetime(1970, 1, 1, tzinfo=dt.timezone.utc)


def utc_now() -> dt.datetime:
    return dt.datetime.now(dt.timezone.utc)


def format_elapsed(elapsed: dt.timedelta) -> str:
    """Render elapsed time as HH:MM:SS.

    Hours wrap at 24, so a timer running for 25h shows 01:00:00.
    """
    total = int(elapsed.total_seconds())
    if total <= 0:
        return INITIALIZING_TEXT

    hours = (total // 3600) % HOURS_WRAP
    minutes = (total // 60) % 60
    seconds = total % 60
    return f"{hours:02d}:{minutes:02d}:{seconds:02d}"


def seconds_until_next_tick(now: dt.datetime) -> float:
    epoch_millis = (now - EPOCH) // dt.timedelta(milliseconds=1)
    return (TICK_MILLIS - epoch_millis % TICK_MILLIS) / 1000.0


class TimerDisplay:
    """Live single-line elapsed-time counter for one running task."""

    def __init__(
        self,
        task: Task,
        start: dt.datetime,
        stream: Optional[TextIO] = None,
        clock: Clock = utc_now,
    ):
        self.task = task
        self.start = start
        self.stream = stream or sys.stdout
        self.clock = clock
        self._width = 0

    def render(self, now: dt.datetime) -> str:
        return format_elapsed(now - self.start)

    def run(self, token: CancellationToken) -> None:
        """Redraw the counter every second until the token is cancelled.

        Ends by replacing the counter line with a single stop line.
        """
        logger.debug("Timer display for task %s from %s", self.task.id, self.start)

        while not token.cancelled:
            now = self.clock()
            self._write_line(f"{self.render(now)} {STOP_HINT}")
            if token.wait(seconds_until_next_tick(now)):
                break

        self._write_line(f"Task {self.task.id} stopped!", end="\n")
        logger.debug("Timer display for task %s stopped", self.task.id)

    def _write_line(self, text: str, end: str = "") -> None:
        # pad to the previous width so a shorter line fully covers a longer one
        self.stream.write("\r" + text.ljust(self._width) + end)
        self.stream.flush()
        self._width = len(text)
