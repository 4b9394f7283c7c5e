"""
Pytest configuration and shared fakes for task manager tests.
"""

import datetime as dt
import logging

import pytest

from task_manager.core.errors import TransportError
from task_manager.models import DeleteResult, Task, TimerConflict, TimerEntry
from task_manager.timer.cancellation import CancellationToken

ENV_VARS = (
    "TASK_MANAGER_API_URL",
    "TASK_MANAGER_TIMEOUT",
    "TASK_MANAGER_LOG_LEVEL",
    "TASK_MANAGER_LOG_DIR",
    "TASK_MANAGER_STRICT_EXIT",
)


def utc(text):
    return dt.datetime.fromisoformat(text.replace("Z", "+00:00"))


class FakeClock:
    """Wall clock that only moves when told to."""

    def __init__(self, now):
        self.now = now

    def __call__(self):
        return self.now

    def advance(self, seconds):
        self.now = self.now + dt.timedelta(seconds=seconds)


class SteppingToken(CancellationToken):
    """Token whose waits advance a FakeClock; cancels on the Nth wait."""

    def __init__(self, clock, cancel_on_wait):
        super().__init__()
        self.clock = clock
        self.cancel_on_wait = cancel_on_wait
        self.waits = []

    def wait(self, timeout=None):
        self.waits.append(timeout)
        if len(self.waits) >= self.cancel_on_wait:
            self.cancel()
            return True
        self.clock.advance(timeout)
        return False


class FakeTaskApi:
    """In-memory stand-in for TaskApiClient with the same method surface."""

    def __init__(self):
        self.tasks = {}
        self.running = {}
        self.created_start = None
        self.fail = set()
        self.calls = []
        self.next_id = 1
        self.delete_results = {}

    def _call(self, name, *args):
        self.calls.append((name,) + args)
        if name in self.fail:
            raise TransportError(f"{name} failed")

    def add_task(self, task_id, description):
        self.tasks[task_id] = Task(id=task_id, description=description)
        return self.tasks[task_id]

    def create_task(self, description):
        self._call("create_task", description)
        task = self.add_task(self.next_id, description)
        self.next_id += 1
        return task

    def get_task(self, task_id):
        self._call("get_task", task_id)
        return self.tasks.get(task_id)

    def list_tasks(self):
        self._call("list_tasks")
        return list(reversed(list(self.tasks.values())))

    def delete_task(self, task_id):
        self._call("delete_task", task_id)
        if task_id in self.delete_results:
            return self.delete_results[task_id]
        if self.tasks.pop(task_id, None) is None:
            return DeleteResult(success=False, message="not found")
        return DeleteResult(success=True)

    def start_timer(self, task_id):
        self._call("start_timer", task_id)
        if task_id in self.running:
            return TimerConflict(task_id=task_id, error="Timer already running")
        entry = TimerEntry(task_id=task_id, start=self.created_start)
        return entry

    def get_running_timer(self, task_id):
        self._call("get_running_timer", task_id)
        start = self.running.get(task_id)
        if start is None:
            return None
        return TimerEntry(task_id=task_id, start=start)

    def call_names(self):
        return [c[0] for c in self.calls]


@pytest.fixture
def api():
    return FakeTaskApi()


@pytest.fixture
def clock():
    return FakeClock(utc("2024-01-01T10:00:00Z"))


@pytest.fixture
def clean_env(monkeypatch):
    """Remove TASK_MANAGER_* variables and restore them afterwards."""
    for name in ENV_VARS:
        # setenv first so monkeypatch records the original state for undo
        monkeypatch.setenv(name, "")
        monkeypatch.delenv(name)
    return monkeypatch


@pytest.fixture(autouse=True)
def restore_root_logging():
    root = logging.getLogger()
    handlers = list(root.handlers)
    level = root.level
    yield
    for h in list(root.handlers):
        if h not in handlers:
            root.removeHandler(h)
            h.close()
    for h in handlers:
        if h not in root.handlers:
            root.addHandler(h)
    root.setLevel(level)
