from __future__ import annotations

import logging
from typing import Any, List, Optional, Union

import requests

from task_manager.core.env import DEFAULT_API_URL, DEFAULT_TIMEOUT_SECONDS
from task_manager.core.errors import TransportError
from task_manager.models import DeleteResult, Task, TimerConflict, TimerEntry

logger = logging.getLogger(__name__)

JSON_HEADERS = {
    "Content-Type": "application/json",
    "Accept": "application/json",
}


class TaskApiClient:
    """Blocking client for the task service.

    Every call raises TransportError on network failure or an unreadable
    body. HTTP status codes are not interpreted; only the JSON body counts.
    """

    def __init__(
        self,
        base_url: str = DEFAULT_API_URL,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        session: Optional[requests.Session] = None,
    ):
        self.base_url = base_url.rstrip("/")
        self.timeout = timeout
        self.session = session or requests.Session()

    def _request(self, method: str, path: str, **kwargs: Any) -> Any:
        url = f"{self.base_url}{path}"
        logger.debug("%s %s", method, url)
        try:
            response = self.session.request(
                method, url, headers=JSON_HEADERS, timeout=self.timeout, **kwargs
            )
            body = response.json()
        except (requests.RequestException, ValueError) as exc:
            logger.debug("%s %s failed: %s", method, url, exc)
            raise TransportError(f"{method} {url} failed: {exc}") from exc

        logger.debug("%s %s -> %s", method, url, response.status_code)
        return body

    def create_task(self, description: str) -> Task:
        body = self._request("POST", "/", json={"description": description})
        return _decode(lambda: Task.from_json(body), "task")

    def get_task(self, task_id: int) -> Optional[Task]:
        """Return the task, or None when the service has no task with this id."""
        body = self._request("GET", f"/{task_id}")
        if not isinstance(body, dict) or body.get("id") is None:
            return None
        return _decode(lambda: Task.from_json(body), "task")

    def list_tasks(self) -> List[Task]:
        body = self._request("GET", "/all")
        return _decode(lambda: [Task.from_json(item) for item in body], "task list")

    def delete_task(self, task_id: int) -> DeleteResult:
        body = self._request("DELETE", f"/{task_id}")
        return _decode(lambda: DeleteResult.from_json(body), "delete result")

    def start_timer(self, task_id: int) -> Union[TimerEntry, TimerConflict]:
        body = self._request("POST", f"/{task_id}/start", data="")
        if isinstance(body, dict) and body.get("error") is not None:
            return TimerConflict(task_id=task_id, error=str(body["error"]))
        return _decode(lambda: TimerEntry.from_json(body, task_id), "timer entry")

    def get_running_timer(self, task_id: int) -> Optional[TimerEntry]:
        body = self._request("GET", f"/timeentry/running/{task_id}")
        entries = _decode(
            lambda: [TimerEntry.from_json(item, task_id) for item in body],
            "running timer list",
        )
        running = [entry for entry in entries if entry.is_running]
        if not running:
            return None
        return running[0]


def _decode(build, what: str):
    try:
        return build()
    except (KeyError, TypeError, ValueError) as exc:
        raise TransportError(f"Malformed {what} in response: {exc}") from exc
