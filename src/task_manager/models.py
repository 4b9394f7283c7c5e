from __future__ import annotations

import datetime as dt
from dataclasses import dataclass
from typing import Any, Dict, Optional


def parse_timestamp(value: str) -> dt.datetime:
    """Parse an ISO-8601 server timestamp into an aware UTC datetime.

    A trailing 'Z' is accepted. A naive value is taken as UTC, not as local
    time, and elapsed time is measured against UTC now.
    """
    if not isinstance(value, str) or not value:
        raise ValueError(f"Invalid timestamp: {value!r}")

    if value.endswith("Z"):
        value = value[:-1] + "+00:00"

    parsed = dt.datetime.fromisoformat(value)
    if parsed.tzinfo is None:
        parsed = parsed.replace(tzinfo=dt.timezone.utc)
    return parsed.astimezone(dt.timezone.utc)


@dataclass(frozen=True)
class Task:
    id: int
    description: str

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "Task":
        return cls(id=int(data["id"]), description=str(data.get("description") or ""))


@dataclass(frozen=True)
class TimerEntry:
    task_id: int
    start: dt.datetime
    end: Optional[dt.datetime] = None

    @property
    def is_running(self) -> bool:
        return self.end is None

    @classmethod
    def from_json(cls, data: Dict[str, Any], task_id: int) -> "TimerEntry":
        # The start endpoint answers without taskId; the running-entry one includes it.
        end = data.get("end")
        return cls(
            task_id=int(data.get("taskId", task_id)),
            start=parse_timestamp(data["start"]),
            end=parse_timestamp(end) if end else None,
        )


@dataclass(frozen=True)
class TimerConflict:
    """Server answer to a start request for a task whose timer already runs."""

    task_id: int
    error: str


@dataclass(frozen=True)
class DeleteResult:
    success: bool
    message: Optional[str] = None

    @classmethod
    def from_json(cls, data: Dict[str, Any]) -> "DeleteResult":
        message = data.get("message")
        return cls(
            success=bool(data["success"]),
            message=str(message) if message is not None else None,
        )
