"""
Tests for entity decoding and timestamp parsing.
"""

import datetime as dt

import pytest

from task_manager.models import DeleteResult, Task, TimerEntry, parse_timestamp


class TestParseTimestamp:

    def test_zulu_suffix(self):
        parsed = parse_timestamp("2024-01-01T10:00:00Z")
        assert parsed == dt.datetime(2024, 1, 1, 10, 0, tzinfo=dt.timezone.utc)

    def test_offset_is_normalized_to_utc(self):
        parsed = parse_timestamp("2024-01-01T12:00:00+02:00")
        assert parsed == dt.datetime(2024, 1, 1, 10, 0, tzinfo=dt.timezone.utc)
        assert parsed.tzinfo == dt.timezone.utc

    def test_naive_value_is_taken_as_utc(self):
        parsed = parse_timestamp("2024-01-01T10:00:00")
        assert parsed.tzinfo == dt.timezone.utc
        assert parsed.hour == 10

    def test_fractional_seconds(self):
        parsed = parse_timestamp("2024-01-01T10:00:00.250+00:00")
        assert parsed.microsecond == 250000

    @pytest.mark.parametrize("value", ["", "yesterday", None, 12])
    def test_rejects_garbage(self, value):
        with pytest.raises(ValueError):
            parse_timestamp(value)


class TestEntities:

    def test_task_from_json(self):
        task = Task.from_json({"id": "7", "description": "Write report"})
        assert task == Task(id=7, description="Write report")

    def test_task_without_description(self):
        assert Task.from_json({"id": 3}).description == ""

    def test_timer_entry_uses_fallback_task_id(self):
        entry = TimerEntry.from_json({"start": "2024-01-01T10:00:00Z"}, task_id=7)
        assert entry.task_id == 7
        assert entry.is_running

    def test_timer_entry_prefers_server_task_id(self):
        entry = TimerEntry.from_json(
            {"taskId": 9, "start": "2024-01-01T10:00:00Z"}, task_id=7
        )
        assert entry.task_id == 9

    def test_finished_timer_entry(self):
        entry = TimerEntry.from_json(
            {"start": "2024-01-01T10:00:00Z", "end": "2024-01-01T11:00:00Z"},
            task_id=7,
        )
        assert not entry.is_running
        assert entry.end - entry.start == dt.timedelta(hours=1)

    def test_delete_result(self):
        result = DeleteResult.from_json({"success": False, "message": "not found"})
        assert result == DeleteResult(success=False, message="not found")
        assert DeleteResult.from_json({"success": True}).message is None
