"""
Field extraction for raw Notion query results.

Each helper walks one nested property shape and returns a default when any
level is missing or has the wrong type. Nothing here raises on malformed
input.
"""

import math
from typing import Any

from missionctl.core.tracker.models import TaskRecord


def dig(data: Any, *path: str | int) -> Any:
    """
    Follow a path of dict keys and list indexes, returning None on any miss.

    Example:
        >>> dig({"a": {"b": [{"c": 1}]}}, "a", "b", 0, "c")
        1
        >>> dig({"a": None}, "a", "b") is None
        True
    """
    current = data
    for key in path:
        if isinstance(key, int):
            if not isinstance(current, list) or not -len(current) <= key < len(current):
                return None
        elif not isinstance(current, dict):
            return None
        elif key not in current:
            return None
        current = current[key]
    return current


def _text(value: Any, default: str) -> str:
    # Empty strings fall back as well
    if isinstance(value, str) and value:
        return value
    return default


def extract_status(props: dict[str, Any]) -> str:
    """Status from a status property, then a select property, else "No Status"."""
    status = dig(props, "Status", "status", "name")
    if isinstance(status, str) and status:
        return status
    return _text(dig(props, "Status", "select", "name"), "No Status")


def extract_id_number(props: dict[str, Any]) -> int:
    """Sequence id from the unique_id property, else 0 (also for NaN and infinities)."""
    number = dig(props, "ID", "unique_id", "number")
    if isinstance(number, bool) or not isinstance(number, (int, float)):
        return 0
    if isinstance(number, float) and not math.isfinite(number):
        return 0
    return int(number)


def extract_title(props: dict[str, Any]) -> str:
    return _text(dig(props, "Task name", "title", 0, "plain_text"), "Untitled")


def extract_select(props: dict[str, Any], name: str, default: str) -> str:
    return _text(dig(props, name, "select", "name"), default)


def extract_due_date(props: dict[str, Any]) -> str | None:
    start = dig(props, "Due date", "date", "start")
    return start if isinstance(start, str) and start else None


def extract_past_due(props: dict[str, Any]) -> bool:
    return dig(props, "Past due", "formula", "boolean") is True


def extract_summary(props: dict[str, Any]) -> str:
    return _text(dig(props, "Summary", "rich_text", 0, "plain_text"), "")


def map_record(raw: dict[str, Any]) -> TaskRecord:
    """
    Map one raw query result into a TaskRecord.

    Args:
        raw: A page object from the query ``results`` array

    Returns:
        TaskRecord with documented defaults for every missing field
    """
    props = raw.get("properties") if isinstance(raw, dict) else None
    if not isinstance(props, dict):
        props = {}

    record_id = raw.get("id") if isinstance(raw, dict) else None

    return TaskRecord(
        id=str(record_id) if record_id is not None else "",
        id_number=extract_id_number(props),
        name=extract_title(props),
        status=extract_status(props),
        priority=extract_select(props, "Priority", "Medium"),
        role=extract_select(props, "Role", "Unassigned"),
        due_date=extract_due_date(props),
        past_due=extract_past_due(props),
        task_type=extract_select(props, "Task type", "Task"),
        summary=extract_summary(props),
    )


__all__ = [
    "dig",
    "extract_due_date",
    "extract_id_number",
    "extract_past_due",
    "extract_select",
    "extract_status",
    "extract_summary",
    "extract_title",
    "map_record",
]
