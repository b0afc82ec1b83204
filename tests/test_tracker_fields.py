"""
Tests for raw Notion record mapping.
"""

import pytest

from missionctl.core.tracker.fields import (
    dig,
    extract_id_number,
    extract_status,
    map_record,
)
from missionctl.core.tracker.models import StatusBucket


class TestDig:
    def test_nested_path(self) -> None:
        assert dig({"a": {"b": [{"c": 1}]}}, "a", "b", 0, "c") == 1

    def test_missing_key(self) -> None:
        assert dig({"a": {}}, "a", "b") is None

    def test_wrong_type_midway(self) -> None:
        assert dig({"a": "text"}, "a", "b") is None
        assert dig({"a": {"b": 1}}, "a", 0) is None

    def test_index_out_of_range(self) -> None:
        assert dig({"a": []}, "a", 0) is None


class TestMapRecord:
    """Tests for map_record()."""

    def test_full_record(self, make_raw_task) -> None:
        raw = make_raw_task(
            42,
            "In Progress",
            name="Rotate API keys",
            Priority={"select": {"name": "High"}},
            Role={"select": {"name": "CTO"}},
            **{
                "Due date": {"date": {"start": "2025-03-10"}},
                "Past due": {"formula": {"boolean": True}},
                "Task type": {"select": {"name": "Bug"}},
                "Summary": {"rich_text": [{"plain_text": "Keys expire soon"}]},
            },
        )

        record = map_record(raw)

        assert record.id == "page-42"
        assert record.id_number == 42
        assert record.name == "Rotate API keys"
        assert record.status == "In Progress"
        assert record.priority == "High"
        assert record.role == "CTO"
        assert record.due_date == "2025-03-10"
        assert record.past_due is True
        assert record.task_type == "Bug"
        assert record.summary == "Keys expire soon"
        assert record.bucket == StatusBucket.IN_PROGRESS

    def test_missing_properties_use_defaults(self) -> None:
        record = map_record({"id": "abc"})

        assert record.id == "abc"
        assert record.id_number == 0
        assert record.name == "Untitled"
        assert record.status == "No Status"
        assert record.priority == "Medium"
        assert record.role == "Unassigned"
        assert record.due_date is None
        assert record.past_due is False
        assert record.task_type == "Task"
        assert record.summary == ""

    def test_null_properties(self) -> None:
        record = map_record({"id": "abc", "properties": None})
        assert record.status == "No Status"

    def test_empty_title_list(self) -> None:
        raw = {"id": "x", "properties": {"Task name": {"title": []}}}
        assert map_record(raw).name == "Untitled"

    def test_non_finite_id_maps_to_zero(self, make_raw_task) -> None:
        raw = make_raw_task(1)
        raw["properties"]["ID"]["unique_id"]["number"] = float("nan")

        record = map_record(raw)

        assert record.id_number == 0
        assert record.name == "Task 1"

    def test_serialized_aliases(self, make_raw_task) -> None:
        data = map_record(make_raw_task(7, "Done")).model_dump(by_alias=True)

        assert data["idNumber"] == 7
        assert data["pastDue"] is False
        assert data["taskType"] == "Task"
        assert data["dueDate"] is None


class TestExtractStatus:
    """Status comes from a status property, then a select property."""

    def test_status_property(self, make_raw_task) -> None:
        assert extract_status(make_raw_task(1, "Done")["properties"]) == "Done"

    def test_select_fallback(self, make_raw_task) -> None:
        props = make_raw_task(1, "Review", use_select=True)["properties"]
        assert extract_status(props) == "Review"

    def test_status_preferred_over_select(self) -> None:
        props = {"Status": {"status": {"name": "Done"}, "select": {"name": "To Do"}}}
        assert extract_status(props) == "Done"

    def test_missing(self) -> None:
        assert extract_status({}) == "No Status"


class TestExtractIdNumber:
    @pytest.mark.parametrize(
        ("value", "expected"),
        [
            (12, 12),
            (12.0, 12),
            (None, 0),
            ("12", 0),
            (True, 0),
            (float("nan"), 0),
            (float("inf"), 0),
            (float("-inf"), 0),
        ],
    )
    def test_values(self, value, expected) -> None:
        props = {"ID": {"unique_id": {"number": value}}}
        assert extract_id_number(props) == expected
