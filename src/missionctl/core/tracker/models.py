"""
Pydantic models for task-tracker records and aggregate results.

These models provide type-safe data structures for:
- TaskRecord: One mapped tracker item
- StatusBucket: Normalized status classes used by the stats
- TaskStats: Counts derived from a full batch of records
- StatsResult: The stats payload served to the dashboard widget
- TaskBoard: Task list plus board counts for the tasks panel
- QueryPage: One page returned by a paginated query

JSON field names follow the dashboard frontend (camelCase). Models accept
either the Python name or the alias on construction.
"""

from enum import Enum
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

COMPLETED_STATUSES = frozenset({"Done", "Completed", "Complete", "Review"})
IN_PROGRESS_STATUSES = frozenset({"In Progress", "In progress"})
TODO_STATUSES = frozenset({"To Do", "To do", "No Status", "Not started"})


class StatusBucket(str, Enum):
    """Normalized status classes.

    Matching against the raw status labels is case-sensitive; anything
    outside the known labels is UNKNOWN.
    """

    TODO = "todo"
    IN_PROGRESS = "in-progress"
    COMPLETED = "completed"
    UNKNOWN = "unknown"


def classify_status(status: str) -> StatusBucket:
    """Map a raw status label to its bucket."""
    if status in COMPLETED_STATUSES:
        return StatusBucket.COMPLETED
    if status in IN_PROGRESS_STATUSES:
        return StatusBucket.IN_PROGRESS
    if status in TODO_STATUSES:
        return StatusBucket.TODO
    return StatusBucket.UNKNOWN


class TaskRecord(BaseModel):
    """One external work item mapped from a raw tracker record.

    Example:
        >>> record = TaskRecord(
        ...     id="2f797f89-0001",
        ...     id_number=42,
        ...     name="Rotate API keys",
        ...     status="In Progress",
        ... )
        >>> record.bucket
        <StatusBucket.IN_PROGRESS: 'in-progress'>
    """

    id: str = Field(..., description="Tracker identifier")
    id_number: int = Field(default=0, alias="idNumber", description="Sequence id")
    name: str = Field(default="Untitled")
    status: str = Field(default="No Status", description="Raw status label")
    priority: str = Field(default="Medium")
    role: str = Field(default="Unassigned")
    due_date: str | None = Field(default=None, alias="dueDate")
    past_due: bool = Field(default=False, alias="pastDue")
    task_type: str = Field(default="Task", alias="taskType")
    summary: str = Field(default="")

    model_config = ConfigDict(populate_by_name=True)

    @property
    def bucket(self) -> StatusBucket:
        """Normalized status class."""
        return classify_status(self.status)


class TaskStats(BaseModel):
    """Counts derived from one full batch of records."""

    total: int = Field(default=0, ge=0, description="Number of fetched records")
    completed: int = Field(default=0, ge=0)
    in_progress: int = Field(default=0, ge=0, alias="inProgress")
    todo: int = Field(default=0, ge=0)
    max_id: int = Field(default=0, alias="maxIdNumber", description="Largest sequence id")

    model_config = ConfigDict(populate_by_name=True)


class StatsResult(BaseModel):
    """Stats payload for the dashboard widget.

    ``total`` is the largest sequence id, not the number of fetched records
    (that is ``active_tasks``). ``cached`` marks a payload served from the
    cache; ``error`` is set on fallback results.

    Example:
        >>> StatsResult(
        ...     total=1020, completed=562, in_progress=4, remaining=458,
        ...     max_id=1020, active_tasks=611,
        ...     last_updated="2025-03-03T10:00:00+00:00",
        ... ).model_dump(by_alias=True, exclude_none=True)["inProgress"]
        4
    """

    total: int
    completed: int
    in_progress: int = Field(..., alias="inProgress")
    remaining: int
    max_id: int = Field(..., alias="maxId")
    active_tasks: int | None = Field(default=None, alias="activeTasks")
    last_updated: str = Field(..., alias="lastUpdated")
    cached: bool = False
    error: str | None = None

    model_config = ConfigDict(populate_by_name=True)


class TaskBoard(BaseModel):
    """Task list and counts for the dashboard tasks panel."""

    tasks: list[TaskRecord] = Field(default_factory=list)
    stats: TaskStats = Field(default_factory=TaskStats)
    source: str = "Notion"
    timestamp: str
    cached: bool = False
    error: str | None = None


class QueryPage(BaseModel):
    """One page of raw records from a cursor-paginated query."""

    results: list[dict[str, Any]] = Field(default_factory=list)
    has_more: bool = False
    next_cursor: str | None = None


__all__ = [
    "COMPLETED_STATUSES",
    "IN_PROGRESS_STATUSES",
    "TODO_STATUSES",
    "QueryPage",
    "StatsResult",
    "StatusBucket",
    "TaskBoard",
    "TaskRecord",
    "TaskStats",
    "classify_status",
]
