"""
Statistics derived from a batch of TaskRecords.

Counts are always recomputed from the whole batch. Each record lands in at
most one status bucket; records with an unrecognized status still count
towards ``total`` and ``max_id``.
"""

from datetime import datetime

from missionctl.core.config.models import BaselineStats
from missionctl.core.tracker.models import (
    StatsResult,
    StatusBucket,
    TaskBoard,
    TaskRecord,
    TaskStats,
)


def compute_stats(records: list[TaskRecord]) -> TaskStats:
    """
    Compute bucket counts and the largest sequence id for a batch.

    Example:
        >>> stats = compute_stats([
        ...     TaskRecord(id="a", id_number=3, status="Done"),
        ...     TaskRecord(id="b", id_number=7, status="Blocked"),
        ... ])
        >>> (stats.total, stats.completed, stats.max_id)
        (2, 1, 7)
    """
    counts = {bucket: 0 for bucket in StatusBucket}
    max_id = 0
    for record in records:
        counts[record.bucket] += 1
        max_id = max(max_id, record.id_number)

    return TaskStats(
        total=len(records),
        completed=counts[StatusBucket.COMPLETED],
        in_progress=counts[StatusBucket.IN_PROGRESS],
        todo=counts[StatusBucket.TODO],
        max_id=max_id,
    )


def build_stats_result(stats: TaskStats, now: datetime) -> StatsResult:
    """
    Build the widget payload from batch stats.

    ``total`` reports the largest sequence id rather than the fetched count:
    ids are assigned sequentially, so they track the full backlog even when
    the fetch is capped. The fetched count is kept as ``active_tasks``.
    """
    return StatsResult(
        total=stats.max_id,
        completed=stats.completed,
        in_progress=stats.in_progress,
        remaining=stats.max_id - stats.completed,
        max_id=stats.max_id,
        active_tasks=stats.total,
        last_updated=now.isoformat(),
    )


def baseline_result(baseline: BaselineStats, now: datetime, error: str) -> StatsResult:
    """Placeholder payload for when no real data has ever been fetched."""
    return StatsResult(
        total=baseline.total,
        completed=baseline.completed,
        in_progress=baseline.in_progress,
        remaining=baseline.remaining,
        max_id=baseline.max_id,
        last_updated=now.isoformat(),
        error=error,
    )


def build_board(
    records: list[TaskRecord], stats: TaskStats, now: datetime, limit: int = 100
) -> TaskBoard:
    """Task panel payload: the first ``limit`` records plus batch counts."""
    return TaskBoard(tasks=records[:limit], stats=stats, timestamp=now.isoformat())


def empty_board(now: datetime, error: str) -> TaskBoard:
    return TaskBoard(timestamp=now.isoformat(), error=error)


__all__ = [
    "baseline_result",
    "build_board",
    "build_stats_result",
    "compute_stats",
    "empty_board",
]
