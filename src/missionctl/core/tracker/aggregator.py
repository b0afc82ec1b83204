"""
Cached tracker statistics for the dashboard.

StatsAggregator owns a single cache entry: the records, stats and widget
payload from the most recent successful fetch pass, stamped with the
instant the pass started. Callers never see an exception:

- fresh entry (age < TTL): served as-is, marked ``cached``
- stale or missing entry: one fetch pass runs and replaces the entry
- fetch failure: the previous entry (any age) is served with ``error`` set,
  or the configured baseline numbers if there has never been a success

Only one fetch pass runs at a time. Callers arriving while a pass is in
flight await that pass instead of starting their own, and a started pass
finishes even if the caller that triggered it is cancelled.

Example:
    >>> source = NotionTaskSource.from_config(config.tracker)
    >>> aggregator = StatsAggregator.from_config(config.tracker, source)
    >>> result = await aggregator.get_stats()
    >>> result.model_dump(by_alias=True, exclude_none=True)
    {'total': 1020, 'completed': 562, 'inProgress': 4, ...}
"""

import asyncio
import logging
from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime, timedelta, timezone

from missionctl.core.config.models import BaselineStats, TrackerConfig
from missionctl.core.tracker.client import TaskSource
from missionctl.core.tracker.exceptions import TrackerError
from missionctl.core.tracker.models import StatsResult, TaskBoard, TaskRecord, TaskStats
from missionctl.core.tracker.pagination import (
    DEFAULT_MAX_RECORDS,
    DEFAULT_PAGE_SIZE,
    collect_tasks,
)
from missionctl.core.tracker.stats import (
    baseline_result,
    build_board,
    build_stats_result,
    compute_stats,
    empty_board,
)

logger = logging.getLogger(__name__)

DEFAULT_TTL = timedelta(minutes=5)


def utc_now() -> datetime:
    return datetime.now(timezone.utc)


def as_utc(moment: datetime) -> datetime:
    """Read a naive datetime as UTC so it compares with cached timestamps."""
    if moment.tzinfo is None:
        return moment.replace(tzinfo=timezone.utc)
    return moment


@dataclass(frozen=True)
class CacheEntry:
    """Result of one successful fetch pass."""

    computed_at: datetime
    records: tuple[TaskRecord, ...]
    stats: TaskStats
    result: StatsResult


@dataclass(frozen=True)
class _Snapshot:
    entry: CacheEntry | None
    cached: bool
    error: str | None = None


class StatsAggregator:
    """
    Fetch-and-aggregate with a single-entry TTL cache.

    Attributes:
        source: Paginated query endpoint
        ttl: Maximum age of an entry that is served without refetching
        page_size: Records requested per page
        max_records: Cap on records collected per pass
        board_limit: Maximum tasks returned by get_board
        baseline: Numbers served before any successful fetch
    """

    def __init__(
        self,
        source: TaskSource,
        *,
        ttl: timedelta = DEFAULT_TTL,
        page_size: int = DEFAULT_PAGE_SIZE,
        max_records: int = DEFAULT_MAX_RECORDS,
        board_limit: int = 100,
        baseline: BaselineStats | None = None,
        clock: Callable[[], datetime] = utc_now,
    ) -> None:
        self.source = source
        self.ttl = ttl
        self.page_size = page_size
        self.max_records = max_records
        self.board_limit = board_limit
        self.baseline = baseline or BaselineStats()
        self._clock = clock
        self._entry: CacheEntry | None = None
        self._inflight: asyncio.Task[CacheEntry] | None = None

    @classmethod
    def from_config(
        cls,
        config: TrackerConfig,
        source: TaskSource,
        clock: Callable[[], datetime] = utc_now,
    ) -> "StatsAggregator":
        """Build an aggregator from tracker configuration."""
        return cls(
            source,
            ttl=timedelta(seconds=config.cache_ttl_seconds),
            page_size=config.page_size,
            max_records=config.max_records,
            board_limit=config.board_limit,
            baseline=config.baseline,
            clock=clock,
        )

    @property
    def cache_entry(self) -> CacheEntry | None:
        """The current cache entry, if any pass has succeeded."""
        return self._entry

    def is_fresh(self, now: datetime) -> bool:
        """True if the cache entry can be served at ``now`` without refetching."""
        return self._entry is not None and as_utc(now) - self._entry.computed_at < self.ttl

    def invalidate(self) -> None:
        """Drop the cache entry so the next call fetches."""
        self._entry = None

    async def get_stats(self, now: datetime | None = None) -> StatsResult:
        """
        Get the widget stats payload.

        Args:
            now: Reference instant (defaults to the aggregator clock; naive means UTC)

        Returns:
            Fresh, cached, stale-with-error or baseline-with-error payload
        """
        now = as_utc(now or self._clock())
        snapshot = await self._snapshot(now)

        if snapshot.entry is None:
            return baseline_result(self.baseline, now, snapshot.error or "No tracker data")

        result = snapshot.entry.result
        if snapshot.cached or snapshot.error:
            result = result.model_copy(update={"cached": snapshot.cached, "error": snapshot.error})
        return result

    async def get_board(self, now: datetime | None = None, limit: int | None = None) -> TaskBoard:
        """
        Get the tasks panel payload from the same cache entry as get_stats.

        Args:
            now: Reference instant (defaults to the aggregator clock; naive means UTC)
            limit: Maximum tasks to include (defaults to ``board_limit``)

        Returns:
            TaskBoard; empty with ``error`` set if no data was ever fetched
        """
        now = as_utc(now or self._clock())
        snapshot = await self._snapshot(now)

        if snapshot.entry is None:
            return empty_board(now, snapshot.error or "No tracker data")

        entry = snapshot.entry
        board = build_board(
            list(entry.records),
            entry.stats,
            entry.computed_at,
            limit=self.board_limit if limit is None else limit,
        )
        board.cached = snapshot.cached
        board.error = snapshot.error
        return board

    async def _snapshot(self, now: datetime) -> _Snapshot:
        if self._entry is not None and self.is_fresh(now):
            return _Snapshot(self._entry, cached=True)

        try:
            entry = await self._refresh(now)
        except TrackerError as e:
            logger.warning("Tracker fetch failed (%s): %s", self.source.name, e)
            return self._fallback(str(e))
        except Exception as e:
            logger.exception("Unexpected error during tracker fetch")
            return self._fallback(str(e) or type(e).__name__)

        return _Snapshot(entry, cached=False)

    def _fallback(self, error: str) -> _Snapshot:
        if self._entry is not None:
            logger.info("Serving stale tracker data from %s", self._entry.computed_at.isoformat())
            return _Snapshot(self._entry, cached=True, error=error)
        return _Snapshot(None, cached=False, error=error)

    async def _refresh(self, now: datetime) -> CacheEntry:
        if self._inflight is None:
            task = asyncio.ensure_future(self._run_pass(now))
            task.add_done_callback(self._pass_done)
            self._inflight = task
        else:
            logger.debug("Joining in-flight tracker fetch")
        return await asyncio.shield(self._inflight)

    def _pass_done(self, task: "asyncio.Task[CacheEntry]") -> None:
        if self._inflight is task:
            self._inflight = None
        # Mark the exception retrieved; awaiting callers get it through shield
        if not task.cancelled():
            task.exception()

    async def _run_pass(self, now: datetime) -> CacheEntry:
        logger.info("Fetching fresh tracker stats from %s", self.source.name)
        records = await collect_tasks(
            self.source, page_size=self.page_size, max_records=self.max_records
        )
        logger.info("Fetched %d tracker records", len(records))

        stats = compute_stats(records)
        entry = CacheEntry(
            computed_at=now,
            records=tuple(records),
            stats=stats,
            result=build_stats_result(stats, now),
        )
        self._entry = entry
        return entry


__all__ = ["CacheEntry", "DEFAULT_TTL", "StatsAggregator", "as_utc", "utc_now"]
