"""
Task-tracker integration.

Fetches every record from a cursor-paginated query endpoint (Notion data
sources in production), maps them to TaskRecords, derives summary stats and
serves them through a short-lived single-entry cache.

Layers:
- client.py - TaskSource protocol and the Notion implementation
- fields.py - defensive extraction of nested Notion properties
- pagination.py - sequential page draining with a record cap
- stats.py - bucket counts and payload builders
- aggregator.py - TTL cache, single-flight refresh and fallbacks
"""

from missionctl.core.tracker.aggregator import CacheEntry, StatsAggregator
from missionctl.core.tracker.client import NotionTaskSource, TaskSource
from missionctl.core.tracker.exceptions import (
    NetworkError,
    ParseError,
    TrackerConfigError,
    TrackerError,
)
from missionctl.core.tracker.models import (
    QueryPage,
    StatsResult,
    StatusBucket,
    TaskBoard,
    TaskRecord,
    TaskStats,
)
from missionctl.core.tracker.pagination import collect_tasks, iter_pages
from missionctl.core.tracker.stats import compute_stats

__all__ = [
    "CacheEntry",
    "NetworkError",
    "NotionTaskSource",
    "ParseError",
    "QueryPage",
    "StatsAggregator",
    "StatsResult",
    "StatusBucket",
    "TaskBoard",
    "TaskRecord",
    "TaskSource",
    "TaskStats",
    "TrackerConfigError",
    "TrackerError",
    "collect_tasks",
    "compute_stats",
    "iter_pages",
]
