"""
missionctl - Local Mission Control dashboard server.

Aggregates service health, cron jobs, the agent roster and task-tracker
statistics behind a small JSON API.
"""

__version__ = "0.3.0"

from missionctl.core.schedule.nextrun import estimate_next_run
from missionctl.core.tracker.aggregator import StatsAggregator

__all__ = ["StatsAggregator", "estimate_next_run", "__version__"]
