"""
Scheduled-job helpers: next-run estimation and crontab listing.
"""

from missionctl.core.schedule.crontab import CronJob, list_cron_jobs, parse_crontab
from missionctl.core.schedule.nextrun import UNKNOWN, estimate_next_run, format_next_run

__all__ = [
    "CronJob",
    "UNKNOWN",
    "estimate_next_run",
    "format_next_run",
    "list_cron_jobs",
    "parse_crontab",
]
