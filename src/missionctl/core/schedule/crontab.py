"""
Crontab listing for the dashboard's scheduled-jobs panel.

Reads the current user's crontab via ``crontab -l`` and turns each entry into
a CronJob with a short command label and an estimated next run.
"""

import logging
import subprocess
from datetime import datetime

from pydantic import BaseModel, ConfigDict, Field

from missionctl.core.schedule.nextrun import estimate_next_run

logger = logging.getLogger(__name__)

DEFAULT_MAX_ENTRIES = 20


class CronJob(BaseModel):
    """A single crontab entry as shown on the dashboard."""

    id: str = Field(..., description="Display id, e.g. CRON-001")
    schedule: str = Field(..., description="The five schedule fields")
    command: str = Field(..., description="Short label derived from the command")
    status: str = Field(default="active")
    next_run: str = Field(..., alias="nextRun", description="Estimated next run label")

    model_config = ConfigDict(populate_by_name=True)


def command_label(command_parts: list[str]) -> str:
    """
    Derive a short label for a cron command.

    The first token that looks like a script or path wins (basename, with any
    ``.sh`` removed). Otherwise the first token that is not a redirect or an
    option and is longer than two characters is used. Falls back to
    ``"System"``.

    Args:
        command_parts: Whitespace-split command tokens

    Returns:
        Label for display
    """
    for part in command_parts:
        if ".sh" in part or "/" in part:
            return part.split("/")[-1].replace(".sh", "", 1)

    for part in command_parts:
        if not part.startswith(">") and not part.startswith("-") and len(part) > 2:
            return part.split("/")[-1]

    return "System"


def parse_crontab(
    text: str,
    now: datetime | None = None,
    max_entries: int = DEFAULT_MAX_ENTRIES,
) -> list[CronJob]:
    """
    Parse crontab text into CronJob entries.

    Comment and blank lines are skipped, then at most ``max_entries`` lines
    are considered. Lines with fewer than six tokens (schedule plus command)
    are ignored but still consume an id number.

    Args:
        text: Output of ``crontab -l``
        now: Reference instant for next-run estimation
        max_entries: Maximum number of lines to consider

    Returns:
        Parsed jobs in crontab order
    """
    lines = [
        line
        for line in text.splitlines()
        if line.strip() and not line.startswith("#")
    ][:max_entries]

    jobs: list[CronJob] = []
    for idx, line in enumerate(lines):
        parts = line.split()
        if len(parts) < 6:
            logger.debug("Skipping crontab line without a command: %r", line)
            continue

        schedule = " ".join(parts[:5])
        jobs.append(
            CronJob(
                id=f"CRON-{idx + 1:03d}",
                schedule=schedule,
                command=command_label(parts[5:]),
                next_run=estimate_next_run(schedule, now),
            )
        )
    return jobs


def read_crontab(timeout: float = 5.0) -> str:
    """
    Return the current user's crontab, or an empty string if there is none.

    A missing ``crontab`` binary, a non-zero exit (no crontab installed) and
    a timeout all read as an empty crontab.
    """
    try:
        result = subprocess.run(
            ["crontab", "-l"],
            capture_output=True,
            text=True,
            timeout=timeout,
            check=False,
        )
    except (OSError, subprocess.TimeoutExpired) as e:
        logger.debug("crontab -l unavailable: %s", e)
        return ""

    if result.returncode != 0:
        return ""
    return result.stdout


def list_cron_jobs(
    now: datetime | None = None,
    max_entries: int = DEFAULT_MAX_ENTRIES,
) -> list[CronJob]:
    """List the current user's cron jobs with estimated next runs."""
    return parse_crontab(read_crontab(), now=now, max_entries=max_entries)


__all__ = [
    "CronJob",
    "command_label",
    "list_cron_jobs",
    "parse_crontab",
    "read_crontab",
]
