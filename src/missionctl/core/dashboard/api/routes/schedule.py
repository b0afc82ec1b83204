"""
Scheduled-jobs routes for the dashboard.

- GET /mc/crons - Current user's crontab with next-run estimates
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from fastapi.concurrency import run_in_threadpool
from pydantic import BaseModel

from missionctl.core.schedule.crontab import CronJob, list_cron_jobs

router = APIRouter()


class CronListResponse(BaseModel):
    crons: list[CronJob]
    count: int
    timestamp: str


@router.get("/crons", response_model=CronListResponse)
async def get_crons(request: Request) -> CronListResponse:
    """
    List crontab entries.

    Next-run labels are computed on every request against local time.
    An absent crontab yields an empty list.

    Example response:
        {
          "crons": [
            {"id": "CRON-001", "schedule": "*/15 * * * *", "command": "ops-monitor",
             "status": "active", "nextRun": "10:15am"}
          ],
          "count": 1,
          "timestamp": "2025-03-03T10:07:00+00:00"
        }
    """
    max_entries = request.app.state.config.crons.max_entries
    # crontab -l is a blocking subprocess call
    crons = await run_in_threadpool(list_cron_jobs, max_entries=max_entries)
    return CronListResponse(
        crons=crons,
        count=len(crons),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
