"""
Task-tracker routes for the dashboard.

- GET /mc/dwe-stats - Widget stats (cached for the configured TTL)
- GET /mc/notion-tasks - Task list and board counts

Both routes always answer 200: tracker failures come back as stale or
baseline data with an ``error`` field rather than as HTTP errors.
"""

from typing import Any

from fastapi import APIRouter, Request

from missionctl.core.tracker.aggregator import StatsAggregator

router = APIRouter()


def _aggregator(request: Request) -> StatsAggregator:
    return request.app.state.aggregator


@router.get("/dwe-stats")
async def get_stats(request: Request) -> dict[str, Any]:
    """
    Get aggregate tracker statistics.

    Example response:
        {
          "total": 1020,
          "completed": 562,
          "inProgress": 4,
          "remaining": 458,
          "maxId": 1020,
          "activeTasks": 611,
          "lastUpdated": "2025-03-03T10:00:00+00:00",
          "cached": true
        }
    """
    result = await _aggregator(request).get_stats()
    return result.model_dump(by_alias=True, exclude_none=True)


@router.get("/notion-tasks")
async def get_tasks(request: Request) -> dict[str, Any]:
    """Get the first tasks of the tracker plus board counts."""
    board = await _aggregator(request).get_board()
    # Keep null due dates on tasks; only drop an absent error
    return board.model_dump(by_alias=True, exclude={"error"} if board.error is None else None)
