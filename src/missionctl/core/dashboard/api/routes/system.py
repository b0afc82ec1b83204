"""
System routes: liveness and server status.

- GET /health - Health check
- GET /mc/status - Uptime, server time and memory for the header bar
"""

import time
from datetime import datetime, timezone

import psutil
from fastapi import APIRouter, Request
from pydantic import BaseModel, ConfigDict, Field

from missionctl import __version__

router = APIRouter()


class ServerStatus(BaseModel):
    online: bool = True
    uptime: int = Field(..., ge=0, description="Seconds since the app was created")
    server_time: str = Field(..., alias="serverTime")
    memory: float = Field(..., ge=0, description="Resident memory of the server process, in MB")
    version: str

    model_config = ConfigDict(populate_by_name=True)


@router.get("/health")
async def health() -> dict[str, str]:
    """Health check endpoint."""
    return {"status": "healthy"}


@router.get("/mc/status", response_model=ServerStatus)
async def get_status(request: Request) -> ServerStatus:
    """Report uptime, server time, process memory and version."""
    uptime = int(time.monotonic() - request.app.state.started_at)
    rss = psutil.Process().memory_info().rss
    return ServerStatus(
        uptime=uptime,
        server_time=datetime.now(timezone.utc).isoformat(),
        memory=round(rss / 1024 / 1024, 1),
        version=__version__,
    )
