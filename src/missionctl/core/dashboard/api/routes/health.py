"""
Operational status routes for the dashboard.

- GET /mc/services - Reachability of configured services
- GET /mc/agents - AI-agent roster
"""

from datetime import datetime, timezone

from fastapi import APIRouter, Request
from pydantic import BaseModel

from missionctl.core.health.checks import check_services
from missionctl.core.health.models import AgentStatus, ServiceStatus
from missionctl.core.health.roster import get_agent_roster

router = APIRouter()


class ServicesResponse(BaseModel):
    services: list[ServiceStatus]
    timestamp: str


class AgentsResponse(BaseModel):
    agents: list[AgentStatus]
    count: int
    timestamp: str


@router.get("/services", response_model=ServicesResponse)
async def get_services(request: Request) -> ServicesResponse:
    """Check every configured service concurrently."""
    results = await check_services(request.app.state.config.services)
    return ServicesResponse(services=results, timestamp=datetime.now(timezone.utc).isoformat())


@router.get("/agents", response_model=AgentsResponse)
async def get_agents(request: Request) -> AgentsResponse:
    """Return the configured agent roster."""
    agents = get_agent_roster(request.app.state.config.agents)
    return AgentsResponse(
        agents=agents,
        count=len(agents),
        timestamp=datetime.now(timezone.utc).isoformat(),
    )
