"""
Operational status panels: service health checks and the agent roster.
"""

from missionctl.core.health.checks import check_services, is_port_open
from missionctl.core.health.models import AgentStatus, ServiceState, ServiceStatus
from missionctl.core.health.roster import get_agent_roster

__all__ = [
    "AgentStatus",
    "ServiceState",
    "ServiceStatus",
    "check_services",
    "get_agent_roster",
    "is_port_open",
]
