"""Agent roster for the dashboard agents panel."""

from missionctl.core.config.models import AgentConfig
from missionctl.core.health.models import AgentStatus


def get_agent_roster(agents: list[AgentConfig]) -> list[AgentStatus]:
    """Return the configured agents in display order."""
    return [AgentStatus(**agent.model_dump()) for agent in agents]
