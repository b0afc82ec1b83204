"""
Models for the service health and agent roster panels.
"""

from enum import Enum

from pydantic import BaseModel, Field


class ServiceState(str, Enum):
    ONLINE = "online"
    OFFLINE = "offline"


class ServiceStatus(BaseModel):
    """Result of one service check."""

    name: str
    port: int | None = None
    status: ServiceState
    info: str = Field(..., description="Short human-readable detail")


class AgentStatus(BaseModel):
    """One entry of the AI-agent roster as served to the dashboard."""

    id: str
    name: str
    role: str
    status: str
    model: str | None = None
    tasks: int | None = None
