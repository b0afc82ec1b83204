"""
Configuration data models for missionctl.

These models define the structure of .missionctl.json and
~/.config/missionctl/config.json files, with validation and type safety
via Pydantic.
"""

from pydantic import BaseModel, ConfigDict, Field, model_validator


class ServerConfig(BaseModel):
    """
    Where the dashboard API listens.

    The server is meant for the local machine only.
    """
    host: str = Field(
        default="127.0.0.1",
        description="Interface to bind"
    )
    port: int = Field(
        default=8899,
        ge=1,
        le=65535,
        description="Port to listen on"
    )


class BaselineStats(BaseModel):
    """
    Placeholder numbers served when the tracker has never been reachable.

    The dashboard always renders something; these are the last known
    good figures to show before the first successful fetch.
    """
    total: int = Field(default=1020, ge=0)
    completed: int = Field(default=562, ge=0)
    in_progress: int = Field(default=4, ge=0)
    remaining: int = Field(default=458)
    max_id: int = Field(default=1020, ge=0)


class TrackerConfig(BaseModel):
    """
    External task tracker (Notion data source) settings.

    The API key is normally supplied through NOTION_API_KEY rather than
    a config file.
    """
    api_key: str | None = Field(
        default=None,
        description="Notion integration token"
    )
    data_source_id: str = Field(
        default="2f797f89-9129-80f7-99d0-000b3bf2f347",
        description="Notion data source queried for tasks"
    )
    api_base_url: str = Field(
        default="https://api.notion.com",
        description="Notion API base URL"
    )
    notion_version: str = Field(
        default="2025-09-03",
        description="Value of the Notion-Version header"
    )
    page_size: int = Field(
        default=100,
        ge=1,
        le=100,
        description="Records requested per page"
    )
    max_records: int = Field(
        default=3000,
        ge=1,
        description="Stop paginating once this many records are collected"
    )
    cache_ttl_seconds: float = Field(
        default=300.0,
        gt=0,
        description="How long a computed result is served without refetching"
    )
    request_timeout: float = Field(
        default=10.0,
        gt=0,
        description="Timeout for each page request, in seconds"
    )
    board_limit: int = Field(
        default=100,
        ge=0,
        description="Maximum tasks returned to the tasks panel"
    )
    baseline: BaselineStats = Field(default_factory=BaselineStats)


class ServiceCheckConfig(BaseModel):
    """
    A service shown on the health panel.

    Local services are checked by TCP port; external ones by HTTP URL.
    """
    name: str
    port: int | None = Field(default=None, ge=1, le=65535)
    url: str | None = None

    @model_validator(mode="after")
    def _require_target(self) -> "ServiceCheckConfig":
        if self.port is None and self.url is None:
            raise ValueError(f"Service {self.name!r} needs a port or a url")
        return self


class AgentConfig(BaseModel):
    """An entry in the AI-agent roster."""
    id: str
    name: str
    role: str
    status: str = "online"
    model: str | None = None
    tasks: int | None = Field(default=None, ge=0)


class CronConfig(BaseModel):
    """Scheduled-jobs panel settings."""
    max_entries: int = Field(
        default=20,
        ge=1,
        description="Maximum crontab lines listed"
    )


def _default_services() -> list[ServiceCheckConfig]:
    return [
        ServiceCheckConfig(name="OpenClaw Gateway", port=3000),
        ServiceCheckConfig(name="n8n", url="https://n8n.io"),
        ServiceCheckConfig(name="MCporter Client", port=8080),
        ServiceCheckConfig(name="Notion API", url="https://api.notion.com/v1"),
        ServiceCheckConfig(name="Pinecone", url="https://api.pinecone.io"),
        ServiceCheckConfig(name="Ollama", port=11434),
        ServiceCheckConfig(name="OpenRouter", url="https://openrouter.ai/api/v1"),
    ]


def _default_agents() -> list[AgentConfig]:
    return [
        AgentConfig(id="coo", name="COO", role="Task routing & coordination", tasks=12),
        AgentConfig(id="cto", name="CTO", role="Technical & infrastructure", tasks=8),
        AgentConfig(
            id="chief", name="Chief", role="Systems & architecture", status="idle", tasks=3
        ),
        AgentConfig(id="security", name="Security", role="Protection & compliance", tasks=5),
    ]


class MissionControlConfig(BaseModel):
    """
    Top-level missionctl configuration.

    Example:
        >>> config = MissionControlConfig()
        >>> config.server.port
        8899
        >>> config.tracker.cache_ttl_seconds
        300.0
    """
    server: ServerConfig = Field(default_factory=ServerConfig)
    tracker: TrackerConfig = Field(default_factory=TrackerConfig)
    services: list[ServiceCheckConfig] = Field(default_factory=_default_services)
    agents: list[AgentConfig] = Field(default_factory=_default_agents)
    crons: CronConfig = Field(default_factory=CronConfig)

    model_config = ConfigDict(extra="ignore")
