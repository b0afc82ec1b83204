"""
Configuration models and loading.

This module provides Pydantic models for missionctl configuration
with multi-layer merging: defaults < user < project < env vars.
"""

from .env import describe_env_source, load_layered_env
from .loader import (
    ConfigLayer,
    clear_cache,
    collect_layers,
    get_project_config_path,
    get_user_config_path,
    get_xdg_config_home,
    load_config,
)
from .models import (
    AgentConfig,
    BaselineStats,
    CronConfig,
    MissionControlConfig,
    ServerConfig,
    ServiceCheckConfig,
    TrackerConfig,
)

__all__ = [
    # Models
    "AgentConfig",
    "BaselineStats",
    "CronConfig",
    "MissionControlConfig",
    "ServerConfig",
    "ServiceCheckConfig",
    "TrackerConfig",
    # Loader functions
    "ConfigLayer",
    "clear_cache",
    "collect_layers",
    "describe_env_source",
    "get_project_config_path",
    "get_user_config_path",
    "get_xdg_config_home",
    "load_config",
    "load_layered_env",
]
