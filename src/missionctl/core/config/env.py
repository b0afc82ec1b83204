"""
.env file loading for missionctl.

The Notion token usually sits in a .env file beside the dashboard rather
than in the shell profile. Files are applied in this order:

    user     ~/.config/missionctl/.env
    project  ./.env, then ./.env.local

A variable already exported by the shell is never replaced. Among the files,
a later one replaces what an earlier one set, so .env.local wins over .env
and both win over the user file.

load_layered_env() reports where each variable it set came from, which
``missionctl --debug`` uses to show the source of NOTION_API_KEY.
"""

import logging
import os
from collections.abc import Iterable
from pathlib import Path

from dotenv import dotenv_values

from .loader import get_xdg_config_home

logger = logging.getLogger(__name__)

SHELL_SOURCE = "shell environment"


def default_user_env_paths() -> list[Path]:
    return [get_xdg_config_home() / "missionctl" / ".env"]


def default_project_env_paths(project_dir: Path) -> list[Path]:
    return [project_dir / ".env", project_dir / ".env.local"]


def read_env_file(path: Path) -> dict[str, str]:
    """Variables defined in one .env file; bare keys without a value are skipped."""
    if not path.is_file():
        return {}
    return {key: value for key, value in dotenv_values(path).items() if value is not None}


def load_layered_env(
    *,
    project_dir: Path | None = None,
    user_env_paths: Iterable[Path] | None = None,
    project_env_paths: Iterable[Path] | None = None,
) -> dict[str, Path]:
    """
    Apply user and project .env files to ``os.environ``.

    Args:
        project_dir: Base directory for the default project files (defaults to cwd)
        user_env_paths: Explicit user .env files
        project_env_paths: Explicit project .env files

    Returns:
        The variables this call set, each mapped to the file it was taken from
    """
    if user_env_paths is None:
        user_env_paths = default_user_env_paths()
    if project_env_paths is None:
        project_env_paths = default_project_env_paths(project_dir or Path.cwd())

    origins: dict[str, Path] = {}
    for path in [*map(Path, user_env_paths), *map(Path, project_env_paths)]:
        for key, value in read_env_file(path).items():
            # Only keys this call set may be replaced; shell exports stay
            if key in os.environ and key not in origins:
                continue
            os.environ[key] = value
            origins[key] = path

    for key, path in origins.items():
        logger.debug("Loaded %s from %s", key, path)
    return origins


def describe_env_source(name: str, origins: dict[str, Path]) -> str:
    """
    Say where a variable's current value came from.

    Example:
        >>> describe_env_source("NOTION_API_KEY", {"NOTION_API_KEY": Path(".env")})
        '.env'
    """
    if name in origins:
        return str(origins[name])
    if name in os.environ:
        return SHELL_SOURCE
    return "not set"


__all__ = [
    "default_project_env_paths",
    "default_user_env_paths",
    "describe_env_source",
    "load_layered_env",
    "read_env_file",
]
