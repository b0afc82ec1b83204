"""
Configuration loading for missionctl.

Configuration is assembled from named layers, lowest precedence first:

    defaults < user (~/.config/missionctl/config.json)
             < project (./.missionctl.json) < env (NOTION_API_KEY, MISSIONCTL_*)

Each layer is a partial dict shaped like MissionControlConfig. Sections
(``server``, ``tracker``, ``crons``) merge key by key; lists such as
``services`` and ``agents`` are replaced wholesale by the higher layer.
"""

import json
import logging
import os
from pathlib import Path
from typing import Any, NamedTuple

from .models import MissionControlConfig

logger = logging.getLogger(__name__)

USER_CONFIG_NAME = "config.json"
PROJECT_CONFIG_NAME = ".missionctl.json"

# Loaded configs, keyed by resolved project directory
_loaded: dict[Path, MissionControlConfig] = {}


class ConfigLayer(NamedTuple):
    """One source of configuration values."""

    name: str
    values: dict[str, Any]


def get_xdg_config_home() -> Path:
    """Return $XDG_CONFIG_HOME, or ~/.config when unset."""
    if xdg_home := os.environ.get("XDG_CONFIG_HOME"):
        return Path(xdg_home)
    return Path.home() / ".config"


def get_user_config_path() -> Path:
    """Path of the per-user config file."""
    return get_xdg_config_home() / "missionctl" / USER_CONFIG_NAME


def get_project_config_path(cwd: Path | None = None) -> Path:
    """Path of the project config file in ``cwd`` (defaults to the working directory)."""
    return (cwd or Path.cwd()) / PROJECT_CONFIG_NAME


def deep_merge(base: dict[str, Any], override: dict[str, Any]) -> dict[str, Any]:
    """
    Merge ``override`` onto ``base`` without mutating either.

    Example:
        >>> deep_merge(
        ...     {"server": {"host": "127.0.0.1", "port": 8899}},
        ...     {"server": {"port": 9000}, "crons": {"max_entries": 5}},
        ... )
        {'server': {'host': '127.0.0.1', 'port': 9000}, 'crons': {'max_entries': 5}}
    """
    merged = dict(base)
    for key, value in override.items():
        current = merged.get(key)
        if isinstance(current, dict) and isinstance(value, dict):
            value = deep_merge(current, value)
        merged[key] = value
    return merged


def load_json_file(path: Path) -> dict[str, Any] | None:
    """
    Read a config file.

    Returns None when the file is absent. A file that cannot be read, is not
    JSON, or whose top level is not an object is logged and ignored.
    """
    try:
        text = path.read_text()
    except FileNotFoundError:
        return None
    except OSError as e:
        logger.warning("Cannot read config %s: %s", path, e)
        return None

    try:
        data = json.loads(text)
    except json.JSONDecodeError as e:
        logger.warning("Ignoring config %s: invalid JSON (%s)", path, e)
        return None

    if not isinstance(data, dict):
        logger.warning(
            "Ignoring config %s: top level is %s, not an object", path, type(data).__name__
        )
        return None
    return data


def _set_nested(config_dict: dict[str, Any], section: str, key: str, value: Any) -> None:
    if not isinstance(config_dict.get(section), dict):
        config_dict[section] = {}
    config_dict[section][key] = value


def _positive_number(name: str, raw: str) -> float | None:
    try:
        value = float(raw)
    except ValueError:
        logger.warning("Invalid %s value '%s', ignoring", name, raw)
        return None
    if value <= 0:
        logger.warning("%s must be > 0, got %s, ignoring", name, raw)
        return None
    return value


def apply_env_overrides(config_dict: dict[str, Any]) -> dict[str, Any]:
    """
    Apply environment variable overrides to configuration.

    Supported env vars:
        NOTION_API_KEY - overrides tracker.api_key
        MISSIONCTL_DATA_SOURCE_ID - overrides tracker.data_source_id
        MISSIONCTL_CACHE_TTL - overrides tracker.cache_ttl_seconds (>= 1)
        MISSIONCTL_REQUEST_TIMEOUT - overrides tracker.request_timeout
        MISSIONCTL_HOST - overrides server.host
        MISSIONCTL_PORT - overrides server.port

    Args:
        config_dict: Configuration dictionary to override

    Returns:
        Configuration dictionary with env var overrides applied
    """
    result = config_dict.copy()

    if api_key := os.environ.get("NOTION_API_KEY"):
        _set_nested(result, "tracker", "api_key", api_key)

    if data_source := os.environ.get("MISSIONCTL_DATA_SOURCE_ID"):
        _set_nested(result, "tracker", "data_source_id", data_source)

    if ttl_str := os.environ.get("MISSIONCTL_CACHE_TTL"):
        ttl = _positive_number("MISSIONCTL_CACHE_TTL", ttl_str)
        if ttl is not None:
            if ttl < 1:
                logger.warning("MISSIONCTL_CACHE_TTL must be >= 1, got %s, ignoring", ttl_str)
            else:
                _set_nested(result, "tracker", "cache_ttl_seconds", ttl)

    if timeout_str := os.environ.get("MISSIONCTL_REQUEST_TIMEOUT"):
        timeout = _positive_number("MISSIONCTL_REQUEST_TIMEOUT", timeout_str)
        if timeout is not None:
            _set_nested(result, "tracker", "request_timeout", timeout)

    if host := os.environ.get("MISSIONCTL_HOST"):
        _set_nested(result, "server", "host", host)

    if port_str := os.environ.get("MISSIONCTL_PORT"):
        try:
            port = int(port_str)
        except ValueError:
            logger.warning("Invalid MISSIONCTL_PORT value '%s', ignoring", port_str)
        else:
            if 1 <= port <= 65535:
                _set_nested(result, "server", "port", port)
            else:
                logger.warning("MISSIONCTL_PORT out of range: %s, ignoring", port_str)

    return result


def get_default_config() -> dict[str, Any]:
    """Built-in defaults; anything not listed falls back to the model defaults."""
    return {
        "server": {"host": "127.0.0.1", "port": 8899},
        "tracker": {"cache_ttl_seconds": 300.0, "max_records": 3000},
    }


def collect_layers(project_dir: Path | None = None) -> list[ConfigLayer]:
    """
    Gather the configuration layers that are present, lowest precedence first.

    Missing or unreadable files contribute no layer; the env layer is
    included only when at least one override is set.
    """
    layers = [ConfigLayer("defaults", get_default_config())]

    if user_values := load_json_file(get_user_config_path()):
        layers.append(ConfigLayer("user", user_values))

    if project_values := load_json_file(get_project_config_path(project_dir)):
        layers.append(ConfigLayer("project", project_values))

    if env_values := apply_env_overrides({}):
        layers.append(ConfigLayer("env", env_values))

    return layers


def load_config(project_dir: Path | None = None, use_cache: bool = True) -> MissionControlConfig:
    """
    Load and validate the merged configuration.

    Results are cached per project directory until clear_cache() is called.

    Args:
        project_dir: Directory holding .missionctl.json (defaults to cwd)
        use_cache: Return a previously loaded config for the same directory

    Returns:
        Validated MissionControlConfig

    Raises:
        ValidationError: If the merged values fail validation
    """
    key = (project_dir or Path.cwd()).resolve()
    if use_cache and key in _loaded:
        return _loaded[key]

    merged: dict[str, Any] = {}
    for layer in collect_layers(project_dir):
        logger.debug("Config layer %s sets %s", layer.name, sorted(layer.values))
        merged = deep_merge(merged, layer.values)

    config = MissionControlConfig(**merged)
    _loaded[key] = config
    return config


def clear_cache() -> None:
    """Forget every loaded config so the next load_config() rereads its sources."""
    _loaded.clear()
