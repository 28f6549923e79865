"""
Runtime settings for releasekit.

Settings are layered, lowest priority first:
    1. Built-in defaults
    2. YAML configuration file (``releasekit.yaml`` or ``--config``)
    3. Environment variables (``RELEASEKIT_*`` and the ``releases_url`` action input)
    4. Explicit overrides (command-line flags)

Example releasekit.yaml:

    releases_url: https://releases.example.internal
    timeout: 60
    max_retries: 3
    cache_dir: /var/cache/releasekit
"""

import logging
import os
from dataclasses import dataclass, fields, replace
from pathlib import Path
from typing import Any, Dict, Mapping, Optional

import yaml

from releasekit.core.directory import get_temp_dir, get_tool_cache_dir
from releasekit.core.download import DEFAULT_USER_AGENT
from releasekit.core.exceptions import ConfigurationError
from releasekit.releases.metadata import DEFAULT_RELEASES_URL

logger = logging.getLogger(__name__)

DEFAULT_CONFIG_FILE = "releasekit.yaml"

# Environment variable -> setting name, later entries win.
ENV_VARIABLES = (
    ("RELEASEKIT_RELEASES_URL", "releases_url"),
    ("INPUT_RELEASES_URL", "releases_url"),
    ("RELEASEKIT_TIMEOUT", "timeout"),
    ("RELEASEKIT_MAX_RETRIES", "max_retries"),
    ("RELEASEKIT_CACHE_DIR", "cache_dir"),
)


@dataclass(frozen=True)
class Settings:
    """Resolved runtime settings."""

    releases_url: str = DEFAULT_RELEASES_URL
    """Base URL of the release server (catalog and artifacts)"""

    timeout: float = 30
    """Timeout in seconds for the catalog fetch and artifact download"""

    max_retries: int = 5
    """Maximum attempts for the catalog fetch"""

    download_retries: int = 3
    """Maximum attempts for the artifact download"""

    cache_dir: Optional[Path] = None
    """Tool cache root (None: RUNNER_TOOL_CACHE or ~/.releasekit/tools)"""

    temp_dir: Optional[Path] = None
    """Temporary download directory (None: RUNNER_TEMP or system temp)"""

    user_agent: str = DEFAULT_USER_AGENT
    """User-Agent header sent with every request"""

    def resolved_cache_dir(self) -> Path:
        return self.cache_dir or get_tool_cache_dir()

    def resolved_temp_dir(self) -> Path:
        return self.temp_dir or get_temp_dir()


_FIELD_NAMES = {f.name for f in fields(Settings)}


def load_yaml_config(config_file: Path, required: bool = False) -> Dict[str, Any]:
    """
    Load and parse a YAML configuration file.

    Args:
        config_file: Path to YAML configuration file
        required: If True, raise error if file doesn't exist

    Returns:
        Configuration dictionary (empty dict if file doesn't exist and not required)

    Raises:
        ConfigurationError: If the file is required but missing, is not valid
            YAML, or does not hold a mapping
    """
    if not config_file.exists():
        if required:
            raise ConfigurationError(f"Configuration file not found: {config_file}")
        logger.debug(f"Config file not found (optional): {config_file}")
        return {}

    logger.debug(f"Loading configuration from {config_file}")

    try:
        with open(config_file, "r", encoding="utf-8") as f:
            config = yaml.safe_load(f)
    except yaml.YAMLError as e:
        raise ConfigurationError(f"Invalid YAML in {config_file}: {e}") from e
    except OSError as e:
        raise ConfigurationError(f"Cannot read {config_file}: {e}") from e

    config = config or {}
    if not isinstance(config, dict):
        raise ConfigurationError(
            f"Invalid configuration in {config_file}: expected a mapping"
        )
    return config


def _coerce(name: str, value: Any) -> Any:
    """Convert a raw setting value to the type of its field."""
    if name == "timeout":
        try:
            timeout = float(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid value for {name}: {value!r}") from e
        if timeout <= 0:
            raise ConfigurationError(f"{name} must be positive, got {value!r}")
        return timeout

    if name in ("max_retries", "download_retries"):
        try:
            retries = int(value)
        except (TypeError, ValueError) as e:
            raise ConfigurationError(f"Invalid value for {name}: {value!r}") from e
        if retries < 1:
            raise ConfigurationError(f"{name} must be at least 1, got {value!r}")
        return retries

    if name in ("cache_dir", "temp_dir"):
        return Path(value).expanduser()

    if name == "releases_url":
        return str(value).rstrip("/")

    return str(value)


def _apply(settings: Settings, values: Mapping[str, Any], source: str) -> Settings:
    changes = {}
    for name, value in values.items():
        if name not in _FIELD_NAMES:
            logger.warning(f"Ignoring unknown setting '{name}' from {source}")
            continue
        if value is None or value == "":
            continue
        changes[name] = _coerce(name, value)

    if changes:
        logger.debug(f"Settings from {source}: {sorted(changes)}")
    return replace(settings, **changes)


def load_settings(
    config_file: Optional[Path] = None,
    env: Optional[Mapping[str, str]] = None,
    overrides: Optional[Mapping[str, Any]] = None,
) -> Settings:
    """
    Build settings from defaults, config file, environment and overrides.

    Args:
        config_file: Explicit config file (must exist); when None,
            ``releasekit.yaml`` in the working directory is used if present
        env: Environment mapping (default: os.environ)
        overrides: Highest-priority values, typically from the command line

    Returns:
        The resolved settings

    Raises:
        ConfigurationError: If any source holds an invalid value
    """
    env = os.environ if env is None else env
    settings = Settings()

    if config_file is not None:
        file_values = load_yaml_config(Path(config_file), required=True)
        source = str(config_file)
    else:
        default_file = Path.cwd() / DEFAULT_CONFIG_FILE
        file_values = load_yaml_config(default_file)
        source = str(default_file)
    settings = _apply(settings, file_values, source)

    env_values = {}
    for variable, name in ENV_VARIABLES:
        value = env.get(variable, "").strip()
        if value:
            env_values[name] = value
    settings = _apply(settings, env_values, "environment")

    if overrides:
        settings = _apply(settings, overrides, "command line")

    return settings


__all__ = ["Settings", "load_settings", "load_yaml_config", "DEFAULT_CONFIG_FILE"]
