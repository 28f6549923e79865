"""
Shared utilities for CLI commands.

Builds settings and pipeline objects from parsed arguments so every command
wires the collaborators the same way.
"""

import logging
from typing import Any, Dict

from releasekit.config.settings import Settings, load_settings
from releasekit.core.tool_cache import ToolCache
from releasekit.releases.installer import Installer
from releasekit.releases.metadata import MetadataClient

logger = logging.getLogger(__name__)


def settings_from_args(args) -> Settings:
    """
    Load settings, letting command-line flags override everything else.

    Args:
        args: Parsed command-line arguments

    Returns:
        The resolved settings
    """
    overrides: Dict[str, Any] = {
        "releases_url": getattr(args, "releases_url", None),
        "timeout": getattr(args, "timeout", None),
        "cache_dir": getattr(args, "cache_dir", None),
    }
    return load_settings(config_file=getattr(args, "config", None), overrides=overrides)


def create_installer(settings: Settings) -> Installer:
    """Wire a metadata client, tool cache and installer from settings."""
    metadata = MetadataClient(
        releases_url=settings.releases_url,
        timeout=settings.timeout,
        max_retries=settings.max_retries,
        user_agent=settings.user_agent,
    )
    logger.debug(f"Using release server {settings.releases_url}")

    return Installer(
        metadata,
        cache=ToolCache(settings.resolved_cache_dir()),
        temp_dir=settings.resolved_temp_dir(),
        download_timeout=settings.timeout,
        download_retries=settings.download_retries,
        user_agent=settings.user_agent,
    )


__all__ = ["settings_from_args", "create_installer"]
