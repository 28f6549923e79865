"""
Configuration loading for releasekit.
"""

from .settings import DEFAULT_CONFIG_FILE, Settings, load_settings, load_yaml_config

__all__ = ["DEFAULT_CONFIG_FILE", "Settings", "load_settings", "load_yaml_config"]
