"""
Directory locations used by releasekit.

Tool Cache (``$RUNNER_TOOL_CACHE`` or ``~/.releasekit/tools``):
    <product>/<version>/<arch>/           : extracted release artifact
    <product>/<version>/<arch>.complete   : marker written after promotion
    .locks/                               : per-entry file locks

Temporary files (``$RUNNER_TEMP`` or the system temp directory) hold
downloaded archives and extraction scratch space for a single acquisition.
"""

import os
import tempfile
from pathlib import Path
from typing import Mapping, Optional

from releasekit.core.exceptions import ReleaseKitError


class DirectoryError(ReleaseKitError):
    """Raised when a releasekit directory location cannot be determined."""

    pass


def get_home_dir(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the platform-specific releasekit home directory.

    Returns:
        Path: ``%USERPROFILE%\\.releasekit`` on Windows, ``~/.releasekit``
        elsewhere.

    Raises:
        DirectoryError: If USERPROFILE is not set on Windows
    """
    env = os.environ if env is None else env

    if os.name == "nt":  # Windows
        user_profile = env.get("USERPROFILE")
        if not user_profile:
            raise DirectoryError(
                "USERPROFILE environment variable is not set. "
                "Cannot determine releasekit home directory."
            )
        return Path(user_profile) / ".releasekit"
    return Path.home() / ".releasekit"


def get_tool_cache_dir(env: Optional[Mapping[str, str]] = None) -> Path:
    """
    Get the tool cache root.

    CI runners export ``RUNNER_TOOL_CACHE`` so that cached tools survive
    between jobs on self-hosted runners; outside CI the cache lives in the
    releasekit home directory.

    Example:
        >>> get_tool_cache_dir({"RUNNER_TOOL_CACHE": "/opt/hostedtoolcache"})
        PosixPath('/opt/hostedtoolcache')
    """
    env = os.environ if env is None else env

    runner_cache = env.get("RUNNER_TOOL_CACHE")
    if runner_cache:
        return Path(runner_cache)
    return get_home_dir(env) / "tools"


def get_temp_dir(env: Optional[Mapping[str, str]] = None) -> Path:
    """Get the directory for temporary downloads (``RUNNER_TEMP`` if set)."""
    env = os.environ if env is None else env

    runner_temp = env.get("RUNNER_TEMP")
    if runner_temp:
        return Path(runner_temp)
    return Path(tempfile.gettempdir())


__all__ = [
    "DirectoryError",
    "get_home_dir",
    "get_tool_cache_dir",
    "get_temp_dir",
]
