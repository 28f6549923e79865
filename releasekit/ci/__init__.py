"""
CI platform integration for releasekit.
"""

from .actions import (
    ActionsLogHandler,
    add_path,
    configure_logging,
    get_input,
    is_debug,
    set_failed,
)

__all__ = [
    "ActionsLogHandler",
    "add_path",
    "configure_logging",
    "get_input",
    "is_debug",
    "set_failed",
]
