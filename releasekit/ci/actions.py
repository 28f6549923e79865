"""
GitHub Actions runner integration.

Implements the small part of the runner protocol releasekit needs when it
runs as a workflow step:
- Step inputs arrive as ``INPUT_<NAME>`` environment variables
- Directories appended to the file named by ``GITHUB_PATH`` are put on
  ``PATH`` for later steps
- Log lines of the form ``::debug::``, ``::warning::`` and ``::error::``
  become workflow commands (annotations and debug output)
"""

import logging
import os
import sys
from pathlib import Path
from typing import MutableMapping, Optional, TextIO, Union

from releasekit.core.exceptions import ConfigurationError

logger = logging.getLogger(__name__)


def escape_data(message: str) -> str:
    """
    Escape a message for use in a workflow command.

    Example:
        >>> escape_data("50%\\ndone")
        '50%25%0Adone'
    """
    return message.replace("%", "%25").replace("\r", "%0D").replace("\n", "%0A")


def issue_command(command: str, message: str, stream: Optional[TextIO] = None) -> None:
    """Write one workflow command to stdout."""
    stream = stream or sys.stdout
    stream.write(f"::{command}::{escape_data(message)}\n")
    stream.flush()


def is_debug(env: Optional[MutableMapping[str, str]] = None) -> bool:
    """Whether the runner has step debug logging enabled."""
    env = os.environ if env is None else env
    return env.get("RUNNER_DEBUG") == "1"


def get_input(
    name: str, required: bool = False, env: Optional[MutableMapping[str, str]] = None
) -> str:
    """
    Read a step input.

    Args:
        name: Input name as declared by the action (e.g., "releases_url")
        required: Raise if the input is empty
        env: Environment mapping (default: os.environ)

    Returns:
        The input value with surrounding whitespace removed

    Raises:
        ConfigurationError: If a required input is empty

    Example:
        >>> get_input("product", env={"INPUT_PRODUCT": " terraform "})
        'terraform'
    """
    env = os.environ if env is None else env
    variable = f"INPUT_{name.replace(' ', '_').upper()}"
    value = env.get(variable, "").strip()

    if required and not value:
        raise ConfigurationError(f"Input required and not supplied: {name}")
    return value


def add_path(
    path: Union[str, Path], env: Optional[MutableMapping[str, str]] = None
) -> None:
    """
    Prepend a directory to PATH for this process and later steps.

    Args:
        path: Directory to add
        env: Environment mapping to update (default: os.environ)
    """
    env = os.environ if env is None else env
    path = str(path)

    path_file = env.get("GITHUB_PATH")
    if path_file:
        with open(path_file, "a", encoding="utf-8") as f:
            f.write(f"{path}{os.linesep}")
        logger.debug(f"Appended {path} to {path_file}")

    current = env.get("PATH", "")
    env["PATH"] = f"{path}{os.pathsep}{current}" if current else path


def set_failed(message: str, stream: Optional[TextIO] = None) -> int:
    """
    Mark the step as failed.

    Returns:
        The exit code the process should terminate with
    """
    issue_command("error", message, stream)
    return 1


class ActionsLogHandler(logging.Handler):
    """
    Logging handler that renders records as workflow commands.

    DEBUG records become ``::debug::`` lines (shown by the runner only when
    step debugging is on), WARNING ``::warning::``, ERROR and above
    ``::error::``; INFO records are written as plain lines.
    """

    COMMANDS = (
        (logging.ERROR, "error"),
        (logging.WARNING, "warning"),
        (logging.INFO, None),
        (logging.NOTSET, "debug"),
    )

    def __init__(self, stream: Optional[TextIO] = None):
        super().__init__()
        self.stream = stream

    def emit(self, record: logging.LogRecord) -> None:
        try:
            message = self.format(record)
            stream = self.stream or sys.stdout

            for level, command in self.COMMANDS:
                if record.levelno >= level:
                    break

            if command is None:
                stream.write(f"{message}\n")
                stream.flush()
            else:
                issue_command(command, message, stream)
        except Exception:
            self.handleError(record)


def configure_logging(
    verbose: bool = False, stream: Optional[TextIO] = None
) -> ActionsLogHandler:
    """
    Route the root logger through an ActionsLogHandler.

    Debug records are enabled when ``verbose`` is set or the runner has
    ``RUNNER_DEBUG=1``.
    """
    handler = ActionsLogHandler(stream)
    handler.setFormatter(logging.Formatter("%(message)s"))

    level = logging.DEBUG if verbose or is_debug() else logging.INFO
    logging.basicConfig(level=level, handlers=[handler], force=True)
    return handler


__all__ = [
    "escape_data",
    "issue_command",
    "is_debug",
    "get_input",
    "add_path",
    "set_failed",
    "ActionsLogHandler",
    "configure_logging",
]
