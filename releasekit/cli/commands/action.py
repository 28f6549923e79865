"""
Action command implementation.

Runs releasekit as a CI workflow step: the product and version come from
step inputs and the installed directory is added to PATH for later steps.
"""

import logging

from releasekit.ci.actions import add_path, get_input
from releasekit.cli.utils import create_installer, settings_from_args

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the action command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    product = get_input("product", required=True)
    version = get_input("version")
    if not version:
        logger.info(f"No version requested, installing the latest {product}")

    installer = create_installer(settings_from_args(args))
    result = installer.acquire(product, version)

    add_path(result.path)
    logger.info(f"Added {result.path} to PATH")
    return 0
