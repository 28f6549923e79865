"""
Install command implementation.

Resolves a version, acquires the release and prints its directory.
"""

import logging

from releasekit.ci.actions import add_path
from releasekit.cli.utils import create_installer, settings_from_args

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the install command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    installer = create_installer(settings_from_args(args))
    result = installer.acquire(args.product, args.version)

    if result.was_cached:
        logger.info(f"{result.product} {result.version} already installed")
    else:
        logger.info(
            f"Installed {result.product} {result.version} "
            f"in {result.download_time + result.extraction_time:.1f}s"
        )

    if args.add_path:
        add_path(result.path)

    print(result.path)
    return 0
