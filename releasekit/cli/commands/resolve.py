"""
Resolve command implementation.

Prints the release a specifier selects without downloading anything.
"""

import dataclasses
import json
import logging

from releasekit.cli.utils import create_installer, settings_from_args

logger = logging.getLogger(__name__)


def run(args) -> int:
    """
    Run the resolve command.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success)
    """
    installer = create_installer(settings_from_args(args))
    release = installer.resolve(args.product, args.version)

    if args.json:
        print(json.dumps(dataclasses.asdict(release), indent=2))
    else:
        print(release.version)
    return 0
