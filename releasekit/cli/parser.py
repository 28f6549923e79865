"""
releasekit CLI argument parser.

This module implements the command-line interface for releasekit using argparse.
"""

import argparse
import importlib
import logging
import sys
from pathlib import Path
from typing import List, Optional

from releasekit.ci.actions import configure_logging as configure_actions_logging
from releasekit.ci.actions import set_failed
from releasekit.core.exceptions import ReleaseKitError

# Get version from package
try:
    from importlib.metadata import PackageNotFoundError, version

    __version__ = version("releasekit")
except PackageNotFoundError:
    __version__ = "0.1.0"

logger = logging.getLogger(__name__)


class CLI:
    """releasekit command-line interface."""

    COMMANDS = {
        "install": "releasekit.cli.commands.install",
        "resolve": "releasekit.cli.commands.resolve",
        "action": "releasekit.cli.commands.action",
        "cached": "releasekit.cli.commands.cached",
    }

    def __init__(self):
        """Initialize CLI with argument parser."""
        self.parser = self._create_parser()

    def _create_parser(self) -> argparse.ArgumentParser:
        """
        Create argument parser with all subcommands.

        Returns:
            Configured ArgumentParser instance
        """
        parser = argparse.ArgumentParser(
            prog="releasekit",
            description="releasekit - install released tool binaries from a release index",
            epilog='Use "releasekit COMMAND --help" for command-specific help',
            formatter_class=argparse.RawDescriptionHelpFormatter,
        )

        # Global options
        parser.add_argument(
            "--version", action="version", version=f"releasekit {__version__}"
        )
        parser.add_argument(
            "--verbose", "-v", action="store_true", help="Enable verbose output"
        )
        parser.add_argument(
            "--quiet",
            "-q",
            action="store_true",
            help="Enable minimal output (errors only)",
        )
        parser.add_argument(
            "--config",
            type=Path,
            metavar="PATH",
            help="Path to configuration file (default: ./releasekit.yaml)",
        )

        subparsers = parser.add_subparsers(
            dest="command", help="Available commands", metavar="COMMAND"
        )

        self._add_install_command(subparsers)
        self._add_resolve_command(subparsers)
        self._add_action_command(subparsers)
        self._add_cached_command(subparsers)

        return parser

    def _add_server_options(self, parser):
        """Options shared by commands that talk to the release server."""
        parser.add_argument(
            "--releases-url",
            metavar="URL",
            help="Release server base URL (default: https://releases.hashicorp.com)",
        )
        parser.add_argument(
            "--timeout",
            type=float,
            metavar="SECONDS",
            help="Network timeout for metadata and downloads (default: 30)",
        )

    def _add_install_command(self, subparsers):
        """Add 'install' subcommand."""
        parser = subparsers.add_parser(
            "install",
            help="Install a product release",
            description="Resolve a version, download the release and cache it",
        )
        parser.add_argument("product", help="Product name (e.g., terraform)")
        parser.add_argument(
            "version", help="Exact version or range (e.g., 1.6.0, ~1.6, 1.x+ent)"
        )
        self._add_server_options(parser)
        parser.add_argument(
            "--cache-dir", type=Path, metavar="DIR", help="Tool cache directory"
        )
        parser.add_argument(
            "--add-path",
            action="store_true",
            help="Add the installed directory to GITHUB_PATH",
        )

    def _add_resolve_command(self, subparsers):
        """Add 'resolve' subcommand."""
        parser = subparsers.add_parser(
            "resolve",
            help="Show which release a version selects",
            description="Resolve a version against the release index without downloading",
        )
        parser.add_argument("product", help="Product name (e.g., terraform)")
        parser.add_argument("version", help="Exact version or range")
        self._add_server_options(parser)
        parser.add_argument(
            "--json", action="store_true", help="Print the full release metadata"
        )

    def _add_action_command(self, subparsers):
        """Add 'action' subcommand."""
        parser = subparsers.add_parser(
            "action",
            help="Run as a CI workflow step",
            description=(
                "Read the product, version and releases_url step inputs, "
                "install the release and add it to PATH"
            ),
        )
        parser.add_argument(
            "--cache-dir", type=Path, metavar="DIR", help="Tool cache directory"
        )

    def _add_cached_command(self, subparsers):
        """Add 'cached' subcommand."""
        parser = subparsers.add_parser(
            "cached",
            help="List cached versions of a product",
            description="List the versions of a product in the local tool cache",
        )
        parser.add_argument("product", help="Product name (e.g., terraform)")
        parser.add_argument(
            "--cache-dir", type=Path, metavar="DIR", help="Tool cache directory"
        )

    def parse_args(self, args: Optional[List[str]] = None):
        """
        Parse command-line arguments.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Parsed arguments namespace
        """
        return self.parser.parse_args(args)

    def run(self, args: Optional[List[str]] = None) -> int:
        """
        Run CLI with given arguments.

        This is the only place failures are caught: they are logged (or
        reported as a failed workflow step) and turned into exit code 1.

        Args:
            args: Arguments to parse (uses sys.argv if None)

        Returns:
            Exit code (0 for success, non-zero for error)
        """
        parsed_args = self.parse_args(args)

        self._configure_logging(parsed_args)

        if not parsed_args.command:
            self.parser.print_help()
            return 1

        try:
            return self._dispatch_command(parsed_args)
        except KeyboardInterrupt:
            logger.info("Operation cancelled by user")
            return 130  # Standard exit code for SIGINT
        except Exception as e:
            if parsed_args.verbose:
                logger.debug("Traceback:", exc_info=True)
            if parsed_args.command == "action":
                return set_failed(str(e))
            if isinstance(e, ReleaseKitError):
                logger.error(f"Error: {e}")
            else:
                logger.error(f"Unexpected error: {type(e).__name__}: {e}")
            return 1

    def _configure_logging(self, args):
        """
        Configure logging based on verbose/quiet flags.

        Args:
            args: Parsed arguments with verbose/quiet flags
        """
        if args.command == "action":
            configure_actions_logging(verbose=args.verbose)
            return

        if args.verbose:
            level = logging.DEBUG
            format_str = "%(levelname)s [%(name)s] %(message)s"
        elif args.quiet:
            level = logging.ERROR
            format_str = "%(levelname)s: %(message)s"
        else:
            level = logging.INFO
            format_str = "%(message)s"

        logging.basicConfig(
            level=level,
            format=format_str,
            stream=sys.stderr,
            force=True,  # Reconfigure if already configured
        )

    def _dispatch_command(self, args) -> int:
        """
        Dispatch to appropriate command handler.

        Args:
            args: Parsed arguments with command field

        Returns:
            Exit code from command handler
        """
        module_name = self.COMMANDS.get(args.command)
        if not module_name:
            logger.error(f"Unknown command: {args.command}")
            return 1

        module = importlib.import_module(module_name)
        return module.run(args)


def main():
    """Main entry point for CLI."""
    cli = CLI()
    sys.exit(cli.run())


if __name__ == "__main__":
    main()
