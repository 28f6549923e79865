"""
Unit tests for the CLI argument parser.
"""

from pathlib import Path
from unittest.mock import patch

import pytest

from releasekit.cli.parser import CLI, main
from releasekit.core.exceptions import VersionNotFoundError


class TestParseArgs:
    """Test argument parsing."""

    def test_install(self):
        """Test install arguments."""
        args = CLI().parse_args(
            [
                "install",
                "terraform",
                "~1.6",
                "--releases-url",
                "https://mirror.example.com",
                "--timeout",
                "12",
                "--cache-dir",
                "/tmp/tools",
                "--add-path",
            ]
        )

        assert args.command == "install"
        assert args.product == "terraform"
        assert args.version == "~1.6"
        assert args.releases_url == "https://mirror.example.com"
        assert args.timeout == 12.0
        assert args.cache_dir == Path("/tmp/tools")
        assert args.add_path is True

    def test_resolve(self):
        """Test resolve arguments."""
        args = CLI().parse_args(["resolve", "vault", "1.x+ent", "--json"])

        assert args.command == "resolve"
        assert args.version == "1.x+ent"
        assert args.json is True
        assert args.releases_url is None

    def test_global_options(self):
        """Test global options."""
        args = CLI().parse_args(["-v", "--config", "ci.yaml", "cached", "otto"])

        assert args.verbose is True
        assert args.config == Path("ci.yaml")
        assert args.command == "cached"

    def test_version(self, capsys):
        """Test --version prints the version and exits."""
        with pytest.raises(SystemExit) as exc_info:
            CLI().parse_args(["--version"])

        assert exc_info.value.code == 0
        assert "releasekit" in capsys.readouterr().out

    def test_missing_positional(self):
        """Test install requires product and version."""
        with pytest.raises(SystemExit):
            CLI().parse_args(["install", "terraform"])


class TestRun:
    """Test CLI.run() dispatch and error handling."""

    def test_no_command(self, capsys):
        """Test running without a command prints help."""
        assert CLI().run([]) == 1
        assert "usage" in capsys.readouterr().out

    def test_dispatch(self):
        """Test the command module's run() is called."""
        with patch("releasekit.cli.commands.cached.run", return_value=0) as mock_run:
            assert CLI().run(["cached", "otto"]) == 0

        assert mock_run.call_args[0][0].product == "otto"

    def test_releasekit_error(self, capsys):
        """Test known errors are logged and exit with 1."""
        error = VersionNotFoundError("otto", "0.100.0")
        with patch("releasekit.cli.commands.resolve.run", side_effect=error):
            assert CLI().run(["resolve", "otto", "0.100.0"]) == 1

        assert "Error: otto version '0.100.0' does not exist" in capsys.readouterr().err

    def test_unexpected_error(self, capsys):
        """Test unexpected errors are logged and exit with 1."""
        with patch("releasekit.cli.commands.resolve.run", side_effect=RuntimeError("boom")):
            assert CLI().run(["resolve", "otto", "1.0.0"]) == 1

        assert "Unexpected error: RuntimeError: boom" in capsys.readouterr().err

    def test_keyboard_interrupt(self):
        """Test Ctrl+C exits with 130."""
        with patch("releasekit.cli.commands.resolve.run", side_effect=KeyboardInterrupt):
            assert CLI().run(["resolve", "otto", "1.0.0"]) == 130

    def test_action_failure_reported(self, capsys):
        """Test failures in action mode become an error command."""
        error = VersionNotFoundError("otto", "0.100.0")
        with patch("releasekit.cli.commands.action.run", side_effect=error):
            assert CLI().run(["action"]) == 1

        assert "::error::otto version '0.100.0' does not exist" in capsys.readouterr().out

    def test_main_exits(self):
        """Test main() exits with the run() code."""
        with patch("sys.argv", ["releasekit"]), pytest.raises(SystemExit) as exc_info:
            main()

        assert exc_info.value.code == 1
