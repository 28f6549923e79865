"""
Tests for CLI commands run end to end against a mocked release server.
"""

import json
import os
from unittest.mock import patch

import pytest
import responses

from releasekit.cli.parser import CLI
from releasekit.core.platform import PlatformInfo

RELEASES_URL = "https://releases.example.com"
INDEX_URL = f"{RELEASES_URL}/index.json"
OTTO_URL = f"{RELEASES_URL}/otto/0.1.0/otto_0.1.0_linux_amd64.zip"


@pytest.fixture
def workspace(tmp_path, monkeypatch):
    """Empty working directory with runner directories under tmp_path."""
    monkeypatch.chdir(tmp_path)
    monkeypatch.setenv("RUNNER_TOOL_CACHE", str(tmp_path / "toolcache"))
    monkeypatch.setenv("RUNNER_TEMP", str(tmp_path / "runner-temp"))
    monkeypatch.setenv("PATH", os.environ.get("PATH", ""))
    return tmp_path


@pytest.fixture(autouse=True)
def linux_host():
    """Pretend to run on 64-bit Linux."""
    info = PlatformInfo(os="linux", arch="x64")
    with patch("releasekit.releases.installer.detect_platform", return_value=info), patch(
        "releasekit.cli.commands.cached.detect_platform", return_value=info
    ):
        yield info


@pytest.fixture
def release_server(release_index, make_release_zip):
    """Mocked release server with the index and the otto 0.1.0 zip."""
    with responses.RequestsMock(assert_all_requests_are_fired=False) as rsps:
        rsps.add(responses.GET, INDEX_URL, json=release_index)
        rsps.add(responses.GET, OTTO_URL, body=make_release_zip("otto").read_bytes())
        yield rsps


class TestInstallCommand:
    """Test the install command."""

    def test_install(self, workspace, release_server, capsys):
        """Test installing prints the cached directory."""
        code = CLI().run(["install", "otto", "0.1.x", "--releases-url", RELEASES_URL])

        expected = workspace / "toolcache" / "otto" / "0.1.0" / "x64"
        assert code == 0
        assert capsys.readouterr().out.strip() == str(expected)
        assert (expected / "otto").exists()

    def test_install_twice(self, workspace, release_server, capsys):
        """Test a second install is served from the cache."""
        args = ["install", "otto", "0.1.0", "--releases-url", RELEASES_URL]
        CLI().run(args)
        capsys.readouterr()

        assert CLI().run(args) == 0
        assert "already installed" in capsys.readouterr().err
        downloads = [c for c in release_server.calls if c.request.url == OTTO_URL]
        assert len(downloads) == 1

    def test_install_cache_dir(self, workspace, release_server):
        """Test --cache-dir overrides the runner tool cache."""
        cache_dir = workspace / "custom-cache"

        CLI().run(
            [
                "install",
                "otto",
                "0.1.0",
                "--releases-url",
                RELEASES_URL,
                "--cache-dir",
                str(cache_dir),
            ]
        )

        assert (cache_dir / "otto" / "0.1.0" / "x64.complete").is_file()

    def test_install_add_path(self, workspace, release_server, monkeypatch):
        """Test --add-path writes to GITHUB_PATH."""
        path_file = workspace / "github_path"
        path_file.write_text("")
        monkeypatch.setenv("GITHUB_PATH", str(path_file))

        CLI().run(
            ["install", "otto", "0.1.0", "--releases-url", RELEASES_URL, "--add-path"]
        )

        expected = workspace / "toolcache" / "otto" / "0.1.0" / "x64"
        assert path_file.read_text().strip() == str(expected)

    def test_install_missing_version(self, workspace, release_server, capsys):
        """Test a version that does not exist."""
        code = CLI().run(["install", "otto", "0.100.0", "--releases-url", RELEASES_URL])

        assert code == 1
        assert "otto version '0.100.0' does not exist" in capsys.readouterr().err

    def test_releases_url_from_config(self, workspace, release_server, capsys):
        """Test the release server can come from releasekit.yaml."""
        (workspace / "releasekit.yaml").write_text(f"releases_url: {RELEASES_URL}\n")

        assert CLI().run(["install", "otto", "0.1.0"]) == 0


class TestResolveCommand:
    """Test the resolve command."""

    def test_resolve(self, workspace, release_server, capsys):
        """Test printing the resolved version."""
        code = CLI().run(["resolve", "otto", "0.1.x+ent", "--releases-url", RELEASES_URL])

        assert code == 0
        assert capsys.readouterr().out.strip() == "0.1.0+ent"
        assert not (workspace / "toolcache").exists()

    def test_resolve_json(self, workspace, release_server, capsys):
        """Test printing the release metadata as JSON."""
        CLI().run(["resolve", "otto", "latest", "--json", "--releases-url", RELEASES_URL])

        release = json.loads(capsys.readouterr().out)
        assert release["version"] == "0.2.0"
        assert release["shasums"] == "otto_0.2.0_SHA256SUMS"
        assert release["builds"][0]["os"] == "linux"


class TestActionCommand:
    """Test the action command."""

    def test_action(self, workspace, release_server, monkeypatch, capsys):
        """Test a workflow step install."""
        path_file = workspace / "github_path"
        path_file.write_text("")
        monkeypatch.setenv("GITHUB_PATH", str(path_file))
        monkeypatch.setenv("INPUT_PRODUCT", "otto")
        monkeypatch.setenv("INPUT_VERSION", "0.1.x")
        monkeypatch.setenv("INPUT_RELEASES_URL", RELEASES_URL)

        assert CLI().run(["action"]) == 0

        expected = workspace / "toolcache" / "otto" / "0.1.0" / "x64"
        assert path_file.read_text().strip() == str(expected)
        assert os.environ["PATH"].startswith(str(expected))
        assert "downloading otto@0.1.0" in capsys.readouterr().out

    def test_action_missing_product(self, workspace, capsys):
        """Test the product input is required."""
        assert CLI().run(["action"]) == 1
        assert (
            "::error::Input required and not supplied: product"
            in capsys.readouterr().out
        )

    def test_action_missing_version(self, workspace, release_server, monkeypatch, capsys):
        """Test a version that does not exist fails the step."""
        monkeypatch.setenv("INPUT_PRODUCT", "otto")
        monkeypatch.setenv("INPUT_VERSION", "0.100.0")
        monkeypatch.setenv("INPUT_RELEASES_URL", RELEASES_URL)

        assert CLI().run(["action"]) == 1
        assert "::error::otto version '0.100.0' does not exist" in capsys.readouterr().out


class TestCachedCommand:
    """Test the cached command."""

    def test_cached(self, workspace, release_server, capsys):
        """Test listing cached versions."""
        CLI().run(["install", "otto", "0.1.0", "--releases-url", RELEASES_URL])
        capsys.readouterr()

        assert CLI().run(["cached", "otto"]) == 0
        assert capsys.readouterr().out.split() == ["0.1.0"]

    def test_cached_empty(self, workspace, capsys):
        """Test a product with nothing cached."""
        assert CLI().run(["cached", "otto"]) == 0
        assert capsys.readouterr().out == ""
