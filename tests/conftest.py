"""
Pytest configuration and shared fixtures for releasekit tests.
"""

import logging

import pytest

# Import test fixtures to make them available to all tests
# These imports register the fixtures with pytest's fixture discovery system
# ruff: noqa: F401
from tests.fixtures.releases import make_release_zip, release_index

from releasekit.core.platform import PlatformInfo, clear_platform_cache
from releasekit.core.tool_cache import ToolCache


def pytest_addoption(parser):
    """Add custom command line options."""
    parser.addoption(
        "--integration",
        action="store_true",
        default=False,
        help="run integration tests that require network access",
    )


def pytest_collection_modifyitems(config, items):
    """Skip integration tests unless --integration flag is provided."""
    if not config.getoption("--integration"):
        skip_integration = pytest.mark.skip(reason="need --integration option to run")
        for item in items:
            if "integration" in item.keywords:
                item.add_marker(skip_integration)


def pytest_configure(config):
    """Register custom markers."""
    config.addinivalue_line(
        "markers",
        "integration: marks tests as integration tests (requires --integration)",
    )


# ============================================================================
# Shared Test Fixtures
# ============================================================================


@pytest.fixture(autouse=True)
def clean_runner_env(monkeypatch):
    """Keep the runner environment of the machine running the tests out."""
    for variable in (
        "GITHUB_PATH",
        "RUNNER_DEBUG",
        "RUNNER_TOOL_CACHE",
        "RUNNER_TEMP",
        "INPUT_PRODUCT",
        "INPUT_VERSION",
        "INPUT_RELEASES_URL",
        "RELEASEKIT_RELEASES_URL",
        "RELEASEKIT_TIMEOUT",
        "RELEASEKIT_MAX_RETRIES",
        "RELEASEKIT_CACHE_DIR",
    ):
        monkeypatch.delenv(variable, raising=False)


@pytest.fixture(autouse=True)
def reset_platform_cache():
    """Clear memoized platform detection around each test."""
    clear_platform_cache()
    yield
    clear_platform_cache()


@pytest.fixture(autouse=True)
def reset_logging():
    """Restore root logger handlers replaced by CLI logging setup."""
    root = logging.getLogger()
    handlers = root.handlers[:]
    level = root.level
    yield
    root.handlers[:] = handlers
    root.setLevel(level)


@pytest.fixture
def linux_x64() -> PlatformInfo:
    """A 64-bit Linux host."""
    return PlatformInfo(os="linux", arch="x64")


@pytest.fixture
def tool_cache(tmp_path) -> ToolCache:
    """Empty tool cache rooted in the test's temporary directory."""
    return ToolCache(tmp_path / "toolcache", lock_timeout=5)
