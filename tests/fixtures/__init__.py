"""Test fixtures for releasekit tests.

This package provides reusable pytest fixtures for testing releasekit components.
Fixtures are organized by type:

- releases: Release index documents and release zip archives

Import fixtures in your tests using:
    from tests.fixtures.releases import release_index, make_release_zip
"""

__all__ = [
    "releases",
]
