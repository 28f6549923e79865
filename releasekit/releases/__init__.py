"""
Release resolution and acquisition.

This package resolves version specifiers against the remote release catalog
and installs the matching artifacts into the local tool cache.
"""

from .models import Build, Catalog, ProductIndex, Release
from .matcher import is_enterprise, match_version
from .metadata import DEFAULT_RELEASES_URL, MetadataClient
from .installer import InstallResult, Installer, artifact_url

__all__ = [
    "Build",
    "Catalog",
    "ProductIndex",
    "Release",
    "is_enterprise",
    "match_version",
    "DEFAULT_RELEASES_URL",
    "MetadataClient",
    "InstallResult",
    "Installer",
    "artifact_url",
]
