"""
releasekit - resolve and install released tool binaries.

Resolves a version specifier against a release index (``index.json``),
downloads the matching zip for the host platform and keeps it in a local
tool cache for reuse.

Example:
    >>> from releasekit import Installer, MetadataClient, ToolCache
    >>> installer = Installer(MetadataClient(), ToolCache())
    >>> installer.acquire("terraform", "~1.6").path
    PosixPath('/home/user/.releasekit/tools/terraform/1.6.6/x64')
"""

from releasekit.core.exceptions import ReleaseKitError
from releasekit.core.tool_cache import ToolCache
from releasekit.releases import (
    InstallResult,
    Installer,
    MetadataClient,
    match_version,
)

__all__ = [
    "ReleaseKitError",
    "ToolCache",
    "InstallResult",
    "Installer",
    "MetadataClient",
    "match_version",
]
