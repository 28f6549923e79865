"""
Core functionality for releasekit.

This package contains the foundational modules that the release resolution
and acquisition layers depend on.
"""

from .directory import (
    DirectoryError,
    get_home_dir,
    get_temp_dir,
    get_tool_cache_dir,
)

from .platform import (
    PlatformInfo,
    detect_platform,
    clear_platform_cache,
    go_arch,
    go_platform,
)

from .tool_cache import ToolCache

from .exceptions import (
    ReleaseKitError,
    ConfigurationError,
    TransportError,
    MetadataError,
    MetadataFetchError,
    MetadataMissingError,
    VersionNotFoundError,
    AcquisitionError,
    DownloadError,
    ExtractionError,
    InsecureArchiveError,
    CacheError,
    CacheLockTimeout,
)

__all__ = [
    "DirectoryError",
    "get_home_dir",
    "get_temp_dir",
    "get_tool_cache_dir",
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "go_arch",
    "go_platform",
    "ToolCache",
    "ReleaseKitError",
    "ConfigurationError",
    "TransportError",
    "MetadataError",
    "MetadataFetchError",
    "MetadataMissingError",
    "VersionNotFoundError",
    "AcquisitionError",
    "DownloadError",
    "ExtractionError",
    "InsecureArchiveError",
    "CacheError",
    "CacheLockTimeout",
]
