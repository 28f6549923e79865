"""
Centralized exception hierarchy for releasekit.

Every failure raised while resolving or acquiring a release derives from
ReleaseKitError, so the command line entry point can report all of them
the same way.
"""


# ============================================================================
# Base Exceptions
# ============================================================================


class ReleaseKitError(Exception):
    """Base exception for all releasekit errors."""

    pass


class ConfigurationError(ReleaseKitError):
    """Invalid configuration file, environment value or missing input."""

    pass


class TransportError(ReleaseKitError):
    """HTTP request failed after the transport retries were exhausted."""

    pass


# ============================================================================
# Metadata Exceptions
# ============================================================================


class MetadataError(ReleaseKitError):
    """Base exception for release catalog errors."""

    pass


class MetadataFetchError(MetadataError):
    """Raised when the release catalog cannot be fetched or decoded."""

    pass


class MetadataMissingError(MetadataError):
    """Raised when a product is absent from the catalog or has no versions."""

    def __init__(self, product: str, detail: str = ""):
        self.product = product
        msg = f"Release metadata for '{product}' does not contain versions"
        if detail:
            msg += f": {detail}"
        super().__init__(msg)


class VersionNotFoundError(ReleaseKitError):
    """Raised when no release satisfies the requested version specifier."""

    def __init__(self, product: str, spec: str):
        self.product = product
        self.spec = spec
        super().__init__(f"{product} version '{spec}' does not exist")


# ============================================================================
# Acquisition Exceptions
# ============================================================================


class AcquisitionError(ReleaseKitError):
    """Base exception for artifact download and extraction errors."""

    pass


class DownloadError(AcquisitionError):
    """Raised when a release artifact cannot be downloaded."""

    pass


class ExtractionError(AcquisitionError):
    """Raised when a downloaded archive cannot be extracted."""

    pass


class InsecureArchiveError(ExtractionError):
    """Archive contains insecure paths (directory traversal attempt)."""

    pass


# ============================================================================
# Tool Cache Exceptions
# ============================================================================


class CacheError(ReleaseKitError):
    """Base exception for tool cache errors."""

    pass


class CacheLockTimeout(CacheError):
    """Raised when a tool cache entry lock cannot be acquired within timeout."""

    pass
