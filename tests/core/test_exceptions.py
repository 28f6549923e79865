"""
Unit tests for the exception hierarchy.
"""

import pytest

from releasekit.core.exceptions import (
    AcquisitionError,
    CacheError,
    CacheLockTimeout,
    ConfigurationError,
    DownloadError,
    ExtractionError,
    MetadataError,
    MetadataFetchError,
    MetadataMissingError,
    ReleaseKitError,
    TransportError,
    VersionNotFoundError,
)


class TestHierarchy:
    """Test exception inheritance."""

    @pytest.mark.parametrize(
        "error,parent",
        [
            (ConfigurationError, ReleaseKitError),
            (TransportError, ReleaseKitError),
            (MetadataFetchError, MetadataError),
            (MetadataMissingError, MetadataError),
            (VersionNotFoundError, ReleaseKitError),
            (DownloadError, AcquisitionError),
            (ExtractionError, AcquisitionError),
            (CacheLockTimeout, CacheError),
        ],
    )
    def test_parent(self, error, parent):
        """Test each error derives from its category."""
        assert issubclass(error, parent)
        assert issubclass(error, ReleaseKitError)


class TestMessages:
    """Test error messages."""

    def test_version_not_found(self):
        """Test VersionNotFoundError message and attributes."""
        error = VersionNotFoundError("otto", "0.100.0")

        assert str(error) == "otto version '0.100.0' does not exist"
        assert error.product == "otto"
        assert error.spec == "0.100.0"

    def test_metadata_missing(self):
        """Test MetadataMissingError message."""
        assert "consul" in str(MetadataMissingError("consul"))
        assert str(MetadataMissingError("consul", "no entry")).endswith("no entry")
