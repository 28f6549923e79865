"""
Release acquisition pipeline.

This module resolves a version specifier against the release catalog and
makes the matching artifact available locally:
1. Look up the product in the release catalog
2. Match the specifier against the published versions
3. Return the tool cache entry if one exists
4. Otherwise download the zip for this platform
5. Extract it to a temporary directory
6. Promote the extracted tree into the tool cache
"""

import logging
import time
from dataclasses import dataclass
from pathlib import Path
from typing import Optional

from releasekit.core.directory import get_temp_dir
from releasekit.core.download import DEFAULT_USER_AGENT, download_file
from releasekit.core.exceptions import (
    DownloadError,
    MetadataMissingError,
    TransportError,
    VersionNotFoundError,
)
from releasekit.core.filesystem import extract_archive, temporary_directory
from releasekit.core.platform import PlatformInfo, detect_platform
from releasekit.core.tool_cache import ToolCache
from releasekit.releases.matcher import match_version
from releasekit.releases.metadata import MetadataClient
from releasekit.releases.models import Release

logger = logging.getLogger(__name__)


@dataclass
class InstallResult:
    """Result of an acquisition."""

    product: str
    """Product name"""

    version: str
    """Exact version that was resolved"""

    path: Path
    """Tool cache directory holding the extracted artifact"""

    was_cached: bool
    """Whether the artifact was already cached (no download needed)"""

    download_time: float = 0.0
    """Time spent downloading in seconds"""

    extraction_time: float = 0.0
    """Time spent extracting in seconds"""


def artifact_filename(product: str, version: str, platform: str, arch: str) -> str:
    """
    Name of the zip published for one platform.

    Example:
        >>> artifact_filename("terraform", "1.6.0", "linux", "amd64")
        'terraform_1.6.0_linux_amd64.zip'
    """
    return f"{product}_{version}_{platform}_{arch}.zip"


def artifact_url(
    releases_url: str, product: str, version: str, platform: str, arch: str
) -> str:
    """
    Download URL of the zip published for one platform.

    ``platform`` and ``arch`` are Go names (``linux``/``windows``,
    ``amd64``/``386``).

    Example:
        >>> artifact_url("https://releases.hashicorp.com", "terraform", "1.6.0", "linux", "amd64")
        'https://releases.hashicorp.com/terraform/1.6.0/terraform_1.6.0_linux_amd64.zip'
    """
    filename = artifact_filename(product, version, platform, arch)
    return f"{releases_url.rstrip('/')}/{product}/{version}/{filename}"


class Installer:
    """
    Resolves and acquires product releases.

    Example:
        >>> installer = Installer(MetadataClient(), ToolCache())
        >>> result = installer.acquire("terraform", "~1.6")
        >>> print(f"Installed at: {result.path}")
    """

    def __init__(
        self,
        metadata: MetadataClient,
        cache: Optional[ToolCache] = None,
        platform_info: Optional[PlatformInfo] = None,
        temp_dir: Optional[Path] = None,
        download_timeout: float = 30,
        download_retries: int = 3,
        user_agent: str = DEFAULT_USER_AGENT,
    ):
        """
        Initialize installer.

        Args:
            metadata: Release catalog client; its base URL is also used for downloads
            cache: Tool cache (default: RUNNER_TOOL_CACHE or ~/.releasekit/tools)
            platform_info: Target platform (default: the host)
            temp_dir: Parent directory for temporary downloads (default: RUNNER_TEMP)
            download_timeout: Artifact download timeout in seconds
            download_retries: Maximum number of download attempts
            user_agent: User-Agent header value
        """
        self.metadata = metadata
        self.cache = cache or ToolCache()
        self.platform_info = platform_info or detect_platform()
        self.temp_dir = temp_dir or get_temp_dir()
        self.download_timeout = download_timeout
        self.download_retries = download_retries
        self.user_agent = user_agent

    @property
    def releases_url(self) -> str:
        return self.metadata.releases_url

    def resolve(self, product: str, spec: str) -> Release:
        """
        Resolve a specifier to a concrete release.

        Args:
            product: Product name (e.g., "terraform")
            spec: Exact version or semantic version range

        Returns:
            The matched release

        Raises:
            MetadataFetchError: If the release catalog cannot be fetched
            MetadataMissingError: If the product is unknown or has no versions
            VersionNotFoundError: If no release satisfies the specifier
        """
        index = self.metadata.get(product)
        if index is None:
            raise MetadataMissingError(product, "product not found in release index")
        if index.versions is None:
            raise MetadataMissingError(product)

        version = match_version(spec, index.version_strings())
        if not version:
            raise VersionNotFoundError(product, spec)

        release = index.release(version)
        if release is None:
            raise VersionNotFoundError(product, spec)

        return release

    def acquire(self, product: str, spec: str) -> InstallResult:
        """
        Make a release available locally, downloading it if needed.

        Args:
            product: Product name (e.g., "terraform")
            spec: Exact version or semantic version range

        Returns:
            InstallResult with the tool cache path

        Raises:
            MetadataFetchError: If the release catalog cannot be fetched
            MetadataMissingError: If the product is unknown or has no versions
            VersionNotFoundError: If no release satisfies the specifier
            DownloadError: If the artifact download fails
            ExtractionError: If the artifact cannot be extracted
        """
        release = self.resolve(product, spec)
        version = release.version
        arch = self.platform_info.arch

        cached = self.cache.find(product, version, arch)
        if cached is not None:
            logger.info(f"found in cache: {cached}")
            return InstallResult(
                product=product, version=version, path=cached, was_cached=True
            )

        return self._download_and_extract(product, version)

    def _download_and_extract(self, product: str, version: str) -> InstallResult:
        """
        Download, extract and cache one release.

        Nothing reaches the tool cache unless extraction succeeded; the
        temporary directory is removed on every path.
        """
        platform = self.platform_info.go_platform
        arch = self.platform_info.go_arch
        url = artifact_url(self.releases_url, product, version, platform, arch)

        logger.info(f"downloading {product}@{version} from {self.releases_url}")

        with temporary_directory(
            prefix=f"releasekit-{product}-", base=self.temp_dir
        ) as work_dir:
            archive_path = work_dir / artifact_filename(product, version, platform, arch)

            download_start = time.time()
            try:
                download_file(
                    url,
                    archive_path,
                    timeout=self.download_timeout,
                    max_retries=self.download_retries,
                    user_agent=self.user_agent,
                )
            except TransportError as e:
                raise DownloadError(f"Failed to download product: {e}") from e
            download_time = time.time() - download_start

            extraction_start = time.time()
            extracted = extract_archive(archive_path, work_dir / "extracted")
            extraction_time = time.time() - extraction_start

            path = self.cache.cache_dir(
                extracted, product, version, self.platform_info.arch
            )

        logger.debug(
            f"Acquired {product} {version} "
            f"(download {download_time:.2f}s, extraction {extraction_time:.2f}s)"
        )

        return InstallResult(
            product=product,
            version=version,
            path=path,
            was_cached=False,
            download_time=download_time,
            extraction_time=extraction_time,
        )


__all__ = ["Installer", "InstallResult", "artifact_url", "artifact_filename"]
