"""
Local tool cache keyed by (product, version, architecture).

Extracted release artifacts are stored at ``<root>/<product>/<version>/<arch>``.
An entry only becomes visible once its ``<arch>.complete`` marker exists;
writers populate a staging directory next to the destination, rename it into
place and only then write the marker. Entries survive across invocations.
"""

import logging
import re
import shutil
import tempfile
from contextlib import contextmanager
from pathlib import Path
from typing import List, Optional, Union

from filelock import FileLock, Timeout

from releasekit.core.directory import get_tool_cache_dir
from releasekit.core.exceptions import CacheError, CacheLockTimeout
from releasekit.core.filesystem import FilesystemError, atomic_write, safe_rmtree

logger = logging.getLogger(__name__)

COMPLETE_SUFFIX = ".complete"

_UNSAFE_KEY = re.compile(r"[\\/]|^\.\.?$")


class ToolCache:
    """
    Content cache for extracted release artifacts.

    Readers never take a lock: an entry without its completion marker is
    treated as absent. Writers serialize per entry with a file lock so two
    processes promoting the same key cannot interleave.

    Example:
        >>> cache = ToolCache(Path("/opt/hostedtoolcache"))
        >>> cache.find("terraform", "1.6.0", "x64")
        PosixPath('/opt/hostedtoolcache/terraform/1.6.0/x64')
    """

    def __init__(self, root: Optional[Path] = None, lock_timeout: int = 300):
        """
        Initialize tool cache.

        Args:
            root: Cache root directory (default: RUNNER_TOOL_CACHE or ~/.releasekit/tools)
            lock_timeout: Timeout in seconds for acquiring an entry lock
        """
        self.root = Path(root) if root is not None else get_tool_cache_dir()
        self.lock_dir = self.root / ".locks"
        self.lock_timeout = lock_timeout

        logger.debug(f"Initialized tool cache at {self.root}")

    def entry_path(self, product: str, version: str, arch: str) -> Path:
        """Return the directory an entry occupies, whether or not it exists."""
        for part in (product, version, arch):
            if not part or _UNSAFE_KEY.search(part):
                raise ValueError(f"Invalid tool cache key component: {part!r}")
        return self.root / product / version / arch

    def _marker_path(self, entry: Path) -> Path:
        return entry.with_name(entry.name + COMPLETE_SUFFIX)

    def find(self, product: str, version: str, arch: str) -> Optional[Path]:
        """
        Look up a completed cache entry.

        Args:
            product: Product name
            version: Exact resolved version
            arch: Host architecture

        Returns:
            Path to the cached directory, or None on a miss
        """
        entry = self.entry_path(product, version, arch)

        if entry.is_dir() and self._marker_path(entry).is_file():
            logger.debug(f"Tool cache hit: {entry}")
            return entry

        logger.debug(f"Tool cache miss: {product} {version} {arch}")
        return None

    def find_all_versions(self, product: str, arch: str) -> List[str]:
        """
        List the versions of a product cached for an architecture.

        Returns:
            Version strings in directory name order
        """
        product_dir = self.root / product
        if not product_dir.is_dir():
            return []

        versions = []
        for version_dir in sorted(product_dir.iterdir()):
            if not version_dir.is_dir():
                continue
            if self.find(product, version_dir.name, arch) is not None:
                versions.append(version_dir.name)
        return versions

    @contextmanager
    def _lock(self, product: str, version: str, arch: str):
        """
        Acquire the exclusive lock for one cache entry.

        Raises:
            CacheLockTimeout: If lock cannot be acquired within timeout
        """
        self.lock_dir.mkdir(parents=True, exist_ok=True)
        lock_path = self.lock_dir / f"{product}-{version}-{arch}.lock"
        lock = FileLock(lock_path, timeout=self.lock_timeout)

        try:
            with lock:
                logger.debug(f"Acquired tool cache lock: {lock_path}")
                yield
            logger.debug(f"Released tool cache lock: {lock_path}")
        except Timeout as e:
            raise CacheLockTimeout(
                f"Could not acquire tool cache lock for {product} {version} {arch} "
                f"within {self.lock_timeout} seconds"
            ) from e

    def cache_dir(
        self,
        source_dir: Union[str, Path],
        product: str,
        version: str,
        arch: str,
    ) -> Path:
        """
        Copy a fully populated directory into the cache.

        Args:
            source_dir: Directory holding the extracted artifact
            product: Product name
            version: Exact resolved version
            arch: Host architecture

        Returns:
            Path to the cached directory

        Raises:
            CacheError: If the source is missing or the copy fails
            CacheLockTimeout: If another writer holds the entry lock too long
        """
        source_dir = Path(source_dir)
        if not source_dir.is_dir():
            raise CacheError(f"Source directory does not exist: {source_dir}")

        entry = self.entry_path(product, version, arch)
        marker = self._marker_path(entry)
        entry.parent.mkdir(parents=True, exist_ok=True)

        logger.debug(f"Caching {source_dir} as {product} {version} {arch}")

        with self._lock(product, version, arch):
            staging = Path(
                tempfile.mkdtemp(prefix=f".{arch}.staging-", dir=entry.parent)
            )
            try:
                shutil.copytree(source_dir, staging, symlinks=True, dirs_exist_ok=True)

                marker.unlink(missing_ok=True)
                if entry.exists():
                    safe_rmtree(entry, require_prefix=self.root)
                staging.rename(entry)

                atomic_write(marker, "")
            except (OSError, FilesystemError) as e:
                raise CacheError(
                    f"Failed to cache {product} {version} {arch}: {e}"
                ) from e
            finally:
                if staging.exists():
                    safe_rmtree(staging, require_prefix=self.root)

        logger.info(f"Cached {product} {version} at {entry}")
        return entry


__all__ = ["ToolCache", "COMPLETE_SUFFIX"]
