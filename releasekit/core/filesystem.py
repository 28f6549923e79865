"""
File system utilities for releasekit.

This module provides the file operations the acquisition pipeline relies on:
- Zip archive extraction with directory traversal protection
- Safe file operations (atomic writes, guarded deletion)
- Temporary directories that are always cleaned up
"""

import logging
import os
import shutil
import stat
import sys
import tempfile
import zipfile
import zlib
from contextlib import contextmanager
from pathlib import Path
from typing import Iterator, Optional, Union

from releasekit.core.exceptions import ExtractionError, InsecureArchiveError

logger = logging.getLogger(__name__)

IS_WINDOWS = os.name == "nt"


class FilesystemError(Exception):
    """Base exception for filesystem operations."""

    pass


# ============================================================================
# Path Utilities
# ============================================================================


def is_relative_to(path: Path, parent: Path) -> bool:
    """
    Check whether ``path`` is located inside ``parent``.

    Example:
        >>> is_relative_to(Path('/tmp/a/b'), Path('/tmp'))
        True
    """
    try:
        path.relative_to(parent)
        return True
    except ValueError:
        return False


# ============================================================================
# Archive Extraction
# ============================================================================


def _validate_archive_path(path: str, destination: Path) -> None:
    """
    Validate that an archive member path is safe to extract.

    Raises:
        InsecureArchiveError: If path attempts directory traversal
    """
    member_path = (destination / path).resolve()

    if not is_relative_to(member_path, destination.resolve()):
        raise InsecureArchiveError(
            f"Archive member '{path}' attempts directory traversal. "
            "This is a security risk and extraction has been blocked."
        )


def extract_archive(
    archive_path: Union[str, Path], destination: Union[str, Path]
) -> Path:
    """
    Extract a zip archive to a destination directory.

    All member paths are validated before anything is written. Unix
    permission bits recorded in the archive are restored so extracted
    binaries remain executable.

    Args:
        archive_path: Path to the zip file
        destination: Directory to extract to (created if missing)

    Returns:
        The destination directory

    Raises:
        ExtractionError: If the archive is missing, corrupt or unreadable
        InsecureArchiveError: If the archive contains malicious paths

    Example:
        >>> extract_archive('/tmp/terraform_1.6.0_linux_amd64.zip', '/tmp/terraform')
        PosixPath('/tmp/terraform')
    """
    archive_path = Path(archive_path)
    destination = Path(destination)

    if not archive_path.exists():
        raise ExtractionError(f"Archive not found: {archive_path}")

    destination.mkdir(parents=True, exist_ok=True)

    try:
        with zipfile.ZipFile(archive_path, "r") as zf:
            members = zf.infolist()

            # Validate all paths first
            for member in members:
                _validate_archive_path(member.filename, destination)

            for member in members:
                extracted = Path(zf.extract(member, destination))
                mode = (member.external_attr >> 16) & 0o777
                if mode and not member.is_dir() and not IS_WINDOWS:
                    os.chmod(extracted, mode)
    except InsecureArchiveError:
        raise
    except (
        zipfile.BadZipFile,
        zipfile.LargeZipFile,
        zlib.error,
        EOFError,
        OSError,
    ) as e:
        raise ExtractionError(f"Failed to extract {archive_path}: {e}") from e

    return destination


# ============================================================================
# Safe File Operations
# ============================================================================


def atomic_write(
    file_path: Union[str, Path], content: Union[str, bytes], encoding: str = "utf-8"
) -> None:
    """
    Write file atomically using temp file + rename.

    The file is never observed in a partially-written state.
    """
    file_path = Path(file_path)
    file_path.parent.mkdir(parents=True, exist_ok=True)

    # Temp file in the same directory keeps the rename on one filesystem
    temp_fd, temp_path_str = tempfile.mkstemp(
        dir=file_path.parent, prefix=f".{file_path.name}.", suffix=".tmp"
    )
    temp_path = Path(temp_path_str)

    try:
        if isinstance(content, str):
            with open(temp_fd, "w", encoding=encoding) as f:
                f.write(content)
        else:
            with open(temp_fd, "wb") as f:
                f.write(content)

        temp_path.replace(file_path)

    except BaseException:
        temp_path.unlink(missing_ok=True)
        raise


def _clear_readonly(func, target, exc) -> None:
    """
    ``shutil.rmtree`` error handler for read-only entries.

    Zip archives built on Windows can mark files read-only, which blocks
    deletion there. The entry is made writable and the failed call retried
    once; any other failure is raised unchanged. ``exc`` is the exception
    (``onexc``) or an exc_info tuple (``onerror``).
    """
    error = exc[1] if isinstance(exc, tuple) else exc
    if os.access(target, os.W_OK):
        raise error
    os.chmod(target, stat.S_IRWXU)
    func(target)


def safe_rmtree(
    path: Union[str, Path], require_prefix: Optional[Union[str, Path]] = None
) -> None:
    """
    Remove a directory tree, refusing anything outside ``require_prefix``.

    Raises:
        ValueError: If path is not under require_prefix
        FilesystemError: If path is not a directory or deletion fails
    """
    path = Path(path).resolve()

    if require_prefix is not None and not is_relative_to(
        path, Path(require_prefix).resolve()
    ):
        raise ValueError(
            f"Refusing to delete '{path}': not under required prefix '{require_prefix}'"
        )

    if not path.exists():
        return
    if not path.is_dir():
        raise FilesystemError(f"Path is not a directory: {path}")

    handler = {"onexc" if sys.version_info >= (3, 12) else "onerror": _clear_readonly}
    try:
        shutil.rmtree(path, **handler)
    except OSError as e:
        raise FilesystemError(f"Failed to remove directory '{path}': {e}") from e


# ============================================================================
# Temporary Directory Management
# ============================================================================


@contextmanager
def temporary_directory(
    prefix: str = "releasekit_", base: Optional[Union[str, Path]] = None
) -> Iterator[Path]:
    """
    Context manager for temporary directory with automatic cleanup.

    Args:
        prefix: Prefix for temp directory name
        base: Parent directory (default: system temp directory)

    Yields:
        Path to temporary directory
    """
    if base is not None:
        Path(base).mkdir(parents=True, exist_ok=True)
    temp_dir = Path(tempfile.mkdtemp(prefix=prefix, dir=base))

    try:
        yield temp_dir
    finally:
        try:
            safe_rmtree(temp_dir)
        except FilesystemError as e:
            logger.warning(f"Could not remove temporary directory {temp_dir}: {e}")


__all__ = [
    "FilesystemError",
    "is_relative_to",
    "extract_archive",
    "atomic_write",
    "safe_rmtree",
    "temporary_directory",
]
