"""
Platform detection for releasekit.

Detects the host operating system and CPU architecture using the naming
convention of CI runners (``linux``, ``darwin``, ``win32``; ``x64``,
``arm64``, ``x32``). Those names key the tool cache. Release artifacts are
published with Go naming instead, so ``go_platform`` and ``go_arch``
translate between the two.

Usage:
    from releasekit.core.platform import detect_platform, go_arch, go_platform

    info = detect_platform()
    print(f"{go_platform(info.os)}_{go_arch(info.arch)}")
"""

import functools
import platform
from dataclasses import dataclass

# Host architecture names that differ from their Go counterparts.
GO_ARCH_NAMES = {
    "x64": "amd64",
    "x32": "386",
}

# Host operating system names that differ from their Go counterparts.
GO_PLATFORM_NAMES = {
    "win32": "windows",
}


@dataclass(frozen=True)
class PlatformInfo:
    """
    Host platform information.

    Attributes:
        os: Operating system ('linux', 'darwin', 'win32', 'freebsd', ...)
        arch: CPU architecture ('x64', 'arm64', 'x32', 'arm', ...)
    """

    os: str
    arch: str

    @property
    def go_platform(self) -> str:
        """Operating system name used in release artifact filenames."""
        return go_platform(self.os)

    @property
    def go_arch(self) -> str:
        """Architecture name used in release artifact filenames."""
        return go_arch(self.arch)

    def __str__(self) -> str:
        return f"{self.os}-{self.arch}"


def go_arch(arch: str) -> str:
    """
    Translate a host architecture name to the Go architecture name.

    Unknown names are returned unchanged.

    Example:
        >>> go_arch("x64")
        'amd64'
        >>> go_arch("arm64")
        'arm64'
    """
    return GO_ARCH_NAMES.get(arch, arch)


def go_platform(os_name: str) -> str:
    """
    Translate a host operating system name to the Go platform name.

    Unknown names are returned unchanged.

    Example:
        >>> go_platform("win32")
        'windows'
    """
    return GO_PLATFORM_NAMES.get(os_name, os_name)


@functools.lru_cache(maxsize=1)
def detect_platform() -> PlatformInfo:
    """
    Detect current platform information.

    This function is cached - it only runs detection once per process.
    """
    return PlatformInfo(os=_detect_os(), arch=_detect_architecture())


def _detect_os() -> str:
    system = platform.system().lower()

    if system == "windows" or system.startswith(("cygwin", "msys")):
        return "win32"
    if system.startswith("sunos"):
        return "sunos"
    # linux, darwin, freebsd, openbsd, netbsd, aix
    return system


def _detect_architecture() -> str:
    machine = platform.machine().lower()

    if machine in ("x86_64", "amd64", "x64"):
        return "x64"
    elif machine in ("aarch64", "arm64", "aarch64_be"):
        return "arm64"
    elif machine in ("i386", "i486", "i586", "i686", "x86"):
        return "x32"
    elif machine.startswith("arm"):
        return "arm"
    elif machine in ("ppc64", "ppc64le"):
        return "ppc64"
    else:
        # s390x, riscv64, mips and friends keep their own names
        return machine


def clear_platform_cache():
    """Clear cached platform detection (for tests)."""
    detect_platform.cache_clear()


__all__ = [
    "PlatformInfo",
    "detect_platform",
    "clear_platform_cache",
    "go_arch",
    "go_platform",
    "GO_ARCH_NAMES",
    "GO_PLATFORM_NAMES",
]
