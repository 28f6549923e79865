"""
Version specifier matching.

A specifier is either an exact version string (``1.11.0-beta2``,
``1.11.0+ent-beta2``) or an npm-style range (``0.1.x``, ``^1.5``,
``>=1.2 <2``, ``latest``). Ranges are evaluated with ``semantic_version``.

Releases whose build metadata carries an identifier starting with ``ent``
are enterprise builds. They only satisfy specifiers containing ``+ent``,
and standard builds only satisfy specifiers without it.
"""

import logging
import re
from typing import Iterable, List, Optional, Tuple

import semantic_version

logger = logging.getLogger(__name__)

ENTERPRISE_PREFIX = "ent"
ENTERPRISE_MARKER = "+ent"

LATEST = "latest"

# Build metadata suffixes inside a range expression, ignored when matching.
_BUILD_METADATA = re.compile(r"\+[0-9A-Za-z.-]*")


def parse_version(version: str) -> Optional[semantic_version.Version]:
    """Parse a semantic version, returning None if it is not one."""
    try:
        return semantic_version.Version(version)
    except ValueError:
        return None


def parse_range(spec: str) -> Optional[semantic_version.NpmSpec]:
    """
    Parse a specifier as an npm-style range.

    Build metadata is stripped first, so ``0.1.x+ent`` is the range
    ``0.1.x``. An empty specifier and ``latest`` both mean ``*``.

    Returns:
        The parsed range, or None if the expression is not a valid range
    """
    expression = _BUILD_METADATA.sub("", spec).strip()
    if not expression or expression.lower() == LATEST:
        expression = "*"

    try:
        return semantic_version.NpmSpec(expression)
    except ValueError:
        logger.debug(f"'{spec}' is not a valid version range")
        return None


def is_enterprise(version: str) -> bool:
    """
    Check whether a version is an enterprise build.

    Only build metadata is inspected; an ``ent`` pre-release tag does not
    count.

    Example:
        >>> is_enterprise("1.11.0+ent.hsm")
        True
        >>> is_enterprise("1.11.0-ent")
        False
    """
    parsed = parse_version(version)
    if parsed is None:
        return False
    return any(part.startswith(ENTERPRISE_PREFIX) for part in parsed.build)


def matches_build(spec: str, version: str) -> bool:
    """Check that ``version`` and ``spec`` agree on the enterprise marker."""
    return is_enterprise(version) == (ENTERPRISE_MARKER in spec)


def _precedence_key(semver: semantic_version.Version):
    return (semver.truncate("prerelease"), -len(semver.build), semver.build)


def sort_versions(versions: Iterable[str]) -> List[Tuple[str, semantic_version.Version]]:
    """
    Sort versions ascending by semantic version precedence.

    Build metadata does not affect precedence. Versions of equal precedence
    are ordered by their build metadata so the result never depends on input
    order: when walking from the top, fewer build identifiers come first
    (``1.0.0+ent`` before ``1.0.0+ent.hsm``), then the identifiers in reverse
    lexical order. Strings that are not semantic versions are dropped.
    """
    parsed = []
    for version in versions:
        semver = parse_version(version)
        if semver is None:
            logger.debug(f"Ignoring non-semver release version: {version}")
            continue
        parsed.append((version, semver))

    parsed.sort(key=lambda item: _precedence_key(item[1]))
    return parsed


def match_version(spec: str, versions: Iterable[str]) -> Optional[str]:
    """
    Pick the release version that best satisfies a specifier.

    An exact string match always wins. Otherwise the highest version that
    satisfies ``spec`` as a range and agrees with it on the enterprise
    marker is returned.

    Args:
        spec: The version specifier supplied by the user
        versions: Available versions for the product

    Returns:
        The matched version string, or None if nothing matches

    Example:
        >>> match_version("0.1.x", ["0.1.0", "0.1.0-beta", "0.1.0+ent"])
        '0.1.0'
        >>> match_version("0.1.x+ent", ["0.1.0", "0.1.0+ent"])
        '0.1.0+ent'
    """
    versions = list(versions)

    # Exact match first
    if spec in versions:
        logger.debug(f"found exact version match: {spec}")
        return spec

    match = None
    version_range = parse_range(spec)
    if version_range is not None:
        for version, semver in reversed(sort_versions(versions)):
            if version_range.match(semver.truncate("prerelease")) and matches_build(
                spec, version
            ):
                match = version
                break

    if match:
        logger.debug(f"found version match: {match}")
    else:
        logger.debug(f"version match not found for {spec}")

    return match


__all__ = [
    "ENTERPRISE_MARKER",
    "ENTERPRISE_PREFIX",
    "parse_version",
    "parse_range",
    "is_enterprise",
    "matches_build",
    "sort_versions",
    "match_version",
]
