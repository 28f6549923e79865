"""
Release catalog data model.

The catalog is a JSON document published at ``<releases_url>/index.json``:

    {
      "terraform": {
        "name": "terraform",
        "versions": {
          "1.6.0": {
            "name": "terraform",
            "version": "1.6.0",
            "shasums": "terraform_1.6.0_SHA256SUMS",
            "shasums_signature": "terraform_1.6.0_SHA256SUMS.sig",
            "builds": [
              {"arch": "amd64", "os": "linux", "filename": "...", "name": "terraform",
               "url": "https://...", "version": "1.6.0"}
            ]
          }
        }
      }
    }

Products are decoded lazily; the raw document is kept as fetched.
"""

from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any, Dict, List, Mapping, Optional, Tuple


def _str(data: Mapping[str, Any], key: str) -> str:
    value = data.get(key)
    return value if isinstance(value, str) else ""


@dataclass(frozen=True)
class Build:
    """One platform-specific artifact of a release."""

    arch: str
    os: str
    filename: str
    name: str
    url: str
    version: str

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Build":
        return cls(
            arch=_str(data, "arch"),
            os=_str(data, "os"),
            filename=_str(data, "filename"),
            name=_str(data, "name"),
            url=_str(data, "url"),
            version=_str(data, "version"),
        )


@dataclass(frozen=True)
class Release:
    """
    One published version of a product.

    ``shasums`` and ``shasums_signature`` name the checksum manifest files
    and are carried through untouched.
    """

    name: str
    version: str
    shasums: str = ""
    shasums_signature: str = ""
    builds: Tuple[Build, ...] = ()

    @classmethod
    def from_dict(cls, data: Mapping[str, Any]) -> "Release":
        builds = data.get("builds")
        if not isinstance(builds, list):
            builds = []

        return cls(
            name=_str(data, "name"),
            version=_str(data, "version"),
            shasums=_str(data, "shasums"),
            shasums_signature=_str(data, "shasums_signature"),
            builds=tuple(Build.from_dict(b) for b in builds if isinstance(b, dict)),
        )


@dataclass(frozen=True)
class ProductIndex:
    """
    A product and its releases.

    ``versions`` is None when the catalog entry has no versions collection,
    which the installer reports as missing metadata.
    """

    name: str
    versions: Optional[Dict[str, Release]] = None

    @classmethod
    def from_dict(cls, name: str, data: Any) -> "ProductIndex":
        if not isinstance(data, dict):
            return cls(name=name)

        raw_versions = data.get("versions")
        if not isinstance(raw_versions, dict):
            return cls(name=_str(data, "name") or name)

        versions = {
            key: Release.from_dict(value)
            for key, value in raw_versions.items()
            if isinstance(value, dict)
        }
        return cls(name=_str(data, "name") or name, versions=versions)

    def version_strings(self) -> List[str]:
        """Return the version of every release (empty if there are none)."""
        if not self.versions:
            return []
        return [release.version for release in self.versions.values()]

    def release(self, version: str) -> Optional[Release]:
        """
        Find the release whose ``version`` field equals ``version``.

        Catalog keys normally equal the version field; the lookup falls back
        to scanning in case they do not.
        """
        if not self.versions:
            return None

        release = self.versions.get(version)
        if release is not None and release.version == version:
            return release

        for candidate in self.versions.values():
            if candidate.version == version:
                return candidate
        return None


@dataclass(frozen=True)
class Catalog:
    """
    The full release index of every product.

    ``products`` is a read-only snapshot of the fetched document's top level.
    """

    products: Mapping[str, Any] = field(default_factory=dict)

    def __post_init__(self):
        object.__setattr__(self, "products", MappingProxyType(dict(self.products)))

    def product(self, name: str) -> Optional[ProductIndex]:
        """Decode one product, or return None if the catalog lacks it."""
        if name not in self:
            return None
        return ProductIndex.from_dict(name, self.products[name])

    def product_names(self) -> List[str]:
        return sorted(self.products)

    def __contains__(self, name: object) -> bool:
        return name in self.products

    def __len__(self) -> int:
        return len(self.products)


__all__ = ["Build", "Release", "ProductIndex", "Catalog"]
