"""Data models for the release catalog."""

from collections.abc import Mapping
from dataclasses import dataclass, field
from types import MappingProxyType
from typing import Any

from src.config_manager import DEFAULT_EDITIONS, DEFAULT_PACKAGE_NAME, EditionConfig
from src.utils import infer_bits, parse_version, readable_file_size

RECORD_FIELDS = ("version", "archname", "edition", "sortable", "links")


@dataclass(frozen=True)
class EditionInfo:
    """One downloadable artifact of a release."""

    url: str | None = None
    sha256: str | None = None
    size: int | None = None

    @classmethod
    def from_metadata(cls, metadata: Any) -> "EditionInfo":
        """Create EditionInfo from an edition entry of the releases JSON."""
        if not isinstance(metadata, dict):
            return cls()
        return cls(
            url=metadata.get("url") or None,
            sha256=metadata.get("sha256"),
            size=metadata.get("size"),
        )


@dataclass(frozen=True)
class Sortable:
    """Numeric fields used to filter and rank releases."""

    bits: int
    major: int
    minor: int
    patch: int
    build: int

    @property
    def version_tuple(self) -> tuple[int, int, int, int]:
        return (self.major, self.minor, self.patch, self.build)

    @classmethod
    def from_release(cls, version: str, archname: str) -> "Sortable":
        major, minor, patch, build = parse_version(version)
        return cls(
            bits=infer_bits(archname),
            major=major,
            minor=minor,
            patch=patch,
            build=build,
        )


@dataclass(frozen=True)
class DownloadLink:
    """A presentation-ready download for one edition of a release."""

    edition: str
    url: str
    display_name: str
    short_name: str
    hash: str | None = None
    size: int | None = None

    @property
    def readable_size(self) -> str:
        return readable_file_size(self.size or 0)


def build_links(
    version: str,
    edition: Mapping[str, EditionInfo],
    editions: tuple[EditionConfig, ...] = DEFAULT_EDITIONS,
    package_name: str = DEFAULT_PACKAGE_NAME,
) -> tuple[DownloadLink, ...]:
    """Build download links in edition table order.

    Editions missing from the release, or present without a URL, are skipped.
    """
    links = []
    for config in editions:
        info = edition.get(config.key)
        if info is None or not info.url:
            continue
        links.append(
            DownloadLink(
                edition=config.key,
                url=info.url,
                display_name=config.display_name(package_name, version),
                short_name=config.short_name(version),
                hash=info.sha256,
                size=info.size,
            )
        )
    return tuple(links)


@dataclass(frozen=True)
class ReleaseRecord:
    """A published release with its derived sortable fields and links."""

    version: str
    archname: str
    edition: Mapping[str, EditionInfo] = field(hash=False)
    sortable: Sortable
    links: tuple[DownloadLink, ...]
    extra: Mapping[str, Any] = field(
        default_factory=lambda: MappingProxyType({}), hash=False
    )

    @property
    def bits(self) -> int:
        return self.sortable.bits

    @classmethod
    def from_metadata(
        cls,
        metadata: dict[str, Any],
        editions: tuple[EditionConfig, ...] = DEFAULT_EDITIONS,
        package_name: str = DEFAULT_PACKAGE_NAME,
    ) -> "ReleaseRecord":
        """Create a ReleaseRecord from one element of the releases JSON.

        Args:
            metadata: Raw release object
            editions: Edition naming table, in link order
            package_name: Package name used in link display names

        Returns:
            ReleaseRecord with ``sortable`` and ``links`` computed

        Raises:
            KeyError: If the release has no version
            ValueError: If the edition field is not an object
        """
        version = str(metadata["version"])
        archname = str(metadata.get("archname") or "")

        raw_edition = metadata.get("edition") or {}
        if not isinstance(raw_edition, dict):
            raise ValueError(f"Edition of release {version} is not an object")
        edition = {
            key: EditionInfo.from_metadata(value) for key, value in raw_edition.items()
        }

        return cls(
            version=version,
            archname=archname,
            edition=MappingProxyType(edition),
            sortable=Sortable.from_release(version, archname),
            links=build_links(version, edition, editions, package_name),
            extra=MappingProxyType(
                {k: v for k, v in metadata.items() if k not in RECORD_FIELDS}
            ),
        )
