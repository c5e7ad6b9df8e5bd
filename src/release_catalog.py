"""Release catalog with hierarchical version queries."""

import logging
from collections.abc import Iterable, Iterator
from typing import Any

from src.config_manager import (
    DEFAULT_EDITIONS,
    DEFAULT_PACKAGE_NAME,
    CatalogConfig,
    EditionConfig,
)
from src.errors import NotFoundError, ParseError
from src.metadata_client import MetadataClient
from src.models import ReleaseRecord
from src.utils import BIT_WIDTHS, normalize_bits

logger = logging.getLogger(__name__)

ALL_BITS = 0
SIXTY_FOUR_BIT_INT_MARKER = "64int"


def _distinct_sorted(values: Iterable[int]) -> list[int]:
    return sorted(set(values))


class ReleaseCatalog:
    """An immutable, ordered set of releases answering version queries.

    Every query takes a ``bits`` argument. 32 or 64 restricts the query to
    releases of that bit-width; anything else (the default 0, "all", None)
    leaves it unfiltered.

    Use :meth:`build` to load a catalog from a releases file, or
    :meth:`from_records` for already-parsed release objects.
    """

    def __init__(self, releases: Iterable[ReleaseRecord] = ()):
        self._releases = tuple(releases)
        self._bits = BIT_WIDTHS

        arches: list[str] = []
        editions: list[str] = []
        for release in self._releases:
            if release.archname not in arches:
                arches.append(release.archname)
            for key in release.edition:
                if key not in editions:
                    editions.append(key)

        self._arches = tuple(arches)
        self._editions = tuple(editions)

        logger.info(
            f"Initialized ReleaseCatalog with {len(self._releases)} releases, "
            f"{len(self._arches)} architectures"
        )

    @classmethod
    def from_records(
        cls,
        records: Iterable[dict[str, Any]],
        editions: tuple[EditionConfig, ...] = DEFAULT_EDITIONS,
        package_name: str = DEFAULT_PACKAGE_NAME,
    ) -> "ReleaseCatalog":
        """Annotate raw release objects and build a catalog from them.

        Raises:
            ParseError: If a release object is missing its version or has a
                malformed edition field
        """
        releases = []
        for index, record in enumerate(records):
            try:
                releases.append(
                    ReleaseRecord.from_metadata(
                        record, editions=editions, package_name=package_name
                    )
                )
            except (KeyError, ValueError, TypeError, AttributeError) as e:
                logger.error(f"Invalid release #{index}: {e}")
                raise ParseError(f"Invalid release #{index}: {e}") from e

            logger.debug(f"Annotated release {releases[-1].version} ({releases[-1].archname})")

        return cls(releases)

    @classmethod
    def build(
        cls,
        releases_uri: str | None = None,
        client: MetadataClient | None = None,
        config: CatalogConfig | None = None,
    ) -> "ReleaseCatalog":
        """Fetch a releases file and build a catalog from it.

        Args:
            releases_uri: URL or path of the releases file. Defaults to the
                configured ``releases_uri``.
            client: Client used to fetch the file
            config: Catalog configuration (package name, edition table)

        Raises:
            RetrievalError: If the file cannot be fetched
            ParseError: If the file is not a valid releases list
        """
        config = config or CatalogConfig()
        client = client or MetadataClient(
            timeout=config.timeout, max_retries=config.max_retries
        )
        releases_uri = releases_uri or config.releases_uri

        records = client.fetch_releases(releases_uri)
        return cls.from_records(
            records, editions=config.editions, package_name=config.package_name
        )

    def __len__(self) -> int:
        return len(self._releases)

    def __iter__(self) -> Iterator[ReleaseRecord]:
        return iter(self._releases)

    @property
    def releases(self) -> tuple[ReleaseRecord, ...]:
        return self._releases

    @property
    def arches(self) -> tuple[str, ...]:
        """Distinct architecture names in first-seen order."""
        return self._arches

    @property
    def editions(self) -> tuple[str, ...]:
        """Distinct edition keys in first-seen order."""
        return self._editions

    @property
    def bits(self) -> tuple[int, ...]:
        return self._bits

    def architecture_names(self, bits=ALL_BITS) -> list[str]:
        """Return all architecture names, sorted.

        ``bits`` is accepted for symmetry with the other queries but does not
        filter the result. Callers rely on always getting the full list.
        """
        return sorted(self._arches)

    # Record queries

    def releases_major(self, bits=ALL_BITS) -> list[ReleaseRecord]:
        """Return releases, restricted to one bit-width when ``bits`` is 32 or 64."""
        bits = normalize_bits(bits)
        if bits in self._bits:
            return [r for r in self._releases if r.sortable.bits == bits]
        return list(self._releases)

    def releases_minor(self, bits=ALL_BITS, major: int = 0) -> list[ReleaseRecord]:
        return [r for r in self.releases_major(bits) if r.sortable.major == major]

    def releases_patch(
        self, bits=ALL_BITS, major: int = 0, minor: int = 0
    ) -> list[ReleaseRecord]:
        return [r for r in self.releases_minor(bits, major) if r.sortable.minor == minor]

    def releases_build(
        self, bits=ALL_BITS, major: int = 0, minor: int = 0, patch: int = 0
    ) -> list[ReleaseRecord]:
        return [
            r for r in self.releases_patch(bits, major, minor) if r.sortable.patch == patch
        ]

    # Version number queries

    def version_numbers_major(self, bits=ALL_BITS) -> list[int]:
        """Distinct major versions, ascending."""
        return _distinct_sorted(r.sortable.major for r in self.releases_major(bits))

    def version_numbers_minor(self, bits=ALL_BITS, major: int = 0) -> list[int]:
        """Distinct minor versions of a major version, ascending."""
        return _distinct_sorted(
            r.sortable.minor for r in self.releases_minor(bits, major)
        )

    def version_numbers_patch(
        self, bits=ALL_BITS, major: int = 0, minor: int = 0
    ) -> list[int]:
        """Distinct patch versions of a major.minor version, ascending."""
        return _distinct_sorted(
            r.sortable.patch for r in self.releases_patch(bits, major, minor)
        )

    def version_numbers_build(
        self, bits=ALL_BITS, major: int = 0, minor: int = 0, patch: int = 0
    ) -> list[int]:
        """Distinct build numbers of a major.minor.patch version, ascending."""
        return _distinct_sorted(
            r.sortable.build for r in self.releases_build(bits, major, minor, patch)
        )

    def latest(self, bits=ALL_BITS) -> ReleaseRecord:
        """Return the latest release, preferring 64-bit on a tie.

        The version is resolved one level at a time: the highest major, then
        the highest minor within that major, and so on down to the build.
        When several releases share that version, the first 64-bit one (or one
        whose architecture name marks a 64-bit integer build) wins.

        Raises:
            NotFoundError: If no release matches the resolved version
        """
        majors = self.version_numbers_major(bits)
        major = majors[-1] if majors else 0
        minors = self.version_numbers_minor(bits, major)
        minor = minors[-1] if minors else 0
        patches = self.version_numbers_patch(bits, major, minor)
        patch = patches[-1] if patches else 0
        builds = self.version_numbers_build(bits, major, minor, patch)
        build = builds[-1] if builds else 0

        candidates = [
            r
            for r in self.releases_build(bits, major, minor, patch)
            if r.sortable.build == build
        ]
        if not candidates:
            logger.error(f"No release found for bits={bits!r}")
            raise NotFoundError(
                f"Could not find the latest release for bits={bits!r} "
                f"({len(self._releases)} releases in catalog)"
            )

        if len(candidates) == 1:
            return candidates[0]

        logger.debug(
            f"{len(candidates)} releases share version {major}.{minor}.{patch}.{build}"
        )
        for release in candidates:
            if release.sortable.bits == 64 or SIXTY_FOUR_BIT_INT_MARKER in release.archname:
                return release
        return candidates[0]
