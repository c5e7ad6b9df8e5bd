"""Tests for release record annotation."""

import dataclasses

import pytest

from src.config_manager import EditionConfig
from src.models import DownloadLink, EditionInfo, ReleaseRecord, Sortable, build_links

FULL_RELEASE = {
    "version": "5.38.0.1",
    "date": "2023-09-03",
    "archname": "MSWin32-x64-multi-thread",
    "edition": {
        "zip": {
            "url": "https://example.com/strawberry-perl-5.38.0.1-64bit.zip",
            "sha256": "aaaa",
            "size": 150000000,
        },
        "msi": {
            "url": "https://example.com/strawberry-perl-5.38.0.1-64bit.msi",
            "sha256": "bbbb",
            "size": 160000000,
        },
        "pdl": {
            "url": "https://example.com/strawberry-perl-5.38.0.1-64bit-PDL.zip",
            "sha256": "cccc",
            "size": 400000000,
        },
        "portable": {
            "url": "https://example.com/strawberry-perl-5.38.0.1-64bit-portable.zip",
            "sha256": "dddd",
            "size": 170000000,
        },
    },
}


class TestSortable:
    def test_from_release_64_bit(self):
        sortable = Sortable.from_release("5.38.0.1", "MSWin32-x64-multi-thread")
        assert sortable == Sortable(bits=64, major=5, minor=38, patch=0, build=1)

    def test_from_release_32_bit_short_version(self):
        sortable = Sortable.from_release("5.12", "MSWin32-x86-multi-thread")
        assert sortable == Sortable(bits=32, major=5, minor=12, patch=0, build=0)

    def test_version_tuple(self):
        sortable = Sortable(bits=64, major=5, minor=38, patch=2, build=3)
        assert sortable.version_tuple == (5, 38, 2, 3)


class TestEditionInfo:
    def test_from_metadata(self):
        info = EditionInfo.from_metadata({"url": "u", "sha256": "h", "size": 10})
        assert info == EditionInfo(url="u", sha256="h", size=10)

    def test_empty_url_is_none(self):
        assert EditionInfo.from_metadata({"url": ""}).url is None

    def test_non_dict_entry(self):
        assert EditionInfo.from_metadata(None) == EditionInfo()


class TestReleaseRecord:
    def test_basic_fields(self):
        record = ReleaseRecord.from_metadata(FULL_RELEASE)
        assert record.version == "5.38.0.1"
        assert record.archname == "MSWin32-x64-multi-thread"
        assert record.bits == 64
        assert set(record.edition) == {"zip", "msi", "pdl", "portable"}

    def test_extra_fields_kept(self):
        record = ReleaseRecord.from_metadata(FULL_RELEASE)
        assert record.extra == {"date": "2023-09-03"}

    def test_links_in_fixed_edition_order(self):
        record = ReleaseRecord.from_metadata(FULL_RELEASE)
        assert [link.edition for link in record.links] == ["msi", "portable", "pdl", "zip"]

    def test_link_names(self):
        record = ReleaseRecord.from_metadata(FULL_RELEASE)
        names = [(link.display_name, link.short_name) for link in record.links]
        assert names == [
            ("strawberry-perl-5.38.0.1-64bit.msi", "5.38.0.1 MSI"),
            ("strawberry-perl-5.38.0.1-64bit-portable.zip", "5.38.0.1 Portable zip"),
            ("strawberry-perl-5.38.0.1-64bit-PDL.zip", "5.38.0.1 PDL zip"),
            ("strawberry-perl-5.38.0.1-64bit.zip", "5.38.0.1 zip"),
        ]

    def test_link_hash_and_size(self):
        record = ReleaseRecord.from_metadata(FULL_RELEASE)
        msi = record.links[0]
        assert msi.url == "https://example.com/strawberry-perl-5.38.0.1-64bit.msi"
        assert msi.hash == "bbbb"
        assert msi.size == 160000000

    def test_portable_only_release(self):
        record = ReleaseRecord.from_metadata(
            {
                "version": "5.36.1.1",
                "archname": "MSWin32-x64-multi-thread",
                "edition": {"portable": {"url": "https://example.com/p.zip", "size": 10}},
            }
        )
        assert len(record.links) == 1
        assert record.links[0].display_name == "strawberry-perl-5.36.1.1-64bit-portable.zip"

    def test_edition_without_url_skipped(self):
        record = ReleaseRecord.from_metadata(
            {
                "version": "5.36.1.1",
                "archname": "MSWin32-x64-multi-thread",
                "edition": {
                    "msi": {"sha256": "abc", "size": 10},
                    "zip": {"url": "https://example.com/z.zip"},
                },
            }
        )
        assert [link.edition for link in record.links] == ["zip"]
        assert "msi" in record.edition

    def test_unknown_edition_has_no_link(self):
        record = ReleaseRecord.from_metadata(
            {
                "version": "5.36.1.1",
                "archname": "MSWin32-x64-multi-thread",
                "edition": {"nightly": {"url": "https://example.com/n.zip"}},
            }
        )
        assert record.links == ()
        assert "nightly" in record.edition

    def test_missing_version_raises(self):
        with pytest.raises(KeyError):
            ReleaseRecord.from_metadata({"archname": "x64", "edition": {}})

    def test_edition_not_object_raises(self):
        with pytest.raises(ValueError):
            ReleaseRecord.from_metadata({"version": "5.1", "edition": ["msi"]})

    def test_missing_archname_and_edition(self):
        record = ReleaseRecord.from_metadata({"version": "5.10.0"})
        assert record.archname == ""
        assert record.bits == 32
        assert record.links == ()

    def test_record_is_frozen(self):
        record = ReleaseRecord.from_metadata(FULL_RELEASE)
        with pytest.raises(dataclasses.FrozenInstanceError):
            record.sortable = Sortable(bits=32, major=0, minor=0, patch=0, build=0)

    def test_edition_is_read_only(self):
        record = ReleaseRecord.from_metadata(FULL_RELEASE)
        with pytest.raises(TypeError):
            record.edition["msi"] = EditionInfo(url="https://example.com/other.msi")
        assert record.edition["msi"].sha256 == "bbbb"

    def test_extra_is_read_only(self):
        record = ReleaseRecord.from_metadata(FULL_RELEASE)
        with pytest.raises(TypeError):
            record.extra["date"] = "2024-01-01"

    def test_record_is_hashable(self):
        first = ReleaseRecord.from_metadata(FULL_RELEASE)
        second = ReleaseRecord.from_metadata(FULL_RELEASE)
        assert first == second
        assert hash(first) == hash(second)
        assert len({first, second}) == 1

    def test_source_dict_changes_do_not_leak(self):
        metadata = {"version": "5.36.1.1", "date": "2023-06-01", "edition": {}}
        record = ReleaseRecord.from_metadata(metadata)
        metadata["date"] = "changed"
        assert record.extra["date"] == "2023-06-01"

    def test_custom_package_name(self):
        record = ReleaseRecord.from_metadata(FULL_RELEASE, package_name="perl-dist")
        assert record.links[0].display_name == "perl-dist-5.38.0.1-64bit.msi"


class TestBuildLinks:
    def test_custom_edition_table_order(self):
        edition = {
            "msi": EditionInfo(url="https://example.com/a.msi"),
            "zip": EditionInfo(url="https://example.com/a.zip"),
        }
        table = (
            EditionConfig(key="zip", suffix=".zip", label="zip"),
            EditionConfig(key="msi", suffix=".msi", label="MSI"),
        )
        links = build_links("1.0", edition, editions=table, package_name="pkg")
        assert [link.display_name for link in links] == ["pkg-1.0.zip", "pkg-1.0.msi"]


class TestDownloadLink:
    def test_readable_size(self):
        link = DownloadLink(edition="zip", url="u", display_name="d", short_name="s", size=1536)
        assert link.readable_size == "1.5 KB"

    def test_readable_size_unknown(self):
        link = DownloadLink(edition="zip", url="u", display_name="d", short_name="s")
        assert link.readable_size == "0.0 B"
