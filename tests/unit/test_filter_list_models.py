"""Unit tests for custom filter list models."""

from datetime import datetime

import pytest

from customlists.models.filter_list import (
    FilterListStats,
    FilterListType,
    FilterSets,
    ParseResult,
    ReloadState,
)


class TestFilterSets:
    """Tests for the FilterSets bundle."""

    def test_empty(self):
        sets = FilterSets.empty()
        assert sets.total_entries == 0
        assert sets.ips == frozenset()

    def test_total_entries(self):
        sets = FilterSets(
            ips=frozenset({"192.0.2.1"}),
            domains=frozenset({"a.example.", "b.example."}),
            asns=frozenset({1}),
            countries=frozenset(),
        )
        assert sets.total_entries == 4

    def test_frozen(self):
        sets = FilterSets.empty()
        with pytest.raises(AttributeError):
            sets.ips = frozenset({"192.0.2.1"})


class TestFilterListStats:
    """Tests for FilterListStats."""

    def test_from_parse_result(self):
        result = ParseResult(
            sets=FilterSets(ips=frozenset({"192.0.2.1"}), countries=frozenset({"US", "DE"})),
            total_lines=5,
            invalid_lines=1,
        )

        stats = FilterListStats.from_parse_result(result, "/tmp/list.txt")

        assert stats.ips_count == 1
        assert stats.countries_count == 2
        assert stats.invalid_lines == 1
        assert stats.file_path == "/tmp/list.txt"
        assert stats.loaded_at is not None

    def test_to_dict(self):
        stats = FilterListStats(
            ips_count=1,
            domains_count=2,
            asns_count=3,
            countries_count=4,
            file_path="/tmp/list.txt",
            loaded_at=datetime(2026, 1, 1, 12, 0, 0),
        )

        data = stats.to_dict()

        assert data["total_entries"] == 10
        assert data["loaded_at"] == "2026-01-01T12:00:00"
        assert data["file_path"] == "/tmp/list.txt"

    def test_to_dict_defaults(self):
        data = FilterListStats().to_dict()
        assert data["total_entries"] == 0
        assert data["loaded_at"] is None


class TestReloadState:
    """Tests for ReloadState."""

    def test_defaults(self):
        state = ReloadState()
        assert state.file_path == ""
        assert state.modified_ns is None
        assert state.next_check is None

    def test_to_dict(self):
        state = ReloadState("/tmp/list.txt", 42, datetime(2026, 1, 1, 12, 0, 0))
        assert state.to_dict() == {
            "file_path": "/tmp/list.txt",
            "modified_ns": 42,
            "next_check": "2026-01-01T12:00:00",
        }


class TestFilterListType:
    """Tests for FilterListType values."""

    def test_values(self):
        assert {t.value for t in FilterListType} == {"country", "asn", "ip", "domain"}
