"""Custom filter list data models.

Defines the immutable four-set bundle served to lookups, the statistics
reported after a reload and the reload bookkeeping state.
"""

from __future__ import annotations

from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum


class FilterListType(Enum):
    """Categories an entry of the custom filter list can belong to."""

    COUNTRY = "country"
    ASN = "asn"
    IP = "ip"
    DOMAIN = "domain"


@dataclass(frozen=True)
class FilterSets:
    """One consistent snapshot of the four lookup sets.

    A bundle is built completely before it is published and never
    mutated afterwards.

    Attributes:
        ips: Canonical textual IP addresses
        domains: Fully qualified domains (trailing dot)
        asns: Autonomous system numbers
        countries: Two-letter uppercase country codes
    """

    ips: frozenset[str] = frozenset()
    domains: frozenset[str] = frozenset()
    asns: frozenset[int] = frozenset()
    countries: frozenset[str] = frozenset()

    @classmethod
    def empty(cls) -> FilterSets:
        return cls()

    @property
    def total_entries(self) -> int:
        return len(self.ips) + len(self.domains) + len(self.asns) + len(self.countries)


@dataclass
class ParseResult:
    """Output of a successful parse of the filter list file."""

    sets: FilterSets
    total_lines: int = 0
    invalid_lines: int = 0
    invalid_samples: list[str] = field(default_factory=list)


@dataclass
class FilterListStats:
    """Statistics of the currently loaded filter list.

    Attributes:
        ips_count: Number of IP entries
        domains_count: Number of domain entries
        asns_count: Number of ASN entries
        countries_count: Number of country code entries
        file_path: File the entries were loaded from
        invalid_lines: Lines skipped because they matched no category
        loaded_at: When the snapshot was published
    """

    ips_count: int = 0
    domains_count: int = 0
    asns_count: int = 0
    countries_count: int = 0
    file_path: str | None = None
    invalid_lines: int = 0
    loaded_at: datetime | None = None

    @classmethod
    def from_parse_result(cls, result: ParseResult, file_path: str) -> FilterListStats:
        sets = result.sets
        return cls(
            ips_count=len(sets.ips),
            domains_count=len(sets.domains),
            asns_count=len(sets.asns),
            countries_count=len(sets.countries),
            file_path=file_path,
            invalid_lines=result.invalid_lines,
            loaded_at=datetime.now(),
        )

    @property
    def total_entries(self) -> int:
        return self.ips_count + self.domains_count + self.asns_count + self.countries_count

    def to_dict(self) -> dict[str, int | str | None]:
        """JSON serialization (snake_case)."""
        return {
            "ips_count": self.ips_count,
            "domains_count": self.domains_count,
            "asns_count": self.asns_count,
            "countries_count": self.countries_count,
            "total_entries": self.total_entries,
            "file_path": self.file_path,
            "invalid_lines": self.invalid_lines,
            "loaded_at": self.loaded_at.isoformat() if self.loaded_at else None,
        }


@dataclass(frozen=True)
class ReloadState:
    """Bookkeeping of the last successful reload.

    Attributes:
        file_path: Path of the last successfully parsed file ("" if none)
        modified_ns: Modification time recorded for that file, in nanoseconds
        next_check: When the next periodic check is scheduled
    """

    file_path: str = ""
    modified_ns: int | None = None
    next_check: datetime | None = None

    def to_dict(self) -> dict[str, str | int | None]:
        """JSON serialization (snake_case)."""
        return {
            "file_path": self.file_path,
            "modified_ns": self.modified_ns,
            "next_check": self.next_check.isoformat() if self.next_check else None,
        }


# Error code constants
CUSTOMLIST_FILE_NOT_FOUND = "CUSTOMLIST_FILE_NOT_FOUND"
CUSTOMLIST_READ_ERROR = "CUSTOMLIST_READ_ERROR"
CUSTOMLIST_DECODE_ERROR = "CUSTOMLIST_DECODE_ERROR"
CUSTOMLIST_NOT_INITIALIZED = "CUSTOMLIST_NOT_INITIALIZED"
CUSTOMLIST_INVALID_REQUEST = "CUSTOMLIST_INVALID_REQUEST"
