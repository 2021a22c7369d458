"""In-memory store of the custom filter list.

Holds a single immutable FilterSets snapshot together with its statistics
and the reload bookkeeping. Lookups share a read lock; a reload only
takes the write lock to swap the prepared snapshot in, so a lookup sees
either the old bundle or the new one, never a mix.
"""

from __future__ import annotations

import ipaddress
import logging
import threading
from contextlib import contextmanager
from datetime import datetime
from typing import Iterator

from customlists.core.filtering.domains import split_domain
from customlists.core.filtering.parser import canonical_ip
from customlists.models.filter_list import FilterListStats, FilterSets, ReloadState

logger = logging.getLogger(__name__)


class ReadWriteLock:
    """Many readers or one writer, writers preferred.

    Waiting writers block new readers so a steady lookup load cannot
    starve a reload.
    """

    def __init__(self) -> None:
        self._cond = threading.Condition(threading.Lock())
        self._readers = 0
        self._writer = False
        self._writers_waiting = 0

    @contextmanager
    def read_locked(self) -> Iterator[None]:
        with self._cond:
            while self._writer or self._writers_waiting:
                self._cond.wait()
            self._readers += 1
        try:
            yield
        finally:
            with self._cond:
                self._readers -= 1
                if self._readers == 0:
                    self._cond.notify_all()

    @contextmanager
    def write_locked(self) -> Iterator[None]:
        with self._cond:
            self._writers_waiting += 1
            try:
                while self._writer or self._readers:
                    self._cond.wait()
            finally:
                self._writers_waiting -= 1
            self._writer = True
        try:
            yield
        finally:
            with self._cond:
                self._writer = False
                self._cond.notify_all()


class FilterListStore:
    """Four lookup sets of the custom filter list, swapped atomically."""

    def __init__(self) -> None:
        self._lock = ReadWriteLock()
        self._sets = FilterSets.empty()
        self._stats = FilterListStats()
        self._state = ReloadState()
        logger.debug("FilterListStore initialized")

    def lookup_ip(self, ip: str | ipaddress.IPv4Address | ipaddress.IPv6Address) -> bool:
        """Check if an IP address is in the custom filter list.

        Args:
            ip: IP address in canonical text form, or an ipaddress object

        Returns:
            True if the address is listed
        """
        if not isinstance(ip, str):
            ip = canonical_ip(ip)
        with self._lock.read_locked():
            return ip in self._sets.ips

    def lookup_domain(self, domain: str, match_subdomains: bool) -> tuple[bool, str]:
        """Check if a domain is in the custom filter list.

        Args:
            domain: Fully qualified domain (trailing dot, as stored)
            match_subdomains: Also match when a parent domain, down to the
                registrable domain, is listed

        Returns:
            (True, matched entry) on hit, (False, "") otherwise
        """
        if match_subdomains:
            candidates = split_domain(domain)
            with self._lock.read_locked():
                domains = self._sets.domains
                for candidate in candidates:
                    if candidate in domains:
                        return True, candidate
            return False, ""

        with self._lock.read_locked():
            if domain in self._sets.domains:
                return True, domain
        return False, ""

    def lookup_asn(self, number: int) -> bool:
        """Check if an autonomous system number is in the custom filter list."""
        with self._lock.read_locked():
            return number in self._sets.asns

    def lookup_country(self, country_code: str) -> bool:
        """Check if a country code is in the custom filter list.

        Codes are matched as given: callers pass uppercase two-letter codes.
        """
        with self._lock.read_locked():
            return country_code in self._sets.countries

    def reload(
        self,
        sets: FilterSets,
        file_path: str | None = None,
        modified_ns: int | None = None,
        stats: FilterListStats | None = None,
    ) -> None:
        """Replace all four sets at once.

        Args:
            sets: Fully built snapshot to publish
            file_path: Source file to record (kept unchanged if None)
            modified_ns: Modification time of the source file
            stats: Statistics of the new snapshot
        """
        if stats is None:
            stats = FilterListStats(
                ips_count=len(sets.ips),
                domains_count=len(sets.domains),
                asns_count=len(sets.asns),
                countries_count=len(sets.countries),
                file_path=file_path,
                loaded_at=datetime.now(),
            )

        with self._lock.write_locked():
            self._sets = sets
            self._stats = stats
            if file_path is not None:
                self._state = ReloadState(
                    file_path=file_path,
                    modified_ns=modified_ns,
                    next_check=self._state.next_check,
                )

        logger.info(
            f"Custom filter list reloaded (ips={stats.ips_count}, "
            f"domains={stats.domains_count}, asns={stats.asns_count}, "
            f"countries={stats.countries_count})"
        )

    def set_next_check(self, when: datetime | None) -> None:
        """Record when the next periodic check will run."""
        with self._lock.write_locked():
            self._state = ReloadState(
                file_path=self._state.file_path,
                modified_ns=self._state.modified_ns,
                next_check=when,
            )

    def snapshot(self) -> FilterSets:
        """Return the current set bundle."""
        with self._lock.read_locked():
            return self._sets

    @property
    def state(self) -> ReloadState:
        """Bookkeeping of the last successful reload."""
        with self._lock.read_locked():
            return self._state

    @property
    def stats(self) -> FilterListStats:
        """Statistics of the current snapshot."""
        with self._lock.read_locked():
            return self._stats

    def get_active_lists(self) -> dict[str, list]:
        """Return the active entries by type.

        Returns:
            Dictionary with one sorted list per type
        """
        sets = self.snapshot()
        return {
            "ips": sorted(sets.ips),
            "domains": sorted(sets.domains),
            "asns": sorted(sets.asns),
            "countries": sorted(sets.countries),
        }
