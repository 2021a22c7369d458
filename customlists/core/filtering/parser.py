"""Parser for the custom filter list file.

One entry per line, only the first field of a line is used. Blank lines
and anything after ``#`` are ignored. Each entry is classified, in this
order, as:

1. country code: two uppercase letters (``US``)
2. autonomous system: ``AS`` followed by digits (``AS1234``)
3. IP address: any IPv4/IPv6 literal, stored in canonical form
4. domain: anything that is a valid FQDN, stored lower-case with a trailing dot

Lines matching none of these are counted as invalid and skipped; they do
not make the parse fail. Only an unreadable file does.
"""

from __future__ import annotations

import ipaddress
import logging
import re
from pathlib import Path

from customlists.models.filter_list import (
    CUSTOMLIST_DECODE_ERROR,
    CUSTOMLIST_FILE_NOT_FOUND,
    CUSTOMLIST_READ_ERROR,
    FilterListType,
    FilterSets,
    ParseResult,
)

logger = logging.getLogger(__name__)

_COUNTRY_CODE_PATTERN = re.compile(r"[A-Z]{2}")
_AUTONOMOUS_SYSTEM_PATTERN = re.compile(r"AS[0-9]+")
_DOMAIN_LABEL_PATTERN = re.compile(r"(?!-)[a-z0-9_-]{1,63}(?<!-)")

MAX_ASN = 2**32 - 1
MAX_DOMAIN_LENGTH = 253
MAX_INVALID_SAMPLES = 5


class FilterListParseError(Exception):
    """Raised when the filter list file cannot be read.

    Attributes:
        code: Error code constant (CUSTOMLIST_*)
        message: Human readable description
    """

    def __init__(self, code: str, message: str) -> None:
        super().__init__(message)
        self.code = code
        self.message = message


def canonical_ip(value: str | ipaddress.IPv4Address | ipaddress.IPv6Address) -> str:
    """Return the canonical textual form of an IP address.

    IPv4-mapped IPv6 addresses are reduced to their IPv4 form.

    Raises:
        ValueError: If value is not an IP address
    """
    ip = ipaddress.ip_address(value)
    if isinstance(ip, ipaddress.IPv6Address) and ip.ipv4_mapped is not None:
        ip = ip.ipv4_mapped
    return str(ip)


def is_valid_fqdn(domain: str) -> bool:
    """Check that a lower-case, dot-terminated domain is a valid FQDN."""
    if not domain.endswith("."):
        return False
    name = domain[:-1]
    if not name or len(name) > MAX_DOMAIN_LENGTH:
        return False
    return all(_DOMAIN_LABEL_PATTERN.fullmatch(label) for label in name.split("."))


def classify_entry(token: str) -> tuple[FilterListType, str | int] | None:
    """Classify a single list entry.

    Args:
        token: First field of a list line

    Returns:
        (type, normalized value) or None if the entry matches no category
    """
    if _COUNTRY_CODE_PATTERN.fullmatch(token):
        return FilterListType.COUNTRY, token

    if _AUTONOMOUS_SYSTEM_PATTERN.fullmatch(token):
        number = int(token[2:])
        if number > MAX_ASN:
            return None
        return FilterListType.ASN, number

    try:
        return FilterListType.IP, canonical_ip(token)
    except ValueError:
        pass

    domain = token.lower()
    if not domain.endswith("."):
        domain += "."
    if is_valid_fqdn(domain):
        return FilterListType.DOMAIN, domain

    return None


def parse_file(file_path: str | Path) -> ParseResult:
    """Parse a filter list file into a new, immutable set bundle.

    Args:
        file_path: Path to the list file

    Returns:
        ParseResult with the classified sets and line statistics

    Raises:
        FilterListParseError: If the file cannot be opened, read or decoded
    """
    path = Path(file_path)

    ips: set[str] = set()
    domains: set[str] = set()
    asns: set[int] = set()
    countries: set[str] = set()
    targets = {
        FilterListType.IP: ips,
        FilterListType.DOMAIN: domains,
        FilterListType.ASN: asns,
        FilterListType.COUNTRY: countries,
    }

    total_lines = 0
    invalid_lines = 0
    invalid_samples: list[str] = []

    try:
        with open(path, "r", encoding="utf-8") as f:
            for line in f:
                total_lines += 1

                fields = line.split("#", 1)[0].split()
                if not fields:
                    continue

                classified = classify_entry(fields[0])
                if classified is None:
                    invalid_lines += 1
                    if len(invalid_samples) < MAX_INVALID_SAMPLES:
                        invalid_samples.append(fields[0])
                    continue

                entry_type, value = classified
                targets[entry_type].add(value)

    except FileNotFoundError as e:
        raise FilterListParseError(
            CUSTOMLIST_FILE_NOT_FOUND, f"File not found: {path}"
        ) from e
    except UnicodeDecodeError as e:
        raise FilterListParseError(
            CUSTOMLIST_DECODE_ERROR, f"File is not valid UTF-8: {path} ({e.reason})"
        ) from e
    except OSError as e:
        raise FilterListParseError(
            CUSTOMLIST_READ_ERROR, f"Failed to read {path}: {e}"
        ) from e

    if invalid_lines:
        logger.warning(
            f"Invalid entries skipped (file={path.name}, invalid={invalid_lines}, "
            f"total_lines={total_lines}, samples={invalid_samples})"
        )

    sets = FilterSets(
        ips=frozenset(ips),
        domains=frozenset(domains),
        asns=frozenset(asns),
        countries=frozenset(countries),
    )
    logger.debug(
        f"Parsed {path.name} (entries={sets.total_entries}, lines={total_lines})"
    )
    return ParseResult(
        sets=sets,
        total_lines=total_lines,
        invalid_lines=invalid_lines,
        invalid_samples=invalid_samples,
    )
