"""Public-suffix aware domain decomposition.

Turns a domain into the ordered list of candidates tested by subdomain
matching, from the full name down to the registrable domain:

    a.b.example.co.uk -> a.b.example.co.uk., b.example.co.uk., example.co.uk.

Bare public suffixes (``co.uk``) are never broken up further.
"""

from __future__ import annotations

from functools import lru_cache

import tldextract

# Bundled Public Suffix List snapshot only: lookups must never hit the network.
_extractor = tldextract.TLDExtract(
    cache_dir=None,
    suffix_list_urls=(),
    fallback_to_snapshot=True,
    include_psl_private_domains=True,
)


@lru_cache(maxsize=4096)
def public_suffix(domain: str) -> str:
    """Return the public suffix of a domain (e.g. ``com``, ``co.uk``).

    Domains that match no rule fall back to their last label, like the
    implicit ``*`` rule of the Public Suffix List.

    Args:
        domain: Domain without leading or trailing dots

    Returns:
        Public suffix, or "" for an empty domain
    """
    if not domain:
        return ""

    suffix = _extractor(domain).suffix
    if not suffix:
        suffix = domain.rsplit(".", 1)[-1]
    return suffix


def split_domain(domain: str) -> list[str]:
    """Build the candidate hierarchy of a domain, most specific first.

    Args:
        domain: Domain name, with or without trailing dot

    Returns:
        Candidates ending with a single dot, from the full name down to the
        registrable domain. A bare public suffix is returned unchanged as
        the only candidate.
    """
    domain = domain.strip(".")
    suffix = public_suffix(domain)
    if suffix == domain:
        return [domain]

    without_suffix = domain[: len(domain) - len(suffix)].strip(".")
    labels = [label for label in without_suffix.split(".") if label]

    candidates = []
    for idx in range(len(labels)):
        candidate = ".".join(labels[idx:]) + "." + suffix
        if not candidate.endswith("."):
            candidate += "."
        candidates.append(candidate)
    return candidates
