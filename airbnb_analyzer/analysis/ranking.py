"""
Host ranking: how many listings each host owns in a snapshot.

Hosts are keyed by ``host_id``; listings without one are left out entirely
(no "unknown host" bucket). The display name comes from the first listing
seen for a host. Entries are sorted by count descending with a stable sort,
so hosts with equal counts keep the order in which they first appeared.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from airbnb_analyzer.models.listing import HostRankingEntry, Listing


@dataclass
class _HostTally:
    host_id: str
    host_name: str
    listings_count: int = 0


def compute_host_ranking(listings: Iterable[Listing]) -> list[HostRankingEntry]:
    """Rank hosts by number of listings in ``listings``.

    Args:
        listings: Listing snapshot (may be empty).

    Returns:
        ``HostRankingEntry`` list, most listings first.
    """
    tallies: dict[str, _HostTally] = {}
    for listing in listings:
        if not listing.host_id:
            continue
        tally = tallies.get(listing.host_id)
        if tally is None:
            tally = tallies[listing.host_id] = _HostTally(
                host_id=listing.host_id, host_name=listing.host_name
            )
        tally.listings_count += 1

    ranked = sorted(tallies.values(), key=lambda t: t.listings_count, reverse=True)
    return [
        HostRankingEntry(
            host_id=t.host_id,
            host_name=t.host_name,
            listings_count=t.listings_count,
        )
        for t in ranked
    ]


def top_n_hosts(ranking: list[HostRankingEntry], n: int = 10) -> list[HostRankingEntry]:
    """Return the first ``n`` entries of an already sorted ranking."""
    return ranking[:max(n, 0)]
