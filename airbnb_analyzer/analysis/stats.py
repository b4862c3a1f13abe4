"""
Listing statistics: count, overall average price, average price per bedroom count.

Averages are computed once the full pass is done (sum / count per group), so
the result does not depend on the order the listings arrive in beyond float
summation order.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass

from airbnb_analyzer.models.listing import Listing, ListingStats


@dataclass
class _PriceAccumulator:
    total_price: float = 0.0
    count: int = 0

    def add(self, price: float) -> None:
        self.total_price += price
        self.count += 1

    @property
    def mean(self) -> float:
        return self.total_price / self.count if self.count else 0.0


def compute_stats(listings: Iterable[Listing]) -> ListingStats:
    """Compute aggregate statistics over ``listings``.

    Args:
        listings: Listing snapshot (may be empty).

    Returns:
        ``ListingStats``; an empty snapshot gives count 0, average 0.0 and an
        empty per-bedroom mapping.
    """
    overall = _PriceAccumulator()
    by_bedrooms: dict[float, _PriceAccumulator] = {}

    for listing in listings:
        overall.add(listing.price)
        acc = by_bedrooms.get(listing.bedrooms)
        if acc is None:
            acc = by_bedrooms[listing.bedrooms] = _PriceAccumulator()
        acc.add(listing.price)

    if overall.count == 0:
        return ListingStats(total_listings=0, avg_price=0.0, avg_price_by_bedrooms={})

    return ListingStats(
        total_listings=overall.count,
        avg_price=overall.mean,
        avg_price_by_bedrooms={rooms: acc.mean for rooms, acc in by_bedrooms.items()},
    )
