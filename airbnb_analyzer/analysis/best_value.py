"""
Best-value selection: the listing with the highest review score per unit price.

Listings with a price of zero (or less) are never divided and never selected.
The running best ratio starts at 0, so a listing is only picked when its
ratio is strictly positive. Ties keep the earlier listing.
"""

from __future__ import annotations

from collections.abc import Iterable
from typing import Optional

from airbnb_analyzer.models.listing import Listing


def value_ratio(listing: Listing) -> Optional[float]:
    """Return ``review_scores_rating / price``, or ``None`` when price <= 0."""
    if listing.price <= 0:
        return None
    return listing.review_scores_rating / listing.price


def compute_best_value(listings: Iterable[Listing]) -> Optional[Listing]:
    """Find the first listing with the greatest score-to-price ratio.

    Args:
        listings: Listing snapshot (may be empty).

    Returns:
        The best listing, or ``None`` if no listing has a positive ratio.
    """
    best: Optional[Listing] = None
    best_ratio = 0.0
    for listing in listings:
        ratio = value_ratio(listing)
        if ratio is not None and ratio > best_ratio:
            best_ratio = ratio
            best = listing
    return best
