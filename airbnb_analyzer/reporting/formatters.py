"""
ASCII terminal formatters for CLI commands.

All formatters accept analysis results and return plain multi-line strings
suitable for ``typer.echo()``.

No third-party dependencies (no ``rich``, no ``colorama``).
"""

from __future__ import annotations

import math
from collections.abc import Sequence
from typing import Optional

from airbnb_analyzer.analysis.best_value import value_ratio
from airbnb_analyzer.analysis.handler import RangeFilter
from airbnb_analyzer.models.listing import (
    HostRankingEntry,
    Listing,
    ListingStats,
    format_number,
)

_FIELD_LABELS = {
    "price": "price",
    "bedrooms": "bedrooms",
    "review_scores_rating": "review score",
}


# ── Filter summary ───────────────────────────────────────────────────────────


def format_bound(value: float) -> str:
    """Render a filter bound; infinite bounds print as ``inf``."""
    if math.isinf(value):
        return "inf" if value > 0 else "-inf"
    return format_number(value)


def format_filter_line(range_filter: RangeFilter) -> str:
    """One-line description of an applied filter, as echoed after filtering."""
    label = _FIELD_LABELS.get(range_filter.field, range_filter.field)
    return (
        f"Filtered by {label} between {format_bound(range_filter.minimum)} "
        f"and {format_bound(range_filter.maximum)}."
    )


def format_filter_summary(
    filters: Sequence[RangeFilter],
    current_count: int,
    original_count: int,
) -> str:
    """Summarise active filters and how many listings remain.

    Example::

        Listings: 412 of 3,818
          price           50 .. 200
          bedrooms         1 .. inf
    """
    lines = [f"Listings: {current_count:,} of {original_count:,}"]
    if not filters:
        lines.append("  (no filters applied)")
    for f in filters:
        label = _FIELD_LABELS.get(f.field, f.field)
        lines.append(
            f"  {label:<14} {format_bound(f.minimum):>6} .. {format_bound(f.maximum)}"
        )
    return "\n".join(lines)


# ── Statistics ────────────────────────────────────────────────────────────────


def format_stats(stats: ListingStats) -> str:
    """Format ``ListingStats`` with a per-bedroom table sorted by bedroom count."""
    lines: list[str] = []
    lines.append("== Statistics ==")
    lines.append(f"  Total listings: {stats.total_listings:,}")
    lines.append(f"  Average price:  ${stats.avg_price:,.2f}")

    if not stats.avg_price_by_bedrooms:
        lines.append("")
        lines.append("  (no listings to break down by bedrooms)")
        return "\n".join(lines)

    lines.append("")
    header = f"    {'Bedrooms':>8}  {'Avg price':>12}"
    lines.append(header)
    lines.append("    " + "-" * (len(header) - 4))
    for rooms in sorted(stats.avg_price_by_bedrooms):
        avg = stats.avg_price_by_bedrooms[rooms]
        lines.append(f"    {format_number(rooms):>8}  {'$' + format(avg, ',.2f'):>12}")
    return "\n".join(lines)


# ── Host ranking ──────────────────────────────────────────────────────────────


def format_host_ranking(ranking: Sequence[HostRankingEntry], top_n: int = 10) -> str:
    """Format the first ``top_n`` ranking entries, one numbered line per host.

    Example::

        == Host Ranking (Top 10) ==
        1. Jane (ID: 8534462), listings: 46
    """
    lines = [f"== Host Ranking (Top {top_n}) =="]
    if not ranking:
        lines.append("  (no hosts in the current listings)")
        return "\n".join(lines)
    for index, host in enumerate(ranking[:top_n], start=1):
        lines.append(
            f"{index}. {host.host_name} (ID: {host.host_id}), "
            f"listings: {host.listings_count}"
        )
    return "\n".join(lines)


# ── Best value ────────────────────────────────────────────────────────────────


def format_best_value(listing: Optional[Listing]) -> str:
    """Format the best-value listing, or an explanation when there is none."""
    if listing is None:
        return "No valid best-value listing found (maybe all have price=0?)."
    ratio = value_ratio(listing) or 0.0
    return "\n".join([
        "== Best Value Listing ==",
        f"ID: {listing.id}",
        f"Name: {listing.name}",
        f"Price: ${format_number(listing.price)}",
        f"Review Score: {format_number(listing.review_scores_rating)}",
        f"Ratio (score/price): {ratio:.2f}",
    ])
