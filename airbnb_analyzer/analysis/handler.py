"""
ListingDataHandler — chainable range filters over an in-memory listing snapshot.

The handler keeps two snapshots:

  - ``original`` — the listings as loaded; never changes.
  - ``current``  — the result of the latest filter or reset.

Each filter narrows ``current`` to the listings whose field lies in a closed
``[min, max]`` range and returns the handler, so calls chain::

    handler = ListingDataHandler.from_csv(Path("listings.csv.gz"))
    stats = (
        handler.filter_by_price(50, 200)
        .filter_by_bedrooms(1, 2)
        .compute_stats()
    )
    handler.reset()

Filters applied in sequence intersect; an inverted range simply yields an
empty snapshot. The compute methods read ``current`` and never modify it.

One handler per session; the handler is not safe for concurrent mutation.
"""

from __future__ import annotations

import logging
from dataclasses import dataclass
from pathlib import Path
from typing import Any, Iterable, Optional

from airbnb_analyzer.analysis.best_value import compute_best_value
from airbnb_analyzer.analysis.ranking import compute_host_ranking
from airbnb_analyzer.analysis.stats import compute_stats
from airbnb_analyzer.ingestion.listings_csv import load_listings
from airbnb_analyzer.models.listing import HostRankingEntry, Listing, ListingStats
from airbnb_analyzer.reporting.export import export_to_json

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class RangeFilter:
    """A closed-range filter applied to the current snapshot.

    Attributes:
        field:   Listing attribute name (``"price"``, ``"bedrooms"``,
                 ``"review_scores_rating"``).
        minimum: Inclusive lower bound.
        maximum: Inclusive upper bound (may be ``inf``).
    """

    field: str
    minimum: float
    maximum: float

    def matches(self, listing: Listing) -> bool:
        value = getattr(listing, self.field)
        return self.minimum <= value <= self.maximum


class ListingDataHandler:
    """Holds the original and filtered listing snapshots.

    Args:
        listings: Decoded listings; copied, so later changes to the caller's
            sequence do not leak in.
    """

    def __init__(self, listings: Iterable[Listing]) -> None:
        self._original: tuple[Listing, ...] = tuple(listings)
        self._current: list[Listing] = list(self._original)
        self._applied: list[RangeFilter] = []

    @classmethod
    def from_csv(cls, path: Path) -> "ListingDataHandler":
        """Load ``path`` with :func:`load_listings` and wrap the result.

        Raises:
            FileNotFoundError / OSError / ValueError: Propagated from the
                decoder; no handler is created.
        """
        return cls(load_listings(path))

    # ── Snapshots ─────────────────────────────────────────────────────────────

    @property
    def original(self) -> tuple[Listing, ...]:
        return self._original

    @property
    def current(self) -> tuple[Listing, ...]:
        return tuple(self._current)

    @property
    def applied_filters(self) -> tuple[RangeFilter, ...]:
        """Filters applied since load or the last ``reset()``, in order."""
        return tuple(self._applied)

    def __len__(self) -> int:
        return len(self._current)

    # ── Filters ───────────────────────────────────────────────────────────────

    def filter_by_price(self, min_price: float, max_price: float) -> "ListingDataHandler":
        """Keep listings with ``min_price <= price <= max_price``."""
        return self._apply(RangeFilter("price", min_price, max_price))

    def filter_by_bedrooms(self, min_rooms: float, max_rooms: float) -> "ListingDataHandler":
        """Keep listings with ``min_rooms <= bedrooms <= max_rooms``."""
        return self._apply(RangeFilter("bedrooms", min_rooms, max_rooms))

    def filter_by_review_score(
        self, min_score: float, max_score: float
    ) -> "ListingDataHandler":
        """Keep listings with ``min_score <= review_scores_rating <= max_score``."""
        return self._apply(RangeFilter("review_scores_rating", min_score, max_score))

    def reset(self) -> "ListingDataHandler":
        """Restore ``current`` to a fresh copy of ``original``."""
        self._current = list(self._original)
        self._applied = []
        logger.debug("Reset to %d original listings", len(self._current))
        return self

    # ── Computations ──────────────────────────────────────────────────────────

    def compute_stats(self) -> ListingStats:
        return compute_stats(self._current)

    def compute_host_ranking(self) -> list[HostRankingEntry]:
        return compute_host_ranking(self._current)

    def compute_best_value(self) -> Optional[Listing]:
        return compute_best_value(self._current)

    # ── Export ────────────────────────────────────────────────────────────────

    def export_results(self, path: Path, data: Any = None) -> Path:
        """Write ``data`` (default: the current snapshot) as indented JSON.

        Raises:
            OSError: If ``path`` cannot be written.
        """
        payload = self.current if data is None else data
        written = export_to_json(payload, Path(path))
        logger.info("Exported results to %s", written)
        return written

    # ── Private helpers ───────────────────────────────────────────────────────

    def _apply(self, range_filter: RangeFilter) -> "ListingDataHandler":
        before = len(self._current)
        self._current = [
            listing for listing in self._current if range_filter.matches(listing)
        ]
        self._applied.append(range_filter)
        logger.debug(
            "Filter %s in [%s, %s]: %d -> %d listings",
            range_filter.field, range_filter.minimum, range_filter.maximum,
            before, len(self._current),
        )
        return self

