"""
Listing and analysis result models.

``Listing`` is one decoded row of an Airbnb ``listings.csv`` export. The
handful of columns the analysis needs are typed fields; every other column is
kept verbatim in ``extras`` so exports round-trip the full source row.

All models are frozen (immutable) after construction. Filtering produces new
snapshots of the same ``Listing`` objects and never edits a record in place.

Result models serialize with the camelCase keys used by earlier JSON exports
(``totalListings``, ``avgPrice``, ``avgPriceByBedrooms``, ``listingsCount``)
when dumped with ``by_alias=True``.
"""

from __future__ import annotations

from typing import Any

from pydantic import BaseModel, ConfigDict, Field, field_serializer, field_validator

# Typed columns decoded from the CSV; everything else lands in ``extras``.
LISTING_FIELDS = (
    "id",
    "name",
    "host_id",
    "host_name",
    "host_listings_count",
    "bedrooms",
    "price",
    "review_scores_rating",
)


class Listing(BaseModel):
    """A single Airbnb listing.

    Attributes:
        id: Listing identifier, verbatim from the source.
        name: Listing title.
        host_id: Host identifier; empty string when the source has none.
        host_name: Host display name.
        host_listings_count: Host's total listing count as reported by the
            source. Informational only; rankings count rows instead.
        bedrooms: Bedroom count (may be fractional in some exports).
        price: Nightly price with currency symbols and separators removed.
        review_scores_rating: Review score, 0–100 or 0–5 depending on export.
        extras: Every other source column, verbatim.
    """

    model_config = ConfigDict(frozen=True)

    id: str = ""
    name: str = ""
    host_id: str = ""
    host_name: str = ""
    host_listings_count: int = 0
    bedrooms: float = 0.0
    price: float = 0.0
    review_scores_rating: float = 0.0
    extras: dict[str, str] = Field(default_factory=dict)

    @field_validator("bedrooms", "price")
    @classmethod
    def validate_non_negative(cls, v: float) -> float:
        if v < 0:
            raise ValueError("bedrooms and price must be non-negative.")
        return v

    def to_export_dict(self) -> dict[str, Any]:
        """Return the full source row with typed fields in place of raw text."""
        row: dict[str, Any] = dict(self.extras)
        row.update(self.model_dump(exclude={"extras"}))
        return row


class ListingStats(BaseModel):
    """Aggregate statistics over a listing snapshot.

    Attributes:
        total_listings: Number of listings in the snapshot.
        avg_price: Mean price, or 0.0 for an empty snapshot.
        avg_price_by_bedrooms: Bedroom count → mean price of listings with
            exactly that bedroom count, in first-seen order.
    """

    model_config = ConfigDict(frozen=True)

    total_listings: int = Field(default=0, serialization_alias="totalListings")
    avg_price: float = Field(default=0.0, serialization_alias="avgPrice")
    avg_price_by_bedrooms: dict[float, float] = Field(
        default_factory=dict, serialization_alias="avgPriceByBedrooms"
    )

    @field_serializer("avg_price_by_bedrooms", when_used="json")
    def serialize_bedroom_keys(self, v: dict[float, float]) -> dict[str, float]:
        return {format_number(k): avg for k, avg in v.items()}


class HostRankingEntry(BaseModel):
    """One row of the host ranking.

    Attributes:
        host_id: Host identifier (never empty).
        host_name: Display name from the first listing seen for this host.
        listings_count: Listings owned by this host in the ranked snapshot.
    """

    model_config = ConfigDict(frozen=True)

    host_id: str
    host_name: str = ""
    listings_count: int = Field(default=0, serialization_alias="listingsCount")


def format_number(value: float) -> str:
    """Render a number without a trailing ``.0`` when it is whole (``2.0`` → ``"2"``)."""
    return str(int(value)) if float(value).is_integer() else str(value)
