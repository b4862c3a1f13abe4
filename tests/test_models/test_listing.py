"""Tests for airbnb_analyzer.models.listing."""

from __future__ import annotations

import pytest
from pydantic import ValidationError

from airbnb_analyzer.models.listing import Listing, ListingStats, format_number


def test_listing_defaults() -> None:
    listing = Listing()
    assert listing.id == ""
    assert listing.host_id == ""
    assert listing.price == 0.0
    assert listing.extras == {}


def test_listing_is_frozen() -> None:
    listing = Listing(price=10)
    with pytest.raises(ValidationError):
        listing.price = 20


@pytest.mark.parametrize("field", ["price", "bedrooms"])
def test_negative_values_rejected(field) -> None:
    with pytest.raises(ValidationError):
        Listing(**{field: -1})


def test_to_export_dict_merges_extras() -> None:
    listing = Listing(id="1", bedrooms=2, extras={"room_type": "Entire home/apt"})
    row = listing.to_export_dict()
    assert row["room_type"] == "Entire home/apt"
    assert row["bedrooms"] == 2.0
    assert "extras" not in row


def test_stats_python_dump_keeps_float_keys() -> None:
    stats = ListingStats(total_listings=1, avg_price=5.0, avg_price_by_bedrooms={1.0: 5.0})
    assert stats.model_dump()["avg_price_by_bedrooms"] == {1.0: 5.0}


@pytest.mark.parametrize("value, expected", [(2.0, "2"), (0.0, "0"), (1.5, "1.5"), (3, "3")])
def test_format_number(value, expected) -> None:
    assert format_number(value) == expected
