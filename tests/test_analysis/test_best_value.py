"""Tests for airbnb_analyzer.analysis.best_value."""

from __future__ import annotations

import pytest

from airbnb_analyzer.analysis.best_value import compute_best_value, value_ratio
from airbnb_analyzer.models.listing import Listing


def test_highest_ratio_wins_and_zero_price_is_skipped(make_listing) -> None:
    listings = [
        make_listing(price=50, review_scores_rating=25),
        make_listing(price=0, review_scores_rating=10),
        make_listing(price=100, review_scores_rating=80),
    ]
    assert compute_best_value(listings) is listings[2]


def test_all_zero_prices_gives_none(make_listing) -> None:
    listings = [make_listing(price=0, review_scores_rating=99) for _ in range(3)]
    assert compute_best_value(listings) is None


def test_empty_gives_none() -> None:
    assert compute_best_value([]) is None


def test_zero_ratio_is_never_selected(make_listing) -> None:
    listings = [make_listing(price=10, review_scores_rating=0), make_listing(price=20)]
    assert compute_best_value(listings) is None


def test_negative_scores_are_never_selected(make_listing) -> None:
    assert compute_best_value([make_listing(price=10, review_scores_rating=-5)]) is None


def test_tie_keeps_first_listing(make_listing) -> None:
    listings = [
        make_listing(price=100, review_scores_rating=50),
        make_listing(price=200, review_scores_rating=100),
    ]
    assert compute_best_value(listings) is listings[0]


def test_value_ratio() -> None:
    assert value_ratio(Listing(price=40, review_scores_rating=90)) == pytest.approx(2.25)
    assert value_ratio(Listing(price=0, review_scores_rating=90)) is None
