"""
Shared pytest fixtures for the Airbnb listings analyzer test suite.

Provides:
  - ``make_listing``: factory for ``Listing`` objects with sensible defaults.
  - ``sample_listings``: a small mixed snapshot (several hosts, one listing
    without a host, one free listing).
  - ``listings_csv``: the same data written as an Inside Airbnb style CSV.
"""

from __future__ import annotations

from pathlib import Path
from typing import Callable

import pytest

from airbnb_analyzer.models.listing import Listing


# ── Listing factories ─────────────────────────────────────────────────────────

@pytest.fixture
def make_listing() -> Callable[..., Listing]:
    """Return a factory building ``Listing`` objects; ids auto-increment."""
    counter = {"n": 0}

    def _make(**kwargs) -> Listing:
        counter["n"] += 1
        kwargs.setdefault("id", str(counter["n"]))
        kwargs.setdefault("name", f"Listing {counter['n']}")
        return Listing(**kwargs)

    return _make


@pytest.fixture
def sample_listings(make_listing) -> list[Listing]:
    """Six listings across hosts A, B, C plus one hostless listing."""
    return [
        make_listing(host_id="A", host_name="Alice", bedrooms=1, price=100, review_scores_rating=95),
        make_listing(host_id="A", host_name="Alice", bedrooms=2, price=250, review_scores_rating=90),
        make_listing(host_id="B", host_name="Bob", bedrooms=1, price=60, review_scores_rating=80),
        make_listing(host_id="A", host_name="Alice", bedrooms=3, price=400, review_scores_rating=99),
        make_listing(host_id="", host_name="", bedrooms=0, price=0, review_scores_rating=70),
        make_listing(host_id="C", host_name="Carol", bedrooms=2, price=150, review_scores_rating=85),
    ]


# ── CSV fixtures ──────────────────────────────────────────────────────────────

LISTINGS_CSV = (
    "id,name,host_id,host_name,host_listings_count,neighbourhood,bedrooms,price,review_scores_rating\n"
    '1,"Sunny loft, near beach",A,Alice,3,Venice,1,$100.00,95\n'
    "2,Garden house,A,Alice,3,Venice,2,$250.00,90\n"
    "3,Tiny room,B,Bob,1,Downtown,1,$60.00,80\n"
    '4,"Big ""family"" home",A,Alice,3,Hills,3,"$1,400.00",99\n'
    "5,Mystery,,,,Nowhere,,,\n"
    "6,Studio,C,Carol,1,Downtown,2,$150.00,85\n"
)


@pytest.fixture
def listings_csv(tmp_path: Path) -> Path:
    """Write ``LISTINGS_CSV`` to a temp file and return its path."""
    p = tmp_path / "listings.csv"
    p.write_text(LISTINGS_CSV, encoding="utf-8")
    return p


@pytest.fixture
def listings_csv_text() -> str:
    """Raw ``LISTINGS_CSV`` text (for gzip or custom writes)."""
    return LISTINGS_CSV
