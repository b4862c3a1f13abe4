"""
Tests for airbnb_analyzer.ingestion.listings_csv — listing CSV decoding.

Covers:
  - load_listings(): plain and gzip files, quoted fields, extras, blank lines,
    missing file, header-only and empty files
  - decode_listing_row(): defaults for missing / unparseable values
  - parse_price(), parse_float(), parse_int()
"""

from __future__ import annotations

import gzip
import logging
from pathlib import Path

import pytest

from airbnb_analyzer.ingestion.listings_csv import (
    decode_listing_row,
    load_listings,
    parse_float,
    parse_int,
    parse_price,
)
from airbnb_analyzer.models.listing import Listing


def _write(tmp_path: Path, content: str, name: str = "listings.csv") -> Path:
    p = tmp_path / name
    p.write_text(content, encoding="utf-8")
    return p


# ── load_listings — happy path ────────────────────────────────────────────────

class TestLoadListings:
    def test_returns_listings_in_file_order(self, listings_csv):
        listings = load_listings(listings_csv)
        assert all(isinstance(item, Listing) for item in listings)
        assert [item.id for item in listings] == ["1", "2", "3", "4", "5", "6"]

    def test_quoted_field_with_comma(self, listings_csv):
        assert load_listings(listings_csv)[0].name == "Sunny loft, near beach"

    def test_escaped_quotes(self, listings_csv):
        assert load_listings(listings_csv)[3].name == 'Big "family" home'

    def test_price_with_grouping_separator(self, listings_csv):
        assert load_listings(listings_csv)[3].price == 1400.0

    def test_typed_fields(self, listings_csv):
        first = load_listings(listings_csv)[0]
        assert first.host_id == "A"
        assert first.host_name == "Alice"
        assert first.host_listings_count == 3
        assert first.bedrooms == 1.0
        assert first.price == 100.0
        assert first.review_scores_rating == 95.0

    def test_other_columns_kept_in_extras(self, listings_csv):
        first = load_listings(listings_csv)[0]
        assert first.extras == {"neighbourhood": "Venice"}

    def test_missing_values_default(self, listings_csv):
        mystery = load_listings(listings_csv)[4]
        assert mystery.host_id == ""
        assert mystery.host_name == ""
        assert mystery.host_listings_count == 0
        assert mystery.bedrooms == 0.0
        assert mystery.price == 0.0
        assert mystery.review_scores_rating == 0.0

    def test_gzip_input(self, tmp_path, listings_csv_text):
        p = tmp_path / "listings.csv.gz"
        with gzip.open(p, "wt", encoding="utf-8", newline="") as f:
            f.write(listings_csv_text)
        listings = load_listings(p)
        assert len(listings) == 6
        assert listings[3].price == 1400.0

    def test_blank_lines_skipped(self, tmp_path):
        p = _write(tmp_path, "id,price\n1,$10\n\n2,$20\n")
        assert [item.price for item in load_listings(p)] == [10.0, 20.0]

    def test_whitespace_trimmed(self, tmp_path):
        p = _write(tmp_path, " id , host_id ,price\n 7 ,  H1 , $ 12.50 \n")
        listing = load_listings(p)[0]
        assert listing.id == "7"
        assert listing.host_id == "H1"
        assert listing.price == 12.5

    def test_embedded_newline_in_quoted_field(self, tmp_path):
        p = _write(tmp_path, 'id,name,price\n1,"line one\nline two",$5\n')
        listing = load_listings(p)[0]
        assert listing.name == "line one\nline two"
        assert listing.price == 5.0

    def test_short_row_fills_empty(self, tmp_path):
        p = _write(tmp_path, "id,name,price,bedrooms\n1,Only name\n")
        listing = load_listings(p)[0]
        assert listing.name == "Only name"
        assert listing.price == 0.0
        assert listing.bedrooms == 0.0

    def test_utf8_bom_header(self, tmp_path):
        p = tmp_path / "bom.csv"
        p.write_bytes("\ufeffid,price\n9,$3\n".encode("utf-8"))
        assert load_listings(p)[0].id == "9"


# ── load_listings — errors and edge cases ─────────────────────────────────────

class TestLoadListingsErrors:
    def test_missing_file_raises(self, tmp_path):
        with pytest.raises(FileNotFoundError):
            load_listings(tmp_path / "nope.csv")

    def test_empty_file_raises(self, tmp_path):
        p = _write(tmp_path, "")
        with pytest.raises(ValueError, match="no header"):
            load_listings(p)

    def test_header_only_returns_empty(self, tmp_path):
        p = _write(tmp_path, "id,name,price\n")
        assert load_listings(p) == []

    def test_corrupt_gzip_raises_oserror(self, tmp_path):
        p = tmp_path / "bad.csv.gz"
        p.write_bytes(b"not gzip at all")
        with pytest.raises(OSError):
            load_listings(p)

    def test_oversized_field_raises_value_error(self, tmp_path):
        p = _write(tmp_path, "id,name,price\n1,ok,$5\n2," + "x" * 200_000 + ",$6\n")
        with pytest.raises(ValueError, match="Malformed CSV .* near line 3"):
            load_listings(p)


# ── load_listings — row numbers in decode messages ────────────────────────────

def test_debug_line_number_counts_multiline_fields(tmp_path, caplog):
    p = _write(tmp_path, 'id,name,bedrooms\n1,"two\nlines",1\n2,plain,studio\n')
    with caplog.at_level(logging.DEBUG, logger="airbnb_analyzer.ingestion.listings_csv"):
        load_listings(p)
    assert "Row 4: unparseable bedrooms 'studio' decoded as 0" in caplog.text


# ── decode_listing_row ────────────────────────────────────────────────────────

class TestDecodeListingRow:
    def test_unparseable_numbers_become_zero(self):
        listing = decode_listing_row(
            {"id": "1", "price": "call us", "bedrooms": "studio", "review_scores_rating": "n/a"}
        )
        assert listing.price == 0.0
        assert listing.bedrooms == 0.0
        assert listing.review_scores_rating == 0.0

    def test_leading_number_is_used(self):
        listing = decode_listing_row({"review_scores_rating": "4.5 stars", "bedrooms": "2br"})
        assert listing.review_scores_rating == 4.5
        assert listing.bedrooms == 2.0

    def test_negative_price_clamped_to_zero(self):
        assert decode_listing_row({"price": "-$20"}).price == 0.0

    def test_overflow_cells_dropped(self):
        listing = decode_listing_row({"id": "1", None: ["extra", "cells"]})
        assert listing.extras == {}

    def test_none_values_become_empty(self):
        listing = decode_listing_row({"id": "1", "name": None, "notes": None})
        assert listing.name == ""
        assert listing.extras == {"notes": ""}

    def test_typed_columns_not_duplicated_in_extras(self):
        listing = decode_listing_row({"id": "1", "price": "$5", "city": "Oslo"})
        assert "price" not in listing.extras
        assert listing.extras == {"city": "Oslo"}


# ── Coercion helpers ──────────────────────────────────────────────────────────

@pytest.mark.parametrize(
    "text, expected",
    [
        ("$100.00", 100.0),
        ("$1,250.50", 1250.5),
        ("$1,234,567.00", 1234567.0),
        ("75", 75.0),
        ("", 0.0),
        ("free", 0.0),
    ],
)
def test_parse_price(text, expected):
    assert parse_price(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [
        ("2", 2.0),
        ("1.5", 1.5),
        (".5", 0.5),
        ("1e2", 100.0),
        ("  3  ", 3.0),
        ("", 0.0),
        ("abc", 0.0),
        ("nan", 0.0),
        ("inf", 0.0),
    ],
)
def test_parse_float(text, expected):
    assert parse_float(text) == expected


@pytest.mark.parametrize(
    "text, expected",
    [("12", 12), ("3.9", 3), ("-4", -4), ("", 0), ("x1", 0)],
)
def test_parse_int(text, expected):
    assert parse_int(text) == expected
