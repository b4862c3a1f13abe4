"""
CSV decoder for Airbnb ``listings.csv`` exports (Inside Airbnb format).

Format — comma delimited, with a header row. Quoted fields with embedded
commas, quotes and newlines are handled by :mod:`csv`. Files ending in ``.gz``
are decompressed on the fly.

Typed columns (anything missing or unparseable → 0 / empty string):
  id, name, host_id, host_name            → str, verbatim
  host_listings_count                     → int
  bedrooms, review_scores_rating          → float
  price                                   → float, ``$`` and ``,`` stripped
                                            (e.g. ``"$1,250.00"`` → 1250.0)

Every other column is preserved verbatim in ``Listing.extras``.

Numeric coercion is best-effort, mirroring how the listing exports have
historically been read: the leading number of the field is used
(``"4.5 stars"`` → 4.5), and anything else decodes to zero without raising.
"""

from __future__ import annotations

import csv
import gzip
import logging
import math
import re
from pathlib import Path
from typing import IO, Optional

from airbnb_analyzer.models.listing import LISTING_FIELDS, Listing

logger = logging.getLogger(__name__)

_FLOAT_PREFIX = re.compile(r"^[+-]?(?:\d+(?:\.\d*)?|\.\d+)(?:[eE][+-]?\d+)?")
_INT_PREFIX = re.compile(r"^[+-]?\d+")
_PRICE_STRIP = str.maketrans("", "", "$,")


def load_listings(path: Path) -> list[Listing]:
    """Read a listings CSV (optionally gzip-compressed) into ``Listing`` records.

    Args:
        path: Path to a ``.csv`` or ``.csv.gz`` file.

    Returns:
        Listings in file order. A header-only file yields an empty list.

    Raises:
        FileNotFoundError: If ``path`` does not exist.
        OSError: If the file cannot be read or decompressed.
        ValueError: If the file has no header row or is not valid CSV
            (bad quoting, a field over the ``csv`` module's size limit).
    """
    path = Path(path)
    if not path.exists():
        raise FileNotFoundError(f"Listings file not found: {path}")

    with _open_text(path) as f:
        reader = csv.DictReader(f)
        listings: list[Listing] = []
        try:
            if reader.fieldnames is None:
                raise ValueError(f"CSV file is empty or has no header row: {path}")
            reader.fieldnames = [name.strip() for name in reader.fieldnames]

            for row in reader:
                # line_num is the physical line the record ends on
                listings.append(decode_listing_row(row, line_no=reader.line_num))
        except csv.Error as exc:
            raise ValueError(
                f"Malformed CSV in {path} near line {reader.line_num}: {exc}"
            ) from exc

    if not listings:
        logger.warning("Listings CSV is empty (header only): %s", path)
    else:
        logger.info("Loaded %d listings from %s", len(listings), path.name)
    return listings


def decode_listing_row(
    row: dict[Optional[str], object],
    line_no: Optional[int] = None,
) -> Listing:
    """Convert a :class:`csv.DictReader` row into a ``Listing``.

    Values are whitespace-trimmed. Short rows (``None`` values) are treated
    as empty strings; overflow cells (the ``None`` key) are dropped.
    """
    cells: dict[str, str] = {}
    for key, value in row.items():
        if key is None:
            continue
        cells[key] = value.strip() if isinstance(value, str) else ""

    def _num(key: str, parser) -> float:
        raw = cells.get(key, "")
        value = parser(raw)
        if raw and value == 0 and _FLOAT_PREFIX.match(raw) is None:
            logger.debug("Row %s: unparseable %s %r decoded as 0", line_no, key, raw)
        return value

    return Listing(
        id=cells.get("id", ""),
        name=cells.get("name", ""),
        host_id=cells.get("host_id", ""),
        host_name=cells.get("host_name", ""),
        host_listings_count=int(_num("host_listings_count", parse_int)),
        bedrooms=max(_num("bedrooms", parse_float), 0.0),
        price=max(parse_price(cells.get("price", "")), 0.0),
        review_scores_rating=_num("review_scores_rating", parse_float),
        extras={k: v for k, v in cells.items() if k not in LISTING_FIELDS},
    )


def parse_price(text: str) -> float:
    """Parse a currency-formatted price such as ``"$1,250.00"``."""
    return parse_float((text or "").translate(_PRICE_STRIP))


def parse_float(text: str) -> float:
    """Parse the leading decimal number of ``text``; 0.0 if there is none."""
    match = _FLOAT_PREFIX.match((text or "").strip())
    if match is None:
        return 0.0
    value = float(match.group())
    return value if math.isfinite(value) else 0.0


def parse_int(text: str) -> int:
    """Parse the leading integer of ``text``; 0 if there is none."""
    match = _INT_PREFIX.match((text or "").strip())
    return int(match.group()) if match else 0


# ── Private helpers ────────────────────────────────────────────────────────────

def _open_text(path: Path) -> IO[str]:
    """Open ``path`` for CSV reading, decompressing ``.gz`` files."""
    if path.suffix.lower() == ".gz":
        return gzip.open(path, "rt", encoding="utf-8-sig", newline="")
    return open(path, encoding="utf-8-sig", newline="")
