"""
JSON export of listings and analysis results.

``export_to_json()`` writes whatever it is given — a listing snapshot, a
``ListingStats``, a host ranking, a single best-value ``Listing`` or plain
dicts/lists — as a 2-space indented JSON document and returns the written
``Path``.

Pydantic models are converted first:
  - ``Listing``  → one flat object with every source column
                   (see ``Listing.to_export_dict()``).
  - other models → ``model_dump(mode="json", by_alias=True)`` so result keys
                   keep their camelCase export names.
"""

from __future__ import annotations

import json
from pathlib import Path
from typing import Any

from pydantic import BaseModel

from airbnb_analyzer.models.listing import Listing


def export_to_json(data: Any, path: Path) -> Path:
    """Write ``data`` to a pretty-printed JSON file.

    Args:
        data: Any JSON-serialisable value, pydantic model, or list/tuple/dict
              containing them. ``None`` is written as ``null``.
        path: Destination file path (parent dirs created if missing).

    Returns:
        ``path`` as written.

    Raises:
        OSError: If the destination cannot be created or written.
    """
    path.parent.mkdir(parents=True, exist_ok=True)
    path.write_text(
        json.dumps(to_jsonable(data), indent=2, default=str), encoding="utf-8"
    )
    return path


def to_jsonable(data: Any) -> Any:
    """Recursively convert models and tuples into plain JSON-ready values."""
    if isinstance(data, Listing):
        return data.to_export_dict()
    if isinstance(data, BaseModel):
        return data.model_dump(mode="json", by_alias=True)
    if isinstance(data, (list, tuple)):
        return [to_jsonable(item) for item in data]
    if isinstance(data, dict):
        return {key: to_jsonable(val) for key, val in data.items()}
    return data
