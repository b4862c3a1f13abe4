"""
airbnb_analyzer — filter, aggregate, and rank Airbnb listing exports.

Subpackages:
  ingestion  — CSV decoder producing typed ``Listing`` records.
  analysis   — Chainable filter handler plus stats, host ranking, best value.
  reporting  — JSON export and plain-text CLI formatters.
  models     — Frozen pydantic record and result models.
  utils      — Logging setup.
"""

__version__ = "0.1.0"
