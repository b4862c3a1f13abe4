"""Listing analysis package.

Modules
-------
handler     — ListingDataHandler: chainable range filters over a listing snapshot
stats       — Overall and per-bedroom average price
ranking     — Host ranking by listing count
best_value  — Single listing with the highest review-score-to-price ratio
"""
