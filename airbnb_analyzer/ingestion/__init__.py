"""
Ingestion layer — decode listing exports into typed records.

Submodules:
  listings_csv — CSV (plain or .gz) decoder producing ``Listing`` objects
"""
