"""
airbnb_analyzer.reporting — JSON export and terminal formatting.

Modules:
  export     — JSON export of snapshots and analysis results.
  formatters — ASCII terminal formatters for Typer CLI commands.
"""
