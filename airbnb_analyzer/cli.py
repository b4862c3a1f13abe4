"""
Airbnb listings analyzer — CLI entry point.

All commands follow this pattern:
  1. Load ``AppConfig`` via ``load_config()``.
  2. Configure logging.
  3. Load the listings CSV into a ``ListingDataHandler``.
  4. Apply any range filters given on the command line.
  5. Compute and print (or export) the result.

Install and run::

    pip install -e .
    airbnb-analyzer --help
    airbnb-analyzer stats listings.csv.gz --min-price 50 --max-price 200
    airbnb-analyzer ranking listings.csv.gz --top 5
    airbnb-analyzer best-value listings.csv.gz --min-bedrooms 2
    airbnb-analyzer export listings.csv.gz out/stats.json --what stats
    airbnb-analyzer shell listings.csv.gz

A filter is applied when at least one of its bounds is given; a missing
lower bound means 0 and a missing upper bound means no limit.
"""

from __future__ import annotations

import json
import math
from enum import Enum
from pathlib import Path
from typing import Any, Callable, Optional

import typer

from airbnb_analyzer.analysis.handler import ListingDataHandler
from airbnb_analyzer.reporting.formatters import (
    format_best_value,
    format_filter_line,
    format_filter_summary,
    format_host_ranking,
    format_stats,
)

app = typer.Typer(
    name="airbnb-analyzer",
    help="Filter, aggregate, and rank Airbnb listing exports.",
    add_completion=False,
)


class ExportTarget(str, Enum):
    listings = "listings"
    stats = "stats"
    ranking = "ranking"
    best_value = "best-value"


# ── Shared options ────────────────────────────────────────────────────────────

_LISTINGS_ARG = typer.Argument(
    None,
    help="Listings CSV (.csv or .csv.gz). Defaults to config data.listings_file.",
)
_CONFIG_OPT = typer.Option(None, "--config", help="Path to TOML config file.")
_MIN_PRICE = typer.Option(None, "--min-price", help="Minimum nightly price.")
_MAX_PRICE = typer.Option(None, "--max-price", help="Maximum nightly price.")
_MIN_BEDROOMS = typer.Option(None, "--min-bedrooms", help="Minimum bedrooms.")
_MAX_BEDROOMS = typer.Option(None, "--max-bedrooms", help="Maximum bedrooms.")
_MIN_SCORE = typer.Option(None, "--min-score", help="Minimum review score.")
_MAX_SCORE = typer.Option(None, "--max-score", help="Maximum review score.")


# ── Helpers ───────────────────────────────────────────────────────────────────

def _load_config_or_exit(config_path: Optional[str] = None):
    """Load AppConfig, printing a friendly error and exiting on failure."""
    from airbnb_analyzer.config import load_config

    try:
        cfg_path = Path(config_path) if config_path else None
        return load_config(cfg_path)
    except FileNotFoundError as exc:
        typer.echo(f"[ERROR] {exc}", err=True)
        raise typer.Exit(code=1)
    except Exception as exc:
        typer.echo(f"[ERROR] Config validation failed: {exc}", err=True)
        raise typer.Exit(code=1)


def _configure_logging(config):
    """Set up logging from config."""
    from airbnb_analyzer.utils.logging import configure_logging
    configure_logging(config.logging)


def _load_handler_or_exit(listings: Optional[str], config) -> ListingDataHandler:
    """Decode the listings file, exiting with code 1 if it cannot be read."""
    source = listings or config.data.listings_file
    if not source:
        typer.echo(
            "[ERROR] No listings file given. Pass LISTINGS or set data.listings_file.",
            err=True,
        )
        raise typer.Exit(code=1)

    try:
        return ListingDataHandler.from_csv(Path(source))
    except (OSError, ValueError) as exc:
        typer.echo(f"[ERROR] Error loading CSV: {exc}", err=True)
        raise typer.Exit(code=1)


def _apply_range(
    apply: Callable[[float, float], ListingDataHandler],
    minimum: Optional[float],
    maximum: Optional[float],
) -> None:
    """Apply one range filter if either bound is set."""
    if minimum is None and maximum is None:
        return
    apply(
        0.0 if minimum is None else minimum,
        math.inf if maximum is None else maximum,
    )


def apply_filter_options(
    handler: ListingDataHandler,
    min_price: Optional[float] = None,
    max_price: Optional[float] = None,
    min_bedrooms: Optional[float] = None,
    max_bedrooms: Optional[float] = None,
    min_score: Optional[float] = None,
    max_score: Optional[float] = None,
) -> ListingDataHandler:
    """Apply price, bedroom and review-score filters, in that order."""
    _apply_range(handler.filter_by_price, min_price, max_price)
    _apply_range(handler.filter_by_bedrooms, min_bedrooms, max_bedrooms)
    _apply_range(handler.filter_by_review_score, min_score, max_score)
    return handler


def _prepare(
    listings: Optional[str],
    config_path: Optional[str],
    **bounds: Optional[float],
):
    """Config → logging → load → filter. Returns ``(config, handler)``."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    handler = apply_filter_options(_load_handler_or_exit(listings, config), **bounds)
    return config, handler


def _export_or_exit(handler: ListingDataHandler, path: Path, data: Any = None) -> None:
    try:
        handler.export_results(path, data)
    except OSError as exc:
        typer.echo(f"[ERROR] Export failed: {exc}", err=True)
        raise typer.Exit(code=1)
    typer.echo(f"Data exported to {path}")


# ── Commands ──────────────────────────────────────────────────────────────────

@app.command("stats")
def stats(
    listings: Optional[str] = _LISTINGS_ARG,
    min_price: Optional[float] = _MIN_PRICE,
    max_price: Optional[float] = _MAX_PRICE,
    min_bedrooms: Optional[float] = _MIN_BEDROOMS,
    max_bedrooms: Optional[float] = _MAX_BEDROOMS,
    min_score: Optional[float] = _MIN_SCORE,
    max_score: Optional[float] = _MAX_SCORE,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print listing count, average price, and average price per bedroom count."""
    _, handler = _prepare(
        listings, config_path,
        min_price=min_price, max_price=max_price,
        min_bedrooms=min_bedrooms, max_bedrooms=max_bedrooms,
        min_score=min_score, max_score=max_score,
    )
    typer.echo(
        format_filter_summary(handler.applied_filters, len(handler), len(handler.original))
    )
    typer.echo("")
    typer.echo(format_stats(handler.compute_stats()))


@app.command("ranking")
def ranking(
    listings: Optional[str] = _LISTINGS_ARG,
    top: Optional[int] = typer.Option(
        None,
        "--top",
        min=1,
        help="Number of hosts to show. Defaults to config display.ranking_top_n.",
    ),
    min_price: Optional[float] = _MIN_PRICE,
    max_price: Optional[float] = _MAX_PRICE,
    min_bedrooms: Optional[float] = _MIN_BEDROOMS,
    max_bedrooms: Optional[float] = _MAX_BEDROOMS,
    min_score: Optional[float] = _MIN_SCORE,
    max_score: Optional[float] = _MAX_SCORE,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print hosts ranked by number of listings (most first)."""
    config, handler = _prepare(
        listings, config_path,
        min_price=min_price, max_price=max_price,
        min_bedrooms=min_bedrooms, max_bedrooms=max_bedrooms,
        min_score=min_score, max_score=max_score,
    )
    top_n = top or config.display.ranking_top_n
    typer.echo(format_host_ranking(handler.compute_host_ranking(), top_n=top_n))


@app.command("best-value")
def best_value(
    listings: Optional[str] = _LISTINGS_ARG,
    min_price: Optional[float] = _MIN_PRICE,
    max_price: Optional[float] = _MAX_PRICE,
    min_bedrooms: Optional[float] = _MIN_BEDROOMS,
    max_bedrooms: Optional[float] = _MAX_BEDROOMS,
    min_score: Optional[float] = _MIN_SCORE,
    max_score: Optional[float] = _MAX_SCORE,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Print the listing with the highest review-score-to-price ratio."""
    _, handler = _prepare(
        listings, config_path,
        min_price=min_price, max_price=max_price,
        min_bedrooms=min_bedrooms, max_bedrooms=max_bedrooms,
        min_score=min_score, max_score=max_score,
    )
    typer.echo(format_best_value(handler.compute_best_value()))


@app.command("export")
def export(
    listings: Optional[str] = _LISTINGS_ARG,
    output: Optional[str] = typer.Argument(
        None,
        help="Output JSON path. Defaults to <data.export_dir>/<what>.json.",
    ),
    what: ExportTarget = typer.Option(
        ExportTarget.listings,
        "--what",
        case_sensitive=False,
        help="What to export: filtered listings, stats, ranking, or best-value.",
    ),
    min_price: Optional[float] = _MIN_PRICE,
    max_price: Optional[float] = _MAX_PRICE,
    min_bedrooms: Optional[float] = _MIN_BEDROOMS,
    max_bedrooms: Optional[float] = _MAX_BEDROOMS,
    min_score: Optional[float] = _MIN_SCORE,
    max_score: Optional[float] = _MAX_SCORE,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Write the filtered listings, or a computed result, to a JSON file."""
    config, handler = _prepare(
        listings, config_path,
        min_price=min_price, max_price=max_price,
        min_bedrooms=min_bedrooms, max_bedrooms=max_bedrooms,
        min_score=min_score, max_score=max_score,
    )
    out_path = Path(output) if output else Path(config.data.export_dir) / f"{what.value}.json"

    data: Any = None
    if what is ExportTarget.stats:
        data = handler.compute_stats()
    elif what is ExportTarget.ranking:
        data = handler.compute_host_ranking()
    elif what is ExportTarget.best_value:
        best = handler.compute_best_value()
        if best is None:
            typer.echo(format_best_value(None))
            typer.echo("[SKIP] Nothing to export.")
            return
        data = best

    _export_or_exit(handler, out_path, data)


@app.command("shell")
def shell(
    listings: Optional[str] = _LISTINGS_ARG,
    config_path: Optional[str] = _CONFIG_OPT,
) -> None:
    """Interactive prompt: filter, stats, ranking, bestvalue, export, reset, quit."""
    config = _load_config_or_exit(config_path)
    _configure_logging(config)
    handler = _load_handler_or_exit(listings, config)
    typer.echo(f"Loaded {len(handler.original):,} listings.")

    ShellSession(handler, top_n=config.display.ranking_top_n).run()


@app.command("validate-config")
def validate_config(
    config_path: Optional[str] = _CONFIG_OPT,
    show_full: bool = typer.Option(
        False,
        "--full",
        help="Print full config including all fields.",
    ),
) -> None:
    """Validate the configuration file and print parsed values.

    Exits with code 1 if the config fails validation.
    """
    config = _load_config_or_exit(config_path)

    typer.echo("Configuration validated successfully.")
    typer.echo("")
    typer.echo(f"  Listings file:    {config.data.listings_file or '(none)'}")
    typer.echo(f"  Export dir:       {config.data.export_dir}")
    typer.echo(f"  Ranking top N:    {config.display.ranking_top_n}")
    typer.echo(f"  Log level:        {config.logging.level}")
    typer.echo(f"  Debug mode:       {config.debug}")

    if show_full:
        typer.echo("")
        typer.echo("Full config (JSON):")
        typer.echo(json.dumps(config.model_dump(), indent=2, default=str))

    typer.echo("")
    typer.echo("[OK] Config valid.")


# ── Interactive shell ─────────────────────────────────────────────────────────

SHELL_PROMPT = "\n~> Enter command (filter, stats, ranking, bestvalue, export, reset, quit)"


def parse_bound(text: str, default: float) -> float:
    """Parse a prompt answer; blank means ``default``.

    ``inf`` is accepted as an open upper bound.

    Raises:
        ValueError: If ``text`` is not blank and not a number, or is NaN.
    """
    text = text.strip()
    if not text:
        return default
    value = float(text)
    if math.isnan(value):
        raise ValueError(f"Bound is not a number: {text!r}")
    return value


class ShellSession:
    """One interactive session over a single ``ListingDataHandler``.

    Commands are read with ``typer.prompt`` and dispatched one at a time;
    ``quit`` (or end of input) ends the loop.
    """

    def __init__(self, handler: ListingDataHandler, top_n: int = 10) -> None:
        self.handler = handler
        self.top_n = top_n
        self._commands: dict[str, Callable[[], None]] = {
            "filter": self.do_filter,
            "stats": self.do_stats,
            "ranking": self.do_ranking,
            "bestvalue": self.do_best_value,
            "export": self.do_export,
            "reset": self.do_reset,
        }

    def run(self) -> None:
        while True:
            try:
                command = self._ask(SHELL_PROMPT).lower()
                if command == "quit":
                    break
                action = self._commands.get(command)
                if action is None:
                    typer.echo("Unknown command. Try again.")
                    continue
                action()
            except typer.Abort:
                # End of input, at the command prompt or mid-command.
                typer.echo("")
                break
        typer.echo("Goodbye!")

    def do_filter(self) -> None:
        steps = (
            ("price", "Min price", "Max price", self.handler.filter_by_price),
            ("bedrooms", "Min bedrooms", "Max bedrooms", self.handler.filter_by_bedrooms),
            ("review score", "Min review score", "Max review score",
             self.handler.filter_by_review_score),
        )
        for label, min_prompt, max_prompt, apply in steps:
            min_text = self._ask(f"{min_prompt} (blank=none)")
            max_text = self._ask(f"{max_prompt} (blank=none)")
            if not (min_text or max_text):
                continue
            try:
                minimum = parse_bound(min_text, 0.0)
                maximum = parse_bound(max_text, math.inf)
            except ValueError:
                typer.echo(f"[ERROR] Bounds must be numbers; {label} filter skipped.")
                continue
            apply(minimum, maximum)
            typer.echo(format_filter_line(self.handler.applied_filters[-1]))
        typer.echo(f"{len(self.handler):,} listings match.")

    def do_stats(self) -> None:
        typer.echo(format_stats(self.handler.compute_stats()))

    def do_ranking(self) -> None:
        typer.echo(format_host_ranking(self.handler.compute_host_ranking(), self.top_n))

    def do_best_value(self) -> None:
        typer.echo(format_best_value(self.handler.compute_best_value()))

    def do_export(self) -> None:
        filename = self._ask("Output filename (e.g. results.json)")
        if not filename:
            typer.echo("No filename provided.")
            return
        try:
            self.handler.export_results(Path(filename))
        except OSError as exc:
            typer.echo(f"[ERROR] Export failed: {exc}")
            return
        typer.echo(f"Data exported to {filename}")

    def do_reset(self) -> None:
        self.handler.reset()
        typer.echo("Data reset to original unfiltered state.")

    @staticmethod
    def _ask(text: str) -> str:
        return typer.prompt(text, default="", show_default=False).strip()


# ── Entry point ───────────────────────────────────────────────────────────────

if __name__ == "__main__":
    app()
