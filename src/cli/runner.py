# src/cli/runner.py

"""Headless watch runner: scrape (or read), diff, persist, report."""

import json
import logging
from pathlib import Path
from typing import Any

from rich.console import Console
from rich.table import Table

from src.models.change_set import WatchSummary
from src.models.listing import Listing, RawFields
from src.scrapers.autotempest_scraper import AutoTempestScraper
from src.scrapers.base_scraper import ExtractionError
from src.services.watch_runner import WatchRunner
from src.storage.change_reporter import ChangeReporter, format_summary
from src.storage.errors import StorageError
from src.storage.snapshot_store import CsvSnapshotStore

logger = logging.getLogger("listing_watch.cli")

# Stderr console for status messages so stdout carries only the summary
_err = Console(stderr=True)

_INPUT_KEYS = ("titles", "prices", "mileages", "cities", "distances")


def load_raw_fields(path: Path) -> RawFields:
    """Read pre-extracted field lists from a JSON object file.

    Missing keys are treated as empty lists. Any other non-list value
    raises ValueError naming the key.
    """
    with open(path, encoding="utf-8") as f:
        data: dict[str, Any] = json.load(f)
    if not isinstance(data, dict):
        raise ValueError(
            f"{path}: expected a JSON object with keys "
            f"{', '.join(_INPUT_KEYS)}"
        )
    lists: dict[str, list[str]] = {}
    for key in _INPUT_KEYS:
        value = data.get(key, [])
        if not isinstance(value, list):
            raise ValueError(
                f"{path}: '{key}' must be a list, "
                f"got {type(value).__name__}"
            )
        lists[key] = [str(v) for v in value]
    return RawFields(**lists)


def _listing_table(title: str, listings: list[Listing]) -> Table:
    """Build a Rich table of listings."""
    table = Table(
        title=title,
        show_lines=True,
        title_style="bold cyan",
    )
    table.add_column("#", style="dim", width=4)
    table.add_column("Title", max_width=60)
    table.add_column("Price", justify="right", style="green")
    table.add_column("Mileage", justify="right")
    table.add_column("City", style="magenta")
    table.add_column("Distance", justify="right", style="dim")

    for idx, listing in enumerate(listings, 1):
        table.add_row(str(idx), *listing.as_row())
    return table


def _print_tables(summary: WatchSummary) -> None:
    """Render added/removed listings to stdout."""
    if summary.changes is None:
        return
    console = Console()
    if summary.changes.added:
        console.print(
            _listing_table("New Listings", summary.changes.added)
        )
    if summary.changes.removed:
        console.print(
            _listing_table("Removed Listings", summary.changes.removed)
        )


def summary_line(summary: WatchSummary) -> str:
    """Console summary, noting where the report went (if anywhere)."""
    line = format_summary(summary)
    if summary.report_path is not None:
        return f"{line} Changes saved to {summary.report_path}"
    return f"{line} No changes detected."


def cli_watch(
    url: str | None,
    snapshot_path: str | None,
    report_path: str | None,
    input_path: str | None = None,
    output_format: str = "text",
) -> int:
    """Run one watch pass and return an exit code (0=ok, 1=fail)."""
    if input_path is not None:
        try:
            raw = load_raw_fields(Path(input_path))
        except (OSError, ValueError) as exc:
            logger.error("Cannot read input %s: %s", input_path, exc)
            _err.print(f"[red]Cannot read input: {exc}[/red]")
            return 1
        _err.print(f"[dim]Read field lists from {input_path}[/dim]")
    else:
        scraper = AutoTempestScraper()
        _err.print(
            f"[bold]Scraping:[/bold] "
            f"{url or scraper.settings.SEARCH_URL}"
        )
        try:
            raw = scraper.extract(url)
        except ExtractionError as exc:
            logger.error("Extraction failed: %s", exc, exc_info=True)
            _err.print(f"[red]Extraction failed: {exc}[/red]")
            return 1

    runner = WatchRunner(
        store=CsvSnapshotStore(
            Path(snapshot_path) if snapshot_path else None
        ),
        reporter=ChangeReporter(
            Path(report_path) if report_path else None
        ),
    )

    try:
        summary = runner.run(raw)
    except StorageError as exc:
        logger.critical("Run aborted: %s", exc)
        _err.print(f"[red]Run aborted: {exc}[/red]")
        return 1

    print(summary_line(summary))
    if output_format == "table":
        _print_tables(summary)
    return 0


def run_health_check(url: str | None = None) -> int:
    """Check the search page and report its status."""
    from src.services.health_checker import check_search_page

    _err.print("[bold]Running search page health check...[/bold]")
    result = check_search_page(url)

    if result.status == "ok":
        status = "[green]✅ OK[/green]"
    elif result.status == "slow":
        status = "[yellow]⚠️  SLOW[/yellow]"
    else:
        status = "[red]❌ DOWN[/red]"

    latency = (
        f"{result.latency_ms:.0f}ms"
        if result.latency_ms > 0
        else "—"
    )
    _err.print(f"{status} {latency} {result.message}")
    return 1 if result.status == "down" else 0
