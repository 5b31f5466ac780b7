# src/storage/change_reporter.py

"""Renders and writes the per-run change report."""

import logging
from pathlib import Path

from src.config.settings import Settings
from src.models.change_set import ChangeSet, WatchSummary
from src.models.listing import Listing
from src.storage.atomic import atomic_open
from src.storage.errors import ReportWriteError

logger = logging.getLogger("listing_watch.storage")

_BANNER = "=" * 37
_NEW_RULE = "-" * 19
_REMOVED_RULE = "-" * 21


def _format_listing(idx: int, listing: Listing) -> str:
    return f"{idx}. " + " | ".join(listing.as_row())


def render_report(changes: ChangeSet) -> str:
    """Render *changes* as the plain-text report.

    Sections with no listings are left out entirely.
    """
    stamp = changes.timestamp.strftime(Settings.REPORT_TIMESTAMP_FORMAT)
    lines: list[str] = [
        f"Listing Changes - {stamp}",
        _BANNER,
        "",
    ]

    if changes.added:
        lines.append(f"NEW LISTINGS ({len(changes.added)}):")
        lines.append(_NEW_RULE)
        for idx, listing in enumerate(changes.added, 1):
            lines.append(_format_listing(idx, listing))
        lines.append("")

    if changes.removed:
        lines.append(f"REMOVED LISTINGS ({len(changes.removed)}):")
        lines.append(_REMOVED_RULE)
        for idx, listing in enumerate(changes.removed, 1):
            lines.append(_format_listing(idx, listing))

    return "\n".join(lines) + "\n"


def format_summary(summary: WatchSummary) -> str:
    """One-line run summary, e.g. ``2 listings, 1 new, 0 removed.``"""
    return (
        f"{summary.total} listings, {summary.added} new, "
        f"{summary.removed} removed."
    )


class ChangeReporter:
    """Writes the change report, replacing the previous one."""

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path or Settings.REPORT_PATH

    def write(self, changes: ChangeSet) -> Path | None:
        """Write the report when there is something to report.

        Returns the report path, or ``None`` when nothing changed
        (no file is touched in that case).

        Raises:
            ReportWriteError: the report could not be written.
        """
        if not changes.has_changes:
            logger.info("No changes — report not written")
            return None

        text = render_report(changes)
        try:
            with atomic_open(self.path) as f:
                f.write(text)
        except OSError as exc:
            logger.error(
                "Failed to write change report %s: %s",
                self.path,
                exc,
                exc_info=True,
            )
            raise ReportWriteError(
                f"Could not write report {self.path}: {exc}"
            ) from exc

        logger.info(
            "Wrote change report (%d new, %d removed) to %s",
            len(changes.added),
            len(changes.removed),
            self.path,
        )
        return self.path
