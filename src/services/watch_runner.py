# src/services/watch_runner.py

"""Runs one watch pass: assemble, diff, commit snapshot, report."""

import logging
from datetime import datetime

from src.models.change_set import ChangeSet, WatchSummary
from src.models.listing import RawFields
from src.pipeline.assembler import ListingAssembler
from src.pipeline.differ import ListingDiffer
from src.storage.change_reporter import ChangeReporter
from src.storage.snapshot_store import BaseSnapshotStore

logger = logging.getLogger("listing_watch.runner")


class WatchRunner:
    """Reconciles a fresh observation against the stored snapshot."""

    def __init__(
        self,
        store: BaseSnapshotStore,
        reporter: ChangeReporter,
    ) -> None:
        self.store = store
        self.reporter = reporter

    def run(
        self,
        raw: RawFields,
        now: datetime | None = None,
    ) -> WatchSummary:
        """Compare *raw* against the last snapshot and commit it.

        The snapshot is saved on every run, changed or not, before
        the report is written. Storage errors propagate unchanged so
        the caller can fail the run.
        """
        previous = self.store.load()
        current = ListingAssembler.from_raw(raw)

        added, removed = ListingDiffer.diff(previous, current)
        changes = ChangeSet(
            added=added,
            removed=removed,
            timestamp=now or datetime.now(),
        )

        self.store.save(current)
        report_path = self.reporter.write(changes)

        summary = WatchSummary(
            total=len(current),
            added=len(added),
            removed=len(removed),
            report_path=report_path,
            changes=changes,
        )
        logger.info(
            "Run complete: %d listings, %d new, %d removed",
            summary.total,
            summary.added,
            summary.removed,
        )
        return summary
