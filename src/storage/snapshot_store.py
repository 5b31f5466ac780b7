# src/storage/snapshot_store.py

"""Persistence of the last observed listing set between runs."""

import csv
import logging
from abc import ABC, abstractmethod
from pathlib import Path

from src.config.settings import Settings
from src.models.listing import Listing
from src.storage.atomic import atomic_open
from src.storage.errors import SnapshotWriteError

logger = logging.getLogger("listing_watch.storage")

_FIELD_COUNT = len(Settings.SNAPSHOT_HEADER)


class BaseSnapshotStore(ABC):
    """Holds exactly one snapshot: the listings from the last run."""

    @abstractmethod
    def load(self) -> list[Listing]:
        """Return the previous snapshot, or ``[]`` if there is none."""
        ...

    @abstractmethod
    def save(self, listings: list[Listing]) -> None:
        """Replace the snapshot with *listings*.

        Raises:
            SnapshotWriteError: the new snapshot was not committed.
        """
        ...


class CsvSnapshotStore(BaseSnapshotStore):
    """Snapshot kept as a CSV file with a fixed header row."""

    def __init__(self, path: Path | None = None) -> None:
        self.path: Path = path or Settings.SNAPSHOT_PATH
        logger.debug("CsvSnapshotStore initialised — path=%s", self.path)

    def load(self) -> list[Listing]:
        """Read the snapshot, treating any unreadable state as empty.

        A missing or unparseable file, or one with only a header, is
        a normal first-run condition. Rows with fewer than five
        fields are skipped.
        """
        if not self.path.exists():
            logger.info(
                "No snapshot at %s — starting from empty", self.path
            )
            return []

        try:
            with open(self.path, newline="", encoding="utf-8") as f:
                rows = list(csv.reader(f))
        except (OSError, UnicodeDecodeError, csv.Error) as exc:
            logger.warning(
                "Snapshot %s unreadable (%s) — starting from empty",
                self.path,
                exc,
            )
            return []

        if len(rows) < 2:
            logger.info(
                "Snapshot %s has no data rows", self.path
            )
            return []

        listings: list[Listing] = []
        skipped = 0
        for line_no, row in enumerate(rows[1:], start=2):
            if len(row) < _FIELD_COUNT:
                logger.warning(
                    "Skipping malformed snapshot row %d "
                    "(%d fields)",
                    line_no,
                    len(row),
                )
                skipped += 1
                continue
            listings.append(Listing(*row[:_FIELD_COUNT]))

        logger.info(
            "Loaded %d listings from %s (%d skipped)",
            len(listings),
            self.path,
            skipped,
        )
        return listings

    def save(self, listings: list[Listing]) -> None:
        """Write the header and one row per listing, replacing the file."""
        try:
            with atomic_open(self.path, newline="") as f:
                writer = csv.writer(f)
                writer.writerow(Settings.SNAPSHOT_HEADER)
                for listing in listings:
                    writer.writerow(listing.as_row())
        except OSError as exc:
            logger.error(
                "Failed to write snapshot %s: %s",
                self.path,
                exc,
                exc_info=True,
            )
            raise SnapshotWriteError(
                f"Could not write snapshot {self.path}: {exc}"
            ) from exc

        logger.info(
            "Saved %d listings to %s", len(listings), self.path
        )


class MemorySnapshotStore(BaseSnapshotStore):
    """In-process snapshot, used where no file should be touched."""

    def __init__(self, listings: list[Listing] | None = None) -> None:
        self._listings: list[Listing] = list(listings or [])
        self.save_count = 0

    def load(self) -> list[Listing]:
        return list(self._listings)

    def save(self, listings: list[Listing]) -> None:
        self._listings = list(listings)
        self.save_count += 1
