# src/models/change_set.py

"""Result models for a single watch run."""

from dataclasses import dataclass, field
from datetime import datetime
from pathlib import Path

from src.models.listing import Listing


@dataclass
class ChangeSet:
    """Listings added and removed since the previous snapshot."""

    added: list[Listing] = field(default_factory=lambda: list[Listing]())
    removed: list[Listing] = field(
        default_factory=lambda: list[Listing]()
    )
    timestamp: datetime = field(default_factory=datetime.now)

    @property
    def has_changes(self) -> bool:
        return bool(self.added or self.removed)


@dataclass
class WatchSummary:
    """Counts reported at the end of every successful run."""

    total: int
    added: int
    removed: int
    report_path: Path | None = None
    changes: ChangeSet | None = None
