# src/pipeline/differ.py

"""Snapshot comparison between the previous and current run."""

import logging

from src.models.listing import Listing

logger = logging.getLogger("listing_watch.pipeline")


class ListingDiffer:
    """Classify listings as added or removed by identity key."""

    @staticmethod
    def diff(
        previous: list[Listing],
        current: list[Listing],
    ) -> tuple[list[Listing], list[Listing]]:
        """Return ``(added, removed)`` between two listing sets.

        Two listings match when title, price and mileage are equal
        (exact, case-sensitive). City and distance are ignored.
        Matching is per key, not per occurrence: a key seen once on
        one side and twice on the other counts as present on both.
        Each result keeps the order of the list it came from.
        """
        previous_keys = {lst.identity_key for lst in previous}
        current_keys = {lst.identity_key for lst in current}

        added = [
            lst for lst in current
            if lst.identity_key not in previous_keys
        ]
        removed = [
            lst for lst in previous
            if lst.identity_key not in current_keys
        ]

        logger.info(
            "Diff: %d previous, %d current, %d added, %d removed",
            len(previous),
            len(current),
            len(added),
            len(removed),
        )
        return added, removed
