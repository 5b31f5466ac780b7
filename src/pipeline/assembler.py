# src/pipeline/assembler.py

"""Zip ragged per-field lists into Listing records."""

import logging

from src.models.listing import Listing, RawFields

logger = logging.getLogger("listing_watch.pipeline")


class ListingAssembler:
    """Combine independently extracted field lists into listings."""

    @staticmethod
    def assemble(
        titles: list[str],
        prices: list[str],
        mileages: list[str],
        cities: list[str],
        distances: list[str],
    ) -> list[Listing]:
        """Build one listing per index up to the longest list.

        Positions past the end of a shorter list become ``""``.
        Unequal lengths are expected (a card can lack a mileage or
        distance badge) and are never an error.
        """
        columns = (titles, prices, mileages, cities, distances)
        lengths = [len(col) for col in columns]
        count = max(lengths)

        if len(set(lengths)) > 1:
            logger.debug(
                "Ragged field lists (title=%d, price=%d, "
                "mileage=%d, city=%d, distance=%d); padding "
                "to %d",
                *lengths,
                count,
            )

        def _at(col: list[str], idx: int) -> str:
            return col[idx] if idx < len(col) else ""

        return [
            Listing(
                title=_at(titles, i),
                price=_at(prices, i),
                mileage=_at(mileages, i),
                city=_at(cities, i),
                distance=_at(distances, i),
            )
            for i in range(count)
        ]

    @staticmethod
    def from_raw(raw: RawFields) -> list[Listing]:
        """Assemble listings from a :class:`RawFields` container."""
        return ListingAssembler.assemble(
            raw.titles,
            raw.prices,
            raw.mileages,
            raw.cities,
            raw.distances,
        )
