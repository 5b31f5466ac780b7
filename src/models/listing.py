# src/models/listing.py

"""Listing data model shared by the scrape, diff and storage steps."""

from dataclasses import dataclass, field


@dataclass(frozen=True)
class Listing:
    """One search-result listing as five opaque display strings."""

    title: str = ""
    price: str = ""
    mileage: str = ""
    city: str = ""
    distance: str = ""

    @property
    def identity_key(self) -> tuple[str, str, str]:
        """Fields that decide whether two listings are the same car."""
        return (self.title, self.price, self.mileage)

    def as_row(self) -> list[str]:
        """Return the fields in snapshot column order."""
        return [
            self.title,
            self.price,
            self.mileage,
            self.city,
            self.distance,
        ]


@dataclass
class RawFields:
    """Per-field text lists pulled from a results page.

    The lists come from independent selector queries and may differ
    in length when a card is missing an optional element.
    """

    titles: list[str] = field(default_factory=lambda: list[str]())
    prices: list[str] = field(default_factory=lambda: list[str]())
    mileages: list[str] = field(default_factory=lambda: list[str]())
    cities: list[str] = field(default_factory=lambda: list[str]())
    distances: list[str] = field(default_factory=lambda: list[str]())
