# src/scrapers/autotempest_scraper.py

"""Scraper for autotempest.com search results pages."""

from bs4 import BeautifulSoup

from src.models.listing import RawFields
from src.scrapers.base_scraper import BaseScraper, ExtractionError


class AutoTempestScraper(BaseScraper):
    """Pull title/price/mileage/city/distance text from a results page.

    Each field is collected by its own selector query, so the lists
    are returned as-is and may differ in length.
    """

    def __init__(self) -> None:
        super().__init__("autotempest")

    def _get_homepage(self) -> str:
        return self.settings.HOMEPAGE_URL

    def parse(self, soup: BeautifulSoup) -> RawFields:
        """Extract the five field lists from a parsed page.

        Raises:
            ExtractionError: no listing links were found.
        """
        titles = self.select_text(soup, self.selectors["title"])
        if not titles:
            raise ExtractionError(
                "No listings matched "
                f"'{self.selectors['title']}' on the results page"
            )

        raw = RawFields(
            titles=titles,
            prices=self.select_text(soup, self.selectors["price"]),
            mileages=self.select_text(
                soup, self.selectors["mileage"]
            ),
            cities=self.select_text(soup, self.selectors["city"]),
            distances=self.select_text(
                soup, self.selectors["distance"]
            ),
        )
        self.logger.info(
            "[autotempest] Extracted %d titles, %d prices, "
            "%d mileages, %d cities, %d distances",
            len(raw.titles),
            len(raw.prices),
            len(raw.mileages),
            len(raw.cities),
            len(raw.distances),
        )
        return raw

    def extract(self, url: str | None = None) -> RawFields:
        """Fetch the results page at *url* (default: configured search).

        Results cards are rendered client-side, so the page is loaded in
        headless Chromium first and read once a listing link is visible.
        If the browser is unavailable or times out, the static HTML is
        fetched instead.

        Raises:
            ExtractionError: the page could not be fetched or parsed.
        """
        target = url or self.settings.SEARCH_URL
        soup: BeautifulSoup | None = None
        if self.settings.RENDER_WITH_BROWSER:
            self.logger.info("[autotempest] Rendering %s", target)
            soup = self._render_page(target, self.selectors["title"])
        if soup is None:
            self.logger.info("[autotempest] Fetching static %s", target)
            soup = self._get_page(target)
        if soup is None:
            raise ExtractionError(f"Could not fetch {target}")
        return self.parse(soup)
