# src/scrapers/base_scraper.py

"""Abstract base class for results-page scrapers."""

import json
import logging
import time
from abc import ABC, abstractmethod
from typing import Any

import cloudscraper  # type: ignore[import-untyped]
from bs4 import BeautifulSoup
from curl_cffi import requests as curl_requests
from playwright.sync_api import Error as PlaywrightError
from playwright.sync_api import sync_playwright

from src.config.settings import Settings
from src.models.listing import RawFields


class ExtractionError(Exception):
    """The results page could not be fetched or held no listings."""


class BaseScraper(ABC):
    """Abstract base class for results-page scrapers."""

    def __init__(self, source_name: str) -> None:
        self.source_name = source_name
        self.logger = logging.getLogger(
            f"listing_watch.{source_name}"
        )
        self.settings = Settings()
        self.selectors: dict[str, str] = self._load_selectors()
        self.session = curl_requests.Session(
            impersonate=self.settings.IMPERSONATE_BROWSER
        )
        self._current_delay: float = (
            self.settings.REQUEST_DELAY
        )
        self._request_timeout: int = (
            self.settings.REQUEST_TIMEOUT
        )

    def _load_selectors(self) -> dict[str, str]:
        """Load CSS selectors for this source from selectors.json."""
        with open(self.settings.SELECTORS_PATH) as f:
            all_selectors: dict[str, Any] = json.load(f)
        result: dict[str, str] = all_selectors.get(
            self.source_name, {}
        )
        return result

    def _wait(self) -> None:
        """Sleep using the current (possibly escalated) delay."""
        time.sleep(self._current_delay)

    # Cloudflare challenge page markers (checked before keyword scan)
    _CF_CHALLENGE_MARKERS: list[str] = [
        "challenges.cloudflare.com",
        "cdn-cgi/challenge-platform",
        "just a moment",
        "cf-turnstile",
        "cf_chl_opt",
    ]

    def _validate_response(
        self, resp: curl_requests.Response,
    ) -> bool:
        """Check for Cloudflare challenge pages and CAPTCHA indicators."""
        lower = resp.text.lower()

        for marker in self._CF_CHALLENGE_MARKERS:
            if marker in lower:
                self.logger.warning(
                    "[%s] Cloudflare challenge detected "
                    "(marker: '%s')",
                    self.source_name,
                    marker,
                )
                return False

        # Skip the keyword scan on full pages to avoid
        # matching words inside listing text
        has_body_content = (
            "<body" in lower and len(resp.text) > 5000
        )
        if not has_body_content:
            for keyword in self.settings.CAPTCHA_KEYWORDS:
                if keyword in lower:
                    self.logger.warning(
                        "[%s] CAPTCHA keyword '%s' "
                        "detected",
                        self.source_name,
                        keyword,
                    )
                    return False
        return True

    def _escalate_delay(self) -> None:
        """Double the current delay up to the configured max."""
        max_delay = (
            self.settings.REQUEST_DELAY
            * self.settings.MAX_DELAY_MULTIPLIER
        )
        self._current_delay = min(
            self._current_delay * 2, max_delay
        )
        self.logger.warning(
            "[%s] Rate-limited, delay escalated to %.1fs",
            self.source_name,
            self._current_delay,
        )

    def _fetch_get(
        self,
        url: str,
        headers: dict[str, str],
    ) -> curl_requests.Response | None:
        """GET with retries and adaptive delay."""
        for attempt in range(self.settings.MAX_RETRIES):
            try:
                resp = self.session.get(
                    url,
                    headers=headers,
                    timeout=self._request_timeout,
                )
                if resp.status_code == 200:
                    if not self._validate_response(resp):
                        self._escalate_delay()
                        time.sleep(self._current_delay)
                        continue
                    return resp
                self.logger.warning(
                    "[%s] HTTP %d on attempt %d",
                    self.source_name,
                    resp.status_code,
                    attempt + 1,
                )
                if resp.status_code in (429, 403):
                    self._escalate_delay()
                    time.sleep(self._current_delay)
            except Exception as exc:
                self.logger.warning(
                    "[%s] Request error on attempt %d: %s",
                    self.source_name,
                    attempt + 1,
                    exc,
                    exc_info=True,
                )
                time.sleep(
                    self._current_delay * (attempt + 1)
                )
        return None

    def _get_page(self, url: str) -> BeautifulSoup | None:
        """Fetch a page, falling back to cloudscraper on failure."""
        headers: dict[str, str] = {
            **self.settings.DEFAULT_HEADERS,
            "Referer": self._get_homepage(),
        }
        self._wait()

        # Primary: curl_cffi (browser-impersonating TLS)
        resp = self._fetch_get(url, headers)
        if resp:
            return BeautifulSoup(resp.text, "lxml")

        # Fallback: cloudscraper (JS challenge solver)
        self.logger.info(
            "[%s] curl_cffi exhausted, falling back to cloudscraper",
            self.source_name,
        )
        try:
            _cs: Any = cloudscraper
            scraper: Any = _cs.create_scraper()
            fallback_resp: Any = scraper.get(
                url,
                headers=headers,
                timeout=self._request_timeout,
            )
            if fallback_resp.status_code == 200:
                return BeautifulSoup(
                    str(fallback_resp.text), "lxml"
                )
            self.logger.warning(
                "[%s] cloudscraper fallback got HTTP %d",
                self.source_name,
                fallback_resp.status_code,
            )
        except Exception as e:
            self.logger.error(
                "[%s] cloudscraper fallback also failed: %s",
                self.source_name,
                e,
                exc_info=True,
            )

        return None

    def _render_page(
        self, url: str, wait_selector: str,
    ) -> BeautifulSoup | None:
        """Load *url* in headless Chromium and return the rendered DOM.

        Waits for *wait_selector* to become visible before reading the
        page, so client-side rendered results are present. Returns None
        when the browser cannot start or the selector never shows up.
        """
        self._wait()
        timeout = self.settings.RENDER_TIMEOUT_MS
        try:
            with sync_playwright() as p:
                browser = p.chromium.launch(
                    headless=True,
                    args=self.settings.BROWSER_ARGS,
                )
                try:
                    page = browser.new_page(
                        extra_http_headers={
                            "Accept-Language": self.settings.DEFAULT_HEADERS[
                                "Accept-Language"
                            ],
                        },
                    )
                    page.goto(url, timeout=timeout)
                    page.wait_for_selector(
                        wait_selector, state="visible", timeout=timeout
                    )
                    html = page.content()
                finally:
                    browser.close()
        except PlaywrightError as exc:
            self.logger.warning(
                "[%s] Browser render failed for %s: %s",
                self.source_name,
                url,
                exc,
            )
            return None
        return BeautifulSoup(html, "lxml")

        return None

    @staticmethod
    def select_text(soup: BeautifulSoup, selector: str) -> list[str]:
        """Return the trimmed text of every element matching *selector*."""
        return [
            el.get_text(" ", strip=True)
            for el in soup.select(selector)
        ]

    @abstractmethod
    def _get_homepage(self) -> str:
        """Return the homepage URL for the Referer header."""
        ...

    @abstractmethod
    def extract(self, url: str | None = None) -> RawFields:
        """Fetch a results page and return its per-field text lists."""
        ...
