# src/services/health_checker.py

"""Connectivity check for the configured search page."""

import logging
import time
from dataclasses import dataclass

from src.config.settings import Settings
from src.scrapers.autotempest_scraper import AutoTempestScraper

logger = logging.getLogger("listing_watch.health")

_HEALTH_TIMEOUT = 10  # seconds


@dataclass
class HealthResult:
    """Result of a single search page check."""

    url: str
    status: str  # "ok", "slow", "down"
    latency_ms: float
    message: str


def check_search_page(url: str | None = None) -> HealthResult:
    """GET the search page once and classify the response."""
    target = url or Settings.SEARCH_URL
    scraper = AutoTempestScraper()
    headers = {
        **scraper.settings.DEFAULT_HEADERS,
        "Referer": scraper._get_homepage(),
    }

    start = time.monotonic()
    try:
        resp = scraper.session.get(
            target,
            headers=headers,
            timeout=_HEALTH_TIMEOUT,
        )
        elapsed_ms = (time.monotonic() - start) * 1000

        if resp.status_code != 200:
            result = HealthResult(
                url=target,
                status="down",
                latency_ms=elapsed_ms,
                message=f"HTTP {resp.status_code}",
            )
        elif elapsed_ms > Settings.HEALTH_SLOW_MS:
            result = HealthResult(
                url=target,
                status="slow",
                latency_ms=elapsed_ms,
                message="High latency",
            )
        else:
            result = HealthResult(
                url=target,
                status="ok",
                latency_ms=elapsed_ms,
                message="",
            )

    except Exception as exc:
        elapsed_ms = (time.monotonic() - start) * 1000
        result = HealthResult(
            url=target,
            status="down",
            latency_ms=elapsed_ms,
            message=str(exc)[:80],
        )

    logger.info(
        "Health check %s: %s (%.0fms) %s",
        result.url,
        result.status,
        result.latency_ms,
        result.message,
    )
    return result
