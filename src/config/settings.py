# src/config/settings.py

"""Central configuration for the listing_watch engine."""

import os
from pathlib import Path

from curl_cffi.requests import BrowserTypeLiteral
from dotenv import load_dotenv

load_dotenv()


def _env(key: str, default: str) -> str:
    """Read a ``LISTING_WATCH_``-prefixed environment override."""
    return os.environ.get(f"LISTING_WATCH_{key}", default)


class Settings:
    """Central configuration for the listing_watch engine."""

    # --- Search target ---
    SEARCH_URL: str = _env(
        "SEARCH_URL",
        "https://www.autotempest.com/results"
        "?make=toyota&model=camry&zip=30605&radius=500"
        "&maxprice=20000&minyear=2020&maxyear=2025"
        "&maxmiles=70000&transmission=auto",
    )
    HOMEPAGE_URL: str = "https://www.autotempest.com/"

    # --- Scraping ---
    REQUEST_DELAY: float = 2.0          # Seconds before each page fetch
    REQUEST_TIMEOUT: int = int(_env("REQUEST_TIMEOUT", "30"))
    MAX_RETRIES: int = 3                # Retry count on transient failures
    MAX_DELAY_MULTIPLIER: int = 8       # Cap for adaptive backoff
    HEALTH_SLOW_MS: float = 5000.0      # Latency above this is "slow"

    CAPTCHA_KEYWORDS: list[str] = [
        "captcha",
        "verify you are human",
        "unusual traffic",
        "automated requests",
    ]

    # --- Headless browser rendering ---
    RENDER_WITH_BROWSER: bool = _env("RENDER_WITH_BROWSER", "1") != "0"
    RENDER_TIMEOUT_MS: int = int(_env("RENDER_TIMEOUT_MS", "30000"))
    BROWSER_ARGS: list[str] = [
        "--no-sandbox",
        "--disable-dev-shm-usage",
        "--disable-gpu",
        "--no-first-run",
        "--no-default-browser-check",
        "--disable-background-timer-throttling",
        "--disable-renderer-backgrounding",
        "--disable-backgrounding-occluded-windows",
    ]

    # --- Browser Impersonation ---
    IMPERSONATE_BROWSER: BrowserTypeLiteral = "chrome131"
    DEFAULT_HEADERS: dict[str, str] = {
        "Accept": (
            "text/html,application/xhtml+xml,"
            "application/xml;q=0.9,image/avif,"
            "image/webp,image/apng,*/*;q=0.8"
        ),
        "Accept-Language": "en-US,en;q=0.9",
        "sec-ch-ua": (
            '"Google Chrome";v="131", '
            '"Chromium";v="131", '
            '"Not_A Brand";v="24"'
        ),
        "sec-ch-ua-mobile": "?0",
        "sec-ch-ua-platform": '"Windows"',
        "sec-fetch-dest": "document",
        "sec-fetch-mode": "navigate",
        "sec-fetch-site": "none",
        "sec-fetch-user": "?1",
        "Upgrade-Insecure-Requests": "1",
    }

    # --- Persisted state ---
    SNAPSHOT_HEADER: list[str] = [
        "Title", "Price", "Mileage", "City", "Distance",
    ]
    REPORT_TIMESTAMP_FORMAT: str = "%Y-%m-%d %H:%M:%S"

    # --- Logging ---
    LOG_CONSOLE_LEVEL: str = _env("LOG_LEVEL", "WARNING")
    LOG_KEEP_RUNS: int = int(_env("LOG_KEEP_RUNS", "30"))

    # --- Paths ---
    BASE_DIR: Path = Path(__file__).resolve().parent.parent.parent
    SELECTORS_PATH: Path = BASE_DIR / "src" / "config" / "selectors.json"
    DATA_DIR: Path = BASE_DIR / "data"
    LOGS_DIR: Path = Path(_env("LOGS_DIR", str(BASE_DIR / "logs")))
    SNAPSHOT_PATH: Path = Path(
        _env("SNAPSHOT_PATH", str(DATA_DIR / "listings.csv"))
    )
    REPORT_PATH: Path = Path(
        _env("REPORT_PATH", str(DATA_DIR / "listing_changes.txt"))
    )
