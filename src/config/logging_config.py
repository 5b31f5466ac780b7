# src/config/logging_config.py

"""Per-run logging for unattended watch passes.

A watch pass is normally launched by cron or a systemd timer, so nobody
reads the console. Every run writes a DEBUG log file named with its
launch time (``run_20260214_153045.log``) under ``Settings.LOGS_DIR``,
which ``LISTING_WATCH_LOGS_DIR`` overrides so an installed package
never writes next to its own sources. The stderr handler only carries
what a scheduler mail-out should show (``LISTING_WATCH_LOG_LEVEL``,
WARNING by default). Older run logs beyond ``Settings.LOG_KEEP_RUNS``
are pruned at startup.
"""

import logging
import sys
from datetime import datetime
from pathlib import Path

from src.config.settings import Settings

_DETAILED_FORMAT = (
    "%(asctime)s | %(levelname)-8s | %(name)s | "
    "%(module)s:%(funcName)s:%(lineno)d | %(message)s"
)

_CONSOLE_FORMAT = "%(asctime)s | %(levelname)-8s | %(message)s"

_DATE_FORMAT = "%Y-%m-%d %H:%M:%S"

_RUN_LOG_GLOB = "run_*.log"

logger = logging.getLogger("listing_watch.logging")


def prune_run_logs(logs_dir: Path, keep: int) -> list[Path]:
    """Delete all but the newest *keep* run logs and return the removed paths."""
    # Timestamped names sort chronologically
    logs = sorted(logs_dir.glob(_RUN_LOG_GLOB))
    stale = logs[: max(len(logs) - keep, 0)]
    removed: list[Path] = []
    for path in stale:
        try:
            path.unlink()
        except OSError as exc:
            logger.warning("Could not remove old log %s: %s", path, exc)
            continue
        removed.append(path)
    return removed


def _current_log_file(root_logger: logging.Logger) -> Path | None:
    for handler in root_logger.handlers:
        if isinstance(handler, logging.FileHandler):
            return Path(handler.baseFilename)
    return None


def setup_logging(
    logs_dir: Path | None = None,
    console_level: str | None = None,
) -> Path:
    """Initialise the ``listing_watch`` logger for the current run.

    Args:
        logs_dir: Directory for run logs. Defaults to ``Settings.LOGS_DIR``.
        console_level: Level name for the stderr handler. Defaults to
            ``Settings.LOG_CONSOLE_LEVEL``.

    Returns:
        The path of the log file this run writes to. A repeated call
        returns the file opened by the first call.

    Raises:
        ValueError: *console_level* is not a logging level name.
    """
    root_logger = logging.getLogger("listing_watch")
    root_logger.setLevel(logging.DEBUG)

    existing = _current_log_file(root_logger)
    if existing is not None:
        return existing

    level_name = (console_level or Settings.LOG_CONSOLE_LEVEL).upper()
    level = logging.getLevelName(level_name)
    if not isinstance(level, int):
        raise ValueError(f"Unknown log level: {level_name}")

    target_dir = logs_dir if logs_dir is not None else Settings.LOGS_DIR
    target_dir.mkdir(parents=True, exist_ok=True)
    removed: list[Path] = []
    if Settings.LOG_KEEP_RUNS > 0:
        removed = prune_run_logs(target_dir, Settings.LOG_KEEP_RUNS - 1)

    timestamp = datetime.now().strftime("%Y%m%d_%H%M%S")
    log_file = target_dir / f"run_{timestamp}.log"

    file_handler = logging.FileHandler(log_file, encoding="utf-8")
    file_handler.setLevel(logging.DEBUG)
    file_handler.setFormatter(
        logging.Formatter(_DETAILED_FORMAT, datefmt=_DATE_FORMAT)
    )

    console_handler = logging.StreamHandler(sys.stderr)
    console_handler.setLevel(level)
    console_handler.setFormatter(
        logging.Formatter(_CONSOLE_FORMAT, datefmt=_DATE_FORMAT)
    )

    root_logger.addHandler(file_handler)
    root_logger.addHandler(console_handler)

    root_logger.info("Run log: %s", log_file)
    if removed:
        root_logger.debug("Pruned %d old run logs", len(removed))

    return log_file
