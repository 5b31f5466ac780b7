# tests/test_logging_config.py

"""Tests for the per-run logging configuration."""

import importlib
import logging
import os
import shutil
import tempfile
import unittest
from pathlib import Path
from unittest.mock import patch

import src.config.settings
from src.config.logging_config import prune_run_logs, setup_logging
from src.config.settings import Settings


def _reset_logger() -> None:
    root_logger = logging.getLogger("listing_watch")
    for handler in list(root_logger.handlers):
        handler.close()
        root_logger.removeHandler(handler)


class TestSetupLogging(unittest.TestCase):
    """setup_logging handlers, levels and file placement."""

    def setUp(self) -> None:
        """Start each test with no handlers and a temp logs dir."""
        _reset_logger()
        self.addCleanup(_reset_logger)
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.tmp_dir, True)

    def _handlers(self) -> list[logging.Handler]:
        return logging.getLogger("listing_watch").handlers

    def test_creates_log_file_in_given_dir(self) -> None:
        """The run log lands in the directory passed in."""
        log_path = setup_logging(self.tmp_dir)
        self.assertTrue(log_path.exists())
        self.assertEqual(log_path.parent, self.tmp_dir)
        self.assertRegex(log_path.name, r"^run_\d{8}_\d{6}\.log$")

    def test_creates_missing_logs_dir(self) -> None:
        """A nested logs directory is created on demand."""
        nested = self.tmp_dir / "var" / "log" / "listing_watch"
        log_path = setup_logging(nested)
        self.assertTrue(nested.is_dir())
        self.assertEqual(log_path.parent, nested)

    def test_defaults_to_settings_logs_dir(self) -> None:
        """Without an argument, Settings.LOGS_DIR is used."""
        with patch.object(Settings, "LOGS_DIR", self.tmp_dir):
            log_path = setup_logging()
        self.assertEqual(log_path.parent, self.tmp_dir)

    def test_file_debug_console_warning(self) -> None:
        """File captures DEBUG; stderr defaults to WARNING."""
        setup_logging(self.tmp_dir)
        file_handlers = [
            h for h in self._handlers()
            if isinstance(h, logging.FileHandler)
        ]
        stream_handlers = [
            h for h in self._handlers()
            if isinstance(h, logging.StreamHandler)
            and not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(len(file_handlers), 1)
        self.assertEqual(len(stream_handlers), 1)
        self.assertEqual(file_handlers[0].level, logging.DEBUG)
        self.assertEqual(stream_handlers[0].level, logging.WARNING)
        self.assertEqual(
            logging.getLogger("listing_watch").level, logging.DEBUG
        )

    def test_console_level_argument(self) -> None:
        """A scheduled run can ask for INFO on stderr."""
        setup_logging(self.tmp_dir, console_level="info")
        stream_handlers = [
            h for h in self._handlers()
            if not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(stream_handlers[0].level, logging.INFO)

    def test_unknown_console_level_rejected(self) -> None:
        """A typo in the level name fails before any handler is added."""
        with self.assertRaises(ValueError):
            setup_logging(self.tmp_dir, console_level="loud")
        self.assertEqual(self._handlers(), [])

    def test_repeated_calls_reuse_first_file(self) -> None:
        """A second call adds no handlers and returns the open file."""
        first = setup_logging(self.tmp_dir)
        count = len(self._handlers())
        second = setup_logging(self.tmp_dir / "elsewhere")
        self.assertEqual(len(self._handlers()), count)
        self.assertEqual(first, second)

    def test_project_messages_reach_file(self) -> None:
        """Child loggers write DEBUG records to the run log."""
        log_path = setup_logging(self.tmp_dir)
        logging.getLogger("listing_watch.storage").debug("saved 3 rows")
        for handler in self._handlers():
            handler.flush()
        self.assertIn(
            "saved 3 rows", log_path.read_text(encoding="utf-8")
        )

    def test_old_run_logs_pruned(self) -> None:
        """Only the newest LOG_KEEP_RUNS logs survive, this run included."""
        for stamp in ("20250101_000000", "20250102_000000",
                      "20250103_000000"):
            (self.tmp_dir / f"run_{stamp}.log").write_text("", "utf-8")
        with patch.object(Settings, "LOG_KEEP_RUNS", 2):
            log_path = setup_logging(self.tmp_dir)
        names = sorted(p.name for p in self.tmp_dir.glob("run_*.log"))
        self.assertEqual(names, ["run_20250103_000000.log", log_path.name])

    def test_pruning_disabled_with_zero(self) -> None:
        """LOG_KEEP_RUNS of 0 keeps every log."""
        (self.tmp_dir / "run_20250101_000000.log").write_text("", "utf-8")
        with patch.object(Settings, "LOG_KEEP_RUNS", 0):
            setup_logging(self.tmp_dir)
        self.assertTrue(
            (self.tmp_dir / "run_20250101_000000.log").exists()
        )


class TestPruneRunLogs(unittest.TestCase):
    """prune_run_logs ordering and scope."""

    def setUp(self) -> None:
        """Set up a temp logs dir."""
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.tmp_dir, True)

    def test_keeps_newest_and_ignores_other_files(self) -> None:
        """Oldest run logs go; unrelated files stay."""
        for stamp in ("20250103_000000", "20250101_000000",
                      "20250102_000000"):
            (self.tmp_dir / f"run_{stamp}.log").write_text("", "utf-8")
        (self.tmp_dir / "notes.txt").write_text("", "utf-8")

        removed = prune_run_logs(self.tmp_dir, 1)

        self.assertEqual(
            [p.name for p in removed],
            ["run_20250101_000000.log", "run_20250102_000000.log"],
        )
        self.assertEqual(
            sorted(p.name for p in self.tmp_dir.iterdir()),
            ["notes.txt", "run_20250103_000000.log"],
        )

    def test_nothing_to_prune(self) -> None:
        """Fewer logs than the limit removes nothing."""
        (self.tmp_dir / "run_20250101_000000.log").write_text("", "utf-8")
        self.assertEqual(prune_run_logs(self.tmp_dir, 5), [])


class TestLogsDirOverride(unittest.TestCase):
    """LISTING_WATCH_LOGS_DIR and LISTING_WATCH_LOG_LEVEL."""

    def setUp(self) -> None:
        """Reload settings after each test to drop the overrides."""
        _reset_logger()
        self.addCleanup(_reset_logger)
        self.tmp_dir = Path(tempfile.mkdtemp())
        self.addCleanup(shutil.rmtree, self.tmp_dir, True)
        self.addCleanup(importlib.reload, src.config.settings)

    def test_env_override_moves_run_logs(self) -> None:
        """setup_logging writes under the overridden directory."""
        target = self.tmp_dir / "cron-logs"
        env = {
            "LISTING_WATCH_LOGS_DIR": str(target),
            "LISTING_WATCH_LOG_LEVEL": "ERROR",
        }
        with patch.dict(os.environ, env):
            settings_mod = importlib.reload(src.config.settings)

        self.assertEqual(settings_mod.Settings.LOGS_DIR, target)
        self.assertEqual(settings_mod.Settings.LOG_CONSOLE_LEVEL, "ERROR")

        with patch(
            "src.config.logging_config.Settings", settings_mod.Settings
        ):
            log_path = setup_logging()

        self.assertEqual(log_path.parent, target)
        self.assertTrue(log_path.exists())
        stream_handlers = [
            h for h in logging.getLogger("listing_watch").handlers
            if not isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(stream_handlers[0].level, logging.ERROR)


if __name__ == "__main__":
    unittest.main()
