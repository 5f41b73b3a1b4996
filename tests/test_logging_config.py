# tests/test_logging_config.py

"""Tests for merge-job logging and its configurable thresholds."""

import logging
import unittest
from pathlib import Path
from unittest.mock import patch

from price_merge.config.logging_config import resolve_level, setup_logging
from price_merge.config.settings import Settings
from price_merge.models.price import Price
from price_merge.services.price_reconciler import PriceReconciler


def _project_logger() -> logging.Logger:
    return logging.getLogger("price_merge")


def _close_handlers() -> None:
    """Detach and close every handler on the price_merge logger."""
    project_logger = _project_logger()
    for handler in list(project_logger.handlers):
        handler.close()
        project_logger.removeHandler(handler)


def _run_merge_and_read(log_path: Path) -> str:
    """Merge two overlapping prices and return the log file contents."""
    PriceReconciler.merge(
        [Price.of("p", 1, 1, "01.10.2019 00:00:00", "10.10.2019 00:00:00", 100)],
        [Price.of("p", 1, 1, "05.10.2019 00:00:00", "15.10.2019 00:00:00", 200)],
    )
    for handler in _project_logger().handlers:
        handler.flush()
    return log_path.read_text(encoding="utf-8")


class TestResolveLevel(unittest.TestCase):
    """Level names from Settings / .env."""

    def test_known_names(self) -> None:
        """Names are case-insensitive and whitespace-tolerant."""
        self.assertEqual(resolve_level("debug"), logging.DEBUG)
        self.assertEqual(resolve_level(" WARNING "), logging.WARNING)

    def test_unknown_name_raises(self) -> None:
        """A typo in the configured level is reported, not ignored."""
        with self.assertRaisesRegex(ValueError, "Unknown log level"):
            resolve_level("verbose")


class TestSetupLogging(unittest.TestCase):
    """setup_logging handlers and files."""

    def setUp(self) -> None:
        """Start from a logger without handlers."""
        _close_handlers()

    def tearDown(self) -> None:
        """Release file handlers opened by the test."""
        _close_handlers()

    def test_creates_merge_log_in_logs_dir(self) -> None:
        """The run log is merge_YYYYMMDD_HHMMSS.log under LOGS_DIR."""
        log_path = setup_logging()
        self.assertTrue(log_path.exists())
        self.assertEqual(log_path.parent, Settings.LOGS_DIR)
        self.assertRegex(log_path.name, r"^merge_\d{8}_\d{6}\.log$")

    def test_handler_levels_follow_settings(self) -> None:
        """File and console thresholds come from Settings."""
        with patch.object(Settings, "LOG_LEVEL", "INFO"), patch.object(
            Settings, "CONSOLE_LOG_LEVEL", "ERROR"
        ):
            setup_logging()
        levels = {
            type(h).__name__: h.level for h in _project_logger().handlers
        }
        self.assertEqual(levels["FileHandler"], logging.INFO)
        self.assertEqual(levels["StreamHandler"], logging.ERROR)
        self.assertEqual(_project_logger().level, logging.INFO)

    def test_explicit_level_overrides_settings(self) -> None:
        """The level argument wins over Settings.LOG_LEVEL."""
        with patch.object(Settings, "LOG_LEVEL", "DEBUG"):
            setup_logging("ERROR")
        file_handlers = [
            h
            for h in _project_logger().handlers
            if isinstance(h, logging.FileHandler)
        ]
        self.assertEqual(file_handlers[0].level, logging.ERROR)

    def test_repeated_calls_replace_handlers(self) -> None:
        """A second run swaps handlers instead of stacking them."""
        setup_logging()
        setup_logging()
        self.assertEqual(len(_project_logger().handlers), 2)

    def test_invalid_configured_level_raises(self) -> None:
        """A bad PRICE_MERGE_LOG_LEVEL fails before any handler is added."""
        with patch.object(Settings, "LOG_LEVEL", "loud"):
            with self.assertRaises(ValueError):
                setup_logging()
        self.assertEqual(_project_logger().handlers, [])


class TestReconcilerLogLevel(unittest.TestCase):
    """Group-resolution lines from the reconciler obey the file level."""

    def setUp(self) -> None:
        """Start from a logger without handlers."""
        _close_handlers()

    def tearDown(self) -> None:
        """Release file handlers opened by the test."""
        _close_handlers()

    def test_debug_level_records_each_group(self) -> None:
        """At DEBUG every group resolution is written."""
        with patch.object(Settings, "LOG_LEVEL", "DEBUG"):
            log_path = setup_logging()
        content = _run_merge_and_read(log_path)
        self.assertIn("[price_merge.reconciler]", content)
        self.assertIn("Group ('p', 1, 1): 1 -> 2 prices", content)
        self.assertIn("Merged 1 incoming into 1 existing prices", content)

    def test_info_level_keeps_only_summary(self) -> None:
        """At INFO the per-group lines are suppressed."""
        with patch.object(Settings, "LOG_LEVEL", "INFO"):
            log_path = setup_logging()
        content = _run_merge_and_read(log_path)
        self.assertNotIn("Group ('p', 1, 1)", content)
        self.assertIn("Merged 1 incoming into 1 existing prices", content)


if __name__ == "__main__":
    unittest.main()
