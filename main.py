# main.py

"""Entry point for the listing_watch command-line runner."""

import argparse
import logging
import sys
from pathlib import Path

from src.config.logging_config import setup_logging
from src.config.settings import Settings

logger = logging.getLogger("listing_watch.main")


def _build_parser() -> argparse.ArgumentParser:
    """Build the argument parser for the CLI."""
    parser = argparse.ArgumentParser(
        prog="listing_watch",
        description=(
            "Snapshot a car search results page and report "
            "listings added or removed since the last run."
        ),
    )
    parser.add_argument(
        "-u",
        "--url",
        default=None,
        help="Search results URL (default: configured search).",
    )
    parser.add_argument(
        "-s",
        "--snapshot",
        default=None,
        help=f"Snapshot CSV path (default: {Settings.SNAPSHOT_PATH}).",
    )
    parser.add_argument(
        "-r",
        "--report",
        default=None,
        help=f"Change report path (default: {Settings.REPORT_PATH}).",
    )
    parser.add_argument(
        "-i",
        "--input",
        default=None,
        dest="input_path",
        help="Read field lists from a JSON file instead of scraping.",
    )
    parser.add_argument(
        "-f",
        "--format",
        choices=["text", "table"],
        default="text",
        dest="output_format",
        help="Output format (default: text).",
    )
    parser.add_argument(
        "--health",
        action="store_true",
        default=False,
        help="Check that the search page is reachable and exit.",
    )
    parser.add_argument(
        "--log-dir",
        default=None,
        help=f"Directory for run logs (default: {Settings.LOGS_DIR}).",
    )
    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR", "CRITICAL"],
        type=str.upper,
        default=None,
        help="Console log level (default: WARNING).",
    )
    return parser


def main() -> None:
    """Route to the health check or a single watch pass."""
    parser = _build_parser()
    args = parser.parse_args()

    log_file = setup_logging(
        Path(args.log_dir) if args.log_dir else None,
        args.log_level,
    )
    logger.info("listing_watch starting, log file: %s", log_file)

    from src.cli.runner import cli_watch, run_health_check

    if args.health:
        sys.exit(run_health_check(args.url))

    sys.exit(
        cli_watch(
            url=args.url,
            snapshot_path=args.snapshot,
            report_path=args.report,
            input_path=args.input_path,
            output_format=args.output_format,
        )
    )


if __name__ == "__main__":
    main()
