"""Command-line interface for notion-publisher."""

import argparse
import logging
import sys
from pathlib import Path

from notion_publisher.config import (
    DEFAULT_DATABASE_ID,
    DEFAULT_OUTPUT_DIR,
    DEFAULT_POLL_INTERVAL,
    PublisherSettings,
)
from notion_publisher.pipeline import Poller


def setup_logging(verbose: bool = False) -> None:
    """Configure logging for the CLI."""
    level = logging.DEBUG if verbose else logging.INFO
    logging.basicConfig(
        level=level,
        format="%(levelname)s: %(message)s",
    )


def run(args: argparse.Namespace) -> int:
    """Start the poll loop, or run a single cycle with --once.

    Args:
        args: Parsed command-line arguments

    Returns:
        Exit code (0 for success, non-zero for errors)
    """
    setup_logging(args.verbose)
    logger = logging.getLogger(__name__)

    if args.interval <= 0:
        logger.error("--interval must be positive")
        return 1

    settings = PublisherSettings(
        database_id=args.database,
        output_dir=args.output,
        poll_interval=args.interval,
    )
    poller = Poller(settings)

    if args.once:
        rendered = poller.run_once()
        logger.info(f"Cycle complete, {rendered} page(s) rendered")
        return 0

    logger.info(
        f"Mirroring database {settings.database_id} into {settings.output_dir} "
        f"every {settings.poll_interval:g}s"
    )
    poller.run_forever()
    return 0


def main(argv: list[str] | None = None) -> int:
    """Main entry point for the CLI.

    Args:
        argv: Command-line arguments (defaults to sys.argv[1:])

    Returns:
        Exit code
    """
    parser = argparse.ArgumentParser(
        prog="notion-publisher",
        description="Mirror publishable pages of a Notion database into Markdown files",
    )
    parser.add_argument(
        "-v", "--verbose",
        action="store_true",
        help="Enable verbose output",
    )
    parser.add_argument(
        "--once",
        action="store_true",
        help="Run a single poll cycle and exit",
    )
    parser.add_argument(
        "--database",
        type=str,
        default=DEFAULT_DATABASE_ID,
        help=f"Notion database ID (default: {DEFAULT_DATABASE_ID})",
    )
    parser.add_argument(
        "--output",
        type=Path,
        default=DEFAULT_OUTPUT_DIR,
        help=f"Output directory for Markdown files (default: {DEFAULT_OUTPUT_DIR})",
    )
    parser.add_argument(
        "--interval",
        type=float,
        default=DEFAULT_POLL_INTERVAL,
        help=f"Seconds between poll cycles (default: {DEFAULT_POLL_INTERVAL:g})",
    )

    args = parser.parse_args(argv)
    return run(args)


if __name__ == "__main__":
    sys.exit(main())
