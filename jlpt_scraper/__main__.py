"""
CLI entry point for jlpt-scraper.

Usage:
    python -m jlpt_scraper --level N2 --filetype csv
    python -m jlpt_scraper --level N5 --filetype json --output data
    python -m jlpt_scraper --level N1 --dry-run
"""

import argparse
import asyncio
import logging
import sys

import structlog

from .core.levels import DEFAULT_LEVEL
from .exporters import SUPPORTED_FILE_TYPES

# Log level mapping
LOG_LEVELS = {
    "DEBUG": logging.DEBUG,
    "INFO": logging.INFO,
    "WARNING": logging.WARNING,
    "ERROR": logging.ERROR,
}


def setup_logging(level: str = "INFO", json_output: bool = False):
    """Configure structured logging."""
    log_level = LOG_LEVELS.get(level.upper(), logging.INFO)

    if json_output:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.processors.format_exc_info,
            structlog.processors.JSONRenderer(ensure_ascii=False),
        ]
    else:
        processors = [
            structlog.processors.add_log_level,
            structlog.processors.TimeStamper(fmt="%Y-%m-%d %H:%M:%S"),
            structlog.dev.ConsoleRenderer(colors=sys.stderr.isatty()),
        ]

    structlog.configure(
        processors=processors,
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(file=sys.stderr),
        cache_logger_on_first_use=True,
    )


def non_negative_int(value: str) -> int:
    """argparse type for counts that may be zero but not negative."""
    number = int(value)
    if number < 0:
        raise argparse.ArgumentTypeError(f"must be non-negative, got {value}")
    return number


def parse_args(argv=None):
    """Parse command line arguments."""
    parser = argparse.ArgumentParser(
        prog="jlpt-scraper",
        description="Scrape JLPT grammar points from jlptsensei.com",
        formatter_class=argparse.RawDescriptionHelpFormatter,
        epilog="""
Examples:
  # Scrape N2 grammar into jlptnotes_N2.csv
  python -m jlpt_scraper --level N2

  # Scrape N5 grammar as JSON into ./data
  python -m jlpt_scraper --level N5 --filetype json --output data

  # Dry run (listing pages only, no detail pages)
  python -m jlpt_scraper --level N1 --dry-run

  # Limit grammar points (for testing)
  python -m jlpt_scraper --level N3 --max-notes 5
        """,
    )

    parser.add_argument(
        "--level",
        default=DEFAULT_LEVEL,
        help="JLPT level (N1, N2, N3, N4, N5)",
    )

    parser.add_argument(
        "--filetype",
        type=str.lower,
        choices=SUPPORTED_FILE_TYPES,
        default="csv",
        help="File type to save (csv or json)",
    )

    parser.add_argument(
        "--output",
        type=str,
        default=".",
        help="Output directory (default: current directory)",
    )

    parser.add_argument(
        "--config",
        type=str,
        help="Path to site YAML config file",
    )

    parser.add_argument(
        "--max-notes",
        type=non_negative_int,
        help="Maximum grammar points to process (for testing)",
    )

    parser.add_argument(
        "--dry-run",
        action="store_true",
        help="Discovery only - don't fetch detail pages or write output",
    )

    parser.add_argument(
        "--max-concurrency",
        type=non_negative_int,
        help="Maximum in-flight requests (default: from config, 0 = unbounded)",
    )

    parser.add_argument(
        "--log-level",
        choices=["DEBUG", "INFO", "WARNING", "ERROR"],
        default="INFO",
        help="Logging level (default: INFO)",
    )

    parser.add_argument(
        "--json-logs",
        action="store_true",
        help="Output logs as JSON",
    )

    parser.add_argument(
        "--version",
        action="store_true",
        help="Show version and exit",
    )

    return parser.parse_args(argv)


async def main_async(args, transport=None):
    """Async main function."""
    from .config.loader import load_site
    from .orchestrator import GrammarScraper

    logger = structlog.get_logger(__name__)

    site = load_site(args.config)
    if args.max_concurrency is not None:
        site.max_concurrency = args.max_concurrency

    logger.info(
        "starting_jlpt_scraper",
        level=args.level,
        filetype=args.filetype,
        max_notes=args.max_notes,
        dry_run=args.dry_run,
    )

    scraper = GrammarScraper(site=site, output_dir=args.output, transport=transport)

    notes = await scraper.run(
        level=args.level,
        max_notes=args.max_notes,
        dry_run=args.dry_run,
    )

    if args.dry_run:
        logger.info(
            "dry_run_complete",
            discovered_notes=scraper.stats["targets_discovered"],
        )
        return notes

    path = scraper.save(notes, args.level, args.filetype)

    if notes:
        logger.info("scraping_complete", total_notes=len(notes), path=str(path))
    else:
        logger.warning("no_notes_extracted", path=str(path))

    return notes


def main(argv=None):
    """Main entry point."""
    args = parse_args(argv)

    # Version check
    if args.version:
        from . import __version__
        print(f"jlpt-scraper {__version__}")
        sys.exit(0)

    setup_logging(args.log_level, args.json_logs)

    try:
        notes = asyncio.run(main_async(args))
        sys.exit(0 if notes or args.dry_run else 1)
    except KeyboardInterrupt:
        print("\nInterrupted by user", file=sys.stderr)
        sys.exit(130)
    except Exception as e:
        logger = structlog.get_logger(__name__)
        logger.exception("fatal_error", error=str(e))
        sys.exit(1)


if __name__ == "__main__":
    main()
