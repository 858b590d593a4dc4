"""
Master orchestrator for the grammar scraping pipeline.

Coordinates:
- Site configuration loading
- Listing discovery
- Concurrent detail extraction
- Output generation
"""

from pathlib import Path
from typing import Optional

import httpx
import structlog

from .core.models import Note
from .core.levels import normalize_level, resolve_page_count
from .core.aggregator import NoteCollection
from .config.loader import load_site
from .navigators.base import SiteConfig
from .navigators.listing import ListingNavigator
from .parsers.detail import DetailParser
from .exporters import export, normalize_file_type

logger = structlog.get_logger(__name__)


class GrammarScraper:
    """
    Master orchestrator for the scraping pipeline.

    Coordinates discovery, extraction and output.
    """

    def __init__(
        self,
        site: Optional[SiteConfig] = None,
        config_path: Optional[str] = None,
        output_dir: str = ".",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize scraper.

        Args:
            site: Site configuration (loaded from config_path if not given)
            config_path: Path to site YAML file
            output_dir: Directory for output files
            transport: Optional httpx transport (used by tests)
        """
        self.site = site or load_site(config_path)
        self.output_dir = Path(output_dir)
        self.transport = transport

        # Statistics
        self.stats = {
            "pages_requested": 0,
            "targets_discovered": 0,
            "notes_extracted": 0,
            "details_failed": 0,
        }

    async def run(
        self,
        level: str,
        max_notes: Optional[int] = None,
        dry_run: bool = False,
    ) -> list[Note]:
        """
        Run the scraping pipeline for one level.

        Args:
            level: JLPT level code (N1..N5)
            max_notes: Optional limit on grammar points
            dry_run: If True, only discover without fetching details

        Returns:
            Notes in listing order

        Raises:
            ValueError: If the level is unknown
        """
        code = normalize_level(level)
        # Fail before any request is made
        resolve_page_count(code, self.site.level_pages)

        logger.info(
            "starting_scrape",
            level=code,
            max_notes=max_notes,
            dry_run=dry_run,
        )

        async with self.site.make_client(transport=self.transport) as http_client:
            navigator = ListingNavigator(self.site, http_client=http_client)
            targets = await navigator.discover(code, max_notes)
            self.stats["pages_requested"] = navigator.pages_requested
            self.stats["targets_discovered"] = len(targets)

            if dry_run:
                for target in targets:
                    logger.info(
                        "discovered_target",
                        id=target.id,
                        grammar=target.grammar,
                        url=target.url,
                    )
                return []

            parser = DetailParser(self.site, http_client=http_client)
            collection = NoteCollection()
            notes = await parser.extract_all(targets, collection)

        self.stats["notes_extracted"] = len(notes)
        self.stats["details_failed"] = parser.failed

        logger.info("scrape_complete", level=code, **self.stats)

        return notes

    def save(self, notes: list[Note], level: str, file_type: str = "csv") -> Path:
        """
        Save notes to the output directory.

        Args:
            notes: Notes to save
            level: JLPT level
            file_type: "csv" or "json"

        Returns:
            Path to saved file
        """
        return export(notes, normalize_level(level), file_type, self.output_dir)


async def run_scraper(
    level: str,
    file_type: str = "csv",
    max_notes: Optional[int] = None,
    config_path: Optional[str] = None,
    output_dir: str = ".",
) -> list[Note]:
    """
    Convenience function to run the scraper and save the result.

    Args:
        level: JLPT level code
        file_type: "csv" or "json"
        max_notes: Optional limit
        config_path: Path to site YAML file
        output_dir: Output directory

    Returns:
        List of extracted notes
    """
    normalize_file_type(file_type)
    scraper = GrammarScraper(config_path=config_path, output_dir=output_dir)

    notes = await scraper.run(level, max_notes=max_notes)
    scraper.save(notes, level, file_type)

    return notes
