"""
Base class for parser strategies.

Parsers implement the extraction phase - turning discovered targets
into complete Note records.
"""

import asyncio
from abc import ABC, abstractmethod
from typing import Optional

import structlog

from jlpt_scraper.core.models import Note, NoteTarget
from jlpt_scraper.core.http_client import HttpClient
from jlpt_scraper.core.aggregator import NoteCollection
from jlpt_scraper.navigators.base import SiteConfig

logger = structlog.get_logger(__name__)


class ParserStrategy(ABC):
    """
    Abstract base class for parser strategies.

    Parsers extract structured Note data from discovered targets.
    """

    def __init__(self, site: SiteConfig, http_client: Optional[HttpClient] = None):
        """
        Initialize parser.

        Args:
            site: Site configuration
            http_client: Shared HTTP client (creates own if not provided)
        """
        self.site = site
        self.http_client = http_client
        self._owns_client = http_client is None
        self.failed = 0
        self.logger = logger.bind(parser=self.__class__.__name__)

    async def __aenter__(self) -> "ParserStrategy":
        """Enter async context."""
        if self._owns_client:
            self.http_client = self.site.make_client()
            await self.http_client.__aenter__()
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        if self._owns_client and self.http_client:
            await self.http_client.__aexit__(exc_type, exc_val, exc_tb)

    @abstractmethod
    async def extract(self, target: NoteTarget) -> Note:
        """
        Extract note data from target.

        Args:
            target: NoteTarget with URL and listing data

        Returns:
            Note object
        """
        pass

    async def extract_all(
        self,
        targets: list[NoteTarget],
        collection: Optional[NoteCollection] = None,
    ) -> list[Note]:
        """
        Extract all targets concurrently.

        One task is started per target; the call returns once every
        task has finished.

        Args:
            targets: List of targets to process
            collection: Optional shared collection to add notes to

        Returns:
            Notes in listing order
        """
        collection = collection if collection is not None else NoteCollection()

        async def worker(target: NoteTarget) -> None:
            try:
                note = await self.extract(target)
            except Exception as e:
                self.failed += 1
                self.logger.error("extraction_failed", url=target.url, error=str(e))
                note = Note.from_target(target)
            await collection.add(note, target)

        await asyncio.gather(*(worker(t) for t in targets))

        self.logger.info(
            "extraction_complete",
            notes=len(collection),
            failed=self.failed,
        )

        return collection.ordered()
