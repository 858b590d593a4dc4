"""
Listing navigator: grammar-list pages → grammar point targets.

Every listing page of a level is a table with one row per grammar
point. Each row carries the id, grammar, reading and meaning columns
and a link to the grammar point's detail page.
"""

import asyncio
from typing import Optional
from urllib.parse import urljoin

from bs4 import BeautifulSoup, Tag

from jlpt_scraper.core.models import NoteTarget
from jlpt_scraper.core.levels import normalize_level, resolve_page_count, listing_urls
from jlpt_scraper.core.selectors import (
    ROW_SELECTOR,
    ROW_ID_SELECTOR,
    ROW_GRAMMAR_SELECTOR,
    ROW_READING_SELECTOR,
    ROW_MEANING_SELECTOR,
    ROW_LINK_SELECTOR,
    child_text,
    child_attr,
    parse_html,
)

from .base import NavigatorStrategy


class ListingNavigator(NavigatorStrategy):
    """
    Navigator for the paged grammar tables.

    Fetches all listing pages of a level concurrently and returns
    the rows as targets, ordered by page then row.
    """

    def __init__(self, *args, **kwargs):
        super().__init__(*args, **kwargs)
        self.pages_requested = 0

    async def discover(
        self,
        level: str,
        max_notes: Optional[int] = None,
    ) -> list[NoteTarget]:
        """
        Discover grammar points for a level.

        Args:
            level: JLPT level code (N1..N5)
            max_notes: Optional limit

        Returns:
            List of NoteTarget objects

        Raises:
            ValueError: If the level is unknown or max_notes is negative
        """
        if not self.http_client:
            raise RuntimeError("Navigator not initialized. Use 'async with' context.")

        if max_notes is not None and max_notes < 0:
            raise ValueError(f"max_notes must be non-negative, got {max_notes}")

        code = normalize_level(level)
        pages = resolve_page_count(code, self.site.level_pages)
        urls = listing_urls(code, pages, self.site.listing_url_template)
        self.pages_requested = len(urls)

        self.logger.info("discovering_notes", level=code, pages=pages)

        page_results = await asyncio.gather(
            *(self._discover_page(url, page) for page, url in enumerate(urls, start=1))
        )

        targets: list[NoteTarget] = [t for page_targets in page_results for t in page_targets]

        if max_notes is not None and len(targets) > max_notes:
            targets = targets[:max_notes]

        self.logger.info("discovery_complete", level=code, count=len(targets))

        return targets

    async def _discover_page(self, url: str, page: int) -> list[NoteTarget]:
        """Fetch one listing page and extract its rows."""
        try:
            html = await self.http_client.get_text(url)
        except Exception as e:
            self.logger.warning("listing_fetch_failed", url=url, page=page, error=str(e))
            return []

        soup = parse_html(html)
        targets = self.extract_targets(soup, page, url)

        self.logger.debug("listing_page_parsed", page=page, rows=len(targets))
        return targets

    def extract_targets(
        self,
        soup: BeautifulSoup,
        page: int = 1,
        listing_url: str = "",
    ) -> list[NoteTarget]:
        """
        Extract grammar point targets from a parsed listing page.

        Args:
            soup: Parsed HTML
            page: Page number (1-based) the rows come from
            listing_url: URL of the page, used to resolve relative links

        Returns:
            List of NoteTarget objects in row order
        """
        targets: list[NoteTarget] = []

        for position, row in enumerate(soup.select(ROW_SELECTOR)):
            targets.append(self._parse_row(row, page, position, listing_url))

        return targets

    def _parse_row(
        self,
        row: Tag,
        page: int,
        position: int,
        listing_url: str,
    ) -> NoteTarget:
        """
        Parse a single table row.

        Rows without a detail link are kept with an empty URL.
        """
        href = child_attr(row, ROW_LINK_SELECTOR, "href")
        if href:
            url = urljoin(listing_url or self.site.base_url, href)
        else:
            url = ""
            self.logger.warning("row_without_link", page=page, position=position)

        return NoteTarget(
            id=child_text(row, ROW_ID_SELECTOR),
            url=url,
            grammar=child_text(row, ROW_GRAMMAR_SELECTOR),
            reading=child_text(row, ROW_READING_SELECTOR),
            meaning=child_text(row, ROW_MEANING_SELECTOR),
            page=page,
            position=position,
            metadata={"listing_url": listing_url},
        )
