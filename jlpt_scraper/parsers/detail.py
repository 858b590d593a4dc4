"""
Grammar detail page parser.

Extracts the header image and example sentences from a grammar
point's detail page.
"""

from typing import Optional

from bs4 import Tag

from jlpt_scraper.core.models import Note, NoteTarget, Example, MAX_EXAMPLES
from jlpt_scraper.core.selectors import (
    MAIN_CONTENT_SELECTOR,
    HEADER_IMAGE_SELECTOR,
    EXAMPLE_SELECTOR,
    EXAMPLE_SENTENCE_SELECTOR,
    EXAMPLE_READING_PANEL,
    EXAMPLE_MEANING_PANEL,
    child_text,
    child_attr,
    panel_text,
    clean_text,
    parse_html,
)

from .base import ParserStrategy


class DetailParser(ParserStrategy):
    """
    Parser for grammar detail pages.

    Extracts:
    - Header image URL
    - Up to three example sentences (sentence, reading, meaning)

    A page that cannot be fetched still yields a Note built from the
    listing data alone.
    """

    async def extract(self, target: NoteTarget) -> Note:
        """
        Extract note from detail page.

        Args:
            target: NoteTarget with URL

        Returns:
            Note object
        """
        if not self.http_client:
            raise RuntimeError("Parser not initialized. Use 'async with' context.")

        if not target.url:
            self.logger.debug("no_detail_url", id=target.id, grammar=target.grammar)
            return Note.from_target(target)

        try:
            html = await self.http_client.get_text(target.url)
        except Exception as e:
            self.failed += 1
            self.logger.warning("detail_fetch_failed", url=target.url, error=str(e))
            return Note.from_target(target)

        return self.parse_html(html, target)

    def parse_html(self, html: str, target: NoteTarget) -> Note:
        """
        Parse detail HTML into a Note.

        Args:
            html: Raw HTML content
            target: Listing data for this grammar point

        Returns:
            Note object
        """
        soup = parse_html(html)
        container = soup.select_one(MAIN_CONTENT_SELECTOR)

        if container is None:
            self.logger.warning("no_main_content", url=target.url)
            return Note.from_target(target)

        image = child_attr(container, HEADER_IMAGE_SELECTOR, "src")
        examples = self.extract_examples(container)

        self.logger.debug(
            "parsed_note",
            grammar=clean_text(target.grammar)[:30],
            image=bool(image),
            examples=len(examples),
        )

        return Note.from_target(target, image=image, examples=examples)

    def extract_examples(
        self,
        container: Tag,
        limit: int = MAX_EXAMPLES,
    ) -> list[Example]:
        """
        Extract example sentences.

        Example blocks without an id are skipped and do not count
        toward the limit.
        """
        examples: list[Example] = []

        for block in container.select(EXAMPLE_SELECTOR):
            if len(examples) >= limit:
                break

            example = self._parse_example(block)
            if example:
                examples.append(example)

        return examples

    def _parse_example(self, block: Tag) -> Optional[Example]:
        """Parse one example block."""
        example_id = (block.get("id") or "").strip()
        if not example_id:
            return None

        return Example(
            id=example_id,
            sentence=child_text(block, EXAMPLE_SENTENCE_SELECTOR),
            reading=self._panel(block, example_id, EXAMPLE_READING_PANEL),
            meaning=self._panel(block, example_id, EXAMPLE_MEANING_PANEL),
        )

    def _panel(self, block: Tag, example_id: str, panel: tuple[str, str]) -> str:
        suffix, selector = panel
        return panel_text(block, example_id + suffix, selector)
