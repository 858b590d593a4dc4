"""
JLPT level table.

Maps each level code to the number of grammar-list pages the site
publishes for it, and builds the listing page URLs.
"""

from typing import Optional

import structlog

logger = structlog.get_logger(__name__)


# Number of grammar-list pages present on jlptsensei per level
LEVEL_PAGES = {
    "N1": 7,
    "N2": 5,
    "N3": 5,
    "N4": 4,
    "N5": 3,
}

DEFAULT_LEVEL = "N2"

LISTING_URL_TEMPLATE = "https://jlptsensei.com/jlpt-{level}-grammar-list/page/{page}/"


def normalize_level(level: str) -> str:
    """Return the canonical (upper-case) form of a level code."""
    return (level or "").strip().upper()


def resolve_page_count(
    level: str,
    level_pages: Optional[dict[str, int]] = None,
) -> int:
    """
    Return the number of listing pages for a JLPT level.

    Args:
        level: Level code, e.g. "N2" (case-insensitive)
        level_pages: Optional override of the level table

    Returns:
        Page count

    Raises:
        ValueError: If the level is not in the table
    """
    table = level_pages if level_pages is not None else LEVEL_PAGES
    code = normalize_level(level)

    if code not in table:
        raise ValueError(f"Invalid JLPT level: {level}")

    return int(table[code])


def listing_urls(
    level: str,
    pages: int,
    url_template: str = LISTING_URL_TEMPLATE,
) -> list[str]:
    """
    Build listing page URLs for pages 1..pages.

    Args:
        level: Level code
        pages: Number of pages
        url_template: Template with {level} and {page} placeholders

    Returns:
        Ordered list of URLs
    """
    code = normalize_level(level)
    urls = [url_template.format(level=code, page=page) for page in range(1, pages + 1)]

    logger.debug("listing_urls_built", level=code, pages=pages)
    return urls
