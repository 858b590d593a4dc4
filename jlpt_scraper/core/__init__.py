"""
Core layer - stable foundation for the scraping system.

Components:
- models: Note, Example, NoteTarget dataclasses
- http_client: Domain-restricted async HTTP client
- selectors: Site CSS selectors and text/attribute helpers
- levels: JLPT level → page count table
- aggregator: Lock-guarded, order-restoring note collection
"""

from .models import Note, Example, NoteTarget, MAX_EXAMPLES
from .levels import (
    LEVEL_PAGES,
    normalize_level,
    resolve_page_count,
    listing_urls,
)
from .aggregator import NoteCollection

__all__ = [
    "Note",
    "Example",
    "NoteTarget",
    "MAX_EXAMPLES",
    "LEVEL_PAGES",
    "normalize_level",
    "resolve_page_count",
    "listing_urls",
    "NoteCollection",
]
