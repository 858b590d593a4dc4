"""
Parser strategies for grammar point extraction.

Parsers handle the extraction phase - fetching detail pages and
converting them into structured Note objects.

Strategies:
- DetailParser: Parse grammar detail pages (image + examples)
"""

from .base import ParserStrategy
from .detail import DetailParser

__all__ = [
    "ParserStrategy",
    "DetailParser",
]
