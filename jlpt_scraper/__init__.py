"""
JLPT Scraper - grammar point collector for jlptsensei.com.

Architecture:
- core/: Stable foundation (models, HTTP client, selectors, level table, aggregator)
- navigators/: Discovery of grammar points from listing pages
- parsers/: Extraction of images and example sentences from detail pages
- exporters: CSV/JSON output
- config/: YAML-driven site definition
"""

__version__ = "0.1.0"
__all__ = ["__version__"]
