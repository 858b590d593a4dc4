"""
Configuration module for the grammar site.

Provides:
- YAML config loading
- Site definition (URLs, level page counts, HTTP settings)
- Environment variable substitution
"""

from .loader import ConfigLoader, load_site

__all__ = ["ConfigLoader", "load_site"]
