"""
Navigator strategies for grammar point discovery.

Navigators handle the discovery phase - finding all grammar points
and their detail page URLs from the level's listing pages.

Strategies:
- ListingNavigator: paged grammar table → detail targets
"""

from .base import NavigatorStrategy, SiteConfig
from .listing import ListingNavigator

__all__ = [
    "NavigatorStrategy",
    "SiteConfig",
    "ListingNavigator",
]
