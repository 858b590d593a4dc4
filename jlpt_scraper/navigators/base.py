"""
Base class for navigator strategies.

Navigators implement the discovery phase of scraping - turning
listing pages into grammar point targets.
"""

from abc import ABC, abstractmethod
from dataclasses import dataclass, field
from typing import Optional

import structlog

from jlpt_scraper.core.models import NoteTarget
from jlpt_scraper.core.http_client import HttpClient, DEFAULT_ALLOWED_DOMAINS, DEFAULT_USER_AGENT
from jlpt_scraper.core.levels import LEVEL_PAGES, LISTING_URL_TEMPLATE

logger = structlog.get_logger(__name__)


@dataclass
class SiteConfig:
    """Configuration for the grammar site."""

    base_url: str = "https://jlptsensei.com"

    # Discovery settings
    listing_url_template: str = LISTING_URL_TEMPLATE
    level_pages: dict = field(default_factory=lambda: dict(LEVEL_PAGES))

    # HTTP settings
    allowed_domains: list[str] = field(default_factory=lambda: list(DEFAULT_ALLOWED_DOMAINS))
    timeout: float = 30.0
    max_concurrency: int = 0  # 0 = one in-flight request per row, unbounded
    user_agent: str = DEFAULT_USER_AGENT

    @classmethod
    def from_dict(cls, data: dict) -> "SiteConfig":
        """Create from dictionary (e.g., from YAML)."""
        defaults = cls()
        level_pages = data.get("level_pages") or defaults.level_pages
        return cls(
            base_url=data.get("base_url", defaults.base_url),
            listing_url_template=data.get("listing_url_template", defaults.listing_url_template),
            level_pages={str(k).upper(): int(v) for k, v in level_pages.items()},
            allowed_domains=list(data.get("allowed_domains") or defaults.allowed_domains),
            timeout=float(data.get("timeout", defaults.timeout)),
            max_concurrency=int(data.get("max_concurrency", defaults.max_concurrency)),
            user_agent=data.get("user_agent") or defaults.user_agent,
        )

    def make_client(self, **kwargs) -> HttpClient:
        """Build an HTTP client with this site's settings."""
        return HttpClient(
            timeout=self.timeout,
            allowed_domains=self.allowed_domains,
            max_concurrency=self.max_concurrency,
            user_agent=self.user_agent,
            **kwargs,
        )


class NavigatorStrategy(ABC):
    """
    Abstract base class for navigator strategies.

    Navigators discover grammar point targets from listing pages.
    """

    def __init__(self, site: SiteConfig, http_client: Optional[HttpClient] = None):
        """
        Initialize navigator.

        Args:
            site: Site configuration
            http_client: Shared HTTP client (creates own if not provided)
        """
        self.site = site
        self.http_client = http_client
        self._owns_client = http_client is None
        self.logger = logger.bind(navigator=self.__class__.__name__)

    async def __aenter__(self) -> "NavigatorStrategy":
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
    async def discover(
        self,
        level: str,
        max_notes: Optional[int] = None,
    ) -> list[NoteTarget]:
        """
        Discover grammar point targets for a level.

        Args:
            level: JLPT level code
            max_notes: Optional limit on number of targets

        Returns:
            List of NoteTarget objects in listing order
        """
        pass
