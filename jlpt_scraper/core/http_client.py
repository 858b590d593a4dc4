"""
Async HTTP client for the grammar pages.

Built on httpx with:
- Allowed-domain filtering
- Optional bound on in-flight requests
- Request logging
"""

import asyncio
from typing import Optional
from urllib.parse import urlparse

import httpx
import structlog

logger = structlog.get_logger(__name__)


DEFAULT_USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)

DEFAULT_ALLOWED_DOMAINS = ("jlptsensei.com", "www.jlptsensei.com")


class HttpClient:
    """
    Async HTTP client restricted to a set of domains.

    Usage:
        async with HttpClient() as client:
            html = await client.get_text("https://jlptsensei.com/")
    """

    def __init__(
        self,
        timeout: float = 30.0,
        allowed_domains: Optional[list[str]] = None,
        max_concurrency: int = 0,
        user_agent: str = DEFAULT_USER_AGENT,
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds
            allowed_domains: Hosts that may be requested (empty = any)
            max_concurrency: Maximum in-flight requests (0 = unbounded)
            user_agent: User-Agent header value
            transport: Optional httpx transport (used by tests)
        """
        self.timeout = timeout
        if allowed_domains is None:
            allowed_domains = DEFAULT_ALLOWED_DOMAINS
        self.allowed_domains = [d.lower() for d in allowed_domains]
        self.max_concurrency = max_concurrency
        self.user_agent = user_agent
        self.transport = transport

        self._client: Optional[httpx.AsyncClient] = None
        self._semaphore: Optional[asyncio.Semaphore] = (
            asyncio.Semaphore(max_concurrency) if max_concurrency > 0 else None
        )
        self.requests_made = 0

    async def __aenter__(self) -> "HttpClient":
        """Enter async context."""
        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            headers={
                "User-Agent": self.user_agent,
                "Accept-Language": "ja,en;q=0.9",
            },
            transport=self.transport,
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    def is_allowed(self, url: str) -> bool:
        """Check whether URL host is in the allowed domain list."""
        if not self.allowed_domains:
            return True
        host = (urlparse(url).hostname or "").lower()
        return host in self.allowed_domains

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """
        GET request.

        Args:
            url: URL to fetch
            **kwargs: Additional httpx arguments

        Returns:
            httpx.Response object

        Raises:
            ValueError: If the URL host is not allowed
            httpx.HTTPStatusError: On non-2xx response
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use 'async with' context.")

        if not self.is_allowed(url):
            raise ValueError(f"Domain not allowed: {url}")

        if self._semaphore is None:
            return await self._do_request("GET", url, **kwargs)

        async with self._semaphore:
            return await self._do_request("GET", url, **kwargs)

    async def _do_request(self, method: str, url: str, **kwargs) -> httpx.Response:
        """Execute HTTP request."""
        logger.info("visiting", url=url)
        self.requests_made += 1

        response = await self._client.request(method, url, **kwargs)
        response.raise_for_status()

        return response

    async def get_text(self, url: str, **kwargs) -> str:
        """GET request returning text content."""
        response = await self.get(url, **kwargs)
        return response.text
