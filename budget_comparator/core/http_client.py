"""
Async HTTP client for fetching report pages.

Built on httpx with:
- Explicit, per-client TLS verification switch
- Single attempt per call (no retries)
- UTF-8 decoding of the raw body
- Classification of transport failures into pipeline errors
"""

from typing import Optional

import httpx
import structlog

from .errors import FetchConnectionError, HttpStatusError

logger = structlog.get_logger(__name__)


USER_AGENT = (
    "Mozilla/5.0 (X11; Linux x86_64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"
)


class HttpClient:
    """
    Async HTTP client for report pages.

    Certificate validation is on unless the client is explicitly built
    with verify_tls=False; the budget portal needs that because its TLS
    chain is broken, and nothing else should share such a client.

    Usage:
        async with HttpClient(verify_tls=False) as client:
            html = await client.get_text("https://example.com")
    """

    def __init__(
        self,
        timeout: Optional[float] = None,
        verify_tls: bool = True,
        accept_language: str = "es-PE,es;q=0.9",
        transport: Optional[httpx.AsyncBaseTransport] = None,
    ):
        """
        Initialize HTTP client.

        Args:
            timeout: Request timeout in seconds (None waits indefinitely)
            verify_tls: Validate server certificates
            accept_language: Accept-Language header sent with every request
            transport: Optional httpx transport (tests use httpx.MockTransport)
        """
        self.timeout = timeout
        self.verify_tls = verify_tls
        self.accept_language = accept_language
        self.transport = transport

        self._client: Optional[httpx.AsyncClient] = None

    async def __aenter__(self) -> "HttpClient":
        """Enter async context."""
        if not self.verify_tls:
            logger.warning("tls_verification_disabled")

        self._client = httpx.AsyncClient(
            timeout=httpx.Timeout(self.timeout),
            follow_redirects=True,
            verify=self.verify_tls,
            transport=self.transport,
            headers={
                "Accept-Language": self.accept_language,
                "User-Agent": USER_AGENT,
            },
        )
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb) -> None:
        """Exit async context."""
        if self._client:
            await self._client.aclose()
            self._client = None

    @property
    def is_open(self) -> bool:
        return self._client is not None

    async def get(self, url: str, **kwargs) -> httpx.Response:
        """
        GET request, single attempt.

        Args:
            url: URL to fetch
            **kwargs: Additional httpx arguments

        Returns:
            httpx.Response with a 2xx status

        Raises:
            HttpStatusError: Remote answered with a non-2xx status
            FetchConnectionError: No response was received
        """
        if not self._client:
            raise RuntimeError("Client not initialized. Use 'async with' context.")

        logger.debug("http_get", url=url)

        try:
            response = await self._client.get(url, **kwargs)
            response.raise_for_status()
        except httpx.HTTPStatusError as e:
            status_code = e.response.status_code
            logger.warning("http_status_error", url=url, status_code=status_code)
            raise HttpStatusError(url, status_code) from e
        except httpx.TransportError as e:
            logger.warning("http_connection_error", url=url, error=str(e))
            raise FetchConnectionError(url) from e

        return response

    async def get_bytes(self, url: str, **kwargs) -> bytes:
        """GET request returning the raw body."""
        response = await self.get(url, **kwargs)
        return response.content

    async def get_text(self, url: str, **kwargs) -> str:
        """GET request returning the body decoded as UTF-8."""
        content = await self.get_bytes(url, **kwargs)
        return content.decode("utf-8", errors="replace")
