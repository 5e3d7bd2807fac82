"""HTTP transport used by distributor adapters."""

from typing import Optional, Protocol

import httpx
import structlog

from tastebuddy.config import settings
from tastebuddy.core.exceptions import TransportError


logger = structlog.get_logger(__name__)


class Fetcher(Protocol):
    """Performs a GET request and returns the raw body.

    Raises TransportError on connection failure or non-2xx status.
    """

    async def fetch(self, url: str) -> bytes: ...


class HttpFetcher:
    """Fetcher backed by httpx.AsyncClient.

    Pass a client to reuse connections (or to use a mock transport in tests).
    Without one, a short-lived client is opened per request. No retries are
    attempted; the timeout bounds every request.
    """

    def __init__(
        self,
        client: Optional[httpx.AsyncClient] = None,
        timeout: Optional[float] = None,
        user_agent: Optional[str] = None,
    ):
        self._client = client
        self._owns_client = False
        self._timeout = timeout if timeout is not None else settings.HTTP_TIMEOUT_SECONDS
        self._headers = {
            "User-Agent": user_agent or settings.HTTP_USER_AGENT,
            "Accept": "application/json",
        }

    async def fetch(self, url: str) -> bytes:
        """GET url and return the response body.

        Raises:
            TransportError: On network errors, timeouts and non-2xx statuses
        """
        logger.debug("http_get", url=url)

        try:
            if self._client is not None:
                response = await self._client.get(
                    url, headers=self._headers, timeout=self._timeout
                )
                response.raise_for_status()
                return response.content

            async with httpx.AsyncClient(timeout=self._timeout) as client:
                response = await client.get(url, headers=self._headers)
                response.raise_for_status()
                return response.content

        except httpx.HTTPStatusError as e:
            raise TransportError(
                url,
                e.response.reason_phrase or "HTTP error",
                status_code=e.response.status_code,
            ) from e

        except httpx.TimeoutException as e:
            raise TransportError(url, f"timed out after {self._timeout}s") from e

        except httpx.HTTPError as e:
            raise TransportError(url, str(e) or type(e).__name__) from e

    async def aclose(self) -> None:
        """Close the client opened by __aenter__. Injected clients stay open."""
        if self._client is not None and self._owns_client:
            await self._client.aclose()
            self._client = None
            self._owns_client = False

    async def __aenter__(self) -> "HttpFetcher":
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self._timeout)
            self._owns_client = True
        return self

    async def __aexit__(self, *exc_info) -> None:
        await self.aclose()
