import logging
from types import TracebackType
from typing import Protocol, Self

import httpx

from depth_chart_manager.errors import RetrievalError
from depth_chart_manager.ingest._retry import RetryPolicy, page_retry

logger = logging.getLogger(__name__)

DEFAULT_USER_AGENT = "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 (KHTML, like Gecko) Chrome/120.0.0.0 Safari/537.36"


class PageFetcher(Protocol):
    async def fetch_page(self, url: str) -> str:
        """Return the page body, raising RetrievalError if it cannot be obtained."""
        ...


class EspnPageFetcher:
    """Fetch ESPN pages over HTTP with a browser User-Agent.

    ESPN blocks obvious non-browser clients, so every request carries a
    desktop User-Agent. Requests are bounded by a timeout; a timeout is a
    transport error and is retried under *retry_policy* like any other before
    surfacing as a RetrievalError.
    """

    def __init__(
        self,
        client: httpx.AsyncClient | None = None,
        *,
        retry_policy: RetryPolicy | None = None,
        user_agent: str = DEFAULT_USER_AGENT,
        timeout_seconds: float = 10.0,
        connect_timeout_seconds: float = 5.0,
    ) -> None:
        self._client = client or httpx.AsyncClient(
            timeout=httpx.Timeout(timeout_seconds, connect=connect_timeout_seconds),
            follow_redirects=True,
        )
        self._headers = {"User-Agent": user_agent}
        self.retry_policy = retry_policy or RetryPolicy()
        self._fetch_with_retry = page_retry("ESPN depth chart request", self.retry_policy)(self._do_fetch)

    async def _do_fetch(self, url: str) -> httpx.Response:
        response = await self._client.get(url, headers=self._headers)
        response.raise_for_status()
        return response

    async def fetch_page(self, url: str) -> str:
        logger.debug("GET %s", url)
        try:
            response = await self._fetch_with_retry(url)
        except httpx.HTTPError as e:
            raise RetrievalError(url, e) from e
        logger.debug("ESPN responded %d (%d bytes)", response.status_code, len(response.content))
        return response.text

    async def aclose(self) -> None:
        await self._client.aclose()

    async def __aenter__(self) -> Self:
        return self

    async def __aexit__(
        self,
        exc_type: type[BaseException] | None,
        exc: BaseException | None,
        tb: TracebackType | None,
    ) -> None:
        await self.aclose()
