"""Google Custom Search API client.

Google Custom Search API: https://developers.google.com/custom-search/v1/overview
The API returns at most 10 results per call, so a search for up to 20 leads
is split into two pages fetched concurrently.

Setup:
1. Create project at https://console.cloud.google.com/
2. Enable Custom Search API and create an API key (GOOGLE_API_KEY)
3. Create a search engine at https://programmablesearchengine.google.com/
   and copy its ID (GOOGLE_CSE_ID)
"""

import asyncio
import time
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from loguru import logger

from leadfinder.config import SearchCredentials
from leadfinder.core.logging import log_http_request
from leadfinder.services.leads.exceptions import ConfigurationError, UpstreamSearchError
from leadfinder.services.leads.models import RawSearchHit
from leadfinder.services.leads.sources.base import SearchSource

API_PAGE_SIZE = 10  # Google returns max 10 results per call
DEFAULT_TIMEOUT_SECONDS = 5.0


def page_plan(limit: int, start: Optional[int] = None) -> list[tuple[int, int]]:
    """Split a limit into (start, num) calls: at most two pages of 10."""
    offset = start or 1
    plan = [(offset, min(limit, API_PAGE_SIZE))]
    if limit > API_PAGE_SIZE:
        plan.append((offset + API_PAGE_SIZE, min(limit - API_PAGE_SIZE, API_PAGE_SIZE)))
    return plan


class GoogleSearchClient(SearchSource):
    """Client for Google Custom Search API."""

    BASE_URL = "https://www.googleapis.com/customsearch/v1"

    def __init__(
        self,
        credentials: SearchCredentials,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        client: Optional[httpx.AsyncClient] = None,
    ):
        """Initialize Google Custom Search client.

        Args:
            credentials: API key and search engine ID (cx parameter)
            timeout: Per-call timeout in seconds
            client: Shared HTTP client; one is created per search if omitted
        """
        if not credentials.is_complete:
            raise ConfigurationError("Missing Google API configuration")
        self.credentials = credentials
        self.timeout = timeout
        self._client = client
        self._api_calls = 0

    @property
    def api_calls(self) -> int:
        return self._api_calls

    async def search(
        self,
        queries: list[str],
        limit: int,
        start: Optional[int] = None,
    ) -> list[RawSearchHit]:
        plan = page_plan(limit, start)

        async with self._http_client() as client:
            # All pages in flight together; the first failure propagates
            pages = await asyncio.gather(
                *[
                    self._fetch_page(client, query, page_start, num)
                    for query in queries
                    for page_start, num in plan
                ]
            )

        hits = [hit for page in pages for hit in page]
        logger.info(
            f"Search returned {len(hits)} hits from {len(pages)} call(s) "
            f"for {len(queries)} query(ies)"
        )
        return hits

    @asynccontextmanager
    async def _http_client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient() as client:
            yield client

    async def _fetch_page(
        self,
        client: httpx.AsyncClient,
        query: str,
        start: int,
        num: int,
    ) -> list[RawSearchHit]:
        """Fetch one page of results. Raises UpstreamSearchError on any failure."""
        self._api_calls += 1
        started = time.monotonic()
        try:
            response = await client.get(
                self.BASE_URL,
                params={
                    "key": self.credentials.api_key,
                    "cx": self.credentials.search_engine_id,
                    "q": query,
                    "num": min(num, API_PAGE_SIZE),
                    "start": start,
                },
                timeout=self.timeout,
            )
        except httpx.TimeoutException as e:
            logger.warning(f"Google Search API timed out (start={start}): {e!r}")
            raise UpstreamSearchError(
                f"Google API timed out after {self.timeout}s"
            ) from e
        except httpx.HTTPError as e:
            logger.warning(f"Google Search API request failed (start={start}): {e!r}")
            raise UpstreamSearchError(f"Google API request failed: {e}") from e

        log_http_request(
            "GET",
            self.BASE_URL,
            status_code=response.status_code,
            duration=time.monotonic() - started,
            start=start,
            num=num,
        )

        if not response.is_success:
            if response.status_code == 429:
                logger.warning("Google Search API quota exceeded")
            elif response.status_code == 403:
                logger.warning("Google Search API forbidden - check API key")
            raise UpstreamSearchError(
                f"Google API returned {response.status_code} {response.text[:100]}"
            )

        try:
            data = response.json()
        except ValueError as e:
            raise UpstreamSearchError("Google API returned a non-JSON body") from e

        items = data.get("items") if isinstance(data, dict) else None
        if not isinstance(items, list):
            return []
        return [RawSearchHit.model_validate(item) for item in items if isinstance(item, dict)]
