"""Single-site contact crawler.

Visits a handful of likely pages (home, contact, about and localized
variants) on a lead's own site, one after another, and stops as soon as both
an email and a phone number are found or the page budget is used up.
"""

import time
from typing import Optional
from urllib.parse import urlsplit

import httpx
from loguru import logger

from leadfinder.core.logging import log_http_request
from leadfinder.services.enrichment.extractor import (
    extract_email,
    extract_phone,
    score_email,
    score_phone,
)
from leadfinder.services.enrichment.models import EnrichmentResult
from leadfinder.services.leads.exceptions import EnrichmentError
from leadfinder.services.leads.patterns import ENRICH_BASE_PATHS, ENRICH_LOCALIZED_PATHS

DEFAULT_TIMEOUT_SECONDS = 4.0
DEFAULT_MAX_PAGES = 4

USER_AGENT = (
    "Mozilla/5.0 (Windows NT 10.0; Win64; x64) AppleWebKit/537.36 "
    "(KHTML, like Gecko) Chrome/122.0.0.0 Safari/537.36"
)


def build_enrich_paths(locale: str) -> list[str]:
    """Universal paths first, then the locale's variants, without repeats."""
    localized = ENRICH_LOCALIZED_PATHS.get(locale, ())
    return list(dict.fromkeys(ENRICH_BASE_PATHS + tuple(localized)))


def safe_origin(website: str) -> str:
    """scheme://host for a hostname or URL, assuming https when unsure."""
    website = (website or "").strip()
    candidate = website if website.startswith("http") else f"https://{website}"
    try:
        parsed = urlsplit(candidate)
        hostname = parsed.hostname
    except ValueError:
        return f"https://{website}"
    if not parsed.scheme or not hostname:
        return f"https://{website}"
    return f"{parsed.scheme}://{hostname}"


class ContactCrawler:
    """Finds a contact email and phone number on a website."""

    def __init__(
        self,
        timeout: float = DEFAULT_TIMEOUT_SECONDS,
        max_pages: int = DEFAULT_MAX_PAGES,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.timeout = timeout
        self.max_pages = max_pages
        self._client = client
        self._owns_client = client is None

    async def __aenter__(self):
        if self._client is None:
            self._client = httpx.AsyncClient()
            self._owns_client = True
        return self

    async def __aexit__(self, *args):
        if self._owns_client and self._client is not None:
            await self._client.aclose()
            self._client = None

    async def fetch_page(self, url: str) -> str:
        """Fetch a page body as text.

        Non-HTML bodies are returned too. Raises EnrichmentError on transport
        errors, timeouts and non-2xx statuses.
        """
        if self._client is None:
            raise EnrichmentError("crawler not started")

        started = time.monotonic()
        try:
            response = await self._client.get(
                url,
                headers={"Accept": "text/html,*/*", "User-Agent": USER_AGENT},
                timeout=self.timeout,
                follow_redirects=True,
            )
        except (httpx.HTTPError, httpx.InvalidURL) as e:
            raise EnrichmentError(f"{type(e).__name__}: {e}") from e

        log_http_request(
            "GET", url, status_code=response.status_code, duration=time.monotonic() - started
        )
        if not response.is_success:
            raise EnrichmentError(f"status {response.status_code}")
        return response.text

    async def enrich(
        self, website: str, locale: str = "en", country: Optional[str] = None
    ) -> EnrichmentResult:
        """Crawl candidate pages in order and score whatever was found.

        Pages that fail to load are skipped and don't count against the page
        budget.
        """
        origin = safe_origin(website)
        candidates = [f"{origin}{path}" for path in build_enrich_paths(locale)]

        email = ""
        phone = ""
        visited = 0

        for url in candidates:
            if visited >= self.max_pages or (email and phone):
                break
            try:
                html = await self.fetch_page(url)
            except EnrichmentError as e:
                logger.warning(f"Fetch contact page failed {url}: {e}")
                continue

            visited += 1
            if not email:
                email = extract_email(html)
            if not phone:
                phone = extract_phone(html)

        logger.debug(
            f"Enriched {origin}: visited={visited} email={bool(email)} phone={bool(phone)}"
        )
        return EnrichmentResult(
            email=email,
            phone=phone,
            email_score=score_email(email),
            phone_score=score_phone(phone, country),
            pages_visited=visited,
        )
