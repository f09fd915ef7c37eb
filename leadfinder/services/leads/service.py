"""Lead finder service: orchestrates search, scoring and enrichment."""

from abc import ABC, abstractmethod
from contextlib import asynccontextmanager
from typing import AsyncIterator, Optional

import httpx
from loguru import logger

from leadfinder.config import SearchCredentials
from leadfinder.core.logging import log_execution_time, log_search_summary
from leadfinder.services.enrichment.crawler import ContactCrawler
from leadfinder.services.enrichment.models import EnrichmentResult
from leadfinder.services.enrichment.pool import enrich_leads
from leadfinder.services.leads.exceptions import InvalidInputError
from leadfinder.services.leads.locales import normalize_country, resolve_locale
from leadfinder.services.leads.models import (
    Lead,
    LeadSearchResult,
    SearchMeta,
    SearchRequest,
)
from leadfinder.services.leads.query import build_queries
from leadfinder.services.leads.scoring import score_threshold, transform_result
from leadfinder.services.leads.sources.google_cse import GoogleSearchClient


class IService(ABC):
    """Interface for the lead finder service."""

    @abstractmethod
    async def find_leads(self, request: SearchRequest) -> LeadSearchResult: ...

    @abstractmethod
    async def enrich_website(
        self, website: str, language: str = "en", country: Optional[str] = None
    ) -> EnrichmentResult: ...


class Service(IService):
    """Search, filter and score, then optionally enrich.

    Stateless between calls: everything built here lives for one request.
    """

    def __init__(
        self,
        credentials: SearchCredentials,
        search_timeout: float = 5.0,
        fetch_timeout: float = 4.0,
        enrich_concurrency: int = 3,
        enrich_max_pages: int = 4,
        client: Optional[httpx.AsyncClient] = None,
    ):
        self.credentials = credentials
        self.search_timeout = search_timeout
        self.fetch_timeout = fetch_timeout
        self.enrich_concurrency = enrich_concurrency
        self.enrich_max_pages = enrich_max_pages
        self._client = client

    @asynccontextmanager
    async def _http_client(self) -> AsyncIterator[httpx.AsyncClient]:
        if self._client is not None:
            yield self._client
            return
        async with httpx.AsyncClient() as client:
            yield client

    @log_execution_time
    async def find_leads(self, request: SearchRequest) -> LeadSearchResult:
        """Execute the full pipeline: resolve locale -> search -> score -> enrich.

        1. Resolve the locale and build the query
        2. Fetch raw hits (any failed page fails the whole search)
        3. Drop unparseable links, blocklisted OEM domains and low scores
        4. Truncate to the limit, then enrich the survivors if asked
        """
        locale = resolve_locale(request.country, request.language)
        threshold = score_threshold(request.mode, locale)
        queries = build_queries(request.keyword, request.country, locale, request.mode)
        logger.info(
            f"Lead search: locale={locale} mode={request.mode.value} "
            f"limit={request.limit} threshold={threshold} query={queries[0]!r}"
        )

        async with self._http_client() as client:
            source = GoogleSearchClient(
                self.credentials, timeout=self.search_timeout, client=client
            )
            hits = await source.search(queries, request.limit, request.start_offset)

            meta = SearchMeta(total_items=len(hits))
            kept: list[Lead] = []
            for hit in hits:
                parsed = transform_result(hit, request.country, request.mode)
                if parsed is None:
                    continue
                if parsed.blocked:
                    meta.filtered_by_blacklist += 1
                    continue
                if parsed.lead.score < threshold:
                    meta.filtered_by_score += 1
                    continue
                kept.append(parsed.lead)

            results = kept[: request.limit]

            if request.enrich and results:
                async with ContactCrawler(
                    timeout=self.fetch_timeout,
                    max_pages=self.enrich_max_pages,
                    client=client,
                ) as crawler:
                    results = await enrich_leads(
                        results,
                        locale,
                        request.country,
                        crawler,
                        concurrency=self.enrich_concurrency,
                    )

        meta.kept = len(results)
        meta.unique_domains = len({r.website.lower() for r in results if r.website})
        log_search_summary(
            locale,
            request.mode.value,
            total_items=meta.total_items,
            kept=meta.kept,
            filtered_by_blacklist=meta.filtered_by_blacklist,
            filtered_by_score=meta.filtered_by_score,
            unique_domains=meta.unique_domains,
            api_calls=source.api_calls,
            enriched=int(request.enrich),
        )

        return LeadSearchResult(results=results, meta=meta, queries=queries, locale=locale)

    @log_execution_time
    async def enrich_website(
        self, website: str, language: str = "en", country: Optional[str] = None
    ) -> EnrichmentResult:
        """Crawl a single website for contact details."""
        website = (website or "").strip()
        if not website:
            raise InvalidInputError("Missing website")

        country = normalize_country(country)
        locale = resolve_locale(country, (language or "en").strip().lower())

        async with self._http_client() as client:
            async with ContactCrawler(
                timeout=self.fetch_timeout,
                max_pages=self.enrich_max_pages,
                client=client,
            ) as crawler:
                return await crawler.enrich(website, locale, country)
