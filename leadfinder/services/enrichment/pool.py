"""Bounded-concurrency enrichment of a batch of leads."""

import asyncio

from loguru import logger

from leadfinder.services.enrichment.crawler import ContactCrawler
from leadfinder.services.leads.models import Lead

DEFAULT_CONCURRENCY = 3


async def enrich_leads(
    leads: list[Lead],
    locale: str,
    country: str,
    crawler: ContactCrawler,
    concurrency: int = DEFAULT_CONCURRENCY,
) -> list[Lead]:
    """Add email/phone to each lead using a fixed pool of workers.

    Workers pull lead indices from a shared queue, so each lead is crawled by
    exactly one worker and written back only to its own slot. A failure on
    one lead is logged and leaves that lead unchanged. Order is preserved.
    Empty email/phone results are not set on the lead; scores always are.
    """
    enriched = list(leads)
    queue: asyncio.Queue[int] = asyncio.Queue()
    for idx in range(len(enriched)):
        queue.put_nowait(idx)

    async def _worker(worker_id: int):
        while True:
            try:
                idx = queue.get_nowait()
            except asyncio.QueueEmpty:
                return

            lead = enriched[idx]
            try:
                detail = await crawler.enrich(lead.website, locale, country)
            except Exception as e:
                logger.warning(f"[worker {worker_id}] Enrich failed for {lead.website}: {e}")
                continue

            # Empty contact fields stay absent on the lead
            enriched[idx] = lead.model_copy(
                update={
                    "email": detail.email or None,
                    "phone": detail.phone or None,
                    "email_score": detail.email_score,
                    "phone_score": detail.phone_score,
                }
            )

    workers = max(1, min(concurrency, len(enriched)))
    await asyncio.gather(*[_worker(i) for i in range(workers)])

    found = sum(1 for lead in enriched if lead.email or lead.phone)
    logger.info(f"Enriched {found}/{len(enriched)} leads with {workers} workers")
    return enriched
