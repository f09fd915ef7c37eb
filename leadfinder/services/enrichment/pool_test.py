"""Unit tests for the enrichment worker pool."""

import asyncio
from unittest.mock import AsyncMock, MagicMock

import pytest

from leadfinder.services.enrichment.models import EnrichmentResult
from leadfinder.services.enrichment.pool import enrich_leads
from leadfinder.services.leads.models import Lead


def _lead(i: int) -> Lead:
    return Lead(
        company=f"Dealer {i}",
        website=f"dealer{i}.com",
        source_url=f"https://dealer{i}.com/",
        score=50,
        tags=["dealer"],
        country="Spain",
    )


@pytest.mark.unit
class TestEnrichLeads:
    @pytest.mark.asyncio
    async def test_each_lead_enriched_once_in_order(self):
        calls: list[str] = []

        async def fake_enrich(website, locale, country):
            calls.append(website)
            # Later leads finish first
            await asyncio.sleep(0.01 * (10 - int(website[6:-4])))
            return EnrichmentResult(
                email=f"sales@{website}", phone="555-123-4567", email_score=70, phone_score=70
            )

        crawler = MagicMock()
        crawler.enrich = AsyncMock(side_effect=fake_enrich)
        leads = [_lead(i) for i in range(7)]

        result = await enrich_leads(leads, "es", "Spain", crawler, concurrency=3)

        assert sorted(calls) == sorted(lead.website for lead in leads)
        assert len(calls) == 7
        assert [r.website for r in result] == [lead.website for lead in leads]
        assert all(r.email == f"sales@{r.website}" for r in result)
        assert all(r.email_score == 70 for r in result)

    @pytest.mark.asyncio
    async def test_concurrency_is_bounded(self):
        in_flight = 0
        peak = 0

        async def fake_enrich(website, locale, country):
            nonlocal in_flight, peak
            in_flight += 1
            peak = max(peak, in_flight)
            await asyncio.sleep(0.01)
            in_flight -= 1
            return EnrichmentResult()

        crawler = MagicMock()
        crawler.enrich = AsyncMock(side_effect=fake_enrich)

        await enrich_leads([_lead(i) for i in range(10)], "en", "", crawler, concurrency=3)

        assert peak == 3

    @pytest.mark.asyncio
    async def test_failure_is_contained(self):
        async def fake_enrich(website, locale, country):
            if website == "dealer1.com":
                raise RuntimeError("boom")
            return EnrichmentResult(email="info@x.com", email_score=50)

        crawler = MagicMock()
        crawler.enrich = AsyncMock(side_effect=fake_enrich)
        leads = [_lead(i) for i in range(3)]

        result = await enrich_leads(leads, "en", "", crawler)

        assert result[0].email == "info@x.com"
        assert result[1] == leads[1]
        assert result[1].email is None
        assert result[2].email == "info@x.com"

    @pytest.mark.asyncio
    async def test_does_not_touch_other_fields_or_inputs(self):
        crawler = MagicMock()
        crawler.enrich = AsyncMock(
            return_value=EnrichmentResult(phone="555-123-4567", phone_score=70)
        )
        leads = [_lead(0)]

        result = await enrich_leads(leads, "en", "Spain", crawler)

        assert result[0].company == "Dealer 0"
        assert result[0].score == 50
        assert result[0].tags == ["dealer"]
        assert result[0].phone == "555-123-4567"
        assert result[0].email is None
        assert result[0].email_score == 0
        assert leads[0].phone is None

    @pytest.mark.asyncio
    async def test_passes_locale_and_country(self):
        crawler = MagicMock()
        crawler.enrich = AsyncMock(return_value=EnrichmentResult())

        await enrich_leads([_lead(0)], "pt", "Brazil", crawler)

        crawler.enrich.assert_awaited_once_with("dealer0.com", "pt", "Brazil")

    @pytest.mark.asyncio
    async def test_empty_input(self):
        crawler = MagicMock()
        crawler.enrich = AsyncMock()

        assert await enrich_leads([], "en", "", crawler) == []
        crawler.enrich.assert_not_awaited()
