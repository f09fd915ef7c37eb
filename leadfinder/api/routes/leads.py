"""Lead finder API routes.

`/api/leads` is the main search endpoint, `/leads` a legacy alias. Query
parameters arrive as raw strings and are clamped rather than rejected, so a
bad `limit` never turns into a 422.
"""

from typing import Optional

from fastapi import APIRouter

from leadfinder.api.models.leads import EnrichResponse, ErrorResponse, LeadsResponse
from leadfinder.config import settings
from leadfinder.services.leads.models import SearchRequest
from leadfinder.services.leads.service import Service

router = APIRouter(tags=["leads"])


def _get_service() -> Service:
    return Service(
        credentials=settings.search_credentials,
        search_timeout=settings.search_timeout_seconds,
        fetch_timeout=settings.fetch_timeout_seconds,
        enrich_concurrency=settings.enrich_concurrency,
        enrich_max_pages=settings.enrich_max_pages,
    )


@router.get(
    "/api/leads",
    response_model=LeadsResponse,
    response_model_exclude_none=True,
    responses={
        400: {"model": ErrorResponse, "description": "Missing q/keyword"},
        500: {"model": ErrorResponse, "description": "Missing configuration or search API failure"},
    },
)
@router.get(
    "/leads",
    response_model=LeadsResponse,
    response_model_exclude_none=True,
    include_in_schema=False,
)
async def find_leads(
    q: Optional[str] = None,
    keyword: Optional[str] = None,
    country: Optional[str] = None,
    limit: Optional[str] = None,
    num: Optional[str] = None,
    start: Optional[str] = None,
    mode: Optional[str] = None,
    lang: Optional[str] = None,
    enrich: Optional[str] = None,
):
    """Search for dealer leads, score them and optionally enrich contacts."""
    request = SearchRequest.from_query(
        keyword=q if q is not None else keyword,
        country=country,
        limit=limit if limit is not None else num,
        start=start,
        mode=mode,
        language=lang,
        enrich=enrich,
    )

    svc = _get_service()
    result = await svc.find_leads(request)
    return LeadsResponse.from_result(result)


@router.get(
    "/enrich",
    response_model=EnrichResponse,
    responses={
        400: {"model": ErrorResponse, "description": "Missing website"},
    },
)
async def enrich_website(
    website: Optional[str] = None,
    lang: Optional[str] = None,
    country: Optional[str] = None,
):
    """Find a contact email and phone on a single website."""
    svc = _get_service()
    result = await svc.enrich_website(website or "", language=lang or "en", country=country)
    return EnrichResponse.from_result(result)
