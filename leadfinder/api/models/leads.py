"""Pydantic models for the lead finder API."""

from typing import Optional

from pydantic import BaseModel, Field

from leadfinder.services.enrichment.models import EnrichmentResult
from leadfinder.services.leads.models import LeadSearchResult


class LeadResponse(BaseModel):
    """A single lead."""

    country: str = ""
    company: str
    website: str
    source_url: str = Field(..., alias="sourceUrl")
    score: int
    tags: list[str] = []
    email: Optional[str] = None
    phone: Optional[str] = None
    email_score: Optional[int] = Field(None, alias="emailScore")
    phone_score: Optional[int] = Field(None, alias="phoneScore")

    model_config = {"populate_by_name": True}


class SearchMetaResponse(BaseModel):
    """Counters for a lead search."""

    total_items: int = Field(0, alias="totalItems")
    unique_domains: int = Field(0, alias="uniqueDomains")
    filtered_by_blacklist: int = Field(0, alias="filteredByBlacklist")
    filtered_by_score: int = Field(0, alias="filteredByScore")
    kept: int = 0

    model_config = {"populate_by_name": True}


class LeadsResponse(BaseModel):
    """GET /api/leads response."""

    ok: bool = True
    results: list[LeadResponse]
    meta: SearchMetaResponse

    @classmethod
    def from_result(cls, result: LeadSearchResult) -> "LeadsResponse":
        return cls(
            results=[LeadResponse(**lead.model_dump()) for lead in result.results],
            meta=SearchMetaResponse(**result.meta.model_dump()),
        )


class EnrichmentResultResponse(BaseModel):
    """Contact details found on a website."""

    email: str = ""
    phone: str = ""
    email_score: int = Field(0, alias="emailScore")
    phone_score: int = Field(0, alias="phoneScore")

    model_config = {"populate_by_name": True}


class EnrichResponse(EnrichmentResultResponse):
    """GET /enrich response: the result, also flattened at the top level."""

    ok: bool = True
    result: EnrichmentResultResponse

    @classmethod
    def from_result(cls, result: EnrichmentResult) -> "EnrichResponse":
        detail = EnrichmentResultResponse(**result.model_dump())
        return cls(result=detail, **detail.model_dump())


class ErrorResponse(BaseModel):
    """Error response."""

    ok: bool = False
    message: str
