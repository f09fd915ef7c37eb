"""Pydantic models for the lead finder pipeline."""

import re
from enum import Enum
from typing import Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from leadfinder.services.leads.exceptions import InvalidInputError

DEFAULT_LIMIT = 10
MAX_LIMIT = 20

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


class SearchMode(str, Enum):
    DEALER = "dealer"
    BROAD = "broad"

    @classmethod
    def parse(cls, raw: Optional[str]) -> "SearchMode":
        """Anything that isn't "dealer" runs as a broad search."""
        value = (raw or cls.DEALER.value).strip().lower()
        return cls.DEALER if value == cls.DEALER.value else cls.BROAD


def parse_int(raw) -> Optional[int]:
    """Parse leading digits leniently ("12abc" -> 12). None if there are none."""
    if raw is None:
        return None
    if isinstance(raw, int):
        return raw
    match = _LEADING_INT.match(str(raw))
    return int(match.group(1)) if match else None


def clamp_limit(raw) -> int:
    num = parse_int(raw)
    if num is None:
        return DEFAULT_LIMIT
    return max(1, min(num, MAX_LIMIT))


def clamp_start(raw) -> Optional[int]:
    num = parse_int(raw)
    if num is None or num < 1:
        return None
    return num


class SearchRequest(BaseModel):
    """A validated lead search request."""

    keyword: str = Field(..., min_length=1)
    country: str = ""
    mode: SearchMode = SearchMode.DEALER
    language: str = "auto"
    limit: int = Field(DEFAULT_LIMIT, ge=1, le=MAX_LIMIT)
    start_offset: Optional[int] = Field(None, ge=1)
    enrich: bool = False

    @classmethod
    def from_query(
        cls,
        keyword: Optional[str],
        country: Optional[str] = None,
        limit=None,
        start=None,
        mode: Optional[str] = None,
        language: Optional[str] = None,
        enrich: Optional[str] = None,
    ) -> "SearchRequest":
        """Build a request from raw query-string values, clamping numbers."""
        keyword = (keyword or "").strip()
        if not keyword:
            raise InvalidInputError("Missing q/keyword")

        return cls(
            keyword=keyword,
            country=(country or "").strip(),
            mode=SearchMode.parse(mode),
            language=(language or "auto").strip().lower() or "auto",
            limit=clamp_limit(limit),
            start_offset=clamp_start(start),
            enrich=(enrich or "0") == "1",
        )


class RawSearchHit(BaseModel):
    """A single item from the search API response."""

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    link: Optional[str] = None
    title: str = ""
    snippet: str = ""
    display_link: str = Field("", alias="displayLink")

    @field_validator("title", "snippet", "display_link", mode="before")
    @classmethod
    def none_to_empty(cls, v):
        return "" if v is None else str(v)

    @field_validator("link", mode="before")
    @classmethod
    def link_to_str(cls, v):
        # Non-string links become unparseable text and are dropped later
        return None if v is None else str(v)


class Lead(BaseModel):
    """A candidate dealer found by search, scored and optionally enriched."""

    model_config = ConfigDict(populate_by_name=True)

    country: str = ""
    company: str
    website: str
    source_url: str = Field(..., alias="sourceUrl")
    score: int = Field(..., ge=0, le=100)
    tags: list[str] = []
    email: Optional[str] = None
    phone: Optional[str] = None
    email_score: Optional[int] = Field(None, alias="emailScore")
    phone_score: Optional[int] = Field(None, alias="phoneScore")


class TransformResult(BaseModel):
    """Outcome of transforming one raw hit: a lead, or a blocklist hit."""

    lead: Optional[Lead] = None
    blocked: bool = False


class SearchMeta(BaseModel):
    """Counters reported alongside the results."""

    model_config = ConfigDict(populate_by_name=True)

    total_items: int = Field(0, alias="totalItems")
    unique_domains: int = Field(0, alias="uniqueDomains")
    filtered_by_blacklist: int = Field(0, alias="filteredByBlacklist")
    filtered_by_score: int = Field(0, alias="filteredByScore")
    kept: int = 0


class LeadSearchResult(BaseModel):
    """Output of one pipeline run."""

    results: list[Lead] = []
    meta: SearchMeta = SearchMeta()
    queries: list[str] = []
    locale: str = "en"
