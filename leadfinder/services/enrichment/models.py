"""Pydantic models for contact enrichment."""

from pydantic import BaseModel, ConfigDict, Field


class EnrichmentResult(BaseModel):
    """Contact details found on one website, with confidence scores."""

    model_config = ConfigDict(populate_by_name=True)

    email: str = ""
    phone: str = ""
    email_score: int = Field(0, alias="emailScore")
    phone_score: int = Field(0, alias="phoneScore")
    pages_visited: int = Field(0, exclude=True)
