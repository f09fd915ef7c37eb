from .leads import (
    LeadResponse,
    LeadsResponse,
    SearchMetaResponse,
    EnrichmentResultResponse,
    EnrichResponse,
    ErrorResponse,
)

__all__ = [
    "LeadResponse",
    "LeadsResponse",
    "SearchMetaResponse",
    "EnrichmentResultResponse",
    "EnrichResponse",
    "ErrorResponse",
]
