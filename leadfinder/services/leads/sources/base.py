"""Abstract base class for search sources."""

from abc import ABC, abstractmethod
from typing import Optional

from leadfinder.services.leads.models import RawSearchHit


class SearchSource(ABC):
    """Base class for web search sources.

    Implementations: GoogleSearchClient.
    """

    @abstractmethod
    async def search(
        self,
        queries: list[str],
        limit: int,
        start: Optional[int] = None,
    ) -> list[RawSearchHit]:
        """Fetch up to ``limit`` hits per query.

        Hits are returned in call-issue order without deduplication. Any
        failed call fails the whole search.
        """
        ...
