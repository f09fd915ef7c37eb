"""Search query construction."""

from typing import Optional

from leadfinder.services.leads.models import SearchMode
from leadfinder.services.leads.patterns import CHANNEL_TEMPLATES, DEFAULT_LOCALE


def build_queries(
    keyword: str,
    country: Optional[str],
    locale: str,
    mode: SearchMode,
) -> list[str]:
    """Build the search query strings for one pipeline run.

    Dealer mode prefixes the keyword with an OR-group of the locale's channel
    phrases. Broad mode searches the keyword (and country) as-is. A single
    query is returned today; callers accept a list so more locales' phrase
    sets can be added later.
    """
    suffix = f" {country}" if country else ""
    if mode != SearchMode.DEALER:
        return [f"{keyword}{suffix}".strip()]

    templates = CHANNEL_TEMPLATES.get(locale) or CHANNEL_TEMPLATES[DEFAULT_LOCALE]
    or_part = " OR ".join(f'"{t}"' for t in templates)
    return [f"({or_part}) {keyword}{suffix}".strip()]
