"""Resolve a free-text country and optional language to a supported locale."""

from typing import Optional

from leadfinder.services.leads.patterns import DEFAULT_LOCALE, LOCALE_COUNTRIES

AUTO = "auto"


def normalize_country(country: Optional[str]) -> str:
    return (country or "").strip()


def resolve_locale(country: Optional[str], language: Optional[str] = AUTO) -> str:
    """Return the locale used for templates, scoring and enrichment paths.

    An explicit language other than "auto" is returned verbatim, even if it is
    not one of the supported locales; lookups fall back to English for codes
    they don't know. Otherwise the country is matched by substring against the
    Spanish, Portuguese, German and French country lists, in that order.
    """
    if language and language != AUTO:
        return language

    normalized = normalize_country(country).lower()
    if normalized:
        for locale, countries in LOCALE_COUNTRIES:
            if any(c in normalized for c in countries):
                return locale
    return DEFAULT_LOCALE
