"""Turn raw search hits into scored, tagged leads.

Rules are evaluated against the lowercased "title snippet displayLink" text.
See patterns.py for the tables.
"""

from typing import Optional
from urllib.parse import SplitResult, urlsplit

from leadfinder.services.leads.models import Lead, RawSearchHit, SearchMode, TransformResult
from leadfinder.services.leads.patterns import (
    BASE_SCORE,
    CONTACT_TERM_BONUS,
    CONTACT_TERMS,
    DEALER_MODE_BONUS,
    DEALER_SCORE_THRESHOLD,
    DEFAULT_LOCALE,
    FORKLIFT_TERM_BONUS,
    FORKLIFT_TERMS,
    NON_EN_DEALER_THRESHOLD,
    OEM_BLOCKLIST_SUFFIXES,
    OEM_KEYWORDS,
    OEM_PENALTY,
    POSITIVE_KEYWORD_BONUS,
    POSITIVE_KEYWORDS,
    TAG_RULES,
)


def strip_www(host: str) -> str:
    host = (host or "").lower()
    return host[4:] if host.startswith("www.") else host


def parse_link(link: Optional[str]) -> Optional[SplitResult]:
    """Parse an absolute http(s) URL, or return None if it isn't one."""
    if not link:
        return None
    try:
        parsed = urlsplit(link.strip())
        hostname = parsed.hostname
    except ValueError:
        return None
    if parsed.scheme not in ("http", "https") or not hostname:
        return None
    return parsed


def is_blocked_domain(hostname: str) -> bool:
    """True if the host is a blocklisted OEM domain or one of its subdomains.

    Matching respects the dot boundary: "parts.hyster.com" is blocked,
    "myhyster.com" is not.
    """
    host = strip_www(hostname)
    return any(
        host == suffix.lstrip(".") or host.endswith(suffix)
        for suffix in OEM_BLOCKLIST_SUFFIXES
    )


def compute_score(text: str, hostname: str, mode: SearchMode) -> int:
    lower = (text or "").lower()
    host = (hostname or "").lower()
    score = BASE_SCORE

    for keyword in POSITIVE_KEYWORDS:
        if keyword in lower:
            score += POSITIVE_KEYWORD_BONUS

    if any(term in lower for term in FORKLIFT_TERMS):
        score += FORKLIFT_TERM_BONUS
    if any(term in lower for term in CONTACT_TERMS):
        score += CONTACT_TERM_BONUS

    # Catches OEM-affiliated sites living on domains the blocklist doesn't know
    if any(kw in host or kw in lower for kw in OEM_KEYWORDS):
        score -= OEM_PENALTY

    if mode == SearchMode.DEALER:
        score += DEALER_MODE_BONUS

    return max(0, min(100, score))


def derive_tags(text: str) -> list[str]:
    lower = (text or "").lower()
    tags: list[str] = []
    for tag, terms in TAG_RULES:
        if tag not in tags and any(term in lower for term in terms):
            tags.append(tag)
    return tags


def score_threshold(mode: SearchMode, locale: str) -> int:
    """Minimum score a lead needs to be kept. Broad mode keeps everything."""
    if mode != SearchMode.DEALER:
        return 0
    return DEALER_SCORE_THRESHOLD if locale == DEFAULT_LOCALE else NON_EN_DEALER_THRESHOLD


def transform_result(hit: RawSearchHit, country: str, mode: SearchMode) -> Optional[TransformResult]:
    """Convert one search hit into a lead.

    Returns None for hits without a usable link, and a result with
    ``blocked=True`` for OEM domains.
    """
    parsed = parse_link(hit.link)
    if parsed is None:
        return None

    website = parsed.hostname
    if is_blocked_domain(website):
        return TransformResult(blocked=True)

    company = (hit.title or "").strip() or strip_www(website)
    text = f"{hit.title} {hit.snippet} {hit.display_link}"

    return TransformResult(
        lead=Lead(
            country=country,
            company=company,
            website=website,
            source_url=hit.link,
            score=compute_score(text, website, mode),
            tags=derive_tags(text),
        )
    )
