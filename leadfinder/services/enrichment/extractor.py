"""Best-effort email and phone extraction from page text.

Both extractors return the first acceptable match in document order, or an
empty string.
"""

import re
from typing import Optional

from leadfinder.services.leads.patterns import PLACEHOLDER_EMAIL_DOMAINS

EMAIL_RE = re.compile(r"[A-Z0-9._%+-]+@[A-Z0-9.-]+\.[A-Z]{2,}", re.I)
PHONE_RE = re.compile(r"\+?\d[\d\s().-]{6,}\d")

MIN_PHONE_DIGITS = 7
MAX_PHONE_DIGITS = 20

_NON_DIGIT = re.compile(r"\D")


def _digits(value: str) -> str:
    return _NON_DIGIT.sub("", value or "")


def extract_email(text: str) -> str:
    match = EMAIL_RE.search(text or "")
    return match.group(0) if match else ""


def extract_phone(text: str) -> str:
    """First phone-like run with 7 to 20 digits, trimmed."""
    for match in PHONE_RE.finditer(text or ""):
        candidate = match.group(0)
        if MIN_PHONE_DIGITS <= len(_digits(candidate)) <= MAX_PHONE_DIGITS:
            return candidate.strip()
    return ""


def score_email(email: str) -> int:
    if not email:
        return 0
    lower = email.lower()
    if lower.endswith(PLACEHOLDER_EMAIL_DOMAINS):
        return 10
    if "info@" in lower:
        return 50
    if "sales" in lower or "contact" in lower:
        return 70
    return 60


def score_phone(phone: str, country: Optional[str] = None) -> int:
    """Confidence for a phone number.

    Long numbers score higher. The country bonus is a weak hint only: it
    checks whether the raw number contains the first three characters of the
    country name.
    """
    if not phone:
        return 0
    score = 70 if len(_digits(phone)) >= 10 else 50
    if country and country[:3] in phone:
        score += 5
    return min(90, score)
