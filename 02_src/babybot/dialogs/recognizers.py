"""Recognizers turning free-text replies into prompt values."""

import re
from datetime import date, timedelta

from ..models import DateTimeResolution

YES_WORDS = {"yes", "y", "yeah", "yep", "sure", "ok", "okay", "ja", "j"}
NO_WORDS = {"no", "n", "nope", "nein"}

MONTHS = {
    "january": 1, "jan": 1, "januar": 1,
    "february": 2, "feb": 2, "februar": 2,
    "march": 3, "mar": 3, "märz": 3, "maerz": 3,
    "april": 4, "apr": 4,
    "may": 5, "mai": 5,
    "june": 6, "jun": 6, "juni": 6,
    "july": 7, "jul": 7, "juli": 7,
    "august": 8, "aug": 8,
    "september": 9, "sep": 9, "sept": 9,
    "october": 10, "oct": 10, "oktober": 10, "okt": 10,
    "november": 11, "nov": 11,
    "december": 12, "dec": 12, "dezember": 12, "dez": 12,
}

_MONTH_NAMES = "|".join(sorted(MONTHS, key=len, reverse=True))

_ISO = re.compile(r"\b(\d{4})[-/](\d{1,2})[-/](\d{1,2})\b")
_DOTTED = re.compile(r"\b(\d{1,2})\.(\d{1,2})\.(\d{4})\b")
_SLASHED = re.compile(r"\b(\d{1,2})/(\d{1,2})/(\d{4})\b")
_DAY_MONTH = re.compile(
    rf"\b(\d{{1,2}})(?:st|nd|rd|th|\.)?\s+({_MONTH_NAMES})\.?(?:,?\s+(\d{{4}}))?\b",
    re.IGNORECASE,
)
_MONTH_DAY = re.compile(
    rf"\b({_MONTH_NAMES})\.?\s+(\d{{1,2}})(?:st|nd|rd|th)?(?:,?\s+(\d{{4}}))?\b",
    re.IGNORECASE,
)


def recognize_boolean(text: str | None) -> bool | None:
    """Map a yes/no reply to a bool, or None when it is neither."""
    if not text:
        return None
    word = text.strip().lower().rstrip(".!?")
    if word in YES_WORDS:
        return True
    if word in NO_WORDS:
        return False
    return None


def _safe_date(year: int, month: int, day: int) -> date | None:
    try:
        return date(year, month, day)
    except ValueError:
        return None


def _resolved(value: date) -> DateTimeResolution:
    return DateTimeResolution(timex=value.isoformat(), value=value.isoformat())


def _named_month(month_name: str, day: str, year: str | None) -> list[DateTimeResolution]:
    month = MONTHS[month_name.lower()]
    if year:
        value = _safe_date(int(year), month, int(day))
        return [_resolved(value)] if value else []

    # 2000 is a leap year, so 29 February is accepted without a year
    if _safe_date(2000, month, int(day)) is None:
        return []
    return [DateTimeResolution(timex=f"XXXX-{month:02d}-{int(day):02d}", value=None)]


def recognize_datetime(text: str | None, today: date | None = None) -> list[DateTimeResolution]:
    """Find date candidates in ``text``.

    Ambiguous numeric dates (``05/06/1990``) yield both readings, month-first
    first. Dates without a year keep only their symbolic timex.
    """
    if not text:
        return []
    today = today or date.today()
    lowered = text.strip().lower()

    if lowered in ("today", "heute"):
        return [_resolved(today)]
    if lowered in ("yesterday", "gestern"):
        return [_resolved(today - timedelta(days=1))]

    match = _ISO.search(text)
    if match:
        value = _safe_date(int(match[1]), int(match[2]), int(match[3]))
        return [_resolved(value)] if value else []

    match = _DOTTED.search(text)
    if match:
        value = _safe_date(int(match[3]), int(match[2]), int(match[1]))
        return [_resolved(value)] if value else []

    match = _SLASHED.search(text)
    if match:
        first, second, year = int(match[1]), int(match[2]), int(match[3])
        candidates = []
        for value in (_safe_date(year, first, second), _safe_date(year, second, first)):
            if value and value.isoformat() not in (c.value for c in candidates):
                candidates.append(_resolved(value))
        return candidates

    match = _DAY_MONTH.search(text)
    if match:
        return _named_month(match[2], match[1], match[3])

    match = _MONTH_DAY.search(text)
    if match:
        return _named_month(match[1], match[2], match[3])

    return []


def first_resolution_date(resolutions: list[DateTimeResolution] | None) -> date | None:
    """Date of the first candidate, preferring its value over its timex.

    Returns None for a missing, empty or unparseable resolution list.
    """
    if not resolutions:
        return None

    first = resolutions[0]
    raw = first.value or first.timex
    if not raw:
        return None

    try:
        return date.fromisoformat(raw)
    except ValueError:
        return None
