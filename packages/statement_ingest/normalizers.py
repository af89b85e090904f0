"""Field normalizers shared by every statement parser.

- Amounts: locale-formatted numeric tokens (``"₦5,000.00"``, ``"NGN 1,200"``)
  to a non-negative ``float``; ``0.0`` means "no amount found".
- Dates: several regional notations to canonical ``YYYY-MM-DD`` with a
  "today" fallback that never fails the parse.
- Direction: CR/DR markers first, then credit keywords, else expense.
- Descriptions: whitespace collapse, length bound, placeholder.

All functions are pure. The only clock dependency is the ``today`` argument
of :func:`parse_date`, which callers inject per request.
"""

from __future__ import annotations

import math
import re
from datetime import date
from typing import NamedTuple

from .config import DESCRIPTION_MAX_LEN, PLACEHOLDER_DESCRIPTION
from .models import EXPENSE, INCOME, Direction

# ---------------------------------------------------------------------------
# Amounts
# ---------------------------------------------------------------------------

_NON_NUMERIC_RE = re.compile(r"[^\d.]")
_LEADING_NUMBER_RE = re.compile(r"\d+(?:\.\d*)?|\.\d+")


def parse_amount(raw: str | None) -> float:
    """Parse a numeric token into an unsigned magnitude.

    Everything except digits and the decimal point is discarded first, so
    currency symbols (``₦``, ``NGN``, ``N``, ``$``), thousands separators, signs
    and CR/DR suffixes are ignored. Returns ``0.0`` when nothing numeric
    remains; callers treat that as "no amount", never as a zero transaction.
    """

    if raw is None:
        return 0.0
    cleaned = _NON_NUMERIC_RE.sub("", str(raw))
    m = _LEADING_NUMBER_RE.match(cleaned)
    if not m:
        return 0.0
    value = float(m.group(0))
    if not math.isfinite(value):
        return 0.0
    return abs(value)


# ---------------------------------------------------------------------------
# Dates
# ---------------------------------------------------------------------------

# Keyed by the first three letters, which also covers full month names.
_MONTHS: dict[str, int] = {
    "jan": 1,
    "feb": 2,
    "mar": 3,
    "apr": 4,
    "may": 5,
    "jun": 6,
    "jul": 7,
    "aug": 8,
    "sep": 9,
    "oct": 10,
    "nov": 11,
    "dec": 12,
}

_ISO_RE = re.compile(r"(?<!\d)(\d{4})-(\d{2})-(\d{2})(?!\d)")
_DMY_RE = re.compile(r"(?<!\d)(\d{1,2})[-/](\d{1,2})[-/](\d{4}|\d{2})(?!\d)")
_YMD_RE = re.compile(r"(?<!\d)(\d{4})[-/](\d{1,2})[-/](\d{1,2})(?!\d)")
_D_MON_Y_RE = re.compile(r"(?<!\d)(\d{1,2})[-/\s]+([A-Za-z]{3,9})\.?[-/\s]+(\d{4})(?!\d)")


class NormalizedDate(NamedTuple):
    value: str
    is_fallback: bool


def _iso(year: int, month: int, day: int) -> str | None:
    try:
        return date(year, month, day).isoformat()
    except ValueError:
        return None


def _expand_two_digit_year(yy: str) -> int:
    # Fixed pivot: 51..99 -> 19xx, 00..50 -> 20xx.
    n = int(yy)
    return 1900 + n if n > 50 else 2000 + n


def _month_number(name: str) -> int:
    return _MONTHS.get(name[:3].lower(), 1)


def _match_date(s: str) -> str | None:
    m = _ISO_RE.search(s)
    if m:
        iso = _iso(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        if iso is not None:
            return iso

    m = _DMY_RE.search(s)
    if m:
        day, month, year_raw = m.groups()
        year = _expand_two_digit_year(year_raw) if len(year_raw) == 2 else int(year_raw)
        iso = _iso(year, int(month), int(day))
        if iso is not None:
            return iso

    m = _YMD_RE.search(s)
    if m:
        iso = _iso(int(m.group(1)), int(m.group(2)), int(m.group(3)))
        if iso is not None:
            return iso

    m = _D_MON_Y_RE.search(s)
    if m:
        day, month_name, year_raw = m.groups()
        iso = _iso(int(year_raw), _month_number(month_name), int(day))
        if iso is not None:
            return iso

    return None


def parse_date(fragment: str | None, *, today: date | None = None) -> NormalizedDate:
    """Normalize a date-shaped fragment to ``YYYY-MM-DD``.

    Patterns are tried in a fixed order: canonical ``YYYY-MM-DD``,
    ``DD/MM/YYYY`` (or two-digit year), ``YYYY/M/D``, then ``DD Mon YYYY``.
    A match that is not a real calendar date counts as no match. When nothing
    matches, ``today`` (or the system date) is returned with
    ``is_fallback=True``.
    """

    s = (fragment or "").replace('"', "").replace("'", "").strip()
    iso = _match_date(s) if s else None
    if iso is not None:
        return NormalizedDate(iso, False)
    return NormalizedDate((today or date.today()).isoformat(), True)


def normalize_date(fragment: str | None, *, today: date | None = None) -> str:
    """Return only the canonical date string from :func:`parse_date`."""

    return parse_date(fragment, today=today).value


# ---------------------------------------------------------------------------
# Direction
# ---------------------------------------------------------------------------

CREDIT_KEYWORDS: tuple[str, ...] = (
    "credit",
    "cr",
    "deposit",
    "inflow",
    "transfer from",
    "received",
    "incoming",
    "refund",
    "salary",
    "wage",
    "bonus",
    "from ",
    "inward",
)

_AMOUNT_TOKEN = r"\d[\d,]*\.?\d{0,2}"
_CRDR_MARKER_RE = re.compile(rf"{_AMOUNT_TOKEN}\s*(CR|DR)\b", re.IGNORECASE)
_CRDR_TAIL_RE = re.compile(
    rf"(?:NGN|₦)?\s*({_AMOUNT_TOKEN})\s*(CR|DR)\s*$", re.IGNORECASE
)


def _marker_direction(marker: str) -> Direction:
    return INCOME if marker.upper() == "CR" else EXPENSE


def match_crdr_tail(line: str) -> tuple[float, Direction] | None:
    """Return ``(amount, direction)`` when ``line`` ends with ``<amount> CR|DR``."""

    m = _CRDR_TAIL_RE.search(line.strip())
    if not m:
        return None
    return parse_amount(m.group(1)), _marker_direction(m.group(2))


def has_credit_keyword(text: str) -> bool:
    lower = text.lower()
    return any(k in lower for k in CREDIT_KEYWORDS)


def classify_direction(text: str | None) -> Direction:
    """Classify ``text`` as income or expense.

    An amount directly followed by ``CR``/``DR`` decides outright. Otherwise
    any credit keyword means income. Everything else is an expense; there is
    no debit keyword check.
    """

    s = text or ""
    m = _CRDR_MARKER_RE.search(s)
    if m:
        return _marker_direction(m.group(1))
    return INCOME if has_credit_keyword(s) else EXPENSE


# ---------------------------------------------------------------------------
# Descriptions
# ---------------------------------------------------------------------------

_WS_RE = re.compile(r"\s+")


def finalize_description(text: str | None, *, min_len: int = 1) -> str:
    """Collapse whitespace and bound the length of a description.

    Returns the placeholder when fewer than ``min_len`` characters remain.
    """

    s = _WS_RE.sub(" ", text or "").strip()
    if len(s) < min_len:
        return PLACEHOLDER_DESCRIPTION
    return s[:DESCRIPTION_MAX_LEN].rstrip()


__all__ = [
    "CREDIT_KEYWORDS",
    "NormalizedDate",
    "parse_amount",
    "parse_date",
    "normalize_date",
    "match_crdr_tail",
    "has_credit_keyword",
    "classify_direction",
    "finalize_description",
]
