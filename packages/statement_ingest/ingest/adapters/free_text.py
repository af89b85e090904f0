"""Generic parser for loosely structured, newline-delimited statement text.

Each line needs a recognizable date to produce a transaction. The amount is
the ``<amount> CR|DR`` tail when present; otherwise the numerically largest
value on the line. That heuristic assumes balances and reference numbers are
smaller than the transaction amount, which does not always hold (a four-digit
year can win over a small amount).

:func:`parse_text_content` is the entry point used for text and PDF uploads:
it tries the mobile-money layout first and falls back to the generic parser.
"""

from __future__ import annotations

import re
from datetime import date

from ...categories import guess_category
from ...logging_setup import get_logger
from ...models import CandidateTransaction
from ...normalizers import (
    classify_direction,
    finalize_description,
    match_crdr_tail,
    parse_amount,
    parse_date,
)
from .opay_text import parse_opay

_logger = get_logger("statement_ingest.ingest.adapters.free_text")

DATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?<!\d)(\d{2}[-/]\d{2}[-/]\d{4})(?!\d)"),
    re.compile(r"(?<!\d)(\d{4}[-/]\d{2}[-/]\d{2})(?!\d)"),
    re.compile(r"(?<!\d)(\d{2}[-/][A-Za-z]{3}[-/]\d{4})(?!\d)"),
    re.compile(r"(?<!\d)(\d{1,2}\s+[A-Za-z]{3,9}\s+\d{4})(?!\d)"),
)

AMOUNT_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?:NGN|₦|(?<![A-Za-z])N)?\s*\d[\d,]*\.?\d*"),
    re.compile(r"\d[\d,]*\.\d{2}"),
)

_CURRENCY_RE = re.compile(r"₦|\bNGN\b")
_TIME_RE = re.compile(r"\d{2}:\d{2}:\d{2}")
_TRAILING_MARKER_RE = re.compile(r"(CR|DR)\s*$", re.IGNORECASE)
_STATUS_RE = re.compile(r"Successful|Failed|Pending", re.IGNORECASE)


def _first_date(line: str) -> str | None:
    for pattern in DATE_PATTERNS:
        m = pattern.search(line)
        if m:
            return m.group(1)
    return None


def largest_amount(line: str) -> float:
    """Return the largest amount-shaped value on ``line`` (0.0 when none)."""

    best = 0.0
    for pattern in AMOUNT_PATTERNS:
        for token in pattern.findall(line):
            best = max(best, parse_amount(token))
    return best


def extract_description(line: str) -> str:
    desc = line
    for pattern in DATE_PATTERNS:
        desc = pattern.sub(" ", desc)
    for pattern in AMOUNT_PATTERNS:
        desc = pattern.sub(" ", desc)
    desc = _CURRENCY_RE.sub(" ", desc)
    desc = _TIME_RE.sub(" ", desc)
    desc = _TRAILING_MARKER_RE.sub("", desc.strip())
    desc = _STATUS_RE.sub(" ", desc)
    return finalize_description(desc)


def parse_line(line: str, *, today: date | None = None) -> CandidateTransaction | None:
    if not line.strip():
        return None
    date_fragment = _first_date(line)
    if date_fragment is None:
        return None

    tail = match_crdr_tail(line)
    if tail is not None:
        amount, direction = tail
    else:
        amount = largest_amount(line)
        direction = classify_direction(line)
    if amount <= 0:
        return None

    parsed_date = parse_date(date_fragment, today=today)
    return CandidateTransaction(
        date=parsed_date.value,
        amount=amount,
        direction=direction,
        description=extract_description(line),
        category=guess_category(line, direction),
        date_is_fallback=parsed_date.is_fallback,
    )


def parse_free_text(text: str, *, today: date | None = None) -> list[CandidateTransaction]:
    """Generic line-by-line parse; lines without date or amount are dropped."""

    lines = text.splitlines()
    out = [tx for tx in (parse_line(ln, today=today) for ln in lines) if tx is not None]
    _logger.debug("free-text parser: %d transactions from %d lines", len(out), len(lines))
    return out


def parse_text_content(text: str, *, today: date | None = None) -> list[CandidateTransaction]:
    """Mobile-money layout first; generic lines when that finds nothing."""

    found = parse_opay(text, today=today)
    if found:
        return found
    return parse_free_text(text, today=today)


__all__ = [
    "DATE_PATTERNS",
    "AMOUNT_PATTERNS",
    "largest_amount",
    "extract_description",
    "parse_free_text",
    "parse_text_content",
]
