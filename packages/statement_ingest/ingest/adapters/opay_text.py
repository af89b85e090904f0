"""Line parser for mobile-money statement exports (OPay layout).

Rows look like::

    15/01/2024 10:32:07 OPAY2401151032070001 Airtime MTN Successful 500.00 DR

i.e. ``Date [Time] [Reference] Description [Status] Amount [CR|DR]``. Header,
title and summary lines are skipped by substring. A trailing ``CR``/``DR``
after the amount is authoritative for direction; without it the last
amount-shaped token is used and direction comes from keywords.
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

_logger = get_logger("statement_ingest.ingest.adapters.opay_text")

BOILERPLATE_MARKERS: tuple[str, ...] = (
    "Transaction History",
    "Statement of Account",
    "Opening Balance",
    "Closing Balance",
    "Total Credit",
    "Total Debit",
    "Date/Time",
)

_DATE_PATTERNS: tuple[re.Pattern[str], ...] = (
    re.compile(r"(?<!\d)(\d{1,2}[/-]\d{1,2}[/-]\d{2,4})(?!\d)"),
    re.compile(r"(?<!\d)(\d{1,2}\s+[A-Za-z]{3,9}\s+\d{4})(?!\d)"),
)
_AMOUNT_RE = re.compile(r"\d[\d,]*\.?\d{2}")

_TIME_RE = re.compile(r"\d{2}:\d{2}:\d{2}")
_TRAILING_AMOUNT_RE = re.compile(
    r"(?:NGN|₦)?\s*\d[\d,]*\.?\d{0,2}\s*(?:CR|DR)?\s*$", re.IGNORECASE
)
_STATUS_RE = re.compile(r"Successful|Failed|Pending", re.IGNORECASE)
_REFERENCE_RE = re.compile(r"[A-Z]{2,}\d{10,}")


def _is_boilerplate(line: str) -> bool:
    return any(marker in line for marker in BOILERPLATE_MARKERS)


def _strip_dates_and_times(line: str) -> str:
    for pattern in _DATE_PATTERNS:
        line = pattern.sub(" ", line)
    return _TIME_RE.sub(" ", line)


def _clean_description(line: str) -> str:
    desc = _strip_dates_and_times(line)
    desc = _TRAILING_AMOUNT_RE.sub("", desc)
    desc = _STATUS_RE.sub("", desc)
    desc = _REFERENCE_RE.sub("", desc)
    return finalize_description(desc, min_len=3)


def parse_line(line: str, *, today: date | None = None) -> CandidateTransaction | None:
    """Parse one statement line; ``None`` when it is not a transaction row."""

    line = line.strip()
    if not line or _is_boilerplate(line):
        return None

    date_fragment = None
    for pattern in _DATE_PATTERNS:
        m = pattern.search(line)
        if m:
            date_fragment = m.group(1)
            break
    if date_fragment is None:
        return None

    tail = match_crdr_tail(line)
    if tail is not None:
        amount, direction = tail
    else:
        # Date and time digits are never the amount.
        amounts = _AMOUNT_RE.findall(_strip_dates_and_times(line))
        if not amounts:
            return None
        amount = parse_amount(amounts[-1])
        direction = classify_direction(line)
    if amount <= 0:
        return None

    parsed_date = parse_date(date_fragment, today=today)
    description = _clean_description(line)
    return CandidateTransaction(
        date=parsed_date.value,
        amount=amount,
        direction=direction,
        description=description,
        category=guess_category(description, direction),
        date_is_fallback=parsed_date.is_fallback,
    )


def parse_opay(text: str, *, today: date | None = None) -> list[CandidateTransaction]:
    lines = text.splitlines()
    out = [tx for tx in (parse_line(ln, today=today) for ln in lines) if tx is not None]
    _logger.debug("opay parser: %d transactions from %d lines", len(out), len(lines))
    return out


__all__ = ["BOILERPLATE_MARKERS", "parse_line", "parse_opay"]
