"""Duplicate detection against transactions already in the ledger.

A fingerprint is ``(date, amount, description[:50])``. Matching is exact:
no tolerance on amount or date and no fuzzy text comparison, so a missed
duplicate is preferred over hiding a legitimate transaction. Amounts are
compared at two-decimal precision so that ``5000`` (parsed) and
``Decimal("5000.00")`` (stored) agree.
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import replace
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import TypeAlias

from .logging_setup import get_logger
from .models import CandidateTransaction, ExistingTransaction

_logger = get_logger("statement_ingest.duplicates")

DESCRIPTION_PREFIX_LEN = 50

Fingerprint: TypeAlias = tuple[str, str, str]


def _amount_key(amount: Decimal | float | str) -> str:
    try:
        d = Decimal(str(amount))
    except (InvalidOperation, ValueError):
        return str(amount)
    return f"{d.quantize(Decimal('0.01'), rounding=ROUND_HALF_UP):.2f}"


def fingerprint(
    tx_date: str | date, amount: Decimal | float | str, description: str | None
) -> Fingerprint:
    d = tx_date.isoformat() if isinstance(tx_date, date) else str(tx_date)
    return d, _amount_key(amount), (description or "")[:DESCRIPTION_PREFIX_LEN]


def build_fingerprint_set(existing: Iterable[ExistingTransaction]) -> set[Fingerprint]:
    return {fingerprint(t.date, t.amount, t.description) for t in existing}


def mark_duplicates(
    candidates: Iterable[CandidateTransaction],
    existing: Iterable[ExistingTransaction],
) -> list[CandidateTransaction]:
    """Return copies of ``candidates`` with ``is_duplicate`` set.

    Inputs are not mutated; every returned item has ``is_duplicate``
    explicitly assigned.
    """

    seen = build_fingerprint_set(existing)
    out = [
        replace(c, is_duplicate=fingerprint(c.date, c.amount, c.description) in seen)
        for c in candidates
    ]
    _logger.info(
        "duplicates: %d of %d candidates match %d ledger fingerprints",
        sum(1 for c in out if c.is_duplicate),
        len(out),
        len(seen),
    )
    return out


__all__ = [
    "DESCRIPTION_PREFIX_LEN",
    "Fingerprint",
    "fingerprint",
    "build_fingerprint_set",
    "mark_duplicates",
]
