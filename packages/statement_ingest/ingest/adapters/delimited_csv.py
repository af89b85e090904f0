"""Adapter for comma-delimited bank exports with a header row.

No fixed schema is assumed. Columns are located by fuzzy header matching
(first header containing one of the tokens wins):

- date: ``date``, ``trans``, ``value``
- description: ``desc``, ``narration``, ``details``, ``particular``
- amount: ``amount`` (but not ``credit``/``debit``)
- credit / debit: ``credit``, ``deposit``, ``inflow`` / ``debit``,
  ``withdrawal``, ``outflow``
- type: ``type``, ``dr/cr``, ``cr/dr``

A credit/debit pair wins over a single amount column. Rows without a date
cell or with no positive amount are dropped, as are lines the csv reader
rejects (stray carriage returns, oversized fields).
"""

from __future__ import annotations

import csv
from collections.abc import Sequence
from dataclasses import dataclass
from datetime import date
from io import StringIO

from ...categories import guess_category
from ...logging_setup import get_logger
from ...models import EXPENSE, INCOME, CandidateTransaction, Direction
from ...normalizers import (
    classify_direction,
    finalize_description,
    has_credit_keyword,
    parse_amount,
    parse_date,
)

_logger = get_logger("statement_ingest.ingest.adapters.delimited_csv")


@dataclass(frozen=True, slots=True)
class ColumnMap:
    """Detected column indices; ``None`` when a column is absent."""

    date: int | None
    description: int | None
    amount: int | None
    credit: int | None
    debit: int | None
    type: int | None


def _find(headers: Sequence[str], *tokens: str, exclude: tuple[str, ...] = ()) -> int | None:
    for i, h in enumerate(headers):
        if any(t in h for t in tokens) and not any(x in h for x in exclude):
            return i
    return None


def detect_columns(header_row: Sequence[str]) -> ColumnMap:
    headers = [h.strip().replace('"', "").lower() for h in header_row]
    return ColumnMap(
        date=_find(headers, "date", "trans", "value"),
        description=_find(headers, "desc", "narration", "details", "particular"),
        amount=_find(headers, "amount", exclude=("credit", "debit")),
        credit=_find(headers, "credit", "deposit", "inflow"),
        debit=_find(headers, "debit", "withdrawal", "outflow"),
        type=_find(headers, "type", "dr/cr", "cr/dr"),
    )


def _cell(values: Sequence[str], idx: int | None) -> str:
    if idx is None or idx >= len(values):
        return ""
    return values[idx].strip().replace('"', "")


def _amount_and_direction(
    values: Sequence[str], cols: ColumnMap, description: str
) -> tuple[float, Direction]:
    if cols.credit is not None and cols.debit is not None:
        credit = parse_amount(_cell(values, cols.credit))
        if credit > 0:
            return credit, INCOME
        debit = parse_amount(_cell(values, cols.debit))
        if debit > 0:
            return debit, EXPENSE
        return 0.0, EXPENSE

    if cols.amount is not None:
        amount = parse_amount(_cell(values, cols.amount))
        if cols.type is not None:
            # "cr" is itself a credit keyword, so "CR"/"Credit" cells are income.
            type_cell = _cell(values, cols.type)
            return amount, INCOME if has_credit_keyword(type_cell) else EXPENSE
        return amount, classify_direction(description)

    return 0.0, EXPENSE


def _parse_row(
    values: Sequence[str], cols: ColumnMap, *, today: date | None
) -> CandidateTransaction | None:
    if len(values) < 2:
        return None

    date_cell = _cell(values, cols.date)
    if not date_cell:
        return None
    parsed_date = parse_date(date_cell, today=today)

    raw_description = _cell(values, cols.description)
    amount, direction = _amount_and_direction(values, cols, raw_description)
    if amount <= 0:
        return None

    return CandidateTransaction(
        date=parsed_date.value,
        amount=amount,
        direction=direction,
        description=finalize_description(raw_description),
        category=guess_category(raw_description, direction),
        date_is_fallback=parsed_date.is_fallback,
    )


def _read_rows(text: str) -> list[list[str]]:
    # csv handles RFC 4180 quoting; blank lines come back as empty lists.
    rows: list[list[str]] = []
    with StringIO(text) as f:
        reader = csv.reader(f)
        while True:
            consumed = reader.line_num
            try:
                row = next(reader)
            except StopIteration:
                break
            except csv.Error as exc:
                _logger.debug(
                    "delimited parser: skipping unreadable line %d (%s)", reader.line_num, exc
                )
                # The reader restarts on the next line; stop if it made no progress.
                if reader.line_num == consumed:
                    break
                continue
            if any(c.strip() for c in row):
                rows.append(row)
    return rows


def parse_delimited(text: str, *, today: date | None = None) -> list[CandidateTransaction]:
    """Parse comma-delimited statement text into candidate transactions."""

    rows = _read_rows(text)
    if len(rows) < 2:
        return []

    cols = detect_columns(rows[0])
    _logger.debug("delimited parser: columns %s", cols)

    out: list[CandidateTransaction] = []
    for line_no, values in enumerate(rows[1:], start=2):
        try:
            tx = _parse_row(values, cols, today=today)
        except (ValueError, IndexError) as exc:
            _logger.debug("delimited parser: skipping row %d (%s)", line_no, exc)
            continue
        if tx is not None:
            out.append(tx)
    return out


__all__ = ["ColumnMap", "detect_columns", "parse_delimited"]
