"""Existing-transaction lookups used for duplicate detection.

A lookup is any callable ``(*, account_id, user_id) -> Iterable[ExistingTransaction]``.
It is called once per request, before duplicate annotation, and never
writes.

- :class:`SqlLedgerLookup` reads the ledger ``transactions`` table through
  ``db.client``.
- :class:`InMemoryLedger` holds rows in process (tests, standalone CLI runs).
"""

from __future__ import annotations

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from db.client import session_scope
from db.models.ledger import LedgerTransaction
from sqlalchemy import select

from .models import ExistingTransaction


class LedgerLookup(Protocol):
    def __call__(
        self, *, account_id: str, user_id: str | None = None
    ) -> Iterable[ExistingTransaction]: ...


@dataclass(frozen=True, slots=True)
class SqlLedgerLookup:
    """Fetch ``(date, amount, description)`` for one account from the ledger DB."""

    database_url: str | None = None

    def __call__(
        self, *, account_id: str, user_id: str | None = None
    ) -> list[ExistingTransaction]:
        stmt = select(
            LedgerTransaction.date,
            LedgerTransaction.amount,
            LedgerTransaction.description,
        ).where(LedgerTransaction.bank_account_id == account_id)
        if user_id is not None:
            stmt = stmt.where(LedgerTransaction.user_id == user_id)

        with session_scope(database_url=self.database_url) as session:
            rows = session.execute(stmt).all()
        return [ExistingTransaction(date=r[0], amount=r[1], description=r[2]) for r in rows]


@dataclass(slots=True)
class InMemoryLedger:
    """Ledger rows kept in a list of ``(account_id, user_id, transaction)``.

    Scoping matches :class:`SqlLedgerLookup`: a ``user_id`` argument keeps only
    rows owned by that user.
    """

    rows: list[tuple[str, str | None, ExistingTransaction]] = field(default_factory=list)

    def add(
        self, account_id: str, tx: ExistingTransaction, *, user_id: str | None = None
    ) -> None:
        self.rows.append((account_id, user_id, tx))

    def __call__(
        self, *, account_id: str, user_id: str | None = None
    ) -> list[ExistingTransaction]:
        return [
            tx
            for acct, owner, tx in self.rows
            if acct == account_id and (user_id is None or owner == user_id)
        ]


__all__ = ["LedgerLookup", "SqlLedgerLookup", "InMemoryLedger"]
