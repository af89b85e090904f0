"""Data models for ``statement_ingest``.

Internal records are frozen ``dataclass``es so parser output can be shared and
compared freely (parsers are pure; duplicate annotation copies records via
:func:`dataclasses.replace`). The request/response shapes exchanged with the
calling service are pydantic models.

Field semantics
---------------
- ``date``: canonical ``YYYY-MM-DD`` string.
- ``amount``: positive magnitude as ``float``; direction carries the sign.
- ``direction``: ``"income"`` or ``"expense"``, never unset.
- ``category``: member of :data:`statement_ingest.categories.ALLOWED_CATEGORIES`.
"""

from __future__ import annotations

from collections.abc import Sequence
from dataclasses import dataclass, field
from decimal import Decimal
from typing import Literal, TypeAlias

from pydantic import AliasChoices, BaseModel, ConfigDict, Field

Direction: TypeAlias = Literal["income", "expense"]

INCOME: Direction = "income"
EXPENSE: Direction = "expense"


@dataclass(frozen=True, slots=True)
class CandidateTransaction:
    """A parsed, not-yet-confirmed transaction awaiting human review.

    ``date_is_fallback`` is True when no date could be read from the source
    and the request's "today" was substituted; callers may surface it as a
    low-confidence marker.
    """

    date: str
    amount: float
    direction: Direction
    description: str
    category: str
    is_duplicate: bool = False
    date_is_fallback: bool = False


@dataclass(frozen=True, slots=True)
class ExistingTransaction:
    """Read-only view of a transaction already recorded in the ledger."""

    date: str
    amount: Decimal | float
    description: str | None = None


@dataclass(frozen=True, slots=True)
class ParseResult:
    """The engine's output for one upload."""

    transactions: list[CandidateTransaction] = field(default_factory=list)
    message: str | None = None

    @property
    def total_count(self) -> int:
        return len(self.transactions)

    @property
    def duplicate_count(self) -> int:
        return sum(1 for t in self.transactions if t.is_duplicate)


# ---------------------------------------------------------------------------
# Transport DTOs
# ---------------------------------------------------------------------------


class IngestRequest(BaseModel):
    """Upload request as sent by the web client.

    Accepts both snake_case and the client's camelCase keys. All fields are
    optional at the schema level; required-field checks happen in
    :func:`statement_ingest.api.ingest_statement` so they can be reported as a
    regular error result.
    """

    model_config = ConfigDict(extra="ignore", str_strip_whitespace=True)

    file_content: str | None = Field(
        default=None, validation_alias=AliasChoices("file_content", "fileContent")
    )
    file_name: str | None = Field(
        default=None, validation_alias=AliasChoices("file_name", "fileName")
    )
    file_type: str | None = Field(
        default=None, validation_alias=AliasChoices("file_type", "fileType")
    )
    account_id: str | None = Field(
        default=None,
        validation_alias=AliasChoices("account_id", "accountId", "bankAccountId"),
    )
    user_id: str | None = Field(default=None, validation_alias=AliasChoices("user_id", "userId"))


class TransactionOut(BaseModel):
    model_config = ConfigDict(extra="forbid")

    date: str
    amount: float
    direction: Direction
    description: str
    category: str
    is_duplicate: bool
    date_is_fallback: bool

    @classmethod
    def from_candidate(cls, tx: CandidateTransaction) -> TransactionOut:
        return cls(
            date=tx.date,
            amount=tx.amount,
            direction=tx.direction,
            description=tx.description,
            category=tx.category,
            is_duplicate=tx.is_duplicate,
            date_is_fallback=tx.date_is_fallback,
        )


class IngestResponse(BaseModel):
    """Successful (possibly empty) ingestion response."""

    model_config = ConfigDict(extra="forbid")

    transactions: list[TransactionOut]
    total_count: int
    duplicate_count: int
    message: str | None = None

    @classmethod
    def from_result(cls, result: ParseResult) -> IngestResponse:
        items: Sequence[CandidateTransaction] = result.transactions
        return cls(
            transactions=[TransactionOut.from_candidate(t) for t in items],
            total_count=result.total_count,
            duplicate_count=result.duplicate_count,
            message=result.message,
        )


__all__ = [
    "Direction",
    "INCOME",
    "EXPENSE",
    "CandidateTransaction",
    "ExistingTransaction",
    "ParseResult",
    "IngestRequest",
    "TransactionOut",
    "IngestResponse",
]
