"""Public interface for the ``statement_ingest`` package.

Re-exports the orchestrator entrypoints, the record types, and the building
blocks (normalizers, category guesser, dispatcher, duplicate detector) that
callers and tests use directly.
"""

from .api import NO_TRANSACTIONS_MESSAGE, handle_upload, ingest_statement
from .categories import ALLOWED_CATEGORIES, guess_category
from .duplicates import fingerprint, mark_duplicates
from .errors import DecodeError, IngestError, InputTooLargeError, MissingFieldsError
from .ingest.dispatch import ParserStrategy, dispatch, is_supported_upload
from .ledger import InMemoryLedger, LedgerLookup, SqlLedgerLookup
from .models import (
    EXPENSE,
    INCOME,
    CandidateTransaction,
    Direction,
    ExistingTransaction,
    IngestRequest,
    IngestResponse,
    ParseResult,
)
from .normalizers import classify_direction, normalize_date, parse_amount, parse_date

__all__ = [
    # API
    "ingest_statement",
    "handle_upload",
    "NO_TRANSACTIONS_MESSAGE",
    # Building blocks
    "parse_amount",
    "parse_date",
    "normalize_date",
    "classify_direction",
    "guess_category",
    "ALLOWED_CATEGORIES",
    "ParserStrategy",
    "dispatch",
    "is_supported_upload",
    "fingerprint",
    "mark_duplicates",
    "LedgerLookup",
    "SqlLedgerLookup",
    "InMemoryLedger",
    # Models / types
    "Direction",
    "INCOME",
    "EXPENSE",
    "CandidateTransaction",
    "ExistingTransaction",
    "ParseResult",
    "IngestRequest",
    "IngestResponse",
    # Errors
    "IngestError",
    "DecodeError",
    "InputTooLargeError",
    "MissingFieldsError",
]
