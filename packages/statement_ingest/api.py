"""Public API for ``statement_ingest``: the ingestion orchestrator.

Flow per upload: decode base64 → size cap → format dispatch → (if anything
was found) one ledger lookup → duplicate annotation → result.

- :func:`ingest_statement` raises :class:`~statement_ingest.errors.IngestError`
  subclasses for fatal request problems and returns a
  :class:`~statement_ingest.models.ParseResult` otherwise, including the
  "no transactions found" outcome.
- :func:`handle_upload` is the transport-facing wrapper: it takes the request
  mapping the web client sends and always returns a JSON-ready ``dict``
  (success body or ``{"error": ..., "details": ...}``).
"""

from __future__ import annotations

from collections.abc import Mapping
from datetime import date
from typing import Any

from pydantic import ValidationError

from .config import resolve_max_upload_bytes
from .duplicates import mark_duplicates
from .errors import DecodeError, InputTooLargeError, MissingFieldsError
from .ingest.decode import decode_transport
from .ingest.dispatch import dispatch
from .ledger import LedgerLookup
from .logging_setup import get_logger
from .models import IngestRequest, IngestResponse, ParseResult

_logger = get_logger("statement_ingest.api")

NO_TRANSACTIONS_MESSAGE = "No transactions found in the statement"


def ingest_statement(
    file_content: str | bytes | None,
    *,
    file_name: str | None,
    file_type: str | None,
    account_id: str | None,
    lookup: LedgerLookup,
    user_id: str | None = None,
    today: date | None = None,
) -> ParseResult:
    """Parse one uploaded statement into reviewed-ready candidates.

    Parameters
    ----------
    file_content:
        Base64-encoded file bytes.
    file_name, file_type:
        Declared name and MIME type; either may be missing.
    account_id, user_id:
        Scope of the existing-transaction lookup.
    lookup:
        Existing-transaction source, called at most once.
    today:
        Date substituted for unreadable dates; defaults to the system date,
        read once for the whole request.
    """

    if not file_content or not account_id:
        raise MissingFieldsError("file_content and account_id are required")

    data = decode_transport(file_content)
    limit = resolve_max_upload_bytes()
    if len(data) > limit:
        raise InputTooLargeError(len(data), limit)

    _logger.info(
        "ingest: %s (%s) %d bytes for account %s", file_name, file_type, len(data), account_id
    )
    candidates = dispatch(
        data,
        file_name=file_name,
        file_type=file_type,
        today=today or date.today(),
    )
    if not candidates:
        _logger.info("ingest: no transactions found in %s", file_name)
        return ParseResult(transactions=[], message=NO_TRANSACTIONS_MESSAGE)

    existing = list(lookup(account_id=account_id, user_id=user_id))
    result = ParseResult(transactions=mark_duplicates(candidates, existing))
    _logger.info(
        "ingest: %d transactions, %d duplicates", result.total_count, result.duplicate_count
    )
    return result


def _error(message: str, details: str | None = None) -> dict[str, Any]:
    body: dict[str, Any] = {"error": message}
    if details:
        body["details"] = details
    return body


def handle_upload(
    payload: Mapping[str, Any] | IngestRequest,
    *,
    lookup: LedgerLookup,
    today: date | None = None,
) -> dict[str, Any]:
    """Run :func:`ingest_statement` for a request body and return a response body.

    Fatal request errors come back as ``{"error", "details"}``; ledger and
    database failures propagate to the caller.
    """

    try:
        req = (
            payload if isinstance(payload, IngestRequest) else IngestRequest.model_validate(payload)
        )
    except ValidationError as exc:
        return _error("Invalid request", str(exc))

    try:
        result = ingest_statement(
            req.file_content,
            file_name=req.file_name,
            file_type=req.file_type,
            account_id=req.account_id,
            user_id=req.user_id,
            lookup=lookup,
            today=today,
        )
    except MissingFieldsError as exc:
        return _error("Missing required fields", str(exc))
    except DecodeError as exc:
        _logger.warning("ingest: unreadable file encoding for %s: %s", req.file_name, exc)
        return _error("Invalid file encoding", str(exc))
    except InputTooLargeError as exc:
        return _error("File too large", str(exc))

    return IngestResponse.from_result(result).model_dump()


__all__ = ["NO_TRANSACTIONS_MESSAGE", "ingest_statement", "handle_upload"]
