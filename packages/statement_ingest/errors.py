"""Exceptions raised by the ingestion entrypoints.

Only request-level problems are modeled here. Parsers never raise for bad
lines or rows; they drop them (see ``ingest.adapters``).
"""

from __future__ import annotations


class IngestError(ValueError):
    """Base class for fatal, request-level ingestion failures."""


class DecodeError(IngestError):
    """The transport encoding (base64) of the uploaded file is malformed."""


class InputTooLargeError(IngestError):
    """The decoded upload exceeds the configured size cap."""

    def __init__(self, size: int, limit: int) -> None:
        super().__init__(f"decoded file is {size} bytes; limit is {limit} bytes")
        self.size = size
        self.limit = limit


class MissingFieldsError(IngestError):
    """The request lacks ``file_content`` or ``account_id``."""


__all__ = [
    "IngestError",
    "DecodeError",
    "InputTooLargeError",
    "MissingFieldsError",
]
