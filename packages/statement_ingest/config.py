"""Environment-driven settings for the ingestion engine.

Values are read at call time (not import time) so tests and host processes
can adjust the environment without reloading modules.
"""

from __future__ import annotations

import os

# Bound applied to every emitted description.
DESCRIPTION_MAX_LEN = 100

# Used when extraction leaves nothing usable.
PLACEHOLDER_DESCRIPTION = "Bank Transaction"

_MAX_BYTES_ENV = "STATEMENT_INGEST_MAX_BYTES"
DEFAULT_MAX_BYTES = 10 * 1024 * 1024


def resolve_max_upload_bytes() -> int:
    """Return the decoded-payload cap in bytes.

    Honors ``STATEMENT_INGEST_MAX_BYTES`` when it holds a positive integer;
    anything else falls back to :data:`DEFAULT_MAX_BYTES`.
    """

    raw = os.getenv(_MAX_BYTES_ENV)
    try:
        value = int(raw) if raw else None
    except ValueError:
        value = None
    if value is not None and value > 0:
        return value
    return DEFAULT_MAX_BYTES


__all__ = [
    "DESCRIPTION_MAX_LEN",
    "PLACEHOLDER_DESCRIPTION",
    "DEFAULT_MAX_BYTES",
    "resolve_max_upload_bytes",
]
