"""Pytest configuration for test isolation.

Engine state in ``db.client`` is process-wide and configuration is read from
the environment, so every test starts from a clean environment and drops the
shared engine afterwards. Parsers take an explicit ``today``; the ``today``
fixture pins it so date fallbacks are deterministic.
"""

from __future__ import annotations

from collections.abc import Iterator
from datetime import date

import pytest
from db.client import reset_engine

FIXED_TODAY = date(2025, 3, 1)


@pytest.fixture(autouse=True)
def _isolate_env(monkeypatch: pytest.MonkeyPatch) -> Iterator[None]:
    for var in ("DATABASE_URL", "STATEMENT_INGEST_MAX_BYTES", "STATEMENT_INGEST_LOG_LEVEL"):
        monkeypatch.delenv(var, raising=False)
    yield
    reset_engine()


@pytest.fixture
def today() -> date:
    return FIXED_TODAY
