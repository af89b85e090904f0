# ruff: noqa: E402, I001
from __future__ import annotations

import sys
from datetime import date
from pathlib import Path

import pytest

# Make sure the workspace `packages/` dir is on sys.path so `statement_ingest` is importable
_ROOT = Path(__file__).resolve().parents[2]
_PKG_DIR = _ROOT / "packages"
sys.path[:0] = [p for p in [str(_PKG_DIR), str(_ROOT)] if p not in sys.path]

from statement_ingest.api import handle_upload
from statement_ingest.ledger import SqlLedgerLookup

from tests.helpers.db import bootstrap_sqlite_db, seed_ledger
from tests.helpers.samples import BANK_CSV, OPAY_STATEMENT, b64


def test_csv_upload_flags_rows_already_in_sqlite_ledger(tmp_path: Path, today: date) -> None:
    url = bootstrap_sqlite_db(tmp_path / "ledger.sqlite3")
    seed_ledger(
        database_url=url,
        account_id="acct-1",
        rows=[("2024-01-16", "200.00", "expense", "POS MTN Airtime")],
    )
    seed_ledger(
        database_url=url,
        account_id="acct-2",
        rows=[("2024-01-15", "5000.00", "income", "Salary Payment")],
    )

    body = handle_upload(
        {
            "fileContent": b64(BANK_CSV),
            "fileName": "statement.csv",
            "fileType": "text/csv",
            "bankAccountId": "acct-1",
        },
        lookup=SqlLedgerLookup(database_url=url),
        today=today,
    )

    assert body["total_count"] == 2
    assert body["duplicate_count"] == 1
    assert [t["is_duplicate"] for t in body["transactions"]] == [False, True]


def test_user_scope_applies_to_sql_lookup(tmp_path: Path, today: date) -> None:
    url = bootstrap_sqlite_db(tmp_path / "ledger.sqlite3")
    seed_ledger(
        database_url=url,
        account_id="acct-1",
        user_id="user-2",
        rows=[("2024-01-15", "500.00", "expense", "Airtime MTN")],
    )
    lookup = SqlLedgerLookup(database_url=url)

    assert lookup(account_id="acct-1", user_id="user-1") == []
    (row,) = lookup(account_id="acct-1", user_id="user-2")
    assert (row.date, str(row.amount), row.description) == ("2024-01-15", "500.00", "Airtime MTN")

    body = handle_upload(
        {
            "file_content": b64(OPAY_STATEMENT),
            "file_name": "opay.txt",
            "account_id": "acct-1",
            "user_id": "user-2",
        },
        lookup=lookup,
        today=today,
    )
    assert body["total_count"] == 3
    assert [t["is_duplicate"] for t in body["transactions"]] == [True, False, False]


def test_database_url_from_environment(
    tmp_path: Path, today: date, monkeypatch: pytest.MonkeyPatch
) -> None:
    url = bootstrap_sqlite_db(tmp_path / "ledger.sqlite3")
    monkeypatch.setenv("DATABASE_URL", url)
    seed_ledger(
        database_url=url,
        account_id="acct-1",
        rows=[("2024-01-15", "5000", "income", "Salary Payment")],
    )

    body = handle_upload(
        {"file_content": b64(BANK_CSV), "file_name": "statement.csv", "account_id": "acct-1"},
        lookup=SqlLedgerLookup(),
        today=today,
    )
    salary, airtime = body["transactions"]
    assert salary["is_duplicate"] is True
    assert airtime["is_duplicate"] is False
