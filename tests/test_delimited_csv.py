from __future__ import annotations

from datetime import date

from statement_ingest.ingest.adapters.delimited_csv import detect_columns, parse_delimited
from statement_ingest.models import CandidateTransaction

from tests.helpers.samples import AMOUNT_TYPE_CSV, BANK_CSV


def test_debit_credit_columns(today: date) -> None:
    assert parse_delimited(BANK_CSV, today=today) == [
        CandidateTransaction("2024-01-15", 5000.0, "income", "Salary Payment", "Income"),
        CandidateTransaction("2024-01-16", 200.0, "expense", "POS MTN Airtime", "Utilities"),
    ]


def test_amount_and_type_columns(today: date) -> None:
    txs = parse_delimited(AMOUNT_TYPE_CSV, today=today)
    assert [(t.date, t.amount, t.direction, t.category) for t in txs] == [
        ("2024-01-15", 12500.0, "income", "Income"),
        ("2024-01-16", 3500.0, "expense", "Transport"),
    ]
    assert txs[0].description == "Inward transfer from Bola"


def test_amount_column_without_type_uses_description_keywords(today: date) -> None:
    text = (
        "Date,Details,Amount\n"
        "2024-02-01,Salary February,150000\n"
        "2024-02-02,Chicken Republic lunch,4500\n"
    )
    txs = parse_delimited(text, today=today)
    assert [(t.direction, t.category) for t in txs] == [
        ("income", "Income"),
        ("expense", "Food"),
    ]


def test_quoted_fields_keep_embedded_commas(today: date) -> None:
    text = 'Date,Description,Amount\n2024-01-05,"Transfer to Ada, rent","25,000.00"\n'
    (tx,) = parse_delimited(text, today=today)
    assert tx.description == "Transfer to Ada, rent"
    assert tx.amount == 25000.0
    assert tx.category == "Rent/Bills"


def test_rows_without_date_or_amount_are_dropped(today: date) -> None:
    text = (
        "Date,Description,Amount\n"
        ",No date row,100\n"
        "2024-03-01,Zero row,0\n"
        "\n"
        "lonely\n"
        "Pending,Odd date,250\n"
    )
    (tx,) = parse_delimited(text, today=today)
    # An unreadable (but present) date falls back to today and is flagged.
    assert tx.date == today.isoformat()
    assert tx.date_is_fallback is True
    assert tx.amount == 250.0
    assert tx.category == "Other"


def test_no_date_column_or_no_rows_yields_nothing(today: date) -> None:
    assert parse_delimited("foo,bar\n1,2\n", today=today) == []
    assert parse_delimited("Date,Description,Amount\n", today=today) == []
    assert parse_delimited("", today=today) == []


def test_missing_description_uses_placeholder(today: date) -> None:
    (tx,) = parse_delimited("Date,Amount\n2024-01-05,900\n", today=today)
    assert tx.description == "Bank Transaction"
    assert tx.category == "Other"


def test_detect_columns() -> None:
    cols = detect_columns(["Value Date", "Particulars", "Withdrawals", "Deposits", "Balance"])
    assert cols.date == 0
    assert cols.description == 1
    assert cols.debit == 2
    assert cols.credit == 3
    assert cols.amount is None
    assert cols.type is None

    cols = detect_columns(["Date", "Credit Amount", "Debit Amount", "Amount", "DR/CR"])
    assert cols.amount == 3
    assert cols.type == 4


def test_lines_the_csv_reader_rejects_are_skipped_individually(today: date) -> None:
    text = (
        "Date,Description,Amount\n"
        "2024-01-15,Salary Payment,5000\n"
        "2024-01-16,POS\rMTN,200\n"
        "2024-01-17," + "x" * 200_000 + ",300\n"
        "2024-01-18,Uber ride,1500\n"
    )
    txs = parse_delimited(text, today=today)
    assert [(t.date, t.amount, t.description) for t in txs] == [
        ("2024-01-15", 5000.0, "Salary Payment"),
        ("2024-01-18", 1500.0, "Uber ride"),
    ]
