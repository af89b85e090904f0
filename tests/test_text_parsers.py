from __future__ import annotations

from datetime import date

from statement_ingest.ingest.adapters.free_text import (
    largest_amount,
    parse_free_text,
    parse_text_content,
)
from statement_ingest.ingest.adapters.opay_text import parse_line as parse_opay_line
from statement_ingest.ingest.adapters.opay_text import parse_opay
from statement_ingest.models import CandidateTransaction

from tests.helpers.samples import OPAY_STATEMENT


def test_opay_statement_lines(today: date) -> None:
    assert parse_opay(OPAY_STATEMENT, today=today) == [
        CandidateTransaction("2024-01-15", 500.0, "expense", "Airtime MTN", "Utilities"),
        CandidateTransaction(
            "2024-01-16", 25000.0, "income", "Transfer from Chidi Okeke", "Income"
        ),
        CandidateTransaction("2024-01-17", 2300.5, "expense", "Bolt ride Lagos", "Transport"),
    ]


def test_opay_skips_boilerplate_even_with_date_and_amount(today: date) -> None:
    assert parse_opay_line("Opening Balance 01/01/2024 10,000.00", today=today) is None
    assert parse_opay_line("Closing Balance 31/01/2024 34,500.00 CR", today=today) is None


def test_opay_cr_tail_is_authoritative(today: date) -> None:
    tx = parse_opay_line("15/01/2024  Transfer from John  5000.00 CR", today=today)
    assert tx == CandidateTransaction(
        "2024-01-15", 5000.0, "income", "Transfer from John", "Income"
    )


def test_opay_short_description_becomes_placeholder(today: date) -> None:
    tx = parse_opay_line("15/01/2024 10:00:00 OK 150.00 DR", today=today)
    assert tx is not None
    assert tx.description == "Bank Transaction"


def test_opay_month_name_date(today: date) -> None:
    tx = parse_opay_line("5 March 2024 Netflix subscription 4,400.00 DR", today=today)
    assert tx is not None
    assert (tx.date, tx.amount, tx.category) == ("2024-03-05", 4400.0, "Entertainment")


def test_opay_line_without_date_or_amount_is_dropped(today: date) -> None:
    assert parse_opay_line("Airtime MTN 500.00 DR", today=today) is None
    assert parse_opay_line("15/01/2024 pending review", today=today) is None
    assert parse_opay_line("", today=today) is None


def test_generic_line_with_iso_date(today: date) -> None:
    assert parse_free_text("2024-03-05 Salary for March 450,000.00", today=today) == [
        CandidateTransaction("2024-03-05", 450000.0, "income", "Salary for March", "Income")
    ]


def test_generic_prefers_crdr_tail_over_largest_amount(today: date) -> None:
    (tx,) = parse_free_text("15/01/2024 Transfer from John 5000.00 CR", today=today)
    assert (tx.amount, tx.direction, tx.description) == (5000.0, "income", "Transfer from John")


def test_generic_largest_amount_can_pick_the_year(today: date) -> None:
    # Known limitation: without a CR/DR tail the largest number wins, and a
    # four-digit year beats an amount below 2024.
    (tx,) = parse_free_text("12/02/2024 POS purchase Shoprite 1,500.00", today=today)
    assert tx.amount == 2024.0


def test_largest_amount() -> None:
    assert largest_amount("Balance 1,000.00 Amount NGN 25,000.50 Ref 12") == 25000.5
    assert largest_amount("no digits here") == 0.0


def test_text_content_tries_mobile_money_layout_first(today: date) -> None:
    # The same line through the combined parser strips the date before
    # looking for the amount, so the year is not mistaken for it.
    (tx,) = parse_text_content("12/02/2024 POS purchase Shoprite 1,500.00", today=today)
    assert (tx.amount, tx.direction, tx.category) == (1500.0, "expense", "Shopping")
    assert tx.description == "POS purchase Shoprite"


def test_text_content_falls_back_to_generic_lines(today: date) -> None:
    (tx,) = parse_text_content("2024-03-05 Salary for March 450,000.00", today=today)
    assert tx.date == "2024-03-05"
    assert tx.amount == 450000.0


def test_text_content_without_dates_is_empty(today: date) -> None:
    assert parse_text_content("hello world\nnothing to see here\n", today=today) == []
