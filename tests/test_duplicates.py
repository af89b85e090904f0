from __future__ import annotations

from datetime import date
from decimal import Decimal

from statement_ingest.duplicates import fingerprint, mark_duplicates
from statement_ingest.models import CandidateTransaction, ExistingTransaction

SALARY = CandidateTransaction("2024-01-15", 5000.0, "income", "Salary Payment", "Income")
AIRTIME = CandidateTransaction("2024-01-16", 200.0, "expense", "POS MTN Airtime", "Utilities")


def test_fingerprint_normalizes_date_and_amount_representation() -> None:
    assert fingerprint("2024-01-15", 5000, "x") == fingerprint(
        date(2024, 1, 15), Decimal("5000.00"), "x"
    )
    assert fingerprint("2024-01-15", 0.1 + 0.2, None) == ("2024-01-15", "0.30", "")


def test_no_existing_means_no_duplicates() -> None:
    out = mark_duplicates([SALARY, AIRTIME], [])
    assert [t.is_duplicate for t in out] == [False, False]


def test_exact_match_is_flagged_and_inputs_are_not_mutated() -> None:
    existing = [ExistingTransaction("2024-01-16", Decimal("200.00"), "POS MTN Airtime")]
    out = mark_duplicates([SALARY, AIRTIME], existing)
    assert [t.is_duplicate for t in out] == [False, True]
    assert AIRTIME.is_duplicate is False
    assert out[1].category == "Utilities"


def test_any_difference_in_date_amount_or_text_prefix_is_not_a_duplicate() -> None:
    existing = [
        ExistingTransaction("2024-01-17", 200, "POS MTN Airtime"),
        ExistingTransaction("2024-01-16", 200.01, "POS MTN Airtime"),
        ExistingTransaction("2024-01-16", 200, "POS MTN airtime"),
    ]
    (out,) = mark_duplicates([AIRTIME], existing)
    assert out.is_duplicate is False


def test_only_first_fifty_description_characters_are_compared() -> None:
    prefix = "A" * 50
    candidate = CandidateTransaction("2024-01-16", 10.0, "expense", prefix + " tail one", "Other")
    existing = [ExistingTransaction("2024-01-16", 10, prefix + " something else")]
    (out,) = mark_duplicates([candidate], existing)
    assert out.is_duplicate is True

    near = CandidateTransaction("2024-01-16", 10.0, "expense", "B" + prefix[1:], "Other")
    (out,) = mark_duplicates([near], existing)
    assert out.is_duplicate is False


def test_adding_ledger_rows_never_clears_a_flag() -> None:
    base = [ExistingTransaction("2024-01-16", 200, "POS MTN Airtime")]
    more = base + [ExistingTransaction("2024-01-15", 5000, "Salary Payment")]
    before = [t.is_duplicate for t in mark_duplicates([SALARY, AIRTIME], base)]
    after = [t.is_duplicate for t in mark_duplicates([SALARY, AIRTIME], more)]
    assert before == [False, True]
    assert after == [True, True]
