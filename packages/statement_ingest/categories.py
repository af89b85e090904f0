"""Closed category vocabulary and keyword-based category guessing.

The keyword table is static configuration. Group order is significant: the
first group with a matching keyword wins, so reordering changes results.
"""

from __future__ import annotations

from .models import INCOME, Direction

ALLOWED_CATEGORIES: tuple[str, ...] = (
    "Income",
    "Food",
    "Transport",
    "Entertainment",
    "Utilities",
    "Rent/Bills",
    "Shopping",
    "Health",
    "Education",
    "Savings",
    "Cash",
    "Transfer",
    "Other",
)

FALLBACK_CATEGORY = "Other"

# (category, keywords); matched as lower-case substrings, in order.
KEYWORD_GROUPS: tuple[tuple[str, tuple[str, ...]], ...] = (
    ("Food", ("food", "restaurant", "eat", "lunch", "dinner")),
    ("Transport", ("uber", "bolt", "transport", "fuel", "taxi")),
    ("Entertainment", ("netflix", "spotify", "entertainment", "movie")),
    ("Utilities", ("airtime", "data", "mtn", "glo", "airtel", "9mobile")),
    ("Rent/Bills", ("rent", "electricity", "nepa", "power", "bill")),
    ("Shopping", ("shop", "store", "market", "mall", "buy")),
    ("Health", ("pharmacy", "hospital", "clinic", "medicine", "health")),
    ("Cash", ("pos", "atm", "withdrawal")),
    ("Transfer", ("transfer",)),
)


def guess_category(description: str | None, direction: Direction) -> str:
    """Return a category for ``description``.

    Income is always ``"Income"``; expenses take the first keyword group that
    matches, else ``"Other"``.
    """

    if direction == INCOME:
        return "Income"
    lower = (description or "").lower()
    for category, keywords in KEYWORD_GROUPS:
        if any(k in lower for k in keywords):
            return category
    return FALLBACK_CATEGORY


__all__ = ["ALLOWED_CATEGORIES", "FALLBACK_CATEGORY", "KEYWORD_GROUPS", "guess_category"]
