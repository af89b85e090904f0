"""Shared SQLAlchemy models registry for the ledger database.

Currently includes the ledger ``transactions`` table read by
``statement_ingest`` for duplicate detection.
"""

from .ledger import Base, LedgerTransaction

__all__ = [
    "Base",
    "LedgerTransaction",
]
