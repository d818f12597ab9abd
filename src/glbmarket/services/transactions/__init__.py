"""Transaction lifecycle tracking."""

from glbmarket.services.transactions.tracker import TransactionHandle, TransactionTracker

__all__ = ["TransactionHandle", "TransactionTracker"]
