"""Domain models for GLB Market."""

from glbmarket.models.snapshot import MarketSnapshot, OwnedSnapshot
from glbmarket.models.token import (
    Listing,
    OwnedToken,
    TokenRecord,
    format_eth,
    short_address,
)
from glbmarket.models.transaction import (
    OperationKind,
    PendingTransaction,
    TrackerState,
    TransactionStatus,
)

__all__ = [
    "Listing",
    "MarketSnapshot",
    "OperationKind",
    "OwnedSnapshot",
    "OwnedToken",
    "PendingTransaction",
    "TokenRecord",
    "TrackerState",
    "TransactionStatus",
    "format_eth",
    "short_address",
]
