"""Transaction lifecycle models."""

from datetime import UTC, datetime
from enum import Enum

from pydantic import BaseModel, Field


class OperationKind(str, Enum):
    """Write operations issued by the pages."""

    MINT = "mint"
    APPROVE = "approve"
    LIST = "list"
    CANCEL = "cancel"
    BUY = "buy"
    OFFER = "offer"


class TransactionStatus(str, Enum):
    """Status of a submitted transaction."""

    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class TrackerState(str, Enum):
    """State of one (operation, token) slot as seen by a page."""

    IDLE = "idle"
    SUBMITTED = "submitted"
    CONFIRMED = "confirmed"
    FAILED = "failed"


class PendingTransaction(BaseModel):
    """A write that has been dispatched and not yet resolved.

    Attributes:
        tx_hash: Transaction hash returned by the node.
        operation: Operation kind.
        token_id: Target token, None for mint.
        status: Current status.
        error: Failure message once failed.
        submitted_at: Dispatch time (UTC).
    """

    tx_hash: str
    operation: OperationKind
    token_id: int | None = None
    status: TransactionStatus = TransactionStatus.SUBMITTED
    error: str | None = None
    submitted_at: datetime = Field(default_factory=lambda: datetime.now(UTC))
