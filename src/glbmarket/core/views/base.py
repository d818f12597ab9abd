"""Shared pieces of the page view models."""

from decimal import Decimal, InvalidOperation
from enum import Enum

import structlog
from web3 import Web3

from glbmarket.core.exceptions import ValidationError

log = structlog.get_logger(__name__)


class ViewStatus(str, Enum):
    """Page load status; ``ready`` re-enters itself on every refresh."""

    LOADING = "loading"
    READY = "ready"


def parse_eth_amount(value: str | float | None, message: str) -> int:
    """Parse a user-entered ETH amount into wei.

    Args:
        value: Amount as typed, e.g. "0.05".
        message: Error message when the amount is missing or not positive.

    Returns:
        Amount in wei.

    Raises:
        ValidationError: If the amount is empty, malformed, not a whole
            positive number of wei, or too large for uint256.
    """
    if value is None or str(value).strip() == "":
        raise ValidationError(message)
    try:
        amount = Decimal(str(value).strip())
    except InvalidOperation as e:
        raise ValidationError(message) from e
    if not amount.is_finite() or amount <= 0:
        raise ValidationError(message)

    try:
        wei = int(Web3.to_wei(amount, "ether"))
    except ValueError as e:
        raise ValidationError(message) from e
    # Fractions of a wei would be truncated
    if wei <= 0 or Web3.from_wei(wei, "ether") != amount:
        raise ValidationError(message)
    return wei


def same_address(a: str | None, b: str | None) -> bool:
    """Case-insensitive address comparison; False when either is missing."""
    return bool(a) and bool(b) and a.lower() == b.lower()  # type: ignore[union-attr]


class PageView:
    """Common state of a page: load status, error and info message."""

    def __init__(self, wallet_address: str | None = None) -> None:
        self.wallet_address = wallet_address
        self.status = ViewStatus.LOADING
        self.error = ""
        self.message = ""

    @property
    def is_connected(self) -> bool:
        return self.wallet_address is not None

    @property
    def is_loading(self) -> bool:
        return self.status == ViewStatus.LOADING

    def _fail(self, message: str) -> None:
        """Continuation for failed writes: show the message."""
        self.error = message
        log.info("page_error_shown", page=type(self).__name__, error=message)
