"""Transaction lifecycle tracking for page write operations.

A page owns one ``TransactionTracker``. Each write is keyed by
(operation kind, token id) and moves through::

    idle -> submitted -> confirmed | failed -> idle

``submitted`` is entered as soon as the node returns a transaction hash;
``confirmed``/``failed`` follow from the receipt. A second submit for a
key that is still in flight raises ``DuplicateSubmissionError``. Nothing
is retried automatically.

Example:
    handle = await tracker.submit(
        OperationKind.BUY,
        lambda: marketplace.buy_item(nft, token_id, price),
        token_id=token_id,
        error_prefix="Error buying NFT",
        on_confirmed=on_bought,
        on_failed=show_error,
    )
    await handle.wait()
"""

import asyncio
import inspect
from collections.abc import Awaitable, Callable
from typing import Any

import structlog

from glbmarket.core.exceptions import DuplicateSubmissionError, TransactionFailedError
from glbmarket.models.transaction import (
    OperationKind,
    PendingTransaction,
    TrackerState,
    TransactionStatus,
)
from glbmarket.services.chain.client import ChainClient

log = structlog.get_logger(__name__)

TrackerKey = tuple[OperationKind, int | None]
Dispatch = Callable[[], Awaitable[str]]
Continuation = Callable[[Any], Awaitable[None] | None]
StateListener = Callable[[OperationKind, int | None, TrackerState], None]

_STATUS_TO_STATE = {
    TransactionStatus.SUBMITTED: TrackerState.SUBMITTED,
    TransactionStatus.CONFIRMED: TrackerState.CONFIRMED,
    TransactionStatus.FAILED: TrackerState.FAILED,
}


async def _run_continuation(fn: Continuation | None, arg: Any) -> None:
    if fn is None:
        return
    result = fn(arg)
    if inspect.isawaitable(result):
        await result


class TransactionHandle:
    """Handle for one submitted (or rejected) write.

    Attributes:
        operation: Operation kind.
        token_id: Target token, None for mint.
        tx_hash: Transaction hash, None when dispatch failed.
        status: Current status.
        error: User-facing error message once failed.
        receipt: Receipt once confirmed.
    """

    def __init__(
        self,
        tracker: "TransactionTracker",
        operation: OperationKind,
        token_id: int | None,
        tx_hash: str | None,
        status: TransactionStatus,
        error_prefix: str,
        on_confirmed: Continuation | None = None,
        on_failed: Continuation | None = None,
        error: str | None = None,
    ) -> None:
        self._tracker = tracker
        self.operation = operation
        self.token_id = token_id
        self.tx_hash = tx_hash
        self.status = status
        self.error = error
        self.receipt: Any = None
        self._error_prefix = error_prefix
        self._on_confirmed = on_confirmed
        self._on_failed = on_failed
        self._resolution: asyncio.Task[TransactionStatus] | None = None

    @property
    def is_resolved(self) -> bool:
        return self.status != TransactionStatus.SUBMITTED

    async def wait(self) -> TransactionStatus:
        """Wait for the receipt and run the matching continuation.

        Returns:
            CONFIRMED or FAILED. Concurrent callers share one receipt wait,
            so the continuation runs once; calling again after resolution
            returns the stored status without waiting.
        """
        if self.is_resolved or self.tx_hash is None:
            return self.status
        if self._resolution is None:
            self._resolution = asyncio.create_task(self._tracker._resolve(self, self.tx_hash))
        return await asyncio.shield(self._resolution)

    def _fail_message(self, error: Exception) -> str:
        return f"{self._error_prefix}: {error}"


class TransactionTracker:
    """Tracks in-flight writes for one page instance.

    Attributes:
        client: Chain client used to wait for receipts.
    """

    def __init__(self, client: ChainClient, listener: StateListener | None = None) -> None:
        self.client = client
        self._listener = listener
        self._pending: dict[TrackerKey, PendingTransaction] = {}
        self._dispatching: set[TrackerKey] = set()

    def _notify(self, key: TrackerKey, state: TrackerState) -> None:
        log.debug(
            "transaction_state_changed",
            operation=key[0].value,
            token_id=key[1],
            state=state.value,
        )
        if self._listener is not None:
            self._listener(key[0], key[1], state)

    def state(self, operation: OperationKind, token_id: int | None = None) -> TrackerState:
        """Current state of the (operation, token) slot."""
        pending = self._pending.get((operation, token_id))
        if pending is None:
            return TrackerState.IDLE
        return _STATUS_TO_STATE[pending.status]

    def is_busy(self, operation: OperationKind, token_id: int | None = None) -> bool:
        """True while a write for the slot is dispatching or unresolved."""
        key = (operation, token_id)
        return key in self._dispatching or key in self._pending

    @property
    def pending(self) -> list[PendingTransaction]:
        return list(self._pending.values())

    async def submit(
        self,
        operation: OperationKind,
        dispatch: Dispatch,
        *,
        token_id: int | None = None,
        error_prefix: str = "Transaction error",
        on_confirmed: Continuation | None = None,
        on_failed: Continuation | None = None,
    ) -> TransactionHandle:
        """Dispatch a write and start tracking it.

        Args:
            operation: Operation kind.
            dispatch: Async callable sending the transaction, returning its hash.
            token_id: Target token (None for mint).
            error_prefix: Prefix of the user-facing failure message.
            on_confirmed: Called with the receipt after confirmation.
            on_failed: Called with the failure message.

        Returns:
            Handle in SUBMITTED state, or FAILED when dispatch was rejected
            (``on_failed`` has then already run).

        Raises:
            DuplicateSubmissionError: If the slot already has a write in flight.
        """
        key = (operation, token_id)
        if self.is_busy(operation, token_id):
            log.warning(
                "transaction_duplicate_rejected",
                operation=operation.value,
                token_id=token_id,
            )
            raise DuplicateSubmissionError(operation.value, token_id)

        self._dispatching.add(key)
        try:
            tx_hash = await dispatch()
        except Exception as e:
            self._dispatching.discard(key)
            log.error(
                "transaction_dispatch_failed",
                operation=operation.value,
                token_id=token_id,
                error=str(e),
            )
            message = f"{error_prefix}: {e}"
            handle = TransactionHandle(
                self,
                operation,
                token_id,
                tx_hash=None,
                status=TransactionStatus.FAILED,
                error_prefix=error_prefix,
                error=message,
            )
            self._notify(key, TrackerState.FAILED)
            self._notify(key, TrackerState.IDLE)
            await _run_continuation(on_failed, message)
            return handle

        self._dispatching.discard(key)
        self._pending[key] = PendingTransaction(
            tx_hash=tx_hash, operation=operation, token_id=token_id
        )
        self._notify(key, TrackerState.SUBMITTED)
        log.info(
            "transaction_submitted",
            operation=operation.value,
            token_id=token_id,
            tx_hash=tx_hash,
        )

        return TransactionHandle(
            self,
            operation,
            token_id,
            tx_hash=tx_hash,
            status=TransactionStatus.SUBMITTED,
            error_prefix=error_prefix,
            on_confirmed=on_confirmed,
            on_failed=on_failed,
        )

    async def _resolve(self, handle: TransactionHandle, tx_hash: str) -> TransactionStatus:
        key = (handle.operation, handle.token_id)
        pending = self._pending[key]

        try:
            try:
                receipt = await self.client.wait_for_receipt(tx_hash)
            except TransactionFailedError as e:
                handle.status = pending.status = TransactionStatus.FAILED
                handle.error = pending.error = handle._fail_message(e)
                self._notify(key, TrackerState.FAILED)
                await _run_continuation(handle._on_failed, handle.error)
            else:
                handle.receipt = receipt
                handle.status = pending.status = TransactionStatus.CONFIRMED
                self._notify(key, TrackerState.CONFIRMED)
                await _run_continuation(handle._on_confirmed, receipt)
        finally:
            self._pending.pop(key, None)
            self._notify(key, TrackerState.IDLE)

        log.info(
            "transaction_resolved",
            operation=handle.operation.value,
            token_id=handle.token_id,
            tx_hash=handle.tx_hash,
            status=handle.status.value,
        )
        return handle.status
