"""Unit tests for the exception hierarchy."""

import pytest

from glbmarket.core.exceptions import (
    ConfigurationError,
    ContractReadError,
    DuplicateSubmissionError,
    GlbMarketError,
    TransactionDispatchError,
    TransactionFailedError,
    ValidationError,
)


class TestExceptionHierarchy:
    """All errors derive from GlbMarketError."""

    @pytest.mark.parametrize(
        "error",
        [
            ConfigurationError("bad config"),
            ValidationError("Please enter a valid price"),
            ContractReadError(function="glbURI", message="reverted"),
            TransactionDispatchError("rejected"),
            TransactionFailedError("reverted", tx_hash="0xabc"),
            DuplicateSubmissionError("buy", 1),
        ],
    )
    def test_is_glb_market_error(self, error: Exception) -> None:
        assert isinstance(error, GlbMarketError)


class TestExceptionMessages:
    """Tests for exception attributes and messages."""

    def test_contract_read_error(self) -> None:
        error = ContractReadError(function="creator", message="execution reverted")

        assert error.function == "creator"
        assert str(error) == "creator: execution reverted"

    def test_transaction_failed_error_keeps_hash(self) -> None:
        error = TransactionFailedError("Transaction reverted", tx_hash="0xdead")

        assert error.tx_hash == "0xdead"
        assert str(error) == "Transaction reverted"

    def test_duplicate_submission_with_token(self) -> None:
        error = DuplicateSubmissionError("buy", 4)

        assert error.operation == "buy"
        assert error.token_id == 4
        assert str(error) == "A buy transaction for token 4 is already pending"

    def test_duplicate_submission_without_token(self) -> None:
        assert str(DuplicateSubmissionError("mint")) == "A mint transaction is already pending"
