"""GLB Market exception hierarchy.

This module defines the base exception class and specialized exceptions
for the error categories of the marketplace client.
"""


class GlbMarketError(Exception):
    """Base exception for all GLB Market errors.

    All custom exceptions should inherit from this class to enable
    consistent error handling and logging.
    """

    pass


class ConfigurationError(GlbMarketError):
    """Raised when configuration is invalid or missing.

    Example:
        raise ConfigurationError("No contract addresses configured for chain 5")
    """

    pass


class ValidationError(GlbMarketError):
    """Raised when user input fails validation.

    The message is shown to the user as-is.

    Example:
        raise ValidationError("Please enter a valid price")
    """

    pass


class ContractReadError(GlbMarketError):
    """Raised when a contract read call fails.

    Attributes:
        function: Name of the contract function that was called.

    Example:
        raise ContractReadError(function="glbURI", message="execution reverted")
    """

    def __init__(self, function: str, message: str) -> None:
        self.function = function
        super().__init__(f"{function}: {message}")


class TransactionDispatchError(GlbMarketError):
    """Raised when a write call could not be submitted.

    Covers signer rejection, gas estimation reverts and node errors
    raised before a transaction hash exists.
    """

    pass


class TransactionFailedError(GlbMarketError):
    """Raised when a submitted transaction fails to confirm.

    Attributes:
        tx_hash: Hash of the failed transaction.
    """

    def __init__(self, message: str, tx_hash: str) -> None:
        super().__init__(message)
        self.tx_hash = tx_hash


class DuplicateSubmissionError(GlbMarketError):
    """Raised when the same operation is submitted twice for one token.

    Attributes:
        operation: Operation kind value (e.g. "buy").
        token_id: Token the operation targets, None for mint.
    """

    def __init__(self, operation: str, token_id: int | None = None) -> None:
        self.operation = operation
        self.token_id = token_id
        target = f" for token {token_id}" if token_id is not None else ""
        super().__init__(f"A {operation} transaction{target} is already pending")
