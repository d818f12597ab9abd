"""Async read/write client for the chain node.

This module provides ``ChainClient``, a thin wrapper over web3.py's
``AsyncWeb3`` that:
- Reads contract view functions (one attempt, no retry)
- Dispatches contract writes, signing locally when a private key is
  configured or through a node-unlocked account otherwise
- Waits for transaction receipts
- Translates library errors into GLB Market exceptions
"""

from collections import OrderedDict
from typing import Any

import structlog
from eth_account import Account
from eth_account.signers.local import LocalAccount
from web3 import AsyncHTTPProvider, AsyncWeb3, Web3

from glbmarket.config.settings import Settings
from glbmarket.core.exceptions import (
    ContractReadError,
    TransactionDispatchError,
    TransactionFailedError,
)

log = structlog.get_logger(__name__)

CONTRACT_CACHE_MAX_SIZE = 64


class ChainClient:
    """Client for contract reads and writes over JSON-RPC.

    Attributes:
        rpc_url: Node endpoint.
        chain_id: Chain id used when signing transactions.

    Example:
        client = ChainClient(rpc_url="http://localhost:8545", chain_id=31337)
        uri = await client.read(nft_address, nft_abi, "glbURI", 1)
    """

    def __init__(
        self,
        rpc_url: str,
        chain_id: int,
        wallet_address: str | None = None,
        private_key: str | None = None,
        w3: AsyncWeb3 | None = None,
        contract_cache_size: int = CONTRACT_CACHE_MAX_SIZE,
    ) -> None:
        """Initialize ChainClient.

        Args:
            rpc_url: JSON-RPC endpoint URL.
            chain_id: Chain id of the node.
            wallet_address: Node-unlocked account used for writes.
            private_key: Key used to sign writes locally (takes precedence).
            w3: Preconfigured AsyncWeb3 instance (tests).
            contract_cache_size: Maximum number of contract objects kept.
        """
        self.rpc_url = rpc_url
        self.chain_id = chain_id
        self._w3 = w3 or AsyncWeb3(AsyncHTTPProvider(rpc_url))
        self._account: LocalAccount | None = Account.from_key(private_key) if private_key else None
        self._wallet_address = wallet_address
        self.contract_cache_size = contract_cache_size
        self._contracts: OrderedDict[tuple[str, int], Any] = OrderedDict()

    @classmethod
    def from_settings(cls, settings: Settings) -> "ChainClient":
        """Build a client from application settings."""
        return cls(
            rpc_url=settings.rpc_url,
            chain_id=settings.chain_id,
            wallet_address=settings.wallet_address,
            private_key=settings.wallet_private_key.get_secret_value() or None,
        )

    @property
    def account_address(self) -> str | None:
        """Address that signs writes, None when no wallet is configured."""
        if self._account is not None:
            return self._account.address
        if self._wallet_address:
            return Web3.to_checksum_address(self._wallet_address)
        return None

    @property
    def is_connected_wallet(self) -> bool:
        return self.account_address is not None

    def _contract(self, address: str, abi: list[dict[str, Any]]) -> Any:
        """Get a contract object, kept in a bounded LRU keyed by address and ABI."""
        key = (address.lower(), id(abi))
        contract = self._contracts.get(key)
        if contract is not None:
            self._contracts.move_to_end(key)
            return contract

        contract = self._w3.eth.contract(address=Web3.to_checksum_address(address), abi=abi)
        while len(self._contracts) >= self.contract_cache_size:
            self._contracts.popitem(last=False)
        self._contracts[key] = contract
        return contract

    async def is_reachable(self) -> bool:
        """Check whether the node answers."""
        try:
            return bool(await self._w3.is_connected())
        except Exception as e:
            log.warning("chain_node_unreachable", rpc_url=self.rpc_url, error=str(e))
            return False

    async def read(
        self,
        address: str,
        abi: list[dict[str, Any]],
        function: str,
        *args: Any,
    ) -> Any:
        """Call a view function.

        Args:
            address: Contract address.
            abi: Contract ABI.
            function: Function name.
            *args: Function arguments.

        Returns:
            The decoded return value.

        Raises:
            ContractReadError: If the call fails.
        """
        try:
            contract = self._contract(address, abi)
            result = await getattr(contract.functions, function)(*args).call()
        except Exception as e:
            log.debug(
                "contract_read_failed",
                address=address,
                function=function,
                error=str(e),
            )
            raise ContractReadError(function=function, message=str(e)) from e

        log.debug("contract_read", address=address, function=function)
        return result

    async def write(
        self,
        address: str,
        abi: list[dict[str, Any]],
        function: str,
        *args: Any,
        value: int = 0,
    ) -> str:
        """Dispatch a state-changing call.

        Args:
            address: Contract address.
            abi: Contract ABI.
            function: Function name.
            *args: Function arguments.
            value: Wei attached to the call.

        Returns:
            Transaction hash as a 0x-prefixed hex string.

        Raises:
            TransactionDispatchError: If no wallet is configured or the
                node rejects the transaction.
        """
        sender = self.account_address
        if sender is None:
            raise TransactionDispatchError("Please connect your wallet first")

        try:
            call = getattr(self._contract(address, abi).functions, function)(*args)
            params: dict[str, Any] = {"from": sender, "value": value}

            if self._account is not None:
                params["nonce"] = await self._w3.eth.get_transaction_count(sender, "pending")
                params["chainId"] = self.chain_id
                tx = await call.build_transaction(params)
                signed = self._account.sign_transaction(tx)
                tx_hash = await self._w3.eth.send_raw_transaction(signed.raw_transaction)
            else:
                tx_hash = await call.transact(params)
        except Exception as e:
            log.warning(
                "contract_write_rejected",
                address=address,
                function=function,
                error=str(e),
            )
            raise TransactionDispatchError(str(e)) from e

        tx_hash_hex = Web3.to_hex(tx_hash)
        log.info(
            "contract_write_submitted",
            address=address,
            function=function,
            tx_hash=tx_hash_hex,
            value=value,
        )
        return tx_hash_hex

    async def wait_for_receipt(self, tx_hash: str) -> Any:
        """Wait until a transaction is included and return its receipt.

        Raises:
            TransactionFailedError: If the receipt cannot be obtained or the
                transaction reverted.
        """
        try:
            receipt = await self._w3.eth.wait_for_transaction_receipt(tx_hash)
        except Exception as e:
            log.warning("transaction_receipt_failed", tx_hash=tx_hash, error=str(e))
            raise TransactionFailedError(str(e), tx_hash=tx_hash) from e

        if receipt["status"] != 1:
            log.warning("transaction_reverted", tx_hash=tx_hash)
            raise TransactionFailedError("Transaction reverted", tx_hash=tx_hash)

        log.info(
            "transaction_confirmed",
            tx_hash=tx_hash,
            block_number=receipt.get("blockNumber"),
        )
        return receipt
