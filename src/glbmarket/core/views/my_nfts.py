"""Ownership page view model.

Lists the connected wallet's tokens. A selected token can be listed for
sale (approve, then list) or have its listing canceled.
"""

import structlog

from glbmarket.core.exceptions import DuplicateSubmissionError, ValidationError
from glbmarket.core.views.base import PageView, ViewStatus, parse_eth_amount
from glbmarket.models.snapshot import OwnedSnapshot
from glbmarket.models.token import OwnedToken
from glbmarket.models.transaction import OperationKind
from glbmarket.services.chain.contracts import Glb3dMarketplaceContract, Glb3dNftContract
from glbmarket.services.metadata.sources import TokenDataSource
from glbmarket.services.transactions.tracker import TransactionHandle, TransactionTracker

log = structlog.get_logger(__name__)


class MyNftsView(PageView):
    """State of the my-NFTs page.

    Attributes:
        snapshot: Last loaded ownership snapshot.
        selected_token_id: Token of the open detail modal.
        listing_price: Listing price as typed (ETH).
        list_handle: Handle of the listing step once approval confirmed.
    """

    def __init__(
        self,
        source: TokenDataSource,
        nft: Glb3dNftContract,
        marketplace: Glb3dMarketplaceContract,
        tracker: TransactionTracker,
        wallet_address: str | None = None,
    ) -> None:
        super().__init__(wallet_address)
        self.source = source
        self.nft = nft
        self.marketplace = marketplace
        self.tracker = tracker
        self.snapshot: OwnedSnapshot | None = None
        self.selected_token_id: int | None = None
        self.listing_price = ""
        self.list_handle: TransactionHandle | None = None

    @property
    def tokens(self) -> list[OwnedToken]:
        return self.snapshot.tokens if self.snapshot else []

    @property
    def selected(self) -> OwnedToken | None:
        if self.snapshot is None or self.selected_token_id is None:
            return None
        return self.snapshot.token_for(self.selected_token_id)

    async def load(self) -> OwnedSnapshot | None:
        """Load the wallet's tokens; nothing to load without a wallet."""
        if self.wallet_address is None:
            self.snapshot = None
            self.status = ViewStatus.READY
            return None

        self.status = ViewStatus.LOADING
        self.error = ""
        self.snapshot = await self.source.owned_tokens(self.wallet_address)
        self.status = ViewStatus.READY
        log.debug(
            "my_nfts_loaded",
            tokens=len(self.snapshot.tokens),
            demo=self.snapshot.is_demo,
        )
        return self.snapshot

    async def refresh(self) -> OwnedSnapshot | None:
        return await self.load()

    def select(self, token_id: int) -> OwnedToken | None:
        self.error = ""
        self.message = ""
        self.selected_token_id = token_id
        token = self.selected
        if token is None:
            self.selected_token_id = None
            self.error = "No NFT selected"
        return token

    def clear_selection(self) -> None:
        self.selected_token_id = None
        self.error = ""

    async def list_for_sale(self, price: str) -> TransactionHandle | None:
        """Approve the marketplace, then list the selected token.

        The listing is dispatched only after the approval is confirmed.
        The returned handle is the approval's; waiting on it also waits
        for the listing step.
        """
        token = self.selected
        if token is None:
            self.error = "No NFT selected"
            return None

        self.listing_price = price
        try:
            price_wei = parse_eth_amount(price, "Please enter a valid price")
        except ValidationError as e:
            self.error = str(e)
            return None

        self.error = ""
        self.list_handle = None
        token_id = token.token_id

        async def _on_approved(_receipt: object) -> None:
            log.info("listing_approval_confirmed", token_id=token_id)
            try:
                self.list_handle = await self.tracker.submit(
                    OperationKind.LIST,
                    lambda: self.marketplace.list_item(self.nft.address, token_id, price_wei),
                    token_id=token_id,
                    error_prefix="Error listing NFT",
                    on_confirmed=self._on_listed,
                    on_failed=self._on_list_failed,
                )
            except DuplicateSubmissionError as e:
                self.error = str(e)
                return
            await self.list_handle.wait()

        try:
            return await self.tracker.submit(
                OperationKind.APPROVE,
                lambda: self.nft.approve(self.marketplace.address, token_id),
                token_id=token_id,
                error_prefix="Error approving NFT",
                on_confirmed=_on_approved,
                on_failed=self._fail,
            )
        except DuplicateSubmissionError as e:
            self.error = str(e)
            return None

    async def _on_listed(self, _receipt: object) -> None:
        self.listing_price = ""
        self.selected_token_id = None
        self.message = "NFT listed for sale!"
        await self.refresh()

    def _on_list_failed(self, message: str) -> None:
        # Approval stays in place; the user retries the listing
        self._fail(f"{message} (the marketplace is approved but the NFT is not listed, try again)")

    async def cancel_listing(self) -> TransactionHandle | None:
        """Cancel the selected token's listing."""
        token = self.selected
        if token is None:
            self.error = "No NFT selected"
            return None
        if not token.is_listed:
            self.error = "This NFT is not listed"
            return None

        self.error = ""
        try:
            return await self.tracker.submit(
                OperationKind.CANCEL,
                lambda: self.marketplace.cancel_listing(self.nft.address, token.token_id),
                token_id=token.token_id,
                error_prefix="Error canceling listing",
                on_confirmed=self._on_canceled,
                on_failed=self._fail,
            )
        except DuplicateSubmissionError as e:
            self.error = str(e)
            return None

    async def _on_canceled(self, _receipt: object) -> None:
        self.selected_token_id = None
        self.message = "Listing canceled"
        await self.refresh()
