"""Marketplace browse page view model.

Shows active listings; a selected listing can be bought at its exact
price or receive an offer.
"""

import structlog

from glbmarket.core.exceptions import DuplicateSubmissionError, ValidationError
from glbmarket.core.views.base import PageView, ViewStatus, parse_eth_amount, same_address
from glbmarket.models.snapshot import MarketSnapshot
from glbmarket.models.token import Listing, TokenRecord
from glbmarket.models.transaction import OperationKind
from glbmarket.services.chain.contracts import Glb3dMarketplaceContract
from glbmarket.services.metadata.sources import TokenDataSource
from glbmarket.services.transactions.tracker import TransactionHandle, TransactionTracker

log = structlog.get_logger(__name__)

DEFAULT_OFFER_DURATION = 86400  # 1 day


class MarketplaceView(PageView):
    """State of the marketplace page.

    Attributes:
        snapshot: Last loaded listings, None before the first load.
        selected_token_id: Token of the open detail modal.
        offer_amount: Offer amount as typed (ETH).
        offer_duration: Offer validity in seconds.
        purchase_success: Set after a confirmed purchase.
    """

    def __init__(
        self,
        source: TokenDataSource,
        marketplace: Glb3dMarketplaceContract,
        tracker: TransactionTracker,
        wallet_address: str | None = None,
    ) -> None:
        super().__init__(wallet_address)
        self.source = source
        self.marketplace = marketplace
        self.tracker = tracker
        self.snapshot: MarketSnapshot | None = None
        self.selected_token_id: int | None = None
        self.offer_amount = ""
        self.offer_duration = DEFAULT_OFFER_DURATION
        self.purchase_success = False

    @property
    def listings(self) -> list[Listing]:
        return self.snapshot.listings if self.snapshot else []

    def record_for(self, token_id: int) -> TokenRecord | None:
        return self.snapshot.records.get(token_id) if self.snapshot else None

    @property
    def selected_listing(self) -> Listing | None:
        if self.snapshot is None or self.selected_token_id is None:
            return None
        return self.snapshot.listing_for(self.selected_token_id)

    @property
    def selected_record(self) -> TokenRecord | None:
        if self.selected_token_id is None:
            return None
        return self.record_for(self.selected_token_id)

    @property
    def is_own_listing(self) -> bool:
        listing = self.selected_listing
        return listing is not None and same_address(listing.seller_address, self.wallet_address)

    @property
    def can_buy(self) -> bool:
        """Buying is disabled for the seller and while a buy is in flight."""
        listing = self.selected_listing
        if listing is None or not self.is_connected or self.is_own_listing:
            return False
        return not self.tracker.is_busy(OperationKind.BUY, listing.token_id)

    async def load(self) -> MarketSnapshot:
        """Load (or reload) active listings."""
        self.status = ViewStatus.LOADING
        self.snapshot = await self.source.active_listings()
        self.status = ViewStatus.READY
        log.debug(
            "marketplace_loaded",
            listings=len(self.snapshot.listings),
            demo=self.snapshot.is_demo,
        )
        return self.snapshot

    async def refresh(self) -> MarketSnapshot:
        return await self.load()

    def select(self, token_id: int) -> Listing | None:
        self.purchase_success = False
        self.error = ""
        self.message = ""
        self.selected_token_id = token_id
        listing = self.selected_listing
        if listing is None:
            self.selected_token_id = None
            self.error = "No NFT selected"
        return listing

    def clear_selection(self) -> None:
        self.selected_token_id = None
        self.error = ""
        self.purchase_success = False

    def _require_selection(self) -> Listing | None:
        if not self.is_connected:
            self.error = "Please connect your wallet first"
            return None
        listing = self.selected_listing
        if listing is None:
            self.error = "No NFT selected"
            return None
        return listing

    async def buy(self) -> TransactionHandle | None:
        """Buy the selected listing for exactly its price.

        Returns:
            Handle to wait on, or None when the request was refused
            (``error`` holds the reason).
        """
        listing = self._require_selection()
        if listing is None:
            return None
        if self.is_own_listing:
            self.error = "You cannot buy your own NFT"
            return None

        self.error = ""
        try:
            return await self.tracker.submit(
                OperationKind.BUY,
                lambda: self.marketplace.buy_item(
                    listing.nft_address, listing.token_id, listing.price
                ),
                token_id=listing.token_id,
                error_prefix="Error buying NFT",
                on_confirmed=self._on_bought,
                on_failed=self._fail,
            )
        except DuplicateSubmissionError as e:
            self.error = str(e)
            return None

    async def _on_bought(self, _receipt: object) -> None:
        self.purchase_success = True
        self.error = ""
        self.message = "NFT purchased successfully!"
        await self.refresh()

    async def make_offer(
        self,
        amount: str,
        duration_seconds: int | None = None,
    ) -> TransactionHandle | None:
        """Offer ``amount`` ETH on the selected listing."""
        listing = self._require_selection()
        if listing is None:
            return None

        self.offer_amount = amount
        if duration_seconds is not None:
            self.offer_duration = duration_seconds
        try:
            value = parse_eth_amount(amount, "Please enter a valid offer amount")
        except ValidationError as e:
            self.error = str(e)
            return None

        self.error = ""
        try:
            return await self.tracker.submit(
                OperationKind.OFFER,
                lambda: self.marketplace.create_offer(
                    listing.nft_address, listing.token_id, self.offer_duration, value
                ),
                token_id=listing.token_id,
                error_prefix="Error making offer",
                on_confirmed=self._on_offer_made,
                on_failed=self._fail,
            )
        except DuplicateSubmissionError as e:
            self.error = str(e)
            return None

    async def _on_offer_made(self, _receipt: object) -> None:
        self.offer_amount = ""
        self.error = ""
        self.message = "Offer made successfully!"
        await self.refresh()
