"""Read aggregation of per-token metadata.

The aggregator fans out over token identifiers with ``asyncio.gather``
while the field reads for one identifier run one after another. A failed
read for an identifier degrades that identifier to a placeholder record;
an empty overall result degrades to demonstration data. Neither case is
raised to the caller.
"""

import asyncio
from collections.abc import Sequence

import structlog

from glbmarket.core.exceptions import ContractReadError
from glbmarket.models.snapshot import MarketSnapshot, OwnedSnapshot
from glbmarket.models.token import Listing, OwnedToken, TokenRecord
from glbmarket.services.chain.contracts import Glb3dMarketplaceContract, Glb3dNftContract
from glbmarket.services.metadata.demo import DemoCatalog
from glbmarket.services.metadata.uri import normalize_uri

log = structlog.get_logger(__name__)

ACTIVE_LISTINGS_PAGE_SIZE = 100


class ReadAggregator:
    """Assembles TokenRecords from NFT and marketplace contract reads.

    Attributes:
        nft: NFT contract wrapper.
        marketplace: Marketplace contract wrapper.
        gateway_url: Gateway used to rewrite ipfs:// URIs.
        demo: Demonstration data used on empty results.
    """

    def __init__(
        self,
        nft: Glb3dNftContract,
        marketplace: Glb3dMarketplaceContract,
        gateway_url: str,
        demo: DemoCatalog,
    ) -> None:
        self.nft = nft
        self.marketplace = marketplace
        self.gateway_url = gateway_url
        self.demo = demo

    def _placeholder(
        self,
        token_id: int,
        preview_uri: str | None,
        owner_or_seller: str | None,
    ) -> TokenRecord:
        return TokenRecord(
            token_id=token_id,
            asset_uri=self.demo.glb_uri,
            preview_uri=normalize_uri(preview_uri or self.demo.preview_uri, self.gateway_url),
            display_name=f"NFT #{token_id}",
            description="Metadata unavailable",
            creator_address=owner_or_seller or "",
            owner_or_seller_address=owner_or_seller,
            is_placeholder=True,
        )

    async def _read_record(
        self,
        token_id: int,
        preview_uri: str | None = None,
        owner_or_seller: str | None = None,
    ) -> TokenRecord:
        """Read the fields of one token in sequence.

        ``preview_uri`` comes from the listing when known; otherwise it is
        read from the NFT contract.
        """
        glb_uri = await self.nft.glb_uri(token_id)
        if preview_uri is None:
            preview_uri = await self.nft.preview_uri(token_id)
        name = await self.nft.name(token_id)
        description = await self.nft.description(token_id)
        creator = await self.nft.creator(token_id)

        return TokenRecord(
            token_id=token_id,
            asset_uri=normalize_uri(glb_uri, self.gateway_url),
            preview_uri=normalize_uri(preview_uri, self.gateway_url),
            display_name=name or f"NFT #{token_id}",
            description=description or "No description available",
            creator_address=creator or owner_or_seller or "",
            owner_or_seller_address=owner_or_seller,
        )

    async def _record_or_placeholder(
        self,
        token_id: int,
        preview_uri: str | None = None,
        owner_or_seller: str | None = None,
    ) -> TokenRecord:
        try:
            return await self._read_record(token_id, preview_uri, owner_or_seller)
        except ContractReadError as e:
            log.warning(
                "token_metadata_read_failed",
                token_id=token_id,
                function=e.function,
                error=str(e),
            )
            return self._placeholder(token_id, preview_uri, owner_or_seller)

    async def records_for_tokens(self, token_ids: Sequence[int]) -> dict[int, TokenRecord]:
        """Read records for plain token ids.

        Returns:
            Mapping from token id to record; failed ids hold placeholders.
        """
        records = await asyncio.gather(
            *(self._record_or_placeholder(token_id) for token_id in token_ids)
        )
        return {record.token_id: record for record in records}

    async def records_for_listings(self, listings: Sequence[Listing]) -> dict[int, TokenRecord]:
        """Read records for listed tokens, taking preview and seller from the listing."""
        records = await asyncio.gather(
            *(
                self._record_or_placeholder(
                    item.token_id,
                    preview_uri=item.preview_uri,
                    owner_or_seller=item.seller_address,
                )
                for item in listings
            )
        )
        return {record.token_id: record for record in records}

    async def active_listings(
        self,
        start: int = 0,
        count: int = ACTIVE_LISTINGS_PAGE_SIZE,
    ) -> MarketSnapshot:
        """Load active listings and their records.

        Falls back to demonstration listings when the marketplace read
        fails or returns nothing.
        """
        try:
            listings = await self.marketplace.get_active_listings(start, count, False, False)
        except ContractReadError as e:
            log.warning("active_listings_read_failed", error=str(e))
            listings = []

        listings = [item for item in listings if item.is_active]
        if not listings:
            log.info("active_listings_empty_using_demo")
            demo_listings = self.demo.listings()
            return MarketSnapshot(
                listings=demo_listings,
                records=self.demo.listing_records(demo_listings),
                is_demo=True,
            )

        records = await self.records_for_listings(listings)
        log.info("active_listings_loaded", count=len(listings))
        return MarketSnapshot(listings=listings, records=records)

    async def _owned_token_at(self, owner: str, index: int) -> OwnedToken | None:
        try:
            token_id = await self.nft.token_of_owner_by_index(owner, index)
        except ContractReadError as e:
            log.warning("owned_token_index_read_failed", index=index, error=str(e))
            return None

        try:
            record = await self._read_record(token_id, owner_or_seller=owner)
            listing = await self.marketplace.get_listing_by_nft_address(
                self.nft.address, token_id
            )
        except ContractReadError as e:
            log.warning(
                "owned_token_read_failed",
                token_id=token_id,
                function=e.function,
                error=str(e),
            )
            return OwnedToken(record=self._placeholder(token_id, None, owner))

        return OwnedToken(record=record, listing=listing if listing.is_active else None)

    async def owned_tokens(self, owner: str) -> OwnedSnapshot:
        """Load the tokens held by ``owner`` with their listing state.

        Falls back to demonstration tokens when the balance is zero, the
        balance cannot be read, or no token could be resolved.
        """
        try:
            balance = await self.nft.balance_of(owner)
        except ContractReadError as e:
            log.warning("balance_read_failed", owner=owner, error=str(e))
            balance = 0

        tokens: list[OwnedToken] = []
        if balance > 0:
            results = await asyncio.gather(
                *(self._owned_token_at(owner, index) for index in range(balance))
            )
            tokens = [item for item in results if item is not None]

        if not tokens:
            log.info("owned_tokens_empty_using_demo", owner=owner, balance=balance)
            return OwnedSnapshot(owner=owner, tokens=self.demo.owned_tokens(owner), is_demo=True)

        log.info("owned_tokens_loaded", owner=owner, count=len(tokens))
        return OwnedSnapshot(owner=owner, tokens=tokens)

    async def token(self, token_id: int) -> TokenRecord | None:
        """Read one token; None when any field read fails."""
        try:
            return await self._read_record(token_id)
        except ContractReadError as e:
            log.warning("token_read_failed", token_id=token_id, error=str(e))
            return None
