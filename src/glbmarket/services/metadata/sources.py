"""Token data sources.

Pages and routes read tokens through ``TokenDataSource``. Two variants
exist and are chosen with the ``data_source`` setting:

- ``LiveSource``: contract reads through the ReadAggregator
- ``MockSource``: deterministic demonstration data, no chain access
"""

from abc import ABC, abstractmethod

import structlog

from glbmarket.models.snapshot import MarketSnapshot, OwnedSnapshot
from glbmarket.models.token import TokenRecord
from glbmarket.services.metadata.aggregator import ReadAggregator
from glbmarket.services.metadata.demo import DemoCatalog, demo_metadata_payload

log = structlog.get_logger(__name__)


class TokenDataSource(ABC):
    """Read interface shared by all pages."""

    name: str = "abstract"

    @abstractmethod
    async def active_listings(self) -> MarketSnapshot:
        """Active marketplace listings with records."""

    @abstractmethod
    async def owned_tokens(self, owner: str) -> OwnedSnapshot:
        """Tokens held by ``owner``."""

    @abstractmethod
    async def token(self, token_id: int) -> TokenRecord:
        """Record for a single token, never raising on read failure."""

    @abstractmethod
    async def glb_metadata(self, nft_address: str, token_id: str) -> dict[str, str]:
        """Metadata payload for the HTTP API."""


class LiveSource(TokenDataSource):
    """Reads from the deployed contracts."""

    name = "live"

    def __init__(self, aggregator: ReadAggregator) -> None:
        self.aggregator = aggregator

    async def active_listings(self) -> MarketSnapshot:
        return await self.aggregator.active_listings()

    async def owned_tokens(self, owner: str) -> OwnedSnapshot:
        return await self.aggregator.owned_tokens(owner)

    async def token(self, token_id: int) -> TokenRecord:
        record = await self.aggregator.token(token_id)
        if record is None:
            log.info("token_using_demo", token_id=token_id)
            return self.aggregator.demo.token(token_id)
        return record

    async def glb_metadata(self, nft_address: str, token_id: str) -> dict[str, str]:
        """Call getGlbMetadata on ``nft_address``; demo payload on any failure."""
        try:
            glb_uri, preview_uri, name, description, creator = (
                await self.aggregator.nft.at(nft_address).get_glb_metadata(int(token_id))
            )
        except Exception as e:
            log.error(
                "nft_metadata_fetch_failed",
                nft_address=nft_address,
                token_id=token_id,
                error=str(e),
            )
            return demo_metadata_payload(token_id)

        return {
            "glbUri": glb_uri,
            "previewUri": preview_uri,
            "name": name,
            "description": description,
            "creator": creator,
        }


class MockSource(TokenDataSource):
    """Serves demonstration data only."""

    name = "mock"

    def __init__(self, demo: DemoCatalog) -> None:
        self.demo = demo

    async def active_listings(self) -> MarketSnapshot:
        listings = self.demo.listings()
        return MarketSnapshot(
            listings=listings,
            records=self.demo.listing_records(listings),
            is_demo=True,
        )

    async def owned_tokens(self, owner: str) -> OwnedSnapshot:
        return OwnedSnapshot(owner=owner, tokens=self.demo.owned_tokens(owner), is_demo=True)

    async def token(self, token_id: int) -> TokenRecord:
        return self.demo.token(token_id)

    async def glb_metadata(self, nft_address: str, token_id: str) -> dict[str, str]:
        return demo_metadata_payload(token_id)
