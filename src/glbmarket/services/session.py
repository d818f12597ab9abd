"""Market session: everything resolved once from settings.

Views and routes receive a ``MarketSession`` instead of reading the
deployment table or settings themselves.

Usage:
    from glbmarket.services.session import get_session

    session = get_session()
    snapshot = await session.source.active_listings()
"""

from dataclasses import dataclass
from functools import lru_cache

import structlog

from glbmarket.config.chains import ChainConfig, resolve_chain_config
from glbmarket.config.settings import Settings, get_settings
from glbmarket.services.chain.client import ChainClient
from glbmarket.services.chain.contracts import Glb3dMarketplaceContract, Glb3dNftContract
from glbmarket.services.metadata.aggregator import ReadAggregator
from glbmarket.services.metadata.demo import DemoCatalog
from glbmarket.services.metadata.sources import LiveSource, MockSource, TokenDataSource

log = structlog.get_logger(__name__)


@dataclass(frozen=True)
class MarketSession:
    """Resolved chain configuration and the services built on it."""

    settings: Settings
    chain: ChainConfig
    client: ChainClient
    nft: Glb3dNftContract
    marketplace: Glb3dMarketplaceContract
    demo: DemoCatalog
    source: TokenDataSource

    @property
    def wallet_address(self) -> str | None:
        return self.client.account_address


def build_session(
    settings: Settings,
    chain: ChainConfig | None = None,
    client: ChainClient | None = None,
) -> MarketSession:
    """Build a session from settings.

    Args:
        settings: Application settings.
        chain: Pre-resolved chain config (defaults to settings.chain_id).
        client: Chain client (defaults to one built from settings).

    Raises:
        ConfigurationError: If the chain id has no deployment entry.
    """
    chain = chain or resolve_chain_config(settings.chain_id)
    client = client or ChainClient.from_settings(settings)

    nft = Glb3dNftContract(client, chain.nft_address, settings.abi_dir)
    marketplace = Glb3dMarketplaceContract(client, chain.marketplace_address, settings.abi_dir)
    demo = DemoCatalog(
        nft_address=chain.nft_address,
        glb_uri=settings.demo_glb_uri,
        preview_uri=settings.demo_preview_uri,
    )

    source: TokenDataSource
    if settings.data_source == "mock":
        source = MockSource(demo)
    else:
        source = LiveSource(
            ReadAggregator(nft, marketplace, gateway_url=settings.ipfs_gateway_url, demo=demo)
        )

    log.info(
        "market_session_built",
        chain_id=chain.chain_id,
        chain=chain.name,
        deployed=chain.is_deployed,
        data_source=source.name,
        wallet_connected=client.is_connected_wallet,
    )
    return MarketSession(
        settings=settings,
        chain=chain,
        client=client,
        nft=nft,
        marketplace=marketplace,
        demo=demo,
        source=source,
    )


@lru_cache
def get_session() -> MarketSession:
    """Get the cached session built from the cached settings."""
    return build_session(get_settings())
