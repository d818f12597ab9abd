"""Shared pytest fixtures for GLB Market tests.

This module provides fixtures for:
- Environment defaults and settings
- Mocked chain client and contract wrappers
- Demo catalog and transaction tracker
- Test data factories

Usage:
    @pytest.mark.asyncio
    async def test_something(mock_nft, demo_catalog):
        ...
"""

import os
from collections.abc import Generator
from unittest.mock import AsyncMock, MagicMock

import pytest

from glbmarket.config.chains import CONTRACT_ADDRESSES
from glbmarket.config.settings import Settings, get_settings
from glbmarket.services.metadata.demo import DemoCatalog
from glbmarket.services.session import get_session
from glbmarket.services.transactions import TransactionTracker
from tests.factories.token import ListingFactory, OwnedTokenFactory, TokenRecordFactory

ANVIL_NFT = CONTRACT_ADDRESSES[31337]["glb3dNft"]
ANVIL_MARKETPLACE = CONTRACT_ADDRESSES[31337]["glb3dMarketplace"]

BUYER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
SELLER = "0x3C44CdDdB6a900fa2b585dd299e03d12FA4293BC"

TX_HASH = "0x" + "ab" * 32


# =============================================================================
# Environment Configuration
# =============================================================================


@pytest.fixture(scope="session", autouse=True)
def setup_test_environment() -> Generator[None, None, None]:
    """Set up test environment variables.

    Only sets defaults; variables already present are kept.
    """
    original_env = os.environ.copy()

    os.environ.setdefault("RPC_URL", "http://localhost:8545")
    os.environ.setdefault("CHAIN_ID", "31337")
    os.environ.setdefault("DATA_SOURCE", "mock")
    os.environ.setdefault("LOG_LEVEL", "DEBUG")

    yield

    os.environ.clear()
    os.environ.update(original_env)


@pytest.fixture(autouse=True)
def clear_cached_singletons() -> Generator[None, None, None]:
    """Drop cached settings and session around each test."""
    get_settings.cache_clear()
    get_session.cache_clear()
    yield
    get_settings.cache_clear()
    get_session.cache_clear()


@pytest.fixture
def settings() -> Settings:
    """Settings with defaults only (no .env file)."""
    return Settings(_env_file=None)  # type: ignore[call-arg]


# =============================================================================
# Factory Fixtures
# =============================================================================


@pytest.fixture
def token_record_factory() -> type[TokenRecordFactory]:
    """Provide token record factory."""
    return TokenRecordFactory


@pytest.fixture
def listing_factory() -> type[ListingFactory]:
    """Provide listing factory."""
    return ListingFactory


@pytest.fixture
def owned_token_factory() -> type[OwnedTokenFactory]:
    """Provide owned token factory."""
    return OwnedTokenFactory


# =============================================================================
# Chain Mocks
# =============================================================================


@pytest.fixture
def demo_catalog() -> DemoCatalog:
    """Demo catalog for the Anvil deployment."""
    return DemoCatalog(
        nft_address=ANVIL_NFT,
        glb_uri="https://gateway.pinata.cloud/ipfs/demo-glb",
        preview_uri="https://gateway.pinata.cloud/ipfs/demo-preview",
    )


@pytest.fixture
def mock_chain_client() -> MagicMock:
    """Mock ChainClient.

    ``wait_for_receipt`` returns a successful receipt by default.
    """
    mock = MagicMock()
    mock.account_address = BUYER
    mock.is_connected_wallet = True
    mock.read = AsyncMock()
    mock.write = AsyncMock(return_value=TX_HASH)
    mock.wait_for_receipt = AsyncMock(return_value={"status": 1, "logs": []})
    mock.is_reachable = AsyncMock(return_value=True)
    return mock


@pytest.fixture
def mock_nft() -> MagicMock:
    """Mock Glb3dNftContract with all reads and writes as AsyncMocks."""
    mock = MagicMock()
    mock.address = ANVIL_NFT
    for method in (
        "get_glb_metadata",
        "glb_uri",
        "preview_uri",
        "name",
        "description",
        "creator",
        "balance_of",
        "token_of_owner_by_index",
        "mint_glb_3d_nft",
        "approve",
    ):
        setattr(mock, method, AsyncMock())
    mock.approve.return_value = TX_HASH
    mock.mint_glb_3d_nft.return_value = TX_HASH
    return mock


@pytest.fixture
def mock_marketplace() -> MagicMock:
    """Mock Glb3dMarketplaceContract with all reads and writes as AsyncMocks."""
    mock = MagicMock()
    mock.address = ANVIL_MARKETPLACE
    for method in (
        "get_active_listings",
        "get_listing_by_nft_address",
        "list_item",
        "cancel_listing",
        "buy_item",
        "create_offer",
    ):
        setattr(mock, method, AsyncMock(return_value=TX_HASH))
    return mock


@pytest.fixture
def tracker(mock_chain_client: MagicMock) -> TransactionTracker:
    """Transaction tracker over the mocked chain client."""
    return TransactionTracker(mock_chain_client)
