"""Unit tests for MyNftsView."""

from unittest.mock import AsyncMock, MagicMock

import pytest

from glbmarket.core.exceptions import TransactionFailedError
from glbmarket.core.views.base import ViewStatus
from glbmarket.core.views.my_nfts import MyNftsView
from glbmarket.models.snapshot import OwnedSnapshot
from glbmarket.services.transactions import TransactionTracker
from tests.factories.token import ListingFactory, OwnedTokenFactory, TokenRecordFactory

OWNER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"
OK_RECEIPT = {"status": 1, "logs": []}


@pytest.fixture
def source() -> MagicMock:
    unlisted = OwnedTokenFactory(record=TokenRecordFactory(token_id=1))
    listed = OwnedTokenFactory(
        record=TokenRecordFactory(token_id=2),
        listing=ListingFactory(token_id=2, price=10**17, seller_address=OWNER),
    )
    mock = MagicMock()
    mock.owned_tokens = AsyncMock(
        return_value=OwnedSnapshot(owner=OWNER, tokens=[unlisted, listed])
    )
    return mock


@pytest.fixture
def view(
    source: MagicMock,
    mock_nft: MagicMock,
    mock_marketplace: MagicMock,
    tracker: TransactionTracker,
) -> MyNftsView:
    return MyNftsView(source, mock_nft, mock_marketplace, tracker, wallet_address=OWNER)


class TestLoad:
    """Tests for loading owned tokens."""

    @pytest.mark.asyncio
    async def test_load_owned_tokens(self, view: MyNftsView, source: MagicMock) -> None:
        snapshot = await view.load()

        source.owned_tokens.assert_awaited_once_with(OWNER)
        assert snapshot is not None
        assert [token.token_id for token in view.tokens] == [1, 2]
        assert view.status == ViewStatus.READY

    @pytest.mark.asyncio
    async def test_no_wallet_loads_nothing(
        self,
        source: MagicMock,
        mock_nft: MagicMock,
        mock_marketplace: MagicMock,
        tracker: TransactionTracker,
    ) -> None:
        view = MyNftsView(source, mock_nft, mock_marketplace, tracker)

        assert await view.load() is None
        assert view.tokens == []
        assert view.is_connected is False
        assert view.status == ViewStatus.READY
        source.owned_tokens.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_select_missing_token(self, view: MyNftsView) -> None:
        await view.load()

        assert view.select(42) is None
        assert view.error == "No NFT selected"


class TestListForSale:
    """Tests for the approve-then-list sequence."""

    @pytest.mark.asyncio
    async def test_approve_then_list(
        self,
        view: MyNftsView,
        source: MagicMock,
        mock_nft: MagicMock,
        mock_marketplace: MagicMock,
    ) -> None:
        await view.load()
        view.select(1)

        handle = await view.list_for_sale("0.1")
        assert handle is not None
        mock_nft.approve.assert_awaited_once_with(mock_marketplace.address, 1)
        mock_marketplace.list_item.assert_not_awaited()

        await handle.wait()

        mock_marketplace.list_item.assert_awaited_once_with(mock_nft.address, 1, 10**17)
        assert view.list_handle is not None
        assert view.message == "NFT listed for sale!"
        assert view.listing_price == ""
        assert view.selected_token_id is None
        assert source.owned_tokens.await_count == 2

    @pytest.mark.asyncio
    async def test_approval_revert_skips_listing(
        self,
        view: MyNftsView,
        mock_chain_client: MagicMock,
        mock_marketplace: MagicMock,
    ) -> None:
        mock_chain_client.wait_for_receipt.side_effect = TransactionFailedError(
            "Transaction reverted", tx_hash="0x1"
        )
        await view.load()
        view.select(1)

        handle = await view.list_for_sale("0.1")
        await handle.wait()

        mock_marketplace.list_item.assert_not_awaited()
        assert view.error == "Error approving NFT: Transaction reverted"
        assert view.listing_price == "0.1"

    @pytest.mark.asyncio
    async def test_listing_failure_after_approval(
        self,
        view: MyNftsView,
        mock_chain_client: MagicMock,
        mock_marketplace: MagicMock,
    ) -> None:
        mock_chain_client.wait_for_receipt.side_effect = [
            OK_RECEIPT,
            TransactionFailedError("Transaction reverted", tx_hash="0x2"),
        ]
        await view.load()
        view.select(1)

        handle = await view.list_for_sale("0.1")
        await handle.wait()

        mock_marketplace.list_item.assert_awaited_once()
        assert view.error.startswith("Error listing NFT: Transaction reverted")
        assert "approved but the NFT is not listed" in view.error
        assert view.selected_token_id == 1

    @pytest.mark.asyncio
    @pytest.mark.parametrize("price", ["", "0", "abc", "0.0000000000000000001", "1e400"])
    async def test_invalid_price(
        self,
        view: MyNftsView,
        mock_nft: MagicMock,
        mock_marketplace: MagicMock,
        price: str,
    ) -> None:
        await view.load()
        view.select(1)

        assert await view.list_for_sale(price) is None
        assert view.error == "Please enter a valid price"
        mock_nft.approve.assert_not_awaited()
        mock_marketplace.list_item.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_requires_selection(self, view: MyNftsView) -> None:
        await view.load()

        assert await view.list_for_sale("0.1") is None
        assert view.error == "No NFT selected"


class TestCancelListing:
    """Tests for canceling a listing."""

    @pytest.mark.asyncio
    async def test_cancel_unlisted_token(
        self, view: MyNftsView, mock_marketplace: MagicMock
    ) -> None:
        await view.load()
        view.select(1)

        assert await view.cancel_listing() is None
        assert view.error == "This NFT is not listed"
        mock_marketplace.cancel_listing.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_cancel_listed_token(
        self,
        view: MyNftsView,
        source: MagicMock,
        mock_nft: MagicMock,
        mock_marketplace: MagicMock,
    ) -> None:
        await view.load()
        view.select(2)

        handle = await view.cancel_listing()
        await handle.wait()

        mock_marketplace.cancel_listing.assert_awaited_once_with(mock_nft.address, 2)
        assert view.message == "Listing canceled"
        assert view.selected_token_id is None
        assert source.owned_tokens.await_count == 2
