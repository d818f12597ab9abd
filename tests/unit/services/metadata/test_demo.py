"""Unit tests for the demonstration data."""

from glbmarket.services.metadata.demo import (
    DEMO_ACCOUNT,
    DEMO_METADATA_GLB_URI,
    DEMO_PRICE_STEP,
    DemoCatalog,
    demo_metadata_payload,
)

OWNER = "0x70997970C51812dc3A010C7d01b50e0d17dc79C8"


class TestDemoListings:
    """Tests for demo marketplace listings."""

    def test_five_listings_with_increasing_prices(self, demo_catalog: DemoCatalog) -> None:
        listings = demo_catalog.listings()

        assert [item.token_id for item in listings] == [1, 2, 3, 4, 5]
        prices = [item.price for item in listings]
        assert prices == [i * DEMO_PRICE_STEP for i in range(1, 6)]
        assert all(a < b for a, b in zip(prices, prices[1:]))

    def test_listings_are_sold_by_first_dev_account(self, demo_catalog: DemoCatalog) -> None:
        listings = demo_catalog.listings()

        assert {item.seller_address for item in listings} == {DEMO_ACCOUNT}
        assert all(item.is_active for item in listings)
        assert {item.nft_address for item in listings} == {demo_catalog.nft_address}

    def test_listing_records(self, demo_catalog: DemoCatalog) -> None:
        listings = demo_catalog.listings(2)

        records = demo_catalog.listing_records(listings)

        assert set(records) == {1, 2}
        assert records[2].display_name == "3D Model #2"
        assert records[2].description == "This is a 3D GLB model NFT with ID 2"
        assert records[2].asset_uri == demo_catalog.glb_uri
        assert records[2].owner_or_seller_address == DEMO_ACCOUNT


class TestDemoOwnedTokens:
    """Tests for demo ownership data."""

    def test_three_tokens_even_ids_listed(self, demo_catalog: DemoCatalog) -> None:
        tokens = demo_catalog.owned_tokens(OWNER)

        assert [token.token_id for token in tokens] == [1, 2, 3]
        assert [token.is_listed for token in tokens] == [False, True, False]
        assert tokens[1].price == 2 * DEMO_PRICE_STEP
        assert tokens[1].listing is not None
        assert tokens[1].listing.seller_address == OWNER

    def test_records_belong_to_owner(self, demo_catalog: DemoCatalog) -> None:
        tokens = demo_catalog.owned_tokens(OWNER)

        assert {token.record.owner_or_seller_address for token in tokens} == {OWNER}


def test_demo_metadata_payload() -> None:
    payload = demo_metadata_payload("9")

    assert payload["glbUri"] == DEMO_METADATA_GLB_URI
    assert payload["glbUri"].endswith("Astronaut.glb")
    assert payload["name"] == "3D Model #9"
    assert set(payload) == {"glbUri", "previewUri", "name", "description", "creator"}
