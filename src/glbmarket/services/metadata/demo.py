"""Synthetic demonstration data.

Used when no live data can be resolved (no backend, zero balance, no
listings) and by the mock data source. The records are deterministic:
token ids start at 1 and prices ramp by 0.01 ETH per token.
"""

from dataclasses import dataclass

from glbmarket.models.token import Listing, OwnedToken, TokenRecord

# First default Anvil account
DEMO_ACCOUNT = "0xf39Fd6e51aad88F6F4ce6aB8827279cffFb92266"
DEMO_PRICE_STEP = 10**16  # 0.01 ETH

MARKET_DEMO_COUNT = 5
OWNED_DEMO_COUNT = 3

# Payload returned by the metadata endpoint when the contract read fails
DEMO_METADATA_GLB_URI = (
    "https://market-assets.fra1.cdn.digitaloceanspaces.com/market-assets/assets/Astronaut.glb"
)
DEMO_METADATA_PREVIEW_URI = "https://example.com/preview.png"
DEMO_METADATA_CREATOR = "0x1234567890123456789012345678901234567890"


def demo_metadata_payload(token_id: str | int | None) -> dict[str, str]:
    """Fixed payload served by the metadata endpoint on internal failure."""
    return {
        "glbUri": DEMO_METADATA_GLB_URI,
        "previewUri": DEMO_METADATA_PREVIEW_URI,
        "name": f"3D Model #{token_id}",
        "description": "This is a sample 3D model for demonstration purposes.",
        "creator": DEMO_METADATA_CREATOR,
    }


@dataclass(frozen=True)
class DemoCatalog:
    """Builds demonstration records for one deployment."""

    nft_address: str
    glb_uri: str
    preview_uri: str

    def token(self, token_id: int, owner: str | None = None) -> TokenRecord:
        return TokenRecord(
            token_id=token_id,
            asset_uri=self.glb_uri,
            preview_uri=self.preview_uri,
            display_name=f"3D Model #{token_id}",
            description=f"This is a 3D GLB model NFT with ID {token_id}",
            creator_address=owner or DEMO_ACCOUNT,
            owner_or_seller_address=owner,
        )

    def listings(self, count: int = MARKET_DEMO_COUNT) -> list[Listing]:
        return [
            Listing(
                token_id=i,
                price=i * DEMO_PRICE_STEP,
                seller_address=DEMO_ACCOUNT,
                nft_address=self.nft_address,
                is_glb=True,
                preview_uri=self.preview_uri,
            )
            for i in range(1, count + 1)
        ]

    def listing_records(self, listings: list[Listing]) -> dict[int, TokenRecord]:
        return {
            item.token_id: self.token(item.token_id, owner=item.seller_address)
            for item in listings
        }

    def owned_tokens(self, owner: str, count: int = OWNED_DEMO_COUNT) -> list[OwnedToken]:
        """Demo ownership view; every other token is listed."""
        tokens = []
        for i in range(1, count + 1):
            listing = None
            if i % 2 == 0:
                listing = Listing(
                    token_id=i,
                    price=i * DEMO_PRICE_STEP,
                    seller_address=owner,
                    nft_address=self.nft_address,
                    preview_uri=self.preview_uri,
                )
            tokens.append(OwnedToken(record=self.token(i, owner=owner), listing=listing))
        return tokens
