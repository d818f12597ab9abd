"""Token and listing models.

Models:
    TokenRecord: Denormalized metadata for one token
    Listing: Active marketplace entry for one token
    OwnedToken: Ownership view entry (record plus optional listing)
"""

from collections.abc import Sequence
from typing import Any

from pydantic import BaseModel, ConfigDict, Field

from glbmarket.config.chains import ZERO_ADDRESS

WEI_PER_ETH = 10**18


def format_eth(wei: int) -> str:
    """Format a wei amount as an ETH string without trailing zeros."""
    whole, frac = divmod(wei, WEI_PER_ETH)
    if frac == 0:
        return str(whole)
    return f"{whole}.{str(frac).rjust(18, '0').rstrip('0')}"


def short_address(address: str | None) -> str:
    """Shorten an address to 0x1234...abcd form."""
    if not address:
        return "Unknown"
    return f"{address[:6]}...{address[-4:]}"


class TokenRecord(BaseModel):
    """Metadata assembled for one token from contract reads.

    Attributes:
        token_id: Token identifier within the NFT contract.
        asset_uri: HTTP URI of the GLB asset.
        preview_uri: HTTP URI of the preview image.
        display_name: Token name.
        description: Token description.
        creator_address: Address that minted the token.
        owner_or_seller_address: Owner (ownership views) or seller
            (marketplace views); None elsewhere.
        is_placeholder: True when reads failed and defaults were used.
    """

    model_config = ConfigDict(frozen=True)

    token_id: int = Field(..., ge=0)
    asset_uri: str
    preview_uri: str
    display_name: str
    description: str
    creator_address: str
    owner_or_seller_address: str | None = None
    is_placeholder: bool = False


class Listing(BaseModel):
    """Active marketplace listing.

    Attributes:
        token_id: Listed token.
        price: Price in wei.
        seller_address: Seller, zero address when the entry is empty.
        nft_address: NFT contract of the listed token.
        is_glb: Whether the listed asset is a 3D GLB model.
        preview_uri: Preview image URI stored with the listing.
    """

    model_config = ConfigDict(frozen=True)

    token_id: int = Field(..., ge=0)
    price: int = Field(..., ge=0)
    seller_address: str
    nft_address: str
    is_glb: bool = True
    preview_uri: str = ""

    @property
    def is_active(self) -> bool:
        """An entry with a zero seller address is not a listing."""
        return self.seller_address.lower() != ZERO_ADDRESS

    @property
    def price_eth(self) -> str:
        """Price formatted in ETH."""
        return format_eth(self.price)

    @classmethod
    def from_contract(cls, raw: Any) -> "Listing":
        """Build a Listing from a decoded contract struct.

        Accepts either the tuple returned by web3 for the
        ``(price, seller, tokenId, nftAddress, is3dGlb, previewUri)`` struct
        or a mapping with the same camelCase keys.
        """
        if isinstance(raw, dict):
            return cls(
                price=int(raw["price"]),
                seller_address=raw["seller"],
                token_id=int(raw["tokenId"]),
                nft_address=raw["nftAddress"],
                is_glb=bool(raw.get("is3dGlb", True)),
                preview_uri=raw.get("previewUri", ""),
            )

        fields: Sequence[Any] = tuple(raw)
        return cls(
            price=int(fields[0]),
            seller_address=fields[1],
            token_id=int(fields[2]),
            nft_address=fields[3],
            is_glb=bool(fields[4]),
            preview_uri=fields[5] if len(fields) > 5 else "",
        )


class OwnedToken(BaseModel):
    """Entry of the ownership view."""

    model_config = ConfigDict(frozen=True)

    record: TokenRecord
    listing: Listing | None = None

    @property
    def token_id(self) -> int:
        return self.record.token_id

    @property
    def is_listed(self) -> bool:
        return self.listing is not None and self.listing.is_active

    @property
    def price(self) -> int:
        """Listing price in wei, 0 when not listed."""
        return self.listing.price if self.is_listed and self.listing else 0
