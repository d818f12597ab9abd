"""Typed wrappers for the Glb3dNft and Glb3dMarketplace contracts."""

from pathlib import Path
from typing import Any

from web3 import Web3

from glbmarket.models.token import Listing
from glbmarket.services.chain.abi import MARKETPLACE_CONTRACT, NFT_CONTRACT, load_abi
from glbmarket.services.chain.client import ChainClient


class Glb3dNftContract:
    """Reads and writes on the 3D NFT contract."""

    def __init__(self, client: ChainClient, address: str, abi_dir: Path | None = None) -> None:
        self.client = client
        self.address = address
        self._abi_dir = abi_dir
        self.abi = load_abi(NFT_CONTRACT, abi_dir)

    def at(self, address: str) -> "Glb3dNftContract":
        """Same contract interface at another address."""
        return Glb3dNftContract(self.client, address, self._abi_dir)

    async def _read(self, function: str, *args: Any) -> Any:
        return await self.client.read(self.address, self.abi, function, *args)

    async def get_glb_metadata(self, token_id: int) -> tuple[str, str, str, str, str]:
        """Return (glbUri, previewUri, name, description, creator)."""
        glb_uri, preview_uri, name, description, creator = await self._read(
            "getGlbMetadata", token_id
        )
        return glb_uri, preview_uri, name, description, creator

    async def glb_uri(self, token_id: int) -> str:
        return await self._read("glbURI", token_id)

    async def preview_uri(self, token_id: int) -> str:
        return await self._read("previewURI", token_id)

    async def name(self, token_id: int) -> str:
        return await self._read("name", token_id)

    async def description(self, token_id: int) -> str:
        return await self._read("description", token_id)

    async def creator(self, token_id: int) -> str:
        return await self._read("creator", token_id)

    async def balance_of(self, owner: str) -> int:
        return int(await self._read("balanceOf", Web3.to_checksum_address(owner)))

    async def token_of_owner_by_index(self, owner: str, index: int) -> int:
        return int(
            await self._read("tokenOfOwnerByIndex", Web3.to_checksum_address(owner), index)
        )

    async def mint_glb_3d_nft(
        self,
        glb_uri: str,
        preview_uri: str,
        name: str,
        description: str,
        royalty_bps: int,
    ) -> str:
        """Dispatch a mint and return the transaction hash."""
        return await self.client.write(
            self.address,
            self.abi,
            "mintGlb3dNft",
            glb_uri,
            preview_uri,
            name,
            description,
            royalty_bps,
        )

    async def approve(self, spender: str, token_id: int) -> str:
        """Approve ``spender`` to transfer ``token_id``."""
        return await self.client.write(
            self.address, self.abi, "approve", Web3.to_checksum_address(spender), token_id
        )


class Glb3dMarketplaceContract:
    """Reads and writes on the marketplace contract."""

    def __init__(self, client: ChainClient, address: str, abi_dir: Path | None = None) -> None:
        self.client = client
        self.address = address
        self.abi = load_abi(MARKETPLACE_CONTRACT, abi_dir)

    async def get_active_listings(
        self,
        start: int = 0,
        count: int = 100,
        only_glb: bool = False,
        only_featured: bool = False,
    ) -> list[Listing]:
        raw = await self.client.read(
            self.address, self.abi, "getActiveListings", start, count, only_glb, only_featured
        )
        return [Listing.from_contract(item) for item in raw]

    async def get_listing_by_nft_address(self, nft_address: str, token_id: int) -> Listing:
        raw = await self.client.read(
            self.address,
            self.abi,
            "getListingByNftAddress",
            Web3.to_checksum_address(nft_address),
            token_id,
        )
        return Listing.from_contract(raw)

    async def list_item(self, nft_address: str, token_id: int, price: int) -> str:
        return await self.client.write(
            self.address,
            self.abi,
            "listItem",
            Web3.to_checksum_address(nft_address),
            token_id,
            price,
        )

    async def cancel_listing(self, nft_address: str, token_id: int) -> str:
        return await self.client.write(
            self.address,
            self.abi,
            "cancelListing",
            Web3.to_checksum_address(nft_address),
            token_id,
        )

    async def buy_item(self, nft_address: str, token_id: int, price: int) -> str:
        """Buy a listed token, paying exactly ``price`` wei."""
        return await self.client.write(
            self.address,
            self.abi,
            "buyItem",
            Web3.to_checksum_address(nft_address),
            token_id,
            value=price,
        )

    async def create_offer(
        self,
        nft_address: str,
        token_id: int,
        duration_seconds: int,
        amount: int,
    ) -> str:
        """Offer ``amount`` wei for a token, valid for ``duration_seconds``."""
        return await self.client.write(
            self.address,
            self.abi,
            "createOffer",
            Web3.to_checksum_address(nft_address),
            token_id,
            duration_seconds,
            value=amount,
        )
