"""Per-chain deployment table for the marketplace contracts.

The table is plain data. Callers resolve it once into a ``ChainConfig``
(see ``resolve_chain_config``) and pass that object around instead of
reading the table directly.
"""

from typing import Literal

from pydantic import BaseModel, ConfigDict, Field

from glbmarket.core.exceptions import ConfigurationError

ZERO_ADDRESS = "0x0000000000000000000000000000000000000000"

ContractRole = Literal["glb3dNft", "glb3dMarketplace"]

ANVIL_CHAIN_ID = 31337
SEPOLIA_CHAIN_ID = 11155111
MAINNET_CHAIN_ID = 1

CONTRACT_ADDRESSES: dict[int, dict[ContractRole, str]] = {
    # Anvil (local)
    ANVIL_CHAIN_ID: {
        "glb3dNft": "0x998abeb3E57409262aE5b751f60747921B33613E",
        "glb3dMarketplace": "0x70e0bA845a1A0F2DA3359C97E0285013525FFC49",
    },
    # Sepolia testnet, not deployed yet
    SEPOLIA_CHAIN_ID: {
        "glb3dNft": ZERO_ADDRESS,
        "glb3dMarketplace": ZERO_ADDRESS,
    },
    # Ethereum mainnet, not deployed yet
    MAINNET_CHAIN_ID: {
        "glb3dNft": ZERO_ADDRESS,
        "glb3dMarketplace": ZERO_ADDRESS,
    },
}

CHAIN_NAMES: dict[int, str] = {
    ANVIL_CHAIN_ID: "anvil",
    SEPOLIA_CHAIN_ID: "sepolia",
    MAINNET_CHAIN_ID: "mainnet",
}


class ChainConfig(BaseModel):
    """Contract addresses resolved for one chain.

    Attributes:
        chain_id: Numeric chain id.
        name: Human readable chain name.
        nft_address: Deployed Glb3dNft address.
        marketplace_address: Deployed Glb3dMarketplace address.
    """

    model_config = ConfigDict(frozen=True)

    chain_id: int = Field(..., ge=1)
    name: str
    nft_address: str
    marketplace_address: str

    @property
    def is_deployed(self) -> bool:
        """Both contracts have a non-zero address."""
        return ZERO_ADDRESS not in (self.nft_address, self.marketplace_address)


def resolve_chain_config(
    chain_id: int,
    table: dict[int, dict[ContractRole, str]] | None = None,
) -> ChainConfig:
    """Resolve the deployment table entry for ``chain_id``.

    Args:
        chain_id: Chain to resolve.
        table: Alternative deployment table (defaults to CONTRACT_ADDRESSES).

    Returns:
        ChainConfig for the chain.

    Raises:
        ConfigurationError: If the chain has no entry in the table.
    """
    addresses = (table if table is not None else CONTRACT_ADDRESSES).get(chain_id)
    if addresses is None:
        raise ConfigurationError(f"No contract addresses configured for chain {chain_id}")

    return ChainConfig(
        chain_id=chain_id,
        name=CHAIN_NAMES.get(chain_id, f"chain-{chain_id}"),
        nft_address=addresses["glb3dNft"],
        marketplace_address=addresses["glb3dMarketplace"],
    )
