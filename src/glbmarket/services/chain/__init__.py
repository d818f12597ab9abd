"""Chain client and contract wrappers."""

from glbmarket.services.chain.client import ChainClient
from glbmarket.services.chain.contracts import Glb3dMarketplaceContract, Glb3dNftContract

__all__ = ["ChainClient", "Glb3dMarketplaceContract", "Glb3dNftContract"]
