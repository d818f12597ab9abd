"""GLB Market - client service for a 3D GLB NFT marketplace."""

__version__ = "0.1.0"
