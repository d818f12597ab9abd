"""Dashboard pages package."""

from glbmarket.ui.pages import home, marketplace, mint, my_nfts, view_nft

__all__ = ["home", "marketplace", "mint", "my_nfts", "view_nft"]
