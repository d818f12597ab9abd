"""Page view models.

Each page is a small state machine (``loading -> ready``) with a
selection for its detail modal. Views compose the data source and the
transaction tracker; they hold no UI code.
"""

from glbmarket.core.views.base import PageView, ViewStatus, parse_eth_amount
from glbmarket.core.views.marketplace import MarketplaceView
from glbmarket.core.views.mint import MintForm, MintView, parse_minted_token_id
from glbmarket.core.views.my_nfts import MyNftsView
from glbmarket.core.views.token_view import TokenView

__all__ = [
    "MarketplaceView",
    "MintForm",
    "MintView",
    "MyNftsView",
    "PageView",
    "TokenView",
    "ViewStatus",
    "parse_eth_amount",
    "parse_minted_token_id",
]
