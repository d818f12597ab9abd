"""Gradio UI module.

Page view models hold per-user state (selection, typed amounts, pending
transactions), so they are created per browser session and looked up by
Gradio's ``session_hash``. Every page gets its own transaction tracker.
"""

from dataclasses import dataclass

import gradio as gr
import structlog

from glbmarket.core.views import MarketplaceView, MintView, MyNftsView, TokenView
from glbmarket.services.session import MarketSession, get_session
from glbmarket.services.transactions import TransactionTracker

log = structlog.get_logger(__name__)

DEFAULT_SESSION_KEY = "default"


@dataclass
class PageViews:
    """View models of one browser session."""

    marketplace: MarketplaceView
    my_nfts: MyNftsView
    mint: MintView
    token: TokenView


def build_page_views(session: MarketSession) -> PageViews:
    """Create fresh view models bound to ``session``."""
    wallet = session.wallet_address
    return PageViews(
        marketplace=MarketplaceView(
            session.source,
            session.marketplace,
            TransactionTracker(session.client),
            wallet_address=wallet,
        ),
        my_nfts=MyNftsView(
            session.source,
            session.nft,
            session.marketplace,
            TransactionTracker(session.client),
            wallet_address=wallet,
        ),
        mint=MintView(
            session.nft,
            TransactionTracker(session.client),
            wallet_address=wallet,
            uploaded_glb_uri=session.settings.demo_glb_uri,
            uploaded_preview_uri=session.settings.demo_preview_uri,
        ),
        token=TokenView(session.source),
    )


_page_views: dict[str, PageViews] = {}


def _session_key(request: gr.Request | None) -> str:
    if request is None or not request.session_hash:
        return DEFAULT_SESSION_KEY
    return request.session_hash


def get_page_views(request: gr.Request | None) -> PageViews:
    """Get or create the view models of the requesting browser session."""
    key = _session_key(request)
    views = _page_views.get(key)
    if views is None:
        views = build_page_views(get_session())
        _page_views[key] = views
        log.debug("page_views_created", session=key, sessions=len(_page_views))
    return views


def release_page_views(request: gr.Request | None) -> None:
    """Drop the view models of a closed browser session."""
    key = _session_key(request)
    if _page_views.pop(key, None) is not None:
        log.debug("page_views_released", session=key, sessions=len(_page_views))
