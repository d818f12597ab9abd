"""Marketplace page.

Provides:
- Active listings table (demo listings when none can be loaded)
- Listing details sidebar with the 3D viewer
- Buy at the listed price, or make an offer
"""

from collections.abc import AsyncGenerator
from typing import Any

import gradio as gr
import structlog

from glbmarket.core.views import MarketplaceView
from glbmarket.core.views.marketplace import DEFAULT_OFFER_DURATION
from glbmarket.models.token import short_address
from glbmarket.services.session import get_session
from glbmarket.ui import get_page_views
from glbmarket.ui.components.glb_viewer import (
    create_glb_viewer,
    render_viewer_html,
    viewer_html_for,
)

log = structlog.get_logger(__name__)

LISTING_HEADERS = ["Token ID", "Name", "Price (ETH)", "Seller"]
NO_SELECTION = "*Select a listing to view details*"


# =============================================================================
# Helper Functions - Display
# =============================================================================


def _format_listings_for_table(view: MarketplaceView) -> list[list[str]]:
    """Format listings for table display.

    Returns:
        List of rows, each row is [Token ID, Name, Price, Seller].
    """
    rows = []
    for listing in view.listings:
        record = view.record_for(listing.token_id)
        rows.append([
            str(listing.token_id),
            record.display_name if record else f"NFT #{listing.token_id}",
            listing.price_eth,
            short_address(listing.seller_address),
        ])
    return rows


def _status_markdown(view: MarketplaceView) -> str:
    if view.is_loading:
        return "*Loading listings...*"
    if not view.listings:
        return "### No NFTs listed for sale"
    info = f"*Showing {len(view.listings)} listings*"
    if view.snapshot is not None and view.snapshot.is_demo:
        info += " *(demo data: no live listings could be loaded)*"
    return info


def _feedback_markdown(view: MarketplaceView) -> str:
    if view.error:
        return f"❌ {view.error}"
    if view.message:
        return f"✅ {view.message}"
    return ""


def _detail_markdown(view: MarketplaceView) -> str:
    listing = view.selected_listing
    if listing is None:
        return NO_SELECTION

    record = view.selected_record
    name = record.display_name if record else f"NFT #{listing.token_id}"
    description = record.description if record else ""
    creator = short_address(record.creator_address) if record else "Unknown"
    owner_note = "\n\n*This is your listing.*" if view.is_own_listing else ""

    return f"""
### {name}

{description}

| Field | Value |
|-------|-------|
| **Token ID** | {listing.token_id} |
| **Price** | {listing.price_eth} ETH |
| **Seller** | `{short_address(listing.seller_address)}` |
| **Creator** | `{creator}` |
{owner_note}
"""


# =============================================================================
# Event Handlers
# =============================================================================


async def _load_listings(request: gr.Request) -> tuple[list[list[str]], str]:
    """Load (or reload) listings for the requesting session."""
    view = get_page_views(request).marketplace
    try:
        await view.load()
    except Exception as e:
        log.error("marketplace_load_failed", error=str(e))
        view.error = f"Error loading listings: {e}"
    return _format_listings_for_table(view), _status_markdown(view)


async def _on_listing_select(
    evt: gr.SelectData,
    request: gr.Request,
) -> tuple[Any, str, str, str, Any, Any]:
    """Open the details sidebar for the selected row."""
    view = get_page_views(request).marketplace
    closed = (
        gr.update(open=False),
        NO_SELECTION,
        render_viewer_html(None),
        "",
        gr.update(interactive=False),
        gr.update(interactive=False),
    )
    if evt.index is None:
        return closed

    row_idx = evt.index[0] if isinstance(evt.index, (tuple, list)) else evt.index
    if row_idx >= len(view.listings):
        return closed

    listing = view.select(view.listings[row_idx].token_id)
    if listing is None:
        return closed

    record = view.selected_record
    asset_uri = record.asset_uri if record else get_session().demo.glb_uri
    viewer = await viewer_html_for(asset_uri, get_session().settings.viewer_gateway_url)
    return (
        gr.update(open=True),
        _detail_markdown(view),
        viewer,
        _feedback_markdown(view),
        gr.update(interactive=view.can_buy),
        gr.update(interactive=view.is_connected and not view.is_own_listing),
    )


async def _on_buy(request: gr.Request) -> AsyncGenerator[tuple[Any, ...], None]:
    """Buy the selected listing; yields once submitted and once resolved."""
    view = get_page_views(request).marketplace
    handle = await view.buy()
    if handle is None or handle.is_resolved:
        yield (
            _feedback_markdown(view),
            _format_listings_for_table(view),
            gr.update(interactive=view.can_buy),
        )
        return

    yield (
        f"⏳ Purchase submitted (`{handle.tx_hash}`), waiting for confirmation...",
        gr.update(),
        gr.update(interactive=False),
    )
    await handle.wait()
    yield (
        _feedback_markdown(view),
        _format_listings_for_table(view),
        gr.update(interactive=view.can_buy),
    )


async def _on_make_offer(
    amount: str,
    duration: float | None,
    request: gr.Request,
) -> AsyncGenerator[tuple[Any, ...], None]:
    """Make an offer on the selected listing."""
    view = get_page_views(request).marketplace
    duration_seconds = int(duration) if duration else None
    handle = await view.make_offer(amount, duration_seconds)
    if handle is None or handle.is_resolved:
        yield _feedback_markdown(view), gr.update()
        return

    yield f"⏳ Offer submitted (`{handle.tx_hash}`), waiting for confirmation...", gr.update()
    await handle.wait()
    yield _feedback_markdown(view), view.offer_amount


def _on_close(request: gr.Request) -> tuple[Any, str, str]:
    get_page_views(request).marketplace.clear_selection()
    return gr.update(open=False), NO_SELECTION, ""


# =============================================================================
# Page Render
# =============================================================================


def render() -> None:
    """Render the marketplace page content.

    Creates the listings interface with:
    - Listings table with a details sidebar and 3D viewer
    - Buy and make-offer actions
    """
    with gr.Column():
        gr.Markdown(
            """
            # 🛒 Marketplace

            Browse 3D models listed for sale.
            """
        )

        # Listing details sidebar (right side)
        with gr.Sidebar(position="right", open=False) as listing_sidebar:
            gr.Markdown("## 🧊 Listing Details")
            viewer = create_glb_viewer()
            listing_detail_display = gr.Markdown(NO_SELECTION)

            buy_btn = gr.Button("Buy Now", variant="primary", interactive=False)

            with gr.Accordion("Make an Offer", open=False):
                offer_amount = gr.Textbox(
                    label="Offer amount (ETH)",
                    placeholder="0.05",
                    elem_id="offer-amount",
                )
                offer_duration = gr.Number(
                    value=DEFAULT_OFFER_DURATION,
                    label="Offer duration (seconds)",
                    precision=0,
                    minimum=1,
                )
                offer_btn = gr.Button("Make Offer", variant="secondary", interactive=False)

            feedback = gr.Markdown("")
            close_btn = gr.Button("Close", size="sm")

        with gr.Row():
            refresh_btn = gr.Button("🔄 Refresh", size="sm", variant="secondary")
            listings_info = gr.Markdown("*Loading listings...*")

        listings_table = gr.Dataframe(
            headers=LISTING_HEADERS,
            datatype=["str", "str", "str", "str"],
            interactive=False,
            wrap=True,
        )

        gr.on(
            triggers=None,
            fn=_load_listings,
            outputs=[listings_table, listings_info],
        )
        refresh_btn.click(
            fn=_load_listings,
            outputs=[listings_table, listings_info],
        )
        listings_table.select(
            fn=_on_listing_select,
            outputs=[
                listing_sidebar,
                listing_detail_display,
                viewer,
                feedback,
                buy_btn,
                offer_btn,
            ],
        )
        buy_btn.click(
            fn=_on_buy,
            outputs=[feedback, listings_table, buy_btn],
        )
        offer_btn.click(
            fn=_on_make_offer,
            inputs=[offer_amount, offer_duration],
            outputs=[feedback, offer_amount],
        )
        close_btn.click(
            fn=_on_close,
            outputs=[listing_sidebar, listing_detail_display, feedback],
        )
