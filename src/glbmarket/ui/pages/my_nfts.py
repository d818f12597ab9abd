"""My NFTs page.

Lists the connected wallet's tokens. A selected token can be listed for
sale (approve the marketplace, then list) or have its listing canceled.
"""

from collections.abc import AsyncGenerator
from typing import Any

import gradio as gr
import structlog

from glbmarket.core.views import MyNftsView
from glbmarket.models.token import format_eth, short_address
from glbmarket.services.session import get_session
from glbmarket.ui import get_page_views
from glbmarket.ui.components.glb_viewer import create_glb_viewer, viewer_html_for

log = structlog.get_logger(__name__)

TOKEN_HEADERS = ["Token ID", "Name", "Status", "Price (ETH)"]
NO_SELECTION = "*Select an NFT to manage it*"


def _format_tokens_for_table(view: MyNftsView) -> list[list[str]]:
    """Format owned tokens for table display.

    Returns:
        List of rows, each row is [Token ID, Name, Status, Price].
    """
    return [
        [
            str(token.token_id),
            token.record.display_name,
            "Listed" if token.is_listed else "Not listed",
            format_eth(token.price) if token.is_listed else "-",
        ]
        for token in view.tokens
    ]


def _status_markdown(view: MyNftsView) -> str:
    if not view.is_connected:
        return "### Please connect your wallet to view your NFTs"
    if view.is_loading:
        return "*Loading your NFTs...*"
    if not view.tokens:
        return "### You don't own any NFTs yet"
    info = f"*Showing {len(view.tokens)} NFTs owned by `{short_address(view.wallet_address)}`*"
    if view.snapshot is not None and view.snapshot.is_demo:
        info += " *(demo data)*"
    return info


def _feedback_markdown(view: MyNftsView) -> str:
    if view.error:
        return f"❌ {view.error}"
    if view.message:
        return f"✅ {view.message}"
    return ""


def _detail_markdown(view: MyNftsView) -> str:
    token = view.selected
    if token is None:
        return NO_SELECTION

    record = token.record
    listing_row = (
        f"| **Listed at** | {format_eth(token.price)} ETH |"
        if token.is_listed
        else "| **Listed at** | Not listed |"
    )
    return f"""
### {record.display_name}

{record.description}

| Field | Value |
|-------|-------|
| **Token ID** | {record.token_id} |
| **Creator** | `{short_address(record.creator_address)}` |
{listing_row}
"""


def _action_updates(view: MyNftsView) -> tuple[Any, Any]:
    token = view.selected
    listed = token is not None and token.is_listed
    return (
        gr.update(interactive=token is not None and not listed),
        gr.update(interactive=listed),
    )


async def _load_tokens(request: gr.Request) -> tuple[list[list[str]], str]:
    """Load (or reload) the wallet's tokens."""
    view = get_page_views(request).my_nfts
    try:
        await view.load()
    except Exception as e:
        log.error("my_nfts_load_failed", error=str(e))
        view.error = f"Error loading NFTs: {e}"
    return _format_tokens_for_table(view), _status_markdown(view)


async def _on_token_select(
    evt: gr.SelectData,
    request: gr.Request,
) -> tuple[Any, ...]:
    """Open the management sidebar for the selected row."""
    view = get_page_views(request).my_nfts
    if evt.index is None:
        return gr.update(open=False), NO_SELECTION, gr.update(), "", *_action_updates(view)

    row_idx = evt.index[0] if isinstance(evt.index, (tuple, list)) else evt.index
    if row_idx >= len(view.tokens):
        return gr.update(open=False), NO_SELECTION, gr.update(), "", *_action_updates(view)

    token = view.select(view.tokens[row_idx].token_id)
    if token is None:
        return gr.update(open=False), NO_SELECTION, gr.update(), "", *_action_updates(view)

    viewer = await viewer_html_for(
        token.record.asset_uri, get_session().settings.viewer_gateway_url
    )
    return (
        gr.update(open=True),
        _detail_markdown(view),
        viewer,
        _feedback_markdown(view),
        *_action_updates(view),
    )


async def _on_list(price: str, request: gr.Request) -> AsyncGenerator[tuple[Any, ...], None]:
    """Approve then list; yields after each step settles."""
    view = get_page_views(request).my_nfts
    handle = await view.list_for_sale(price)
    if handle is None or handle.is_resolved:
        yield _feedback_markdown(view), gr.update(), gr.update(), *_action_updates(view)
        return

    yield (
        f"⏳ Approving the marketplace (`{handle.tx_hash}`), then listing...",
        gr.update(),
        gr.update(),
        gr.update(interactive=False),
        gr.update(interactive=False),
    )
    await handle.wait()
    yield (
        _feedback_markdown(view),
        _format_tokens_for_table(view),
        view.listing_price,
        *_action_updates(view),
    )


async def _on_cancel(request: gr.Request) -> AsyncGenerator[tuple[Any, ...], None]:
    """Cancel the selected token's listing."""
    view = get_page_views(request).my_nfts
    handle = await view.cancel_listing()
    if handle is None or handle.is_resolved:
        yield _feedback_markdown(view), gr.update(), *_action_updates(view)
        return

    yield (
        f"⏳ Canceling listing (`{handle.tx_hash}`)...",
        gr.update(),
        gr.update(interactive=False),
        gr.update(interactive=False),
    )
    await handle.wait()
    yield _feedback_markdown(view), _format_tokens_for_table(view), *_action_updates(view)


def _on_close(request: gr.Request) -> tuple[Any, str, str]:
    get_page_views(request).my_nfts.clear_selection()
    return gr.update(open=False), NO_SELECTION, ""


def render() -> None:
    """Render the my-NFTs page content."""
    with gr.Column():
        gr.Markdown(
            """
            # 🎒 My NFTs

            3D models held by the connected wallet.
            """
        )

        with gr.Sidebar(position="right", open=False) as token_sidebar:
            gr.Markdown("## 🧊 NFT Details")
            viewer = create_glb_viewer()
            token_detail_display = gr.Markdown(NO_SELECTION)

            listing_price = gr.Textbox(
                label="Listing price (ETH)",
                placeholder="0.1",
                elem_id="listing-price",
            )
            with gr.Row():
                list_btn = gr.Button("List for Sale", variant="primary", interactive=False)
                cancel_btn = gr.Button("Cancel Listing", variant="stop", interactive=False)

            feedback = gr.Markdown("")
            close_btn = gr.Button("Close", size="sm")

        with gr.Row():
            refresh_btn = gr.Button("🔄 Refresh", size="sm", variant="secondary")
            tokens_info = gr.Markdown("*Loading your NFTs...*")

        tokens_table = gr.Dataframe(
            headers=TOKEN_HEADERS,
            datatype=["str", "str", "str", "str"],
            interactive=False,
            wrap=True,
        )

        gr.on(triggers=None, fn=_load_tokens, outputs=[tokens_table, tokens_info])
        refresh_btn.click(fn=_load_tokens, outputs=[tokens_table, tokens_info])
        tokens_table.select(
            fn=_on_token_select,
            outputs=[
                token_sidebar,
                token_detail_display,
                viewer,
                feedback,
                list_btn,
                cancel_btn,
            ],
        )
        list_btn.click(
            fn=_on_list,
            inputs=[listing_price],
            outputs=[feedback, tokens_table, listing_price, list_btn, cancel_btn],
        )
        cancel_btn.click(
            fn=_on_cancel,
            outputs=[feedback, tokens_table, list_btn, cancel_btn],
        )
        close_btn.click(
            fn=_on_close,
            outputs=[token_sidebar, token_detail_display, feedback],
        )
