"""View NFT page: one token with its 3D model.

The token can be chosen in the page or passed as ``?tokenId=<id>``.
"""

from typing import Any

import gradio as gr
import structlog

from glbmarket.models.token import TokenRecord, short_address
from glbmarket.services.session import get_session
from glbmarket.ui import get_page_views
from glbmarket.ui.components.glb_viewer import (
    ViewerOptions,
    create_glb_viewer,
    render_viewer_html,
    viewer_html_for,
)

log = structlog.get_logger(__name__)

NO_TOKEN = "*Enter a token ID to view it*"


def _record_markdown(record: TokenRecord) -> str:
    note = "\n\n*Metadata could not be read; showing defaults.*" if record.is_placeholder else ""
    return f"""
### {record.display_name}

{record.description}

| Field | Value |
|-------|-------|
| **Token ID** | {record.token_id} |
| **Creator** | `{short_address(record.creator_address)}` |
{note}
"""


def _parse_token_id(value: Any) -> int | None:
    try:
        token_id = int(value)
    except (TypeError, ValueError):
        return None
    return token_id if token_id >= 0 else None


async def _show_token(
    token_id_value: Any,
    auto_rotate: bool,
    request: gr.Request,
) -> tuple[str, str]:
    token_id = _parse_token_id(token_id_value)
    if token_id is None:
        return NO_TOKEN, render_viewer_html(None)

    view = get_page_views(request).token
    record = await view.load(token_id)
    viewer = await viewer_html_for(
        record.asset_uri,
        get_session().settings.viewer_gateway_url,
        ViewerOptions(auto_rotate=auto_rotate),
    )
    return _record_markdown(record), viewer


async def _on_page_load(request: gr.Request) -> tuple[Any, str, str]:
    """Show the token from the ``tokenId`` query parameter, if any."""
    raw = request.query_params.get("tokenId") if request else None
    token_id = _parse_token_id(raw)
    if token_id is None:
        return gr.update(), NO_TOKEN, render_viewer_html(None)

    log.debug("view_nft_from_query", token_id=token_id)
    detail, viewer = await _show_token(token_id, True, request)
    return token_id, detail, viewer


def render() -> None:
    """Render the view-NFT page content."""
    with gr.Column():
        gr.Markdown("# 🔍 View NFT")

        with gr.Row():
            token_id_input = gr.Number(label="Token ID", precision=0, minimum=0, scale=3)
            auto_rotate = gr.Checkbox(value=True, label="Auto-rotate", scale=1)
            view_btn = gr.Button("View", variant="primary", scale=1)

        with gr.Row():
            with gr.Column(scale=2):
                viewer = create_glb_viewer()
            with gr.Column(scale=1):
                token_detail = gr.Markdown(NO_TOKEN)

        gr.on(
            triggers=None,
            fn=_on_page_load,
            outputs=[token_id_input, token_detail, viewer],
        )
        gr.on(
            triggers=[view_btn.click, token_id_input.submit, auto_rotate.change],
            fn=_show_token,
            inputs=[token_id_input, auto_rotate],
            outputs=[token_detail, viewer],
        )
