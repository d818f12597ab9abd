"""Mint page: upload a GLB model and a preview, then mint a token."""

from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

import gradio as gr
import structlog

from glbmarket.core.views.mint import DEFAULT_ROYALTY_BPS, MAX_ROYALTY_BPS, MintForm, MintView
from glbmarket.ui import get_page_views

log = structlog.get_logger(__name__)


def _feedback_markdown(view: MintView) -> str:
    if view.error:
        return f"❌ {view.error}"
    if view.is_success:
        md = f"✅ {view.message}"
        if view.minted_token_id is not None:
            md += f"\n\n[View your NFT](/view-nft?tokenId={view.minted_token_id})"
        return md
    return ""


def _as_path(value: str | None) -> Path | None:
    return Path(value) if value else None


async def _on_mint(
    glb_file: str | None,
    preview_file: str | None,
    name: str,
    description: str,
    royalty_bps: float,
    request: gr.Request,
) -> AsyncGenerator[tuple[Any, ...], None]:
    """Validate the form and mint; yields once submitted and once resolved."""
    view = get_page_views(request).mint
    form = MintForm(
        glb_file=_as_path(glb_file),
        preview_file=_as_path(preview_file),
        name=name or "",
        description=description or "",
        royalty_bps=int(royalty_bps) if royalty_bps is not None else DEFAULT_ROYALTY_BPS,
    )
    handle = await view.mint(form)
    if handle is None or handle.is_resolved:
        yield _feedback_markdown(view), gr.update(interactive=True), gr.update(visible=False)
        return

    yield (
        f"⏳ Minting (`{handle.tx_hash}`), waiting for confirmation...",
        gr.update(interactive=False),
        gr.update(visible=False),
    )
    await handle.wait()
    yield (
        _feedback_markdown(view),
        gr.update(interactive=not view.is_success),
        gr.update(visible=view.is_success),
    )


def _on_mint_another(request: gr.Request) -> tuple[Any, ...]:
    """Reset the form for another mint."""
    get_page_views(request).mint.reset()
    log.debug("mint_form_reset")
    return (
        None,
        None,
        "",
        "",
        DEFAULT_ROYALTY_BPS,
        "",
        gr.update(interactive=True),
        gr.update(visible=False),
    )


def render() -> None:
    """Render the mint page content."""
    with gr.Column():
        gr.Markdown(
            """
            # ✨ Mint a 3D NFT

            Upload a GLB model and a preview image, describe it, and mint.
            """
        )

        with gr.Row():
            glb_file = gr.File(
                label="3D model (.glb)",
                file_types=[".glb"],
                type="filepath",
                elem_id="mint-glb-file",
            )
            preview_file = gr.File(
                label="Preview image",
                file_types=["image"],
                type="filepath",
                elem_id="mint-preview-file",
            )

        name = gr.Textbox(label="Name", placeholder="My 3D model")
        description = gr.Textbox(label="Description", lines=3)
        royalty = gr.Slider(
            minimum=0,
            maximum=MAX_ROYALTY_BPS,
            value=DEFAULT_ROYALTY_BPS,
            step=50,
            label="Royalty (basis points, 1000 = 10%)",
        )

        mint_btn = gr.Button("Mint NFT", variant="primary")
        feedback = gr.Markdown("")
        mint_another_btn = gr.Button("Mint Another", visible=False)

        mint_btn.click(
            fn=_on_mint,
            inputs=[glb_file, preview_file, name, description, royalty],
            outputs=[feedback, mint_btn, mint_another_btn],
        )
        mint_another_btn.click(
            fn=_on_mint_another,
            outputs=[
                glb_file,
                preview_file,
                name,
                description,
                royalty,
                feedback,
                mint_btn,
                mint_another_btn,
            ],
        )
