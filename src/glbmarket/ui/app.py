"""Main Gradio dashboard application.

Creates the GLB Market dashboard with multipage routing.
"""

from pathlib import Path

import gradio as gr
import structlog

from glbmarket.ui import release_page_views
from glbmarket.ui.components.glb_viewer import MODEL_VIEWER_SCRIPT
from glbmarket.ui.pages import home, marketplace, mint, my_nfts, view_nft

log = structlog.get_logger(__name__)

CSS_PATH = Path(__file__).parent / "css" / "market.css"


def _on_unload(request: gr.Request) -> None:
    release_page_views(request)


def create_dashboard() -> gr.Blocks:
    """Create the GLB Market dashboard with multipage routing.

    Returns:
        Gradio Blocks application with routes configured.
    """
    custom_css = ""
    if CSS_PATH.exists():
        custom_css = CSS_PATH.read_text()
        log.debug("dashboard_css_loaded", path=str(CSS_PATH))

    with gr.Blocks(title="GLB Market", head=MODEL_VIEWER_SCRIPT) as app:
        pass

    app.theme = gr.themes.Soft()
    app.css = custom_css

    with app:
        home.render()
        # Per-session view models are dropped when the browser tab closes
        app.unload(_on_unload)

    with app.route("Marketplace", "/marketplace"):
        marketplace.render()

    with app.route("My NFTs", "/my-nfts"):
        my_nfts.render()

    with app.route("Mint", "/mint"):
        mint.render()

    with app.route("View NFT", "/view-nft"):
        view_nft.render()

    log.info(
        "dashboard_created",
        routes=["home", "marketplace", "my-nfts", "mint", "view-nft"],
    )

    return app  # type: ignore[no-any-return]
