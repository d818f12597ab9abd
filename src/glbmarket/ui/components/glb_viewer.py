"""3D GLB viewer component.

Rendering is delegated to the ``<model-viewer>`` web component in the
browser. This module only decides what to show:

- while the asset is being resolved: a loading overlay
- when the asset resolves: the model, with rotate/pan/zoom enabled and
  optional auto-rotation
- when it does not: a red placeholder cube and an error overlay
"""

import html
from dataclasses import dataclass
from enum import Enum

import gradio as gr
import structlog

from glbmarket.services.assets.gateway import AssetGatewayClient, get_asset_client
from glbmarket.services.assets.placeholder import cube_data_uri
from glbmarket.services.metadata.uri import normalize_uri

log = structlog.get_logger(__name__)

MODEL_VIEWER_SCRIPT = (
    '<script type="module" '
    'src="https://ajax.googleapis.com/ajax/libs/model-viewer/3.5.0/model-viewer.min.js">'
    "</script>"
)

LOAD_ERROR_MESSAGE = "Failed to load 3D model"


class ViewerStatus(str, Enum):
    """Viewer overlay state."""

    LOADING = "loading"
    READY = "ready"
    ERROR = "error"


@dataclass(frozen=True)
class ViewerOptions:
    """Display options of the viewer."""

    auto_rotate: bool = True
    background_color: str = "#f3f4f6"
    height: str = "480px"


@dataclass(frozen=True)
class ViewerState:
    """What the viewer shows for one asset URI."""

    source_uri: str
    status: ViewerStatus
    src: str = ""
    error: str | None = None


async def load_model(
    uri: str,
    gateway_url: str,
    client: AssetGatewayClient,
) -> ViewerState:
    """Resolve ``uri`` for display.

    Args:
        uri: Asset URI from the token record (ipfs:// or http(s)://).
        gateway_url: Gateway prefix for ipfs:// URIs.
        client: Gateway client used to probe the URL.

    Returns:
        READY state with the HTTP URL, or ERROR state with the placeholder cube.
    """
    url = normalize_uri(uri, gateway_url)
    if await client.probe(url):
        log.debug("viewer_model_ready", url=url)
        return ViewerState(source_uri=uri, status=ViewerStatus.READY, src=url)

    log.error("viewer_model_load_failed", url=url)
    return ViewerState(
        source_uri=uri,
        status=ViewerStatus.ERROR,
        src=cube_data_uri(),
        error=LOAD_ERROR_MESSAGE,
    )


def _overlay(inner: str) -> str:
    return (
        '<div class="glb-viewer-overlay" style="position:absolute;inset:0;display:flex;'
        "align-items:center;justify-content:center;background:rgba(243,244,246,0.75);"
        'z-index:10;">'
        f"{inner}</div>"
    )


def render_viewer_html(state: ViewerState | None, options: ViewerOptions | None = None) -> str:
    """Return the HTML for the viewer in ``state`` (None means loading)."""
    options = options or ViewerOptions()
    container_style = (
        f"position:relative;width:100%;height:{html.escape(options.height)};"
        f"background:{html.escape(options.background_color)};"
    )

    if state is None or state.status == ViewerStatus.LOADING:
        return (
            f'<div class="glb-viewer" style="{container_style}">'
            + _overlay('<div class="glb-viewer-spinner">Loading 3D model...</div>')
            + "</div>"
        )

    attributes = [
        f'src="{html.escape(state.src)}"',
        'alt="3D model"',
        "camera-controls",
        'touch-action="pan-y"',
        'style="width:100%;height:100%;'
        f'background-color:{html.escape(options.background_color)};"',
    ]
    if options.auto_rotate:
        attributes.append("auto-rotate")

    parts = [
        f'<div class="glb-viewer" style="{container_style}">',
        f"<model-viewer {' '.join(attributes)}></model-viewer>",
    ]
    if state.status == ViewerStatus.ERROR:
        parts.append(
            _overlay(
                '<div class="glb-viewer-error">'
                "<p><strong>Error loading 3D model</strong></p>"
                f"<p>{html.escape(state.error or LOAD_ERROR_MESSAGE)}</p>"
                "</div>"
            )
        )
    parts.append("</div>")
    return "".join(parts)


def create_glb_viewer(options: ViewerOptions | None = None) -> gr.HTML:
    """Create the viewer component, initially in the loading state."""
    return gr.HTML(value=render_viewer_html(None, options), elem_id="glb-viewer")


async def viewer_html_for(
    uri: str,
    gateway_url: str,
    options: ViewerOptions | None = None,
) -> str:
    """Resolve ``uri`` with the shared gateway client and render the viewer."""
    client = await get_asset_client()
    state = await load_model(uri, gateway_url, client)
    return render_viewer_html(state, options)
