"""Reusable UI components."""

from glbmarket.ui.components.glb_viewer import (
    MODEL_VIEWER_SCRIPT,
    ViewerOptions,
    ViewerState,
    ViewerStatus,
    create_glb_viewer,
    load_model,
    render_viewer_html,
    viewer_html_for,
)

__all__ = [
    "MODEL_VIEWER_SCRIPT",
    "ViewerOptions",
    "ViewerState",
    "ViewerStatus",
    "create_glb_viewer",
    "load_model",
    "render_viewer_html",
    "viewer_html_for",
]
