"""GLB Market - Main application entry point."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager

import gradio as gr
import structlog
import uvicorn
from fastapi import FastAPI

from glbmarket.api.routes import health, nft_metadata
from glbmarket.config import get_settings
from glbmarket.config.logging import configure_logging
from glbmarket.services.assets.gateway import close_asset_client
from glbmarket.services.session import get_session
from glbmarket.ui.app import create_dashboard

log = structlog.get_logger()


@asynccontextmanager
async def lifespan(_app: FastAPI) -> AsyncGenerator[None, None]:
    """Manage application lifecycle.

    On startup: Resolve the market session and check the chain node
    (an unreachable node is not fatal; pages fall back to demo data).
    On shutdown: Close the asset gateway client.
    """
    session = get_session()
    if await session.client.is_reachable():
        log.info("startup_chain_connected", rpc_url=session.settings.rpc_url)
    else:
        log.warning("startup_chain_unreachable", rpc_url=session.settings.rpc_url)

    yield

    await close_asset_client()
    log.info("shutdown_complete")


def create_app() -> FastAPI:
    """
    Create and configure the FastAPI application.

    Returns:
        Configured FastAPI application instance.
    """
    configure_logging()
    settings = get_settings()

    application = FastAPI(
        title=settings.app_name,
        description="Mint, list, browse and view 3D GLB NFTs",
        version=settings.app_version,
        lifespan=lifespan,
    )

    application.include_router(health.router, prefix="/api")
    application.include_router(nft_metadata.router, prefix="/api")

    # Must be mounted AFTER registering API routes
    dashboard = create_dashboard()
    application = gr.mount_gradio_app(
        app=application,
        blocks=dashboard,
        path="/",
    )
    log.info("dashboard_mounted", path="/")

    return application  # type: ignore[no-any-return]


def main() -> None:
    """Run the application with uvicorn."""
    settings = get_settings()
    uvicorn.run(
        "glbmarket.main:create_app",
        factory=True,
        host=settings.host,
        port=settings.port,
        reload=settings.debug,
    )


if __name__ == "__main__":
    main()
