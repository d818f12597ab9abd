"""Health check endpoint with chain node status."""

from typing import Any

from fastapi import APIRouter

from glbmarket.api.dependencies import SessionDep

router = APIRouter(tags=["health"])


@router.get("/health")
async def health_check(session: SessionDep) -> dict[str, Any]:
    """
    Health check endpoint with chain node status.

    Returns:
        dict with overall status, version, chain info and node reachability.
    """
    reachable = await session.client.is_reachable()

    return {
        "status": "ok" if reachable else "degraded",
        "version": session.settings.app_version,
        "chain": {
            "chain_id": session.chain.chain_id,
            "name": session.chain.name,
            "deployed": session.chain.is_deployed,
            "rpc_reachable": reachable,
        },
        "data_source": session.source.name,
    }
