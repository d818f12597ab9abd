"""NFT metadata endpoint.

Reads ``getGlbMetadata`` for one token. Any internal failure yields a
fixed demonstration payload with status 200, so callers always receive
displayable metadata.
"""

from typing import Annotated

import structlog
from fastapi import APIRouter, Query, status
from fastapi.responses import JSONResponse

from glbmarket.api.dependencies import SessionDep

log = structlog.get_logger(__name__)

router = APIRouter(tags=["nft"])

MISSING_PARAMS_ERROR = "Missing nftAddress or tokenId parameters"


@router.get("/nft-metadata", response_model=None)
async def get_nft_metadata(
    session: SessionDep,
    nft_address: Annotated[str | None, Query(alias="nftAddress")] = None,
    token_id: Annotated[str | None, Query(alias="tokenId")] = None,
) -> dict[str, str] | JSONResponse:
    """Return ``{glbUri, previewUri, name, description, creator}`` for a token."""
    if not nft_address or not token_id:
        log.info("nft_metadata_missing_params", nft_address=nft_address, token_id=token_id)
        return JSONResponse(
            status_code=status.HTTP_400_BAD_REQUEST,
            content={"error": MISSING_PARAMS_ERROR},
        )

    return await session.source.glb_metadata(nft_address, token_id)
