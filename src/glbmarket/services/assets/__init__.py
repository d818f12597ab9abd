"""3D asset access: gateway probing and the placeholder model."""

from glbmarket.services.assets.gateway import (
    AssetGatewayClient,
    close_asset_client,
    get_asset_client,
)
from glbmarket.services.assets.placeholder import build_cube_glb, cube_data_uri

__all__ = [
    "AssetGatewayClient",
    "build_cube_glb",
    "close_asset_client",
    "cube_data_uri",
    "get_asset_client",
]
