"""Configuration module for GLB Market.

Usage:
    from glbmarket.config import get_settings

    settings = get_settings()  # Cached singleton
    print(settings.rpc_url)

Note:
    Contract addresses live in ``glbmarket.config.chains``; resolve them
    once with ``resolve_chain_config`` rather than reading the table.
"""

from glbmarket.config.settings import Settings, get_settings

__all__ = ["Settings", "get_settings"]
