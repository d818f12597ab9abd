"""HTTP client for asset gateways (IPFS gateways, CDNs).

The client mirrors the lazy-httpx pattern used for other HTTP services:
the underlying ``httpx.AsyncClient`` is created on first use and released
with ``close()``. Requests are made once; there is no retry loop.
"""

import httpx
import structlog

log = structlog.get_logger(__name__)


class AssetGatewayClient:
    """Checks whether asset URLs resolve.

    Attributes:
        timeout: Request timeout in seconds.

    Example:
        client = AssetGatewayClient()
        ok = await client.probe("https://ipfs.io/ipfs/<cid>")
        await client.close()
    """

    def __init__(self, timeout: float = 30.0, client: httpx.AsyncClient | None = None) -> None:
        self.timeout = timeout
        self._client = client

    async def _get_client(self) -> httpx.AsyncClient:
        """Get or create the httpx client (lazy initialization)."""
        if self._client is None:
            self._client = httpx.AsyncClient(timeout=self.timeout, follow_redirects=True)
            log.debug("asset_client_created")
        return self._client

    async def close(self) -> None:
        """Close the httpx client and release resources."""
        if self._client is not None:
            await self._client.aclose()
            self._client = None
            log.debug("asset_client_closed")

    async def probe(self, url: str) -> bool:
        """Return True when ``url`` answers with a non-error status.

        Gateways that reject HEAD (405) are asked with a GET instead, whose
        body is not read.
        """
        if not url.startswith(("http://", "https://")):
            log.debug("asset_probe_skipped", url=url)
            return False

        client = await self._get_client()
        try:
            response = await client.head(url)
            if response.status_code == 405:
                async with client.stream("GET", url) as streamed:
                    response = streamed
        except httpx.HTTPError as e:
            log.warning("asset_probe_failed", url=url, error=str(e))
            return False

        ok = response.status_code < 400
        log.debug("asset_probed", url=url, status_code=response.status_code, ok=ok)
        return ok


# Singleton instance
_asset_client: AssetGatewayClient | None = None


async def get_asset_client() -> AssetGatewayClient:
    """Get or create the asset gateway client singleton."""
    global _asset_client
    if _asset_client is None:
        _asset_client = AssetGatewayClient()
    return _asset_client


async def close_asset_client() -> None:
    """Close and clear the asset gateway client singleton."""
    global _asset_client
    if _asset_client is not None:
        await _asset_client.close()
        _asset_client = None
