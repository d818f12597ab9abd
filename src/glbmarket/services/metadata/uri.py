"""Asset URI normalisation."""

IPFS_SCHEME = "ipfs://"


def normalize_uri(uri: str, gateway_url: str) -> str:
    """Rewrite an ``ipfs://`` URI to an HTTP gateway URL.

    Args:
        uri: URI read from the contract.
        gateway_url: Gateway prefix ending with a slash,
            e.g. "https://gateway.pinata.cloud/ipfs/".

    Returns:
        The gateway URL, or ``uri`` unchanged when it has another scheme.
    """
    if uri.startswith(IPFS_SCHEME):
        return f"{gateway_url}{uri[len(IPFS_SCHEME):]}"
    return uri
