"""Home page for the GLB Market dashboard.

Shows the deployment the client is wired to and the wallet status.
"""

import gradio as gr

from glbmarket.models.token import short_address
from glbmarket.services.session import get_session


def _deployment_markdown() -> str:
    """Describe the resolved chain configuration."""
    session = get_session()
    chain = session.chain
    wallet = session.wallet_address
    deployed_note = (
        ""
        if chain.is_deployed
        else "\n\n> ⚠️ No contracts are deployed on this chain; pages show demo data."
    )
    return f"""
### Deployment

| Field | Value |
|-------|-------|
| **Network** | {chain.name} ({chain.chain_id}) |
| **NFT contract** | `{chain.nft_address}` |
| **Marketplace** | `{chain.marketplace_address}` |
| **Data source** | {session.source.name} |
| **Wallet** | {f"`{short_address(wallet)}`" if wallet else "Not connected"} |
{deployed_note}
"""


def render() -> None:
    """Render the home page content."""
    with gr.Column():
        gr.Markdown(
            """
            # 🧊 GLB Market

            Mint, list, browse and view 3D models as NFTs.

            - **Marketplace**: browse listings, buy or make offers
            - **My NFTs**: list your models for sale or cancel listings
            - **Mint**: upload a GLB model and mint it
            - **View NFT**: inspect any token in the 3D viewer
            """
        )
        gr.Markdown(value=_deployment_markdown)
