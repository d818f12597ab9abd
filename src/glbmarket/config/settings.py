"""Application settings using pydantic-settings."""

from functools import lru_cache
from pathlib import Path
from typing import Literal

from pydantic import Field, SecretStr, field_validator
from pydantic_settings import BaseSettings, SettingsConfigDict

DEFAULT_WALLETCONNECT_PROJECT_ID = "3ec28e3f1ef786bdb9d7e2f4b03f5aeb"


class Settings(BaseSettings):
    """GLB Market configuration from environment variables."""

    model_config = SettingsConfigDict(
        env_file=".env",
        env_file_encoding="utf-8",
        case_sensitive=False,
        extra="ignore",  # Ignore extra env vars
    )

    # Application
    app_name: str = Field(default="GLB Market", description="Application name")
    app_version: str = Field(default="0.1.0", description="Application version")
    debug: bool = Field(default=False, description="Enable debug mode")
    log_level: Literal["DEBUG", "INFO", "WARNING", "ERROR"] = Field(
        default="INFO", description="Minimum log level"
    )

    # Server
    host: str = Field(default="0.0.0.0", description="Server host")
    port: int = Field(default=8000, ge=1, le=65535, description="Server port")

    # Chain
    rpc_url: str = Field(
        default="http://localhost:8545", description="JSON-RPC endpoint of the chain node"
    )
    chain_id: int = Field(default=31337, ge=1, description="Chain id used to resolve contracts")

    # Wallet
    walletconnect_project_id: str = Field(
        default=DEFAULT_WALLETCONNECT_PROJECT_ID,
        description="External project id for the wallet-connection provider",
    )
    wallet_address: str | None = Field(
        default=None, description="Node-unlocked account used to send transactions"
    )
    wallet_private_key: SecretStr = Field(
        default=SecretStr(""), description="Private key used to sign transactions locally"
    )

    # Assets
    ipfs_gateway_url: str = Field(
        default="https://gateway.pinata.cloud/ipfs/",
        description="Gateway used to rewrite ipfs:// URIs in token records",
    )
    viewer_gateway_url: str = Field(
        default="https://ipfs.io/ipfs/",
        description="Gateway used by the 3D viewer for ipfs:// URIs",
    )
    demo_glb_uri: str = Field(
        default=(
            "https://gateway.pinata.cloud/ipfs/"
            "bafybeigkbibx7rlmvzjsism2x4sjt2ziblpk66wvi4hm343syraudwvcr4"
        ),
        description="GLB URI used for demo records and uploaded models",
    )
    demo_preview_uri: str = Field(
        default=(
            "https://gateway.pinata.cloud/ipfs/"
            "bafkreicdas32m2xygbt5jsbrsac5mkksgom25cfpl223imhhctz2aml7um"
        ),
        description="Preview image URI used for demo records and uploaded previews",
    )

    # Data
    data_source: Literal["live", "mock"] = Field(
        default="live", description="Token data source: live contract reads or mock data"
    )
    abi_dir: Path | None = Field(
        default=None, description="Directory with exported {'abi': [...]} contract files"
    )

    @field_validator("rpc_url")
    @classmethod
    def validate_rpc_url(cls, v: str) -> str:
        """Validate RPC URL format."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("RPC URL must start with http:// or https://")
        return v

    @field_validator("ipfs_gateway_url", "viewer_gateway_url")
    @classmethod
    def validate_gateway_url(cls, v: str) -> str:
        """Gateways are prefixes, so they must end with a slash."""
        if not v.startswith(("http://", "https://")):
            raise ValueError("Gateway URL must start with http:// or https://")
        return v if v.endswith("/") else f"{v}/"

    @property
    def has_signer(self) -> bool:
        """Whether a wallet is configured for write operations."""
        return bool(self.wallet_private_key.get_secret_value() or self.wallet_address)


@lru_cache
def get_settings() -> Settings:
    """Get cached settings instance."""
    return Settings()
