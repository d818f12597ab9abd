"""Unit tests for application settings."""

import os
from unittest.mock import patch

import pytest
from pydantic import SecretStr, ValidationError

from glbmarket.config.settings import DEFAULT_WALLETCONNECT_PROJECT_ID, Settings


class TestSettingsDefaults:
    """Tests for default values."""

    def test_default_settings_are_valid(self) -> None:
        """Defaults point at a local Anvil node."""
        env_vars_to_clear = ["DEBUG", "LOG_LEVEL", "PORT", "RPC_URL", "CHAIN_ID", "DATA_SOURCE"]
        original_values = {k: os.environ.pop(k, None) for k in env_vars_to_clear}

        try:
            settings = Settings(_env_file=None)  # type: ignore[call-arg]
            assert settings.port == 8000
            assert settings.debug is False
            assert settings.log_level == "INFO"
            assert settings.rpc_url == "http://localhost:8545"
            assert settings.chain_id == 31337
            assert settings.data_source == "live"
        finally:
            for k, v in original_values.items():
                if v is not None:
                    os.environ[k] = v

    def test_walletconnect_project_id_has_default(self, settings: Settings) -> None:
        assert settings.walletconnect_project_id == DEFAULT_WALLETCONNECT_PROJECT_ID

    def test_gateways_default_to_pinata_and_ipfs_io(self, settings: Settings) -> None:
        assert settings.ipfs_gateway_url == "https://gateway.pinata.cloud/ipfs/"
        assert settings.viewer_gateway_url == "https://ipfs.io/ipfs/"


class TestSettingsValidation:
    """Tests for Settings validation."""

    def test_port_must_be_valid_range(self) -> None:
        """Port must be between 1 and 65535."""
        with pytest.raises(ValidationError) as exc_info:
            Settings(port=0)
        assert "greater than or equal to 1" in str(exc_info.value)

        with pytest.raises(ValidationError) as exc_info:
            Settings(port=70000)
        assert "less than or equal to 65535" in str(exc_info.value)

    def test_log_level_must_be_valid(self) -> None:
        for level in ["DEBUG", "INFO", "WARNING", "ERROR"]:
            settings = Settings(log_level=level)  # type: ignore[arg-type]
            assert settings.log_level == level

        with pytest.raises(ValidationError):
            Settings(log_level="INVALID")  # type: ignore[arg-type]

    def test_rpc_url_must_be_http(self) -> None:
        Settings(rpc_url="https://sepolia.example.org")

        with pytest.raises(ValidationError) as exc_info:
            Settings(rpc_url="ws://localhost:8546")
        assert "RPC URL must start with" in str(exc_info.value)

    def test_gateway_url_gets_trailing_slash(self) -> None:
        settings = Settings(ipfs_gateway_url="https://cloudflare-ipfs.com/ipfs")
        assert settings.ipfs_gateway_url == "https://cloudflare-ipfs.com/ipfs/"

    def test_gateway_url_must_be_http(self) -> None:
        with pytest.raises(ValidationError):
            Settings(viewer_gateway_url="ipfs://gateway")

    def test_data_source_must_be_live_or_mock(self) -> None:
        assert Settings(data_source="mock").data_source == "mock"  # type: ignore[arg-type]
        with pytest.raises(ValidationError):
            Settings(data_source="replay")  # type: ignore[arg-type]


class TestSettingsFromEnvironment:
    """Tests for environment loading."""

    def test_reads_chain_settings_from_env(self) -> None:
        with patch.dict(os.environ, {"CHAIN_ID": "11155111", "RPC_URL": "https://rpc.test"}):
            settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.chain_id == 11155111
        assert settings.rpc_url == "https://rpc.test"

    def test_private_key_is_secret(self) -> None:
        key = "0x" + "11" * 32
        with patch.dict(os.environ, {"WALLET_PRIVATE_KEY": key}):
            settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert isinstance(settings.wallet_private_key, SecretStr)
        assert key not in repr(settings)
        assert settings.has_signer is True

    def test_has_signer_false_without_wallet(self) -> None:
        with patch.dict(os.environ, {}, clear=False):
            os.environ.pop("WALLET_PRIVATE_KEY", None)
            os.environ.pop("WALLET_ADDRESS", None)
            settings = Settings(_env_file=None)  # type: ignore[call-arg]
        assert settings.has_signer is False
