"""Tests for logging configuration."""

import logging
from collections.abc import Generator

import pytest
import structlog

from glbmarket.config.logging import (
    NOISY_LOGGERS,
    REDACTED,
    configure_logging,
    redact_secrets,
)
from glbmarket.config.settings import Settings


@pytest.fixture(autouse=True)
def restore_logging() -> Generator[None, None, None]:
    levels = {name: logging.getLogger(name).level for name in NOISY_LOGGERS}
    yield
    structlog.reset_defaults()
    structlog.contextvars.clear_contextvars()
    for name, level in levels.items():
        logging.getLogger(name).setLevel(level)


class TestRedactSecrets:
    """Tests for the redaction processor."""

    def test_masks_signing_material(self) -> None:
        event = {
            "event": "contract_write_submitted",
            "private_key": "0xac09",
            "raw_transaction": "0xf86b",
            "tx_hash": "0xabcd",
        }

        result = redact_secrets(None, "info", event)

        assert result["private_key"] == REDACTED
        assert result["raw_transaction"] == REDACTED
        assert result["tx_hash"] == "0xabcd"
        assert result["event"] == "contract_write_submitted"

    def test_leaves_plain_events_alone(self) -> None:
        event = {"event": "marketplace_loaded", "listings": 5}

        assert redact_secrets(None, "debug", dict(event)) == event


class TestConfigureLogging:
    """Tests for configure_logging."""

    def test_library_loggers_quiet_outside_debug(self) -> None:
        configure_logging(Settings(_env_file=None, debug=False, log_level="INFO"))

        for name in NOISY_LOGGERS:
            assert logging.getLogger(name).level == logging.WARNING

    def test_library_loggers_follow_level_in_debug(self) -> None:
        configure_logging(Settings(_env_file=None, debug=True, log_level="DEBUG"))

        assert logging.getLogger("web3.providers").level == logging.DEBUG

    def test_chain_id_bound_to_context(self) -> None:
        configure_logging(Settings(_env_file=None, chain_id=11155111))

        assert structlog.contextvars.get_contextvars()["chain_id"] == 11155111

    def test_redaction_runs_before_rendering(self) -> None:
        configure_logging(Settings(_env_file=None))

        processors = structlog.get_config()["processors"]

        assert redact_secrets in processors
        assert processors.index(redact_secrets) < len(processors) - 1
