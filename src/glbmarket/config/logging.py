"""Logging configuration using structlog.

Events are rendered as console lines in debug mode and as JSON otherwise.
Event keys that could carry signing material are masked before rendering.
"""

import logging
import sys
from collections.abc import MutableMapping
from typing import Any

import structlog

from glbmarket.config.settings import Settings, get_settings

REDACTED = "***"
SECRET_KEYS = frozenset({"private_key", "wallet_private_key", "raw_transaction", "signature"})

# Request-level chatter from the chain and HTTP libraries
NOISY_LOGGERS = ("web3.providers", "web3.manager", "httpx", "httpcore", "urllib3")


def redact_secrets(
    _logger: Any,
    _method_name: str,
    event_dict: MutableMapping[str, Any],
) -> MutableMapping[str, Any]:
    """Mask values of keys listed in SECRET_KEYS."""
    for key in SECRET_KEYS.intersection(event_dict):
        event_dict[key] = REDACTED
    return event_dict


def configure_logging(settings: Settings | None = None) -> None:
    """Configure structlog and the standard library loggers used by web3/httpx."""
    settings = settings or get_settings()
    log_level = getattr(logging, settings.log_level)

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            redact_secrets,
            structlog.processors.StackInfoRenderer(),
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso"),
            structlog.dev.ConsoleRenderer()
            if settings.debug
            else structlog.processors.JSONRenderer(),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(log_level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    logging.basicConfig(
        format="%(message)s",
        stream=sys.stdout,
        level=log_level,
    )
    # Per-request RPC and gateway logs only in debug mode
    library_level = log_level if settings.debug else max(log_level, logging.WARNING)
    for name in NOISY_LOGGERS:
        logging.getLogger(name).setLevel(library_level)

    structlog.contextvars.bind_contextvars(chain_id=settings.chain_id)
