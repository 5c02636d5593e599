"""Structured logging configuration using structlog."""

import logging
import sys
from typing import Any

import structlog

from checkout_bridge.config import Settings

# Event keys whose values must never reach the log stream
REDACTED_KEYS = frozenset(
    {
        "access_token",
        "admin_token",
        "authorization",
        "client_secret",
        "client_token",
        "x-shopify-access-token",
    }
)

# Chatty third-party loggers; httpx logs every request URL at INFO
QUIET_LOGGERS = ("httpx", "httpcore")


def redact_credentials(logger: Any, method_name: str, event_dict: dict[str, Any]) -> dict[str, Any]:
    """Replace credential values in an event with a placeholder."""
    for key in list(event_dict):
        if key.lower() in REDACTED_KEYS:
            event_dict[key] = "[redacted]"
    return event_dict


def _renderer(settings: Settings):
    if settings.environment == "production":
        return structlog.processors.JSONRenderer()
    return structlog.dev.ConsoleRenderer(colors=sys.stdout.isatty())


def configure_logging(settings: Settings) -> None:
    """Configure structlog for the bridge and bind service context."""
    level = logging.getLevelName(settings.log_level.upper())
    if not isinstance(level, int):
        level = logging.INFO

    logging.basicConfig(format="%(message)s", stream=sys.stdout, level=level)
    for name in QUIET_LOGGERS:
        logging.getLogger(name).setLevel(max(level, logging.WARNING))

    structlog.configure(
        processors=[
            structlog.contextvars.merge_contextvars,
            structlog.processors.add_log_level,
            redact_credentials,
            structlog.dev.set_exc_info,
            structlog.processors.TimeStamper(fmt="iso", utc=True),
            _renderer(settings),
        ],
        wrapper_class=structlog.make_filtering_bound_logger(level),
        context_class=dict,
        logger_factory=structlog.PrintLoggerFactory(),
        cache_logger_on_first_use=True,
    )

    structlog.contextvars.clear_contextvars()
    structlog.contextvars.bind_contextvars(
        service=settings.service_name,
        environment=settings.environment,
        paypal_env=settings.paypal.env,
        shopify_store=settings.shopify.store,
    )
