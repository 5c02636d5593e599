"""Unit tests for logging setup."""

import logging

import structlog

from checkout_bridge.logging_config import configure_logging, redact_credentials


def test_redact_credentials():
    event = {
        "event": "paypal_token_request",
        "client_secret": "s3cret",
        "Authorization": "Bearer abc",
        "status": 401,
    }

    assert redact_credentials(None, "info", event) == {
        "event": "paypal_token_request",
        "client_secret": "[redacted]",
        "Authorization": "[redacted]",
        "status": 401,
    }


def test_configure_logging_binds_service_context(settings):
    configure_logging(settings)

    context = structlog.contextvars.get_contextvars()
    assert context["service"] == "checkout-bridge"
    assert context["environment"] == "test"
    assert context["paypal_env"] == "sandbox"
    assert context["shopify_store"] == "test-store"


def test_configure_logging_quiets_http_client_loggers(settings):
    configure_logging(settings)

    assert logging.getLogger("httpx").level == logging.WARNING
    assert logging.getLogger("httpcore").level == logging.WARNING
