"""Pytest configuration and shared fixtures for all tests.

This module provides shared test fixtures including:
- Settings with fake PayPal/Shopify credentials
- Sample PayPal capture responses
- A valid finalize-order payload
"""

import copy

import pytest

from checkout_bridge.config import PayPalSettings, Settings, ShopifySettings

ALLOWED_ORIGIN = "https://shop.example.com"


@pytest.fixture
def paypal_settings() -> PayPalSettings:
    return PayPalSettings(
        client_id="test-client-id",
        client_secret="test-client-secret",
        env="sandbox",
        timeout_seconds=5.0,
    )


@pytest.fixture
def shopify_settings() -> ShopifySettings:
    return ShopifySettings(
        store="test-store",
        admin_token="shpat_test_token",
        api_version="2025-10",
        timeout_seconds=5.0,
    )


@pytest.fixture
def settings(paypal_settings, shopify_settings) -> Settings:
    return Settings(
        environment="test",
        allowed_origins=[ALLOWED_ORIGIN],
        max_body_bytes=2048,
        paypal=paypal_settings,
        shopify=shopify_settings,
    )


@pytest.fixture
def completed_capture() -> dict:
    """Capture response with a shipping full name and one completed capture."""
    return {
        "id": "5O190127TN364715T",
        "status": "COMPLETED",
        "purchase_units": [
            {
                "shipping": {
                    "name": {"full_name": "Jane Q Public"},
                    "address": {
                        "address_line_1": "1 Main St",
                        "admin_area_2": "Springfield",
                        "postal_code": "00001",
                        "country_code": "US",
                    },
                },
                "payments": {"captures": [{"id": "CAP1"}]},
            }
        ],
        "payer": {"email_address": "j@x.com"},
    }


@pytest.fixture
def finalize_body() -> dict:
    """A finalize-order payload that passes validation."""
    return copy.deepcopy(
        {
            "line_items": [
                {"variant_id": 987654, "quantity": "2", "price": 19.5},
                {"variant_id": "123", "quantity": 1},
            ],
            "address": {
                "firstName": "Jane",
                "lastName": "Q Public",
                "address1": "1 Main St",
                "city": "Springfield",
                "zip": "00001",
                "country": "US",
                "phone": "",
                "email": "j@x.com",
            },
            "shipping_label": "Standard",
            "shipping_price": 4.99,
            "paypalOrderId": "5O190127TN364715T",
            "paypalCaptureId": "CAP1",
        }
    )
