"""Upstream API clients (PayPal, Shopify)."""

from checkout_bridge.clients.paypal_client import PayPalClient
from checkout_bridge.clients.shopify_client import ShopifyClient
from checkout_bridge.clients.transport import UpstreamResult, post_json

__all__ = ["PayPalClient", "ShopifyClient", "UpstreamResult", "post_json"]
