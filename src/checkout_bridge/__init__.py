"""Checkout Bridge: PayPal checkout to Shopify order service."""

__version__ = "0.1.0"
