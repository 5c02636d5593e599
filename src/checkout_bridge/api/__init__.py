"""HTTP API for the Checkout Bridge service."""
