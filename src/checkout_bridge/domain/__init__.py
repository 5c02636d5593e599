"""Checkout domain logic."""
