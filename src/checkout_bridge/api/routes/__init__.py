# Checkout Bridge Routes

from .paypal import router as paypal_router
from .shopify import router as shopify_router

__all__ = ["paypal_router", "shopify_router"]
