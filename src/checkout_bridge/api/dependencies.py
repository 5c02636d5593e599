"""FastAPI dependencies for settings, upstream clients and request bodies.

Upstream clients are built per request and closed when the request ends, so
nothing (tokens included) outlives a single request.
"""

import json
from typing import Annotated, Any, AsyncIterator

import structlog
from fastapi import Depends, Request

from checkout_bridge.clients import PayPalClient, ShopifyClient
from checkout_bridge.config import Settings, get_settings
from checkout_bridge.domain.order_finalization import OrderFinalizer
from checkout_bridge.models import PayloadTooLargeError

logger = structlog.get_logger(__name__)


# Type alias for settings dependency
AppSettings = Annotated[Settings, Depends(get_settings)]


async def get_paypal_client(settings: AppSettings) -> AsyncIterator[PayPalClient]:
    """Provide a PayPal client for the lifetime of one request."""
    async with PayPalClient(settings.paypal) as client:
        yield client


# Type alias for PayPal client dependency
PayPal = Annotated[PayPalClient, Depends(get_paypal_client)]


async def get_shopify_client(settings: AppSettings) -> AsyncIterator[ShopifyClient]:
    """Provide a Shopify client for the lifetime of one request."""
    async with ShopifyClient(settings.shopify) as client:
        yield client


# Type alias for Shopify client dependency
Shopify = Annotated[ShopifyClient, Depends(get_shopify_client)]


def get_order_finalizer(shopify: Shopify) -> OrderFinalizer:
    """Provide the draft-order orchestrator."""
    return OrderFinalizer(shopify)


# Type alias for order finalizer dependency
Finalizer = Annotated[OrderFinalizer, Depends(get_order_finalizer)]


async def get_json_body(request: Request, settings: AppSettings) -> dict[str, Any]:
    """
    Request body as a dict; absent or non-object bodies become ``{}``.

    The size limit is applied to the bytes actually received, which covers
    chunked bodies that declare no Content-Length.
    """
    raw = bytearray()
    async for chunk in request.stream():
        raw.extend(chunk)
        if len(raw) > settings.max_body_bytes:
            logger.warning(
                "request_body_too_large",
                path=request.url.path,
                received_bytes=len(raw),
            )
            raise PayloadTooLargeError("Request body too large")

    if not raw:
        return {}
    try:
        data = json.loads(raw)
    except ValueError:
        logger.info("request_body_not_json", path=request.url.path)
        return {}
    return data if isinstance(data, dict) else {}


# Type alias for JSON body dependency
JSONBody = Annotated[dict[str, Any], Depends(get_json_body)]
