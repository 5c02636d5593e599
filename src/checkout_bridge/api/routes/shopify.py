"""POST /api/shopify/order-from-paypal endpoint implementation."""

import structlog
from fastapi import APIRouter

from checkout_bridge.api.dependencies import Finalizer, JSONBody
from checkout_bridge.api.models import ErrorResponseJSON, FinalizeOrderResponseJSON

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/api/shopify",
    tags=["Shopify"],
    responses={400: {"model": ErrorResponseJSON}, 500: {"model": ErrorResponseJSON}},
)


@router.post("/order-from-paypal", response_model=FinalizeOrderResponseJSON)
async def order_from_paypal(body: JSONBody, finalizer: Finalizer) -> dict:
    """Create and complete a Shopify draft order for a captured PayPal payment.

    Body fields: ``line_items``, ``address``, ``shipping_label``,
    ``shipping_price`` and optionally ``paypalOrderId``/``paypalCaptureId``
    (recorded in the order note).
    """
    order = await finalizer.finalize(body)
    return {"ok": True, "order": order.to_dict()}
