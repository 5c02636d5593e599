"""Turn a captured PayPal payment into a completed Shopify order.

Flow per request (no retries, no compensation)::

    VALIDATING -> CREATING (draftOrderCreate) -> COMPLETING (draftOrderComplete) -> DONE

A failure while COMPLETING leaves the draft created in the previous step on
the store; it is logged with its id for manual reconciliation.
"""

import math
import re
from typing import Any

import structlog

from checkout_bridge.clients.shopify_client import ShopifyClient
from checkout_bridge.models import (
    REQUIRED_ADDRESS_FIELDS,
    DraftCompleteError,
    DraftCreateError,
    FinalizationStage,
    FinalizedOrder,
    ValidationError,
)

logger = structlog.get_logger(__name__)

VARIANT_GID_PREFIX = "gid://shopify/ProductVariant/"

_LEADING_INT = re.compile(r"^\s*([+-]?\d+)")


def to_variant_gid(variant_id: Any) -> str:
    """987654 -> gid://shopify/ProductVariant/987654"""
    return f"{VARIANT_GID_PREFIX}{variant_id}"


def parse_quantity(value: Any) -> int | None:
    """Parse an integer the way storefront JS does (leading digits win)."""
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else None
    if isinstance(value, str):
        match = _LEADING_INT.match(value)
        return int(match.group(1)) if match else None
    return None


def format_price(value: Any) -> str:
    """Render a price for Shopify; integral floats drop the ``.0``."""
    if isinstance(value, float) and value.is_integer():
        return str(int(value))
    return str(value)


def _is_blank(value: Any) -> bool:
    return value is None or value == ""


def validate_finalize_request(body: dict[str, Any]) -> list[str]:
    """
    Check a finalize-order payload.

    Returns:
        Every violation found (empty list when the payload is usable)
    """
    errors: list[str] = []

    line_items = body.get("line_items")
    if not isinstance(line_items, list) or not line_items:
        errors.append("line_items is required")
    else:
        for index, item in enumerate(line_items):
            item = item if isinstance(item, dict) else {}
            if _is_blank(item.get("variant_id")):
                errors.append(f"line_items[{index}].variant_id is required")
            if parse_quantity(item.get("quantity")) is None:
                errors.append(f"line_items[{index}].quantity must be an integer")

    address = body.get("address")
    address = address if isinstance(address, dict) else {}
    for key in REQUIRED_ADDRESS_FIELDS:
        if not address.get(key):
            errors.append(f"address.{key} is required")

    if not body.get("shipping_label"):
        errors.append("shipping_label is required")

    # 0 is a valid shipping price
    if body.get("shipping_price") is None:
        errors.append("shipping_price is required")

    return errors


def _mailing_address(address: dict[str, Any]) -> dict[str, Any]:
    return {
        "firstName": address.get("firstName"),
        "lastName": address.get("lastName"),
        "address1": address.get("address1"),
        "city": address.get("city"),
        "zip": address.get("zip"),
        "country": address.get("country"),
        "phone": address.get("phone") or None,
    }


def build_draft_order_input(body: dict[str, Any]) -> dict[str, Any]:
    """
    Build the ``DraftOrderInput`` for ``draftOrderCreate``.

    Billing and shipping addresses are identical. ``shippingLine`` is left out
    when ``shipping_price`` is None or "" (a price of 0 still yields one).
    """
    address = body.get("address") or {}

    line_items = []
    for item in body.get("line_items") or []:
        line = {
            "variantId": to_variant_gid(item.get("variant_id")),
            "quantity": parse_quantity(item.get("quantity")),
        }
        if not _is_blank(item.get("price")):
            line["price"] = format_price(item["price"])
        line_items.append(line)

    draft_input: dict[str, Any] = {}
    if address.get("email"):
        draft_input["email"] = address["email"]

    draft_input["billingAddress"] = _mailing_address(address)
    draft_input["shippingAddress"] = _mailing_address(address)
    draft_input["lineItems"] = line_items

    shipping_price = body.get("shipping_price")
    if not _is_blank(shipping_price):
        draft_input["shippingLine"] = {
            "title": body.get("shipping_label") or "Shipping",
            "price": format_price(shipping_price),
        }

    draft_input["note"] = (
        f"PayPal order: {body.get('paypalOrderId') or ''} | "
        f"capture: {body.get('paypalCaptureId') or ''}"
    ).strip()

    return draft_input


class OrderFinalizer:
    """Validates a finalize-order request and drives the two Shopify mutations."""

    def __init__(self, shopify: ShopifyClient):
        self.shopify = shopify
        self.stage = FinalizationStage.VALIDATING

    def _advance(self, stage: FinalizationStage, **context: Any) -> None:
        self.stage = stage
        logger.info("order_finalization_stage", stage=stage.value, **context)

    async def finalize(self, body: dict[str, Any]) -> FinalizedOrder:
        """
        Create and complete a draft order for a captured payment.

        Raises:
            ValidationError: payload problems, all listed in details
            DraftCreateError: draftOrderCreate userErrors or no draft id
            DraftCompleteError: draftOrderComplete userErrors or no order id
        """
        self._advance(FinalizationStage.VALIDATING)
        errors = validate_finalize_request(body)
        if errors:
            logger.info("finalize_request_invalid", errors=errors)
            raise ValidationError("Invalid payload", details=errors)

        draft_input = build_draft_order_input(body)
        logger.debug("draft_order_input", draft_input=draft_input)

        self._advance(
            FinalizationStage.CREATING,
            paypal_order_id=body.get("paypalOrderId"),
            line_item_count=len(draft_input["lineItems"]),
        )
        created = await self.shopify.draft_order_create(draft_input)

        user_errors = created.get("userErrors") or []
        if user_errors:
            raise DraftCreateError("Shopify user errors", details=user_errors)

        draft_id = (created.get("draftOrder") or {}).get("id")
        if not draft_id:
            raise DraftCreateError(
                "Failed to create draft order",
                details={"draftOrderCreate": created},
            )

        self._advance(FinalizationStage.COMPLETING, draft_order_id=draft_id)
        try:
            order = await self._complete(draft_id)
        except Exception:
            logger.warning("draft_order_left_incomplete", draft_order_id=draft_id)
            raise

        self._advance(FinalizationStage.DONE, order_id=order.id, order_name=order.name)
        return order

    async def _complete(self, draft_id: str) -> FinalizedOrder:
        completed = await self.shopify.draft_order_complete(draft_id)

        user_errors = completed.get("userErrors") or []
        if user_errors:
            raise DraftCompleteError("Shopify user errors", details=user_errors)

        order = ((completed.get("draftOrder") or {}).get("order")) or {}
        if not order.get("id"):
            raise DraftCompleteError(
                "Unable to complete draft order",
                details={"draftOrderComplete": completed},
            )

        return FinalizedOrder(id=order["id"], name=order.get("name"))
