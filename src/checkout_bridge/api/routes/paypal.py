"""PayPal checkout endpoints used by the storefront JS SDK."""

import pydantic
import structlog
from fastapi import APIRouter

from checkout_bridge.api.dependencies import JSONBody, PayPal
from checkout_bridge.api.models import (
    CaptureRequestJSON,
    CaptureResponseJSON,
    ClientTokenResponseJSON,
    CreateOrderRequestJSON,
    CreateOrderResponseJSON,
    ErrorResponseJSON,
)
from checkout_bridge.domain.capture import capture_status, normalize_capture
from checkout_bridge.models import CaptureResult, ValidationError

logger = structlog.get_logger(__name__)

router = APIRouter(
    prefix="/api/paypal",
    tags=["PayPal"],
    responses={400: {"model": ErrorResponseJSON}, 500: {"model": ErrorResponseJSON}},
)


def _parse(model: type[pydantic.BaseModel], body: dict) -> pydantic.BaseModel:
    try:
        return model.model_validate(body)
    except pydantic.ValidationError as e:
        raise ValidationError("Invalid payload", details=[err["msg"] for err in e.errors()])


@router.post("/client-token", response_model=ClientTokenResponseJSON)
async def client_token(paypal: PayPal) -> dict:
    """Generate a client token for the card fields component."""
    token = await paypal.generate_client_token()
    return {"ok": True, "client_token": token}


@router.post("/create-order", response_model=CreateOrderResponseJSON)
async def create_order(body: JSONBody, paypal: PayPal) -> dict:
    """Create a CAPTURE-intent order for the given amount."""
    request = _parse(CreateOrderRequestJSON, body)
    if not request.amount:
        raise ValidationError("Missing amount value")

    order_id = await paypal.create_order(request.amount, request.currency_code)
    return {"ok": True, "orderID": order_id}


@router.post("/capture", response_model=CaptureResponseJSON)
async def capture(body: JSONBody, paypal: PayPal) -> dict:
    """Capture an approved order and return the buyer's normalized address."""
    request = _parse(CaptureRequestJSON, body)
    if not request.paypalOrderId:
        raise ValidationError("Missing paypalOrderId")

    raw = await paypal.capture_order(request.paypalOrderId)
    capture_id, address = normalize_capture(raw)

    result = CaptureResult(
        capture_id=capture_id,
        status=capture_status(raw) or "",
        address=address,
        raw=raw,
    )
    logger.info(
        "paypal_capture_normalized",
        paypal_order_id=request.paypalOrderId,
        capture_id=capture_id,
    )
    return result.to_response()
