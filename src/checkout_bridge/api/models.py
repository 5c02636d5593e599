"""Pydantic models for JSON API requests/responses."""

from typing import Any, Optional, Union

from pydantic import BaseModel, ConfigDict, Field


class CreateOrderRequestJSON(BaseModel):
    """JSON request model for creating a PayPal order."""

    model_config = ConfigDict(extra="ignore")

    value: Optional[Union[str, int, float]] = Field(
        None, description="Order total as a decimal amount"
    )
    currency: Optional[str] = Field(None, description="ISO 4217 currency code")

    @property
    def amount(self) -> str:
        # 0 counts as missing, like an empty string
        if not self.value:
            return ""
        return str(self.value).strip()

    @property
    def currency_code(self) -> str:
        return "USD" if self.currency is None else self.currency


class CaptureRequestJSON(BaseModel):
    """JSON request model for capturing an approved PayPal order."""

    model_config = ConfigDict(extra="ignore")

    paypalOrderId: Optional[str] = Field(None, description="PayPal order id")


class ClientTokenResponseJSON(BaseModel):
    ok: bool = True
    client_token: str


class CreateOrderResponseJSON(BaseModel):
    ok: bool = True
    orderID: Optional[str] = Field(None, description="PayPal order id")


class AddressJSON(BaseModel):
    """Normalized shipping/contact address."""

    firstName: str = ""
    lastName: str = ""
    address1: str = ""
    city: str = ""
    zip: str = ""
    country: str = ""
    phone: str = ""
    email: str = ""


class CaptureResponseJSON(BaseModel):
    ok: bool = True
    captureId: str
    address: AddressJSON
    raw: dict[str, Any] = Field(default_factory=dict)


class OrderJSON(BaseModel):
    id: str
    name: Optional[str] = None


class FinalizeOrderResponseJSON(BaseModel):
    """JSON response model for a completed Shopify order."""

    ok: bool = True
    order: OrderJSON

    model_config = ConfigDict(
        json_schema_extra={
            "example": {
                "ok": True,
                "order": {"id": "gid://shopify/Order/5512345678901", "name": "#1042"},
            }
        }
    )


class ErrorResponseJSON(BaseModel):
    error: str
    details: Optional[Any] = None
