"""PayPal REST client: OAuth token exchange and checkout order operations."""

from typing import Any

import httpx
import structlog

from checkout_bridge.clients.transport import post_json
from checkout_bridge.config import PayPalSettings
from checkout_bridge.domain.capture import capture_status
from checkout_bridge.models import (
    CaptureError,
    CaptureStatus,
    ClientTokenError,
    OrderCreationError,
    UpstreamAuthError,
)

logger = structlog.get_logger(__name__)


class PayPalClient:
    """
    Client for the PayPal Orders v2 and Identity APIs.

    Every operation performs its own client-credential exchange; access
    tokens are never cached between calls.
    """

    def __init__(
        self,
        settings: PayPalSettings,
        http_client: httpx.AsyncClient | None = None,
    ):
        """
        Initialize the PayPal client.

        Args:
            settings: PayPal credentials and environment
            http_client: Optional pre-built client (tests inject transports)
        """
        self.settings = settings
        self.base_url = settings.base_url
        self.http_client = http_client or httpx.AsyncClient(
            timeout=settings.timeout_seconds
        )

    async def close(self) -> None:
        """Close the HTTP client connection pool."""
        await self.http_client.aclose()

    async def __aenter__(self):
        return self

    async def __aexit__(self, exc_type, exc_val, exc_tb):
        await self.close()

    async def acquire_token(self) -> str:
        """
        Exchange client credentials for a short-lived bearer token.

        Raises:
            UpstreamAuthError: non-2xx response or no access_token in the body
        """
        result = await post_json(
            self.http_client,
            f"{self.base_url}/v1/oauth2/token",
            auth=(self.settings.client_id, self.settings.client_secret),
            headers={"Content-Type": "application/x-www-form-urlencoded"},
            data={"grant_type": "client_credentials"},
        )

        token = result.body.get("access_token")
        if not result.ok or not token:
            logger.error("paypal_oauth_failed", status_code=result.status_code)
            raise UpstreamAuthError(
                f"PayPal OAuth failed: {result.status_code}",
                details={"status": result.status_code, "body": result.data},
            )

        return token

    async def _authorized_post(self, path: str, payload: dict | None = None):
        token = await self.acquire_token()
        kwargs: dict[str, Any] = {
            "headers": {
                "Authorization": f"Bearer {token}",
                "Content-Type": "application/json",
            },
        }
        if payload is not None:
            kwargs["json"] = payload
        return await post_json(self.http_client, f"{self.base_url}{path}", **kwargs)

    async def generate_client_token(self) -> str:
        """
        Generate a client token for the JS SDK card fields.

        Raises:
            ClientTokenError: non-2xx response or no client_token in the body
        """
        result = await self._authorized_post("/v1/identity/generate-token")

        client_token = result.body.get("client_token")
        if not result.ok or not client_token:
            logger.warning("paypal_client_token_failed", status_code=result.status_code)
            raise ClientTokenError("Failed to generate client token", details=result.data)

        logger.info("paypal_client_token_generated")
        return client_token

    async def create_order(self, amount: str, currency: str = "USD") -> str:
        """
        Create a single purchase unit CAPTURE-intent order.

        Args:
            amount: Decimal amount as a string (e.g. "19.99")
            currency: ISO 4217 currency code

        Returns:
            PayPal order id

        Raises:
            OrderCreationError: carries the upstream HTTP status
        """
        payload = {
            "intent": "CAPTURE",
            "purchase_units": [
                {"amount": {"currency_code": currency, "value": amount}},
            ],
        }
        result = await self._authorized_post("/v2/checkout/orders", payload)

        if not result.ok:
            logger.warning(
                "paypal_create_order_failed",
                status_code=result.status_code,
                currency=currency,
            )
            raise OrderCreationError(
                "PayPal create order failed",
                details=result.data,
                status_code=result.status_code or OrderCreationError.status_code,
            )

        order_id = result.body.get("id")
        logger.info("paypal_order_created", order_id=order_id, currency=currency)
        return order_id

    async def capture_order(self, order_id: str) -> dict[str, Any]:
        """
        Capture an approved order.

        Returns:
            The raw capture response, whose status is COMPLETED

        Raises:
            CaptureError: upstream failure, or a status other than COMPLETED
                (the raw response is attached as details)
        """
        result = await self._authorized_post(f"/v2/checkout/orders/{order_id}/capture")

        if not result.ok:
            logger.warning(
                "paypal_capture_failed",
                order_id=order_id,
                status_code=result.status_code,
            )
            raise CaptureError("PayPal capture failed", details=result.data)

        capture = result.body
        status = capture_status(capture)
        if status != CaptureStatus.COMPLETED.value:
            logger.warning("paypal_capture_unexpected_status", order_id=order_id, status=status)
            raise CaptureError(
                f"Unexpected PayPal status: {status or 'unknown'}",
                details=result.data,
            )

        logger.info("paypal_order_captured", order_id=order_id)
        return capture
