"""Custom exceptions for the Checkout Bridge service.

Every error carries the HTTP status the route boundary answers with and an
optional ``details`` payload echoed back to the caller (upstream bodies,
validation messages, Shopify ``userErrors``).
"""

from typing import Any


class BridgeError(Exception):
    """Base exception for all categorized failures."""

    status_code: int = 400

    def __init__(
        self,
        message: str,
        details: Any = None,
        status_code: int | None = None,
    ) -> None:
        super().__init__(message)
        self.message = message
        self.details = details
        if status_code is not None:
            self.status_code = status_code

    def to_dict(self) -> dict[str, Any]:
        """JSON error body: ``{"error": ..., "details": ...}``."""
        body: dict[str, Any] = {"error": self.message}
        if self.details is not None:
            body["details"] = self.details
        return body


class ValidationError(BridgeError):
    """
    Raised when the caller's payload is malformed.

    ``details`` lists every violation found, not just the first one.
    """

    status_code = 400


class PayloadTooLargeError(BridgeError):
    """Raised when a request body exceeds the configured size limit."""

    status_code = 413


# PayPal


class PaymentProviderError(BridgeError):
    """Base exception for PayPal failures."""

    pass


class UpstreamAuthError(PaymentProviderError):
    """
    Raised when the PayPal client-credential exchange fails.

    Details hold the upstream status and body, never the credentials.
    """

    status_code = 500


class ClientTokenError(PaymentProviderError):
    """Raised when PayPal does not return a client token."""

    status_code = 400


class OrderCreationError(PaymentProviderError):
    """
    Raised when PayPal rejects an order creation.

    The upstream HTTP status is propagated verbatim to the caller.
    """

    status_code = 502


class CaptureError(PaymentProviderError):
    """
    Raised when a capture call fails or ends in a status other than COMPLETED.

    For unexpected statuses the raw capture response is attached as details.
    """

    status_code = 400


# Shopify


class CommerceError(BridgeError):
    """Base exception for Shopify failures."""

    pass


class TransportError(CommerceError):
    """Raised when the GraphQL HTTP call fails (non-2xx or network error)."""

    status_code = 400


class GraphUserError(CommerceError):
    """
    Raised when a GraphQL response carries a top-level ``errors`` array.

    Mutation-level ``userErrors`` are NOT reported through this exception.
    """

    status_code = 400


class DraftCreateError(CommerceError):
    """Raised when ``draftOrderCreate`` reports userErrors or returns no draft id."""

    status_code = 400


class DraftCompleteError(CommerceError):
    """
    Raised when ``draftOrderComplete`` reports userErrors or returns no order.

    The draft created in the previous step is left on the platform.
    """

    status_code = 400
