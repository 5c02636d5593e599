"""Domain models for the Checkout Bridge service."""

from checkout_bridge.models.checkout import (
    REQUIRED_ADDRESS_FIELDS,
    CaptureResult,
    CaptureStatus,
    FinalizationStage,
    FinalizedOrder,
    NormalizedAddress,
)
from checkout_bridge.models.exceptions import (
    BridgeError,
    CaptureError,
    ClientTokenError,
    CommerceError,
    DraftCompleteError,
    DraftCreateError,
    GraphUserError,
    OrderCreationError,
    PayloadTooLargeError,
    PaymentProviderError,
    TransportError,
    UpstreamAuthError,
    ValidationError,
)

__all__ = [
    "REQUIRED_ADDRESS_FIELDS",
    "BridgeError",
    "CaptureError",
    "CaptureResult",
    "CaptureStatus",
    "ClientTokenError",
    "CommerceError",
    "DraftCompleteError",
    "DraftCreateError",
    "FinalizationStage",
    "FinalizedOrder",
    "GraphUserError",
    "NormalizedAddress",
    "OrderCreationError",
    "PayloadTooLargeError",
    "PaymentProviderError",
    "TransportError",
    "UpstreamAuthError",
    "ValidationError",
]
