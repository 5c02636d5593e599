"""Checkout domain models."""

from dataclasses import asdict, dataclass, field
from enum import Enum
from typing import Any

REQUIRED_ADDRESS_FIELDS = ("firstName", "lastName", "address1", "city", "zip", "country")


class CaptureStatus(str, Enum):
    """PayPal capture status values this service distinguishes."""

    COMPLETED = "COMPLETED"


class FinalizationStage(str, Enum):
    """Per-request progress of the draft-to-order flow."""

    VALIDATING = "VALIDATING"
    CREATING = "CREATING"
    COMPLETING = "COMPLETING"
    DONE = "DONE"


@dataclass(frozen=True)
class NormalizedAddress:
    """
    Shipping/contact address extracted from a PayPal capture.

    Field names match the storefront's payload so the record can be sent back
    as-is to the finalize-order endpoint.
    """

    firstName: str = ""
    lastName: str = ""
    address1: str = ""
    city: str = ""
    zip: str = ""
    country: str = ""
    phone: str = ""
    email: str = ""

    def to_dict(self) -> dict[str, str]:
        return asdict(self)


@dataclass(frozen=True)
class CaptureResult:
    """Outcome of a completed capture, as returned to the storefront."""

    capture_id: str
    status: str
    address: NormalizedAddress
    raw: dict[str, Any] = field(default_factory=dict)

    def to_response(self) -> dict[str, Any]:
        return {
            "ok": True,
            "captureId": self.capture_id,
            "address": self.address.to_dict(),
            "raw": self.raw,
        }


@dataclass(frozen=True)
class FinalizedOrder:
    """Identity of the Shopify order produced by completing a draft."""

    id: str
    name: str | None = None

    def to_dict(self) -> dict[str, Any]:
        return {"id": self.id, "name": self.name}
