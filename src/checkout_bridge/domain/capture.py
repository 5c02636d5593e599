"""Normalization of PayPal capture responses.

Pure functions over the raw ``POST /v2/checkout/orders/{id}/capture`` body.
Missing or malformed nested nodes resolve to empty strings; nothing here
raises.
"""

from typing import Any

from checkout_bridge.models import NormalizedAddress


def _node(value: Any) -> dict[str, Any]:
    return value if isinstance(value, dict) else {}


def _first(value: Any) -> dict[str, Any]:
    if isinstance(value, list) and value:
        return _node(value[0])
    return {}


def _text(value: Any) -> str:
    if value is None:
        return ""
    return str(value)


def first_purchase_unit(capture: dict[str, Any]) -> dict[str, Any]:
    return _first(_node(capture).get("purchase_units"))


def capture_status(capture: dict[str, Any]) -> str | None:
    """Top-level status, else the first payment capture's status."""
    capture = _node(capture)
    status = capture.get("status")
    if status:
        return status
    payments = _node(first_purchase_unit(capture).get("payments"))
    return _first(payments.get("captures")).get("status") or None


def split_name(full_name: str) -> tuple[str, str]:
    """Split on the first whitespace run: ("Jane", "Q Public")."""
    tokens = full_name.split()
    if not tokens:
        return "", ""
    return tokens[0], " ".join(tokens[1:])


def resolve_capture_id(capture: dict[str, Any]) -> str:
    """First capture id, else first authorization id, else the order id."""
    payments = _node(first_purchase_unit(capture).get("payments"))
    candidates = (
        _first(payments.get("captures")).get("id"),
        _first(payments.get("authorizations")).get("id"),
        _node(capture).get("id"),
    )
    for candidate in candidates:
        if candidate:
            return _text(candidate)
    return ""


def normalize_capture(capture: dict[str, Any]) -> tuple[str, NormalizedAddress]:
    """
    Extract the capture id and a storefront address from a capture response.

    The shipping full name is split when present, each half falling back to
    the matching payer field when empty. Without one the payer's given name
    and surname are used as they are.

    Args:
        capture: Raw capture response

    Returns:
        Tuple of (capture_id, NormalizedAddress)
    """
    capture = _node(capture)
    unit = first_purchase_unit(capture)
    shipping = _node(unit.get("shipping"))
    ship_address = _node(shipping.get("address"))
    payer = _node(capture.get("payer"))
    payer_name = _node(payer.get("name"))

    given_name = _text(payer_name.get("given_name"))
    surname = _text(payer_name.get("surname"))

    full_name = _text(_node(shipping.get("name")).get("full_name"))
    if full_name.strip():
        first_name, last_name = split_name(full_name)
        first_name = first_name or given_name
        last_name = last_name or surname
    else:
        first_name, last_name = given_name, surname

    address = NormalizedAddress(
        firstName=first_name,
        lastName=last_name,
        address1=_text(ship_address.get("address_line_1")),
        city=_text(ship_address.get("admin_area_2")),
        zip=_text(ship_address.get("postal_code")),
        country=_text(ship_address.get("country_code")),
        # Not available on the capture response
        phone="",
        email=_text(payer.get("email_address")),
    )

    return resolve_capture_id(capture), address
