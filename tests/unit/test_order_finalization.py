"""Unit tests for the draft-to-order orchestration."""

from unittest.mock import AsyncMock

import pytest

from checkout_bridge.domain.order_finalization import (
    OrderFinalizer,
    build_draft_order_input,
    parse_quantity,
    to_variant_gid,
    validate_finalize_request,
)
from checkout_bridge.models import (
    DraftCompleteError,
    DraftCreateError,
    FinalizationStage,
    GraphUserError,
    ValidationError,
)

DRAFT_ID = "gid://shopify/DraftOrder/1122334455"
ORDER = {"id": "gid://shopify/Order/5512345678901", "name": "#1042"}


@pytest.fixture
def shopify():
    """Mock Shopify client whose mutations both succeed."""
    client = AsyncMock()
    client.draft_order_create.return_value = {"draftOrder": {"id": DRAFT_ID}, "userErrors": []}
    client.draft_order_complete.return_value = {
        "draftOrder": {"id": DRAFT_ID, "order": ORDER},
        "userErrors": [],
    }
    return client


def test_to_variant_gid():
    assert to_variant_gid(987654) == "gid://shopify/ProductVariant/987654"


@pytest.mark.parametrize(
    "value,expected",
    [(3, 3), ("2", 2), (" 4 ", 4), ("5 units", 5), (2.9, 2), ("abc", None), (None, None), (True, None)],
)
def test_parse_quantity(value, expected):
    assert parse_quantity(value) == expected


class TestValidateFinalizeRequest:
    def test_valid_payload(self, finalize_body):
        assert validate_finalize_request(finalize_body) == []

    def test_empty_payload_reports_everything(self):
        assert validate_finalize_request({}) == [
            "line_items is required",
            "address.firstName is required",
            "address.lastName is required",
            "address.address1 is required",
            "address.city is required",
            "address.zip is required",
            "address.country is required",
            "shipping_label is required",
            "shipping_price is required",
        ]

    def test_one_entry_per_missing_address_field(self, finalize_body):
        del finalize_body["address"]["city"]
        finalize_body["address"]["zip"] = ""
        finalize_body["address"]["country"] = None

        assert validate_finalize_request(finalize_body) == [
            "address.city is required",
            "address.zip is required",
            "address.country is required",
        ]

    def test_zero_shipping_price_is_valid(self, finalize_body):
        finalize_body["shipping_price"] = 0
        assert validate_finalize_request(finalize_body) == []

    def test_line_item_problems(self, finalize_body):
        finalize_body["line_items"] = [{"quantity": "x"}, "not-an-item"]

        assert validate_finalize_request(finalize_body) == [
            "line_items[0].variant_id is required",
            "line_items[0].quantity must be an integer",
            "line_items[1].variant_id is required",
            "line_items[1].quantity must be an integer",
        ]

    def test_line_items_must_be_a_list(self, finalize_body):
        finalize_body["line_items"] = {"variant_id": 1, "quantity": 1}
        assert validate_finalize_request(finalize_body) == ["line_items is required"]


class TestBuildDraftOrderInput:
    def test_full_input(self, finalize_body):
        draft_input = build_draft_order_input(finalize_body)

        expected_address = {
            "firstName": "Jane",
            "lastName": "Q Public",
            "address1": "1 Main St",
            "city": "Springfield",
            "zip": "00001",
            "country": "US",
            "phone": None,
        }
        assert draft_input == {
            "email": "j@x.com",
            "billingAddress": expected_address,
            "shippingAddress": expected_address,
            "lineItems": [
                {"variantId": "gid://shopify/ProductVariant/987654", "quantity": 2, "price": "19.5"},
                {"variantId": "gid://shopify/ProductVariant/123", "quantity": 1},
            ],
            "shippingLine": {"title": "Standard", "price": "4.99"},
            "note": "PayPal order: 5O190127TN364715T | capture: CAP1",
        }

    def test_zero_shipping_price_keeps_shipping_line(self, finalize_body):
        finalize_body["shipping_price"] = 0
        assert build_draft_order_input(finalize_body)["shippingLine"] == {
            "title": "Standard",
            "price": "0",
        }

    def test_integral_float_shipping_price(self, finalize_body):
        finalize_body["shipping_price"] = 5.0
        assert build_draft_order_input(finalize_body)["shippingLine"]["price"] == "5"

    @pytest.mark.parametrize("shipping_price", [None, ""])
    def test_no_shipping_line_without_price(self, finalize_body, shipping_price):
        finalize_body["shipping_price"] = shipping_price
        assert "shippingLine" not in build_draft_order_input(finalize_body)

    def test_email_omitted_when_empty(self, finalize_body):
        finalize_body["address"]["email"] = ""
        assert "email" not in build_draft_order_input(finalize_body)

    def test_phone_passed_through(self, finalize_body):
        finalize_body["address"]["phone"] = "+1 555 0100"
        draft_input = build_draft_order_input(finalize_body)
        assert draft_input["shippingAddress"]["phone"] == "+1 555 0100"
        assert draft_input["billingAddress"]["phone"] == "+1 555 0100"

    def test_note_always_present(self, finalize_body):
        del finalize_body["paypalOrderId"]
        del finalize_body["paypalCaptureId"]
        assert build_draft_order_input(finalize_body)["note"] == "PayPal order:  | capture:"


class TestOrderFinalizer:
    @pytest.mark.asyncio
    async def test_finalize_success(self, shopify, finalize_body):
        finalizer = OrderFinalizer(shopify)

        order = await finalizer.finalize(finalize_body)

        assert order.to_dict() == ORDER
        assert finalizer.stage == FinalizationStage.DONE
        shopify.draft_order_create.assert_awaited_once_with(build_draft_order_input(finalize_body))
        shopify.draft_order_complete.assert_awaited_once_with(DRAFT_ID)

    @pytest.mark.asyncio
    async def test_validation_failure_makes_no_calls(self, shopify, finalize_body):
        finalize_body["line_items"] = []
        finalize_body["shipping_label"] = ""

        with pytest.raises(ValidationError) as exc_info:
            await OrderFinalizer(shopify).finalize(finalize_body)

        assert exc_info.value.details == ["line_items is required", "shipping_label is required"]
        shopify.draft_order_create.assert_not_awaited()
        shopify.draft_order_complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_user_errors_skip_completion(self, shopify, finalize_body):
        user_errors = [{"field": ["lineItems", "0", "variantId"], "message": "Variant not found"}]
        shopify.draft_order_create.return_value = {"draftOrder": None, "userErrors": user_errors}

        with pytest.raises(DraftCreateError, match="Shopify user errors") as exc_info:
            await OrderFinalizer(shopify).finalize(finalize_body)

        assert exc_info.value.details == user_errors
        shopify.draft_order_complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_create_without_draft_id(self, shopify, finalize_body):
        shopify.draft_order_create.return_value = {"draftOrder": None, "userErrors": []}

        with pytest.raises(DraftCreateError, match="Failed to create draft order"):
            await OrderFinalizer(shopify).finalize(finalize_body)

        shopify.draft_order_complete.assert_not_awaited()

    @pytest.mark.asyncio
    async def test_complete_user_errors(self, shopify, finalize_body):
        user_errors = [{"field": None, "message": "Draft order is already completed"}]
        shopify.draft_order_complete.return_value = {"draftOrder": None, "userErrors": user_errors}
        finalizer = OrderFinalizer(shopify)

        with pytest.raises(DraftCompleteError) as exc_info:
            await finalizer.finalize(finalize_body)

        assert exc_info.value.details == user_errors
        assert finalizer.stage == FinalizationStage.COMPLETING

    @pytest.mark.asyncio
    async def test_complete_without_order(self, shopify, finalize_body):
        shopify.draft_order_complete.return_value = {
            "draftOrder": {"id": DRAFT_ID, "order": None},
            "userErrors": [],
        }

        with pytest.raises(DraftCompleteError, match="Unable to complete draft order"):
            await OrderFinalizer(shopify).finalize(finalize_body)

    @pytest.mark.asyncio
    async def test_graphql_errors_propagate(self, shopify, finalize_body):
        shopify.draft_order_create.side_effect = GraphUserError("Shopify GraphQL error", details=[])

        with pytest.raises(GraphUserError):
            await OrderFinalizer(shopify).finalize(finalize_body)

        shopify.draft_order_complete.assert_not_awaited()
