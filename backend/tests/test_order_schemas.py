"""
Tests for order submission parsing and boundary validation.
"""

from decimal import Decimal

import pytest

from shared.config.constants import ErrorCategory
from shared.utils.exceptions import InvalidOrderStatusError, ValidationError
from shared.utils.order_schemas import (
    CustomerInfo,
    KotRequest,
    NewOrderRequest,
    OrderResult,
    OrderResultDetails,
    UpdatedOrderRequest,
    check_submission_rules,
    parse_order_submission,
)
from tests.conftest import make_item, make_payload


class TestParseOrderSubmission:
    def test_new_request_from_camel_case(self):
        request = parse_order_submission(
            make_payload(holdedOrder="900", selectedSeats=["12", 13], tableId="5", option="2")
        )

        assert isinstance(request, NewOrderRequest)
        assert request.held_order_no == 900
        assert request.table_id == 5
        assert request.option == 2
        assert request.is_dine_in
        assert request.selected_seats == ["12", 13]
        assert request.total == Decimal("19.00")
        item = request.items[0]
        assert item.item_code == 101
        assert item.vat_amt == Decimal("0.95")
        assert item.arabic == ""

    @pytest.mark.parametrize(
        "status, variant",
        [("UPDATED", UpdatedOrderRequest), ("KOT", KotRequest)],
    )
    def test_status_selects_variant(self, status, variant):
        assert isinstance(parse_order_submission(make_payload(status)), variant)

    def test_blank_numbers_and_nulls_are_defaulted(self):
        request = parse_order_submission(
            make_payload(
                custId="",
                deliveryBoyId=None,
                total="",
                remarks=None,
                holdedOrder="",
                selectedSeats=None,
                items=[make_item(qty="", cost=None, arabic=None, notes=None)],
            )
        )

        assert request.cust_id == 0
        assert request.delivery_boy_id == 0
        assert request.total == Decimal("0")
        assert request.remarks == ""
        assert request.held_order_no is None
        assert request.selected_seats == []
        assert request.items[0].qty == Decimal("0")
        assert request.items[0].cost == Decimal("0")
        assert request.items[0].notes == ""

    @pytest.mark.parametrize("status", ["VOID", "new", "", None])
    def test_unknown_status_is_rejected(self, status):
        with pytest.raises(InvalidOrderStatusError) as exc_info:
            parse_order_submission(make_payload(status))

        assert exc_info.value.status_code == 400
        assert exc_info.value.detail.startswith("Invalid order status:")

    def test_missing_status_is_rejected(self):
        payload = make_payload()
        del payload["status"]

        with pytest.raises(InvalidOrderStatusError):
            parse_order_submission(payload)

    def test_malformed_field_is_a_validation_error(self):
        with pytest.raises(ValidationError) as exc_info:
            parse_order_submission(make_payload(option="dine-in"))

        assert exc_info.value.status_code == 400
        assert exc_info.value.category == ErrorCategory.VALIDATION
        assert "option" in exc_info.value.detail

    def test_typed_request_passes_through(self):
        request = NewOrderRequest.model_validate(make_payload())

        assert parse_order_submission(request) is request


class TestSubmissionRules:
    def test_valid_submission_passes(self):
        check_submission_rules(parse_order_submission(make_payload()))

    @pytest.mark.parametrize(
        "overrides, message",
        [
            ({"orderNo": 0}, "Click New Button. Order number is required."),
            ({"orderNo": ""}, "Click New Button. Order number is required."),
            ({"option": 4}, "Select an order type (Delivery, DineIn, or TakeAway)."),
            ({"option": 2, "tableId": 0}, "Select a table for Dine-In."),
            ({"option": 1, "custName": ""}, "Enter or select a customer for Delivery."),
            ({"items": []}, "Enter order details."),
        ],
    )
    def test_rule_violations(self, overrides, message):
        request = parse_order_submission(make_payload(**overrides))

        with pytest.raises(ValidationError) as exc_info:
            check_submission_rules(request)

        assert exc_info.value.detail == message

    def test_delivery_with_customer_passes(self):
        check_submission_rules(
            parse_order_submission(make_payload(option=1, custName="Jane Doe"))
        )


class TestOrderResult:
    def test_serialises_with_camel_case(self):
        result = OrderResult(
            order_no=12,
            cust_id=3,
            status="NEW",
            message="Order new successfully",
            details=OrderResultDetails(
                order_type="Order",
                customer_info=CustomerInfo(cust_id=3, cust_name="Jane Doe", contact="5551234567"),
                items_count=2,
                total=28.5,
            ),
        )

        data = result.model_dump(by_alias=True)

        assert data["orderNo"] == 12
        assert data["custId"] == 3
        assert data["details"]["orderType"] == "Order"
        assert data["details"]["customerInfo"]["custName"] == "Jane Doe"
        assert data["details"]["itemsCount"] == 2
        assert data["details"]["tableInfo"] is None
