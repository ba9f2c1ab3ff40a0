"""
Pydantic schemas for order submission and the result descriptor.

The register posts one loosely shaped payload for every workflow. It is parsed
into one of three tagged variants (NEW, UPDATED, KOT) that share the item and
customer fields, so each workflow only sees the fields that mean something to it.
"""

from collections.abc import Mapping
from decimal import Decimal
from typing import Annotated, Any, Literal, Union

from pydantic import BaseModel, ConfigDict, Field, TypeAdapter, field_validator
from pydantic import ValidationError as PydanticValidationError
from pydantic.alias_generators import to_camel

from shared.config.constants import (
    OrderOption,
    OrderStatus,
    validate_order_option,
    validate_order_status,
)
from shared.utils.exceptions import InvalidOrderStatusError, ValidationError


class CamelModel(BaseModel):
    """Accepts both camelCase (wire) and snake_case (Python) field names."""

    model_config = ConfigDict(alias_generator=to_camel, populate_by_name=True)


def _blank_to_zero(value: Any) -> Any:
    # The register sends "" for numbers it never filled in
    if value is None or (isinstance(value, str) and not value.strip()):
        return 0
    return value


def _none_to_empty(value: Any) -> Any:
    return "" if value is None else value


# =============================================================================
# Inbound Submission
# =============================================================================


class OrderItemInput(CamelModel):
    """A single order line as entered at the register."""

    item_code: int = 0
    sl_no: int = 0
    item_name: str = ""
    qty: Decimal = Decimal("0")
    rate: Decimal = Decimal("0")
    amount: Decimal = Decimal("0")
    cost: Decimal = Decimal("0")
    vat: Decimal = Decimal("0")
    vat_amt: Decimal = Decimal("0")
    tax_ledger: int = 0
    arabic: str = ""  # Localized item name
    notes: str = ""

    @field_validator(
        "item_code", "sl_no", "qty", "rate", "amount", "cost", "vat", "vat_amt", "tax_ledger",
        mode="before",
    )
    @classmethod
    def coerce_blank_numbers(cls, value: Any) -> Any:
        return _blank_to_zero(value)

    @field_validator("item_name", "arabic", "notes", mode="before")
    @classmethod
    def coerce_blank_text(cls, value: Any) -> Any:
        return _none_to_empty(value)


class OrderSubmissionBase(CamelModel):
    """Fields shared by every order workflow."""

    order_no: int = 0
    date: str = ""
    time: str = ""
    option: int = 0
    cust_id: int = 0
    cust_name: str | None = None
    flat_no: str | None = None
    address: str | None = None
    contact: str | None = None
    delivery_boy_id: int = 0
    table_id: int = 0
    table_no: str = ""
    remarks: str = ""
    total: Decimal = Decimal("0")
    prefix: str = ""
    items: list[OrderItemInput] = Field(default_factory=list)
    # Raw values from the client; non-numeric entries are skipped downstream
    selected_seats: list[int | str] = Field(default_factory=list)

    @field_validator(
        "order_no", "option", "cust_id", "delivery_boy_id", "table_id", "total",
        mode="before",
    )
    @classmethod
    def coerce_blank_numbers(cls, value: Any) -> Any:
        return _blank_to_zero(value)

    @field_validator("date", "time", "table_no", "remarks", "prefix", mode="before")
    @classmethod
    def coerce_blank_text(cls, value: Any) -> Any:
        return _none_to_empty(value)

    @field_validator("selected_seats", mode="before")
    @classmethod
    def default_seats(cls, value: Any) -> Any:
        return [] if value is None else value

    @property
    def is_dine_in(self) -> bool:
        return self.option == OrderOption.DINE_IN


class NewOrderRequest(OrderSubmissionBase):
    """A brand-new sale. The order number is allocated server-side."""

    status: Literal["NEW"]
    # Draft order parked in temporary storage, purged once this order commits
    held_order_no: int | None = Field(default=None, alias="holdedOrder")

    @field_validator("held_order_no", mode="before")
    @classmethod
    def blank_held_order(cls, value: Any) -> Any:
        if value in (None, "", 0, "0"):
            return None
        return value


class UpdatedOrderRequest(OrderSubmissionBase):
    """Rewrite of an existing order (header, lines, printers, seats)."""

    status: Literal["UPDATED"]


class KotRequest(OrderSubmissionBase):
    """Kitchen order ticket: snapshot of what was sent to the kitchen."""

    status: Literal["KOT"]


OrderSubmission = Annotated[
    Union[NewOrderRequest, UpdatedOrderRequest, KotRequest],
    Field(discriminator="status"),
]

_submission_adapter: TypeAdapter[OrderSubmission] = TypeAdapter(OrderSubmission)


def _describe_first_error(exc: PydanticValidationError) -> str:
    error = exc.errors(include_url=False)[0]
    location = ".".join(str(part) for part in error["loc"])
    return f"{location}: {error['msg']}" if location else error["msg"]


def parse_order_submission(payload: Mapping[str, Any] | OrderSubmissionBase) -> OrderSubmission:
    """
    Turn a raw submission into its tagged variant.

    Raises:
        InvalidOrderStatusError: status is not NEW, UPDATED or KOT
        ValidationError: any other schema violation
    """
    if isinstance(payload, OrderSubmissionBase):
        if not validate_order_status(getattr(payload, "status", None)):
            raise InvalidOrderStatusError(getattr(payload, "status", None))
        return payload

    order_status = payload.get("status")
    if not validate_order_status(order_status):
        raise InvalidOrderStatusError(order_status)

    try:
        return _submission_adapter.validate_python(payload)
    except PydanticValidationError as exc:
        raise ValidationError(
            f"Invalid order submission: {_describe_first_error(exc)}",
            error_count=exc.error_count(),
        ) from exc


def check_submission_rules(submission: OrderSubmissionBase) -> None:
    """
    Boundary checks the register relies on before an order reaches the core.

    Raises ValidationError with the message shown to the cashier.
    """
    if not submission.order_no:
        raise ValidationError("Click New Button. Order number is required.", field="orderNo")

    if not validate_order_option(submission.option):
        raise ValidationError(
            "Select an order type (Delivery, DineIn, or TakeAway).", field="option"
        )

    if submission.option == OrderOption.DINE_IN and not submission.table_id:
        raise ValidationError("Select a table for Dine-In.", field="tableId")

    if submission.option == OrderOption.DELIVERY and not submission.cust_name:
        raise ValidationError("Enter or select a customer for Delivery.", field="custName")

    if not submission.items:
        raise ValidationError("Enter order details.", field="items")


# =============================================================================
# Outbound Result
# =============================================================================


class CustomerInfo(CamelModel):
    cust_id: int
    cust_name: str | None = None
    contact: str | None = None


class TableInfo(CamelModel):
    table_id: int
    table_no: str = ""


class OrderResultDetails(CamelModel):
    order_type: str
    customer_info: CustomerInfo | None = None
    table_info: TableInfo | None = None
    selected_seats: list[int | str] | None = None
    items_count: int
    total: float


class OrderResult(CamelModel):
    """Descriptor returned after a submission commits."""

    order_no: int
    cust_id: int
    status: str
    message: str
    details: OrderResultDetails


class SaveOrderResponse(BaseModel):
    success: bool = True
    message: str
    data: OrderResult


class LatestOrderOutput(CamelModel):
    # String, matching what the register expects for its order number box
    order_no: str


class LatestOrderResponse(BaseModel):
    success: bool = True
    message: str = "Latest order number fetched successfully"
    data: LatestOrderOutput


__all__ = [
    "OrderStatus",
    "OrderItemInput",
    "OrderSubmissionBase",
    "NewOrderRequest",
    "UpdatedOrderRequest",
    "KotRequest",
    "OrderSubmission",
    "parse_order_submission",
    "check_submission_rules",
    "CustomerInfo",
    "TableInfo",
    "OrderResultDetails",
    "OrderResult",
    "SaveOrderResponse",
    "LatestOrderOutput",
    "LatestOrderResponse",
]
