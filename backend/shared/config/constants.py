"""
Centralized constants for the backend application.
Avoid magic strings and numbers scattered across services.

Usage:
    from shared.config.constants import OrderStatus, OrderOption, SeatStatus

    if submission.status == OrderStatus.NEW:
        ...

    if option == OrderOption.DINE_IN:
        ...
"""

from enum import IntEnum
from typing import Final


# =============================================================================
# Order Workflow
# =============================================================================


class OrderStatus:
    """Submission workflow selected by the client."""

    NEW: Final[str] = "NEW"
    UPDATED: Final[str] = "UPDATED"
    KOT: Final[str] = "KOT"

    ALL: Final[tuple[str, ...]] = (NEW, UPDATED, KOT)


class OrderOption(IntEnum):
    """Order type as submitted by the register."""

    DELIVERY = 1
    DINE_IN = 2
    TAKE_AWAY = 3


# Label stored in the order header status column, keyed by option
ORDER_TYPE_LABELS: Final[dict[int, str]] = {
    OrderOption.DELIVERY: "Order",
    OrderOption.DINE_IN: "DineIn",
    OrderOption.TAKE_AWAY: "TakeAway",
}


def order_type_label(option: int) -> str:
    """Header status label for an order option (unknown options read as TakeAway)."""
    return ORDER_TYPE_LABELS.get(option, "TakeAway")


class SoldFlag:
    """Finalized ("sold") marker on the order header."""

    YES: Final[str] = "Yes"
    NO: Final[str] = "No"


class TicketType:
    """Which print queue a printer assignment belongs to."""

    ORDER: Final[str] = "ORDER"
    KOT: Final[str] = "KOT"


# =============================================================================
# Seats and Tables
# =============================================================================


class SeatStatus:
    """Seat occupancy."""

    FREE: Final[int] = 0
    OCCUPIED: Final[int] = 1


class TableStatus:
    """Table occupancy."""

    FREE: Final[int] = 0
    PARTIALLY_OCCUPIED: Final[int] = 1
    FULLY_OCCUPIED: Final[int] = 2
    OUT_OF_SERVICE: Final[int] = 3


class SeatAssignmentStatus:
    """Status column on order/seat join rows."""

    ACTIVE: Final[int] = 0


# =============================================================================
# Customers and Sequences
# =============================================================================


CONTACT_DIGITS: Final[int] = 10

ORDER_SEQUENCE: Final[str] = "ORDER"


# =============================================================================
# Error Categories
# =============================================================================


class ErrorCategory:
    """Stable categories attached to API errors so callers can decide on retries."""

    VALIDATION: Final[str] = "VALIDATION"
    NOT_FOUND: Final[str] = "NOT_FOUND"
    MISSING_DATA: Final[str] = "MISSING_DATA"
    DUPLICATE: Final[str] = "DUPLICATE"
    INVALID_REFERENCE: Final[str] = "INVALID_REFERENCE"
    REQUEST: Final[str] = "REQUEST"
    AUTHENTICATION: Final[str] = "AUTHENTICATION"
    CONNECTION_RESET: Final[str] = "CONNECTION_RESET"
    TIMEOUT: Final[str] = "TIMEOUT"
    DATABASE: Final[str] = "DATABASE"
    INTERNAL: Final[str] = "INTERNAL"

    # Infrastructure failures a caller may resubmit unchanged
    RETRYABLE: Final[frozenset[str]] = frozenset({CONNECTION_RESET, TIMEOUT})


# =============================================================================
# Status Validation Functions
# =============================================================================


def validate_order_status(status: str) -> bool:
    """Validate that a submission status is one of NEW, UPDATED or KOT."""
    return status in OrderStatus.ALL


def validate_order_option(option: int) -> bool:
    """Validate that an order option is Delivery, DineIn or TakeAway."""
    return option in {o.value for o in OrderOption}
