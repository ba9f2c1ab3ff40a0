"""
Utilities module: Exceptions and order schemas.
"""

from shared.utils.exceptions import (
    AppException,
    NotFoundError,
    OrderNotFoundError,
    ValidationError,
    InvalidOrderStatusError,
    ConflictError,
    DuplicateOrderError,
    DuplicateLineError,
    DatabaseError,
    translate_database_error,
)
from shared.utils.order_schemas import (
    OrderSubmission,
    OrderResult,
    parse_order_submission,
    check_submission_rules,
)

__all__ = [
    # exceptions
    "AppException",
    "NotFoundError",
    "OrderNotFoundError",
    "ValidationError",
    "InvalidOrderStatusError",
    "ConflictError",
    "DuplicateOrderError",
    "DuplicateLineError",
    "DatabaseError",
    "translate_database_error",
    # schemas
    "OrderSubmission",
    "OrderResult",
    "parse_order_submission",
    "check_submission_rules",
]
