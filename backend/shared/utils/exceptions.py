"""
Centralized HTTP exceptions for consistent error handling.

Every error raised while processing an order is one of these, so the HTTP
layer can render it without leaking raw database messages. Each exception
carries a stable ``category`` that lets callers tell retryable infrastructure
failures apart from data errors.

Usage:
    from shared.utils.exceptions import OrderNotFoundError, translate_database_error

    raise OrderNotFoundError(order_no)

    try:
        ...
    except SQLAlchemyError as exc:
        raise translate_database_error(exc) from exc
"""

from typing import Any

from fastapi import HTTPException, status
from sqlalchemy import exc as sa_exc

from shared.config.constants import ErrorCategory, OrderStatus
from shared.config.logging import get_logger

logger = get_logger(__name__)


class AppException(HTTPException):
    """
    Base exception with automatic logging.

    All custom exceptions should inherit from this class
    to ensure consistent logging and response format.
    """

    def __init__(
        self,
        status_code: int,
        detail: str,
        category: str = ErrorCategory.INTERNAL,
        log_level: str = "warning",
        headers: dict[str, str] | None = None,
        **log_context: Any,
    ):
        self.category = category

        log_fn = getattr(logger, log_level, logger.warning)
        log_fn(detail, status_code=status_code, category=category, **log_context)

        super().__init__(status_code=status_code, detail=detail, headers=headers)

    @property
    def is_client_error(self) -> bool:
        return self.status_code < 500

    @property
    def is_retryable(self) -> bool:
        return self.category in ErrorCategory.RETRYABLE


# =============================================================================
# 404 Not Found Errors
# =============================================================================


class NotFoundError(AppException):
    """
    Entity not found error (404).

    Usage:
        raise NotFoundError("Table", 5)
    """

    def __init__(self, entity: str, entity_id: int | str | None = None, **log_context: Any):
        if entity_id is not None:
            detail = f"{entity} {entity_id} not found"
        else:
            detail = f"{entity} not found"

        super().__init__(
            status_code=status.HTTP_404_NOT_FOUND,
            detail=detail,
            category=ErrorCategory.NOT_FOUND,
            entity=entity,
            entity_id=entity_id,
            **log_context,
        )


class OrderNotFoundError(NotFoundError):
    """Order header does not exist (UPDATED on an unknown order number)."""

    def __init__(self, order_no: int | None = None, **log_context: Any):
        super().__init__("Order", order_no, **log_context)


# =============================================================================
# 400 Bad Request Errors
# =============================================================================


class ValidationError(AppException):
    """
    Input validation error (400).

    Usage:
        raise ValidationError("Select a table for Dine-In.", field="tableId")
    """

    def __init__(self, detail: str, category: str = ErrorCategory.VALIDATION, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=detail,
            category=category,
            **log_context,
        )


class InvalidOrderStatusError(ValidationError):
    """Submission status outside NEW / UPDATED / KOT."""

    def __init__(self, order_status: Any, **log_context: Any):
        expected = ", ".join(OrderStatus.ALL)
        super().__init__(
            f"Invalid order status: {order_status} (expected one of {expected})",
            order_status=order_status,
            **log_context,
        )


class MissingDataError(ValidationError):
    """A required column was left empty (NOT NULL violation)."""

    def __init__(self, detail: str = "Missing required field data", **log_context: Any):
        super().__init__(detail, category=ErrorCategory.MISSING_DATA, **log_context)


class InvalidReferenceError(ValidationError):
    """A submitted id points at nothing (foreign key violation)."""

    def __init__(self, detail: str = "Invalid reference data provided", **log_context: Any):
        super().__init__(detail, category=ErrorCategory.INVALID_REFERENCE, **log_context)


# =============================================================================
# 409 Conflict Errors
# =============================================================================


class ConflictError(AppException):
    """
    Resource conflict error (409).
    """

    def __init__(self, detail: str, category: str = ErrorCategory.DUPLICATE, **log_context: Any):
        super().__init__(
            status_code=status.HTTP_409_CONFLICT,
            detail=detail,
            category=category,
            **log_context,
        )


class DuplicateOrderError(ConflictError):
    """Primary or unique key violation while writing an order."""

    def __init__(self, detail: str = "Duplicate order number detected", **log_context: Any):
        super().__init__(detail, **log_context)


class DuplicateLineError(ConflictError):
    """Two lines of one order or kitchen ticket share a line number."""

    def __init__(self, detail: str = "Duplicate line number in order", **log_context: Any):
        super().__init__(detail, **log_context)


# =============================================================================
# 500 Internal Server Errors
# =============================================================================


class InternalError(AppException):
    """
    Internal server error (500).

    Usage:
        raise InternalError("Order processing failed: boom", order_no=123)
    """

    def __init__(
        self,
        detail: str = "Internal Server Error",
        category: str = ErrorCategory.INTERNAL,
        **log_context: Any,
    ):
        super().__init__(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail=detail,
            category=category,
            log_level="error",
            **log_context,
        )


class DatabaseError(InternalError):
    """Database request, authentication, connection or timeout failure."""

    def __init__(self, detail: str, category: str = ErrorCategory.DATABASE, **log_context: Any):
        super().__init__(detail, category=category, **log_context)


# =============================================================================
# Database Error Translation
# =============================================================================

# Message fragments emitted by PostgreSQL, SQL Server and SQLite drivers
_NOT_NULL_MARKERS = ("not null", "cannot insert null", "null value in column")
_DUPLICATE_MARKERS = ("primary key", "unique constraint", "duplicate key", "unique")
_FOREIGN_KEY_MARKERS = ("foreign key",)
# Unique (order_no, sl_no) constraints on the line tables
_LINE_TABLE_MARKERS = ("order_line", "kot_line")
_AUTH_MARKERS = ("login failed", "password authentication failed", "authentication")
_RESET_MARKERS = ("connection reset", "server closed the connection", "connection was closed")
_TIMEOUT_MARKERS = ("timeout", "timed out")


def _has_marker(message: str, markers: tuple[str, ...]) -> bool:
    return any(marker in message for marker in markers)


def _error_message(exc: BaseException) -> str:
    original = getattr(exc, "orig", None)
    return str(original if original is not None else exc)


def translate_database_error(exc: BaseException) -> AppException:
    """
    Map a database (or unexpected) exception onto the API error taxonomy.

    - integrity violations become client faults (missing data, duplicate,
      invalid reference)
    - connectivity problems become server faults with a stable category
    - ``AppException`` instances are returned unchanged
    """
    if isinstance(exc, AppException):
        return exc

    message = _error_message(exc)
    lowered = message.lower()

    if isinstance(exc, sa_exc.IntegrityError):
        if _has_marker(lowered, _NOT_NULL_MARKERS):
            return MissingDataError(db_error=message)
        if _has_marker(lowered, _FOREIGN_KEY_MARKERS):
            return InvalidReferenceError(db_error=message)
        if _has_marker(lowered, _DUPLICATE_MARKERS):
            if _has_marker(lowered, _LINE_TABLE_MARKERS):
                return DuplicateLineError(db_error=message)
            return DuplicateOrderError(db_error=message)
        return DatabaseError(f"Database error: {message}", db_error=message)

    if isinstance(exc, sa_exc.TimeoutError):
        return DatabaseError("Database operation timed out", category=ErrorCategory.TIMEOUT)

    if isinstance(exc, sa_exc.DBAPIError):
        if exc.connection_invalidated or _has_marker(lowered, _RESET_MARKERS):
            return DatabaseError(
                "Database connection was reset", category=ErrorCategory.CONNECTION_RESET
            )
        if _has_marker(lowered, _TIMEOUT_MARKERS):
            return DatabaseError("Database operation timed out", category=ErrorCategory.TIMEOUT)
        if _has_marker(lowered, _AUTH_MARKERS):
            return DatabaseError(
                "Database authentication failed", category=ErrorCategory.AUTHENTICATION
            )
        return DatabaseError(
            f"Database request error: {message}", category=ErrorCategory.REQUEST, db_error=message
        )

    if isinstance(exc, sa_exc.SQLAlchemyError):
        return DatabaseError(f"Database error: {message}", db_error=message)

    return InternalError(
        f"Order processing failed: {message or 'Unknown error'}",
        error_type=type(exc).__name__,
    )
