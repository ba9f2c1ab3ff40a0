"""
Order Domain Service.

Transaction coordinator for order submissions: resolves the customer, runs
the NEW / UPDATED / KOT workflow and commits everything as one unit. Any
failure rolls the whole submission back and surfaces as an ``AppException``.
"""

from __future__ import annotations

from collections.abc import Mapping
from typing import Any

from sqlalchemy.orm import Session

from shared.config.constants import order_type_label
from shared.config.logging import get_logger, mask_phone
from shared.config.settings import Settings, get_settings
from shared.infrastructure.db import safe_commit
from shared.utils.exceptions import AppException, translate_database_error
from shared.utils.order_schemas import (
    CustomerInfo,
    NewOrderRequest,
    OrderResult,
    OrderResultDetails,
    OrderSubmission,
    TableInfo,
    UpdatedOrderRequest,
    parse_order_submission,
)
from pos_api.services.domain.customer_service import CustomerResolver
from pos_api.services.domain.order_number import OrderNumberAllocator
from pos_api.services.domain.order_persistence import OrderPersistenceEngine

logger = get_logger(__name__)


class OrderService:
    """
    Domain service for order submissions.

    The session is handed in by the caller; this service commits or rolls
    it back but never opens or closes it.
    """

    def __init__(self, db: Session, settings: Settings | None = None):
        self._db = db
        self._settings = settings or get_settings()
        self._customers = CustomerResolver(db)
        self._allocator = OrderNumberAllocator(db)
        self._persistence = OrderPersistenceEngine(db, self._settings)

    def process_order(self, submission: OrderSubmission | Mapping[str, Any]) -> OrderResult:
        """
        Process one order submission atomically.

        Raises:
            InvalidOrderStatusError: status is not NEW, UPDATED or KOT (no writes done)
            OrderNotFoundError: UPDATED for an unknown order
            AppException: any other failure, already translated
        """
        request = parse_order_submission(submission)

        logger.info(
            "Processing order",
            status=request.status,
            order_no=request.order_no,
            option=request.option,
            items=len(request.items),
        )

        try:
            customer_id = self._customers.resolve(
                request.cust_name,
                request.contact,
                address=request.address,
                flat_no=request.flat_no,
                fallback_id=request.cust_id,
            )

            if isinstance(request, NewOrderRequest):
                order_no = self._persistence.create(request, customer_id)
            elif isinstance(request, UpdatedOrderRequest):
                order_no = self._persistence.update(request, customer_id)
            else:
                order_no = self._persistence.send_to_kitchen(request, customer_id)

            safe_commit(self._db)
        except AppException:
            self._rollback()
            raise
        except Exception as exc:
            self._rollback()
            raise translate_database_error(exc) from exc

        logger.info(
            "Order committed",
            order_no=order_no,
            status=request.status,
            customer_id=customer_id,
            contact=mask_phone(request.contact),
        )
        return self._build_result(request, order_no, customer_id)

    def latest_order_number(self) -> int:
        """Number the next NEW order is expected to get (not reserved)."""
        return self._allocator.peek_next()

    def _rollback(self) -> None:
        try:
            self._db.rollback()
            logger.info("Transaction rolled back")
        except Exception:
            # Surface the failure that triggered the rollback, not this one
            logger.error("Rollback failed", exc_info=True)

    def _build_result(self, request: OrderSubmission, order_no: int, customer_id: int) -> OrderResult:
        customer_info = None
        if customer_id:
            customer_info = CustomerInfo(
                cust_id=customer_id,
                cust_name=request.cust_name,
                contact=request.contact,
            )

        table_info = None
        if request.table_id:
            table_info = TableInfo(table_id=request.table_id, table_no=request.table_no)

        return OrderResult(
            order_no=order_no,
            cust_id=customer_id,
            status=request.status,
            message=f"Order {request.status.lower()} successfully",
            details=OrderResultDetails(
                order_type=order_type_label(request.option),
                customer_info=customer_info,
                table_info=table_info,
                selected_seats=list(request.selected_seats) or None,
                items_count=len(request.items),
                total=float(request.total),
            ),
        )
