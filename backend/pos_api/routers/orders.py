"""
Orders router.
Thin controller over the order transaction coordinator.
"""

from typing import Any

from fastapi import APIRouter, Body, Depends
from sqlalchemy.orm import Session

from shared.infrastructure.db import get_db
from shared.config.logging import orders_logger as logger
from shared.utils.order_schemas import (
    LatestOrderOutput,
    LatestOrderResponse,
    SaveOrderResponse,
    check_submission_rules,
    parse_order_submission,
)
from pos_api.services.domain import OrderService


router = APIRouter(prefix="/api/orders", tags=["orders"])


@router.post("", response_model=SaveOrderResponse)
def save_order(
    payload: dict[str, Any] = Body(...),
    db: Session = Depends(get_db),
) -> SaveOrderResponse:
    """
    Save an order submitted by the register.

    ``status`` selects the workflow:
    - NEW: create the order and allocate its number
    - UPDATED: rewrite an existing order
    - KOT: record a kitchen order ticket
    """
    submission = parse_order_submission(payload)
    check_submission_rules(submission)

    result = OrderService(db).process_order(submission)
    return SaveOrderResponse(message=result.message, data=result)


@router.get("/latest", response_model=LatestOrderResponse)
def latest_order(db: Session = Depends(get_db)) -> LatestOrderResponse:
    """Next order number, shown by the register before a NEW order is saved."""
    next_order_no = OrderService(db).latest_order_number()
    logger.debug("Latest order number served", order_no=next_order_no)
    return LatestOrderResponse(data=LatestOrderOutput(order_no=str(next_order_no)))
