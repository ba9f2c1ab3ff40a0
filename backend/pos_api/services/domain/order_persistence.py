"""
Order Persistence Engine.

Writes the order header, its lines, printer routing and seat occupancy for
each submission workflow:

- NEW: allocate a number and create everything from scratch.
- UPDATED: rewrite an existing order; seats are frozen once it is sold.
- KOT: record what was sent to the kitchen without touching the billed lines.

Nothing here commits; the caller owns the transaction.
"""

from __future__ import annotations

from typing import Any

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from shared.config.constants import SoldFlag, TicketType, order_type_label
from shared.config.logging import get_logger
from shared.config.settings import Settings
from shared.utils.exceptions import OrderNotFoundError
from shared.utils.order_schemas import (
    KotRequest,
    NewOrderRequest,
    OrderItemInput,
    OrderSubmissionBase,
    UpdatedOrderRequest,
)
from pos_api.models import (
    HeldOrder,
    HeldOrderLine,
    KotOrder,
    KotOrderLine,
    Order,
    OrderLine,
)
from pos_api.services.domain.order_number import OrderNumberAllocator
from pos_api.services.domain.print_routing import PrintRoutingAssigner
from pos_api.services.domain.seat_service import (
    ExplicitSeats,
    SeatOccupancyManager,
    header_seat_id,
    parse_seat_ids,
    resolve_seat_source,
)

logger = get_logger(__name__)


def _header_values(request: OrderSubmissionBase, customer_id: int) -> dict[str, Any]:
    return {
        "entry_date": request.date,
        "entry_time": request.time,
        "options": request.option,
        "customer_id": customer_id,
        "customer_name": request.cust_name or "",
        "flat": request.flat_no or "",
        "address": request.address or "",
        "contact": request.contact or "",
        "delivery_boy_id": request.delivery_boy_id,
        "table_id": request.table_id,
        "table_no": request.table_no,
        "remarks": request.remarks,
        "total": request.total,
        "status": order_type_label(request.option),
    }


def _line_values(item: OrderItemInput) -> dict[str, Any]:
    # Item field names match the line columns one to one
    return item.model_dump()


class OrderPersistenceEngine:
    def __init__(self, db: Session, settings: Settings):
        self._db = db
        self._settings = settings
        self._allocator = OrderNumberAllocator(db)
        self._printing = PrintRoutingAssigner(db)
        self._seats = SeatOccupancyManager(db, counter=settings.counter_name)

    # =========================================================================
    # NEW
    # =========================================================================

    def create(self, request: NewOrderRequest, customer_id: int) -> int:
        """Create a new order and return its number."""
        allocated = self._allocator.allocate()

        order = Order(
            order_no=allocated,
            seat_id=header_seat_id(request.selected_seats),
            sold=SoldFlag.NO,
            prefix=request.prefix,
            prefixed_no=f"{request.prefix}{allocated}" if request.prefix else "",
            **_header_values(request, customer_id),
        )
        self._db.add(order)
        self._db.flush()

        order_no = self._rederive_order_no(request, customer_id) or allocated
        logger.info("Order header created", order_no=order_no, status=order.status)

        self._insert_lines(order_no, request.items)
        self._printing.assign(
            order_no, request.items, TicketType.ORDER, self._settings.order_printer
        )

        if request.is_dine_in:
            source = resolve_seat_source(request.selected_seats, self._settings.counter_name)
            self._seats.claim(order_no, request.table_id, source)
            if request.table_id:
                self._seats.refresh_table_status(request.table_id)

        if request.held_order_no:
            self._purge_held_order(request.held_order_no)

        return order_no

    def _rederive_order_no(self, request: NewOrderRequest, customer_id: int) -> int | None:
        """Read the number back from the stored header instead of trusting the allocation."""
        return self._db.scalar(
            select(Order.order_no)
            .where(
                Order.entry_date == request.date,
                Order.entry_time == request.time,
                Order.customer_id == customer_id,
            )
            .order_by(Order.order_no.desc())
            .limit(1)
        )

    def _purge_held_order(self, held_order_no: int) -> None:
        self._db.execute(delete(HeldOrderLine).where(HeldOrderLine.order_no == held_order_no))
        self._db.execute(delete(HeldOrder).where(HeldOrder.order_no == held_order_no))
        logger.info("Held order purged", held_order_no=held_order_no)

    # =========================================================================
    # UPDATED
    # =========================================================================

    def update(self, request: UpdatedOrderRequest, customer_id: int) -> int:
        """
        Rewrite an existing order in place.

        A sold order keeps its header seat and its seat/table occupancy no
        matter what the register sends.

        Raises:
            OrderNotFoundError: no order with ``request.order_no``
        """
        order = self._db.scalar(
            select(Order).where(Order.order_no == request.order_no).with_for_update()
        )
        if order is None:
            raise OrderNotFoundError(request.order_no)

        is_sold = order.is_sold
        seat_id = order.seat_id if is_sold else header_seat_id(request.selected_seats)

        for column, value in _header_values(request, customer_id).items():
            setattr(order, column, value)
        order.seat_id = seat_id
        self._db.flush()

        logger.info("Order header rewritten", order_no=order.order_no, sold=order.sold)

        self._db.execute(delete(OrderLine).where(OrderLine.order_no == order.order_no))
        self._insert_lines(order.order_no, request.items)
        self._printing.assign(
            order.order_no, request.items, TicketType.ORDER, self._settings.order_printer
        )

        if is_sold:
            logger.info("Order already sold, seats left unchanged", order_no=order.order_no)
            return order.order_no

        if request.is_dine_in:
            if request.selected_seats:
                self._seats.reassign(
                    order.order_no, request.table_id, parse_seat_ids(request.selected_seats)
                )
            if request.table_id:
                self._seats.refresh_table_status(request.table_id)

        return order.order_no

    # =========================================================================
    # KOT
    # =========================================================================

    def send_to_kitchen(self, request: KotRequest, customer_id: int) -> int:
        """
        Record a kitchen ticket for ``request.order_no``.

        The live header only gets its table, seat and customer fields
        refreshed; each call appends a new ticket snapshot.
        """
        order_no = request.order_no

        result = self._db.execute(
            update(Order)
            .where(Order.order_no == order_no)
            .values(
                table_id=request.table_id,
                table_no=request.table_no,
                seat_id=header_seat_id(request.selected_seats),
                customer_id=customer_id,
                customer_name=request.cust_name or "",
                contact=request.contact or "",
                address=request.address or "",
                flat=request.flat_no or "",
            )
        )
        if result.rowcount == 0:
            logger.warning("Kitchen ticket for unknown order", order_no=order_no)

        source = resolve_seat_source(request.selected_seats, self._settings.counter_name)
        if isinstance(source, ExplicitSeats):
            self._seats.occupy(request.table_id, source.seat_ids)
        elif request.table_id:
            self._seats.mark_table_in_use(request.table_id)

        ticket = KotOrder(
            order_no=order_no,
            sold=SoldFlag.NO,
            **_header_values(request, customer_id),
        )
        self._db.add(ticket)
        self._db.flush()

        for item in request.items:
            self._db.add(KotOrderLine(kot_id=ticket.id, order_no=order_no, **_line_values(item)))
        self._db.flush()

        logger.info(
            "Kitchen ticket created",
            order_no=order_no,
            kot_id=ticket.id,
            lines=len(request.items),
        )

        self._printing.assign(order_no, request.items, TicketType.KOT, self._settings.kot_printer)
        return order_no

    # =========================================================================
    # Lines
    # =========================================================================

    def _insert_lines(self, order_no: int, items: list[OrderItemInput]) -> None:
        for item in items:
            self._db.add(OrderLine(order_no=order_no, **_line_values(item)))
        self._db.flush()
        logger.debug("Order lines written", order_no=order_no, lines=len(items))
