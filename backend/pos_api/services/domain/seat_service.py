"""
Seat/Table Occupancy Manager.

Dine-in orders claim seats in one of two ways:

- ``ExplicitSeats``: the register sent the seat ids the guests sit on.
- ``StagedSeatsForCounter``: older registers stage seats under their counter
  label before the order exists; those rows are converted into seat
  assignments and then removed.

The choice is made once by ``resolve_seat_source`` and every caller works
with the resulting value.
"""

from __future__ import annotations

import re
from collections.abc import Iterable, Sequence
from dataclasses import dataclass
from typing import Any, Union

from sqlalchemy import delete, func, select, update
from sqlalchemy.orm import Session

from shared.config.constants import SeatAssignmentStatus, SeatStatus, TableStatus
from shared.config.logging import get_logger
from pos_api.models import OrderSeatAssignment, Seat, StagedSeat, Table

logger = get_logger(__name__)

_DIGITS = re.compile(r"[0-9]+")


@dataclass(frozen=True)
class ExplicitSeats:
    seat_ids: tuple[int, ...]


@dataclass(frozen=True)
class StagedSeatsForCounter:
    counter: str


SeatSource = Union[ExplicitSeats, StagedSeatsForCounter]


def _as_seat_id(value: Any) -> int | None:
    if isinstance(value, bool):
        return None
    if isinstance(value, int):
        seat_id = value
    else:
        text = str(value).strip()
        if not _DIGITS.fullmatch(text):
            return None
        seat_id = int(text)
    return seat_id if seat_id > 0 else None


def parse_seat_ids(values: Iterable[Any] | None) -> list[int]:
    """Positive integer seat ids in submission order; anything else is skipped."""
    seat_ids: list[int] = []
    for value in values or ():
        seat_id = _as_seat_id(value)
        if seat_id is not None and seat_id not in seat_ids:
            seat_ids.append(seat_id)
    return seat_ids


def header_seat_id(selected_seats: Sequence[Any] | None) -> int | None:
    """Seat stored on the order header: the first submitted seat, if valid."""
    if not selected_seats:
        return None
    return _as_seat_id(selected_seats[0])


def resolve_seat_source(selected_seats: Sequence[Any] | None, counter: str) -> SeatSource:
    """Explicit seats when the register sent any, otherwise the counter's staged seats."""
    if selected_seats:
        return ExplicitSeats(tuple(parse_seat_ids(selected_seats)))
    return StagedSeatsForCounter(counter)


class SeatOccupancyManager:
    """Marks seats and tables occupied and records which order holds which seat."""

    def __init__(self, db: Session, counter: str):
        self._db = db
        self._counter = counter

    # =========================================================================
    # Seat claims
    # =========================================================================

    def claim(self, order_no: int, table_id: int, source: SeatSource) -> list[OrderSeatAssignment]:
        """
        Occupy the seats from ``source`` and record them against the order.

        Explicit seat ids that do not belong to ``table_id`` are ignored.
        Labels always come from the seat master.
        """
        if isinstance(source, ExplicitSeats):
            assignments = self._claim_explicit(order_no, table_id, source.seat_ids)
        else:
            assignments = self._claim_staged(order_no, source.counter)

        self._db.flush()
        logger.info(
            "Seats claimed",
            order_no=order_no,
            table_id=table_id,
            source=type(source).__name__,
            seat_ids=[a.seat_id for a in assignments],
        )
        return assignments

    def _claim_explicit(
        self, order_no: int, table_id: int, seat_ids: Sequence[int]
    ) -> list[OrderSeatAssignment]:
        assignments = []
        for seat_id in seat_ids:
            self._set_seat_status(seat_id, table_id, SeatStatus.OCCUPIED)

            seat = self._db.scalar(
                select(Seat).where(Seat.id == seat_id, Seat.table_id == table_id)
            )
            if seat is None:
                logger.warning("Seat not on table, skipped", seat_id=seat_id, table_id=table_id)
                continue

            assignment = OrderSeatAssignment(
                order_no=order_no,
                seat_id=seat.id,
                table_id=seat.table_id,
                seat_label=seat.label,
                status=SeatAssignmentStatus.ACTIVE,
                counter=self._counter,
            )
            self._db.add(assignment)
            assignments.append(assignment)
        return assignments

    def _claim_staged(self, order_no: int, counter: str) -> list[OrderSeatAssignment]:
        staged_seats = self._db.scalars(
            select(StagedSeat).where(StagedSeat.counter == counter).order_by(StagedSeat.id)
        ).all()

        assignments = []
        for staged in staged_seats:
            assignment = OrderSeatAssignment(
                order_no=order_no,
                seat_id=staged.seat_id,
                table_id=staged.table_id,
                seat_label=staged.seat_label,
                status=SeatAssignmentStatus.ACTIVE,
                counter=counter,
            )
            self._db.add(assignment)
            assignments.append(assignment)
            self._set_seat_status(staged.seat_id, staged.table_id, SeatStatus.OCCUPIED)

        self._db.execute(delete(StagedSeat).where(StagedSeat.counter == counter))
        return assignments

    def reassign(self, order_no: int, table_id: int, seat_ids: Sequence[int]) -> list[OrderSeatAssignment]:
        """
        Replace an order's seats: free every seat on the table, drop the
        order's assignments, then claim ``seat_ids`` again.
        """
        if table_id:
            self._db.execute(
                update(Seat).where(Seat.table_id == table_id).values(status=SeatStatus.FREE)
            )
        self._db.execute(
            delete(OrderSeatAssignment).where(OrderSeatAssignment.order_no == order_no)
        )
        return self.claim(order_no, table_id, ExplicitSeats(tuple(seat_ids)))

    def occupy(self, table_id: int, seat_ids: Sequence[int]) -> None:
        """Mark seats occupied without recording assignments (kitchen tickets)."""
        for seat_id in seat_ids:
            self._set_seat_status(seat_id, table_id, SeatStatus.OCCUPIED)
        logger.debug("Seats occupied", table_id=table_id, seat_ids=list(seat_ids))

    def _set_seat_status(self, seat_id: int, table_id: int, status: int) -> None:
        self._db.execute(
            update(Seat)
            .where(Seat.id == seat_id, Seat.table_id == table_id)
            .values(status=status)
        )

    # =========================================================================
    # Table status
    # =========================================================================

    def mark_table_in_use(self, table_id: int) -> None:
        self._set_table_status(table_id, TableStatus.PARTIALLY_OCCUPIED)

    def refresh_table_status(self, table_id: int) -> int:
        """
        Partially occupied while any seat on the table is free, fully
        occupied otherwise. Returns the status written.
        """
        free_seats = self._db.scalar(
            select(func.count(Seat.id)).where(
                Seat.table_id == table_id,
                Seat.status == SeatStatus.FREE,
            )
        ) or 0

        status = TableStatus.PARTIALLY_OCCUPIED if free_seats else TableStatus.FULLY_OCCUPIED
        self._set_table_status(table_id, status)
        logger.debug("Table status refreshed", table_id=table_id, status=status, free_seats=free_seats)
        return status

    def _set_table_status(self, table_id: int, status: int) -> None:
        self._db.execute(update(Table).where(Table.id == table_id).values(status=status))
