"""
Table and Seat Models: Table, Seat, OrderSeatAssignment, StagedSeat.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import SeatAssignmentStatus, SeatStatus, TableStatus
from .base import Base, IdType

if TYPE_CHECKING:
    from .order import Order


class Table(Base):
    """
    Physical table on a floor.
    Status is recomputed from its seats whenever a dine-in order claims seats.
    """

    # "table" is a reserved SQL keyword
    __tablename__ = "restaurant_table"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    floor: Mapped[Optional[str]] = mapped_column(Text)
    code: Mapped[str] = mapped_column(Text, nullable=False)
    name: Mapped[str] = mapped_column(Text, default="")
    capacity: Mapped[int] = mapped_column(Integer, default=4)
    remarks: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[int] = mapped_column(Integer, default=TableStatus.FREE, index=True)

    seats: Mapped[list["Seat"]] = relationship(back_populates="table", order_by="Seat.id")

    def __repr__(self) -> str:
        return f"<Table(id={self.id}, code='{self.code}', status={self.status})>"


class Seat(Base):
    """A seat belonging to one table. Status 0 = free, 1 = occupied."""

    __tablename__ = "seat"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    table_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("restaurant_table.id"), nullable=False, index=True
    )
    label: Mapped[str] = mapped_column(Text, nullable=False)  # "A", "Seat 3"
    remarks: Mapped[Optional[str]] = mapped_column(Text)
    status: Mapped[int] = mapped_column(Integer, default=SeatStatus.FREE)

    table: Mapped["Table"] = relationship(back_populates="seats")

    __table_args__ = (
        Index("ix_seat_table_status", "table_id", "status"),
    )

    def __repr__(self) -> str:
        return f"<Seat(id={self.id}, table_id={self.table_id}, label='{self.label}', status={self.status})>"


class OrderSeatAssignment(Base):
    """
    Which seats an order claimed at submission time.
    Labels are copied from the seat master, never from the client.
    """

    __tablename__ = "order_seat"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    order_no: Mapped[int] = mapped_column(
        IdType, ForeignKey("order_header.order_no"), nullable=False, index=True
    )
    seat_id: Mapped[int] = mapped_column(IdType, nullable=False)
    table_id: Mapped[int] = mapped_column(IdType, nullable=False)
    seat_label: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[int] = mapped_column(Integer, default=SeatAssignmentStatus.ACTIVE)
    counter: Mapped[str] = mapped_column(Text, default="")

    order: Mapped["Order"] = relationship(back_populates="seat_assignments")


class StagedSeat(Base):
    """
    Seat picked at a register before the order exists (legacy flow).
    Consumed when a dine-in order is saved without an explicit seat list.
    """

    __tablename__ = "staged_seat"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    counter: Mapped[str] = mapped_column(Text, nullable=False, index=True)
    seat_id: Mapped[int] = mapped_column(IdType, nullable=False)
    table_id: Mapped[int] = mapped_column(IdType, nullable=False)
    seat_label: Mapped[str] = mapped_column(Text, default="")
    status: Mapped[int] = mapped_column(Integer, default=SeatStatus.FREE)
