"""
Order Models: Order, OrderLine, OrderSequence.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Optional

from sqlalchemy import ForeignKey, Index, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import SoldFlag
from .base import (
    Base,
    IdType,
    OrderHeaderFieldsMixin,
    OrderLineFieldsMixin,
    TimestampMixin,
)

if TYPE_CHECKING:
    from .table import OrderSeatAssignment


class Order(OrderHeaderFieldsMixin, TimestampMixin, Base):
    """
    Order header.

    Created on NEW, rewritten in place on UPDATED while not sold. The
    order number is assigned by the allocator, never by the database.
    """

    __tablename__ = "order_header"

    order_no: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=False)
    seat_id: Mapped[Optional[int]] = mapped_column(IdType, nullable=True)
    # "Yes" once the bill is settled; seats and table are frozen from then on
    sold: Mapped[str] = mapped_column(Text, default=SoldFlag.NO, nullable=False)
    prefix: Mapped[str] = mapped_column(Text, default="")
    prefixed_no: Mapped[str] = mapped_column(Text, default="")  # prefix + order_no

    lines: Mapped[list["OrderLine"]] = relationship(
        back_populates="order", order_by="OrderLine.sl_no"
    )
    seat_assignments: Mapped[list["OrderSeatAssignment"]] = relationship(back_populates="order")

    __table_args__ = (
        # Re-derivation of the order number after insert
        Index("ix_order_header_date_time_customer", "entry_date", "entry_time", "customer_id"),
    )

    @property
    def is_sold(self) -> bool:
        return self.sold == SoldFlag.YES

    def __repr__(self) -> str:
        return f"<Order(order_no={self.order_no}, status='{self.status}', sold='{self.sold}')>"


class OrderLine(OrderLineFieldsMixin, Base):
    """
    A single billed line of an order. Replaced wholesale on UPDATED.
    """

    __tablename__ = "order_line"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    order_no: Mapped[int] = mapped_column(
        IdType, ForeignKey("order_header.order_no"), nullable=False, index=True
    )

    order: Mapped["Order"] = relationship(back_populates="lines")

    __table_args__ = (
        UniqueConstraint("order_no", "sl_no", name="uq_order_line_order_sl_no"),
    )


class OrderSequence(Base):
    """
    Single-row counter per sequence name.

    Incremented under a row lock inside the order transaction, so a rolled
    back submission also rolls back its number.
    """

    __tablename__ = "order_sequence"

    name: Mapped[str] = mapped_column(Text, primary_key=True)
    last_value: Mapped[int] = mapped_column(IdType, default=0, nullable=False)

    def __repr__(self) -> str:
        return f"<OrderSequence(name='{self.name}', last_value={self.last_value})>"
