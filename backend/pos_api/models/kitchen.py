"""
Kitchen Models: KotOrder, KotOrderLine.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey, Text, UniqueConstraint
from sqlalchemy.orm import Mapped, mapped_column, relationship

from shared.config.constants import SoldFlag
from .base import (
    Base,
    IdType,
    OrderHeaderFieldsMixin,
    OrderLineFieldsMixin,
    TimestampMixin,
)


class KotOrder(OrderHeaderFieldsMixin, TimestampMixin, Base):
    """
    Kitchen order ticket: what was sent to the kitchen for an order at one
    point in time. Each KOT submission appends a new snapshot; the live
    order header and its billed lines are not replaced.
    """

    __tablename__ = "kot_header"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    # No FK: a ticket may be fired before the order itself is saved
    order_no: Mapped[int] = mapped_column(IdType, nullable=False, index=True)
    sold: Mapped[str] = mapped_column(Text, default=SoldFlag.NO, nullable=False)

    lines: Mapped[list["KotOrderLine"]] = relationship(
        back_populates="ticket", order_by="KotOrderLine.sl_no"
    )

    def __repr__(self) -> str:
        return f"<KotOrder(id={self.id}, order_no={self.order_no}, lines={len(self.lines)})>"


class KotOrderLine(OrderLineFieldsMixin, Base):
    """A line on a kitchen order ticket."""

    __tablename__ = "kot_line"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    kot_id: Mapped[int] = mapped_column(
        IdType, ForeignKey("kot_header.id"), nullable=False, index=True
    )
    order_no: Mapped[int] = mapped_column(IdType, nullable=False, index=True)

    ticket: Mapped["KotOrder"] = relationship(back_populates="lines")

    __table_args__ = (
        UniqueConstraint("kot_id", "sl_no", name="uq_kot_line_ticket_sl_no"),
    )
