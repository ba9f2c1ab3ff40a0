"""
Held (draft) order models: HeldOrder, HeldOrderLine.

A register can park an order before finalizing it. Once the real order
is saved, the parked copy is purged.
"""

from __future__ import annotations

from sqlalchemy import ForeignKey
from sqlalchemy.orm import Mapped, mapped_column, relationship

from .base import Base, IdType, OrderHeaderFieldsMixin, OrderLineFieldsMixin, TimestampMixin


class HeldOrder(OrderHeaderFieldsMixin, TimestampMixin, Base):
    __tablename__ = "held_order_header"

    order_no: Mapped[int] = mapped_column(IdType, primary_key=True, autoincrement=False)

    lines: Mapped[list["HeldOrderLine"]] = relationship(back_populates="held_order")


class HeldOrderLine(OrderLineFieldsMixin, Base):
    __tablename__ = "held_order_line"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    order_no: Mapped[int] = mapped_column(
        IdType, ForeignKey("held_order_header.order_no"), nullable=False, index=True
    )

    held_order: Mapped["HeldOrder"] = relationship(back_populates="lines")
