"""
Printer routing model.
"""

from __future__ import annotations

from sqlalchemy import Index, Integer, Text
from sqlalchemy.orm import Mapped, mapped_column

from shared.config.constants import TicketType
from .base import Base, IdType


class PrinterAssignment(Base):
    """
    Destination printer label for one line of an order or kitchen ticket.
    Recomputed from scratch (delete + reinsert) whenever lines change.
    """

    __tablename__ = "printer_assignment"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    order_no: Mapped[int] = mapped_column(IdType, nullable=False)
    ticket_type: Mapped[str] = mapped_column(Text, default=TicketType.ORDER, nullable=False)
    sl_no: Mapped[int] = mapped_column(Integer, nullable=False)
    item_id: Mapped[int] = mapped_column(IdType, nullable=False)
    printer: Mapped[str] = mapped_column(Text, default="", nullable=False)

    __table_args__ = (
        Index("ix_printer_assignment_order_type", "order_no", "ticket_type"),
    )

    def __repr__(self) -> str:
        return (
            f"<PrinterAssignment(order_no={self.order_no}, type={self.ticket_type}, "
            f"sl_no={self.sl_no}, printer='{self.printer}')>"
        )
