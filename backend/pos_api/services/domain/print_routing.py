"""
Print Routing Assigner.

Decides which printer each line of an order (or kitchen ticket) goes to.
Sending anything to a printer happens elsewhere.
"""

from __future__ import annotations

from collections.abc import Sequence

from sqlalchemy import delete, select, update
from sqlalchemy.orm import Session

from shared.config.logging import get_logger
from shared.utils.order_schemas import OrderItemInput
from pos_api.models import MenuItem, PrinterAssignment

logger = get_logger(__name__)


class PrintRoutingAssigner:
    def __init__(self, db: Session):
        self._db = db

    def printer_for(self, item_code: int) -> str:
        """Printer configured on the menu item, or "" when there is none."""
        label = self._db.scalar(select(MenuItem.printer_name).where(MenuItem.id == item_code))
        return (label or "").strip()

    def assign(
        self,
        order_no: int,
        items: Sequence[OrderItemInput],
        ticket_type: str,
        default_label: str,
    ) -> int:
        """
        Rebuild the printer assignments of one ticket type for an order.

        Each line first gets its item's own printer (possibly blank); one
        bulk update then points every blank row at ``default_label``.
        Returns the number of rows written.
        """
        self._db.execute(
            delete(PrinterAssignment).where(
                PrinterAssignment.order_no == order_no,
                PrinterAssignment.ticket_type == ticket_type,
            )
        )

        for item in items:
            self._db.add(
                PrinterAssignment(
                    order_no=order_no,
                    ticket_type=ticket_type,
                    sl_no=item.sl_no,
                    item_id=item.item_code,
                    printer=self.printer_for(item.item_code),
                )
            )
        self._db.flush()

        defaulted = self._db.execute(
            update(PrinterAssignment)
            .where(
                PrinterAssignment.order_no == order_no,
                PrinterAssignment.ticket_type == ticket_type,
                PrinterAssignment.printer == "",
            )
            .values(printer=default_label)
        ).rowcount

        logger.debug(
            "Printer routing assigned",
            order_no=order_no,
            ticket_type=ticket_type,
            lines=len(items),
            defaulted=defaulted,
        )
        return len(items)
