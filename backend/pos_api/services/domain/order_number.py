"""
Order Number Allocator.

Numbers come from a single-row counter in ``order_sequence`` that is
incremented under a row lock inside the caller's transaction. The counter
never falls behind ``MAX(order_no)``, so databases that already hold orders
continue from their highest number.
"""

from sqlalchemy import func, select
from sqlalchemy.orm import Session

from shared.config.constants import ORDER_SEQUENCE
from shared.config.logging import get_logger
from pos_api.models import Order, OrderSequence

logger = get_logger(__name__)


class OrderNumberAllocator:
    """Hands out strictly sequential, gap-free order numbers."""

    def __init__(self, db: Session, sequence_name: str = ORDER_SEQUENCE):
        self._db = db
        self._sequence_name = sequence_name

    def current_max(self) -> int:
        """Highest order number stored, or 0 when there are no orders."""
        return self._db.scalar(select(func.max(Order.order_no))) or 0

    def peek_next(self) -> int:
        """
        The number the next NEW order will most likely receive.

        Read-only: nothing is reserved, so two registers may see the same value.
        """
        last_value = self._db.scalar(
            select(OrderSequence.last_value).where(OrderSequence.name == self._sequence_name)
        )
        return max(last_value or 0, self.current_max()) + 1

    def allocate(self) -> int:
        """
        Reserve the next order number.

        The counter row is locked until the surrounding transaction ends, so
        concurrent submissions queue here instead of computing the same number.
        A rollback releases the number again.
        """
        counter = self._db.scalar(
            select(OrderSequence)
            .where(OrderSequence.name == self._sequence_name)
            .with_for_update()
        )
        floor = self.current_max()

        if counter is None:
            counter = OrderSequence(name=self._sequence_name, last_value=floor)
            self._db.add(counter)

        next_value = max(counter.last_value or 0, floor) + 1
        counter.last_value = next_value
        self._db.flush()

        logger.debug("Order number allocated", order_no=next_value, sequence=self._sequence_name)
        return next_value
