"""
Tests for OrderNumberAllocator.
"""

from sqlalchemy import select

from pos_api.models import OrderSequence
from pos_api.services.domain.order_number import OrderNumberAllocator
from tests.conftest import make_order


class TestOrderNumberAllocator:
    """Sequential, gap-free order numbering."""

    def test_current_max_is_zero_without_orders(self, db_session):
        assert OrderNumberAllocator(db_session).current_max() == 0

    def test_first_allocation_is_one(self, db_session):
        allocator = OrderNumberAllocator(db_session)

        assert allocator.allocate() == 1
        assert allocator.allocate() == 2

    def test_allocation_continues_after_existing_orders(self, db_session):
        """Databases that already hold orders continue from their highest number."""
        make_order(db_session, 41)

        assert OrderNumberAllocator(db_session).allocate() == 42

    def test_counter_ahead_of_orders_wins(self, db_session):
        make_order(db_session, 41)
        db_session.add(OrderSequence(name="ORDER", last_value=50))
        db_session.commit()

        assert OrderNumberAllocator(db_session).allocate() == 51

    def test_orders_ahead_of_counter_win(self, db_session):
        """Orders written by an older register push the counter forward."""
        db_session.add(OrderSequence(name="ORDER", last_value=3))
        db_session.commit()
        make_order(db_session, 10)

        allocator = OrderNumberAllocator(db_session)
        assert allocator.allocate() == 11

        counter = db_session.scalar(select(OrderSequence).where(OrderSequence.name == "ORDER"))
        assert counter.last_value == 11

    def test_peek_does_not_reserve(self, db_session):
        make_order(db_session, 7)
        allocator = OrderNumberAllocator(db_session)

        assert allocator.peek_next() == 8
        assert allocator.peek_next() == 8
        assert allocator.allocate() == 8

    def test_rollback_returns_the_number(self, db_session):
        allocator = OrderNumberAllocator(db_session)

        assert allocator.allocate() == 1
        db_session.rollback()

        assert allocator.allocate() == 1

    def test_committed_allocation_is_kept(self, db_session):
        allocator = OrderNumberAllocator(db_session)
        allocator.allocate()
        db_session.commit()

        assert allocator.peek_next() == 2
        assert allocator.allocate() == 2

    def test_sequences_are_independent(self, db_session):
        orders = OrderNumberAllocator(db_session)
        other = OrderNumberAllocator(db_session, sequence_name="DRAFT")

        orders.allocate()
        orders.allocate()

        assert other.allocate() == 1
