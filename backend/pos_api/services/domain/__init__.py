"""
Domain Services - order processing core.

Structure:
    Router (thin controller)
        ↓
    OrderService (transaction coordinator)  ← commits / rolls back
        ↓
    CustomerResolver, OrderPersistenceEngine
        ↓
    OrderNumberAllocator, SeatOccupancyManager, PrintRoutingAssigner
        ↓
    Model (entity)

Usage:
    from pos_api.services.domain import OrderService

    # In router
    result = OrderService(db).process_order(body)
"""

from .order_number import OrderNumberAllocator
from .customer_service import CustomerResolver, normalize_contact
from .seat_service import (
    ExplicitSeats,
    StagedSeatsForCounter,
    SeatOccupancyManager,
    header_seat_id,
    parse_seat_ids,
    resolve_seat_source,
)
from .print_routing import PrintRoutingAssigner
from .order_persistence import OrderPersistenceEngine
from .order_service import OrderService

__all__ = [
    "OrderNumberAllocator",
    "CustomerResolver",
    "normalize_contact",
    "ExplicitSeats",
    "StagedSeatsForCounter",
    "SeatOccupancyManager",
    "header_seat_id",
    "parse_seat_ids",
    "resolve_seat_source",
    "PrintRoutingAssigner",
    "OrderPersistenceEngine",
    "OrderService",
]
