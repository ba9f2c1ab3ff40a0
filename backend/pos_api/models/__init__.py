"""
SQLAlchemy ORM Models Package.

All models are organized into domain-specific modules:
- base: Base class, column types, shared header/line mixins
- order: Order, OrderLine, OrderSequence
- kitchen: KotOrder, KotOrderLine
- held_order: HeldOrder, HeldOrderLine
- customer: Customer
- table: Table, Seat, OrderSeatAssignment, StagedSeat
- printing: PrinterAssignment
- catalog: MenuItem
"""

# Base classes
from .base import Base, TimestampMixin

# Orders
from .order import Order, OrderLine, OrderSequence

# Kitchen tickets
from .kitchen import KotOrder, KotOrderLine

# Draft orders
from .held_order import HeldOrder, HeldOrderLine

# Customers
from .customer import Customer

# Tables and seats
from .table import Table, Seat, OrderSeatAssignment, StagedSeat

# Printer routing
from .printing import PrinterAssignment

# Catalog
from .catalog import MenuItem

__all__ = [
    # Base
    "Base",
    "TimestampMixin",
    # Order
    "Order",
    "OrderLine",
    "OrderSequence",
    # Kitchen
    "KotOrder",
    "KotOrderLine",
    # Held orders
    "HeldOrder",
    "HeldOrderLine",
    # Customer
    "Customer",
    # Table
    "Table",
    "Seat",
    "OrderSeatAssignment",
    "StagedSeat",
    # Printing
    "PrinterAssignment",
    # Catalog
    "MenuItem",
]
