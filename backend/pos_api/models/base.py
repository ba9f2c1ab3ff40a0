"""
Base class, shared column types and mixins for all SQLAlchemy ORM models.
"""

from __future__ import annotations

from datetime import datetime
from decimal import Decimal
from typing import Optional

from sqlalchemy import BigInteger, DateTime, Integer, Numeric, Text, func
from sqlalchemy.orm import DeclarativeBase, Mapped, mapped_column

# SQLite only auto-increments INTEGER PRIMARY KEY, so BIGINT degrades there
IdType = BigInteger().with_variant(Integer(), "sqlite")

# Money, quantities and tax rates as stored by the register
Money = Numeric(18, 2)


class Base(DeclarativeBase):
    """Base class for all models."""

    pass


class TimestampMixin:
    """
    Row creation/modification timestamps.

    The business date and time of an order are the register's own strings
    (entry_date / entry_time); these columns record when the row was written.
    """

    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now(), nullable=False
    )
    updated_at: Mapped[Optional[datetime]] = mapped_column(
        DateTime(timezone=True), onupdate=func.now(), nullable=True
    )


class OrderHeaderFieldsMixin:
    """
    Header columns shared by live orders, kitchen tickets and held drafts.
    """

    entry_date: Mapped[str] = mapped_column(Text, default="", nullable=False)
    entry_time: Mapped[str] = mapped_column(Text, default="", nullable=False)
    options: Mapped[int] = mapped_column(Integer, nullable=False)  # 1 Delivery, 2 DineIn, 3 TakeAway
    customer_id: Mapped[int] = mapped_column(IdType, default=0, nullable=False, index=True)
    customer_name: Mapped[str] = mapped_column(Text, default="")
    flat: Mapped[str] = mapped_column(Text, default="")
    address: Mapped[str] = mapped_column(Text, default="")
    contact: Mapped[str] = mapped_column(Text, default="")
    delivery_boy_id: Mapped[int] = mapped_column(IdType, default=0)
    table_id: Mapped[int] = mapped_column(IdType, default=0, index=True)
    table_no: Mapped[str] = mapped_column(Text, default="")
    remarks: Mapped[str] = mapped_column(Text, default="")
    total: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"))
    status: Mapped[str] = mapped_column(Text, nullable=False)  # Order type label: Order, DineIn, TakeAway


class OrderLineFieldsMixin:
    """
    Line columns shared by order lines, kitchen ticket lines and held draft lines.
    Names and prices are snapshots taken at submission time.
    """

    sl_no: Mapped[int] = mapped_column(Integer, nullable=False)
    item_code: Mapped[int] = mapped_column(IdType, nullable=False, index=True)
    item_name: Mapped[str] = mapped_column(Text, default="")
    qty: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"))
    rate: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"))
    amount: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"))
    cost: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"))
    vat: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"))
    vat_amt: Mapped[Decimal] = mapped_column(Money, default=Decimal("0"))
    tax_ledger: Mapped[int] = mapped_column(Integer, default=0)
    arabic: Mapped[str] = mapped_column(Text, default="")  # Localized item name
    notes: Mapped[str] = mapped_column(Text, default="")
