"""
Customer Model.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, Index, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, IdType, TimestampMixin


class Customer(TimestampMixin, Base):
    """
    Customer master record, created or reused while processing orders.

    Identity is (name, normalized 10-digit contact). The contact may live in
    either of two legacy columns, ``contact_no`` or ``phone``; lookups match
    both.
    """

    __tablename__ = "customer"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    address: Mapped[str] = mapped_column(Text, default="")
    contact_no: Mapped[Optional[str]] = mapped_column(Text)
    phone: Mapped[Optional[str]] = mapped_column(Text)
    fax: Mapped[Optional[str]] = mapped_column(Text)  # Flat/unit number, historically stored here
    email: Mapped[Optional[str]] = mapped_column(Text)
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False, index=True)

    __table_args__ = (
        Index("ix_customer_name_contact_no", "name", "contact_no"),
        Index("ix_customer_name_phone", "name", "phone"),
    )

    def __repr__(self) -> str:
        return f"<Customer(id={self.id}, name='{self.name}', active={self.is_active})>"
