"""
Catalog Model: MenuItem.

Only the columns the order core reads are mapped; menu maintenance is done
elsewhere.
"""

from __future__ import annotations

from typing import Optional

from sqlalchemy import Boolean, Text
from sqlalchemy.orm import Mapped, mapped_column

from .base import Base, IdType


class MenuItem(Base):
    """Item master entry with its configured kitchen/bar printer."""

    __tablename__ = "menu_item"

    id: Mapped[int] = mapped_column(IdType, primary_key=True)
    name: Mapped[str] = mapped_column(Text, nullable=False)
    printer_name: Mapped[Optional[str]] = mapped_column(Text)  # Blank = use default printer
    is_active: Mapped[bool] = mapped_column(Boolean, default=True, nullable=False)

    def __repr__(self) -> str:
        return f"<MenuItem(id={self.id}, name='{self.name}', printer='{self.printer_name}')>"
