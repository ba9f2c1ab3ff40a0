"""
Customer Resolver.

Finds or creates the customer behind an order from the name and contact
number typed at the register, so repeated orders by the same person share
one customer record.
"""

from __future__ import annotations

import re

from sqlalchemy import or_, select
from sqlalchemy.orm import Session

from shared.config.constants import CONTACT_DIGITS
from shared.config.logging import get_logger, mask_phone
from pos_api.models import Customer

logger = get_logger(__name__)

_NON_DIGITS = re.compile(r"[^0-9]")


def normalize_contact(raw: str | None) -> str:
    """
    Reduce a contact number to exactly 10 digits.

    Non-digits are dropped, short numbers are left-padded with zeros and long
    ones keep their last 10 digits:

        >>> normalize_contact("+1 (234) 567-8901")
        '2345678901'
        >>> normalize_contact("555-12")
        '0000055512'
    """
    digits = _NON_DIGITS.sub("", raw or "")
    return digits.zfill(CONTACT_DIGITS)[-CONTACT_DIGITS:]


class CustomerResolver:
    """Deduplicates customers on (name, normalized contact)."""

    def __init__(self, db: Session):
        self._db = db

    def find_active(self, name: str, normalized_contact: str) -> Customer | None:
        """
        Most recent active customer with this exact name whose contact matches
        either legacy contact column.
        """
        return self._db.scalar(
            select(Customer)
            .where(
                Customer.name == name,
                or_(
                    Customer.contact_no == normalized_contact,
                    Customer.phone == normalized_contact,
                ),
                Customer.is_active.is_(True),
            )
            .order_by(Customer.id.desc())
            .limit(1)
        )

    def resolve(
        self,
        name: str | None,
        contact: str | None,
        address: str | None = None,
        flat_no: str | None = None,
        fallback_id: int = 0,
    ) -> int:
        """
        Return the customer id to store on the order header.

        Without both a name and a contact nothing is looked up and
        ``fallback_id`` (the id the register sent, or 0) is returned.
        """
        if not name or not contact:
            return fallback_id or 0

        normalized = normalize_contact(contact)
        address_line = address or flat_no or ""

        existing = self.find_active(name, normalized)
        if existing is not None:
            self._backfill(existing, normalized, address_line)
            return existing.id

        customer = Customer(
            name=name,
            address=address_line,
            contact_no=normalized,
            phone=normalized,
            fax=flat_no or "",
            is_active=True,
        )
        self._db.add(customer)
        self._db.flush()

        # Read the id back through the same lookup later orders will use
        created = self.find_active(name, normalized)
        customer_id = created.id if created is not None else customer.id

        logger.info(
            "Customer created",
            customer_id=customer_id,
            contact=mask_phone(normalized),
        )
        return customer_id

    def _backfill(self, customer: Customer, normalized: str, address_line: str) -> None:
        changed: list[str] = []

        if customer.contact_no != normalized:
            customer.contact_no = normalized
            changed.append("contact_no")
        # Second contact column is only ever filled, never overwritten
        if not customer.phone:
            customer.phone = normalized
            changed.append("phone")
        if customer.address != address_line:
            customer.address = address_line
            changed.append("address")

        if changed:
            self._db.flush()
            logger.info("Customer updated", customer_id=customer.id, fields=changed)
        else:
            logger.debug("Customer reused", customer_id=customer.id)
