"""
Pytest configuration and fixtures for backend tests.
"""

import os

# The application engine is built at import time; keep it off PostgreSQL
os.environ.setdefault("DATABASE_URL", "sqlite://")

import itertools
from decimal import Decimal

import pytest
from fastapi.testclient import TestClient
from sqlalchemy import create_engine
from sqlalchemy.orm import sessionmaker
from sqlalchemy.pool import StaticPool

from pos_api.main import app
from shared.config.settings import Settings
from shared.infrastructure.db import get_db
from pos_api.models import Base, Customer, MenuItem, Order, Seat, Table
from shared.config.constants import SeatStatus, TableStatus


# ID counter for explicitly numbered master data
_id_counter = itertools.count(1000)


# SQLite in-memory database for testing
SQLALCHEMY_DATABASE_URL = "sqlite:///:memory:"

engine = create_engine(
    SQLALCHEMY_DATABASE_URL,
    connect_args={"check_same_thread": False},
    poolclass=StaticPool,
)
TestingSessionLocal = sessionmaker(autocommit=False, autoflush=False, bind=engine)


@pytest.fixture(scope="function")
def db_session():
    """
    Create a fresh database session for each test.
    Uses SQLite in-memory for isolation.
    """
    # Create all tables
    Base.metadata.create_all(bind=engine)

    session = TestingSessionLocal()
    try:
        yield session
    finally:
        session.close()
        # Drop all tables after test
        Base.metadata.drop_all(bind=engine)


@pytest.fixture(scope="function")
def client(db_session):
    """
    Create a test client with database session override.
    """
    def override_get_db():
        try:
            yield db_session
        finally:
            pass

    app.dependency_overrides[get_db] = override_get_db

    with TestClient(app) as test_client:
        yield test_client

    app.dependency_overrides.clear()


@pytest.fixture
def pos_settings():
    """Settings with fixed print/counter labels, independent of the environment."""
    return Settings(
        database_url="sqlite://",
        order_printer="DefaultPrinter",
        kot_printer="KitchenPrinter",
        counter_name="Counter1",
    )


def next_id():
    """Generate a unique ID for test entities."""
    return next(_id_counter)


@pytest.fixture
def seed_table(db_session):
    """
    Table 5 with four free seats: 12 (A), 13 (B), 14 (C), 15 (D).
    """
    table = Table(id=5, floor="Ground", code="T-05", name="Table 5", capacity=4, status=TableStatus.FREE)
    db_session.add(table)
    db_session.flush()

    for seat_id, label in ((12, "A"), (13, "B"), (14, "C"), (15, "D")):
        db_session.add(Seat(id=seat_id, table_id=table.id, label=label, status=SeatStatus.FREE))

    db_session.commit()
    db_session.refresh(table)
    return table


@pytest.fixture
def seed_small_table(db_session):
    """Table 7 with exactly two seats: 21 (A), 22 (B)."""
    table = Table(id=7, floor="Terrace", code="T-07", name="Table 7", capacity=2, status=TableStatus.FREE)
    db_session.add(table)
    db_session.flush()

    for seat_id, label in ((21, "A"), (22, "B")):
        db_session.add(Seat(id=seat_id, table_id=table.id, label=label, status=SeatStatus.FREE))

    db_session.commit()
    db_session.refresh(table)
    return table


@pytest.fixture
def seed_menu_items(db_session):
    """
    Item 101 routes to the grill printer, item 102 has no printer configured.
    """
    items = [
        MenuItem(id=101, name="Shawarma Plate", printer_name="GrillPrinter"),
        MenuItem(id=102, name="Lemon Mint", printer_name=""),
    ]
    db_session.add_all(items)
    db_session.commit()
    return items


@pytest.fixture
def seed_customer(db_session):
    """Existing active customer Jane Doe / 5551234567."""
    customer = Customer(
        id=next_id(),
        name="Jane Doe",
        address="12 Palm Street",
        contact_no="5551234567",
        phone="5551234567",
        fax="4B",
        is_active=True,
    )
    db_session.add(customer)
    db_session.commit()
    db_session.refresh(customer)
    return customer


def make_order(db_session, order_no, **overrides):
    """Persist a bare order header (TakeAway, not sold)."""
    values = {
        "order_no": order_no,
        "entry_date": "2026-10-15",
        "entry_time": "20:00:00",
        "options": 3,
        "status": "TakeAway",
        "total": Decimal("10.00"),
    }
    values.update(overrides)
    order = Order(**values)
    db_session.add(order)
    db_session.commit()
    return order


def make_item(item_code=101, sl_no=1, qty="2", rate="9.5", amount="19", **extra):
    """Raw order line as the register posts it."""
    item = {
        "itemCode": item_code,
        "slNo": sl_no,
        "itemName": f"Item {item_code}",
        "qty": qty,
        "rate": rate,
        "amount": amount,
        "cost": "0",
        "vat": "5",
        "vatAmt": "0.95",
        "taxLedger": 1,
    }
    item.update(extra)
    return item


def make_payload(status="NEW", **overrides):
    """Raw order submission as the register posts it (TakeAway by default)."""
    payload = {
        "orderNo": 1,
        "status": status,
        "date": "2026-10-16",
        "time": "12:30:00",
        "option": 3,
        "custId": 0,
        "custName": "",
        "flatNo": "",
        "address": "",
        "contact": "",
        "deliveryBoyId": 0,
        "tableId": 0,
        "tableNo": "",
        "remarks": "",
        "total": str(Decimal("19.00")),
        "prefix": "",
        "items": [make_item()],
        "selectedSeats": [],
    }
    payload.update(overrides)
    return payload
