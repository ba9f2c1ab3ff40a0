"""
Database configuration and session management.

This is the connection provider for the order core: it owns the engine and
the session factory, and hands out sessions. The Transaction Coordinator
receives a session explicitly instead of reaching into shared pool state.
"""

from collections.abc import Generator
from contextlib import contextmanager
from typing import Any

from sqlalchemy import create_engine
from sqlalchemy.engine import make_url
from sqlalchemy.orm import sessionmaker, Session

from shared.config.settings import settings


def _engine_options(database_url: str) -> dict[str, Any]:
    """
    Pool and timeout options for the configured backend.

    SQLite (tests, local demos) has no server-side pool or connect timeout,
    so it only gets pre-ping.
    """
    if make_url(database_url).get_backend_name() == "sqlite":
        return {
            "pool_pre_ping": True,
            "connect_args": {"check_same_thread": False},
        }

    return {
        "pool_pre_ping": True,  # Verify connections before using
        "pool_size": settings.db_pool_size,
        "max_overflow": settings.db_max_overflow,
        "pool_timeout": settings.db_pool_timeout,
        "pool_recycle": settings.db_pool_recycle,
        "connect_args": {"connect_timeout": settings.db_connect_timeout},
    }


engine = create_engine(
    settings.database_url,
    echo=False,  # Set to True for SQL logging in development
    **_engine_options(settings.database_url),
)

# Session factory
SessionLocal = sessionmaker(
    bind=engine,
    autoflush=False,
    autocommit=False,
)


def get_db() -> Generator[Session, None, None]:
    """
    FastAPI dependency for database sessions.

    Usage:
        @router.post("/orders")
        def save_order(body: dict, db: Session = Depends(get_db)):
            return OrderService(db).process_order(body)

    The session is automatically closed after the request completes.
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


@contextmanager
def get_db_context() -> Generator[Session, None, None]:
    """
    Context manager for database sessions outside of FastAPI.

    Usage:
        with get_db_context() as db:
            OrderService(db).latest_order_number()
    """
    db = SessionLocal()
    try:
        yield db
    finally:
        db.close()


def safe_commit(db: Session) -> None:
    """
    Commit with automatic rollback on failure.

    Raises the original exception after rolling back.
    """
    try:
        db.commit()
    except Exception:
        db.rollback()
        raise
