"""
Infrastructure module: database sessions and request correlation.

Provides:
- Engine, session factory and transaction helpers (db.py)
- Request id propagation for logs (correlation.py)
"""

from shared.infrastructure.db import (
    engine,
    SessionLocal,
    get_db,
    get_db_context,
    safe_commit,
)

__all__ = [
    "engine",
    "SessionLocal",
    "get_db",
    "get_db_context",
    "safe_commit",
]
