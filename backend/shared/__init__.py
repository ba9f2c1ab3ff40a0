"""
Shared module for infrastructure used by the POS order API.

STRUCTURE:
- shared.infrastructure: Database and request correlation
  - db.py: SQLAlchemy engine, sessions, safe_commit()
  - correlation.py: X-Request-ID middleware and log filter

- shared.config: Configuration
  - settings.py: Environment config (Pydantic)
  - logging.py: Structured logging
  - constants.py: OrderStatus, OrderOption, SeatStatus, TableStatus

- shared.utils: Utilities
  - exceptions.py: HTTP exceptions with auto-logging, database error translation
  - order_schemas.py: Order submission variants and result descriptor

IMPORT EXAMPLES:
    from shared.infrastructure.db import get_db, safe_commit
    from shared.config.settings import settings
    from shared.config.constants import OrderStatus, OrderOption
    from shared.utils.exceptions import OrderNotFoundError, translate_database_error
    from shared.utils.order_schemas import parse_order_submission
"""
