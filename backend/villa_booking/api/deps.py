"""Shared API dependencies: single import point for all routers.

Re-exports the database session, admin authentication and rate-limit
dependencies so that router modules can import everything they need from
one place::

    from villa_booking.api.deps import get_db, require_admin
"""

from villa_booking.api.rate_limit import booking_rate_limit, login_rate_limit
from villa_booking.auth.dependencies import require_admin
from villa_booking.database import get_db

__all__ = [
    "get_db",
    "require_admin",
    "booking_rate_limit",
    "login_rate_limit",
]
