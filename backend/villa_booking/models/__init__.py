"""SQLAlchemy models for the villa booking service.

All models are imported here so that Alembic's autogenerate can discover
them via Base.metadata. If you add a new model, import it in this file.
"""

from villa_booking.models.calendar import CalendarDay, PricingSettings

__all__ = [
    "CalendarDay",
    "PricingSettings",
]
