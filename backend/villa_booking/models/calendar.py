"""Calendar models: per-date price overrides and global pricing settings."""

from datetime import date, datetime
from decimal import Decimal

from sqlalchemy import JSON, Boolean, Date, Integer, Numeric, func
from sqlalchemy.orm import Mapped, mapped_column

from villa_booking.database import Base


class CalendarDay(Base):
    """Sparse override for one night: a nightly price and/or availability.

    A missing row, or a row with ``cost`` NULL, means the default nightly cost
    applies. ``available`` NULL means available.
    """

    __tablename__ = "calendar_days"

    day: Mapped[date] = mapped_column(Date, primary_key=True)
    cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    available: Mapped[bool | None] = mapped_column(Boolean, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<CalendarDay(day={self.day}, cost={self.cost}, available={self.available})>"


class PricingSettings(Base):
    """Single-row table holding the year-independent pricing configuration."""

    __tablename__ = "pricing_settings"

    SINGLETON_ID = 1

    id: Mapped[int] = mapped_column(Integer, primary_key=True, default=SINGLETON_ID)
    default_cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    cleaning_cost: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    security_deposit: Mapped[Decimal | None] = mapped_column(Numeric(10, 2), nullable=True)
    # {"4": 10, "5": 15, "6": 20, "7": 25}
    discounts: Mapped[dict | None] = mapped_column(JSON, nullable=True)
    updated_at: Mapped[datetime] = mapped_column(
        server_default=func.now(),
        onupdate=func.now(),
    )

    def __repr__(self) -> str:
        return f"<PricingSettings(default_cost={self.default_cost}, discounts={self.discounts})>"
