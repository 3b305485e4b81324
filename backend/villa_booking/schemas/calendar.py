"""Pydantic v2 request/response schemas for calendar endpoints."""

from datetime import date
from decimal import Decimal

from pydantic import Field, field_validator, model_validator

from villa_booking.pricing.selection import select_range
from villa_booking.pricing.types import TIER_SIZES, CalendarSnapshot
from villa_booking.schemas.pricing import CamelModel

# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class CalendarResponse(CamelModel):
    """Pricing snapshot for one calendar year."""

    year: int
    default_cost: Decimal
    cleaning_cost: Decimal
    security_deposit: Decimal
    prices: dict[date, Decimal]
    availability: dict[date, bool]
    discounts: dict[str, Decimal]

    @classmethod
    def from_snapshot(cls, snapshot: CalendarSnapshot) -> "CalendarResponse":
        return cls(
            year=snapshot.year,
            default_cost=snapshot.default_cost,
            cleaning_cost=snapshot.cleaning_cost,
            security_deposit=snapshot.security_deposit,
            prices=dict(snapshot.prices),
            availability=dict(snapshot.availability),
            discounts={str(size): pct for size, pct in sorted(snapshot.discount_tiers.items())},
        )


class CalendarWriteResponse(CamelModel):
    ok: bool = True
    updated: int = 0


# ---------------------------------------------------------------------------
# Admin request schemas
# ---------------------------------------------------------------------------


class CalendarDaysUpdate(CamelModel):
    """Set a nightly price and/or availability on a set of dates.

    Dates are given either as an explicit list or as an inclusive
    ``start``/``end`` range.
    """

    dates: list[date] | None = None
    start: date | None = None
    end: date | None = None
    cost: Decimal | None = Field(None, ge=0)
    available: bool | None = None

    @model_validator(mode="after")
    def check_payload(self) -> "CalendarDaysUpdate":
        """Require a date selection and at least one field to write."""
        if not self.dates and (self.start is None or self.end is None):
            raise ValueError("Provide dates or both start and end")
        if self.cost is None and self.available is None:
            raise ValueError("Provide cost and/or available")
        return self

    def selected_days(self) -> list[date]:
        if self.dates:
            return sorted(set(self.dates))
        return select_range(self.start, self.end)


class BaseCostsUpdate(CamelModel):
    """Partial update of the default nightly cost, cleaning fee and deposit."""

    default_cost: Decimal | None = Field(None, ge=0)
    cleaning_cost: Decimal | None = Field(None, ge=0)
    security_deposit: Decimal | None = Field(None, ge=0)

    @model_validator(mode="after")
    def check_not_empty(self) -> "BaseCostsUpdate":
        if self.default_cost is None and self.cleaning_cost is None and self.security_deposit is None:
            raise ValueError("Provide at least one of defaultCost, cleaningCost, securityDeposit")
        return self


class DiscountsUpdate(CamelModel):
    """Discount percent per tier size, e.g. ``{"tiers": {"4": 10, "7": 25}}``."""

    tiers: dict[int, Decimal] = Field(..., min_length=1)

    @field_validator("tiers")
    @classmethod
    def check_tiers(cls, value: dict[int, Decimal]) -> dict[int, Decimal]:
        for size, percent in value.items():
            if size not in TIER_SIZES:
                raise ValueError(f"Tier size must be one of {list(TIER_SIZES)}, got {size}")
            if percent < 0 or percent > 100:
                raise ValueError(f"Discount percent for tier {size} must be between 0 and 100")
        return value
