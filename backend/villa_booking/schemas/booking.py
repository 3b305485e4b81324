"""Pydantic v2 request/response schemas for the guest booking flow."""

from decimal import Decimal

from pydantic import EmailStr, Field, field_validator

from villa_booking.schemas.pricing import (
    CamelModel,
    CostBreakdownOut,
    CostLineOut,
    DateRange,
    DiscountLineOut,
    NextDiscountOut,
)

# ---------------------------------------------------------------------------
# Request schemas
# ---------------------------------------------------------------------------


class GuestParty(CamelModel):
    adults: int = Field(1, ge=1, le=30)
    kids: int = Field(0, ge=0, le=30)
    babies: int = Field(0, ge=0, le=30)

    @property
    def total(self) -> int:
        return self.adults + self.kids + self.babies


class BookingRequestCreate(CamelModel):
    """Booking request sent by a guest from the booking page."""

    name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr
    phone: str = Field(..., min_length=1, max_length=50)
    message: str | None = Field(None, max_length=5000)
    guests: GuestParty = Field(default_factory=GuestParty)
    date_range: DateRange

    @field_validator("name", "phone")
    @classmethod
    def strip_required(cls, value: str) -> str:
        value = value.strip()
        if not value:
            raise ValueError("must not be blank")
        return value

    @field_validator("message")
    @classmethod
    def strip_message(cls, value: str | None) -> str | None:
        if value is None:
            return None
        return value.strip() or None


# ---------------------------------------------------------------------------
# Response schemas
# ---------------------------------------------------------------------------


class BookingQuoteResponse(CamelModel):
    """Live price for a selected range, plus the next-tier upsell."""

    date_range: DateRange
    breakdown: CostBreakdownOut
    next_discount: NextDiscountOut | None = None


class BookingTotals(CamelModel):
    subtotal: Decimal
    total_discount: Decimal
    cleaning_cost: Decimal
    total_after_discount: Decimal


class BookingSummary(CamelModel):
    """Summary e-mailed to the owner and echoed back to the guest."""

    cost_lines: list[CostLineOut]
    discount_lines: list[DiscountLineOut]
    totals: BookingTotals
    date_range: DateRange


class BookingRequestResponse(CamelModel):
    ok: bool = True
    summary: BookingSummary
