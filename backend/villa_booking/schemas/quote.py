"""Pydantic v2 request/response schemas for admin quotes."""

from datetime import date
from decimal import Decimal
from typing import Literal

from pydantic import EmailStr, Field

from villa_booking.schemas.booking import GuestParty
from villa_booking.schemas.pricing import CamelModel, CostBreakdownOut, DateRange

QuoteLanguage = Literal["en", "es", "ru"]


class QuoteRequest(CamelModel):
    """Admin quote for a selected range and a named guest."""

    date_range: DateRange
    full_name: str = Field(..., min_length=1, max_length=255)
    email: EmailStr | None = None
    phone: str | None = Field(None, max_length=50)
    guests: GuestParty = Field(default_factory=GuestParty)
    partial_payment: Decimal = Field(Decimal("0"), ge=0)
    payment_date: date | None = None
    balance_due_date: date | None = None
    languages: list[QuoteLanguage] = Field(default_factory=lambda: ["en"], min_length=1)


class QuoteTotalsOut(CamelModel):
    accommodation: Decimal
    discount: Decimal
    cleaning: Decimal
    total: Decimal
    deposit: Decimal
    partial_payment: Decimal
    remaining_balance: Decimal
    payment_date: date | None = None
    balance_due_date: date | None = None


class QuoteResponse(CamelModel):
    date_range: DateRange
    nights: int
    guests: int
    main_guest: str
    breakdown: CostBreakdownOut
    totals: QuoteTotalsOut
