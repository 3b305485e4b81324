"""Pricing & discount engine shared by the booking and quote flows."""

from villa_booking.pricing.engine import compute_cost_breakdown, discount_chunks
from villa_booking.pricing.projection import project_next_discount
from villa_booking.pricing.selection import RangeSelector, SelectionState, find_unavailable, select_range
from villa_booking.pricing.types import (
    TIER_SIZES,
    CalendarSnapshot,
    CostBreakdown,
    CostLine,
    DiscountLine,
    NextDiscount,
    round_money,
)

__all__ = [
    "TIER_SIZES",
    "CalendarSnapshot",
    "CostBreakdown",
    "CostLine",
    "DiscountLine",
    "NextDiscount",
    "RangeSelector",
    "SelectionState",
    "compute_cost_breakdown",
    "discount_chunks",
    "find_unavailable",
    "project_next_discount",
    "round_money",
    "select_range",
]
