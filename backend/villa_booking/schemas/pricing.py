"""Pydantic v2 schemas for cost breakdowns and discount projections.

Wire names are camelCase (``costLines``, ``unitCost``, ``rangeStart``) to
match the booking and quote payloads; snake_case is accepted on input.
"""

from datetime import date
from decimal import Decimal

from pydantic import BaseModel, ConfigDict, model_validator
from pydantic.alias_generators import to_camel

from villa_booking.pricing.types import CostBreakdown, NextDiscount


class CamelModel(BaseModel):
    """Base model serialising field names as camelCase."""

    model_config = ConfigDict(
        alias_generator=to_camel,
        populate_by_name=True,
        from_attributes=True,
    )


class DateRange(CamelModel):
    """Inclusive range of selected nights."""

    start: date
    end: date

    @model_validator(mode="after")
    def _order_bounds(self) -> "DateRange":
        """Accept the bounds in either order, like the two-click selector."""
        if self.end < self.start:
            self.start, self.end = self.end, self.start
        return self

    @property
    def same_year(self) -> bool:
        return self.start.year == self.end.year


class CostLineOut(CamelModel):
    count: int
    unit_cost: Decimal
    total: Decimal
    range_start: date
    range_end: date


class DiscountLineOut(CamelModel):
    tier_size: int
    percent: Decimal
    amount: Decimal
    range_start: date
    range_end: date


class CostBreakdownOut(CamelModel):
    """Serialized :class:`~villa_booking.pricing.types.CostBreakdown`."""

    nights: int
    cost_lines: list[CostLineOut]
    subtotal: Decimal
    discount_lines: list[DiscountLineOut]
    total_discount: Decimal
    discounted_total: Decimal
    cleaning_cost: Decimal
    final_total: Decimal

    @classmethod
    def from_breakdown(cls, breakdown: CostBreakdown) -> "CostBreakdownOut":
        return cls.model_validate(breakdown)


class NextDiscountOut(CamelModel):
    nights_needed: int
    tier_percent: Decimal
    projected_total_discount: Decimal
    crosses_seven_boundary: bool

    @classmethod
    def from_projection(cls, projection: NextDiscount | None) -> "NextDiscountOut | None":
        return cls.model_validate(projection) if projection is not None else None
