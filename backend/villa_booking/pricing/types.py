"""Pricing data model: calendar snapshot and cost breakdown value objects."""

from __future__ import annotations

from collections.abc import Mapping
from dataclasses import dataclass, field
from datetime import date
from decimal import ROUND_HALF_UP, Decimal, InvalidOperation
from typing import Any

TIER_SIZES: tuple[int, ...] = (4, 5, 6, 7)
MIN_TIER = 4
MAX_TIER = 7

ZERO = Decimal("0")
CENT = Decimal("0.01")


def round_money(value: Decimal) -> Decimal:
    """Round a money amount to cents, half-up."""
    return value.quantize(CENT, rounding=ROUND_HALF_UP)


def parse_decimal(value: Any) -> Decimal | None:
    """Parse a raw number into a finite ``Decimal`` or ``None``.

    Booleans, unparsable strings, NaN and infinities are rejected. Floats go
    through ``str`` so ``0.1`` stays ``Decimal("0.1")``.
    """
    if value is None or isinstance(value, bool):
        return None
    if isinstance(value, Decimal):
        result = value
    else:
        try:
            result = Decimal(str(value).strip())
        except (InvalidOperation, ValueError):
            return None
    return result if result.is_finite() else None


def to_decimal(value: Any, default: Decimal = ZERO) -> Decimal:
    """Like :func:`parse_decimal` but falls back to ``default``."""
    result = parse_decimal(value)
    return default if result is None else result


def _tier_key(raw: Any) -> int | None:
    try:
        key = int(str(raw).strip())
    except ValueError:
        return None
    return key if key in TIER_SIZES else None


@dataclass(frozen=True)
class CalendarSnapshot:
    """Read-only pricing configuration for one calendar year."""

    year: int
    default_cost: Decimal
    cleaning_cost: Decimal = ZERO
    security_deposit: Decimal = ZERO
    prices: Mapping[date, Decimal] = field(default_factory=dict)
    availability: Mapping[date, bool] = field(default_factory=dict)
    discount_tiers: Mapping[int, Decimal] = field(default_factory=dict)

    @classmethod
    def build(
        cls,
        year: int,
        default_cost: Any,
        cleaning_cost: Any = None,
        security_deposit: Any = None,
        prices: Mapping[date, Any] | None = None,
        availability: Mapping[date, bool] | None = None,
        discount_tiers: Mapping[Any, Any] | None = None,
    ) -> CalendarSnapshot:
        """Build a snapshot from loosely-typed stored values.

        Tier keys may arrive as strings (``"4"``) from JSON storage; keys
        outside 4..7 are dropped. Prices that do not coalesce to a finite
        number are treated as absent so the default cost applies.
        """
        clean_prices: dict[date, Decimal] = {}
        for day, raw in (prices or {}).items():
            value = parse_decimal(raw)
            if value is not None:
                clean_prices[day] = value

        tiers: dict[int, Decimal] = {}
        for raw_key, raw_pct in (discount_tiers or {}).items():
            key = _tier_key(raw_key)
            if key is not None:
                tiers[key] = to_decimal(raw_pct)

        return cls(
            year=year,
            default_cost=to_decimal(default_cost),
            cleaning_cost=to_decimal(cleaning_cost),
            security_deposit=to_decimal(security_deposit),
            prices=clean_prices,
            availability={day: bool(flag) for day, flag in (availability or {}).items()},
            discount_tiers=tiers,
        )

    def nightly_cost(self, day: date) -> Decimal:
        return self.prices.get(day, self.default_cost)

    def is_available(self, day: date) -> bool:
        return self.availability.get(day, True) is not False

    def tier_percent(self, size: int) -> Decimal:
        """Percent for a tier size; 0 when missing or not a finite number."""
        return to_decimal(self.discount_tiers.get(size))


@dataclass(frozen=True)
class CostLine:
    """A maximal run of consecutive nights sharing one nightly price."""

    count: int
    unit_cost: Decimal
    total: Decimal
    range_start: date
    range_end: date


@dataclass(frozen=True)
class DiscountLine:
    """One applied discount chunk."""

    tier_size: int
    percent: Decimal
    amount: Decimal
    range_start: date
    range_end: date


@dataclass(frozen=True)
class CostBreakdown:
    """Engine output for a date selection."""

    cost_lines: tuple[CostLine, ...] = ()
    subtotal: Decimal = ZERO
    discount_lines: tuple[DiscountLine, ...] = ()
    total_discount: Decimal = ZERO
    discounted_total: Decimal = ZERO
    final_total: Decimal = ZERO

    @property
    def nights(self) -> int:
        return sum(line.count for line in self.cost_lines)

    @property
    def cleaning_cost(self) -> Decimal:
        return self.final_total - self.discounted_total

    @property
    def date_range(self) -> tuple[date, date] | None:
        if not self.cost_lines:
            return None
        return self.cost_lines[0].range_start, self.cost_lines[-1].range_end


@dataclass(frozen=True)
class NextDiscount:
    """Upsell projection: nights to add to unlock the next discount tier."""

    nights_needed: int
    tier_percent: Decimal
    projected_total_discount: Decimal
    crosses_seven_boundary: bool
