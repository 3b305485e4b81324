"""Pricing & discount engine.

Turns a date selection plus a :class:`CalendarSnapshot` into a
:class:`CostBreakdown`. Both the guest booking flow and the admin quote flow
call :func:`compute_cost_breakdown`, and the next-tier projection reuses
:func:`apply_discount_chunks`, so there is a single chunking policy:

* as many 7-night chunks as fit, discounted at the tier-7 percent;
* then, if at least 4 nights remain, one chunk sized to the remainder and
  discounted at that remainder's own tier percent;
* fewer than 4 leftover nights are never discounted.

A chunk whose tier percent resolves to zero (missing, non-finite or
non-positive) produces no discount line, but its nights are still consumed.
"""

from __future__ import annotations

from collections.abc import Iterable, Sequence
from datetime import date
from decimal import Decimal

from villa_booking.pricing.types import (
    MAX_TIER,
    MIN_TIER,
    ZERO,
    CalendarSnapshot,
    CostBreakdown,
    CostLine,
    DiscountLine,
    round_money,
)

HUNDRED = Decimal("100")


def discount_chunks(count: int) -> list[tuple[int, int]]:
    """Partition ``count`` nights into ``(start_index, size)`` discount chunks.

    >>> discount_chunks(16)
    [(0, 7), (7, 7)]
    >>> discount_chunks(11)
    [(0, 7), (7, 4)]
    """
    chunks: list[tuple[int, int]] = []
    index = 0
    while count - index >= MAX_TIER:
        chunks.append((index, MAX_TIER))
        index += MAX_TIER
    remainder = count - index
    if remainder >= MIN_TIER:
        chunks.append((index, remainder))
    return chunks


def apply_discount_chunks(
    costs: Sequence[Decimal],
    snapshot: CalendarSnapshot,
) -> list[tuple[int, int, Decimal, Decimal]]:
    """Apply the greedy chunk policy to a sequence of nightly costs.

    Returns ``(start_index, size, percent, amount)`` for every chunk that
    actually earns a discount. Amounts are rounded to cents per chunk.
    """
    applied: list[tuple[int, int, Decimal, Decimal]] = []
    for start, size in discount_chunks(len(costs)):
        percent = snapshot.tier_percent(size)
        if percent <= ZERO:
            continue
        chunk_total = sum(costs[start : start + size], ZERO)
        amount = round_money(chunk_total * percent / HUNDRED)
        applied.append((start, size, percent, amount))
    return applied


def _group_cost_lines(days: Sequence[date], costs: Sequence[Decimal]) -> list[CostLine]:
    lines: list[CostLine] = []
    i = 0
    while i < len(days):
        j = i
        while j + 1 < len(days) and costs[j + 1] == costs[i]:
            j += 1
        count = j - i + 1
        lines.append(
            CostLine(
                count=count,
                unit_cost=costs[i],
                total=costs[i] * count,
                range_start=days[i],
                range_end=days[j],
            )
        )
        i = j + 1
    return lines


def compute_cost_breakdown(
    selection: Iterable[date],
    snapshot: CalendarSnapshot,
) -> CostBreakdown:
    """Compute the grouped cost lines, discounts and totals for a selection.

    The selection is treated as a set: duplicates are ignored and dates are
    sorted before pricing. An empty selection yields an all-zero breakdown.
    """
    days = sorted(set(selection))
    if not days:
        return CostBreakdown()

    costs = [snapshot.nightly_cost(day) for day in days]
    subtotal = sum(costs, ZERO)

    discount_lines = [
        DiscountLine(
            tier_size=size,
            percent=percent,
            amount=amount,
            range_start=days[start],
            range_end=days[start + size - 1],
        )
        for start, size, percent, amount in apply_discount_chunks(costs, snapshot)
    ]

    discounted_total = subtotal
    for line in discount_lines:
        discounted_total -= line.amount

    return CostBreakdown(
        cost_lines=tuple(_group_cost_lines(days, costs)),
        subtotal=subtotal,
        discount_lines=tuple(discount_lines),
        total_discount=subtotal - discounted_total,
        discounted_total=discounted_total,
        final_total=discounted_total + snapshot.cleaning_cost,
    )
