"""Next-discount-tier projection used for "add N nights, save X%" copy."""

from __future__ import annotations

from collections.abc import Iterable
from datetime import date

from villa_booking.pricing.engine import apply_discount_chunks
from villa_booking.pricing.types import (
    MAX_TIER,
    MIN_TIER,
    ZERO,
    CalendarSnapshot,
    NextDiscount,
    round_money,
)


def next_tier_target(count: int) -> tuple[int, int] | None:
    """Return ``(target_tier, nights_needed)`` for a selection of ``count`` nights."""
    if count <= 0:
        return None
    if count < MIN_TIER:
        return MIN_TIER, MIN_TIER - count
    if count < MAX_TIER:
        return count + 1, 1

    remainder = count % MAX_TIER
    if remainder == 0:
        return MIN_TIER, MIN_TIER
    if remainder < MIN_TIER:
        return MIN_TIER, MIN_TIER - remainder
    # remainder of 4..6 always has a bigger tier left, at most 7
    return remainder + 1, 1


def project_next_discount(
    selection: Iterable[date],
    snapshot: CalendarSnapshot,
) -> NextDiscount | None:
    """Project the total discount if the stay were extended to the next tier.

    Extra nights are priced at the average nightly cost of the current
    selection since the actual future dates are unknown, so the projected
    amount is an estimate rather than a quote.
    """
    days = sorted(set(selection))
    target = next_tier_target(len(days))
    if target is None:
        return None
    tier, needed = target

    percent = snapshot.tier_percent(tier)
    if percent <= ZERO:
        return None

    costs = [snapshot.nightly_cost(day) for day in days]
    average = sum(costs, ZERO) / len(costs) if costs else snapshot.default_cost
    extended = costs + [average] * needed

    projected = sum(
        (amount for _, _, _, amount in apply_discount_chunks(extended, snapshot)),
        ZERO,
    )
    return NextDiscount(
        nights_needed=needed,
        tier_percent=percent,
        projected_total_discount=round_money(projected),
        crosses_seven_boundary=len(days) >= MAX_TIER,
    )
