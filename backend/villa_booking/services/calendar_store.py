"""Calendar store: reads and writes the pricing snapshot for a calendar year.

There is no optimistic locking. Concurrent admin writes are last-write-wins.
"""

import logging
from collections.abc import Iterable, Mapping
from datetime import date
from decimal import Decimal

from sqlalchemy import select
from sqlalchemy.ext.asyncio import AsyncSession

from villa_booking.config import settings
from villa_booking.models.calendar import CalendarDay, PricingSettings
from villa_booking.pricing.types import TIER_SIZES, CalendarSnapshot

logger = logging.getLogger(__name__)


async def _get_settings_row(db: AsyncSession) -> PricingSettings | None:
    result = await db.execute(select(PricingSettings).where(PricingSettings.id == PricingSettings.SINGLETON_ID))
    return result.scalar_one_or_none()


async def _get_or_create_settings_row(db: AsyncSession) -> PricingSettings:
    row = await _get_settings_row(db)
    if row is None:
        row = PricingSettings(id=PricingSettings.SINGLETON_ID)
        db.add(row)
        await db.flush()
    return row


async def get_snapshot(db: AsyncSession, year: int) -> CalendarSnapshot:
    """Load the pricing snapshot for ``year``.

    Per-date rows are limited to the calendar year; the default cost,
    cleaning cost, deposit and discount tiers are shared across years.
    """
    result = await db.execute(
        select(CalendarDay).where(
            CalendarDay.day >= date(year, 1, 1),
            CalendarDay.day <= date(year, 12, 31),
        )
    )
    days = list(result.scalars().all())
    row = await _get_settings_row(db)

    default_cost = settings.default_nightly_cost
    if row is not None and row.default_cost is not None:
        default_cost = row.default_cost

    return CalendarSnapshot.build(
        year=year,
        default_cost=default_cost,
        cleaning_cost=row.cleaning_cost if row is not None else None,
        security_deposit=row.security_deposit if row is not None else None,
        prices={d.day: d.cost for d in days if d.cost is not None},
        availability={d.day: d.available for d in days if d.available is not None},
        discount_tiers=(row.discounts or {}) if row is not None else {},
    )


async def set_days(
    db: AsyncSession,
    days: Iterable[date],
    cost: Decimal | None = None,
    available: bool | None = None,
) -> int:
    """Upsert per-date overrides. Returns the number of dates written.

    Writing a cost without an availability flag also marks the date
    available, matching how prices are published in the back-office.
    """
    unique_days = sorted(set(days))
    if not unique_days or (cost is None and available is None):
        return 0

    result = await db.execute(select(CalendarDay).where(CalendarDay.day.in_(unique_days)))
    existing = {row.day: row for row in result.scalars().all()}

    for day in unique_days:
        row = existing.get(day)
        if row is None:
            row = CalendarDay(day=day)
            db.add(row)
        if cost is not None:
            row.cost = cost
            row.available = True if available is None else available
        elif available is not None:
            row.available = available

    await db.flush()
    logger.info(
        "Updated %d calendar days (%s..%s) cost=%s available=%s",
        len(unique_days),
        unique_days[0],
        unique_days[-1],
        cost,
        available,
    )
    return len(unique_days)


async def set_base_costs(
    db: AsyncSession,
    default_cost: Decimal | None = None,
    cleaning_cost: Decimal | None = None,
    security_deposit: Decimal | None = None,
) -> PricingSettings:
    """Update whichever of the default/cleaning/deposit amounts are given."""
    row = await _get_or_create_settings_row(db)
    if default_cost is not None:
        row.default_cost = default_cost
    if cleaning_cost is not None:
        row.cleaning_cost = cleaning_cost
    if security_deposit is not None:
        row.security_deposit = security_deposit
    await db.flush()
    logger.info(
        "Updated base costs default=%s cleaning=%s deposit=%s",
        row.default_cost,
        row.cleaning_cost,
        row.security_deposit,
    )
    return row


async def set_discounts(db: AsyncSession, tiers: Mapping[int, Decimal]) -> dict[str, float]:
    """Merge discount percents for tiers 4..7 into the stored tier map.

    Raises ``ValueError`` for any other tier size.
    """
    invalid = [size for size in tiers if size not in TIER_SIZES]
    if invalid:
        raise ValueError(f"Unsupported discount tier(s): {sorted(invalid)}")

    row = await _get_or_create_settings_row(db)
    merged = dict(row.discounts or {})
    for size, percent in tiers.items():
        merged[str(size)] = float(percent)
    # JSON columns only notice reassignment, not in-place mutation
    row.discounts = merged
    await db.flush()
    logger.info("Updated discount tiers %s", merged)
    return merged
