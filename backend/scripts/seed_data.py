"""Seed the database with a realistic Costa del Sol pricing calendar.

Prices follow a typical Fuengirola season curve: cheap winter nights,
shoulder months around Easter and autumn, peak July and August. A few
weeks are blocked as if already booked through other channels.

Run inside Docker:
    docker compose exec backend python -m scripts.seed_data
"""

import asyncio
import sys
from datetime import date, timedelta
from decimal import Decimal
from pathlib import Path

# Add backend to path so imports work when run as a script
sys.path.insert(0, str(Path(__file__).resolve().parent.parent))

from sqlalchemy import delete

import villa_booking.models  # noqa: F401
from villa_booking.database import Base, async_session_factory, engine
from villa_booking.models.calendar import CalendarDay
from villa_booking.pricing.selection import select_range
from villa_booking.services import calendar_store

# ---------------------------------------------------------------------------
# Seed data definitions
# ---------------------------------------------------------------------------

BASE_COSTS = {
    "default_cost": Decimal("110.00"),
    "cleaning_cost": Decimal("90.00"),
    "security_deposit": Decimal("300.00"),
}

DISCOUNT_TIERS = {
    4: Decimal("5"),
    5: Decimal("8"),
    6: Decimal("10"),
    7: Decimal("15"),
}

# (first month, first day, last month, last day, nightly cost)
SEASONS = [
    (1, 7, 3, 15, Decimal("85.00")),
    (3, 16, 4, 30, Decimal("120.00")),
    (5, 1, 6, 20, Decimal("145.00")),
    (6, 21, 8, 31, Decimal("210.00")),
    (9, 1, 10, 15, Decimal("150.00")),
    (10, 16, 12, 19, Decimal("95.00")),
    (12, 20, 12, 31, Decimal("160.00")),
]

# (month, day, nights) already taken
BLOCKED_STAYS = [
    (4, 12, 6),
    (7, 18, 14),
    (8, 9, 7),
    (10, 3, 4),
]


def _season_days(year: int, first: tuple[int, int], last: tuple[int, int]) -> list[date]:
    return select_range(date(year, *first), date(year, *last))


# ---------------------------------------------------------------------------
# Main seed function
# ---------------------------------------------------------------------------


async def seed() -> None:
    """Populate the current and next year's calendar.

    Idempotent: clears all per-date overrides before writing, and the pricing
    settings row is updated in place.
    """
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    years = [date.today().year, date.today().year + 1]

    async with async_session_factory() as session:
        await session.execute(delete(CalendarDay))
        await session.flush()

        # ------------------------------------------------------------------
        # 1. Base costs and discount tiers
        # ------------------------------------------------------------------
        await calendar_store.set_base_costs(session, **BASE_COSTS)
        await calendar_store.set_discounts(session, DISCOUNT_TIERS)
        print(
            f"✅ Base costs: €{BASE_COSTS['default_cost']}/night, "
            f"cleaning €{BASE_COSTS['cleaning_cost']}, deposit €{BASE_COSTS['security_deposit']}"
        )
        print("✅ Discount tiers: " + ", ".join(f"{k} nights {v}%" for k, v in DISCOUNT_TIERS.items()))

        # ------------------------------------------------------------------
        # 2. Seasonal prices
        # ------------------------------------------------------------------
        priced = 0
        for year in years:
            for first_month, first_day, last_month, last_day, cost in SEASONS:
                days = _season_days(year, (first_month, first_day), (last_month, last_day))
                priced += await calendar_store.set_days(session, days, cost=cost)
            print(f"   📅 {year}: {len(SEASONS)} seasons priced")

        # ------------------------------------------------------------------
        # 3. Blocked stays
        # ------------------------------------------------------------------
        blocked = 0
        for year in years:
            for month, day, nights in BLOCKED_STAYS:
                start = date(year, month, day)
                days = select_range(start, start + timedelta(days=nights - 1))
                blocked += await calendar_store.set_days(session, days, available=False)

        await session.commit()

        print()
        print("=" * 60)
        print("📊 Seed Summary")
        print("=" * 60)
        print(f"   Years:          {', '.join(str(y) for y in years)}")
        print(f"   Priced nights:  {priced}")
        print(f"   Blocked nights: {blocked}")
        print("=" * 60)
        print("🎉 Done! Open GET /api/v1/calendar?year=<year> to check the result")


if __name__ == "__main__":
    asyncio.run(seed())
