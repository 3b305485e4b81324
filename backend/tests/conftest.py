"""Shared test configuration and fixtures.

Every test gets a fresh in-memory SQLite database (aiosqlite) with all
tables created, wired into the app through a ``get_db`` override. The
environment is pinned before the application is imported so settings never
come from a developer's ``.env``.
"""

import os

os.environ["DATABASE_URL"] = "sqlite+aiosqlite:///:memory:"
os.environ["JWT_SECRET_KEY"] = "test-secret-key-not-for-production"
os.environ["ADMIN_PASSWORD"] = "villa-admin-pass"
os.environ["OWNER_EMAIL"] = "owner@costasolvilla.test"
os.environ["SMTP_HOST"] = "smtp.test"

from collections.abc import AsyncGenerator  # noqa: E402
from datetime import date, timedelta  # noqa: E402
from decimal import Decimal  # noqa: E402

import pytest  # noqa: E402
import pytest_asyncio  # noqa: E402
from httpx import ASGITransport, AsyncClient  # noqa: E402
from sqlalchemy.ext.asyncio import AsyncSession, create_async_engine  # noqa: E402
from sqlalchemy.pool import StaticPool  # noqa: E402

import villa_booking.models  # noqa: E402,F401
from villa_booking.api.rate_limit import booking_rate_limit, login_rate_limit  # noqa: E402
from villa_booking.auth.jwt import create_admin_token  # noqa: E402
from villa_booking.database import Base, get_db  # noqa: E402
from villa_booking.main import app  # noqa: E402
from villa_booking.pricing.types import CalendarSnapshot  # noqa: E402
from villa_booking.services import calendar_store  # noqa: E402

# ---------------------------------------------------------------------------
# Database
# ---------------------------------------------------------------------------


@pytest_asyncio.fixture
async def db_session() -> AsyncGenerator[AsyncSession, None]:
    """Yield a session on a brand-new in-memory database."""
    engine = create_async_engine(
        "sqlite+aiosqlite://",
        poolclass=StaticPool,
        connect_args={"check_same_thread": False},
    )
    async with engine.begin() as conn:
        await conn.run_sync(Base.metadata.create_all)

    session = AsyncSession(bind=engine, expire_on_commit=False)
    try:
        yield session
    finally:
        await session.close()
        await engine.dispose()


@pytest_asyncio.fixture
async def client(db_session: AsyncSession) -> AsyncGenerator[AsyncClient, None]:
    """Provide an httpx AsyncClient wired to use the test DB session."""

    async def override_get_db() -> AsyncGenerator[AsyncSession, None]:
        yield db_session

    app.dependency_overrides[get_db] = override_get_db
    booking_rate_limit.reset()
    login_rate_limit.reset()

    transport = ASGITransport(app=app)
    async with AsyncClient(transport=transport, base_url="http://testserver") as ac:
        yield ac

    app.dependency_overrides.clear()


# ---------------------------------------------------------------------------
# Convenience fixtures: admin auth, pricing data
# ---------------------------------------------------------------------------


@pytest.fixture
def admin_headers() -> dict[str, str]:
    """Return Authorization headers carrying a valid admin token."""
    return {"Authorization": f"Bearer {create_admin_token()}"}


@pytest.fixture
def year() -> int:
    """A calendar year safely in the future."""
    return date.today().year + 1


@pytest_asyncio.fixture
async def priced_calendar(db_session: AsyncSession, year: int) -> int:
    """Seed default cost 100, cleaning 50, deposit 300 and tiers 10/15/20/25 %."""
    await calendar_store.set_base_costs(
        db_session,
        default_cost=Decimal("100"),
        cleaning_cost=Decimal("50"),
        security_deposit=Decimal("300"),
    )
    await calendar_store.set_discounts(
        db_session,
        {4: Decimal("10"), 5: Decimal("15"), 6: Decimal("20"), 7: Decimal("25")},
    )
    return year


@pytest.fixture
def nights():
    """Factory: ``nights(start, count)`` gives ``count`` consecutive dates."""

    def _nights(start: date, count: int) -> list[date]:
        return [start + timedelta(days=i) for i in range(count)]

    return _nights


@pytest.fixture
def make_snapshot():
    """Factory for snapshots with the reference pricing, overridable per test."""

    def _make(**overrides) -> CalendarSnapshot:
        params = {
            "year": 2026,
            "default_cost": 100,
            "cleaning_cost": 50,
            "security_deposit": 300,
            "discount_tiers": {4: 10, 5: 15, 6: 20, 7: 25},
        }
        params.update(overrides)
        return CalendarSnapshot.build(**params)

    return _make
