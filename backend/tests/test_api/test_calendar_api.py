"""Tests for the public calendar endpoint."""

from datetime import date
from decimal import Decimal

import pytest
from httpx import AsyncClient
from sqlalchemy.ext.asyncio import AsyncSession

from villa_booking.services import calendar_store

pytestmark = pytest.mark.asyncio


class TestGetCalendar:
    """GET /api/v1/calendar"""

    async def test_defaults_when_nothing_stored(self, client: AsyncClient, year: int) -> None:
        response = await client.get("/api/v1/calendar", params={"year": year})
        assert response.status_code == 200
        data = response.json()
        assert data["year"] == year
        assert Decimal(data["defaultCost"]) == Decimal("100")
        assert Decimal(data["cleaningCost"]) == Decimal("0")
        assert data["prices"] == {}
        assert data["availability"] == {}
        assert data["discounts"] == {}

    async def test_returns_stored_snapshot(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        priced_calendar: int,
    ) -> None:
        year = priced_calendar
        await calendar_store.set_days(db_session, [date(year, 8, 1)], cost=Decimal("180"))
        await calendar_store.set_days(db_session, [date(year, 8, 2)], available=False)

        response = await client.get("/api/v1/calendar", params={"year": year})
        assert response.status_code == 200
        data = response.json()
        assert Decimal(data["cleaningCost"]) == Decimal("50")
        assert Decimal(data["securityDeposit"]) == Decimal("300")
        assert Decimal(data["prices"][f"{year}-08-01"]) == Decimal("180")
        assert data["availability"] == {f"{year}-08-01": True, f"{year}-08-02": False}
        assert {k: Decimal(v) for k, v in data["discounts"].items()} == {
            "4": Decimal("10"),
            "5": Decimal("15"),
            "6": Decimal("20"),
            "7": Decimal("25"),
        }

    async def test_other_year_rows_excluded(
        self,
        client: AsyncClient,
        db_session: AsyncSession,
        year: int,
    ) -> None:
        await calendar_store.set_days(db_session, [date(year + 1, 1, 1)], cost=Decimal("999"))

        response = await client.get("/api/v1/calendar", params={"year": year})
        assert response.json()["prices"] == {}

    async def test_year_required(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/calendar")
        assert response.status_code == 422

    async def test_year_out_of_range(self, client: AsyncClient) -> None:
        response = await client.get("/api/v1/calendar", params={"year": 1999})
        assert response.status_code == 422


class TestHealth:
    async def test_health(self, client: AsyncClient) -> None:
        response = await client.get("/health")
        assert response.status_code == 200
        assert response.json()["status"] == "healthy"
