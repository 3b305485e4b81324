"""Public calendar API: per-year prices, availability and discount tiers."""

from fastapi import APIRouter, Depends, Query
from sqlalchemy.ext.asyncio import AsyncSession

from villa_booking.api.deps import get_db
from villa_booking.schemas.calendar import CalendarResponse
from villa_booking.services import calendar_store

router = APIRouter(prefix="/api/v1/calendar", tags=["calendar"])


@router.get(
    "",
    response_model=CalendarResponse,
    summary="Get the pricing calendar for a year",
)
async def get_calendar(
    year: int = Query(..., ge=2000, le=2100, description="Calendar year, e.g. 2026"),
    db: AsyncSession = Depends(get_db),
) -> CalendarResponse:
    """Return the snapshot the booking page prices against."""
    snapshot = await calendar_store.get_snapshot(db, year)
    return CalendarResponse.from_snapshot(snapshot)
