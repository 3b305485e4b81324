"""Admin API router. Back-office login and calendar management."""

import logging

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from villa_booking.api.deps import get_db, login_rate_limit, require_admin
from villa_booking.auth.dependencies import verify_admin_password
from villa_booking.auth.jwt import create_admin_token
from villa_booking.config import settings
from villa_booking.schemas.auth import AdminLoginRequest, TokenResponse
from villa_booking.schemas.calendar import (
    BaseCostsUpdate,
    CalendarDaysUpdate,
    CalendarWriteResponse,
    DiscountsUpdate,
)
from villa_booking.services import calendar_store

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/admin", tags=["admin"])


# ---------------------------------------------------------------------------
# POST /login
# ---------------------------------------------------------------------------


@router.post(
    "/login",
    response_model=TokenResponse,
    dependencies=[Depends(login_rate_limit)],
)
async def login(body: AdminLoginRequest) -> TokenResponse:
    """Exchange the back-office password for an access token."""
    if not verify_admin_password(body.password):
        logger.warning("Rejected admin login attempt")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid password",
        )

    return TokenResponse(
        access_token=create_admin_token(),
        expires_in=settings.jwt_access_token_expire_minutes * 60,
    )


# ---------------------------------------------------------------------------
# Calendar writes
# ---------------------------------------------------------------------------


@router.post(
    "/calendar/days",
    response_model=CalendarWriteResponse,
    summary="Set price and/or availability for dates",
)
async def update_days(
    body: CalendarDaysUpdate,
    db: AsyncSession = Depends(get_db),
    _admin: str = Depends(require_admin),
) -> CalendarWriteResponse:
    """Write a nightly price and/or availability flag to the selected dates."""
    days = body.selected_days()
    if len(days) > 366:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail="Select at most one year of dates at a time",
        )
    updated = await calendar_store.set_days(db, days, cost=body.cost, available=body.available)
    return CalendarWriteResponse(updated=updated)


@router.put(
    "/calendar/base-costs",
    response_model=CalendarWriteResponse,
    summary="Set default nightly cost, cleaning fee and security deposit",
)
async def update_base_costs(
    body: BaseCostsUpdate,
    db: AsyncSession = Depends(get_db),
    _admin: str = Depends(require_admin),
) -> CalendarWriteResponse:
    await calendar_store.set_base_costs(
        db,
        default_cost=body.default_cost,
        cleaning_cost=body.cleaning_cost,
        security_deposit=body.security_deposit,
    )
    return CalendarWriteResponse(updated=1)


@router.put(
    "/calendar/discounts",
    response_model=CalendarWriteResponse,
    summary="Set multi-night discount percents for tiers 4 to 7",
)
async def update_discounts(
    body: DiscountsUpdate,
    db: AsyncSession = Depends(get_db),
    _admin: str = Depends(require_admin),
) -> CalendarWriteResponse:
    try:
        await calendar_store.set_discounts(db, body.tiers)
    except ValueError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return CalendarWriteResponse(updated=len(body.tiers))
