"""Guest booking API router. Live pricing and booking requests.

No payment is taken and nothing is reserved: a booking request only e-mails
the owner, who confirms it manually.
"""

from __future__ import annotations

import logging
from typing import NoReturn

from fastapi import APIRouter, Depends, HTTPException, status
from sqlalchemy.ext.asyncio import AsyncSession

from villa_booking.api.deps import booking_rate_limit, get_db
from villa_booking.pricing.engine import compute_cost_breakdown
from villa_booking.pricing.projection import project_next_discount
from villa_booking.schemas.booking import (
    BookingQuoteResponse,
    BookingRequestCreate,
    BookingRequestResponse,
)
from villa_booking.schemas.pricing import CostBreakdownOut, DateRange, NextDiscountOut
from villa_booking.services.booking_request import (
    BookingRequestError,
    UnavailableDatesError,
    load_selection,
    submit_booking_request,
)
from villa_booking.services.email import EmailDeliveryError, EmailNotConfiguredError

logger = logging.getLogger(__name__)

router = APIRouter(prefix="/api/v1/bookings", tags=["bookings"])


# ---------------------------------------------------------------------------
# Helpers
# ---------------------------------------------------------------------------


def _raise_for_booking_error(exc: BookingRequestError) -> NoReturn:
    """Translate booking domain errors into HTTP errors."""
    if isinstance(exc, UnavailableDatesError):
        raise HTTPException(
            status_code=status.HTTP_409_CONFLICT,
            detail={
                "message": str(exc),
                "unavailableDates": [day.isoformat() for day in exc.dates],
            },
        ) from exc
    raise HTTPException(
        status_code=status.HTTP_400_BAD_REQUEST,
        detail=str(exc),
    ) from exc


# ---------------------------------------------------------------------------
# Endpoints
# ---------------------------------------------------------------------------


@router.post(
    "/quote",
    response_model=BookingQuoteResponse,
    summary="Price a selected date range",
)
async def quote_booking(
    body: DateRange,
    db: AsyncSession = Depends(get_db),
) -> BookingQuoteResponse:
    """Return the cost breakdown and the next-discount upsell for a range.

    Responds 409 when the range contains unavailable nights.
    """
    try:
        days, snapshot = await load_selection(db, body)
    except BookingRequestError as exc:
        _raise_for_booking_error(exc)

    return BookingQuoteResponse(
        date_range=body,
        breakdown=CostBreakdownOut.from_breakdown(compute_cost_breakdown(days, snapshot)),
        next_discount=NextDiscountOut.from_projection(project_next_discount(days, snapshot)),
    )


@router.post(
    "/requests",
    response_model=BookingRequestResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Send a booking request to the owner",
    dependencies=[Depends(booking_rate_limit)],
)
async def create_booking_request(
    body: BookingRequestCreate,
    db: AsyncSession = Depends(get_db),
) -> BookingRequestResponse:
    """Price the requested stay server-side and e-mail it to the owner.

    Failures are reported once; the guest retries manually.
    """
    try:
        summary = await submit_booking_request(db, body)
    except BookingRequestError as exc:
        _raise_for_booking_error(exc)
    except EmailNotConfiguredError as exc:
        logger.error("Booking request rejected: %s", exc)
        raise HTTPException(
            status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
            detail="Email not configured",
        ) from exc
    except EmailDeliveryError as exc:
        raise HTTPException(
            status_code=status.HTTP_502_BAD_GATEWAY,
            detail="Email failed",
        ) from exc

    return BookingRequestResponse(summary=summary)
