"""Admin quotes API router. Priced quotes as JSON or PDF."""

from fastapi import APIRouter, Depends, HTTPException, Response, status
from sqlalchemy.ext.asyncio import AsyncSession

from villa_booking.api.deps import get_db, require_admin
from villa_booking.pricing.engine import compute_cost_breakdown
from villa_booking.schemas.quote import QuoteRequest, QuoteResponse
from villa_booking.services.booking_request import BookingRequestError, load_selection
from villa_booking.services.quote import build_quote, render_quote_pdf

router = APIRouter(prefix="/api/v1/admin/quotes", tags=["quotes"])


async def _build(body: QuoteRequest, db: AsyncSession) -> QuoteResponse:
    # The owner may quote nights still marked unavailable, e.g. to rebook them.
    try:
        days, snapshot = await load_selection(db, body.date_range, check_availability=False)
    except BookingRequestError as exc:
        raise HTTPException(
            status_code=status.HTTP_400_BAD_REQUEST,
            detail=str(exc),
        ) from exc
    return build_quote(body, compute_cost_breakdown(days, snapshot), snapshot)


@router.post(
    "",
    response_model=QuoteResponse,
    summary="Compute a quote with deposit and remaining balance",
)
async def create_quote(
    body: QuoteRequest,
    db: AsyncSession = Depends(get_db),
    _admin: str = Depends(require_admin),
) -> QuoteResponse:
    return await _build(body, db)


@router.post(
    "/pdf",
    response_class=Response,
    summary="Render a quote as a PDF document",
    responses={200: {"content": {"application/pdf": {}}}},
)
async def create_quote_pdf(
    body: QuoteRequest,
    db: AsyncSession = Depends(get_db),
    _admin: str = Depends(require_admin),
) -> Response:
    """Return the quote PDF with one section per requested language."""
    quote = await _build(body, db)
    content = render_quote_pdf(quote, list(body.languages))
    filename = f"quote-{quote.date_range.start.isoformat()}-{quote.date_range.end.isoformat()}.pdf"
    return Response(
        content=content,
        media_type="application/pdf",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
