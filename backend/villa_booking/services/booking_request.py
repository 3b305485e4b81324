"""Guest booking flow: price a selected range and e-mail the request to the owner.

The guest never sends prices: every summary is recomputed here from the
stored calendar snapshot with the shared pricing engine.
"""

import html
import logging
from datetime import date
from decimal import Decimal
from urllib.parse import urlencode

from sqlalchemy.ext.asyncio import AsyncSession

from villa_booking.config import settings
from villa_booking.pricing.engine import compute_cost_breakdown
from villa_booking.pricing.selection import find_unavailable, select_range
from villa_booking.pricing.types import CalendarSnapshot, CostBreakdown
from villa_booking.schemas.booking import BookingRequestCreate, BookingSummary, BookingTotals
from villa_booking.schemas.pricing import CostLineOut, DateRange, DiscountLineOut
from villa_booking.services import calendar_store
from villa_booking.services.email import EmailNotConfiguredError, build_message, send_email

logger = logging.getLogger(__name__)


class BookingRequestError(ValueError):
    """The requested range cannot be booked as-is."""


class UnavailableDatesError(BookingRequestError):
    """The requested range contains nights marked unavailable."""

    def __init__(self, dates: list[date]) -> None:
        self.dates = dates
        super().__init__("Selected dates include unavailable nights")


async def load_selection(
    db: AsyncSession,
    date_range: DateRange,
    check_availability: bool = True,
) -> tuple[list[date], CalendarSnapshot]:
    """Expand a range into nights and load the snapshot of its calendar year.

    Ranges may not cross a year boundary since snapshots are per year.
    """
    if not date_range.same_year:
        raise BookingRequestError("Date range must stay within one calendar year")

    days = select_range(date_range.start, date_range.end)
    snapshot = await calendar_store.get_snapshot(db, date_range.start.year)

    if check_availability:
        blocked = find_unavailable(days, snapshot)
        if blocked:
            raise UnavailableDatesError(blocked)
    return days, snapshot


def build_summary(breakdown: CostBreakdown, date_range: DateRange) -> BookingSummary:
    return BookingSummary(
        cost_lines=[CostLineOut.model_validate(line) for line in breakdown.cost_lines],
        discount_lines=[DiscountLineOut.model_validate(line) for line in breakdown.discount_lines],
        totals=BookingTotals(
            subtotal=breakdown.subtotal,
            total_discount=breakdown.total_discount,
            cleaning_cost=breakdown.cleaning_cost,
            total_after_discount=breakdown.final_total,
        ),
        date_range=date_range,
    )


# ---------------------------------------------------------------------------
# Owner e-mail
# ---------------------------------------------------------------------------


def _money(value: Decimal) -> str:
    return f"{settings.currency_symbol}{value:.2f}"


def _short_date(value: date) -> str:
    return value.strftime("%d.%m.%y")


def build_admin_link(body: BookingRequestCreate, summary: BookingSummary) -> str:
    """Deep link that opens the admin calendar with the request pre-filled."""
    params = {
        "start": summary.date_range.start.isoformat(),
        "end": summary.date_range.end.isoformat(),
        "name": body.name,
        "email": str(body.email),
        "phone": body.phone,
        "adults": body.guests.adults,
        "kids": body.guests.kids,
        "babies": body.guests.babies,
        "total": str(summary.totals.total_after_discount),
        "cleaning": str(summary.totals.cleaning_cost),
    }
    return f"{settings.admin_calendar_url}?{urlencode(params)}"


def render_owner_email(body: BookingRequestCreate, summary: BookingSummary) -> tuple[str, str, str]:
    """Return ``(subject, html, text)`` for the owner notification."""
    esc = html.escape
    cell = 'style="padding:6px 8px;border-bottom:1px solid #eee;"'

    rows: list[str] = []
    text_rows: list[str] = []
    for line in summary.cost_lines:
        dates = f"{_short_date(line.range_start)} – {_short_date(line.range_end)}"
        rows.append(
            f"<tr><td {cell}>{line.count} nights</td><td {cell}>{dates}</td>"
            f"<td {cell}>{_money(line.unit_cost)} per night • {_money(line.total)}</td></tr>"
        )
        text_rows.append(f"{line.count} nights  {dates}  {_money(line.unit_cost)}/night  {_money(line.total)}")
    for line in summary.discount_lines:
        dates = f"{_short_date(line.range_start)} – {_short_date(line.range_end)}"
        rows.append(
            f"<tr><td {cell}>{line.tier_size} nights {line.percent}% discount</td>"
            f"<td {cell}>{dates}</td><td {cell}>-{_money(line.amount)}</td></tr>"
        )
        text_rows.append(f"{line.tier_size} nights {line.percent}% discount  {dates}  -{_money(line.amount)}")

    totals = summary.totals
    total_rows = [
        ("Subtotal", _money(totals.subtotal)),
        ("Total discount", f"-{_money(totals.total_discount)}"),
        ("Cleaning", _money(totals.cleaning_cost)),
        ("Total", _money(totals.total_after_discount)),
    ]
    link = build_admin_link(body, summary)
    message = esc(body.message) if body.message else "(none)"
    tbody = "".join(rows)
    tfoot = "".join(
        f"<tr><td><strong>{label}</strong></td><td></td><td><strong>{value}</strong></td></tr>"
        for label, value in total_rows
    )

    html_body = f"""
<div style="font-family: Arial, sans-serif; color: #111;">
  <h2>New booking request</h2>
  <p><strong>Name:</strong> {esc(body.name)}</p>
  <p><strong>Email:</strong> {esc(str(body.email))}</p>
  <p><strong>Phone:</strong> {esc(body.phone)}</p>
  <p><strong>Adults (18+):</strong> {body.guests.adults}</p>
  <p><strong>Children (3-18):</strong> {body.guests.kids}</p>
  <p><strong>Babies (under 3):</strong> {body.guests.babies}</p>
  <p><strong>Message:</strong> {message}</p>
  <h3>Booking details</h3>
  <table style="width:100%;border-collapse:collapse;">
    <tbody>{tbody}</tbody>
    <tfoot>{tfoot}</tfoot>
  </table>
  <p style="margin-top:16px;"><a href="{esc(link)}">Open calendar</a></p>
</div>
"""

    text_body = "\n".join(
        [
            "New booking request",
            "",
            f"Name: {body.name}",
            f"Email: {body.email}",
            f"Phone: {body.phone}",
            f"Adults: {body.guests.adults}  Children: {body.guests.kids}  Babies: {body.guests.babies}",
            f"Message: {body.message or '(none)'}",
            "",
            *text_rows,
            "",
            *(f"{label}: {value}" for label, value in total_rows),
            "",
            f"Open calendar: {link}",
        ]
    )
    return "New booking request", html_body, text_body


async def submit_booking_request(db: AsyncSession, body: BookingRequestCreate) -> BookingSummary:
    """Price the requested range and notify the owner by e-mail.

    Raises:
        BookingRequestError: Too few nights or a cross-year range.
        UnavailableDatesError: The range contains unavailable nights.
        EmailNotConfiguredError / EmailDeliveryError: From the mail layer.
    """
    days, snapshot = await load_selection(db, body.date_range)
    if len(days) < settings.min_booking_nights:
        raise BookingRequestError(f"Bookings require at least {settings.min_booking_nights} nights")

    if not settings.email_configured:
        raise EmailNotConfiguredError("Owner e-mail is not configured")

    breakdown = compute_cost_breakdown(days, snapshot)
    summary = build_summary(breakdown, body.date_range)

    subject, html_body, text_body = render_owner_email(body, summary)
    msg = build_message(
        settings.owner_email,
        subject,
        html_body,
        text_body,
        reply_to=str(body.email),
    )
    await send_email(msg)

    logger.info(
        "Booking request from %s for %s..%s (%d nights, total %s)",
        body.email,
        body.date_range.start,
        body.date_range.end,
        len(days),
        breakdown.final_total,
    )
    return summary
