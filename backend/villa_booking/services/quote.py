"""Admin quote flow: totals with deposit and partial payment, rendered to PDF."""

import logging
from decimal import Decimal
from io import BytesIO

from reportlab.lib.pagesizes import A4
from reportlab.pdfbase import pdfmetrics
from reportlab.pdfbase.ttfonts import TTFont
from reportlab.pdfgen import canvas

from villa_booking.config import settings
from villa_booking.pricing.types import ZERO, CalendarSnapshot, CostBreakdown
from villa_booking.schemas.pricing import CostBreakdownOut
from villa_booking.schemas.quote import QuoteRequest, QuoteResponse, QuoteTotalsOut
from villa_booking.services.quote_strings import QUOTE_STRINGS, format_long_date

logger = logging.getLogger(__name__)

PAGE_WIDTH, PAGE_HEIGHT = A4
MARGIN = 50
LINE_HEIGHT = 15


def build_quote(body: QuoteRequest, breakdown: CostBreakdown, snapshot: CalendarSnapshot) -> QuoteResponse:
    """Combine the engine breakdown with the deposit and payment schedule."""
    total = breakdown.final_total
    remaining = max(total - body.partial_payment, ZERO)
    return QuoteResponse(
        date_range=body.date_range,
        nights=breakdown.nights,
        guests=body.guests.total,
        main_guest=body.full_name.strip(),
        breakdown=CostBreakdownOut.from_breakdown(breakdown),
        totals=QuoteTotalsOut(
            accommodation=breakdown.subtotal,
            discount=breakdown.total_discount,
            cleaning=breakdown.cleaning_cost,
            total=total,
            deposit=snapshot.security_deposit,
            partial_payment=body.partial_payment,
            remaining_balance=remaining,
            payment_date=body.payment_date,
            balance_due_date=body.balance_due_date,
        ),
    )


# ---------------------------------------------------------------------------
# PDF rendering
# ---------------------------------------------------------------------------


def _register_fonts() -> tuple[str, str]:
    """Return (regular, bold) font names, preferring the configured TTF files.

    The built-in Helvetica has no Cyrillic glyphs, so Russian quotes need
    ``PDF_FONT_PATH`` pointing at a font such as DejaVuSans.
    """
    if not settings.pdf_font_path:
        return "Helvetica", "Helvetica-Bold"
    regular, bold = "QuoteSans", "QuoteSans-Bold"
    if regular not in pdfmetrics.getRegisteredFontNames():
        pdfmetrics.registerFont(TTFont(regular, settings.pdf_font_path))
        pdfmetrics.registerFont(TTFont(bold, settings.pdf_bold_font_path or settings.pdf_font_path))
    return regular, bold


def _money(value: Decimal) -> str:
    return f"{settings.currency_symbol}{value:.2f}"


class _PdfWriter:
    """Top-down text cursor that starts a new page when it runs out of room."""

    def __init__(self, pdf: canvas.Canvas, regular: str, bold: str) -> None:
        self.pdf = pdf
        self.regular = regular
        self.bold = bold
        self.y = PAGE_HEIGHT - MARGIN

    def _ensure_room(self, height: float) -> None:
        if self.y - height < MARGIN:
            self.pdf.showPage()
            self.y = PAGE_HEIGHT - MARGIN

    def line(self, text: str, size: int = 10, bold: bool = False, indent: int = 0, centered: bool = False) -> None:
        self._ensure_room(LINE_HEIGHT)
        self.pdf.setFont(self.bold if bold else self.regular, size)
        if centered:
            self.pdf.drawCentredString(PAGE_WIDTH / 2, self.y, text)
        else:
            self.pdf.drawString(MARGIN + indent, self.y, text)
        self.y -= LINE_HEIGHT + (size - 10)

    def paragraph(self, text: str, size: int = 10, indent: int = 0) -> None:
        """Draw text wrapped to the page width."""
        max_width = PAGE_WIDTH - 2 * MARGIN - indent
        words = text.split()
        current = ""
        for word in words:
            candidate = f"{current} {word}".strip()
            if pdfmetrics.stringWidth(candidate, self.regular, size) <= max_width:
                current = candidate
                continue
            if current:
                self.line(current, size=size, indent=indent)
            current = word
        if current:
            self.line(current, size=size, indent=indent)

    def rule(self) -> None:
        self._ensure_room(LINE_HEIGHT)
        self.pdf.setStrokeColorRGB(0.9, 0.9, 0.92)
        self.pdf.line(MARGIN, self.y + 4, PAGE_WIDTH - MARGIN, self.y + 4)
        self.y -= LINE_HEIGHT

    def gap(self) -> None:
        self.y -= LINE_HEIGHT / 2


def _language_block(out: _PdfWriter, quote: QuoteResponse, lang: str) -> None:
    t = QUOTE_STRINGS[lang]
    totals = quote.totals
    start = format_long_date(quote.date_range.start, lang)
    end = format_long_date(quote.date_range.end, lang)

    out.paragraph(
        f"{t['reservation_intro']} {t['from']} {start} ({t['check_in']}) {t['to']} {end} "
        f"({t['check_out']}), {t['total_nights']} {quote.nights} {t['nights']}."
    )
    out.paragraph(f"{t['guests']} {quote.guests} {t['persons']}.")
    out.paragraph(f"{t['main_guest']} {quote.main_guest}.")
    out.gap()

    out.line(t["price_breakdown"], size=12, bold=True)
    for cost in quote.breakdown.cost_lines:
        out.line(
            f"• {cost.count} {t['nights_at']} {_money(cost.unit_cost)} {t['per_night']}: {_money(cost.total)}",
            indent=10,
        )
    for discount in quote.breakdown.discount_lines:
        out.line(
            f"• {discount.tier_size} {t['nights']}, {discount.percent}% {t['discount']}: -{_money(discount.amount)}",
            indent=10,
        )
    out.line(f"• {t['accommodation']}: {_money(totals.accommodation - totals.discount)}", indent=10)
    out.line(f"• {t['cleaning']}: {_money(totals.cleaning)}", indent=10)
    out.line(f"• {t['total']}: {_money(totals.total)}", indent=10, bold=True)
    out.gap()

    out.paragraph(t["deposit_line"].format(deposit=_money(totals.deposit)))
    paid_on = (
        f"({t['payment_date']} {format_long_date(totals.payment_date, lang)})"
        if totals.payment_date
        else f"({t['not_provided']})"
    )
    out.paragraph(f"{t['partial_payment_line'].format(amount=_money(totals.partial_payment))} {paid_on}")
    due = format_long_date(totals.balance_due_date, lang) if totals.balance_due_date else t["not_provided"]
    out.paragraph(f"{t['remaining_line'].format(amount=_money(totals.remaining_balance))} {t['balance_due']} {due}.")


def render_quote_pdf(quote: QuoteResponse, languages: list[str]) -> bytes:
    """Return PDF bytes for the quote, one section per requested language."""
    regular, bold = _register_fonts()
    buffer = BytesIO()
    pdf = canvas.Canvas(buffer, pagesize=A4)
    pdf.setTitle(f"{settings.property_name}: {quote.main_guest}")
    out = _PdfWriter(pdf, regular, bold)

    out.line(settings.property_name, size=18, bold=True, centered=True)
    for info in (settings.property_address, settings.property_phone, settings.property_email):
        if info:
            out.line(info, size=9, centered=True)
    out.rule()

    langs = [lang for lang in dict.fromkeys(languages) if lang in QUOTE_STRINGS] or ["en"]
    for index, lang in enumerate(langs):
        _language_block(out, quote, lang)
        if index < len(langs) - 1:
            out.rule()

    pdf.showPage()
    pdf.save()
    buffer.seek(0)
    logger.info("Rendered quote PDF for %s (%s)", quote.main_guest, ",".join(langs))
    return buffer.read()
