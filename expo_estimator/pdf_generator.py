"""
PDF quotation generator.

Renders a saved estimate (Quote.outputs_json) as a client-facing quotation.
Uses fpdf2 (pure Python, no system dependencies).

Sections, always in this order:
1. Letterhead + quote number, date, validity
2. Exhibition details
3. Stall breakdown (by category, with position premium)
4. Cost summary (simplified path, with percentages)
5. Selected vendors (only when any were chosen)
6. Assumptions & exclusions
"""

from datetime import datetime

from fpdf import FPDF

from .config import settings

CATEGORY_NAMES = {
    "structural": "Structure (walls, flooring, ceiling, rooms)",
    "branding": "Branding & displays",
    "furniture": "Furniture",
    "technical": "Lighting & power",
    "labor": "Installation & dismantling",
    "extras": "Extras",
}

SUMMARY_LINES = [
    ("space_cost", "Floor space"),
    ("stall_fabrication_cost", "Stall fabrication"),
    ("travel_hotel", "Travel & hotel"),
    ("marketing", "Marketing"),
    ("logistics", "Logistics"),
]


def _fmt(amount) -> str:
    """Whole amount with thousands separators and the configured symbol."""
    try:
        return f"{settings.CURRENCY_SYMBOL} {float(amount):,.0f}"
    except (ValueError, TypeError):
        return f"{settings.CURRENCY_SYMBOL} 0"


def _safe(text) -> str:
    """Replace Unicode chars that can't be rendered by built-in PDF fonts (latin-1)."""
    if not text:
        return ""
    return (
        str(text)
        .replace("\u2022", "-")
        .replace("\u2014", " - ")
        .replace("\u2013", "-")
        .replace("\u201c", '"')
        .replace("\u201d", '"')
        .replace("\u2018", "'")
        .replace("\u2019", "'")
        .replace("\u20b9", settings.CURRENCY_SYMBOL)
        .encode("latin-1", errors="replace")
        .decode("latin-1")
    )


def _date_str(created) -> str:
    try:
        return datetime.fromisoformat(str(created).replace("Z", "+00:00")).strftime("%d %B %Y")
    except ValueError:
        return datetime.utcnow().strftime("%d %B %Y")


class QuotePDF(FPDF):
    """Quotation document with a page-numbered footer."""

    def __init__(self, company_name="", company_info=""):
        super().__init__()
        self.company_name = company_name
        self.company_info = company_info
        self.set_auto_page_break(auto=True, margin=20)

    def header(self):
        pass  # Letterhead is drawn once on the first page

    def footer(self):
        self.set_y(-15)
        self.set_font("Helvetica", "I", 8)
        self.set_text_color(150, 150, 150)
        self.cell(0, 10, _safe(f"{self.company_name} - Page {self.page_no()}/{{nb}}"), align="C")

    def section_header(self, title):
        self.set_font("Helvetica", "B", 11)
        self.set_fill_color(31, 64, 104)
        self.set_text_color(255, 255, 255)
        self.cell(0, 8, f"  {title}", fill=True, new_x="LMARGIN", new_y="NEXT")
        self.set_text_color(0, 0, 0)
        self.ln(2)

    def label_value(self, label, value):
        self.set_font("Helvetica", "B", 9)
        self.cell(50, 5.5, _safe(label))
        self.set_font("Helvetica", "", 9)
        self.cell(0, 5.5, _safe(value), new_x="LMARGIN", new_y="NEXT")

    def amount_row(self, label, amount, note="", bold=False):
        self.set_font("Helvetica", "B" if bold else "", 9)
        self.cell(110, 6, _safe(label))
        self.cell(30, 6, _safe(note), align="R")
        self.cell(50, 6, _fmt(amount), align="R")
        self.ln()

    def subtotal_row(self, label, amount):
        self.set_font("Helvetica", "B", 9)
        self.cell(140, 6, _safe(label), align="R", border="T")
        self.cell(50, 6, _fmt(amount), align="R", border="T")
        self.ln(8)

    def bullet_list(self, items):
        self.set_font("Helvetica", "", 8)
        width = self.w - self.l_margin - self.r_margin
        for item in items:
            self.set_x(self.l_margin)
            self.multi_cell(width, 4.5, _safe(f"  - {item}"), new_x="LMARGIN", new_y="NEXT")


def generate_quote_pdf(estimate: dict, quote_number: str = None, valid_days: int = None,
                       exhibitor: dict = None) -> bytes:
    """
    Render an estimate dict (PricingEngine.build_estimate output, as stored
    on Quote.outputs_json) to PDF bytes.
    """
    valid_days = valid_days or settings.QUOTE_VALID_DAYS
    company_info = " | ".join(
        p for p in [settings.COMPANY_ADDRESS, settings.COMPANY_PHONE, settings.COMPANY_EMAIL] if p
    )

    pdf = QuotePDF(company_name=settings.COMPANY_NAME, company_info=company_info)
    pdf.alias_nb_pages()
    pdf.add_page()

    # ── Letterhead ──
    pdf.set_font("Helvetica", "B", 20)
    pdf.cell(0, 10, _safe(settings.COMPANY_NAME.upper()), new_x="LMARGIN", new_y="NEXT")
    if settings.COMPANY_TAGLINE:
        pdf.set_font("Helvetica", "I", 9)
        pdf.cell(0, 5, _safe(settings.COMPANY_TAGLINE), new_x="LMARGIN", new_y="NEXT")
    if company_info:
        pdf.set_font("Helvetica", "", 9)
        pdf.set_text_color(100, 100, 100)
        pdf.cell(0, 5, _safe(company_info), new_x="LMARGIN", new_y="NEXT")
        pdf.set_text_color(0, 0, 0)
    pdf.ln(4)

    pdf.set_font("Helvetica", "B", 14)
    pdf.cell(0, 8, "EXHIBITION COST QUOTATION", new_x="LMARGIN", new_y="NEXT")
    pdf.set_font("Helvetica", "", 10)
    pdf.cell(0, 5, _safe(f"Quote #: {quote_number or 'DRAFT'}"), new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 5, f"Date: {_date_str(estimate.get('created_at', ''))}", new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 5, f"Valid for: {valid_days} days", new_x="LMARGIN", new_y="NEXT")
    if exhibitor and exhibitor.get("name"):
        who = exhibitor["name"]
        if exhibitor.get("company"):
            who = f"{who}, {exhibitor['company']}"
        pdf.cell(0, 5, _safe(f"Prepared for: {who}"), new_x="LMARGIN", new_y="NEXT")
    pdf.ln(4)

    # ── Exhibition details ──
    event = estimate.get("event") or {}
    stall = estimate.get("stall") or {}
    pdf.section_header("EXHIBITION DETAILS")
    pdf.label_value("Exhibition", event.get("exhibition_name") or "-")
    origin = ", ".join(p for p in [event.get("origin_city"), event.get("origin_state")] if p)
    destination = ", ".join(p for p in [event.get("destination_city"), event.get("destination_state")] if p)
    pdf.label_value("Travelling from", origin or "-")
    pdf.label_value("Venue city", destination or "-")
    if event.get("start_date"):
        pdf.label_value("Dates", f"{event.get('start_date')} to {event.get('end_date') or '-'}")
    pdf.label_value("Team size", str(event.get("team_size") or 1))
    pdf.label_value(
        "Booth",
        f"{stall.get('area', 0):g} {stall.get('area_unit', 'sqm')}, "
        f"{str(stall.get('booth_type', '')).replace('_', ' ')}, "
        f"{stall.get('booth_position', 'inline')} position",
    )
    pdf.label_value("Design", estimate.get("fabrication_details") or "Base package")
    pdf.ln(4)

    # ── Stall breakdown ──
    breakdown = estimate.get("stall_breakdown") or {}
    pdf.section_header("STALL BREAKDOWN (INDICATIVE)")
    for key, amount in (breakdown.get("category_totals") or {}).items():
        pdf.amount_row(CATEGORY_NAMES.get(key, key.replace("_", " ").title()), amount)
    pdf.subtotal_row("Stall Subtotal", breakdown.get("subtotal", 0))

    multiplier = breakdown.get("position_multiplier", 1.0) or 1.0
    if multiplier > 1.0:
        pdf.amount_row(
            f"Position premium ({stall.get('booth_position', '')})",
            breakdown.get("position_premium", 0),
            note=f"x{multiplier:.2f}",
        )
    pdf.subtotal_row("Stall Build Total", breakdown.get("total_cost", 0))

    # ── Cost summary ──
    simplified = estimate.get("simplified") or {}
    amounts = simplified.get("breakdown") or {}
    percentages = simplified.get("percentages") or {}
    pdf.section_header("COST SUMMARY")
    for key, label in SUMMARY_LINES:
        pdf.amount_row(label, amounts.get(key, 0), note=f"{percentages.get(key, 0):.1f}%")
    pdf.set_font("Helvetica", "", 8)
    pdf.set_text_color(100, 100, 100)
    pdf.cell(
        0, 5,
        _safe(f"Fabrication at {_fmt(simplified.get('fabrication_rate_per_sqm', 0))} per sqm "
              f"over {simplified.get('area_sqm', 0):g} sqm"),
        new_x="LMARGIN", new_y="NEXT",
    )
    pdf.set_text_color(0, 0, 0)

    pdf.ln(1)
    pdf.set_fill_color(31, 64, 104)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font("Helvetica", "B", 13)
    pdf.cell(130, 10, "  ESTIMATED TOTAL", fill=True)
    pdf.cell(60, 10, f"{_fmt(estimate.get('total', 0))}  ", fill=True, align="R")
    pdf.set_text_color(0, 0, 0)
    pdf.ln(14)

    # ── Vendors ──
    vendors = estimate.get("vendors") or []
    if vendors:
        pdf.section_header("RECOMMENDED VENDORS")
        for v in vendors:
            pdf.set_font("Helvetica", "B", 9)
            pdf.cell(80, 5.5, _safe(v.get("name", "")))
            pdf.set_font("Helvetica", "", 9)
            pdf.cell(60, 5.5, _safe(str(v.get("category", "")).replace("_", " ")))
            pdf.cell(50, 5.5, _safe(v.get("city", "")), new_x="LMARGIN", new_y="NEXT")
        pdf.ln(3)

    # ── Assumptions & exclusions ──
    assumptions = estimate.get("assumptions") or []
    exclusions = estimate.get("exclusions") or []
    if assumptions:
        pdf.section_header("ASSUMPTIONS")
        pdf.bullet_list(assumptions)
        pdf.ln(3)
    if exclusions:
        pdf.section_header("EXCLUSIONS")
        pdf.bullet_list(exclusions)
        pdf.ln(3)

    pdf.set_font("Helvetica", "I", 8)
    pdf.set_text_color(100, 100, 100)
    pdf.cell(0, 4, f"This quotation is valid for {valid_days} days from the date above.",
             new_x="LMARGIN", new_y="NEXT")
    pdf.cell(0, 4, f"All amounts in {settings.CURRENCY}.", new_x="LMARGIN", new_y="NEXT")
    pdf.set_text_color(0, 0, 0)

    return bytes(pdf.output())
