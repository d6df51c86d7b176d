"""PDF export of the general ledger and customer ledgers using fpdf2."""
from __future__ import annotations

import io
from datetime import date, datetime
from decimal import Decimal

from fpdf import FPDF

from backend.app.core.config import settings
from backend.app.schemas.ledger import CustomerLedgerDetail, CustomerLedgerRow


# ── Shared helpers ──────────────────────────────────────────────────────────

_COL_BG = (36, 42, 42)      # header row
_SEC_BG = (235, 224, 192)   # section band
_LINE_H = 7


def _new_pdf(title: str, subtitle: str, landscape: bool = True) -> FPDF:
    pdf = FPDF(orientation="L" if landscape else "P")
    pdf.add_page()
    pdf.set_auto_page_break(auto=True, margin=15)
    pdf.set_font("Helvetica", "B", 16)
    pdf.cell(0, 10, _safe_text(title))
    pdf.ln()
    pdf.set_font("Helvetica", "", 9)
    pdf.cell(0, 6, _safe_text(subtitle))
    pdf.ln(10)
    return pdf


def _header_row(pdf: FPDF, headers: list[str], widths: list[int]) -> None:
    """Draw a colored header row."""
    pdf.set_fill_color(*_COL_BG)
    pdf.set_text_color(255, 255, 255)
    pdf.set_font("Helvetica", "B", 9)
    for i, (h, w) in enumerate(zip(headers, widths)):
        align = "R" if i > 0 else "L"
        pdf.cell(w, _LINE_H, h, border=1, fill=True, align=align)
    pdf.ln()
    pdf.set_text_color(0, 0, 0)


def _data_row(pdf: FPDF, values: list[str], widths: list[int], bold: bool = False) -> None:
    pdf.set_font("Helvetica", "B" if bold else "", 8)
    for i, (v, w) in enumerate(zip(values, widths)):
        align = "R" if i > 0 else "L"
        pdf.cell(w, _LINE_H, _safe_text(v), border="B", align=align)
    pdf.ln()


def _section_header(pdf: FPDF, text: str, total_width: int) -> None:
    pdf.set_fill_color(*_SEC_BG)
    pdf.set_font("Helvetica", "B", 9)
    pdf.cell(total_width, _LINE_H, _safe_text(text), fill=True)
    pdf.ln()


def _money(value: Decimal) -> str:
    """Thousands-separated amount with the currency label, e.g. ``Rs. 8,000.00``."""
    return f"{settings.CURRENCY_LABEL} {value:,.2f}"


def _day(value: datetime | date) -> str:
    return value.strftime("%d/%m/%Y")


def _safe_text(text: str) -> str:
    """Replace non-latin-1 characters, which the built-in fonts cannot draw."""
    return text.encode("latin-1", errors="replace").decode("latin-1")


def _to_bytes(pdf: FPDF) -> io.BytesIO:
    buf = io.BytesIO()
    pdf.output(buf)
    buf.seek(0)
    return buf


# ── General ledger ──────────────────────────────────────────────────────────


def export_general_ledger_pdf(rows: list[CustomerLedgerRow], generated_on: date) -> io.BytesIO:
    pdf = _new_pdf(
        "General Ledger - Customer Summary",
        f"Generated on {_day(generated_on)}  |  {len(rows)} customers",
    )
    headers = ["Customer", "Phone", "Invoices", "Total Purchase", "Cash", "Credit", "Paid", "Balance"]
    widths = [60, 35, 20, 32, 32, 32, 32, 34]
    _header_row(pdf, headers, widths)
    for r in rows:
        _data_row(
            pdf,
            [
                r.name,
                r.phone or "-",
                str(r.total_invoices),
                _money(r.total_purchase),
                _money(r.total_cash),
                _money(r.total_credit),
                _money(r.total_paid),
                _money(r.balance),
            ],
            widths,
        )
    return _to_bytes(pdf)


# ── Customer ledger ─────────────────────────────────────────────────────────


def export_customer_ledger_pdf(detail: CustomerLedgerDetail, generated_on: date) -> io.BytesIO:
    customer = detail.customer
    summary = detail.summary
    pdf = _new_pdf(
        f"Customer Ledger - {customer.name}",
        f"{customer.phone or 'No phone'}  |  Generated on {_day(generated_on)}",
        landscape=False,
    )

    widths = [40, 35, 30, 25, 60]
    total_width = sum(widths)
    _section_header(pdf, "Invoices", total_width)
    _header_row(pdf, ["Invoice #", "Date", "Type", "Items", "Amount"], widths)
    for inv in detail.invoices:
        _data_row(
            pdf,
            [
                inv.invoice_number,
                _day(inv.date),
                inv.type.value,
                str(inv.items_count),
                _money(inv.total_amount),
            ],
            widths,
        )
    pdf.ln(4)

    pay_widths = [40, 65, 85]
    _section_header(pdf, "Payments", sum(pay_widths))
    _header_row(pdf, ["Date", "Type", "Amount"], pay_widths)
    for p in detail.payments:
        _data_row(pdf, [_day(p.created_at), p.payment_type, _money(p.amount)], pay_widths)
    pdf.ln(4)

    sum_widths = [110, 80]
    _section_header(pdf, "Summary", sum(sum_widths))
    for label, value in [
        ("Total Purchase", summary.total_purchase),
        ("Cash Purchases", summary.total_cash),
        ("Credit Purchases", summary.total_credit),
        ("Total Paid", summary.total_paid),
    ]:
        _data_row(pdf, [label, _money(value)], sum_widths)
    _data_row(pdf, ["Balance", _money(summary.balance)], sum_widths, bold=True)

    return _to_bytes(pdf)
