"""CSV export of a single report section (sales, imports, invoices, payments)."""
from __future__ import annotations

import csv
import io

from pydantic import BaseModel

from backend.app.schemas.reports import (
    CustomerReport,
    DailyReport,
    ImportRow,
    PaymentRow,
    SaleRow,
    SupplierReport,
)
from backend.app.services.exceptions import ReportValidationError


def report_sections(
    report: DailyReport | SupplierReport | CustomerReport,
) -> dict[str, tuple[type[BaseModel], list[BaseModel]]]:
    """Exportable sections of *report*, keyed by section name."""
    if isinstance(report, DailyReport):
        return {
            "sales": (SaleRow, list(report.sales)),
            "imports": (ImportRow, list(report.imports)),
            "payments": (PaymentRow, list(report.payments)),
        }
    if isinstance(report, SupplierReport):
        return {
            "invoices": (ImportRow, list(report.invoices)),
            "payments": (PaymentRow, list(report.payments)),
        }
    return {
        "invoices": (SaleRow, list(report.invoices)),
        "payments": (PaymentRow, list(report.payments)),
    }


def export_report_section_csv(
    report: DailyReport | SupplierReport | CustomerReport, section: str,
) -> str:
    """Render one report section as CSV text with a header row.

    Raises ``ReportValidationError`` if *section* does not exist for the report type.
    """
    sections = report_sections(report)
    if section not in sections:
        raise ReportValidationError(
            f"Unknown section {section!r} for {report.report_type} report; "
            f"expected one of: {', '.join(sections)}"
        )
    row_model, rows = sections[section]
    # Header comes from the row model so empty sections still get one
    fields = list(row_model.model_fields)

    output = io.StringIO()
    writer = csv.writer(output)
    writer.writerow(fields)
    for row in rows:
        data = row.model_dump(mode="json")
        writer.writerow(["" if data[f] is None else data[f] for f in fields])
    return output.getvalue()
