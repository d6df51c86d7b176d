"""Service layer for the daily, supplier and customer reports."""
from __future__ import annotations

import logging
from datetime import date, datetime, timedelta, timezone
from zoneinfo import ZoneInfo

from sqlalchemy import and_, case
from sqlalchemy.orm import Query, Session

from backend.app.core.config import settings
from backend.app.core.database import MAX_ID
from backend.app.models.customer import Customer, SalesInvoice
from backend.app.models.payment import Payment, PaymentType
from backend.app.models.supplier import ImportInvoice, Supplier
from backend.app.schemas.reports import (
    CustomerReport,
    DailyReport,
    ImportRow,
    PartnerSummary,
    PaymentRow,
    ReportType,
    SaleRow,
    SupplierReport,
)
from backend.app.services.exceptions import (
    CustomerNotFoundError,
    ReportValidationError,
    SupplierNotFoundError,
)

logger = logging.getLogger(__name__)


# ── Helpers ──────────────────────────────────────────────────────────────────


def today() -> date:
    """Current calendar date in the report timezone."""
    return datetime.now(ZoneInfo(settings.REPORT_TIMEZONE)).date()


def day_bounds(day: date, tz_name: str | None = None) -> tuple[datetime, datetime]:
    """UTC ``[start, end)`` of *day* as observed in the report timezone."""
    tz = ZoneInfo(tz_name or settings.REPORT_TIMEZONE)
    start = datetime(day.year, day.month, day.day, tzinfo=tz)
    end = start + timedelta(days=1)
    return start.astimezone(timezone.utc), end.astimezone(timezone.utc)


def _parse_report_date(selector: str | date | None) -> date:
    if isinstance(selector, date):
        return selector
    if selector is None or not str(selector).strip():
        raise ReportValidationError("Please select a date")
    try:
        return date.fromisoformat(str(selector).strip())
    except ValueError:
        raise ReportValidationError(f"Invalid report date: {selector!r}") from None


def _parse_entity_id(selector: str | int | None, label: str) -> int:
    if selector is None or not str(selector).strip():
        raise ReportValidationError(f"Please select a {label}")
    try:
        entity_id = int(str(selector).strip())
    except ValueError:
        raise ReportValidationError(f"Invalid {label} id: {selector!r}") from None
    if not 1 <= entity_id <= MAX_ID:
        raise ReportValidationError(f"Invalid {label} id: {selector!r}")
    return entity_id


def _sales_query(db: Session) -> Query:
    return db.query(
        SalesInvoice.id,
        SalesInvoice.customer_id,
        Customer.name.label("customer_name"),
        SalesInvoice.type,
        SalesInvoice.total_amount,
        SalesInvoice.created_at,
    ).join(Customer, SalesInvoice.customer_id == Customer.id)


def _imports_query(db: Session) -> Query:
    return db.query(
        ImportInvoice.id,
        ImportInvoice.supplier_id,
        Supplier.name.label("supplier_name"),
        ImportInvoice.invoice_no,
        ImportInvoice.total_amount,
        ImportInvoice.created_at,
    ).join(Supplier, ImportInvoice.supplier_id == Supplier.id)


def _payments_query(db: Session) -> Query:
    """Payments with the partner's name resolved against the table ``type`` names."""
    partner_name = case(
        (Payment.type == PaymentType.CUSTOMER, Customer.name),
        else_=Supplier.name,
    )
    return (
        db.query(
            Payment.id,
            Payment.type,
            Payment.partner_id,
            partner_name.label("partner_name"),
            Payment.amount,
            Payment.method,
            Payment.created_at,
        )
        .outerjoin(
            Customer,
            and_(Payment.type == PaymentType.CUSTOMER, Customer.id == Payment.partner_id),
        )
        .outerjoin(
            Supplier,
            and_(Payment.type == PaymentType.SUPPLIER, Supplier.id == Payment.partner_id),
        )
    )


def _sale_rows(query: Query) -> list[SaleRow]:
    return [SaleRow(**r._mapping) for r in query.all()]


def _import_rows(query: Query) -> list[ImportRow]:
    return [ImportRow(**r._mapping) for r in query.all()]


def _payment_rows(query: Query) -> list[PaymentRow]:
    return [PaymentRow(**r._mapping) for r in query.all()]


# ── Daily ───────────────────────────────────────────────────────────────────


def get_daily_report(db: Session, report_date: date) -> DailyReport:
    """Sales, imports and payments recorded on *report_date*, oldest first."""
    start, end = day_bounds(report_date)

    sales = _sale_rows(
        _sales_query(db)
        .filter(SalesInvoice.created_at >= start, SalesInvoice.created_at < end)
        .order_by(SalesInvoice.created_at, SalesInvoice.id)
    )
    imports = _import_rows(
        _imports_query(db)
        .filter(ImportInvoice.created_at >= start, ImportInvoice.created_at < end)
        .order_by(ImportInvoice.created_at, ImportInvoice.id)
    )
    payments = _payment_rows(
        _payments_query(db)
        .filter(Payment.created_at >= start, Payment.created_at < end)
        .order_by(Payment.created_at, Payment.id)
    )
    return DailyReport(
        report_date=report_date, sales=sales, imports=imports, payments=payments
    )


# ── Supplier ────────────────────────────────────────────────────────────────


def get_supplier_report(db: Session, supplier_id: int) -> SupplierReport:
    """Supplier balance with full import and payment history, newest first."""
    if not 1 <= supplier_id <= MAX_ID:
        raise SupplierNotFoundError(supplier_id)
    supplier = db.query(Supplier).filter(Supplier.id == supplier_id).first()
    if supplier is None:
        raise SupplierNotFoundError(supplier_id)

    invoices = _import_rows(
        _imports_query(db)
        .filter(ImportInvoice.supplier_id == supplier_id)
        .order_by(ImportInvoice.created_at.desc(), ImportInvoice.id.desc())
    )
    payments = _payment_rows(
        _payments_query(db)
        .filter(
            Payment.type == PaymentType.SUPPLIER,
            Payment.partner_id == supplier_id,
        )
        .order_by(Payment.created_at.desc(), Payment.id.desc())
    )
    return SupplierReport(
        supplier=PartnerSummary(
            id=supplier.id,
            name=supplier.name,
            phone=supplier.phone,
            ledger_balance=supplier.ledger_balance,
        ),
        invoices=invoices,
        payments=payments,
    )


# ── Customer ────────────────────────────────────────────────────────────────


def get_customer_report(db: Session, customer_id: int) -> CustomerReport:
    """Customer balance with full sales and payment history, newest first."""
    if not 1 <= customer_id <= MAX_ID:
        raise CustomerNotFoundError(customer_id)
    customer = db.query(Customer).filter(Customer.id == customer_id).first()
    if customer is None:
        raise CustomerNotFoundError(customer_id)

    invoices = _sale_rows(
        _sales_query(db)
        .filter(SalesInvoice.customer_id == customer_id)
        .order_by(SalesInvoice.created_at.desc(), SalesInvoice.id.desc())
    )
    payments = _payment_rows(
        _payments_query(db)
        .filter(
            Payment.type == PaymentType.CUSTOMER,
            Payment.partner_id == customer_id,
        )
        .order_by(Payment.created_at.desc(), Payment.id.desc())
    )
    return CustomerReport(
        customer=PartnerSummary(
            id=customer.id,
            name=customer.name,
            phone=customer.phone,
            ledger_balance=customer.ledger_balance,
        ),
        invoices=invoices,
        payments=payments,
    )


# ── Dispatch ────────────────────────────────────────────────────────────────


def generate_report(
    db: Session,
    report_type: ReportType | str,
    selector: str | int | date | None,
) -> DailyReport | SupplierReport | CustomerReport:
    """Build the report named by *report_type* for *selector*.

    The selector is an ISO date for ``daily`` and an entity id for
    ``supplier``/``customer``. It is validated before any query is issued;
    ``ReportValidationError`` is raised when it is missing or malformed.
    """
    try:
        report_type = ReportType(report_type)
    except ValueError:
        raise ReportValidationError(f"Unknown report type: {report_type!r}") from None

    if report_type is ReportType.DAILY:
        report_date = _parse_report_date(selector)
        logger.debug("Generating daily report for %s", report_date)
        return get_daily_report(db, report_date)

    if report_type is ReportType.SUPPLIER:
        supplier_id = _parse_entity_id(selector, "supplier")
        logger.debug("Generating supplier report for %s", supplier_id)
        return get_supplier_report(db, supplier_id)

    customer_id = _parse_entity_id(selector, "customer")
    logger.debug("Generating customer report for %s", customer_id)
    return get_customer_report(db, customer_id)
