from __future__ import annotations

from datetime import date
from decimal import Decimal

from sqlalchemy import func
from sqlalchemy.orm import Session

from backend.app.models.customer import Customer, InvoiceType, SalesInvoice
from backend.app.models.payment import Payment, PaymentType
from backend.app.models.product import Product
from backend.app.models.supplier import ImportInvoice, Supplier
from backend.app.schemas.dashboard import DashboardStats
from backend.app.services.reports import day_bounds

ZERO = Decimal("0")
CENTS = Decimal("0.01")


def _scalar(db: Session, expr: object, *criteria: object) -> Decimal:
    value = db.query(func.coalesce(expr, 0)).filter(*criteria).scalar()
    if value is None:
        return ZERO
    return Decimal(str(value)).quantize(CENTS)


def get_dashboard_stats(db: Session, as_of_date: date) -> DashboardStats:
    """Headline figures for *as_of_date* plus current stock and balances."""
    start, end = day_bounds(as_of_date)

    today_sales = _scalar(
        db,
        func.sum(SalesInvoice.total_amount),
        SalesInvoice.created_at >= start,
        SalesInvoice.created_at < end,
    )
    today_cash_sales = _scalar(
        db,
        func.sum(SalesInvoice.total_amount),
        SalesInvoice.type == InvoiceType.CASH,
        SalesInvoice.created_at >= start,
        SalesInvoice.created_at < end,
    )
    today_imports = _scalar(
        db,
        func.sum(ImportInvoice.total_amount),
        ImportInvoice.created_at >= start,
        ImportInvoice.created_at < end,
    )
    received = _scalar(
        db,
        func.sum(Payment.amount),
        Payment.type == PaymentType.CUSTOMER,
        Payment.created_at >= start,
        Payment.created_at < end,
    )
    paid_out = _scalar(
        db,
        func.sum(Payment.amount),
        Payment.type == PaymentType.SUPPLIER,
        Payment.created_at >= start,
        Payment.created_at < end,
    )

    stock_value = _scalar(db, func.sum(Product.stock_quantity * Product.purchase_price))
    total_receivables = _scalar(db, func.sum(Customer.ledger_balance))
    total_payables = _scalar(db, func.sum(Supplier.ledger_balance))

    return DashboardStats(
        as_of_date=as_of_date,
        today_sales=today_sales,
        today_imports=today_imports,
        stock_value=stock_value,
        total_receivables=total_receivables,
        total_payables=total_payables,
        today_cash=today_cash_sales + received - paid_out,
    )
