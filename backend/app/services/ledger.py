"""Customer ledger aggregation.

Read-only. Totals are computed from sales invoices and customer payments on
every call; ``balance`` is the stored ``customers.ledger_balance`` column and
is passed through untouched, so it can legitimately disagree with
``total_purchase - total_paid``.
"""
from __future__ import annotations

from decimal import Decimal
from typing import Any

from sqlalchemy import case, distinct, func, select
from sqlalchemy.orm import Query, Session

from backend.app.core.database import MAX_ID
from backend.app.models.customer import Customer, InvoiceType, SalesInvoice, SalesItem
from backend.app.models.payment import Payment, PaymentType
from backend.app.schemas.ledger import (
    CustomerLedgerDetail,
    CustomerLedgerRow,
    LedgerCustomer,
    LedgerInvoice,
    LedgerPayment,
    LedgerSummary,
)
from backend.app.services.exceptions import CustomerNotFoundError

ZERO = Decimal("0")


# ── Helpers ──────────────────────────────────────────────────────────────────


def invoice_number(invoice_id: int) -> str:
    """Display id for a sales invoice, e.g. 7 -> ``INV-00007``.

    Ids wider than five digits are kept whole, never truncated.
    """
    return f"INV-{invoice_id:05d}"


def _dec(value: object) -> Decimal:
    return ZERO if value is None else Decimal(str(value))


def _type_total(invoice_type: InvoiceType) -> Any:
    return func.coalesce(
        func.sum(
            case(
                (SalesInvoice.type == invoice_type, SalesInvoice.total_amount),
                else_=0,
            )
        ),
        0,
    )


def _summary_query(db: Session) -> Query:
    """One row per customer: invoice totals split by type, payments, balance.

    Payments are summed in a correlated subquery rather than joined, so the
    invoice join cannot multiply them.
    """
    total_paid = (
        select(func.coalesce(func.sum(Payment.amount), 0))
        .where(
            Payment.type == PaymentType.CUSTOMER,
            Payment.partner_id == Customer.id,
        )
        .correlate(Customer)
        .scalar_subquery()
    )
    return (
        db.query(
            Customer.id,
            Customer.name,
            Customer.phone,
            func.count(distinct(SalesInvoice.id)).label("total_invoices"),
            func.coalesce(func.sum(SalesInvoice.total_amount), 0).label("total_purchase"),
            _type_total(InvoiceType.CASH).label("total_cash"),
            _type_total(InvoiceType.CREDIT).label("total_credit"),
            total_paid.label("total_paid"),
            Customer.ledger_balance.label("balance"),
        )
        .outerjoin(SalesInvoice, SalesInvoice.customer_id == Customer.id)
        .group_by(Customer.id, Customer.name, Customer.phone, Customer.ledger_balance)
    )


def _summary_fields(row: Any) -> dict[str, object]:
    return {
        "total_invoices": row.total_invoices or 0,
        "total_purchase": _dec(row.total_purchase),
        "total_cash": _dec(row.total_cash),
        "total_credit": _dec(row.total_credit),
        "total_paid": _dec(row.total_paid),
        "balance": _dec(row.balance),
    }


def empty_summary() -> LedgerSummary:
    return LedgerSummary(
        total_invoices=0,
        total_purchase=ZERO,
        total_cash=ZERO,
        total_credit=ZERO,
        total_paid=ZERO,
        balance=ZERO,
    )


# ── General ledger ──────────────────────────────────────────────────────────


def list_customer_ledgers(db: Session) -> list[CustomerLedgerRow]:
    """Ledger summary for every customer, ordered by name.

    Customers without invoices are included with zero totals.
    """
    rows = _summary_query(db).order_by(Customer.name).all()
    return [
        CustomerLedgerRow(id=r.id, name=r.name, phone=r.phone, **_summary_fields(r))
        for r in rows
    ]


# ── Customer ledger ─────────────────────────────────────────────────────────


def get_customer_ledger(db: Session, customer_id: int) -> CustomerLedgerDetail:
    """Customer info, invoice history, payment history and summary.

    Raises ``CustomerNotFoundError`` when the id is unknown.
    """
    if not 1 <= customer_id <= MAX_ID:
        raise CustomerNotFoundError(customer_id)

    customer = (
        db.query(Customer.id, Customer.name, Customer.phone)
        .filter(Customer.id == customer_id)
        .first()
    )
    if customer is None:
        raise CustomerNotFoundError(customer_id)

    invoice_rows = (
        db.query(
            SalesInvoice.id,
            SalesInvoice.created_at,
            SalesInvoice.type,
            SalesInvoice.total_amount,
            func.count(SalesItem.id).label("items_count"),
        )
        .outerjoin(SalesItem, SalesItem.invoice_id == SalesInvoice.id)
        .filter(SalesInvoice.customer_id == customer_id)
        .group_by(
            SalesInvoice.id,
            SalesInvoice.created_at,
            SalesInvoice.type,
            SalesInvoice.total_amount,
        )
        .order_by(SalesInvoice.created_at.desc(), SalesInvoice.id.desc())
        .all()
    )

    payment_rows = (
        db.query(Payment.id, Payment.amount, Payment.method, Payment.created_at)
        .filter(
            Payment.type == PaymentType.CUSTOMER,
            Payment.partner_id == customer_id,
        )
        .order_by(Payment.created_at.desc(), Payment.id.desc())
        .all()
    )

    summary_row = _summary_query(db).filter(Customer.id == customer_id).one_or_none()
    # Customer deleted between the lookup and the aggregate
    summary = (
        LedgerSummary(**_summary_fields(summary_row))
        if summary_row is not None
        else empty_summary()
    )

    return CustomerLedgerDetail(
        customer=LedgerCustomer(id=customer.id, name=customer.name, phone=customer.phone),
        invoices=[
            LedgerInvoice(
                id=r.id,
                invoice_number=invoice_number(r.id),
                date=r.created_at,
                type=r.type,
                total_amount=_dec(r.total_amount),
                items_count=r.items_count,
            )
            for r in invoice_rows
        ],
        payments=[
            LedgerPayment(
                id=r.id,
                amount=_dec(r.amount),
                payment_type=r.method,
                created_at=r.created_at,
            )
            for r in payment_rows
        ],
        summary=summary,
    )
