from __future__ import annotations

from datetime import datetime
from decimal import Decimal

from pydantic import BaseModel

from backend.app.models.customer import InvoiceType


# ─── Summary ──────────────────────────────────────────────────────────────────


class LedgerSummary(BaseModel):
    total_invoices: int
    total_purchase: Decimal
    total_cash: Decimal
    total_credit: Decimal
    total_paid: Decimal
    balance: Decimal  # stored customers.ledger_balance, passed through


class CustomerLedgerRow(LedgerSummary):
    """One line of the general ledger: a customer plus its summary."""

    id: int
    name: str
    phone: str | None


# ─── Detail ───────────────────────────────────────────────────────────────────


class LedgerCustomer(BaseModel):
    id: int
    name: str
    phone: str | None


class LedgerInvoice(BaseModel):
    id: int
    invoice_number: str
    date: datetime
    type: InvoiceType
    total_amount: Decimal
    items_count: int


class LedgerPayment(BaseModel):
    id: int
    amount: Decimal
    payment_type: str
    # No backing columns yet; None means "no data", not "left blank"
    reference: str | None = None
    notes: str | None = None
    created_at: datetime


class CustomerLedgerDetail(BaseModel):
    customer: LedgerCustomer
    invoices: list[LedgerInvoice]
    payments: list[LedgerPayment]
    summary: LedgerSummary
