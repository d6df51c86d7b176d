"""Report payloads, one model per report type.

``Report`` is a discriminated union on ``report_type`` so each variant keeps
its own shape instead of sharing a bag of optional fields.
"""
from __future__ import annotations

import enum
from datetime import date, datetime
from decimal import Decimal
from typing import Annotated, Literal, Union

from pydantic import BaseModel, Field

from backend.app.models.customer import InvoiceType
from backend.app.models.payment import PaymentType


class ReportType(str, enum.Enum):
    DAILY = "daily"
    SUPPLIER = "supplier"
    CUSTOMER = "customer"


# ─── Rows ─────────────────────────────────────────────────────────────────────


class SaleRow(BaseModel):
    id: int
    customer_id: int
    customer_name: str
    type: InvoiceType
    total_amount: Decimal
    created_at: datetime


class ImportRow(BaseModel):
    id: int
    supplier_id: int
    supplier_name: str
    invoice_no: str | None
    total_amount: Decimal
    created_at: datetime


class PaymentRow(BaseModel):
    id: int
    type: PaymentType
    partner_id: int
    partner_name: str | None  # None when the partner row no longer exists
    amount: Decimal
    method: str
    created_at: datetime


class PartnerSummary(BaseModel):
    id: int
    name: str
    phone: str | None
    ledger_balance: Decimal


# ─── Variants ─────────────────────────────────────────────────────────────────


class DailyReport(BaseModel):
    report_type: Literal["daily"] = "daily"
    report_date: date
    sales: list[SaleRow]
    imports: list[ImportRow]
    payments: list[PaymentRow]


class SupplierReport(BaseModel):
    report_type: Literal["supplier"] = "supplier"
    supplier: PartnerSummary
    invoices: list[ImportRow]
    payments: list[PaymentRow]


class CustomerReport(BaseModel):
    report_type: Literal["customer"] = "customer"
    customer: PartnerSummary
    invoices: list[SaleRow]
    payments: list[PaymentRow]


Report = Annotated[
    Union[DailyReport, SupplierReport, CustomerReport],
    Field(discriminator="report_type"),
]
