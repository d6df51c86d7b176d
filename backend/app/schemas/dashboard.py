from __future__ import annotations

from datetime import date
from decimal import Decimal

from pydantic import BaseModel


class DashboardStats(BaseModel):
    as_of_date: date
    today_sales: Decimal
    today_imports: Decimal
    stock_value: Decimal
    total_receivables: Decimal
    total_payables: Decimal
    today_cash: Decimal  # cash sales + receipts - supplier payments
