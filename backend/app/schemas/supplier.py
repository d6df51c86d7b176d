from __future__ import annotations

from decimal import Decimal

from pydantic import BaseModel


class SupplierOut(BaseModel):
    id: int
    name: str
    phone: str | None
    address: str | None
    ledger_balance: Decimal

    class Config:
        from_attributes = True
