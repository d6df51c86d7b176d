from __future__ import annotations

import enum
from datetime import datetime
from decimal import Decimal

from sqlalchemy import DateTime, Enum, Index, Integer, Numeric, String, func
from sqlalchemy.orm import Mapped, mapped_column

from backend.app.core.database import Base


class PaymentType(str, enum.Enum):
    CUSTOMER = "customer"
    SUPPLIER = "supplier"


class Payment(Base):
    """Money received from a customer or paid to a supplier.

    ``partner_id`` points at ``customers.id`` or ``suppliers.id`` depending on
    ``type``, so it carries no foreign key. Payments are never allocated to
    individual invoices.
    """

    __tablename__ = "payments"

    id: Mapped[int] = mapped_column(Integer, primary_key=True, autoincrement=True)
    type: Mapped[PaymentType] = mapped_column(
        Enum(PaymentType, values_callable=lambda e: [m.value for m in e]),
        nullable=False,
    )
    partner_id: Mapped[int] = mapped_column(Integer, nullable=False)
    amount: Mapped[Decimal] = mapped_column(
        Numeric(precision=20, scale=2), nullable=False
    )
    method: Mapped[str] = mapped_column(String(50), nullable=False, default="cash")
    created_at: Mapped[datetime] = mapped_column(
        DateTime(timezone=True), server_default=func.now()
    )

    __table_args__ = (
        Index("ix_payments_type_partner", "type", "partner_id"),
        Index("ix_payments_created_at", "created_at"),
    )
