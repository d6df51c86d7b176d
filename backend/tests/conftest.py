"""Shared test fixtures.

Tests run against an in-memory SQLite database unless ``TEST_DATABASE_URL``
points elsewhere. The schema is created before and dropped after every test,
so tests never see each other's rows.
"""

from __future__ import annotations

import os

os.environ["DATABASE_URL"] = os.environ.get(
    "TEST_DATABASE_URL", "sqlite+pysqlite:///:memory:"
)

from datetime import datetime, timezone  # noqa: E402
from decimal import Decimal  # noqa: E402
from typing import Generator  # noqa: E402

import pytest  # noqa: E402
from fastapi.testclient import TestClient  # noqa: E402
from sqlalchemy.orm import Session  # noqa: E402

from backend.app.api.v1.endpoints.auth import login_limiter  # noqa: E402
from backend.app.core import security  # noqa: E402
from backend.app.core.database import Base, SessionLocal, engine, get_db  # noqa: E402
from backend.app.core.security import create_access_token, get_password_hash  # noqa: E402
from backend.app.main import app  # noqa: E402
from backend.app.models import (  # noqa: E402
    Customer,
    ImportInvoice,
    InvoiceType,
    Payment,
    PaymentType,
    Product,
    SalesInvoice,
    SalesItem,
    Supplier,
    User,
)

TEST_PASSWORD = "secret-pass"


# ─── DB session with a fresh schema per test ─────────────────────────────────


@pytest.fixture()
def db() -> Generator[Session, None, None]:
    Base.metadata.create_all(bind=engine)
    session = SessionLocal()
    try:
        yield session
    finally:
        session.close()
        Base.metadata.drop_all(bind=engine)


@pytest.fixture()
def client(db: Session) -> Generator[TestClient, None, None]:
    """FastAPI TestClient wired to the test session."""

    def _override_get_db() -> Generator[Session, None, None]:
        yield db

    app.dependency_overrides[get_db] = _override_get_db
    with TestClient(app) as c:
        yield c
    app.dependency_overrides.clear()


@pytest.fixture(autouse=True)
def _reset_auth_state() -> Generator[None, None, None]:
    """Login throttling and the logout deny-list are process-wide."""
    login_limiter.reset()
    security._revoked_tokens.clear()
    yield
    login_limiter.reset()
    security._revoked_tokens.clear()


# ─── Auth helpers ─────────────────────────────────────────────────────────────


@pytest.fixture()
def user(db: Session) -> User:
    u = User(
        name="Test Admin",
        email="admin@test.com",
        password_hash=get_password_hash(TEST_PASSWORD),
    )
    db.add(u)
    db.commit()
    return u


@pytest.fixture()
def token(user: User) -> str:
    return create_access_token(subject=str(user.id))


def auth(token: str) -> dict[str, str]:
    """Return Authorization header dict."""
    return {"Authorization": f"Bearer {token}"}


# ─── Data builders ───────────────────────────────────────────────────────────


def at(year: int, month: int, day: int, hour: int = 12, minute: int = 0) -> datetime:
    return datetime(year, month, day, hour, minute, tzinfo=timezone.utc)


def make_customer(
    db: Session,
    name: str,
    phone: str | None = None,
    ledger_balance: Decimal | str = "0",
) -> Customer:
    c = Customer(name=name, phone=phone, ledger_balance=Decimal(ledger_balance))
    db.add(c)
    db.commit()
    return c


def make_supplier(
    db: Session,
    name: str,
    phone: str | None = None,
    ledger_balance: Decimal | str = "0",
) -> Supplier:
    s = Supplier(name=name, phone=phone, ledger_balance=Decimal(ledger_balance))
    db.add(s)
    db.commit()
    return s


def make_product(
    db: Session,
    name: str = "Hydraulic pump",
    stock_quantity: int = 0,
    purchase_price: Decimal | str = "0",
    sale_price: Decimal | str = "0",
) -> Product:
    p = Product(
        name=name,
        part_number=f"PN-{name[:8].upper()}",
        stock_quantity=stock_quantity,
        purchase_price=Decimal(purchase_price),
        sale_price=Decimal(sale_price),
    )
    db.add(p)
    db.commit()
    return p


def make_sale(
    db: Session,
    customer: Customer,
    amount: Decimal | str,
    invoice_type: InvoiceType = InvoiceType.CASH,
    created_at: datetime | None = None,
    items: int = 0,
    product: Product | None = None,
) -> SalesInvoice:
    invoice = SalesInvoice(
        customer_id=customer.id,
        type=invoice_type,
        total_amount=Decimal(amount),
        created_at=created_at or at(2026, 3, 1),
    )
    db.add(invoice)
    db.flush()
    if items:
        if product is None:
            product = make_product(db)
        for _ in range(items):
            db.add(
                SalesItem(
                    invoice_id=invoice.id,
                    product_id=product.id,
                    quantity=1,
                    price=Decimal("1"),
                )
            )
    db.commit()
    return invoice


def make_import(
    db: Session,
    supplier: Supplier,
    amount: Decimal | str,
    invoice_no: str | None = None,
    created_at: datetime | None = None,
) -> ImportInvoice:
    invoice = ImportInvoice(
        supplier_id=supplier.id,
        invoice_no=invoice_no,
        total_amount=Decimal(amount),
        created_at=created_at or at(2026, 3, 1),
    )
    db.add(invoice)
    db.commit()
    return invoice


def make_payment(
    db: Session,
    payment_type: PaymentType,
    partner_id: int,
    amount: Decimal | str,
    method: str = "cash",
    created_at: datetime | None = None,
) -> Payment:
    payment = Payment(
        type=payment_type,
        partner_id=partner_id,
        amount=Decimal(amount),
        method=method,
        created_at=created_at or at(2026, 3, 1),
    )
    db.add(payment)
    db.commit()
    return payment
