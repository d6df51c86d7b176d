"""Tests for the dashboard headline figures."""
from __future__ import annotations

from datetime import date
from decimal import Decimal

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from backend.app.models import InvoiceType, PaymentType
from backend.app.services.dashboard import get_dashboard_stats
from backend.tests.conftest import (
    at,
    auth,
    make_customer,
    make_import,
    make_payment,
    make_product,
    make_sale,
    make_supplier,
)

DAY = date(2026, 3, 1)


def _seed(db: Session) -> None:
    ali = make_customer(db, "Ali", ledger_balance="300")
    make_customer(db, "Bilal", ledger_balance="100")
    supplier = make_supplier(db, "Massey Parts", ledger_balance="850")

    make_sale(db, ali, "500", InvoiceType.CASH, at(2026, 3, 1, 9))
    make_sale(db, ali, "300", InvoiceType.CREDIT, at(2026, 3, 1, 10))
    make_sale(db, ali, "999", InvoiceType.CASH, at(2026, 3, 2, 10))
    make_import(db, supplier, "1000", created_at=at(2026, 3, 1, 11))
    make_import(db, supplier, "50", created_at=at(2026, 2, 28, 11))
    make_payment(db, PaymentType.CUSTOMER, ali.id, "200", created_at=at(2026, 3, 1, 12))
    make_payment(
        db, PaymentType.SUPPLIER, supplier.id, "150", created_at=at(2026, 3, 1, 13)
    )
    make_product(db, "Clutch plate", stock_quantity=4, purchase_price="25.50")
    make_product(db, "Oil filter", stock_quantity=2, purchase_price="10")


def test_stats_for_a_day(db: Session) -> None:
    _seed(db)

    stats = get_dashboard_stats(db, DAY)

    assert stats.as_of_date == DAY
    assert stats.today_sales == Decimal("800")
    assert stats.today_imports == Decimal("1000")
    assert stats.stock_value == Decimal("122")
    assert stats.total_receivables == Decimal("400")
    assert stats.total_payables == Decimal("850")
    # cash sales + receipts - supplier payments
    assert stats.today_cash == Decimal("550")


def test_stats_on_empty_database(db: Session) -> None:
    stats = get_dashboard_stats(db, DAY)

    assert stats.today_sales == Decimal("0")
    assert stats.stock_value == Decimal("0")
    assert stats.today_cash == Decimal("0")


def test_stats_endpoint(client: TestClient, db: Session, token: str) -> None:
    _seed(db)

    res = client.get(
        "/api/v1/dashboard/stats", params={"as_of": "2026-03-01"}, headers=auth(token)
    )

    assert res.status_code == 200
    data = res.json()
    assert data["as_of_date"] == "2026-03-01"
    assert Decimal(data["today_sales"]) == Decimal("800")
    assert Decimal(data["today_cash"]) == Decimal("550")


def test_stats_endpoint_defaults_to_today(client: TestClient, token: str) -> None:
    res = client.get("/api/v1/dashboard/stats", headers=auth(token))

    assert res.status_code == 200
    assert Decimal(res.json()["today_sales"]) == Decimal("0")
