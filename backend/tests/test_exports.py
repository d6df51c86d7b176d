"""Tests for PDF ledger exports."""
from __future__ import annotations

from datetime import date

from fastapi.testclient import TestClient
from sqlalchemy.orm import Session

from backend.app.models import InvoiceType, PaymentType
from backend.app.services.export_pdf import export_general_ledger_pdf
from backend.tests.conftest import auth, make_customer, make_payment, make_sale


def test_general_ledger_pdf(client: TestClient, db: Session, token: str) -> None:
    ali = make_customer(db, "Ali", phone="0300-1111111", ledger_balance="3000")
    make_sale(db, ali, "5000", InvoiceType.CASH)
    make_customer(db, "Bilal")

    resp = client.get("/api/v1/ledger/customers/export/pdf", headers=auth(token))

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert "general-ledger-" in resp.headers["content-disposition"]
    assert resp.content[:5] == b"%PDF-"


def test_general_ledger_pdf_without_customers(client: TestClient, db: Session, token: str) -> None:
    resp = client.get("/api/v1/ledger/customers/export/pdf", headers=auth(token))

    assert resp.status_code == 200
    assert resp.content[:5] == b"%PDF-"


def test_customer_ledger_pdf(client: TestClient, db: Session, token: str) -> None:
    c = make_customer(db, "Ali Khan", ledger_balance="1000")
    make_sale(db, c, "2500", InvoiceType.CREDIT, items=2)
    make_payment(db, PaymentType.CUSTOMER, c.id, "1500", "credit_voucher")

    resp = client.get(f"/api/v1/ledger/customer/{c.id}/export/pdf", headers=auth(token))

    assert resp.status_code == 200
    assert resp.headers["content-type"] == "application/pdf"
    assert "customer-ledger-Ali-Khan-" in resp.headers["content-disposition"]
    assert resp.content[:5] == b"%PDF-"


def test_customer_ledger_pdf_unknown_customer(client: TestClient, token: str) -> None:
    resp = client.get("/api/v1/ledger/customer/999/export/pdf", headers=auth(token))
    assert resp.status_code == 404


def test_pdf_survives_non_latin_names() -> None:
    from backend.app.schemas.ledger import CustomerLedgerRow

    row = CustomerLedgerRow(
        id=1,
        name="محمد علی",
        phone=None,
        total_invoices=0,
        total_purchase=0,
        total_cash=0,
        total_credit=0,
        total_paid=0,
        balance=0,
    )

    buf = export_general_ledger_pdf([row], date(2026, 3, 1))

    assert buf.read(5) == b"%PDF-"
