from __future__ import annotations

import io
import re

from fastapi import APIRouter, Depends, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.api.deps import get_current_user
from backend.app.api.errors import internal_error, not_found
from backend.app.core.database import get_db
from backend.app.models.user import User
from backend.app.schemas.ledger import CustomerLedgerDetail, CustomerLedgerRow
from backend.app.services.exceptions import CustomerNotFoundError
from backend.app.services.export_pdf import (
    export_customer_ledger_pdf,
    export_general_ledger_pdf,
)
from backend.app.services.ledger import get_customer_ledger, list_customer_ledgers
from backend.app.services.reports import today

router = APIRouter()

_PDF_MIME = "application/pdf"


def _pdf_response(buf: io.BytesIO, filename: str) -> StreamingResponse:
    return StreamingResponse(
        buf,
        media_type=_PDF_MIME,
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )


@router.get("/customers", response_model=list[CustomerLedgerRow])
def customer_ledgers(
    request: Request,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> list[CustomerLedgerRow]:
    try:
        return list_customer_ledgers(db)
    except SQLAlchemyError:
        raise internal_error(request, "List customer ledgers")


@router.get("/customer/{customer_id}", response_model=CustomerLedgerDetail)
def customer_ledger(
    customer_id: int,
    request: Request,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> CustomerLedgerDetail:
    try:
        return get_customer_ledger(db, customer_id)
    except CustomerNotFoundError as e:
        raise not_found(e)
    except SQLAlchemyError:
        raise internal_error(request, f"Customer ledger {customer_id}")


# ── PDF exports ──────────────────────────────────────────────────────────


@router.get("/customers/export/pdf")
def customer_ledgers_export_pdf(
    request: Request,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> StreamingResponse:
    try:
        rows = list_customer_ledgers(db)
    except SQLAlchemyError:
        raise internal_error(request, "General ledger PDF export")
    generated_on = today()
    buf = export_general_ledger_pdf(rows, generated_on)
    return _pdf_response(buf, f"general-ledger-{generated_on.isoformat()}.pdf")


@router.get("/customer/{customer_id}/export/pdf")
def customer_ledger_export_pdf(
    customer_id: int,
    request: Request,
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> StreamingResponse:
    try:
        detail = get_customer_ledger(db, customer_id)
    except CustomerNotFoundError as e:
        raise not_found(e)
    except SQLAlchemyError:
        raise internal_error(request, f"Customer ledger {customer_id} PDF export")
    generated_on = today()
    buf = export_customer_ledger_pdf(detail, generated_on)
    # Header values must stay ASCII
    slug = re.sub(r"[^A-Za-z0-9]+", "-", detail.customer.name).strip("-") or str(customer_id)
    return _pdf_response(buf, f"customer-ledger-{slug}-{generated_on.isoformat()}.pdf")
