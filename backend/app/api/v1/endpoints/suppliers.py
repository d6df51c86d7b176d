from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.api.deps import get_current_user
from backend.app.api.errors import internal_error
from backend.app.core.database import get_db
from backend.app.models.supplier import Supplier
from backend.app.models.user import User
from backend.app.schemas.supplier import SupplierOut

router = APIRouter()


@router.get("/", response_model=list[SupplierOut])
def list_suppliers(
    request: Request,
    q: str | None = Query(None, description="Search by name or phone"),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> list[Supplier]:
    query = db.query(Supplier)
    if q:
        like = f"%{q}%"
        query = query.filter(Supplier.name.ilike(like) | Supplier.phone.ilike(like))
    try:
        return query.order_by(Supplier.name).all()
    except SQLAlchemyError:
        raise internal_error(request, "List suppliers")
