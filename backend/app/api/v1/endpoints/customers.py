from __future__ import annotations

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.api.deps import get_current_user
from backend.app.api.errors import internal_error
from backend.app.core.database import get_db
from backend.app.models.customer import Customer
from backend.app.models.user import User
from backend.app.schemas.customer import CustomerOut

router = APIRouter()


@router.get("/", response_model=list[CustomerOut])
def list_customers(
    request: Request,
    q: str | None = Query(None, description="Search by name or phone"),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> list[Customer]:
    query = db.query(Customer)
    if q:
        like = f"%{q}%"
        query = query.filter(Customer.name.ilike(like) | Customer.phone.ilike(like))
    try:
        return query.order_by(Customer.name).all()
    except SQLAlchemyError:
        raise internal_error(request, "List customers")
