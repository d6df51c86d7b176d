from __future__ import annotations

from datetime import date

from fastapi import APIRouter, Depends, Query, Request
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.api.deps import get_current_user
from backend.app.api.errors import internal_error
from backend.app.core.database import get_db
from backend.app.models.user import User
from backend.app.schemas.dashboard import DashboardStats
from backend.app.services.dashboard import get_dashboard_stats
from backend.app.services.reports import today

router = APIRouter()


@router.get("/stats", response_model=DashboardStats)
def dashboard_stats(
    request: Request,
    as_of: date | None = Query(None, description="Day to report on, defaults to today"),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> DashboardStats:
    try:
        return get_dashboard_stats(db, as_of or today())
    except SQLAlchemyError:
        raise internal_error(request, "Dashboard stats")
