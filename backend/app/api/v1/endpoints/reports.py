from __future__ import annotations

import io

from fastapi import APIRouter, Depends, Query, Request
from fastapi.responses import StreamingResponse
from sqlalchemy.exc import SQLAlchemyError
from sqlalchemy.orm import Session

from backend.app.api.deps import get_current_user
from backend.app.api.errors import internal_error, not_found, validation_error
from backend.app.core.database import get_db
from backend.app.models.user import User
from backend.app.schemas.reports import Report, ReportType
from backend.app.services.exceptions import NotFoundError, ReportValidationError
from backend.app.services.export_csv import export_report_section_csv
from backend.app.services.reports import generate_report, today

router = APIRouter()

_SELECTOR_HELP = "ISO date for daily reports, supplier or customer id otherwise"


def _build(
    db: Session, request: Request, report_type: ReportType, selector: str | None
):
    # An empty daily selector means today; entity reports must name one.
    if report_type is ReportType.DAILY and not (selector or "").strip():
        selector = today().isoformat()
    try:
        return generate_report(db, report_type, selector)
    except ReportValidationError as e:
        raise validation_error(e)
    except NotFoundError as e:
        raise not_found(e)
    except SQLAlchemyError:
        raise internal_error(
            request,
            f"{report_type.value} report for {selector!r}",
            detail="Report generation failed",
        )


@router.get("/{report_type}", response_model=Report)
def get_report(
    report_type: ReportType,
    request: Request,
    selector: str | None = Query(None, description=_SELECTOR_HELP),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
):
    return _build(db, request, report_type, selector)


@router.get("/{report_type}/export/csv")
def export_report_csv(
    report_type: ReportType,
    request: Request,
    section: str = Query(..., description="Report section to export"),
    selector: str | None = Query(None, description=_SELECTOR_HELP),
    db: Session = Depends(get_db),
    _current_user: User = Depends(get_current_user),
) -> StreamingResponse:
    report = _build(db, request, report_type, selector)
    try:
        content = export_report_section_csv(report, section)
    except ReportValidationError as e:
        raise validation_error(e)

    filename = f"{report_type.value}-report-{section}.csv"
    return StreamingResponse(
        io.StringIO(content),
        media_type="text/csv",
        headers={"Content-Disposition": f'attachment; filename="{filename}"'},
    )
