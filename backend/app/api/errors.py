"""Translate service errors into HTTP responses without leaking internals.

Database failures are logged in full (with the request id) and answered with
an opaque message; domain errors keep their own message.
"""
from __future__ import annotations

import logging

from fastapi import HTTPException, Request, status

from backend.app.middleware.request_id import get_request_id
from backend.app.services.exceptions import NotFoundError, ReportValidationError

logger = logging.getLogger(__name__)


def internal_error(
    request: Request, action: str, detail: str = "Server error"
) -> HTTPException:
    """Log the exception being handled and return a generic 500.

    Must be called from inside an ``except`` block.
    """
    logger.exception("%s failed (request_id=%s)", action, get_request_id(request))
    return HTTPException(
        status_code=status.HTTP_500_INTERNAL_SERVER_ERROR, detail=detail
    )


def not_found(exc: NotFoundError) -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail=str(exc))


def validation_error(exc: ReportValidationError) -> HTTPException:
    return HTTPException(
        status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(exc)
    )
