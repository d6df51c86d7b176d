"""Request correlation id middleware."""

from __future__ import annotations

import uuid

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

HEADER = "X-Request-ID"


class RequestIDMiddleware(BaseHTTPMiddleware):
    """Expose ``request.state.request_id`` and echo it as ``X-Request-ID``.

    An incoming ``X-Request-ID`` is reused so ids can be traced across
    services; otherwise a fresh one is generated.
    """

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        request_id = request.headers.get(HEADER) or uuid.uuid4().hex
        request.state.request_id = request_id

        response = await call_next(request)
        response.headers[HEADER] = request_id
        return response


def get_request_id(request: Request) -> str:
    """Return the id assigned by the middleware, or ``"-"`` outside of it."""
    return getattr(request.state, "request_id", "-")
