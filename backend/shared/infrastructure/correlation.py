"""
Request correlation ids.

Each request gets an ``X-Request-ID``: the caller's value when it looks sane,
otherwise a fresh one. It is echoed on the response and stamped on every log
record emitted while the request is served.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

# Caller supplied ids end up in logs, keep them short and printable
_ACCEPTED_REQUEST_ID = re.compile(r"^[A-Za-z0-9._-]{1,64}$")

_request_id: ContextVar[str | None] = ContextVar("request_id", default=None)


def get_request_id() -> str | None:
    return _request_id.get()


def _pick_request_id(incoming: str | None) -> str:
    if incoming and _ACCEPTED_REQUEST_ID.match(incoming):
        return incoming
    return uuid.uuid4().hex


class CorrelationIdMiddleware(BaseHTTPMiddleware):
    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        request_id = _pick_request_id(request.headers.get(REQUEST_ID_HEADER))
        request.state.request_id = request_id

        reset_token = _request_id.set(request_id)
        try:
            response = await call_next(request)
        finally:
            _request_id.reset(reset_token)

        response.headers[REQUEST_ID_HEADER] = request_id
        return response


class CorrelationIdFilter:
    """Logging filter setting ``record.request_id`` (``-`` outside requests)."""

    def filter(self, record) -> bool:
        record.request_id = _request_id.get() or "-"
        return True
