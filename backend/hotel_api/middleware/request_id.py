"""
Hotel Listings API: Request ID Middleware
===========================================

What:  Tags each request with a short ID, returned in X-Request-ID and
       repeated in the access log line and in every error body.
How:   A client-supplied X-Request-ID is reused when it is a plain token;
       anything else is replaced by a generated ID so it cannot forge or
       split log lines. The ID is stored on request.state and in a ContextVar.

Reading the ID:
    Exception handlers registered for `Exception` run in Starlette's
    ServerErrorMiddleware, outside this middleware, where the ContextVar is
    no longer set. `get_request_id(request)` reads request.state first, which
    lives in the ASGI scope and survives the unwind.
"""

import re
import uuid
from contextvars import ContextVar

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import HTTPConnection, Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_PATTERN = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def accept_client_id(value: str) -> bool:
    """True when a client-sent ID is safe to echo and to log verbatim."""
    return bool(_CLIENT_ID_PATTERN.fullmatch(value))


def get_request_id(request: HTTPConnection) -> str:
    return getattr(request.state, "request_id", "") or request_id_var.get("")


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        sent = request.headers.get(REQUEST_ID_HEADER, "")
        rid = sent if accept_client_id(sent) else new_request_id()

        request.state.request_id = rid
        token = request_id_var.set(rid)
        try:
            response = await call_next(request)
        finally:
            request_id_var.reset(token)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
