"""
Snippetbox Backend — Request ID Middleware
============================================

What:  Assigns an ID to each incoming request and adds it to the response.
How:   Reuses the client's X-Request-ID when it looks like an ID, otherwise
       generates a short UUID. The ID goes into a ContextVar for loggers and
       into request.state for handlers, and is echoed in the response headers.
When:  Outermost middleware, so every later log line can read the ID.

Accepted client IDs: 1-64 characters from [A-Za-z0-9._-]. Anything else
(spaces, newlines, very long values) is replaced, so the access log and
the echoed header only ever carry a plain token.
"""

import re
import uuid
from contextvars import ContextVar
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

REQUEST_ID_HEADER = "X-Request-ID"

_CLIENT_ID_RX = re.compile(r"[A-Za-z0-9._-]{1,64}")

request_id_var: ContextVar[str] = ContextVar("request_id", default="")


def new_request_id() -> str:
    return uuid.uuid4().hex[:8]


def choose_request_id(client_value: Optional[str]) -> str:
    """The client's ID if it is a plain token, else a fresh one."""
    if client_value and _CLIENT_ID_RX.fullmatch(client_value):
        return client_value
    return new_request_id()


class RequestIDMiddleware(BaseHTTPMiddleware):

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        rid = choose_request_id(request.headers.get(REQUEST_ID_HEADER))

        request_id_var.set(rid)
        request.state.request_id = rid

        response = await call_next(request)

        response.headers[REQUEST_ID_HEADER] = rid
        return response
