"""
RequestContext Middleware - Adds request tracking to all requests.

Every request gets a request_id stored in request.state and bound into
the structlog context, so analytics log lines can be joined back to the
dashboard call that produced them. The id is echoed in X-Request-ID.
"""

import time
import uuid

import structlog
from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from crm_intel.infrastructure.observability.logging import log_request


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Add request context to all incoming requests.

    Adds to request.state:
    - request_id: UUID for tracing this request

    A caller-supplied X-Request-ID is reused so traces span services.
    """

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start_time = time.time()
        try:
            response = await call_next(request)
        finally:
            structlog.contextvars.unbind_contextvars("request_id")

        log_request(
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=round((time.time() - start_time) * 1000, 2),
            request_id=request_id,
        )

        response.headers["X-Request-ID"] = request_id
        return response
