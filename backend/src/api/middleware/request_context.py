"""
Request Context Middleware

Binds a request id into the structlog context for the duration of a
request, so every log line of the request carries it, and echoes it back
in the X-Request-ID response header.
"""

from fastapi import Request
from starlette.middleware.base import BaseHTTPMiddleware

from src.shared.core.logging import clear_log_context, log_context, new_request_id


class RequestContextMiddleware(BaseHTTPMiddleware):
    """Attach a request id to logs and responses."""

    async def dispatch(self, request: Request, call_next):
        request_id = request.headers.get("X-Request-ID") or new_request_id()
        request.state.request_id = request_id

        clear_log_context()
        log_context(request_id=request_id, method=request.method, path=request.url.path)
        try:
            response = await call_next(request)
        finally:
            clear_log_context()

        response.headers["X-Request-ID"] = request_id
        return response
