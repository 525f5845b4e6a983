"""
Request/response logging middleware for tracking API interactions.
"""
import logging
import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response

from app.core.logging_config import request_id_context

logger = logging.getLogger(__name__)


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware to log incoming requests and outgoing responses.

    Each request gets a request ID (taken from ``X-Request-ID`` or generated)
    that is attached to every log entry emitted while serving it and echoed
    back in the response headers.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        request_id = request.headers.get("X-Request-ID") or str(uuid.uuid4())
        token = request_id_context.set(request_id)

        start_time = time.time()

        # Only a prefix of the token is logged
        user_identifier = "anonymous"
        auth_header = request.headers.get("Authorization", "")
        if auth_header.startswith("Bearer "):
            user_identifier = f"token:{auth_header[7:17]}..."

        method = request.method
        path = str(request.url.path)
        client_host = request.client.host if request.client else "unknown"

        logger.info(
            "Incoming request",
            extra={
                "method": method,
                "path": path,
                "client_host": client_host,
                "user_identifier": user_identifier,
            },
        )

        try:
            response = await call_next(request)
            self._log_response(
                request_id, method, path, client_host, user_identifier, start_time, response
            )
        finally:
            request_id_context.reset(token)

        return response

    def _log_response(
        self,
        request_id: str,
        method: str,
        path: str,
        client_host: str,
        user_identifier: str,
        start_time: float,
        response: Response,
    ) -> None:
        duration_ms = round((time.time() - start_time) * 1000, 2)
        status_code = response.status_code
        response.headers["X-Request-ID"] = request_id

        extra_fields = {
            "method": method,
            "path": path,
            "status_code": status_code,
            "duration_ms": duration_ms,
            "client_host": client_host,
            "user_identifier": user_identifier,
        }

        if status_code >= 500:
            logger.error("Server error response", extra=extra_fields)
        elif status_code >= 400:
            logger.warning("Client error response", extra=extra_fields)
        else:
            logger.info("Request completed", extra=extra_fields)
