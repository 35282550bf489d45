"""
Request Context Middleware Module
=================================

Starlette middleware for request processing.

Features:
- Request ID generation for tracing (or reuse of the caller's id)
- Request timing
- Request logging

Note:
    The policy service keeps no session state; session facts always
    arrive in the request body, so this middleware does no auth work.
"""

import time
import uuid
from typing import Callable

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
from starlette.types import ASGIApp

from devtogether.core.logging import LogContext, get_logger

# Initialize logger
logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"
PROCESS_TIME_HEADER = "X-Process-Time"

# Paths that are not worth a log line per request
QUIET_PATHS = frozenset({"/", "/health", "/docs", "/redoc", "/openapi.json"})


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Request context middleware.

    Responsibilities:
    - Assign a request id and bind it to every log entry
    - Expose the id on request.state and in the X-Request-ID header
    - Measure processing time into X-Process-Time
    """

    def __init__(self, app: ASGIApp):
        super().__init__(app)

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        """
        Process request with a bound request id.

        Args:
            request: Incoming HTTP request
            call_next: Next middleware/route handler

        Returns:
            HTTP response
        """
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())
        request.state.request_id = request_id

        with LogContext(request_id=request_id):
            start_time = time.perf_counter()

            try:
                response = await call_next(request)
            except Exception as e:
                logger.error(
                    "request_failed",
                    error=str(e),
                    path=request.url.path,
                    method=request.method,
                )
                raise

            process_time = time.perf_counter() - start_time
            response.headers[REQUEST_ID_HEADER] = request_id
            response.headers[PROCESS_TIME_HEADER] = f"{process_time:.4f}"

            if request.url.path not in QUIET_PATHS:
                logger.info(
                    "request_completed",
                    method=request.method,
                    path=request.url.path,
                    status_code=response.status_code,
                    process_time=round(process_time, 4),
                )

        return response
