"""
Request middleware for logging, timing, and request ID tracking.
"""

import re
import time
import uuid
from typing import Optional

from starlette.middleware.base import BaseHTTPMiddleware
from starlette.requests import Request
from starlette.responses import Response
import structlog

from booking_engine.core.logging import get_logger

logger = get_logger(__name__)

REQUEST_ID_HEADER = "X-Request-ID"

_TICKET_PATH = re.compile(r"/bookings/(\d+)/?$")


def ticket_id_from_path(path: str) -> Optional[int]:
    """Ticket id addressed by /bookings/{ticket_id}, if any."""
    match = _TICKET_PATH.search(path)
    return int(match.group(1)) if match else None


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware that:
    1. Reuses the caller's X-Request-ID or assigns a new one
    2. Binds the request ID (and the ticket id for /bookings/{id}) to structlog,
       so cancellation and search events can be traced back to their request
    3. Logs completion; 4xx outcomes such as an unknown ticket or an empty
       undo history are logged as rejections, not as request errors
    """

    async def dispatch(self, request: Request, call_next) -> Response:
        request_id = request.headers.get(REQUEST_ID_HEADER) or str(uuid.uuid4())[:8]
        start_time = time.perf_counter()

        context = {
            "request_id": request_id,
            "method": request.method,
            "path": request.url.path,
        }
        ticket_id = ticket_id_from_path(request.url.path)
        if ticket_id is not None:
            context["ticket_id"] = ticket_id

        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(**context)

        try:
            response = await call_next(request)
        except Exception as e:
            duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
            logger.error("request_failed", error=str(e), duration_ms=duration_ms)
            raise

        duration_ms = round((time.perf_counter() - start_time) * 1000, 2)
        if 400 <= response.status_code < 500:
            logger.warning(
                "request_rejected",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )
        else:
            logger.info(
                "request_completed",
                status_code=response.status_code,
                duration_ms=duration_ms,
            )

        response.headers[REQUEST_ID_HEADER] = request_id
        response.headers["X-Response-Time"] = f"{duration_ms}ms"
        return response
