"""
Request logging middleware for tracking HTTP requests.
"""
import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware
from matchumbeop.utils.logger import get_logger

logger = get_logger("middleware")

# Polled frequently by clients; logged at debug level only
QUIET_PATHS = {"/health", "/api/v1/spellcheck/state"}


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """
    Middleware for logging HTTP requests and responses.

    Reuses an incoming X-Request-ID header when present, otherwise
    generates one, and echoes it on the response.
    """

    async def dispatch(
        self,
        request: Request,
        call_next: Callable
    ) -> Response:
        request_id = request.headers.get("x-request-id") or str(uuid.uuid4())
        request.state.request_id = request_id
        log = logger.debug if request.url.path in QUIET_PATHS else logger.info

        start_time = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception as e:
            logger.error(
                "Request failed",
                request_id=request_id,
                method=request.method,
                path=request.url.path,
                duration_ms=f"{(time.perf_counter() - start_time) * 1000:.2f}",
                error=str(e),
                exc_info=True
            )
            raise

        log(
            "Request completed",
            request_id=request_id,
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            duration_ms=f"{(time.perf_counter() - start_time) * 1000:.2f}"
        )

        response.headers["X-Request-ID"] = request_id
        return response
