"""Request context and caching middleware"""

import time
import uuid
from typing import Callable
from fastapi import Request, Response
from starlette.middleware.base import BaseHTTPMiddleware

from registrar.core.logging import get_logger

logger = get_logger(__name__)

MAX_REQUEST_ID_LENGTH = 64


class RequestContextMiddleware(BaseHTTPMiddleware):
    """
    Tag each request with a correlation id and log it once it completes.

    A caller-supplied X-Request-ID is reused when it is short enough to log.
    """

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        inbound = request.headers.get("X-Request-ID", "")
        request_id = inbound if 0 < len(inbound) <= MAX_REQUEST_ID_LENGTH else str(uuid.uuid4())
        request.state.request_id = request_id
        start_time = time.perf_counter()

        response = await call_next(request)

        process_time = time.perf_counter() - start_time
        response.headers["X-Request-ID"] = request_id
        response.headers["X-Process-Time"] = f"{process_time:.6f}"
        logger.info(
            f"{request.method} {request.url.path}",
            extra={
                "method": request.method,
                "path": request.url.path,
                "status_code": response.status_code,
                "process_time": process_time,
                "correlation_id": request_id,
            },
        )
        return response


class NoStoreMiddleware(BaseHTTPMiddleware):
    """Mark responses under the API prefix as uncacheable"""

    def __init__(self, app, prefix: str):
        super().__init__(app)
        self.prefix = prefix

    async def dispatch(self, request: Request, call_next: Callable) -> Response:
        response = await call_next(request)
        if request.url.path.startswith(self.prefix):
            response.headers["Cache-Control"] = "no-store"
        return response
