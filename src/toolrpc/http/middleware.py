"""Request logging middleware."""

from __future__ import annotations

import logging
import time

from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = logging.getLogger(__name__)

# Probe noise and rejected callers are not logged.
_QUIET_STATUSES = frozenset({401, 404})


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Logs ``METHOD path => status in N.Nms`` for every handled request."""

    async def dispatch(self, request: Request, call_next: RequestResponseEndpoint) -> Response:
        started = time.perf_counter()
        response = await call_next(request)
        elapsed_ms = (time.perf_counter() - started) * 1000

        if response.status_code not in _QUIET_STATUSES:
            logger.info(
                "%s %s => %d in %.1fms",
                request.method,
                request.url.path,
                response.status_code,
                elapsed_ms,
            )
        return response
