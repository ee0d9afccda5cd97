from __future__ import annotations

import logging
import time
from collections.abc import Awaitable, Callable
from uuid import uuid4

from fastapi import Request
from fastapi.responses import Response
from starlette.middleware.base import BaseHTTPMiddleware
from starlette.types import ASGIApp

from ..core.logging import bind_request_id, reset_request_id
from ..metrics import REQUEST_COUNT, REQUEST_ERRORS, REQUEST_LATENCY

REQUEST_ID_HEADER = "X-Request-ID"
_INCOMING_ID_HEADERS = (REQUEST_ID_HEADER, "X-Correlation-ID")


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Tag every request with an id, then log and count it once it finishes.

    Metrics are labelled with the route template (``/api/v1/journal/{day}``)
    rather than the raw path so per-date lookups share one series.
    """

    def __init__(self, app: ASGIApp, logger_name: str = "moodjournal.request") -> None:
        super().__init__(app)
        self._logger = logging.getLogger(logger_name)

    async def dispatch(  # type: ignore[override]
        self,
        request: Request,
        call_next: Callable[[Request], Awaitable[Response]],
    ) -> Response:
        request_id = _incoming_request_id(request) or uuid4().hex
        request.state.request_id = request_id
        token = bind_request_id(request_id)
        started = time.perf_counter()

        try:
            response = await call_next(request)
        except Exception:
            self._record(request, 500, started, failed=True)
            raise
        finally:
            reset_request_id(token)

        self._record(request, response.status_code, started)
        response.headers[REQUEST_ID_HEADER] = request_id
        return response

    def _record(self, request: Request, status: int, started: float, *, failed: bool = False) -> None:
        elapsed = time.perf_counter() - started
        path = _route_template(request)
        status_label = str(status)

        REQUEST_COUNT.labels(method=request.method, path=path, status=status_label).inc()
        REQUEST_LATENCY.labels(method=request.method, path=path).observe(elapsed)
        if status >= 500:
            REQUEST_ERRORS.labels(method=request.method, path=path, status=status_label).inc()

        self._logger.log(
            logging.ERROR if status >= 500 else logging.INFO,
            "request failed" if failed else "request complete",
            extra={
                "request_id": request.state.request_id,
                "path": path,
                "method": request.method,
                "status": status,
                "duration_ms": round(elapsed * 1000, 3),
            },
            exc_info=failed,
        )


def _incoming_request_id(request: Request) -> str | None:
    for header in _INCOMING_ID_HEADERS:
        value = request.headers.get(header)
        if value:
            return value[:128]
    return None


def _route_template(request: Request) -> str:
    route = request.scope.get("route")
    if route is not None and hasattr(route, "path"):
        return str(route.path)
    return request.url.path
