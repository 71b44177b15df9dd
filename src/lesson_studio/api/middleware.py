"""HTTP request/response logging middleware."""

import time
import uuid

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

logger = structlog.get_logger()

REQUEST_ID_HEADER = "X-Request-ID"


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log one ``http_request`` event per API call.

    Each request gets a short ``request_id`` bound into structlog
    context vars and echoed in the ``X-Request-ID`` response header, so
    a client report can be matched to the log lines emitted while
    handling it. Probes, API docs and the narration status poll are not
    logged.
    """

    SKIP_PATHS: frozenset[str] = frozenset(
        {"/health", "/docs", "/openapi.json", "/redoc"}
    )
    SKIP_PREFIXES: tuple[str, ...] = ("/api/v1/narration/status/",)

    def _skipped(self, path: str) -> bool:
        return path in self.SKIP_PATHS or path.startswith(self.SKIP_PREFIXES)

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        path = request.url.path
        if self._skipped(path):
            return await call_next(request)

        request_id = uuid.uuid4().hex[:12]
        structlog.contextvars.clear_contextvars()
        structlog.contextvars.bind_contextvars(request_id=request_id)

        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)
        response.headers[REQUEST_ID_HEADER] = request_id

        logger.info(
            "http_request",
            method=request.method,
            path=path,
            query=request.url.query or None,
            status_code=response.status_code,
            latency_ms=latency_ms,
        )
        return response
