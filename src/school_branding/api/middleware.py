"""Request logging with the detected school bound to the log context."""

import time

import structlog
from starlette.middleware.base import BaseHTTPMiddleware, RequestResponseEndpoint
from starlette.requests import Request
from starlette.responses import Response

from school_branding.config import settings
from school_branding.logging_config import bind_school
from school_branding.tenant.detection import resolve_tenant

logger = structlog.get_logger()


class RequestLoggingMiddleware(BaseHTTPMiddleware):
    """Log HTTP requests with method, path, status code, latency and school.

    The school is detected from the ``Host`` header up front and bound to
    the structlog context, so every event logged while handling the
    request carries ``tenant_id``.
    """

    SKIP_PATHS: frozenset[str] = frozenset(
        {"/health", "/docs", "/openapi.json", "/redoc"}
    )

    async def dispatch(
        self, request: Request, call_next: RequestResponseEndpoint
    ) -> Response:
        """Bind the school for this request, then log method, status and timing."""
        if request.url.path in self.SKIP_PATHS:
            return await call_next(request)

        tenant_id = resolve_tenant(
            request.headers.get("host", ""),
            reserved_hosts=settings.reserved_hosts,
            reserved_fragments=settings.reserved_host_fragments,
            label_policy=settings.label_policy,
        )
        bind_school(tenant_id)

        start = time.perf_counter()
        response = await call_next(request)
        latency_ms = int((time.perf_counter() - start) * 1000)

        logger.info(
            "http_request",
            method=request.method,
            path=request.url.path,
            status_code=response.status_code,
            latency_ms=latency_ms,
        )
        return response
