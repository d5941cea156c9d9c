"""FastAPI app: branded pages, the tenant API and the static config tree."""

from collections.abc import AsyncGenerator
from contextlib import asynccontextmanager
from datetime import UTC, datetime

import httpx
import structlog
from fastapi import FastAPI, Request
from fastapi.responses import JSONResponse
from fastapi.staticfiles import StaticFiles

from school_branding.api.middleware import RequestLoggingMiddleware
from school_branding.api.routes.data import router as data_router
from school_branding.api.routes.pages import router as pages_router
from school_branding.api.routes.storage import router as storage_router
from school_branding.api.routes.tenant import router as tenant_router
from school_branding.config import settings
from school_branding.logging_config import configure_logging
from school_branding.storage.scoped_store import InMemoryBackend

logger = structlog.get_logger()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None]:
    """Manage application startup and shutdown.

    Startup:
        - Configure logging.
        - Open the shared httpx client used for config and data fetches.
        - Create the process-wide storage backend.
    Shutdown:
        - Close the httpx client.
    """
    configure_logging(
        environment=str(settings.environment),
        log_level=settings.log_level,
    )
    app.state.storage_backend = InMemoryBackend()

    async with httpx.AsyncClient(
        base_url=settings.config_base_url,
        timeout=settings.config_fetch_timeout,
    ) as http_client:
        app.state.http_client = http_client
        logger.info(
            "app_started",
            environment=str(settings.environment),
            config_source=str(settings.config_source),
        )
        yield

    logger.info("app_stopped")


app = FastAPI(
    title="School Branding",
    description="Per-school branding for multi-tenant school pages",
    version="0.1.0",
    lifespan=lifespan,
    debug=settings.is_dev,
)

app.add_middleware(RequestLoggingMiddleware)


@app.get("/health")
async def health() -> JSONResponse:
    """Liveness plus a check that the template and config dirs exist."""
    checks = {
        "pages_dir": "ok" if settings.pages_dir.is_dir() else "missing",
        "config_dir": "ok" if settings.config_dir.is_dir() else "missing",
    }
    overall = "ok" if all(v == "ok" for v in checks.values()) else "degraded"
    status_code = 200 if overall == "ok" else 503
    return JSONResponse(
        status_code=status_code,
        content={
            "status": overall,
            "checks": checks,
            "timestamp": datetime.now(UTC).isoformat(timespec="seconds"),
        },
    )


@app.exception_handler(Exception)
async def unhandled_exception_handler(
    request: Request,
    exc: Exception,
) -> JSONResponse:
    """Log anything the routes did not handle and answer a bare 500."""
    logger.error(
        "unhandled_exception",
        exc_info=exc,
        method=request.method,
        path=request.url.path,
    )
    return JSONResponse(
        status_code=500,
        content={"detail": "Internal server error"},
    )


app.include_router(tenant_router, prefix="/api/v1")
app.include_router(storage_router, prefix="/api/v1")
app.include_router(data_router, prefix="/api/v1")
app.mount(
    "/config",
    StaticFiles(directory=settings.config_dir, check_dir=False),
    name="config",
)
app.include_router(pages_router)
