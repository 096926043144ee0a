"""
Content API

Read-only JSON API over the remote content cache: posts, portfolio,
services, about and homepage content, normalized and in listing order.
"""

import logging
from contextlib import asynccontextmanager
from collections.abc import AsyncGenerator
from pathlib import Path
from typing import Any

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from content_api.config import get_settings
from content_api.errors import (
    ConfigurationError,
    ContentValidationError,
    NetworkError,
)
from content_api.middleware import (
    RequestIDMiddleware,
    SecurityHeadersMiddleware,
    request_id_var,
)
from content_api.routers import blog, pages, portfolio, services
from content_api.services.repository import create_repository

logger = logging.getLogger(__name__)

settings = get_settings()


@asynccontextmanager
async def lifespan(app: FastAPI) -> AsyncGenerator[None, None]:
    """Application lifespan: one content repository per process."""
    repository = create_repository(get_settings())
    app.state.repository = repository
    try:
        yield
    finally:
        await repository.aclose()


app = FastAPI(
    title="Content API",
    description="Normalized, disk-first cached content from the upstream CMS",
    version="0.1.0",
    lifespan=lifespan,
)

# Request ID + access log, security headers
app.add_middleware(RequestIDMiddleware)
app.add_middleware(SecurityHeadersMiddleware)

# CORS
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=True,
    allow_methods=["GET", "OPTIONS"],
    allow_headers=["Content-Type", "X-Request-ID"],
)

# Routers
app.include_router(blog.router, prefix="/api/content")
app.include_router(portfolio.router, prefix="/api/content")
app.include_router(services.router, prefix="/api/content")
app.include_router(pages.router, prefix="/api/content")


def _error_body(detail: str) -> dict[str, str]:
    return {"detail": detail, "request_id": request_id_var.get()}


@app.exception_handler(NetworkError)
async def network_error_handler(request: Request, exc: NetworkError) -> JSONResponse:
    logger.warning("Upstream failure serving %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=502, content=_error_body("Upstream content unavailable")
    )


@app.exception_handler(ContentValidationError)
async def validation_error_handler(
    request: Request, exc: ContentValidationError
) -> JSONResponse:
    logger.warning("Invalid upstream payload serving %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=502, content=_error_body("Upstream content invalid")
    )


@app.exception_handler(ConfigurationError)
async def configuration_error_handler(
    request: Request, exc: ConfigurationError
) -> JSONResponse:
    logger.error("Configuration error serving %s: %s", request.url.path, exc)
    return JSONResponse(
        status_code=503, content=_error_body("Content API not configured")
    )


def _run_health_checks() -> dict[str, Any]:
    """Check that content can be resolved from disk or the network."""
    s = get_settings()
    checks = {
        "config": "ok" if s.blog_api_base_url else "fail",
        "snapshots": "ok" if Path(s.content_cache_dir).is_dir() else "fail",
    }
    failed = [k for k, v in checks.items() if v != "ok"]

    if len(failed) == len(checks):
        overall = "unavailable"
    elif failed:
        overall = "degraded"
        logger.warning("Health check degraded, failed: %s", ", ".join(failed))
    else:
        overall = "ok"

    return {
        "status": overall,
        "service": "content-api",
        "version": "0.1.0",
        "checks": checks,
    }


@app.get("/api/content/health")
async def health_check(request: Request) -> JSONResponse:
    """Health check: config, snapshot directory, and cache counters."""
    result = _run_health_checks()
    repository = getattr(request.app.state, "repository", None)
    if repository is not None:
        result["cache"] = repository.cache.stats()
    status_code = 200 if result["status"] in ("ok", "degraded") else 503
    return JSONResponse(content=result, status_code=status_code)
