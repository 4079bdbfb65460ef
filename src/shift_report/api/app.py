"""FastAPI application factory."""

import logging
from collections.abc import AsyncIterator
from contextlib import asynccontextmanager

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from shift_report.api.relay import router as relay_router
from shift_report.api.reports import router as reports_router
from shift_report.app_logging import configure_logging
from shift_report.containers import AppContainer
from shift_report.domain.errors import RateLimitedError
from shift_report.domain.stages import stage_catalog


def create_app(container: AppContainer) -> FastAPI:
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    @asynccontextmanager
    async def lifespan(app: FastAPI) -> AsyncIterator[None]:
        yield
        try:
            await app.state.container.close_resources()
        except Exception:
            logger.exception("Failed to close application resources")

    app = FastAPI(lifespan=lifespan)
    app.state.container = container

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )
    app.include_router(reports_router)
    app.include_router(relay_router)

    @app.exception_handler(RateLimitedError)
    async def rate_limited(request: Request, exc: RateLimitedError) -> JSONResponse:
        logger.warning("Rate limited relay request", extra={"client": exc.key})
        return JSONResponse(
            status_code=429,
            content={"error": "Too many requests. Please try again later."},
            headers={"Retry-After": str(max(1, round(exc.retry_after)))},
        )

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/stages")
    async def stages() -> dict[str, object]:
        """Checklist items and photo guides for every shift stage."""
        return {"stages": stage_catalog()}

    return app
