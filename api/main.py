#!/usr/bin/env python3
"""
Reception Pass API - HTTP layer for the reception kiosk.

Resolves visitors and coworkers to the booking pass shown at the front
desk, and powers the kiosk's name search. All data is read live from
Nexudus; nothing is stored.
"""

from __future__ import annotations

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from reception.logging_config import configure_logging, get_logger
from reception.pass_engine.core.errors import PassError, truncate_detail

from .settings import get_settings

# Format: 2026-01-06T14:05:52Z [api] LEVEL message
configure_logging(source="api")
logger = get_logger(__name__)


def create_app() -> FastAPI:
    """Create and configure the FastAPI application."""
    app = FastAPI(title="Reception Pass API", description="Visitor and coworker pass lookup")

    @app.exception_handler(PassError)
    async def pass_error_handler(request: Request, exc: PassError) -> JSONResponse:
        if exc.status_code >= 500:
            logger.warning(f"{request.url.path} failed: {exc.message}")
        return JSONResponse(status_code=exc.status_code, content=exc.to_dict())

    @app.exception_handler(Exception)
    async def unhandled_error_handler(request: Request, exc: Exception) -> JSONResponse:
        logger.exception(f"Unhandled error on {request.url.path}")
        return JSONResponse(status_code=500, content={"error": "Server error", "detail": truncate_detail(exc)})

    settings = get_settings()

    app.add_middleware(
        CORSMiddleware,
        allow_origins=settings.allowed_origins,
        allow_credentials=False,
        allow_methods=["GET", "OPTIONS"],
        allow_headers=["*"],
    )

    from .routers import passes

    app.include_router(passes.router)

    @app.get("/health")
    async def health_check() -> dict[str, str]:
        """Health check endpoint."""
        return {"status": "healthy", "service": "reception-pass-api"}

    return app


# Create app instance for uvicorn
app = create_app()
