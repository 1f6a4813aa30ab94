"""FastAPI application entry point."""

import logging
from contextlib import asynccontextmanager
from typing import Optional

from fastapi import FastAPI, Request
from fastapi.middleware.cors import CORSMiddleware
from fastapi.responses import JSONResponse

from tradesim.app_context import AppContext
from tradesim.config.settings import get_settings
from tradesim.config.logging_config import setup_logging
from tradesim.api.routers import trading_router, account_router, stream_router
from tradesim.core.exceptions import AppError

logger = logging.getLogger(__name__)

# Server-side faults among AppErrors; everything else is the caller's
_SERVER_FAULT_CODES = {"ACCOUNT_NOT_FOUND", "CONFIGURATION_ERROR"}


def create_app(context: Optional[AppContext] = None) -> FastAPI:
    """
    Build the FastAPI application.

    Args:
        context: Pre-built context (tests). Built from settings at startup if omitted.
    """

    @asynccontextmanager
    async def lifespan(app: FastAPI):
        """Application lifespan handler."""
        # Startup
        setup_logging()
        ctx = context or AppContext()
        ctx.initialize()
        app.state.context = ctx
        ctx.start_feed()
        yield
        # Shutdown
        await ctx.stop_feed()

    settings = get_settings()

    app = FastAPI(
        title=settings.app_name,
        description="Simulated crypto trading against live ticker prices",
        version=settings.app_version,
        lifespan=lifespan,
    )

    app.add_middleware(
        CORSMiddleware,
        allow_origins=["*"],
        allow_methods=["*"],
        allow_headers=["*"],
    )

    # Include routers
    app.include_router(trading_router)
    app.include_router(account_router)
    app.include_router(stream_router)

    @app.exception_handler(AppError)
    async def app_error_handler(request: Request, exc: AppError) -> JSONResponse:
        """Global handler for application errors."""
        status_code = 500 if exc.code in _SERVER_FAULT_CODES else 400
        if status_code == 500:
            logger.error("%s: %s", exc.code, exc.message)
        return JSONResponse(
            status_code=status_code,
            content={"success": False, "error": exc.code, "message": exc.message},
        )

    @app.exception_handler(Exception)
    async def unexpected_error_handler(request: Request, exc: Exception) -> JSONResponse:
        """Generic server fault, distinct from trade rejections."""
        logger.exception("Unhandled error on %s %s", request.method, request.url.path)
        return JSONResponse(
            status_code=500,
            content={
                "success": False,
                "error": "INTERNAL_ERROR",
                "message": f"An unexpected error occurred: {exc}",
            },
        )

    @app.get("/health")
    def health_check(request: Request) -> dict:
        """Health check endpoint with feed status."""
        ctx: AppContext = request.app.state.context
        return {
            "status": "healthy",
            "feed_connected": ctx.feed_connected,
            "prices_cached": len(ctx.price_cache),
        }

    @app.get("/")
    def root() -> dict[str, str]:
        """Root endpoint with API info."""
        return {
            "app": settings.app_name,
            "version": settings.app_version,
            "docs": "/docs",
        }

    return app


app = create_app()
