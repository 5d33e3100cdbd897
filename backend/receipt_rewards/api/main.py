"""Entry point for the FastAPI application.

This module constructs the FastAPI app, includes the receipts router,
registers the exception handlers and sets up startup and shutdown
events. ``run()`` serves the app with uvicorn on the configured host
and port.
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

import sentry_sdk
import uvicorn
from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError

from receipt_rewards.api.error_handlers import generic_exception_handler, validation_exception_handler
from receipt_rewards.api.routes.receipts import router as receipts_router
from receipt_rewards.core.config import settings
from receipt_rewards.core.observability import init_sentry
from receipt_rewards.services.receipt_store import get_receipt_store

# Configure logging
logging.basicConfig(level=settings.LOG_LEVEL.upper())
logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Manage application lifecycle."""
    # Startup
    logger.info("Starting up...")
    if init_sentry("api"):
        logger.info("Sentry SDK initialized (api)")
    get_receipt_store()
    yield
    # Shutdown
    logger.info("Shutting down...")


# Create FastAPI app
app = FastAPI(
    title=settings.PROJECT_NAME,
    version=settings.VERSION,
    lifespan=lifespan,
)


# Middleware to enrich Sentry scope with lightweight request info
@app.middleware("http")
async def sentry_context_middleware(request: Request, call_next):
    if settings.SENTRY_DSN:
        scope = sentry_sdk.get_current_scope()
        scope.set_tag("path", request.url.path)
        scope.set_tag("method", request.method)
    response = await call_next(request)
    return response


# Register custom exception handlers
app.add_exception_handler(RequestValidationError, validation_exception_handler)
app.add_exception_handler(Exception, generic_exception_handler)

# Include routers
app.include_router(receipts_router)


@app.api_route("/health", methods=["GET", "HEAD"])
async def health_check():
    """Health check endpoint (supports GET & HEAD)."""
    return {
        "status": "healthy",
        "environment": settings.ENVIRONMENT,
        "version": settings.VERSION,
    }


def run() -> None:
    """Serve the API with uvicorn on ``settings.HOST:settings.PORT``."""
    uvicorn.run(
        "receipt_rewards.api.main:app",
        host=settings.HOST,
        port=settings.PORT,
        log_level=settings.LOG_LEVEL.lower(),
    )


if __name__ == "__main__":
    run()
