# src/quadboard/main.py
"""Main entry point for the Quadboard application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from quadboard.api.v1 import (
    groups_router,
    moderation_router,
    notifications_router,
    posts_router,
    users_router,
    votes_router,
)
from quadboard.core.settings import settings
from quadboard.services.perspective import get_moderation_oracle

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Quadboard API",
    description="Anonymous campus forum API",
    version=settings.app_version,
)

# Add CORS middleware
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins,
    allow_credentials=settings.cors_allow_credentials,
    allow_methods=settings.cors_allow_methods,
    allow_headers=settings.cors_allow_headers,
)

# Add GZip middleware for compression
app.add_middleware(GZipMiddleware)

# Include API routers
app.include_router(posts_router, prefix="/api/v1")
app.include_router(votes_router, prefix="/api/v1")
app.include_router(groups_router, prefix="/api/v1")
app.include_router(moderation_router, prefix="/api/v1")
app.include_router(notifications_router, prefix="/api/v1")
app.include_router(users_router, prefix="/api/v1")


def configure_logging() -> None:
    """Apply the configured log level to the root logger."""
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    if not get_moderation_oracle().configured:
        logger.warning("PERSPECTIVE_API_KEY is not set; every report will be judged not harmful")


@app.on_event("shutdown")
async def on_shutdown() -> None:
    await get_moderation_oracle().close()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Quadboard API",
        "version": settings.app_version,
        "description": "Anonymous campus forum API",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn
    uvicorn.run("quadboard.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
