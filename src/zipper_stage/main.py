"""Main entry point for the Zipper Stage application."""

from __future__ import annotations

import logging

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware
from fastapi.middleware.gzip import GZipMiddleware

from zipper_stage.api.v1 import zippclips_router
from zipper_stage.core.logging import configure_logging
from zipper_stage.core.settings import settings

logger = logging.getLogger(__name__)

# Initialize FastAPI app
app = FastAPI(
    title="Zipper API",
    description="Response chains for short-form clips",
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
app.include_router(zippclips_router, prefix="/api/v1")


@app.on_event("startup")
async def on_startup() -> None:
    configure_logging()
    if settings.auto_create_tables:
        from zipper_stage.db.session import create_tables

        await create_tables()
        logger.info("Database tables ensured at %s", settings.effective_database_url)


@app.on_event("shutdown")
async def on_shutdown() -> None:
    from zipper_stage.db.session import engine

    await engine.dispose()


@app.get("/health")
async def health_check() -> dict[str, str]:
    """Health check endpoint to verify the service is running."""
    return {"status": "ok"}


@app.get("/")
async def root() -> dict[str, str]:
    """Root endpoint with basic information about the API."""
    return {
        "name": "Zipper API",
        "version": settings.app_version,
        "description": "Response chains for short-form clips",
        "docs": "/docs",
        "redoc": "/redoc",
    }


if __name__ == "__main__":
    import uvicorn

    uvicorn.run("zipper_stage.main:app", host="0.0.0.0", port=8000, reload=settings.debug)
