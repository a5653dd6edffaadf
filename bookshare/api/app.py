"""
FastAPI application for the bookshare service.

Run with: uvicorn bookshare.api.app:app --reload
"""

from __future__ import annotations

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from bookshare.api.books import router as books_router
from bookshare.api.errors import register_error_handlers
from bookshare.auth.routes import router as auth_router
from bookshare.config import get_settings
from bookshare.integrations.sentry import init_sentry
from bookshare.storage import create_local_storage

logger = logging.getLogger(__name__)


# =============================================================================
# Lifespan
# =============================================================================


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Initialize and cleanup app resources."""
    settings = get_settings()
    logging.basicConfig(
        level=settings.log_level.upper(),
        format="%(asctime)s %(levelname)s %(name)s: %(message)s",
    )

    if init_sentry():
        logger.info("Sentry error tracking enabled")

    # One store handle for the whole process
    app.state.storage = create_local_storage()
    await app.state.storage.connect()

    logger.info("Bookshare API starting in %s mode", settings.environment)

    yield

    await app.state.storage.close()
    logger.info("Bookshare API shutting down")


# =============================================================================
# App Setup
# =============================================================================


app = FastAPI(
    title="Bookshare API",
    description="Share books: register, log in, and let creators publish books",
    version="0.1.0",
    lifespan=lifespan,
)


settings = get_settings()
app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.cors_origins_list,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

register_error_handlers(app)

app.include_router(auth_router)
app.include_router(books_router)


# =============================================================================
# Service Endpoints
# =============================================================================


@app.get("/")
async def root():
    return {"message": "Hello World!"}


@app.get("/health")
async def health_check():
    """Health check endpoint."""
    return {"status": "healthy", "service": "bookshare-api"}
