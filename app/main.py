"""
Main FastAPI application.

This is the entry point for the API server.
"""

import logging
from contextlib import asynccontextmanager
from pathlib import Path

from fastapi import FastAPI
from fastapi.exceptions import RequestValidationError
from fastapi.middleware.cors import CORSMiddleware
from starlette.exceptions import HTTPException as StarletteHTTPException

from app.core.config import settings
from app.core.logging import setup_logging
from app.db.seed import seed_database
from app.db.session import create_tables, get_async_session_context
from app.errors import (
    AppError,
    app_error_handler,
    http_exception_handler,
    request_validation_handler,
    unhandled_exception_handler,
)
from app.routers import auth, health, task

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """
    Lifespan context manager for the FastAPI app.

    - On startup: configure logging, create tables, load demo data.
    - On shutdown: nothing to release beyond the engine pool.
    """
    setup_logging(settings.LOG_LEVEL)
    logger.info("Starting %s...", settings.APP_NAME)

    if settings.CREATE_TABLES_ON_STARTUP:
        await create_tables()

    if settings.SEED_ON_STARTUP:
        async with get_async_session_context() as session:
            await seed_database(session, Path(settings.SEED_DATA_PATH))

    yield  # The server runs while we're "yielded" here

    logger.info("Shutting down %s...", settings.APP_NAME)


# Create the FastAPI application
app = FastAPI(
    title=settings.APP_NAME,
    description="Task tracking API with per-user ownership, soft delete and cursor pagination",
    version="1.0.0",
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["*"],
    allow_headers=["*"],
)

app.add_exception_handler(AppError, app_error_handler)
app.add_exception_handler(RequestValidationError, request_validation_handler)
app.add_exception_handler(StarletteHTTPException, http_exception_handler)
app.add_exception_handler(Exception, unhandled_exception_handler)


# Include routers (API endpoints)
app.include_router(health.router, tags=["Health"])
app.include_router(auth.router)
app.include_router(task.router)

# Same endpoints under /api for clients built against that base URL
app.include_router(auth.router, prefix="/api", include_in_schema=False)
app.include_router(task.router, prefix="/api", include_in_schema=False)
