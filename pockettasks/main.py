"""
PocketTasks AI - Main Application

Single-user to-do list service. The task list is owned by one session,
loaded from the task store at startup and mirrored back after every change.
"""

import logging
from contextlib import asynccontextmanager

from fastapi import FastAPI
from fastapi.middleware.cors import CORSMiddleware

from pockettasks.config import settings
from pockettasks.database import database
from pockettasks.dependencies import build_store, create_session, set_session
from pockettasks.assistant.router import router as assistant_router
from pockettasks.insights.router import router as insights_router
from pockettasks.tasks.router import router as tasks_router

logging.basicConfig(
    level=getattr(logging, settings.LOG_LEVEL.upper(), logging.INFO),
    format="%(asctime)s - %(name)s - %(levelname)s - %(message)s",
    datefmt="%Y-%m-%d %H:%M:%S",
)

logger = logging.getLogger(__name__)


@asynccontextmanager
async def lifespan(app: FastAPI):
    """Application lifespan handler for startup/shutdown events."""
    # Startup: Connect to MongoDB only when it backs the task store
    await database.connect_for_backend(settings.STORAGE_BACKEND)

    # Startup: Load the persisted list into the session
    session = await create_session(build_store())
    set_session(session)
    logger.info(f"{settings.APP_NAME} started with {settings.STORAGE_BACKEND} task store")

    yield

    # Shutdown
    set_session(None)
    await database.disconnect()


app = FastAPI(
    title=settings.APP_NAME,
    version=settings.APP_VERSION,
    description="To-do list with AI task generation, list commands and task insights",
    docs_url="/docs" if settings.DEBUG else None,
    redoc_url="/redoc" if settings.DEBUG else None,
    lifespan=lifespan,
)

app.add_middleware(
    CORSMiddleware,
    allow_origins=settings.CORS_ORIGINS,
    allow_credentials=True,
    allow_methods=["GET", "POST", "PATCH", "DELETE", "OPTIONS"],
    allow_headers=["Content-Type"],
)


@app.get("/health", tags=["Health"])
async def health_check() -> dict:
    """
    Health check endpoint.

    Returns the service status and version information.
    """
    return {
        "status": "healthy",
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
    }


@app.get("/", tags=["Root"])
async def root() -> dict:
    """Root endpoint with service information."""
    return {
        "service": settings.APP_NAME,
        "version": settings.APP_VERSION,
        "docs": "/docs" if settings.DEBUG else "disabled",
    }


app.include_router(assistant_router)
app.include_router(tasks_router)
app.include_router(insights_router)
