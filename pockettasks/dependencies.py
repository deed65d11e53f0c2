"""
PocketTasks AI - Dependencies

Process-wide singletons (session, AI services) and their FastAPI providers.
Each can be replaced in tests via the setters or app.dependency_overrides.
"""

import logging
from typing import Optional

from pockettasks.classifier.service import ClassifierService
from pockettasks.config import settings
from pockettasks.database import MONGO_BACKEND, database
from pockettasks.insights.service import InsightService
from pockettasks.tasks.events import TaskEventRecorder
from pockettasks.tasks.repository import (
    InMemoryTaskStore,
    JsonFileTaskStore,
    MongoTaskStore,
    TaskStoreInterface,
)
from pockettasks.tasks.session import TaskListSession

logger = logging.getLogger(__name__)


_session: Optional[TaskListSession] = None
_classifier_service: Optional[ClassifierService] = None
_insight_service: Optional[InsightService] = None


def build_store(backend: Optional[str] = None) -> TaskStoreInterface:
    """
    Create the task store for the configured backend.

    The mongo backend requires database.connect_for_backend() to have been awaited.
    """
    backend = (backend or settings.STORAGE_BACKEND).lower()
    if backend == "file":
        return JsonFileTaskStore(settings.STORAGE_PATH, settings.STORAGE_KEY)
    if backend == MONGO_BACKEND:
        return MongoTaskStore(database.get_database(), settings.STORAGE_KEY)
    if backend == "memory":
        return InMemoryTaskStore()
    raise ValueError(f"Unknown STORAGE_BACKEND: {backend}")


async def create_session(store: TaskStoreInterface) -> TaskListSession:
    """Create a session over the store and load the persisted list."""
    session = TaskListSession(store, TaskEventRecorder(limit=settings.TASK_EVENT_HISTORY_LIMIT))
    await session.load()
    return session


def get_session() -> TaskListSession:
    """Get the task list session."""
    if _session is None:
        raise RuntimeError("Task list session not initialized. Start the application lifespan first.")
    return _session


def set_session(session: Optional[TaskListSession]) -> None:
    """Set the task list session (startup and tests)."""
    global _session
    _session = session


def get_classifier_service() -> ClassifierService:
    """Get classifier service instance."""
    global _classifier_service
    if _classifier_service is None:
        _classifier_service = ClassifierService()
    return _classifier_service


def set_classifier_service(service: Optional[ClassifierService]) -> None:
    """Set classifier service (for testing)."""
    global _classifier_service
    _classifier_service = service


def get_insight_service() -> InsightService:
    """Get insight service instance."""
    global _insight_service
    if _insight_service is None:
        _insight_service = InsightService()
    return _insight_service


def set_insight_service(service: Optional[InsightService]) -> None:
    """Set insight service (for testing)."""
    global _insight_service
    _insight_service = service
