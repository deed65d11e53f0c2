"""
PocketTasks AI - Test Configuration

Shared fixtures for CI-safe testing without OpenAI or MongoDB.
"""

import json
from typing import Any, Optional
from unittest.mock import AsyncMock, MagicMock

import httpx
import pytest
from fastapi.testclient import TestClient

from pockettasks.main import app
from pockettasks.classifier.service import ClassifierService
from pockettasks.dependencies import get_classifier_service, get_insight_service, get_session
from pockettasks.insights.service import InsightService
from pockettasks.tasks.events import TaskEventRecorder
from pockettasks.tasks.models import Task
from pockettasks.tasks.repository import InMemoryTaskStore
from pockettasks.tasks.session import TaskListSession


OPENAI_URL = "https://api.openai.com/v1/chat/completions"


def make_completion(content: Any) -> MagicMock:
    """Build a fake chat completion whose first choice carries content."""
    if isinstance(content, (dict, list)):
        content = json.dumps(content)
    choice = MagicMock()
    choice.message.content = content
    completion = MagicMock()
    completion.choices = [choice]
    return completion


def make_llm_client(content: Any = None, side_effect: Optional[BaseException] = None) -> MagicMock:
    """Fake AsyncOpenAI client with a mocked chat.completions.create."""
    client = MagicMock()
    if side_effect is not None:
        client.chat.completions.create = AsyncMock(side_effect=side_effect)
    else:
        client.chat.completions.create = AsyncMock(return_value=make_completion(content))
    return client


def openai_request() -> httpx.Request:
    return httpx.Request("POST", OPENAI_URL)


def make_task(text: str, completed: bool = False) -> Task:
    task = Task.create(text)
    task.completed = completed
    return task


@pytest.fixture
def task_store():
    """Provide a fresh in-memory task store for each test."""
    return InMemoryTaskStore()


@pytest.fixture
def recorder():
    return TaskEventRecorder(limit=50)


@pytest.fixture
def session(task_store, recorder):
    """Provide an empty task list session over the in-memory store."""
    return TaskListSession(task_store, recorder)


@pytest.fixture
def llm_client():
    """Fake LLM client; tests set its return value."""
    return make_llm_client({"taskList": [], "action": "add_tasks"})


@pytest.fixture
def classifier_service(llm_client):
    return ClassifierService(llm_client=llm_client)


@pytest.fixture
def insight_service(llm_client):
    return InsightService(llm_client=llm_client)


@pytest.fixture
def client(session, classifier_service, insight_service):
    """Create test client wired to the in-memory session and fake AI services."""
    app.dependency_overrides[get_session] = lambda: session
    app.dependency_overrides[get_classifier_service] = lambda: classifier_service
    app.dependency_overrides[get_insight_service] = lambda: insight_service

    yield TestClient(app)
    # Clean up overrides after test
    app.dependency_overrides.clear()
