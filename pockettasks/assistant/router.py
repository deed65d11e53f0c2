"""
PocketTasks AI - Assistant Router

Turns a free-form prompt into a task list change.
"""

import logging
from typing import Annotated

from fastapi import APIRouter, Depends

from pockettasks.assistant.schemas import AssistantRequest, AssistantResponse
from pockettasks.assistant.service import AssistantService
from pockettasks.classifier.service import ClassifierService
from pockettasks.dependencies import get_classifier_service, get_session
from pockettasks.tasks.session import TaskListSession

logger = logging.getLogger(__name__)


router = APIRouter(prefix="/assistant", tags=["Assistant"])


def get_assistant_service(
    classifier: Annotated[ClassifierService, Depends(get_classifier_service)],
    session: Annotated[TaskListSession, Depends(get_session)],
) -> AssistantService:
    """Dependency to get assistant service instance."""
    return AssistantService(classifier, session)


@router.post("", response_model=AssistantResponse)
async def handle_prompt(
    request: AssistantRequest,
    assistant: Annotated[AssistantService, Depends(get_assistant_service)],
) -> AssistantResponse:
    """
    Classify a prompt and apply it to the task list.

    AI failures come back as a normal response with an apologetic message;
    the task list is never lost.
    """
    response = await assistant.handle_prompt(request.prompt)
    logger.info(f"Handled prompt with action: {response.action.value}")
    return response
