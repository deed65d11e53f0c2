"""
PocketTasks AI - Intent Classifier Service

Calls the hosted model with the classification prompt and hands its answer
to the normalizer. Failures never reach the caller as exceptions from
classify(): they come back as a friendly add_tasks result with no tasks.
Only out-of-range input (checked before any call) raises.
"""

import logging
from typing import Any, Optional

from pydantic import ValidationError as PydanticValidationError

from pockettasks.classifier.normalizer import normalize_classification
from pockettasks.classifier.prompts import SYSTEM_PROMPT, build_classifier_prompt
from pockettasks.classifier.schemas import Action, ClassificationResult, ClassifierRequest
from pockettasks.errors import SchemaError, ServiceError, ValidationError
from pockettasks.llm import create_llm_client, request_json

logger = logging.getLogger(__name__)


CONNECTION_TROUBLE_MESSAGE = (
    "I'm having trouble connecting to the AI service right now. Please try again in a few moments."
)
OVERLOADED_MESSAGE = "The AI service is currently overloaded. Please try again in a little while."
CONFIGURATION_MESSAGE = "There seems to be an issue with the AI service configuration. Please contact support."


def friendly_error_message(error: Exception) -> str:
    """Pick the user-facing apology for a failed classifier call."""
    if isinstance(error, SchemaError):
        return CONNECTION_TROUBLE_MESSAGE
    error_msg = str(error).lower()
    if "503" in error_msg or "overloaded" in error_msg:
        return OVERLOADED_MESSAGE
    if "api key" in error_msg or "401" in error_msg:
        return CONFIGURATION_MESSAGE
    return CONNECTION_TROUBLE_MESSAGE


def fallback_result(error: Exception) -> ClassificationResult:
    """Action-preserving result used when the classifier fails."""
    return ClassificationResult(
        task_list=[],
        reasoning=friendly_error_message(error),
        action=Action.ADD_TASKS,
    )


class ClassifierService:

    def __init__(self, llm_client: Any = None):
        # LLM client abstraction (mockable for tests)
        self._llm_client = llm_client if llm_client is not None else create_llm_client()

    def _get_llm_client(self):
        """Get LLM client (can be mocked in tests)."""
        return self._llm_client

    def _set_llm_client(self, client):
        """Set LLM client (for dependency injection in tests)."""
        self._llm_client = client

    async def request_classification(self, prompt: str, current_task_count: Optional[int] = None) -> dict:
        """
        Ask the model to classify the prompt and return its raw answer.

        Raises:
            ValidationError: If the prompt or task count is out of range
            ServiceError: If the model could not be reached
            SchemaError: If the model did not answer with a JSON object
        """
        try:
            request = ClassifierRequest(prompt=prompt, current_task_count=current_task_count)
        except PydanticValidationError as e:
            raise ValidationError(f"Invalid classifier request: {e}") from e

        user_prompt = build_classifier_prompt(request.prompt, request.current_task_count)
        logger.debug(f"Classifying prompt: {request.prompt[:100]}...")
        return await request_json(self._get_llm_client(), SYSTEM_PROMPT, user_prompt, max_tokens=600)

    async def classify(self, prompt: str, current_task_count: Optional[int] = None) -> ClassificationResult:
        """
        Classify user text into a normalized action and task list.

        Args:
            prompt: The user's raw text
            current_task_count: Size of the list as the client saw it

        Returns:
            ClassificationResult safe to apply to the task list

        Raises:
            ValidationError: If the prompt or task count is out of range
        """
        try:
            raw = await self.request_classification(prompt, current_task_count)
            result = normalize_classification(raw, prompt)
        except (ServiceError, SchemaError) as e:
            logger.error(f"Error calling AI model for classification: {e}")
            return fallback_result(e)

        logger.info(f"Classified prompt as {result.action.value} with {len(result.task_list)} task(s)")
        return result
