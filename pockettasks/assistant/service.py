"""
PocketTasks AI - Assistant Service

Orchestrates one prompt:
- Reads the current task count from the session
- Calls the intent classifier (normalized, never raises)
- Applies the result through the session
- Builds the user-facing message and feedback
"""

import logging

from pockettasks.assistant.schemas import AssistantResponse
from pockettasks.classifier.schemas import Action
from pockettasks.classifier.service import ClassifierService
from pockettasks.tasks.feedback import assistant_feedback, clear_feedback, complete_feedback
from pockettasks.tasks.schemas import TaskResponse
from pockettasks.tasks.session import AppliedClassification, TaskListSession

logger = logging.getLogger(__name__)


STALE_MESSAGE = "A newer request was handled first, so this one was skipped."


class AssistantService:

    def __init__(self, classifier: ClassifierService, session: TaskListSession):
        self.classifier = classifier
        self.session = session

    async def handle_prompt(self, prompt: str) -> AssistantResponse:
        """
        Classify a prompt and apply it to the task list.

        Args:
            prompt: The user's free-form text

        Returns:
            AssistantResponse describing what was done
        """
        seq = self.session.begin_request()
        current_count = self.session.counts().total
        logger.info(f"Processing prompt (request {seq}, {current_count} task(s)): {prompt[:50]}...")

        result = await self.classifier.classify(prompt, current_count)
        applied = await self.session.apply_classification(result, seq)
        return self._build_response(applied)

    def _build_response(self, applied: AppliedClassification) -> AssistantResponse:
        result = applied.result
        message = result.reasoning or ""
        feedback = None

        if applied.stale:
            message = STALE_MESSAGE
        elif result.action == Action.CLEAR_ALL_TASKS:
            feedback = clear_feedback(applied.changed)
        elif result.action == Action.COMPLETE_ALL_TASKS:
            feedback = complete_feedback(applied.changed, applied.total_before)
        elif result.action == Action.QUERY_TASK_COUNT:
            if result.reasoning:
                logger.debug(f"AI reasoning for task count query: {result.reasoning}")
            message = applied.count_message or message
            feedback = assistant_feedback(message)
        elif result.action == Action.ADD_TASKS:
            feedback = assistant_feedback(message, tasks_added=bool(applied.created_tasks))
        else:
            feedback = assistant_feedback(message)

        return AssistantResponse(
            action=result.action,
            reasoning=result.reasoning,
            message=message,
            task_list=list(result.task_list),
            count_subtype=result.count_subtype,
            created_tasks=[TaskResponse.model_validate(t) for t in applied.created_tasks],
            feedback=feedback,
            stale=applied.stale,
            tasks=[TaskResponse.model_validate(t) for t in self.session.list_tasks()],
        )
