"""
PocketTasks AI - Insight Service

Asks the hosted model for an estimate, dependencies, notes and sub-tasks for
one task. This path never raises: any failure yields a degraded result so
callers need no special error handling.
"""

import logging
from typing import Any

from pydantic import ValidationError as PydanticValidationError

from pockettasks.insights.schemas import InsightResult
from pockettasks.llm import create_llm_client, request_json

logger = logging.getLogger(__name__)


NOT_AVAILABLE = "Not available"
DEGRADED_NOTE = (
    "Sorry, AI insights could not be generated for this task right now. Please try again in a little while."
)

SYSTEM_PROMPT = "\n".join([
    "You are a personal task management assistant.",
    "Given one task from the user's to-do list, provide insights such as the estimated time to complete,",
    "potential dependencies and additional notes. When the task can be broken down into concrete steps",
    "(or needs ingredients or materials), list them as sub-tasks.",
    "",
    "Answer with ONE JSON object:",
    "{",
    '  "estimatedTimeToComplete": "short estimate, e.g. 30 minutes",',
    '  "potentialDependencies": "what must happen first or what is needed",',
    '  "additionalNotes": "a detailed paragraph of notes and considerations",',
    '  "subTasks": ["optional short step", ...]',
    "}",
    "",
    "Respond STRICTLY with the JSON object and nothing else.",
])


def build_insight_prompt(task: str, task_list: str) -> str:
    prompt_parts = [f"Task: {task}", "Task List:", task_list or "(no other tasks)"]
    return "\n".join(prompt_parts)


def degraded_insight() -> InsightResult:
    """Result returned when the AI service can't provide an insight."""
    return InsightResult(
        estimated_time_to_complete=NOT_AVAILABLE,
        potential_dependencies=NOT_AVAILABLE,
        additional_notes=DEGRADED_NOTE,
        sub_tasks=[],
    )


class InsightService:

    def __init__(self, llm_client: Any = None):
        self._llm_client = llm_client if llm_client is not None else create_llm_client()

    def _get_llm_client(self):
        """Get LLM client (can be mocked in tests)."""
        return self._llm_client

    def _set_llm_client(self, client):
        """Set LLM client (for dependency injection in tests)."""
        self._llm_client = client

    async def provide_insight(self, task: str, task_list: str) -> InsightResult:
        """
        Get insights for a task.

        Args:
            task: The task's text
            task_list: Newline-joined texts of the whole list, for context

        Returns:
            InsightResult, degraded when the AI service fails
        """
        try:
            raw = await request_json(
                self._get_llm_client(),
                SYSTEM_PROMPT,
                build_insight_prompt(task, task_list),
                max_tokens=700,
            )
            insight = InsightResult.model_validate(raw)
        except PydanticValidationError as e:
            logger.warning(f"AI insight answer has an invalid shape, using degraded result: {e}")
            return degraded_insight()
        except Exception as e:
            # ServiceError, SchemaError and anything unexpected all degrade
            logger.error(f"Failed to get task insight: {e}")
            return degraded_insight()

        logger.info(f"Generated insight for task '{task[:50]}' with {len(insight.sub_tasks or [])} sub-task(s)")
        return insight
