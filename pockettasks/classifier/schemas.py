"""
PocketTasks AI - Classifier Schemas

Pydantic models for the intent classifier's request and its normalized result.
"""

from enum import Enum
from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, model_validator

from pockettasks.tasks.schemas import CountSubtype


class Action(str, Enum):
    """The five recognized user intents."""
    ADD_TASKS = "add_tasks"
    CLEAR_ALL_TASKS = "clear_all_tasks"
    COMPLETE_ALL_TASKS = "complete_all_tasks"
    QUERY_TASK_COUNT = "query_task_count"
    NO_ACTION_CONVERSATIONAL_REPLY = "no_action_conversational_reply"


class ClassifierRequest(BaseModel):
    """Input to the classifier: the user's text and, optionally, the list size."""

    model_config = ConfigDict(populate_by_name=True)

    prompt: str = Field(min_length=1, max_length=1000)
    current_task_count: Optional[int] = Field(default=None, alias="currentTaskCount", ge=0)


class RawClassification(BaseModel):
    """
    The classifier's answer as the model sent it.

    Deliberately loose: the normalizer repairs field types afterwards.
    """

    model_config = ConfigDict(populate_by_name=True, extra="ignore")

    task_list: Any = Field(default=None, alias="taskList")
    reasoning: Any = None
    action: Optional[str] = None


class ClassificationResult(BaseModel):
    """Normalized, safe-to-apply classification."""

    model_config = ConfigDict(populate_by_name=True, frozen=True)

    task_list: List[str] = Field(default_factory=list, alias="taskList")
    reasoning: Optional[str] = None
    action: Action = Action.ADD_TASKS
    count_subtype: Optional[CountSubtype] = Field(default=None, alias="countSubtype")

    @model_validator(mode="after")
    def check_task_list_matches_action(self) -> "ClassificationResult":
        """Only add_tasks may carry tasks."""
        if self.action != Action.ADD_TASKS and self.task_list:
            raise ValueError(f"taskList must be empty for action {self.action.value}")
        return self
