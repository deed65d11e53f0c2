"""
PocketTasks AI - Assistant Schemas

Pydantic models for the assistant endpoint.
"""

from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator

from pockettasks.classifier.schemas import Action
from pockettasks.tasks.schemas import CountSubtype, Feedback, TaskResponse


class AssistantRequest(BaseModel):
    """Request model for the assistant endpoint."""

    prompt: str = Field(
        min_length=1,
        max_length=1000,
        description="Tasks to add, or a command like 'delete all tasks' or 'how many tasks do I have?'",
    )

    @field_validator("prompt")
    @classmethod
    def validate_prompt(cls, v: str) -> str:
        """Validate prompt is not just whitespace."""
        if not v.strip():
            raise ValueError("Prompt cannot be empty or whitespace only")
        return v.strip()


class AssistantResponse(BaseModel):
    """
    Response from the assistant.

    `message` is what the user should see; for count questions it is built
    from live counts rather than the model's reasoning.
    """

    model_config = ConfigDict(populate_by_name=True)

    action: Action
    reasoning: Optional[str] = None
    message: str
    task_list: List[str] = Field(default_factory=list, alias="taskList")
    count_subtype: Optional[CountSubtype] = Field(default=None, alias="countSubtype")
    created_tasks: List[TaskResponse] = Field(default_factory=list, alias="createdTasks")
    feedback: Optional[Feedback] = None
    stale: bool = Field(default=False, description="True when a newer request was applied first")
    tasks: List[TaskResponse] = Field(default_factory=list, description="The list after this request")
