"""
PocketTasks AI - Insights Schemas

Pydantic models for task insight requests and responses.
"""

from typing import Any, List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class InsightRequest(BaseModel):
    """Request model for an insight on one task."""

    model_config = ConfigDict(populate_by_name=True)

    task: str = Field(min_length=1, max_length=500, description="The task to provide insights for")
    task_list: str = Field(
        default="",
        alias="taskList",
        max_length=20000,
        description="Newline-joined list containing the task, for context",
    )

    @field_validator("task")
    @classmethod
    def validate_task(cls, v: str) -> str:
        """Validate task is not just whitespace."""
        if not v.strip():
            raise ValueError("Task cannot be empty or whitespace only")
        return v.strip()


class InsightResult(BaseModel):
    """Insight for one task."""

    model_config = ConfigDict(populate_by_name=True)

    estimated_time_to_complete: str = Field(
        alias="estimatedTimeToComplete", description="The estimated time to complete the task"
    )
    potential_dependencies: str = Field(
        alias="potentialDependencies", description="Potential dependencies for the task"
    )
    additional_notes: str = Field(
        alias="additionalNotes", description="Any additional notes or considerations for the task"
    )
    sub_tasks: Optional[List[str]] = Field(
        default_factory=list,
        alias="subTasks",
        description="Optional breakdown of the task into smaller steps",
    )

    @field_validator("sub_tasks", mode="before")
    @classmethod
    def coerce_sub_tasks(cls, v: Any) -> List[str]:
        """Missing or malformed sub-tasks become an empty list."""
        if not isinstance(v, list):
            return []
        return [item.strip() for item in v if isinstance(item, str) and item.strip()]
