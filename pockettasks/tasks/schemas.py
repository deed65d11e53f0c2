"""
PocketTasks AI - Task Schemas

Pydantic models for task API requests and responses.
"""

from enum import Enum
from typing import List, Optional

from pydantic import BaseModel, ConfigDict, Field, field_validator


class CountSubtype(str, Enum):
    """Which figure a task-count question asks about."""
    TOTAL = "total"
    REMAINING = "remaining"
    COMPLETED = "completed"


class TaskEventType(str, Enum):
    """Kinds of task events recorded for history."""
    CREATED = "created"
    COMPLETED = "completed"
    UNCOMPLETED = "uncompleted"
    DELETED = "deleted"
    TEXT_UPDATED = "text_updated"


class TaskResponse(BaseModel):
    """Response model for a single task."""

    model_config = ConfigDict(from_attributes=True)

    id: str = Field(description="Task ID")
    text: str = Field(description="Task text")
    completed: bool = Field(description="Whether the task is done")


class TaskListResponse(BaseModel):
    """Response model for the whole list."""

    tasks: List[TaskResponse] = Field(description="Tasks, newest first")
    total: int = Field(description="Total number of tasks")
    completed: int = Field(description="Number of completed tasks")
    remaining: int = Field(description="Number of tasks still open")


class TaskCountResponse(BaseModel):
    """Response model for a task-count query."""

    message: str = Field(description="Human-readable count summary")
    total: int
    completed: int
    remaining: int


class Feedback(BaseModel):
    """Short notification payload for the client to display."""

    title: str
    description: str


class BulkActionResponse(BaseModel):
    """Response model for clear-all and complete-all."""

    changed: bool = Field(description="Whether the list was modified")
    feedback: Feedback
    tasks: List[TaskResponse]


class TaskUpdateRequest(BaseModel):
    """Request model for editing a task's text."""

    text: str = Field(min_length=1, max_length=500, description="New task text")

    @field_validator("text")
    @classmethod
    def validate_text(cls, v: str) -> str:
        """Reject whitespace-only text."""
        if not v.strip():
            raise ValueError("Task cannot be empty")
        return v.strip()


class SubTasksRequest(BaseModel):
    """Request model for adding sub-tasks under an existing task."""

    model_config = ConfigDict(populate_by_name=True)

    sub_tasks: List[str] = Field(alias="subTasks", min_length=1, description="Sub-task texts")


class TaskMutationResponse(BaseModel):
    """Response model for single-task mutations."""

    task: Optional[TaskResponse] = None
    feedback: Feedback


class SubTasksResponse(BaseModel):
    """Response model for sub-task addition."""

    model_config = ConfigDict(populate_by_name=True)

    created_tasks: List[TaskResponse] = Field(alias="createdTasks")
    feedback: Feedback


class TaskEventResponse(BaseModel):
    """A recorded task event."""

    task_id: str
    task_text: str
    event_type: TaskEventType
    new_text: Optional[str] = None
    timestamp: str


class TaskEventListResponse(BaseModel):
    """Recorded task events, oldest first."""

    events: List[TaskEventResponse]
    total: int
