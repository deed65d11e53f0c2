"""
PocketTasks AI - Error Types

Failures raised at the boundaries of the assistant:
- ServiceError: the hosted model could not be reached or refused the call
- SchemaError: the model answered with data of the wrong shape
- ValidationError: user input rejected locally, never sent to the model
"""


class PocketTasksError(Exception):
    """Base class for application errors."""


class ServiceError(PocketTasksError):
    """External AI call failed (network, timeout, overload, quota, auth/config)."""


class SchemaError(PocketTasksError):
    """External AI response does not match the expected shape."""


class ValidationError(PocketTasksError, ValueError):
    """User input failed local constraints."""


class TaskNotFoundError(PocketTasksError, LookupError):
    """No task with the given id exists in the session."""

    def __init__(self, task_id: str):
        super().__init__(f"Task not found: {task_id}")
        self.task_id = task_id
