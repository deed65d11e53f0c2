"""
PocketTasks AI - Task Models

Internal task model held by the session and mirrored to the task store.
"""

from dataclasses import dataclass
from typing import Any
import uuid


def new_task_id() -> str:
    """Generate an opaque unique task id."""
    return str(uuid.uuid4())


@dataclass
class Task:
    """A single to-do item."""

    id: str
    text: str
    completed: bool = False

    @classmethod
    def create(cls, text: str) -> "Task":
        """Create a new, incomplete task with a generated ID."""
        return cls(id=new_task_id(), text=text, completed=False)

    def to_dict(self) -> dict:
        """Convert task to the persisted record shape."""
        return {
            "id": self.id,
            "text": self.text,
            "completed": self.completed,
        }

    @classmethod
    def from_dict(cls, data: dict[str, Any]) -> "Task":
        """
        Create task from a persisted record.

        Records written by older clients may lack an id; those get a fresh one.
        """
        return cls(
            id=data.get("id") or new_task_id(),
            text=str(data.get("text", "")),
            completed=bool(data.get("completed", False)),
        )
