"""
PocketTasks AI - Task Event Recorder

Keeps a short history of what happened to each task (created, completed,
uncompleted, deleted, text_updated) so later AI features can use it.
Events go to the log and to a bounded in-memory buffer.
"""

import logging
from collections import deque
from dataclasses import dataclass, asdict
from datetime import datetime, timezone
from typing import Callable, List, Optional

from pockettasks.tasks.models import Task
from pockettasks.tasks.schemas import TaskEventType

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class TaskEvent:
    task_id: str
    task_text: str
    event_type: TaskEventType
    timestamp: str
    new_text: Optional[str] = None

    def to_dict(self) -> dict:
        data = asdict(self)
        data["event_type"] = self.event_type.value
        return data


class TaskEventRecorder:
    """Records task events; recording failures never reach the caller."""

    def __init__(
        self,
        limit: int = 200,
        clock: Optional[Callable[[], datetime]] = None,
    ):
        self._events: deque[TaskEvent] = deque(maxlen=max(limit, 1))
        self._clock = clock or (lambda: datetime.now(timezone.utc))

    def record(
        self,
        task: Task,
        event_type: TaskEventType,
        new_text: Optional[str] = None,
        task_text: Optional[str] = None,
    ) -> Optional[TaskEvent]:
        try:
            event = TaskEvent(
                task_id=task.id,
                task_text=task_text if task_text is not None else task.text,
                event_type=event_type,
                timestamp=self._clock().isoformat(),
                new_text=new_text,
            )
            self._events.append(event)
            logger.info(f"Task event recorded: {event.event_type.value} {event.task_id} '{event.task_text[:50]}'")
            return event
        except Exception as e:
            logger.error(f"Error recording task event {event_type} for {task.id}: {e}")
            return None

    def history(self) -> List[TaskEvent]:
        """Recorded events, oldest first."""
        return list(self._events)

    def clear(self) -> None:
        self._events.clear()
