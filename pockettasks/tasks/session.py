"""
PocketTasks AI - Task List Session

The one owner of the in-memory task list. Every mutation goes through this
object, runs under a single lock, is mirrored to the task store and recorded
as a task event.

Classifier responses that change the list are fenced by request sequence
numbers: such a response is applied only if its request is newer than the
last change applied, so a slow answer can't overwrite a newer change.
"""

import asyncio
import logging
from dataclasses import dataclass, field
from typing import List, NamedTuple, Optional

from pockettasks.classifier.schemas import Action, ClassificationResult
from pockettasks.errors import TaskNotFoundError, ValidationError
from pockettasks.tasks.events import TaskEventRecorder
from pockettasks.tasks.models import Task
from pockettasks.tasks.repository import TaskStoreInterface
from pockettasks.tasks.schemas import CountSubtype, TaskEventType

logger = logging.getLogger(__name__)


class TaskCounts(NamedTuple):
    total: int
    completed: int
    remaining: int


@dataclass
class AppliedClassification:
    """What happened when a classification was applied to the list."""

    result: ClassificationResult
    seq: int
    stale: bool = False
    changed: bool = False
    total_before: int = 0
    created_tasks: List[Task] = field(default_factory=list)
    count_message: Optional[str] = None


def _tasks_word(n: int) -> str:
    return "task" if n == 1 else "tasks"


def format_count_message(counts: TaskCounts, subtype: CountSubtype) -> str:
    """Render the answer to a task-count question from live counts."""
    total, completed, remaining = counts
    if total == 0:
        return "You currently have no tasks."
    if subtype == CountSubtype.REMAINING:
        return f"You have {remaining} {_tasks_word(remaining)} remaining out of {total} ({completed} completed)."
    if subtype == CountSubtype.COMPLETED:
        return f"You have completed {completed} of your {total} {_tasks_word(total)}; {remaining} remaining."
    return f"You currently have {total} {_tasks_word(total)} in total: {completed} completed and {remaining} remaining."


def changes_list(result: ClassificationResult) -> bool:
    """Whether applying the result would modify the task list."""
    if result.action in (Action.CLEAR_ALL_TASKS, Action.COMPLETE_ALL_TASKS):
        return True
    return result.action == Action.ADD_TASKS and bool(result.task_list)


class TaskListSession:
    """Single owner of the task list for one user session."""

    def __init__(
        self,
        store: TaskStoreInterface,
        recorder: Optional[TaskEventRecorder] = None,
    ):
        self._store = store
        self._recorder = recorder or TaskEventRecorder()
        self._tasks: List[Task] = []
        self._lock = asyncio.Lock()
        self._last_request_seq = 0
        self._last_applied_seq = 0

    @property
    def recorder(self) -> TaskEventRecorder:
        return self._recorder

    async def load(self) -> None:
        """Replace the in-memory list with the persisted one (startup only)."""
        async with self._lock:
            self._tasks = await self._store.load()
        logger.info(f"Loaded {len(self._tasks)} task(s) from store")

    async def _persist(self) -> None:
        # The store is a mirror; a failed write must not undo the in-memory change
        try:
            await self._store.save(self._tasks)
        except Exception as e:
            logger.error(f"Failed to persist task list: {e}", exc_info=True)

    # Reads

    def list_tasks(self) -> List[Task]:
        """Current tasks, newest first (copies)."""
        return [Task(id=t.id, text=t.text, completed=t.completed) for t in self._tasks]

    def get(self, task_id: str) -> Task:
        for task in self._tasks:
            if task.id == task_id:
                return task
        raise TaskNotFoundError(task_id)

    def counts(self) -> TaskCounts:
        total = len(self._tasks)
        completed = sum(1 for t in self._tasks if t.completed)
        return TaskCounts(total=total, completed=completed, remaining=total - completed)

    def query_count(self, subtype: CountSubtype = CountSubtype.TOTAL) -> str:
        """Answer a task-count question using the live list."""
        return format_count_message(self.counts(), subtype)

    # List mutations

    async def add_tasks(self, texts: List[str]) -> List[Task]:
        """Prepend new incomplete tasks, preserving input order. Returns the created tasks."""
        async with self._lock:
            return await self._add_tasks(texts)

    async def clear_all(self) -> bool:
        """Empty the list. Returns whether any task existed beforehand."""
        async with self._lock:
            return await self._clear_all()

    async def complete_all(self) -> bool:
        """Mark every task completed. Returns whether any task was still open."""
        async with self._lock:
            return await self._complete_all()

    async def _add_tasks(self, texts: List[str]) -> List[Task]:
        new_tasks = [Task.create(text) for text in texts]
        if not new_tasks:
            return []
        self._tasks = new_tasks + self._tasks
        await self._persist()
        for task in new_tasks:
            self._recorder.record(task, TaskEventType.CREATED)
        return new_tasks

    async def _clear_all(self) -> bool:
        had_tasks = len(self._tasks) > 0
        if had_tasks:
            self._tasks = []
            await self._persist()
        return had_tasks

    async def _complete_all(self) -> bool:
        if not self._tasks or all(t.completed for t in self._tasks):
            return False
        for task in self._tasks:
            task.completed = True
        await self._persist()
        return True

    # Single-task mutations

    async def toggle(self, task_id: str) -> Task:
        """Flip one task's completed flag."""
        async with self._lock:
            task = self.get(task_id)
            task.completed = not task.completed
            await self._persist()
            self._recorder.record(
                task, TaskEventType.COMPLETED if task.completed else TaskEventType.UNCOMPLETED
            )
            return task

    async def update_text(self, task_id: str, text: str) -> Task:
        """
        Change a task's text.

        Raises:
            ValidationError: If the new text is empty; the task keeps its old text
            TaskNotFoundError: If no task has this id
        """
        new_text = (text or "").strip()
        if not new_text:
            raise ValidationError("Task cannot be empty")
        async with self._lock:
            task = self.get(task_id)
            if new_text == task.text:
                return task
            original_text = task.text
            task.text = new_text
            await self._persist()
            self._recorder.record(task, TaskEventType.TEXT_UPDATED, new_text=new_text, task_text=original_text)
            return task

    async def delete(self, task_id: str) -> Task:
        """Remove one task and return it."""
        async with self._lock:
            task = self.get(task_id)
            self._tasks = [t for t in self._tasks if t.id != task_id]
            await self._persist()
            self._recorder.record(task, TaskEventType.DELETED)
            return task

    async def add_subtasks(self, texts: List[str], parent_text: str) -> List[Task]:
        """
        Add insight sub-tasks to the top of the list, labelled with their parent.

        Raises:
            ValidationError: If no non-blank sub-task text was given
        """
        cleaned = [t.strip() for t in texts if t and t.strip()]
        if not cleaned:
            raise ValidationError("No sub-tasks to add")
        labelled = [f'Sub-task for "{parent_text}": {text}' for text in cleaned]
        async with self._lock:
            return await self._add_tasks(labelled)

    # Classifier results

    def begin_request(self) -> int:
        """Issue the next request sequence number."""
        self._last_request_seq += 1
        return self._last_request_seq

    async def apply_classification(self, result: ClassificationResult, seq: int) -> AppliedClassification:
        """
        Apply a normalized classification issued under request number seq.

        Only responses that change the list are fenced: one older than the
        last applied change is ignored. Read-only answers (count queries,
        conversational replies, failure fallbacks) neither get fenced nor
        move the fence.
        """
        async with self._lock:
            applied = AppliedClassification(result=result, seq=seq, total_before=len(self._tasks))
            if changes_list(result):
                if seq <= self._last_applied_seq:
                    logger.warning(
                        f"Ignoring stale classifier response for request {seq} "
                        f"(request {self._last_applied_seq} already applied)"
                    )
                    applied.stale = True
                    return applied
                self._last_applied_seq = seq

            if result.action == Action.CLEAR_ALL_TASKS:
                applied.changed = await self._clear_all()
            elif result.action == Action.COMPLETE_ALL_TASKS:
                applied.changed = await self._complete_all()
            elif result.action == Action.QUERY_TASK_COUNT:
                applied.count_message = self.query_count(result.count_subtype or CountSubtype.TOTAL)
            elif result.action == Action.ADD_TASKS:
                applied.created_tasks = await self._add_tasks(result.task_list)
                applied.changed = bool(applied.created_tasks)
            return applied
