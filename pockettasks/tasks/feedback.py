"""
PocketTasks AI - Feedback Messages

Short {title, description} notices shown to the user after list changes.
"""

from typing import List

from pockettasks.tasks.models import Task
from pockettasks.tasks.schemas import Feedback


ASSISTANT_TITLE = "AI Assistant"


def clear_feedback(changed: bool) -> Feedback:
    if changed:
        return Feedback(title="List Cleared", description="All tasks have been removed.")
    return Feedback(title="List is already empty", description="There are no tasks to remove.")


def complete_feedback(changed: bool, total: int) -> Feedback:
    if changed:
        return Feedback(title="All Tasks Completed!", description="Great job, everything is marked as done!")
    if total == 0:
        return Feedback(title="No tasks to complete", description="Your list is empty.")
    return Feedback(
        title="All tasks already completed",
        description="There are no pending tasks to mark as complete.",
    )


def toggle_feedback(task: Task) -> Feedback:
    return Feedback(
        title=f"Task {'completed!' if task.completed else 'marked incomplete'}",
        description=f'"{task.text}" state updated.',
    )


def update_feedback(original_text: str, new_text: str) -> Feedback:
    return Feedback(title="Task updated!", description=f'"{original_text}" changed to "{new_text}".')


def delete_feedback(task: Task) -> Feedback:
    return Feedback(title="Task deleted", description=f'"{task.text}" has been removed.')


def subtasks_feedback(created: List[Task], parent_text: str) -> Feedback:
    return Feedback(
        title="Sub-tasks added!",
        description=f'{len(created)} sub-task(s) related to "{parent_text}" added to your list.',
    )


def assistant_feedback(message: str, tasks_added: bool = False) -> Feedback:
    return Feedback(title="Tasks Added!" if tasks_added else ASSISTANT_TITLE, description=message)
