"""
PocketTasks AI - Task Router

Endpoints for reading and directly editing the task list.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from pockettasks.dependencies import get_session
from pockettasks.errors import TaskNotFoundError, ValidationError
from pockettasks.tasks.feedback import (
    clear_feedback,
    complete_feedback,
    delete_feedback,
    subtasks_feedback,
    toggle_feedback,
    update_feedback,
)
from pockettasks.tasks.schemas import (
    BulkActionResponse,
    CountSubtype,
    SubTasksRequest,
    SubTasksResponse,
    TaskCountResponse,
    TaskEventListResponse,
    TaskEventResponse,
    TaskListResponse,
    TaskMutationResponse,
    TaskResponse,
    TaskUpdateRequest,
)
from pockettasks.tasks.session import TaskListSession


router = APIRouter(prefix="/tasks", tags=["Tasks"])

SessionDep = Annotated[TaskListSession, Depends(get_session)]


def _not_found() -> HTTPException:
    return HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")


def _task_list(session: TaskListSession) -> list[TaskResponse]:
    return [TaskResponse.model_validate(t) for t in session.list_tasks()]


@router.get("", response_model=TaskListResponse, summary="List tasks")
async def list_tasks(session: SessionDep) -> TaskListResponse:
    """List all tasks, newest first, with counts."""
    counts = session.counts()
    return TaskListResponse(
        tasks=_task_list(session),
        total=counts.total,
        completed=counts.completed,
        remaining=counts.remaining,
    )


@router.get("/count", response_model=TaskCountResponse, summary="Count tasks")
async def count_tasks(
    session: SessionDep,
    subtype: CountSubtype = Query(default=CountSubtype.TOTAL, description="Which count to describe"),
) -> TaskCountResponse:
    counts = session.counts()
    return TaskCountResponse(
        message=session.query_count(subtype),
        total=counts.total,
        completed=counts.completed,
        remaining=counts.remaining,
    )


@router.get("/events", response_model=TaskEventListResponse, summary="Task event history")
async def list_task_events(session: SessionDep) -> TaskEventListResponse:
    events = [TaskEventResponse(**e.to_dict()) for e in session.recorder.history()]
    return TaskEventListResponse(events=events, total=len(events))


@router.delete("", response_model=BulkActionResponse, summary="Clear the list")
async def clear_tasks(session: SessionDep) -> BulkActionResponse:
    changed = await session.clear_all()
    return BulkActionResponse(changed=changed, feedback=clear_feedback(changed), tasks=[])


@router.post("/complete-all", response_model=BulkActionResponse, summary="Mark every task completed")
async def complete_all_tasks(session: SessionDep) -> BulkActionResponse:
    total = session.counts().total
    changed = await session.complete_all()
    return BulkActionResponse(
        changed=changed,
        feedback=complete_feedback(changed, total),
        tasks=_task_list(session),
    )


@router.get("/{task_id}", response_model=TaskResponse, summary="Get a task by ID")
async def get_task(task_id: str, session: SessionDep) -> TaskResponse:
    try:
        return TaskResponse.model_validate(session.get(task_id))
    except TaskNotFoundError:
        raise _not_found()


@router.patch("/{task_id}", response_model=TaskMutationResponse, summary="Edit a task's text")
async def update_task(task_id: str, request: TaskUpdateRequest, session: SessionDep) -> TaskMutationResponse:
    """
    Change a task's text.

    Blank text is rejected and the task keeps its current text.
    """
    try:
        original_text = session.get(task_id).text
        task = await session.update_text(task_id, request.text)
    except TaskNotFoundError:
        raise _not_found()
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return TaskMutationResponse(
        task=TaskResponse.model_validate(task),
        feedback=update_feedback(original_text, task.text),
    )


@router.post("/{task_id}/toggle", response_model=TaskMutationResponse, summary="Toggle completion")
async def toggle_task(task_id: str, session: SessionDep) -> TaskMutationResponse:
    try:
        task = await session.toggle(task_id)
    except TaskNotFoundError:
        raise _not_found()
    return TaskMutationResponse(task=TaskResponse.model_validate(task), feedback=toggle_feedback(task))


@router.delete("/{task_id}", response_model=TaskMutationResponse, summary="Delete a task")
async def delete_task(task_id: str, session: SessionDep) -> TaskMutationResponse:
    try:
        task = await session.delete(task_id)
    except TaskNotFoundError:
        raise _not_found()
    return TaskMutationResponse(task=TaskResponse.model_validate(task), feedback=delete_feedback(task))


@router.post(
    "/{task_id}/subtasks",
    response_model=SubTasksResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Add sub-tasks for a task",
)
async def add_subtasks(task_id: str, request: SubTasksRequest, session: SessionDep) -> SubTasksResponse:
    """Add sub-tasks (usually from an insight) to the top of the list."""
    try:
        parent_text = session.get(task_id).text
        created = await session.add_subtasks(request.sub_tasks, parent_text)
    except TaskNotFoundError:
        raise _not_found()
    except ValidationError as e:
        raise HTTPException(status_code=status.HTTP_422_UNPROCESSABLE_ENTITY, detail=str(e))
    return SubTasksResponse(
        created_tasks=[TaskResponse.model_validate(t) for t in created],
        feedback=subtasks_feedback(created, parent_text),
    )
