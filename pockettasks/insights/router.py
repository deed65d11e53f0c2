"""
PocketTasks AI - Insights Router

Endpoints for AI insights on a single task. Always answer 200 with either a
real or a degraded insight.
"""

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, status

from pockettasks.dependencies import get_insight_service, get_session
from pockettasks.errors import TaskNotFoundError
from pockettasks.insights.schemas import InsightRequest, InsightResult
from pockettasks.insights.service import InsightService
from pockettasks.tasks.session import TaskListSession


router = APIRouter(prefix="/insights", tags=["Insights"])


@router.post("", response_model=InsightResult)
async def provide_insight(
    request: InsightRequest,
    insight_service: Annotated[InsightService, Depends(get_insight_service)],
) -> InsightResult:
    return await insight_service.provide_insight(request.task, request.task_list)


@router.post("/tasks/{task_id}", response_model=InsightResult)
async def provide_task_insight(
    task_id: str,
    session: Annotated[TaskListSession, Depends(get_session)],
    insight_service: Annotated[InsightService, Depends(get_insight_service)],
) -> InsightResult:
    """Insight for an existing task, using the current list as context."""
    try:
        task = session.get(task_id)
    except TaskNotFoundError:
        raise HTTPException(status_code=status.HTTP_404_NOT_FOUND, detail="Task not found")
    task_list = "\n".join(t.text for t in session.list_tasks())
    return await insight_service.provide_insight(task.text, task_list)
