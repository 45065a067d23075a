"""HTTP routes for task management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, Query, Response, status

from tracker.application.services import TaskService
from tracker.dependencies import get_task_service
from tracker.presentation.errors import to_http_exception
from tracker.presentation.tasks.models import (
    TaskDeletionResponse,
    TaskPriorityUpdateRequest,
    TaskRequest,
    TaskResponse,
    TaskStatsResponse,
    TaskStatusUpdateRequest,
)

router = APIRouter(
    prefix="/tasks",
    tags=["tasks"],
)


def _responses(tasks) -> list[TaskResponse]:
    return [TaskResponse.from_domain(task) for task in tasks]


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
)
def create_task(
    request: TaskRequest,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """Create a new task for an existing user.

    Status defaults to TODO and priority to MEDIUM.

    Raises:
        HTTPException: 400 if a field is missing or invalid
        HTTPException: 404 if the owning user does not exist
        HTTPException: 500 for unexpected errors
    """
    try:
        task = service.create_task(request.to_domain())
        return TaskResponse.from_domain(task)
    except Exception as e:
        raise to_http_exception(e, "Failed to create task") from e


@router.get("")
def list_tasks(
    service: Annotated[TaskService, Depends(get_task_service)],
    task_status: Annotated[str | None, Query(alias="status")] = None,
    priority: str | None = None,
    user_id: Annotated[int | None, Query(alias="userId")] = None,
) -> list[TaskResponse]:
    """List tasks, optionally filtered.

    Filters combine as userId+status, userId+priority, userId, status or
    priority, tried in that order; with none, every task is returned.
    """
    try:
        if user_id is not None and task_status is not None:
            tasks = service.get_tasks_by_user_and_status(user_id, task_status)
        elif user_id is not None and priority is not None:
            tasks = service.get_tasks_by_user_and_priority(user_id, priority)
        elif user_id is not None:
            tasks = service.get_tasks_by_user_id(user_id)
        elif task_status is not None:
            tasks = service.get_tasks_by_status(task_status)
        elif priority is not None:
            tasks = service.get_tasks_by_priority(priority)
        else:
            tasks = service.get_all_tasks()
        return _responses(tasks)
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve tasks") from e


@router.get("/search")
def search_tasks_by_title(
    title: str,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> list[TaskResponse]:
    """List tasks whose title contains the given text, ignoring case."""
    try:
        return _responses(service.search_tasks_by_title(title))
    except Exception as e:
        raise to_http_exception(e, "Failed to search tasks") from e


@router.get("/sorted/created-date")
def get_tasks_sorted_by_created_date(
    service: Annotated[TaskService, Depends(get_task_service)],
) -> list[TaskResponse]:
    """List every task, newest first."""
    try:
        return _responses(service.get_all_tasks_sorted_by_created_date())
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve sorted tasks") from e


@router.get("/stats")
def get_task_stats(
    service: Annotated[TaskService, Depends(get_task_service)],
    user_id: Annotated[int | None, Query(alias="userId")] = None,
) -> TaskStatsResponse:
    """Get task counts, globally or for one user.

    Raises:
        HTTPException: 404 if the given user does not exist
    """
    try:
        return TaskStatsResponse.from_domain(service.get_task_stats(user_id))
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve task statistics") from e


@router.get("/user/{user_id}")
def get_tasks_by_user(
    user_id: int,
    service: Annotated[TaskService, Depends(get_task_service)],
    task_filter: Annotated[str | None, Query(alias="filter")] = None,
) -> list[TaskResponse]:
    """List the tasks of a user.

    ``filter`` narrows the result to completed, pending or high-priority
    tasks (case-insensitive); any other value lists every task of the user.

    Raises:
        HTTPException: 404 if the user does not exist
    """
    selected = task_filter.lower() if task_filter else None
    try:
        if selected == "completed":
            tasks = service.get_completed_tasks_by_user_id(user_id)
        elif selected == "pending":
            tasks = service.get_pending_tasks_by_user_id(user_id)
        elif selected == "high-priority":
            tasks = service.get_high_priority_tasks_by_user_id(user_id)
        else:
            tasks = service.get_tasks_by_user_id(user_id)
        return _responses(tasks)
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve user tasks") from e


@router.get("/user/{user_id}/sorted/priority")
def get_tasks_by_user_sorted_by_priority(
    user_id: int,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> list[TaskResponse]:
    """List the tasks of a user, HIGH priority first."""
    try:
        return _responses(service.get_tasks_by_user_id_sorted_by_priority(user_id))
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve sorted tasks") from e


@router.delete("/user/{user_id}")
def delete_tasks_by_user(
    user_id: int,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskDeletionResponse:
    """Delete every task of a user; the user itself is kept.

    Raises:
        HTTPException: 404 if the user does not exist
    """
    try:
        deleted = service.delete_all_tasks_by_user_id(user_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to delete user tasks") from e
    return TaskDeletionResponse.from_count(user_id=user_id, deleted_count=deleted)


@router.get("/{task_id}")
def get_task(
    task_id: int,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """Get task by ID.

    Raises:
        HTTPException: 404 if task not found
    """
    try:
        return TaskResponse.from_domain(service.get_task_by_id(task_id))
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve task") from e


@router.put("/{task_id}")
def update_task(
    task_id: int,
    request: TaskRequest,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """Replace the editable fields of a task.

    Omitted status and priority keep their stored values.

    Raises:
        HTTPException: 400 if a field is missing or invalid
        HTTPException: 404 if the task or the new owner does not exist
    """
    try:
        task = service.update_task(task_id, request.to_domain())
        return TaskResponse.from_domain(task)
    except Exception as e:
        raise to_http_exception(e, "Failed to update task") from e


@router.patch("/{task_id}/status")
def update_task_status(
    task_id: int,
    request: TaskStatusUpdateRequest,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """Replace only the status of a task."""
    try:
        task = service.update_task_status(task_id, request.status)
        return TaskResponse.from_domain(task)
    except Exception as e:
        raise to_http_exception(e, "Failed to update task status") from e


@router.patch("/{task_id}/priority")
def update_task_priority(
    task_id: int,
    request: TaskPriorityUpdateRequest,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> TaskResponse:
    """Replace only the priority of a task."""
    try:
        task = service.update_task_priority(task_id, request.priority)
        return TaskResponse.from_domain(task)
    except Exception as e:
        raise to_http_exception(e, "Failed to update task priority") from e


@router.delete(
    "/{task_id}",
    status_code=status.HTTP_204_NO_CONTENT,
)
def delete_task(
    task_id: int,
    service: Annotated[TaskService, Depends(get_task_service)],
) -> Response:
    """Delete a task.

    Raises:
        HTTPException: 404 if task not found
    """
    try:
        service.delete_task(task_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to delete task") from e
    return Response(status_code=status.HTTP_204_NO_CONTENT)
