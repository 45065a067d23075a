"""Pydantic models for task API requests and responses.

The owner travels as ``userId`` on the wire. Status and priority are
accepted as plain strings so that unknown values are reported by
TaskService with its own message.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from tracker.domain.aggregates import Task
from tracker.domain.value_objects import TaskStats, UserId
from tracker.presentation.models import CamelModel


class TaskRequest(CamelModel):
    """Request model for creating or replacing a task."""

    title: str | None = Field(None, description="Short title (max 100 chars)")
    description: str | None = Field(None, description="Description (max 500 chars)")
    status: str | None = Field(None, description="TODO, IN_PROGRESS or COMPLETED")
    priority: str | None = Field(None, description="LOW, MEDIUM or HIGH")
    user_id: int | None = Field(None, description="ID of the owning user")

    def to_domain(self) -> Task:
        """Convert to a Task candidate without identity.

        Raises:
            InvalidArgumentError: If user_id is not a positive integer
        """
        return Task.new(
            title=self.title,
            description=self.description,
            owner_id=UserId.from_int(self.user_id) if self.user_id is not None else None,
            status=self.status,
            priority=self.priority,
        )


class TaskStatusUpdateRequest(CamelModel):
    """Request model for replacing a task status."""

    status: str | None = Field(None, description="TODO, IN_PROGRESS or COMPLETED")


class TaskPriorityUpdateRequest(CamelModel):
    """Request model for replacing a task priority."""

    priority: str | None = Field(None, description="LOW, MEDIUM or HIGH")


class TaskResponse(CamelModel):
    """Response model for task."""

    id: int = Field(..., description="Task ID")
    title: str = Field(..., description="Short title")
    description: str = Field(..., description="Description")
    status: str = Field(..., description="Task status")
    status_display_name: str = Field(..., description="Human-readable status")
    priority: str = Field(..., description="Task priority")
    priority_display_name: str = Field(..., description="Human-readable priority")
    user_id: int = Field(..., description="ID of the owning user")
    created_date: datetime | None = Field(None, description="Creation time (UTC)")
    updated_date: datetime | None = Field(None, description="Last update time (UTC)")

    @classmethod
    def from_domain(cls, task: Task) -> TaskResponse:
        """Convert domain Task aggregate to API response.

        Args:
            task: Task domain aggregate

        Returns:
            TaskResponse
        """
        return cls(
            id=task.id.value,
            title=task.title,
            description=task.description,
            status=task.status.value,
            status_display_name=task.status.display_name,
            priority=task.priority.value,
            priority_display_name=task.priority.display_name,
            user_id=task.owner_id.value,
            created_date=task.created_at,
            updated_date=task.updated_at,
        )


class TaskStatsResponse(CamelModel):
    """Response model for task statistics."""

    total_tasks: int
    user_id: int | None = None
    todo_count: int = 0
    in_progress_count: int = 0
    completed_count: int = 0

    @classmethod
    def from_domain(cls, stats: TaskStats) -> TaskStatsResponse:
        return cls(
            total_tasks=stats.total_tasks,
            user_id=stats.owner_id.value if stats.owner_id is not None else None,
            todo_count=stats.todo_count,
            in_progress_count=stats.in_progress_count,
            completed_count=stats.completed_count,
        )


class TaskDeletionResponse(CamelModel):
    """Response model for deleting every task of a user."""

    deleted_count: int
    user_id: int
    message: str

    @classmethod
    def from_count(cls, user_id: int, deleted_count: int) -> TaskDeletionResponse:
        return cls(
            deleted_count=deleted_count,
            user_id=user_id,
            message=f"Successfully deleted {deleted_count} tasks for user {user_id}",
        )
