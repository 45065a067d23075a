"""Unit tests for task HTTP routes.

Tests the presentation layer for task endpoints with a mocked TaskService.
"""

from __future__ import annotations

from datetime import UTC, datetime
from unittest.mock import Mock

import pytest
from fastapi import FastAPI, status
from fastapi.testclient import TestClient

from shared_kernel.exceptions import InvalidArgumentError
from tracker.application.services import TaskService
from tracker.domain.aggregates import Task
from tracker.domain.value_objects import (
    TaskId,
    TaskPriority,
    TaskStats,
    TaskStatus,
    UserId,
)
from tracker.ports.exceptions import TaskNotFoundError, UserNotFoundError

CREATED = datetime(2025, 1, 1, 9, 0, tzinfo=UTC)


@pytest.fixture
def mock_task_service() -> Mock:
    """Mock TaskService for testing."""
    return Mock(spec=TaskService)


@pytest.fixture
def sample_task() -> Task:
    """Create a stored Task aggregate for testing."""
    return Task(
        id=TaskId(1),
        title="Complete project documentation",
        description="Write the user guide",
        owner_id=UserId(1),
        status=TaskStatus.TODO,
        priority=TaskPriority.MEDIUM,
        created_at=CREATED,
        updated_at=CREATED,
    )


@pytest.fixture
def test_client(mock_task_service: Mock) -> TestClient:
    """Create TestClient with mocked dependencies."""
    from tracker.dependencies import get_task_service
    from tracker.presentation import router

    app = FastAPI()
    app.dependency_overrides[get_task_service] = lambda: mock_task_service
    app.include_router(router)
    return TestClient(app)


class TestCreateTask:
    """Tests for POST /api/tasks."""

    def test_creates_task(self, test_client, mock_task_service, sample_task):
        """Should return 201 with the owner as userId."""
        mock_task_service.create_task.return_value = sample_task

        response = test_client.post(
            "/api/tasks",
            json={
                "title": "Complete project documentation",
                "description": "Write the user guide",
                "userId": 1,
            },
        )

        assert response.status_code == status.HTTP_201_CREATED
        body = response.json()
        assert body["userId"] == 1
        assert body["status"] == "TODO"
        assert body["priority"] == "MEDIUM"
        candidate = mock_task_service.create_task.call_args.args[0]
        assert candidate.owner_id == UserId(1)
        assert candidate.status is None

    def test_missing_owner_is_404(self, test_client, mock_task_service):
        mock_task_service.create_task.side_effect = UserNotFoundError(999)

        response = test_client.post(
            "/api/tasks",
            json={"title": "T", "description": "D", "userId": 999},
        )

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "User not found with id: 999"

    def test_non_positive_owner_is_400(self, test_client, mock_task_service):
        response = test_client.post(
            "/api/tasks",
            json={"title": "T", "description": "D", "userId": 0},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_task_service.create_task.assert_not_called()

    def test_unknown_status_is_400(self, test_client, mock_task_service):
        mock_task_service.create_task.side_effect = InvalidArgumentError(
            "Invalid status: DONE"
        )

        response = test_client.post(
            "/api/tasks",
            json={"title": "T", "description": "D", "userId": 1, "status": "DONE"},
        )

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        assert response.json()["detail"] == "Invalid status: DONE"


class TestListTasks:
    """Tests for GET /api/tasks filter dispatch."""

    @pytest.mark.parametrize(
        ("query", "method", "args"),
        [
            ("", "get_all_tasks", ()),
            ("?userId=1&status=TODO", "get_tasks_by_user_and_status", (1, "TODO")),
            ("?userId=1&priority=HIGH", "get_tasks_by_user_and_priority", (1, "HIGH")),
            (
                "?userId=1&status=TODO&priority=HIGH",
                "get_tasks_by_user_and_status",
                (1, "TODO"),
            ),
            ("?userId=2", "get_tasks_by_user_id", (2,)),
            ("?status=COMPLETED", "get_tasks_by_status", ("COMPLETED",)),
            ("?priority=LOW", "get_tasks_by_priority", ("LOW",)),
        ],
    )
    def test_dispatch(self, test_client, mock_task_service, sample_task, query, method, args):
        getattr(mock_task_service, method).return_value = [sample_task]

        response = test_client.get(f"/api/tasks{query}")

        assert response.status_code == status.HTTP_200_OK
        assert len(response.json()) == 1
        getattr(mock_task_service, method).assert_called_once_with(*args)

    def test_invalid_priority_is_400(self, test_client, mock_task_service):
        mock_task_service.get_tasks_by_priority.side_effect = InvalidArgumentError(
            "Invalid priority: URGENT"
        )

        response = test_client.get("/api/tasks?priority=URGENT")

        assert response.status_code == status.HTTP_400_BAD_REQUEST


class TestOtherReads:
    """Tests for search, sorted and stats endpoints."""

    def test_search(self, test_client, mock_task_service, sample_task):
        mock_task_service.search_tasks_by_title.return_value = [sample_task]

        response = test_client.get("/api/tasks/search?title=project")

        assert response.status_code == status.HTTP_200_OK
        mock_task_service.search_tasks_by_title.assert_called_once_with("project")

    def test_search_requires_title(self, test_client):
        response = test_client.get("/api/tasks/search")
        assert response.status_code == 422

    def test_sorted_by_created_date(self, test_client, mock_task_service):
        mock_task_service.get_all_tasks_sorted_by_created_date.return_value = []

        response = test_client.get("/api/tasks/sorted/created-date")

        assert response.json() == []

    def test_stats(self, test_client, mock_task_service):
        mock_task_service.get_task_stats.return_value = TaskStats(
            total_tasks=3,
            owner_id=UserId(1),
            todo_count=1,
            in_progress_count=1,
            completed_count=1,
        )

        response = test_client.get("/api/tasks/stats?userId=1")

        assert response.json() == {
            "totalTasks": 3,
            "userId": 1,
            "todoCount": 1,
            "inProgressCount": 1,
            "completedCount": 1,
        }
        mock_task_service.get_task_stats.assert_called_once_with(1)

    def test_global_stats(self, test_client, mock_task_service):
        mock_task_service.get_task_stats.return_value = TaskStats(total_tasks=0)

        response = test_client.get("/api/tasks/stats")

        assert response.json()["userId"] is None
        mock_task_service.get_task_stats.assert_called_once_with(None)


class TestUserTasks:
    """Tests for /api/tasks/user/{id} endpoints."""

    @pytest.mark.parametrize(
        ("task_filter", "method"),
        [
            ("completed", "get_completed_tasks_by_user_id"),
            ("PENDING", "get_pending_tasks_by_user_id"),
            ("high-priority", "get_high_priority_tasks_by_user_id"),
            ("anything", "get_tasks_by_user_id"),
        ],
    )
    def test_filters(self, test_client, mock_task_service, task_filter, method):
        getattr(mock_task_service, method).return_value = []

        response = test_client.get(f"/api/tasks/user/1?filter={task_filter}")

        assert response.status_code == status.HTTP_200_OK
        getattr(mock_task_service, method).assert_called_once_with(1)

    def test_unknown_user_is_404(self, test_client, mock_task_service):
        mock_task_service.get_tasks_by_user_id.side_effect = UserNotFoundError(8)

        response = test_client.get("/api/tasks/user/8")

        assert response.status_code == status.HTTP_404_NOT_FOUND

    def test_sorted_by_priority(self, test_client, mock_task_service, sample_task):
        mock_task_service.get_tasks_by_user_id_sorted_by_priority.return_value = [
            sample_task
        ]

        response = test_client.get("/api/tasks/user/1/sorted/priority")

        assert response.status_code == status.HTTP_200_OK

    def test_delete_all(self, test_client, mock_task_service):
        mock_task_service.delete_all_tasks_by_user_id.return_value = 2

        response = test_client.delete("/api/tasks/user/1")

        assert response.status_code == status.HTTP_200_OK
        assert response.json() == {
            "deletedCount": 2,
            "userId": 1,
            "message": "Successfully deleted 2 tasks for user 1",
        }


class TestSingleTask:
    """Tests for /api/tasks/{id} endpoints."""

    def test_get(self, test_client, mock_task_service, sample_task):
        mock_task_service.get_task_by_id.return_value = sample_task

        response = test_client.get("/api/tasks/1")

        assert response.status_code == status.HTTP_200_OK
        assert response.json()["title"] == "Complete project documentation"
        assert response.json()["statusDisplayName"] == "To Do"
        assert response.json()["priorityDisplayName"] == "Medium"

    def test_get_missing_is_404(self, test_client, mock_task_service):
        mock_task_service.get_task_by_id.side_effect = TaskNotFoundError(3)

        response = test_client.get("/api/tasks/3")

        assert response.status_code == status.HTTP_404_NOT_FOUND
        assert response.json()["detail"] == "Task not found with id: 3"

    def test_update(self, test_client, mock_task_service, sample_task):
        mock_task_service.update_task.return_value = sample_task

        response = test_client.put(
            "/api/tasks/1",
            json={"title": "T", "description": "D", "userId": 1, "priority": "HIGH"},
        )

        assert response.status_code == status.HTTP_200_OK
        task_id, candidate = mock_task_service.update_task.call_args.args
        assert task_id == 1
        assert candidate.priority == "HIGH"

    def test_patch_status(self, test_client, mock_task_service, sample_task):
        mock_task_service.update_task_status.return_value = sample_task

        response = test_client.patch("/api/tasks/1/status", json={"status": "COMPLETED"})

        assert response.status_code == status.HTTP_200_OK
        mock_task_service.update_task_status.assert_called_once_with(1, "COMPLETED")

    def test_patch_priority_missing_value(self, test_client, mock_task_service):
        mock_task_service.update_task_priority.side_effect = InvalidArgumentError(
            "Priority cannot be null"
        )

        response = test_client.patch("/api/tasks/1/priority", json={})

        assert response.status_code == status.HTTP_400_BAD_REQUEST
        mock_task_service.update_task_priority.assert_called_once_with(1, None)

    def test_delete(self, test_client, mock_task_service):
        response = test_client.delete("/api/tasks/1")

        assert response.status_code == status.HTTP_204_NO_CONTENT
        assert response.content == b""
        mock_task_service.delete_task.assert_called_once_with(1)

    def test_delete_missing_is_404(self, test_client, mock_task_service):
        mock_task_service.delete_task.side_effect = TaskNotFoundError(1)

        response = test_client.delete("/api/tasks/1")

        assert response.status_code == status.HTTP_404_NOT_FOUND
