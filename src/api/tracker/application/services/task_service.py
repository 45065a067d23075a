"""Task application service for Tracker bounded context.

Handles task lifecycle operations and the filtered/sorted task reads. Every
write that references an owner holds that owner's lock from the existence
check through the store write, so a concurrent user deletion can never leave
a task pointing at a missing owner.
"""

from __future__ import annotations

from collections.abc import Iterator
from contextlib import contextmanager

from shared_kernel.concurrency import KeyedLocks
from shared_kernel.exceptions import InvalidArgumentError, internal_failure_boundary
from tracker.application.observability import DefaultTaskServiceProbe, TaskServiceProbe
from tracker.application.validation import (
    require_priority,
    require_status,
    require_task_id,
    require_text,
    require_user_id,
    validate_task,
)
from tracker.domain.aggregates import Task
from tracker.domain.value_objects import (
    TaskId,
    TaskPriority,
    TaskStats,
    TaskStatus,
    UserId,
)
from tracker.ports.exceptions import TaskNotFoundError, UserNotFoundError
from tracker.ports.repositories import ITaskQuery, ITaskRepository, IUserRepository


class TaskService:
    """Application service for task management.

    Owner existence is resolved through the user repository port; this
    service never calls UserService.
    """

    def __init__(
        self,
        task_repository: ITaskRepository,
        task_query: ITaskQuery,
        user_repository: IUserRepository,
        owner_locks: KeyedLocks | None = None,
        probe: TaskServiceProbe | None = None,
    ):
        """Initialize TaskService with dependencies.

        Args:
            task_repository: Repository for task storage
            task_query: Read-side filters and sort orders over tasks
            user_repository: Repository used to resolve task owners
            owner_locks: Per-owner lock registry shared with UserService
            probe: Optional domain probe for observability
        """
        self._task_repository = task_repository
        self._task_query = task_query
        self._user_repository = user_repository
        self._owner_locks = owner_locks or KeyedLocks()
        self._probe = probe or DefaultTaskServiceProbe()

    def _guard(self, operation: str):
        return internal_failure_boundary(operation, self._probe.operation_failed)

    def _require_owner(self, owner_id: UserId | int | None) -> UserId:
        owner_id = require_user_id(owner_id)
        if not self._user_repository.exists_by_id(owner_id):
            self._probe.owner_not_found(owner_id.value)
            raise UserNotFoundError(owner_id.value)
        return owner_id

    def _require_task(self, task_id: TaskId) -> Task:
        task = self._task_repository.find_by_id(task_id)
        if task is None:
            self._probe.task_not_found(task_id.value)
            raise TaskNotFoundError(task_id.value)
        return task

    @contextmanager
    def _holding_task(
        self, task_id: TaskId, *owner_ids: UserId | None
    ) -> Iterator[Task]:
        """Hold the lock of a task's owner (plus ``owner_ids``) and yield the task.

        The owner is read before its lock is taken, so the task is re-read
        under the lock and the attempt repeated if the owner moved meanwhile.

        Raises:
            TaskNotFoundError: If the task does not exist
        """
        while True:
            seen = self._require_task(task_id)
            with self._owner_locks.hold(seen.owner_id, *owner_ids):
                current = self._require_task(task_id)
                if current.owner_id == seen.owner_id:
                    yield current
                    return

    def _listed(self, query: str, tasks: list[Task]) -> list[Task]:
        self._probe.tasks_listed(query=query, count=len(tasks))
        return tasks

    def create_task(self, candidate: Task) -> Task:
        """Create a new task for an existing owner.

        Status defaults to TODO and priority to MEDIUM when not given.

        Args:
            candidate: Task without identity

        Returns:
            The stored Task with identity and timestamps

        Raises:
            InvalidArgumentError: If the candidate is invalid or carries an id
            UserNotFoundError: If the owner does not exist
        """
        candidate = validate_task(candidate)
        if candidate.id is not None:
            raise InvalidArgumentError(
                "ID should not be provided when creating a new task", field="id"
            )

        with self._guard("create task"), self._owner_locks.hold(candidate.owner_id):
            self._require_owner(candidate.owner_id)
            task = self._task_repository.insert(candidate.with_defaults())

        self._probe.task_created(
            task_id=task.id.value,
            owner_id=task.owner_id.value,
            status=task.status.value,
            priority=task.priority.value,
        )
        return task

    def get_task_by_id(self, task_id: TaskId | int) -> Task:
        """Retrieve a task by ID.

        Raises:
            TaskNotFoundError: If no task has this ID
        """
        task_id = require_task_id(task_id)
        with self._guard("retrieve task"):
            return self._require_task(task_id)

    def get_all_tasks(self) -> list[Task]:
        with self._guard("retrieve tasks"):
            return self._listed("all", self._task_query.all_tasks())

    def update_task(self, task_id: TaskId | int, candidate: Task) -> Task:
        """Replace the editable fields of a task.

        Identity and creation time are kept. Status and priority keep their
        stored values when the candidate leaves them unset. Moving a task to
        a different owner requires that owner to exist.

        Raises:
            TaskNotFoundError: If no task has this ID
            InvalidArgumentError: If the candidate is invalid
            UserNotFoundError: If the new owner does not exist
        """
        task_id = require_task_id(task_id)
        with self._guard("update task"):
            self._require_task(task_id)
            candidate = validate_task(candidate)

            with self._holding_task(task_id, candidate.owner_id) as current:
                if candidate.owner_id != current.owner_id:
                    self._require_owner(candidate.owner_id)
                task = self._task_repository.update(current.with_details(candidate))

        self._probe.task_updated(task_id=task.id.value, owner_id=task.owner_id.value)
        return task

    def update_task_status(
        self, task_id: TaskId | int, status: TaskStatus | str
    ) -> Task:
        """Replace only the status of a task.

        Any status may replace any other.

        Raises:
            InvalidArgumentError: If status is missing or unknown
            TaskNotFoundError: If no task has this ID
        """
        task_id = require_task_id(task_id)
        status = require_status(status)
        with (
            self._guard("update task status"),
            self._holding_task(task_id) as current,
        ):
            task = self._task_repository.update(current.with_status(status))

        self._probe.task_status_changed(
            task_id=task.id.value,
            old_status=str(current.status),
            new_status=status.value,
        )
        return task

    def update_task_priority(
        self, task_id: TaskId | int, priority: TaskPriority | str
    ) -> Task:
        """Replace only the priority of a task.

        Raises:
            InvalidArgumentError: If priority is missing or unknown
            TaskNotFoundError: If no task has this ID
        """
        task_id = require_task_id(task_id)
        priority = require_priority(priority)
        with (
            self._guard("update task priority"),
            self._holding_task(task_id) as current,
        ):
            task = self._task_repository.update(current.with_priority(priority))

        self._probe.task_priority_changed(
            task_id=task.id.value,
            old_priority=str(current.priority),
            new_priority=priority.value,
        )
        return task

    def delete_task(self, task_id: TaskId | int) -> None:
        """Delete a task.

        Raises:
            TaskNotFoundError: If no task has this ID
        """
        task_id = require_task_id(task_id)
        with self._guard("delete task"), self._holding_task(task_id):
            self._task_repository.delete_by_id(task_id)

        self._probe.task_deleted(task_id=task_id.value)

    def get_tasks_by_user_id(self, owner_id: UserId | int) -> list[Task]:
        """Retrieve every task of an existing owner.

        Raises:
            UserNotFoundError: If the owner does not exist
        """
        with self._guard("retrieve user tasks"):
            owner_id = self._require_owner(owner_id)
            return self._listed("by_owner", self._task_query.by_owner(owner_id))

    def get_tasks_by_status(self, status: TaskStatus | str) -> list[Task]:
        status = require_status(status)
        with self._guard("retrieve tasks by status"):
            return self._listed("by_status", self._task_query.by_status(status))

    def get_tasks_by_priority(self, priority: TaskPriority | str) -> list[Task]:
        priority = require_priority(priority)
        with self._guard("retrieve tasks by priority"):
            return self._listed("by_priority", self._task_query.by_priority(priority))

    def get_tasks_by_user_and_status(
        self, owner_id: UserId | int, status: TaskStatus | str
    ) -> list[Task]:
        status = require_status(status)
        with self._guard("retrieve user tasks by status"):
            owner_id = self._require_owner(owner_id)
            return self._listed(
                "by_owner_and_status",
                self._task_query.by_owner_and_status(owner_id, status),
            )

    def get_tasks_by_user_and_priority(
        self, owner_id: UserId | int, priority: TaskPriority | str
    ) -> list[Task]:
        priority = require_priority(priority)
        with self._guard("retrieve user tasks by priority"):
            owner_id = self._require_owner(owner_id)
            return self._listed(
                "by_owner_and_priority",
                self._task_query.by_owner_and_priority(owner_id, priority),
            )

    def get_completed_tasks_by_user_id(self, owner_id: UserId | int) -> list[Task]:
        with self._guard("retrieve completed tasks"):
            owner_id = self._require_owner(owner_id)
            return self._listed(
                "completed_by_owner", self._task_query.completed_by_owner(owner_id)
            )

    def get_pending_tasks_by_user_id(self, owner_id: UserId | int) -> list[Task]:
        """Retrieve an owner's tasks that are TODO or IN_PROGRESS."""
        with self._guard("retrieve pending tasks"):
            owner_id = self._require_owner(owner_id)
            return self._listed(
                "pending_by_owner", self._task_query.pending_by_owner(owner_id)
            )

    def get_high_priority_tasks_by_user_id(
        self, owner_id: UserId | int
    ) -> list[Task]:
        with self._guard("retrieve high priority tasks"):
            owner_id = self._require_owner(owner_id)
            return self._listed(
                "high_priority_by_owner",
                self._task_query.high_priority_by_owner(owner_id),
            )

    def search_tasks_by_title(self, text: str) -> list[Task]:
        """Retrieve tasks whose title contains ``text``, ignoring case.

        Raises:
            InvalidArgumentError: If text is blank
        """
        require_text(text, "title", "Title search text")
        with self._guard("search tasks"):
            return self._listed("title_contains", self._task_query.title_contains(text))

    def get_all_tasks_sorted_by_created_date(self) -> list[Task]:
        """Retrieve every task, newest first."""
        with self._guard("retrieve sorted tasks"):
            return self._listed(
                "all_sorted_by_recency", self._task_query.all_sorted_by_recency()
            )

    def get_tasks_by_user_id_sorted_by_priority(
        self, owner_id: UserId | int
    ) -> list[Task]:
        """Retrieve an owner's tasks, HIGH priority first."""
        with self._guard("retrieve sorted user tasks"):
            owner_id = self._require_owner(owner_id)
            return self._listed(
                "by_owner_sorted_by_priority",
                self._task_query.by_owner_sorted_by_priority(owner_id),
            )

    def get_total_task_count(self) -> int:
        with self._guard("count tasks"):
            return self._task_repository.count()

    def get_task_count_by_user_id(self, owner_id: UserId | int) -> int:
        """Count the tasks of an existing owner.

        Raises:
            UserNotFoundError: If the owner does not exist
        """
        with self._guard("count user tasks"):
            owner_id = self._require_owner(owner_id)
            return self._task_repository.count_by_owner(owner_id)

    def get_task_count_by_status(self, status: TaskStatus | str) -> int:
        status = require_status(status)
        with self._guard("count tasks by status"):
            return self._task_repository.count_by_status(status)

    def get_task_stats(self, owner_id: UserId | int | None = None) -> TaskStats:
        """Summarise task counts, globally or for one owner.

        Args:
            owner_id: Owner to scope the counts to, or None for all tasks

        Raises:
            UserNotFoundError: If an owner is given and does not exist
        """
        with self._guard("compute task statistics"):
            if owner_id is None:
                tasks = self._task_query.all_tasks()
            else:
                owner_id = self._require_owner(owner_id)
                tasks = self._task_query.by_owner(owner_id)

        def count(status: TaskStatus) -> int:
            return sum(1 for task in tasks if task.status == status)

        return TaskStats(
            total_tasks=len(tasks),
            owner_id=owner_id,
            todo_count=count(TaskStatus.TODO),
            in_progress_count=count(TaskStatus.IN_PROGRESS),
            completed_count=count(TaskStatus.COMPLETED),
        )

    def delete_all_tasks_by_user_id(self, owner_id: UserId | int) -> int:
        """Delete every task of an existing owner.

        Used by the cascade in UserService.delete_user, which already holds
        the owner lock; the lock is re-entrant.

        Returns:
            Number of tasks deleted

        Raises:
            UserNotFoundError: If the owner does not exist
        """
        owner_id = require_user_id(owner_id)
        with self._guard("delete user tasks"), self._owner_locks.hold(owner_id):
            self._require_owner(owner_id)
            deleted = self._task_repository.delete_by_owner(owner_id)

        self._probe.tasks_deleted_for_owner(owner_id=owner_id.value, count=deleted)
        return deleted
