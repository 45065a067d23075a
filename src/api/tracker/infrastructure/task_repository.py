"""In-memory implementation of ITaskRepository.

Tasks live in a process-local EntityStore and reference their owner by id
only. Bulk delete and counts run as predicate scans over the store.
"""

from __future__ import annotations

from shared_kernel.entity_store import EntityStore
from tracker.domain.aggregates import Task
from tracker.domain.value_objects import TaskId, TaskStatus, UserId
from tracker.infrastructure.observability import (
    DefaultTaskRepositoryProbe,
    TaskRepositoryProbe,
)
from tracker.ports.repositories import ITaskRepository, TaskPredicate


class TaskRepository(ITaskRepository):
    """EntityStore-backed repository for Task aggregates."""

    def __init__(
        self,
        store: EntityStore[TaskId, Task],
        probe: TaskRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with its store and probe.

        Args:
            store: Shared task store, constructed by the container
            probe: Optional domain probe for observability
        """
        self._store = store
        self._probe = probe or DefaultTaskRepositoryProbe()

    @staticmethod
    def _owner_value(task: Task) -> int | None:
        return task.owner_id.value if task.owner_id is not None else None

    def insert(self, task: Task) -> Task:
        """Store a new task and return it with identity and timestamps."""
        stored = self._store.insert(task)
        self._probe.task_saved(stored.id.value, self._owner_value(stored))
        return stored

    def update(self, task: Task) -> Task:
        """Replace an existing task wholesale."""
        stored = self._store.update(task)
        self._probe.task_updated(stored.id.value, self._owner_value(stored))
        return stored

    def delete_by_id(self, task_id: TaskId) -> bool:
        """Delete a task.

        Returns:
            True if deleted, False if not found
        """
        deleted = self._store.remove(task_id)
        if deleted:
            self._probe.task_deleted(task_id.value)
        else:
            self._probe.task_not_found(task_id.value)
        return deleted

    def find_by_id(self, task_id: TaskId) -> Task | None:
        task = self._store.get(task_id)
        if task is None and task_id is not None:
            self._probe.task_not_found(task_id.value)
        return task

    def find_all(self) -> list[Task]:
        return self._store.list()

    def find_where(self, predicate: TaskPredicate) -> list[Task]:
        return [task for task in self._store.list() if predicate(task)]

    def count(self) -> int:
        return self._store.count()

    def exists_by_id(self, task_id: TaskId) -> bool:
        return self._store.exists(task_id)

    def delete_by_owner(self, owner_id: UserId) -> int:
        """Delete every task owned by ``owner_id``.

        Args:
            owner_id: Identity of the owning user

        Returns:
            Number of tasks deleted (0 when owner_id is None)
        """
        if owner_id is None:
            return 0

        deleted = self._store.remove_where(lambda task: task.is_owned_by(owner_id))
        self._probe.tasks_deleted_by_owner(owner_id.value, deleted)
        return deleted

    def count_by_owner(self, owner_id: UserId) -> int:
        if owner_id is None:
            return 0
        return len(self.find_where(lambda task: task.is_owned_by(owner_id)))

    def count_by_status(self, status: TaskStatus) -> int:
        if status is None:
            return 0
        return len(self.find_where(lambda task: task.status == status))
