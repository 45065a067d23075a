"""Read-side filtering and sorting over tasks.

Filters are plain predicates combined with AND, so the result of a combined
filter does not depend on the order the predicates are given in. Unsorted
results come back in ascending id order; both sort orders break ties by
ascending id.
"""

from __future__ import annotations

from collections.abc import Iterable

from tracker.domain.aggregates import Task
from tracker.domain.value_objects import TaskPriority, TaskStatus, UserId
from tracker.ports.repositories import ITaskQuery, ITaskRepository, TaskPredicate


def owned_by(owner_id: UserId) -> TaskPredicate:
    """Match tasks owned by ``owner_id``."""
    return lambda task: task.owner_id == owner_id


def has_status(*statuses: TaskStatus) -> TaskPredicate:
    """Match tasks in any of ``statuses``."""
    wanted = frozenset(statuses)
    return lambda task: task.status in wanted


def is_pending() -> TaskPredicate:
    """Match tasks that still need work."""
    return lambda task: task.status is not None and task.status.is_pending()


def has_priority(priority: TaskPriority) -> TaskPredicate:
    """Match tasks with ``priority``."""
    return lambda task: task.priority == priority


def title_containing(text: str) -> TaskPredicate:
    """Match tasks whose title contains ``text``, ignoring case."""
    needle = text.lower()
    return lambda task: task.title is not None and needle in task.title.lower()


def all_of(*predicates: TaskPredicate) -> TaskPredicate:
    """Match tasks satisfying every predicate (all tasks when none given)."""
    return lambda task: all(predicate(task) for predicate in predicates)


def _id_value(task: Task) -> int:
    return task.id.value if task.id is not None else 0


def sorted_by_recency(tasks: Iterable[Task]) -> list[Task]:
    """Sort newest first; tasks without a creation time go last."""
    tasks = list(tasks)
    dated = sorted(
        (task for task in tasks if task.created_at is not None), key=_id_value
    )
    # stable sort keeps ascending id among equal timestamps
    dated.sort(key=lambda task: task.created_at, reverse=True)
    undated = sorted((task for task in tasks if task.created_at is None), key=_id_value)
    return dated + undated


def sorted_by_priority(tasks: Iterable[Task]) -> list[Task]:
    """Sort by descending priority rank (HIGH, MEDIUM, LOW)."""

    def rank(task: Task) -> int:
        return task.priority.rank if task.priority is not None else 0

    return sorted(tasks, key=lambda task: (-rank(task), _id_value(task)))


class TaskQuery(ITaskQuery):
    """Composable task queries on top of a task repository."""

    def __init__(self, repository: ITaskRepository) -> None:
        self._repository = repository

    def matching(self, *predicates: TaskPredicate) -> list[Task]:
        """Return tasks satisfying every predicate, in ascending id order."""
        return self._repository.find_where(all_of(*predicates))

    def all_tasks(self) -> list[Task]:
        return self._repository.find_all()

    def by_owner(self, owner_id: UserId) -> list[Task]:
        return self.matching(owned_by(owner_id))

    def by_status(self, status: TaskStatus) -> list[Task]:
        return self.matching(has_status(status))

    def by_priority(self, priority: TaskPriority) -> list[Task]:
        return self.matching(has_priority(priority))

    def by_owner_and_status(self, owner_id: UserId, status: TaskStatus) -> list[Task]:
        return self.matching(owned_by(owner_id), has_status(status))

    def by_owner_and_priority(
        self, owner_id: UserId, priority: TaskPriority
    ) -> list[Task]:
        return self.matching(owned_by(owner_id), has_priority(priority))

    def title_contains(self, text: str) -> list[Task]:
        return self.matching(title_containing(text))

    def completed_by_owner(self, owner_id: UserId) -> list[Task]:
        return self.by_owner_and_status(owner_id, TaskStatus.COMPLETED)

    def pending_by_owner(self, owner_id: UserId) -> list[Task]:
        return self.matching(
            owned_by(owner_id),
            is_pending(),
        )

    def high_priority_by_owner(self, owner_id: UserId) -> list[Task]:
        return self.by_owner_and_priority(owner_id, TaskPriority.HIGH)

    def all_sorted_by_recency(self) -> list[Task]:
        return sorted_by_recency(self._repository.find_all())

    def by_owner_sorted_by_priority(self, owner_id: UserId) -> list[Task]:
        return sorted_by_priority(self.by_owner(owner_id))
