"""Repository protocols (ports) for Tracker bounded context.

Repository protocols define the interface for storing and retrieving
aggregates. Implementations keep aggregates in a process-local EntityStore;
nothing survives a restart.
"""

from __future__ import annotations

from typing import Callable, Protocol, runtime_checkable

from tracker.domain.aggregates import Task, User
from tracker.domain.value_objects import TaskId, TaskPriority, TaskStatus, UserId

TaskPredicate = Callable[[Task], bool]


@runtime_checkable
class IUserRepository(Protocol):
    """Repository for User aggregate storage.

    Lookups by username, email and first name scan the live collection;
    no secondary index is maintained.
    """

    def insert(self, user: User) -> User:
        """Store a new user and return it with identity and timestamps.

        Raises:
            InvalidArgumentError: If the user carries an id already stored
        """
        ...

    def update(self, user: User) -> User:
        """Replace an existing user.

        Raises:
            NotFoundError: If the user's id is not stored
        """
        ...

    def delete_by_id(self, user_id: UserId) -> bool:
        """Delete a user; True if one was removed."""
        ...

    def find_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by identity, or None."""
        ...

    def find_all(self) -> list[User]:
        """Return a snapshot of every user."""
        ...

    def count(self) -> int:
        """Return the number of users."""
        ...

    def exists_by_id(self, user_id: UserId) -> bool:
        """Check whether a user with this identity exists."""
        ...

    def find_by_username(self, username: str) -> User | None:
        """Retrieve a user by exact (case-sensitive) username."""
        ...

    def find_by_email(self, email: str) -> User | None:
        """Retrieve a user by email, compared case-insensitively."""
        ...

    def find_by_first_name_containing(self, text: str) -> list[User]:
        """Return users whose first name contains ``text`` (case-insensitive)."""
        ...

    def exists_by_username(self, username: str) -> bool:
        """Check whether a username is taken."""
        ...

    def exists_by_email(self, email: str) -> bool:
        """Check whether an email is taken (case-insensitive)."""
        ...


@runtime_checkable
class ITaskRepository(Protocol):
    """Repository for Task aggregate storage."""

    def insert(self, task: Task) -> Task:
        """Store a new task and return it with identity and timestamps.

        Raises:
            InvalidArgumentError: If the task carries an id already stored
        """
        ...

    def update(self, task: Task) -> Task:
        """Replace an existing task.

        Raises:
            NotFoundError: If the task's id is not stored
        """
        ...

    def delete_by_id(self, task_id: TaskId) -> bool:
        """Delete a task; True if one was removed."""
        ...

    def find_by_id(self, task_id: TaskId) -> Task | None:
        """Retrieve a task by identity, or None."""
        ...

    def find_all(self) -> list[Task]:
        """Return a snapshot of every task in ascending id order."""
        ...

    def find_where(self, predicate: TaskPredicate) -> list[Task]:
        """Return every task matching ``predicate`` in ascending id order."""
        ...

    def count(self) -> int:
        """Return the number of tasks."""
        ...

    def exists_by_id(self, task_id: TaskId) -> bool:
        """Check whether a task with this identity exists."""
        ...

    def delete_by_owner(self, owner_id: UserId) -> int:
        """Delete every task owned by ``owner_id``; return how many."""
        ...

    def count_by_owner(self, owner_id: UserId) -> int:
        """Count tasks owned by ``owner_id``."""
        ...

    def count_by_status(self, status: TaskStatus) -> int:
        """Count tasks in ``status``."""
        ...


@runtime_checkable
class ITaskQuery(Protocol):
    """Read-side filtering and sorting over tasks."""

    def matching(self, *predicates: TaskPredicate) -> list[Task]:
        """Return tasks satisfying every predicate."""
        ...

    def all_tasks(self) -> list[Task]:
        """Return every task."""
        ...

    def by_owner(self, owner_id: UserId) -> list[Task]:
        """Return tasks owned by ``owner_id``."""
        ...

    def by_status(self, status: TaskStatus) -> list[Task]:
        """Return tasks in ``status``."""
        ...

    def by_priority(self, priority: TaskPriority) -> list[Task]:
        """Return tasks with ``priority``."""
        ...

    def by_owner_and_status(self, owner_id: UserId, status: TaskStatus) -> list[Task]:
        """Return tasks owned by ``owner_id`` in ``status``."""
        ...

    def by_owner_and_priority(
        self, owner_id: UserId, priority: TaskPriority
    ) -> list[Task]:
        """Return tasks owned by ``owner_id`` with ``priority``."""
        ...

    def title_contains(self, text: str) -> list[Task]:
        """Return tasks whose title contains ``text`` (case-insensitive)."""
        ...

    def completed_by_owner(self, owner_id: UserId) -> list[Task]:
        """Return completed tasks of ``owner_id``."""
        ...

    def pending_by_owner(self, owner_id: UserId) -> list[Task]:
        """Return TODO and IN_PROGRESS tasks of ``owner_id``."""
        ...

    def high_priority_by_owner(self, owner_id: UserId) -> list[Task]:
        """Return HIGH priority tasks of ``owner_id``."""
        ...

    def all_sorted_by_recency(self) -> list[Task]:
        """Return every task, newest first."""
        ...

    def by_owner_sorted_by_priority(self, owner_id: UserId) -> list[Task]:
        """Return tasks of ``owner_id``, highest priority first."""
        ...
