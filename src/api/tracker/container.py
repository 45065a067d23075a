"""Composition root for the Tracker bounded context.

Stores, repositories, the owner lock registry and the services are
constructed explicitly here once per application; nothing is kept in module
state.
"""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass
from datetime import datetime

from shared_kernel.concurrency import KeyedLocks
from shared_kernel.entity_store import EntityStore
from tracker.application.services import TaskService, UserService
from tracker.domain.aggregates import Task, User
from tracker.domain.value_objects import TaskId, UserId
from tracker.infrastructure.task_query import TaskQuery
from tracker.infrastructure.task_repository import TaskRepository
from tracker.infrastructure.user_repository import UserRepository


@dataclass(frozen=True)
class TrackerContainer:
    """Wired object graph of the Tracker context."""

    user_store: EntityStore[UserId, User]
    task_store: EntityStore[TaskId, Task]
    user_repository: UserRepository
    task_repository: TaskRepository
    task_query: TaskQuery
    owner_locks: KeyedLocks
    task_service: TaskService
    user_service: UserService


def build_container(clock: Callable[[], datetime] | None = None) -> TrackerContainer:
    """Construct a fresh, empty Tracker object graph.

    Args:
        clock: Optional timestamp source for both stores (defaults to UTC now)

    Returns:
        TrackerContainer whose services share one owner lock registry
    """
    user_store: EntityStore[UserId, User] = EntityStore("user", UserId, clock=clock)
    task_store: EntityStore[TaskId, Task] = EntityStore("task", TaskId, clock=clock)

    user_repository = UserRepository(store=user_store)
    task_repository = TaskRepository(store=task_store)
    task_query = TaskQuery(repository=task_repository)
    owner_locks = KeyedLocks()

    task_service = TaskService(
        task_repository=task_repository,
        task_query=task_query,
        user_repository=user_repository,
        owner_locks=owner_locks,
    )
    user_service = UserService(
        user_repository=user_repository,
        task_service=task_service,
        owner_locks=owner_locks,
    )

    return TrackerContainer(
        user_store=user_store,
        task_store=task_store,
        user_repository=user_repository,
        task_repository=task_repository,
        task_query=task_query,
        owner_locks=owner_locks,
        task_service=task_service,
        user_service=user_service,
    )
