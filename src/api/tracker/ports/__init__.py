"""Ports (interfaces) for Tracker bounded context.

Ports define the contracts for repositories without specifying
implementation details. This allows for dependency inversion and keeps the
application layer independent of the in-memory store.
"""

from tracker.ports.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    TaskNotFoundError,
    UserNotFoundError,
)
from tracker.ports.repositories import ITaskQuery, ITaskRepository, IUserRepository

__all__ = [
    "DuplicateEmailError",
    "DuplicateUsernameError",
    "ITaskQuery",
    "ITaskRepository",
    "IUserRepository",
    "TaskNotFoundError",
    "UserNotFoundError",
]
