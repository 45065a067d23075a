"""Domain exceptions for Tracker bounded context.

These exceptions specialise the shared error taxonomy for users and tasks.
They are raised by the application layer and translated into HTTP status
codes by the presentation layer.
"""

from __future__ import annotations

from typing import Any

from shared_kernel.exceptions import DuplicateValueError, NotFoundError


class UserNotFoundError(NotFoundError):
    """Raised when a user cannot be found.

    Carries the lookup key used (id, username or email) and its value.
    """

    def __init__(self, value: Any, key: str = "id"):
        super().__init__(entity="user", key=key, value=value)


class TaskNotFoundError(NotFoundError):
    """Raised when a task cannot be found by its id."""

    def __init__(self, value: Any, key: str = "id"):
        super().__init__(entity="task", key=key, value=value)


class DuplicateEmailError(DuplicateValueError):
    """Raised when an email is already used by another user.

    Emails are compared case-insensitively.
    """

    def __init__(self, email: str):
        super().__init__(
            field="email",
            value=email,
            message=f"User with email '{email}' already exists",
        )


class DuplicateUsernameError(DuplicateValueError):
    """Raised when a username is already used by another user.

    Usernames are compared case-sensitively.
    """

    def __init__(self, username: str):
        super().__init__(
            field="username",
            value=username,
            message=f"User with username '{username}' already exists",
        )
