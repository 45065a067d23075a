"""Input validation for Tracker application services.

Services validate every candidate themselves, whatever the calling layer has
already checked. All failures raise InvalidArgumentError before any state
is touched.
"""

from __future__ import annotations

from dataclasses import replace
from typing import Any

from email_validator import EmailNotValidError, validate_email

from shared_kernel.exceptions import InvalidArgumentError
from tracker.domain.aggregates import Task, User
from tracker.domain.value_objects import TaskId, TaskPriority, TaskStatus, UserId

USERNAME_MIN_LENGTH = 3
USERNAME_MAX_LENGTH = 50
TITLE_MAX_LENGTH = 100
DESCRIPTION_MAX_LENGTH = 500


def is_blank(value: str | None) -> bool:
    """Check whether a string is None, empty, or whitespace only."""
    return value is None or not str(value).strip()


def require_text(value: str | None, field: str, label: str) -> str:
    """Ensure a required text field is present and non-blank."""
    if is_blank(value):
        raise InvalidArgumentError(f"{label} cannot be null or empty", field=field)
    return value


def require_user_id(user_id: UserId | None) -> UserId:
    """Ensure a user identity was given."""
    if user_id is None:
        raise InvalidArgumentError("User ID cannot be null", field="user_id")
    if not isinstance(user_id, UserId):
        return UserId.from_int(user_id)
    return user_id


def require_task_id(task_id: TaskId | None) -> TaskId:
    """Ensure a task identity was given."""
    if task_id is None:
        raise InvalidArgumentError("Task ID cannot be null", field="task_id")
    if not isinstance(task_id, TaskId):
        return TaskId.from_int(task_id)
    return task_id


def require_status(status: Any) -> TaskStatus:
    """Ensure a valid task status was given.

    Accepts a TaskStatus or its wire name.
    """
    if status is None:
        raise InvalidArgumentError("Status cannot be null", field="status")
    try:
        return TaskStatus(status)
    except ValueError as e:
        raise InvalidArgumentError(f"Invalid status: {status}", field="status") from e


def require_priority(priority: Any) -> TaskPriority:
    """Ensure a valid task priority was given.

    Accepts a TaskPriority or its wire name.
    """
    if priority is None:
        raise InvalidArgumentError("Priority cannot be null", field="priority")
    try:
        return TaskPriority(priority)
    except ValueError as e:
        raise InvalidArgumentError(
            f"Invalid priority: {priority}", field="priority"
        ) from e


def validate_username(username: str | None) -> str:
    require_text(username, "username", "Username")
    if not USERNAME_MIN_LENGTH <= len(username) <= USERNAME_MAX_LENGTH:
        raise InvalidArgumentError(
            f"Username must be between {USERNAME_MIN_LENGTH} and "
            f"{USERNAME_MAX_LENGTH} characters",
            field="username",
        )
    return username


def validate_email_address(email: str | None) -> str:
    """Ensure an email has a valid address shape.

    Only syntax is checked; no DNS lookup is made.
    """
    require_text(email, "email", "Email")
    try:
        validate_email(email, check_deliverability=False)
    except EmailNotValidError as e:
        raise InvalidArgumentError(
            "Email format is invalid", field="email"
        ) from e
    return email


def validate_user(user: User | None) -> User:
    """Validate every field of a user candidate.

    Raises:
        InvalidArgumentError: On the first invalid field
    """
    if user is None:
        raise InvalidArgumentError("User cannot be null", field="user")
    validate_username(user.username)
    validate_email_address(user.email)
    require_text(user.first_name, "first_name", "First name")
    require_text(user.last_name, "last_name", "Last name")
    return user


def validate_task(task: Task | None) -> Task:
    """Validate every field of a task candidate.

    Status and priority may be absent; when present they must be valid.
    Returns a copy with identities and enums normalised.

    Raises:
        InvalidArgumentError: On the first invalid field
    """
    if task is None:
        raise InvalidArgumentError("Task cannot be null", field="task")

    require_text(task.title, "title", "Task title")
    if len(task.title) > TITLE_MAX_LENGTH:
        raise InvalidArgumentError(
            f"Task title must not exceed {TITLE_MAX_LENGTH} characters",
            field="title",
        )

    require_text(task.description, "description", "Task description")
    if len(task.description) > DESCRIPTION_MAX_LENGTH:
        raise InvalidArgumentError(
            f"Task description must not exceed {DESCRIPTION_MAX_LENGTH} characters",
            field="description",
        )

    if task.owner_id is None:
        raise InvalidArgumentError("User ID cannot be null", field="owner_id")

    return replace(
        task,
        owner_id=require_user_id(task.owner_id),
        status=require_status(task.status) if task.status is not None else None,
        priority=require_priority(task.priority) if task.priority is not None else None,
    )
