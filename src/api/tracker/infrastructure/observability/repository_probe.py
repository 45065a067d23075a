"""Domain probe for Tracker repository operations.

Following Domain-Oriented Observability patterns, this probe captures
domain-significant events related to user and task repository operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserRepositoryProbe(Protocol):
    """Domain probe for user repository operations.

    Records domain events during user storage operations.
    """

    def user_saved(self, user_id: int, username: str) -> None:
        """Record that a new user was stored."""
        ...

    def user_updated(self, user_id: int, username: str) -> None:
        """Record that a stored user was replaced."""
        ...

    def user_deleted(self, user_id: int) -> None:
        """Record that a user was removed."""
        ...

    def user_retrieved(self, user_id: int) -> None:
        """Record that a user was retrieved."""
        ...

    def user_not_found(self, user_id: int) -> None:
        """Record that a user was not found."""
        ...

    def username_not_found(self, username: str) -> None:
        """Record that a username was not found."""
        ...

    def email_not_found(self, email: str) -> None:
        """Record that an email was not found."""
        ...

    def with_context(self, context: ObservationContext) -> UserRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class TaskRepositoryProbe(Protocol):
    """Domain probe for task repository operations.

    Records domain events during task storage operations, including the
    bulk owner delete used by cascading user deletion.
    """

    def task_saved(self, task_id: int, owner_id: int | None) -> None:
        """Record that a new task was stored."""
        ...

    def task_updated(self, task_id: int, owner_id: int | None) -> None:
        """Record that a stored task was replaced."""
        ...

    def task_deleted(self, task_id: int) -> None:
        """Record that a task was removed."""
        ...

    def task_not_found(self, task_id: int) -> None:
        """Record that a task was not found."""
        ...

    def tasks_deleted_by_owner(self, owner_id: int, count: int) -> None:
        """Record that every task of an owner was removed."""
        ...

    def with_context(self, context: ObservationContext) -> TaskRepositoryProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserRepositoryProbe:
    """Default implementation of UserRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultUserRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserRepositoryProbe(logger=self._logger, context=context)

    def user_saved(self, user_id: int, username: str) -> None:
        """Record that a new user was stored."""
        self._logger.info(
            "user_saved",
            user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def user_updated(self, user_id: int, username: str) -> None:
        """Record that a stored user was replaced."""
        self._logger.info(
            "user_updated",
            user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: int) -> None:
        """Record that a user was removed."""
        self._logger.info(
            "user_deleted",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_retrieved(self, user_id: int) -> None:
        """Record that a user was retrieved."""
        self._logger.debug(
            "user_retrieved",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, user_id: int) -> None:
        """Record that a user was not found."""
        self._logger.debug(
            "user_not_found",
            user_id=user_id,
            **self._get_context_kwargs(),
        )

    def username_not_found(self, username: str) -> None:
        """Record that a username was not found."""
        self._logger.debug(
            "username_not_found",
            username=username,
            **self._get_context_kwargs(),
        )

    def email_not_found(self, email: str) -> None:
        """Record that an email was not found."""
        self._logger.debug(
            "email_not_found",
            email=email,
            **self._get_context_kwargs(),
        )


class DefaultTaskRepositoryProbe:
    """Default implementation of TaskRepositoryProbe using structlog."""

    def __init__(
        self,
        logger: structlog.stdlib.BoundLogger | None = None,
        context: ObservationContext | None = None,
    ):
        self._logger = logger or structlog.get_logger()
        self._context = context

    def _get_context_kwargs(self) -> dict[str, Any]:
        """Get context metadata as kwargs for logging."""
        if self._context is None:
            return {}
        return self._context.as_dict()

    def with_context(self, context: ObservationContext) -> DefaultTaskRepositoryProbe:
        """Create a new probe with observation context bound."""
        return DefaultTaskRepositoryProbe(logger=self._logger, context=context)

    def task_saved(self, task_id: int, owner_id: int | None) -> None:
        """Record that a new task was stored."""
        self._logger.info(
            "task_saved",
            task_id=task_id,
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )

    def task_updated(self, task_id: int, owner_id: int | None) -> None:
        """Record that a stored task was replaced."""
        self._logger.info(
            "task_updated",
            task_id=task_id,
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )

    def task_deleted(self, task_id: int) -> None:
        """Record that a task was removed."""
        self._logger.info(
            "task_deleted",
            task_id=task_id,
            **self._get_context_kwargs(),
        )

    def task_not_found(self, task_id: int) -> None:
        """Record that a task was not found."""
        self._logger.debug(
            "task_not_found",
            task_id=task_id,
            **self._get_context_kwargs(),
        )

    def tasks_deleted_by_owner(self, owner_id: int, count: int) -> None:
        """Record that every task of an owner was removed."""
        self._logger.info(
            "tasks_deleted_by_owner",
            owner_id=owner_id,
            count=count,
            **self._get_context_kwargs(),
        )
