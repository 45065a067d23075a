"""Protocol for user application service observability.

Defines the interface for domain probes that capture application-level
domain events for user service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class UserServiceProbe(Protocol):
    """Domain probe for user application service operations."""

    def user_created(self, user_id: int, username: str) -> None:
        """Record that a user was created."""
        ...

    def duplicate_email(self, email: str) -> None:
        """Record that a write was rejected for a duplicate email."""
        ...

    def duplicate_username(self, username: str) -> None:
        """Record that a write was rejected for a duplicate username."""
        ...

    def user_updated(self, user_id: int, username: str) -> None:
        """Record that a user profile was updated."""
        ...

    def user_not_found(self, key: str, value: Any) -> None:
        """Record that a user lookup found nothing."""
        ...

    def user_deleted(self, user_id: int, deleted_task_count: int) -> None:
        """Record that a user and their tasks were deleted."""
        ...

    def cascade_count_mismatch(
        self,
        user_id: int,
        expected: int,
        deleted: int,
    ) -> None:
        """Record that a cascade removed a different number of tasks than counted."""
        ...

    def users_listed(self, count: int) -> None:
        """Record that all users were listed."""
        ...

    def user_existence_check_failed(self, user_id: Any, error: str) -> None:
        """Record that an existence check failed and was answered with False."""
        ...

    def user_search_failed(self, criteria: str, error: str) -> None:
        """Record that a user search produced no result."""
        ...

    def operation_failed(self, operation: str, error: str) -> None:
        """Record that a user operation failed unexpectedly."""
        ...

    def with_context(self, context: ObservationContext) -> UserServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultUserServiceProbe:
    """Default implementation of UserServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultUserServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultUserServiceProbe(logger=self._logger, context=context)

    def user_created(self, user_id: int, username: str) -> None:
        """Record that a user was created."""
        self._logger.info(
            "user_created",
            user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def duplicate_email(self, email: str) -> None:
        """Record that a write was rejected for a duplicate email."""
        self._logger.warning(
            "duplicate_email",
            email=email,
            **self._get_context_kwargs(),
        )

    def duplicate_username(self, username: str) -> None:
        """Record that a write was rejected for a duplicate username."""
        self._logger.warning(
            "duplicate_username",
            username=username,
            **self._get_context_kwargs(),
        )

    def user_updated(self, user_id: int, username: str) -> None:
        """Record that a user profile was updated."""
        self._logger.info(
            "user_updated",
            user_id=user_id,
            username=username,
            **self._get_context_kwargs(),
        )

    def user_not_found(self, key: str, value: Any) -> None:
        """Record that a user lookup found nothing."""
        self._logger.debug(
            "user_not_found",
            key=key,
            value=value,
            **self._get_context_kwargs(),
        )

    def user_deleted(self, user_id: int, deleted_task_count: int) -> None:
        """Record that a user and their tasks were deleted."""
        self._logger.info(
            "user_deleted",
            user_id=user_id,
            deleted_task_count=deleted_task_count,
            **self._get_context_kwargs(),
        )

    def cascade_count_mismatch(
        self,
        user_id: int,
        expected: int,
        deleted: int,
    ) -> None:
        """Record that a cascade removed a different number of tasks than counted."""
        self._logger.warning(
            "cascade_count_mismatch",
            user_id=user_id,
            expected=expected,
            deleted=deleted,
            **self._get_context_kwargs(),
        )

    def users_listed(self, count: int) -> None:
        """Record that all users were listed."""
        self._logger.debug(
            "users_listed",
            count=count,
            **self._get_context_kwargs(),
        )

    def user_existence_check_failed(self, user_id: Any, error: str) -> None:
        """Record that an existence check failed and was answered with False."""
        self._logger.warning(
            "user_existence_check_failed",
            user_id=user_id,
            error=error,
            **self._get_context_kwargs(),
        )

    def user_search_failed(self, criteria: str, error: str) -> None:
        """Record that a user search produced no result."""
        self._logger.info(
            "user_search_failed",
            criteria=criteria,
            error=error,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, error: str) -> None:
        """Record that a user operation failed unexpectedly."""
        self._logger.error(
            "user_operation_failed",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
