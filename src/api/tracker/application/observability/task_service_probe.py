"""Protocol for task application service observability.

Defines the interface for domain probes that capture application-level
domain events for task service operations.
"""

from __future__ import annotations

from typing import TYPE_CHECKING, Any, Protocol

import structlog

if TYPE_CHECKING:
    from shared_kernel.observability_context import ObservationContext


class TaskServiceProbe(Protocol):
    """Domain probe for task application service operations."""

    def task_created(
        self,
        task_id: int,
        owner_id: int,
        status: str,
        priority: str,
    ) -> None:
        """Record that a task was created."""
        ...

    def task_updated(self, task_id: int, owner_id: int) -> None:
        """Record that a task was updated."""
        ...

    def task_status_changed(
        self,
        task_id: int,
        old_status: str,
        new_status: str,
    ) -> None:
        """Record that a task status was replaced."""
        ...

    def task_priority_changed(
        self,
        task_id: int,
        old_priority: str,
        new_priority: str,
    ) -> None:
        """Record that a task priority was replaced."""
        ...

    def task_deleted(self, task_id: int) -> None:
        """Record that a task was deleted."""
        ...

    def task_not_found(self, task_id: Any) -> None:
        """Record that a task lookup found nothing."""
        ...

    def owner_not_found(self, owner_id: Any) -> None:
        """Record that a referenced owner does not exist."""
        ...

    def tasks_deleted_for_owner(self, owner_id: int, count: int) -> None:
        """Record that every task of an owner was deleted."""
        ...

    def tasks_listed(self, query: str, count: int) -> None:
        """Record that a task read query ran."""
        ...

    def operation_failed(self, operation: str, error: str) -> None:
        """Record that a task operation failed unexpectedly."""
        ...

    def with_context(self, context: ObservationContext) -> TaskServiceProbe:
        """Create a new probe with observation context bound."""
        ...


class DefaultTaskServiceProbe:
    """Default implementation of TaskServiceProbe using structlog."""

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

    def with_context(self, context: ObservationContext) -> DefaultTaskServiceProbe:
        """Create a new probe with observation context bound."""
        return DefaultTaskServiceProbe(logger=self._logger, context=context)

    def task_created(
        self,
        task_id: int,
        owner_id: int,
        status: str,
        priority: str,
    ) -> None:
        """Record that a task was created."""
        self._logger.info(
            "task_created",
            task_id=task_id,
            owner_id=owner_id,
            status=status,
            priority=priority,
            **self._get_context_kwargs(),
        )

    def task_updated(self, task_id: int, owner_id: int) -> None:
        """Record that a task was updated."""
        self._logger.info(
            "task_updated",
            task_id=task_id,
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )

    def task_status_changed(
        self,
        task_id: int,
        old_status: str,
        new_status: str,
    ) -> None:
        """Record that a task status was replaced."""
        self._logger.info(
            "task_status_changed",
            task_id=task_id,
            old_status=old_status,
            new_status=new_status,
            **self._get_context_kwargs(),
        )

    def task_priority_changed(
        self,
        task_id: int,
        old_priority: str,
        new_priority: str,
    ) -> None:
        """Record that a task priority was replaced."""
        self._logger.info(
            "task_priority_changed",
            task_id=task_id,
            old_priority=old_priority,
            new_priority=new_priority,
            **self._get_context_kwargs(),
        )

    def task_deleted(self, task_id: int) -> None:
        """Record that a task was deleted."""
        self._logger.info(
            "task_deleted",
            task_id=task_id,
            **self._get_context_kwargs(),
        )

    def task_not_found(self, task_id: Any) -> None:
        """Record that a task lookup found nothing."""
        self._logger.debug(
            "task_not_found",
            task_id=task_id,
            **self._get_context_kwargs(),
        )

    def owner_not_found(self, owner_id: Any) -> None:
        """Record that a referenced owner does not exist."""
        self._logger.warning(
            "task_owner_not_found",
            owner_id=owner_id,
            **self._get_context_kwargs(),
        )

    def tasks_deleted_for_owner(self, owner_id: int, count: int) -> None:
        """Record that every task of an owner was deleted."""
        self._logger.info(
            "tasks_deleted_for_owner",
            owner_id=owner_id,
            count=count,
            **self._get_context_kwargs(),
        )

    def tasks_listed(self, query: str, count: int) -> None:
        """Record that a task read query ran."""
        self._logger.debug(
            "tasks_listed",
            query=query,
            count=count,
            **self._get_context_kwargs(),
        )

    def operation_failed(self, operation: str, error: str) -> None:
        """Record that a task operation failed unexpectedly."""
        self._logger.error(
            "task_operation_failed",
            operation=operation,
            error=error,
            **self._get_context_kwargs(),
        )
