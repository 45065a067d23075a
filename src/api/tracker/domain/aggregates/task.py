"""Task aggregate for Tracker context."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from tracker.domain.value_objects import (
    DEFAULT_TASK_PRIORITY,
    DEFAULT_TASK_STATUS,
    TaskId,
    TaskPriority,
    TaskStatus,
    UserId,
)


@dataclass(frozen=True)
class Task:
    """Task aggregate representing a unit of work owned by one user.

    The owner is referenced by id only; a Task never embeds its User.

    Business rules (enforced by the application layer):
    - Title is non-blank and at most 100 characters
    - Description is non-blank and at most 500 characters
    - The owner exists whenever the task is written

    A Task whose ``id`` is None is a candidate. Candidates may leave status
    and priority unset; stored tasks always carry both.
    """

    id: TaskId | None
    title: str
    description: str
    owner_id: UserId | None
    status: TaskStatus | None = None
    priority: TaskPriority | None = None
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def new(
        cls,
        title: str,
        description: str,
        owner_id: UserId | None,
        status: TaskStatus | None = None,
        priority: TaskPriority | None = None,
    ) -> Task:
        """Factory method for a candidate task without identity.

        Args:
            title: Short task title
            description: Longer description
            owner_id: Identity of the owning user
            status: Initial status (defaults applied on creation when None)
            priority: Initial priority (defaults applied on creation when None)

        Returns:
            A Task candidate ready to be passed to the task service
        """
        return cls(
            id=None,
            title=title,
            description=description,
            owner_id=owner_id,
            status=status,
            priority=priority,
        )

    def __str__(self) -> str:
        """Return string representation."""
        return f"Task({self.title})"

    def is_owned_by(self, owner_id: UserId) -> bool:
        """Check whether ``owner_id`` owns this task."""
        return self.owner_id == owner_id

    def with_defaults(self) -> Task:
        """Return a copy with status TODO and priority MEDIUM where unset."""
        return replace(
            self,
            status=self.status or DEFAULT_TASK_STATUS,
            priority=self.priority or DEFAULT_TASK_PRIORITY,
        )

    def with_identity(self, entity_id: TaskId, created_at: datetime) -> Task:
        """Return a copy carrying a store-assigned identity."""
        return replace(self, id=entity_id, created_at=created_at, updated_at=created_at)

    def with_timestamps(
        self, created_at: datetime | None, updated_at: datetime
    ) -> Task:
        """Return a copy carrying the given timestamps."""
        return replace(self, created_at=created_at, updated_at=updated_at)

    def with_details(self, candidate: Task) -> Task:
        """Return a copy with editable fields taken from ``candidate``.

        Status and priority are only replaced when the candidate sets them.
        """
        return replace(
            self,
            title=candidate.title,
            description=candidate.description,
            owner_id=candidate.owner_id,
            status=candidate.status or self.status,
            priority=candidate.priority or self.priority,
        )

    def with_status(self, status: TaskStatus) -> Task:
        """Return a copy with only the status replaced."""
        return replace(self, status=status)

    def with_priority(self, priority: TaskPriority) -> Task:
        """Return a copy with only the priority replaced."""
        return replace(self, priority=priority)
