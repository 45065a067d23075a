"""Value objects for the Tracker domain.

Value objects are immutable descriptors that provide type safety and
domain semantics for identifiers and domain concepts.
"""

from __future__ import annotations

from dataclasses import dataclass
from enum import StrEnum

from shared_kernel.exceptions import InvalidArgumentError


def _positive_int(value: object, label: str) -> int:
    if isinstance(value, bool) or not isinstance(value, int):
        try:
            value = int(str(value))
        except ValueError as e:
            raise InvalidArgumentError(f"Invalid {label}: {value}", field="id") from e
    if value <= 0:
        raise InvalidArgumentError(f"{label} must be a positive number", field="id")
    return value


@dataclass(frozen=True, order=True)
class UserId:
    """Identifier for a User aggregate.

    Positive integer allocated by the user store, never reused.
    """

    value: int

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)

    @classmethod
    def from_int(cls, value: object) -> UserId:
        """Create UserId from an integer (or integer-like) value.

        Raises:
            InvalidArgumentError: If value is not a positive integer
        """
        return cls(value=_positive_int(value, "User ID"))


@dataclass(frozen=True, order=True)
class TaskId:
    """Identifier for a Task aggregate.

    Positive integer allocated by the task store, never reused.
    """

    value: int

    def __str__(self) -> str:
        """Return string representation."""
        return str(self.value)

    @classmethod
    def from_int(cls, value: object) -> TaskId:
        """Create TaskId from an integer (or integer-like) value.

        Raises:
            InvalidArgumentError: If value is not a positive integer
        """
        return cls(value=_positive_int(value, "Task ID"))


class TaskStatus(StrEnum):
    """Lifecycle status of a task.

    Any status may be replaced by any other; there is no transition guard.
    """

    TODO = "TODO"
    IN_PROGRESS = "IN_PROGRESS"
    COMPLETED = "COMPLETED"

    @property
    def display_name(self) -> str:
        """Human-readable label."""
        return _STATUS_LABELS[self]

    def is_pending(self) -> bool:
        """Check if the task still needs work (TODO or IN_PROGRESS)."""
        return self in (TaskStatus.TODO, TaskStatus.IN_PROGRESS)


_STATUS_LABELS = {
    TaskStatus.TODO: "To Do",
    TaskStatus.IN_PROGRESS: "In Progress",
    TaskStatus.COMPLETED: "Completed",
}


class TaskPriority(StrEnum):
    """Priority level of a task, ordered by ``rank``."""

    LOW = "LOW"
    MEDIUM = "MEDIUM"
    HIGH = "HIGH"

    @property
    def display_name(self) -> str:
        """Human-readable label."""
        return _PRIORITY_LABELS[self]

    @property
    def rank(self) -> int:
        """Sort rank: HIGH=3, MEDIUM=2, LOW=1."""
        return _PRIORITY_RANKS[self]


_PRIORITY_LABELS = {
    TaskPriority.LOW: "Low",
    TaskPriority.MEDIUM: "Medium",
    TaskPriority.HIGH: "High",
}

_PRIORITY_RANKS = {
    TaskPriority.LOW: 1,
    TaskPriority.MEDIUM: 2,
    TaskPriority.HIGH: 3,
}

DEFAULT_TASK_STATUS = TaskStatus.TODO
DEFAULT_TASK_PRIORITY = TaskPriority.MEDIUM


@dataclass(frozen=True)
class TaskStats:
    """Task counts, either global (owner_id is None) or for a single owner."""

    total_tasks: int
    owner_id: UserId | None = None
    todo_count: int = 0
    in_progress_count: int = 0
    completed_count: int = 0
