"""Domain aggregates for Tracker context.

Aggregates are the core business objects containing state and business logic.
They enforce invariants and business rules without depending on infrastructure.
"""

from tracker.domain.aggregates.task import Task
from tracker.domain.aggregates.user import User

__all__ = [
    "Task",
    "User",
]
