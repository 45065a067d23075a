"""Application-layer value objects for Tracker bounded context.

These are read-only results of service operations that are not aggregates
themselves: the outcome of a cascading user deletion and the outcome of a
user search.
"""

from __future__ import annotations

from dataclasses import dataclass, field

from tracker.domain.aggregates import User
from tracker.domain.value_objects import UserId


@dataclass(frozen=True)
class UserDeletionResult:
    """Outcome of deleting a user together with the tasks they own.

    Truthy exactly when the user record itself was removed, so callers that
    only care about success can test the result directly.
    """

    user_id: UserId
    deleted: bool
    deleted_task_count: int = 0

    def __bool__(self) -> bool:
        return self.deleted


@dataclass(frozen=True)
class UserSearchResult:
    """Outcome of a criteria-based user search.

    A miss or an invalid criterion does not raise; it is reported with
    ``success=False``, an empty user list and an explanatory message.
    """

    users: list[User] = field(default_factory=list)
    criteria: str = "all users"
    success: bool = True
    message: str = ""

    @property
    def total_found(self) -> int:
        """Number of users found."""
        return len(self.users)
