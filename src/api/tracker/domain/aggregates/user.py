"""User aggregate for Tracker context."""

from __future__ import annotations

from dataclasses import dataclass, replace
from datetime import datetime

from tracker.domain.value_objects import UserId


@dataclass(frozen=True)
class User:
    """User aggregate representing a person who owns tasks.

    Business rules (enforced by the application layer):
    - Username is 3-50 characters and unique (case-sensitive)
    - Email has a valid address shape and is unique (case-insensitive)
    - First and last names are required

    A User whose ``id`` is None is a candidate that has not been stored yet.
    Identity and timestamps are stamped by the store.
    """

    id: UserId | None
    username: str
    email: str
    first_name: str
    last_name: str
    created_at: datetime | None = None
    updated_at: datetime | None = None

    @classmethod
    def new(
        cls,
        username: str,
        email: str,
        first_name: str,
        last_name: str,
    ) -> User:
        """Factory method for a candidate user without identity.

        Args:
            username: Unique username
            email: Email address
            first_name: Given name
            last_name: Family name

        Returns:
            A User candidate ready to be passed to the user service
        """
        return cls(
            id=None,
            username=username,
            email=email,
            first_name=first_name,
            last_name=last_name,
        )

    def __str__(self) -> str:
        """Return string representation."""
        return f"User({self.username})"

    @property
    def normalized_email(self) -> str:
        """Email as compared for uniqueness."""
        return self.email.strip().lower()

    def with_identity(self, entity_id: UserId, created_at: datetime) -> User:
        """Return a copy carrying a store-assigned identity."""
        return replace(self, id=entity_id, created_at=created_at, updated_at=created_at)

    def with_timestamps(
        self, created_at: datetime | None, updated_at: datetime
    ) -> User:
        """Return a copy carrying the given timestamps."""
        return replace(self, created_at=created_at, updated_at=updated_at)

    def with_profile(self, candidate: User) -> User:
        """Return a copy with every profile field taken from ``candidate``.

        Identity and creation time are kept.
        """
        return replace(
            self,
            username=candidate.username,
            email=candidate.email,
            first_name=candidate.first_name,
            last_name=candidate.last_name,
        )
