"""In-memory implementation of IUserRepository.

Users live in a process-local EntityStore. Uniqueness lookups scan the live
collection; the store is expected to hold a modest number of users, so no
secondary index is kept.
"""

from __future__ import annotations

from shared_kernel.entity_store import EntityStore
from tracker.domain.aggregates import User
from tracker.domain.value_objects import UserId
from tracker.infrastructure.observability import (
    DefaultUserRepositoryProbe,
    UserRepositoryProbe,
)
from tracker.ports.repositories import IUserRepository


def _is_blank(value: str | None) -> bool:
    return value is None or not value.strip()


class UserRepository(IUserRepository):
    """EntityStore-backed repository for User aggregates.

    Blank lookup arguments never match anything; validation of caller input
    is the application layer's job.
    """

    def __init__(
        self,
        store: EntityStore[UserId, User],
        probe: UserRepositoryProbe | None = None,
    ) -> None:
        """Initialize repository with its store and probe.

        Args:
            store: Shared user store, constructed by the container
            probe: Optional domain probe for observability
        """
        self._store = store
        self._probe = probe or DefaultUserRepositoryProbe()

    def insert(self, user: User) -> User:
        """Store a new user and return it with identity and timestamps.

        Args:
            user: Candidate user

        Returns:
            The stored User aggregate
        """
        stored = self._store.insert(user)
        self._probe.user_saved(stored.id.value, stored.username)
        return stored

    def update(self, user: User) -> User:
        """Replace an existing user wholesale.

        Args:
            user: User carrying the identity of the record to replace

        Returns:
            The stored User aggregate with a refreshed update time
        """
        stored = self._store.update(user)
        self._probe.user_updated(stored.id.value, stored.username)
        return stored

    def delete_by_id(self, user_id: UserId) -> bool:
        """Delete a user.

        Args:
            user_id: Identity of the user to delete

        Returns:
            True if deleted, False if not found
        """
        deleted = self._store.remove(user_id)
        if deleted:
            self._probe.user_deleted(user_id.value)
        else:
            self._probe.user_not_found(user_id.value)
        return deleted

    def find_by_id(self, user_id: UserId) -> User | None:
        """Retrieve a user by identity.

        Args:
            user_id: The unique identifier of the user

        Returns:
            The User aggregate, or None if not found
        """
        user = self._store.get(user_id)
        if user is None:
            self._probe.user_not_found(user_id.value if user_id else None)
            return None

        self._probe.user_retrieved(user_id.value)
        return user

    def find_all(self) -> list[User]:
        return self._store.list()

    def count(self) -> int:
        return self._store.count()

    def exists_by_id(self, user_id: UserId) -> bool:
        return self._store.exists(user_id)

    def find_by_username(self, username: str) -> User | None:
        """Retrieve a user by exact username.

        Args:
            username: The username to search for (case-sensitive)

        Returns:
            The User aggregate, or None if not found
        """
        if _is_blank(username):
            return None

        for user in self._store.list():
            if user.username == username:
                self._probe.user_retrieved(user.id.value)
                return user

        self._probe.username_not_found(username)
        return None

    def find_by_email(self, email: str) -> User | None:
        """Retrieve a user by email.

        Args:
            email: The email to search for (case-insensitive)

        Returns:
            The User aggregate, or None if not found
        """
        if _is_blank(email):
            return None

        wanted = email.strip().lower()
        for user in self._store.list():
            if user.normalized_email == wanted:
                self._probe.user_retrieved(user.id.value)
                return user

        self._probe.email_not_found(email)
        return None

    def find_by_first_name_containing(self, text: str) -> list[User]:
        """Return users whose first name contains ``text``, ignoring case."""
        if _is_blank(text):
            return []

        needle = text.lower()
        return [
            user
            for user in self._store.list()
            if user.first_name and needle in user.first_name.lower()
        ]

    def exists_by_username(self, username: str) -> bool:
        return self.find_by_username(username) is not None

    def exists_by_email(self, email: str) -> bool:
        return self.find_by_email(email) is not None
