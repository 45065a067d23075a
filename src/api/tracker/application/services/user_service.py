"""User application service for Tracker bounded context.

Handles user registration, profile updates, lookups and the cascading
deletion of a user together with every task they own.
"""

from __future__ import annotations

import threading

from shared_kernel.concurrency import KeyedLocks
from shared_kernel.exceptions import (
    InvalidArgumentError,
    NotFoundError,
    internal_failure_boundary,
)
from tracker.application.observability import DefaultUserServiceProbe, UserServiceProbe
from tracker.application.services.task_service import TaskService
from tracker.application.validation import (
    is_blank,
    require_text,
    require_user_id,
    validate_email_address,
    validate_user,
    validate_username,
)
from tracker.application.value_objects import UserDeletionResult, UserSearchResult
from tracker.domain.aggregates import User
from tracker.domain.value_objects import UserId
from tracker.ports.exceptions import (
    DuplicateEmailError,
    DuplicateUsernameError,
    UserNotFoundError,
)
from tracker.ports.repositories import IUserRepository


class UserService:
    """Application service for user management.

    Username and email uniqueness is checked and written under a single
    identity lock, so two concurrent writers can never both claim the same
    value. Deletion holds the owner lock shared with TaskService for the
    whole count, cascade and remove sequence.
    """

    def __init__(
        self,
        user_repository: IUserRepository,
        task_service: TaskService,
        owner_locks: KeyedLocks | None = None,
        probe: UserServiceProbe | None = None,
    ):
        """Initialize UserService with dependencies.

        Args:
            user_repository: Repository for user storage
            task_service: Task service used for the deletion cascade
            owner_locks: Per-owner lock registry shared with TaskService
            probe: Optional domain probe for observability
        """
        self._user_repository = user_repository
        self._task_service = task_service
        self._owner_locks = owner_locks or KeyedLocks()
        self._probe = probe or DefaultUserServiceProbe()
        self._identity_lock = threading.RLock()

    def _guard(self, operation: str):
        return internal_failure_boundary(operation, self._probe.operation_failed)

    def _ensure_unique(self, candidate: User, user_id: UserId | None = None) -> None:
        """Reject a candidate whose email or username belongs to another user.

        Email is checked before username. ``user_id`` names the record being
        updated, which may keep its own values.
        """
        by_email = self._user_repository.find_by_email(candidate.email)
        if by_email is not None and by_email.id != user_id:
            self._probe.duplicate_email(email=candidate.email)
            raise DuplicateEmailError(candidate.email)

        by_username = self._user_repository.find_by_username(candidate.username)
        if by_username is not None and by_username.id != user_id:
            self._probe.duplicate_username(username=candidate.username)
            raise DuplicateUsernameError(candidate.username)

    def create_user(self, candidate: User) -> User:
        """Register a new user.

        Args:
            candidate: User without identity

        Returns:
            The stored User with identity and timestamps

        Raises:
            InvalidArgumentError: If the candidate is invalid or carries an id
            DuplicateEmailError: If the email is taken (case-insensitive)
            DuplicateUsernameError: If the username is taken
        """
        validate_user(candidate)
        if candidate.id is not None:
            raise InvalidArgumentError(
                "ID should not be provided when creating a new user", field="id"
            )

        with self._guard("create user"), self._identity_lock:
            self._ensure_unique(candidate)
            user = self._user_repository.insert(candidate)

        self._probe.user_created(user_id=user.id.value, username=user.username)
        return user

    def get_user_by_id(self, user_id: UserId | int) -> User:
        """Retrieve a user by ID.

        Raises:
            UserNotFoundError: If no user has this ID
        """
        user_id = require_user_id(user_id)
        with self._guard("retrieve user"):
            user = self._user_repository.find_by_id(user_id)
        if user is None:
            self._probe.user_not_found(key="id", value=user_id.value)
            raise UserNotFoundError(user_id.value)
        return user

    def get_user_by_username(self, username: str) -> User:
        """Retrieve a user by exact username.

        Raises:
            InvalidArgumentError: If the username is blank or badly sized
            UserNotFoundError: If no user has this username
        """
        validate_username(username)
        with self._guard("retrieve user"):
            user = self._user_repository.find_by_username(username)
        if user is None:
            self._probe.user_not_found(key="username", value=username)
            raise UserNotFoundError(username, key="username")
        return user

    def get_user_by_email(self, email: str) -> User:
        """Retrieve a user by email, ignoring case.

        Raises:
            InvalidArgumentError: If the email is blank or malformed
            UserNotFoundError: If no user has this email
        """
        validate_email_address(email)
        with self._guard("retrieve user"):
            user = self._user_repository.find_by_email(email)
        if user is None:
            self._probe.user_not_found(key="email", value=email)
            raise UserNotFoundError(email, key="email")
        return user

    def get_all_users(self) -> list[User]:
        with self._guard("retrieve users"):
            users = self._user_repository.find_all()
        self._probe.users_listed(count=len(users))
        return users

    def update_user(self, user_id: UserId | int, candidate: User) -> User:
        """Replace every profile field of an existing user.

        Identity and creation time are kept; any id on the candidate is
        ignored in favour of ``user_id``.

        Raises:
            InvalidArgumentError: If the candidate is invalid
            UserNotFoundError: If no user has this ID
            DuplicateEmailError: If another user has the email
            DuplicateUsernameError: If another user has the username
        """
        user_id = require_user_id(user_id)
        validate_user(candidate)

        with self._guard("update user"), self._identity_lock:
            current = self._user_repository.find_by_id(user_id)
            if current is None:
                self._probe.user_not_found(key="id", value=user_id.value)
                raise UserNotFoundError(user_id.value)

            self._ensure_unique(candidate, user_id=user_id)
            try:
                user = self._user_repository.update(current.with_profile(candidate))
            except NotFoundError as e:
                # deleted between the lookup and the write
                raise UserNotFoundError(user_id.value) from e

        self._probe.user_updated(user_id=user.id.value, username=user.username)
        return user

    def delete_user(self, user_id: UserId | int) -> UserDeletionResult:
        """Delete a user and every task they own.

        The owner lock is held throughout, so no task can be created for
        this user between the cascade and the removal of the user.

        Returns:
            UserDeletionResult, truthy when the user record was removed

        Raises:
            UserNotFoundError: If no user has this ID
        """
        user_id = require_user_id(user_id)

        with self._guard("delete user"), self._owner_locks.hold(user_id):
            if not self._user_repository.exists_by_id(user_id):
                self._probe.user_not_found(key="id", value=user_id.value)
                raise UserNotFoundError(user_id.value)

            task_count = self._task_service.get_task_count_by_user_id(user_id)
            deleted_tasks = 0
            if task_count > 0:
                deleted_tasks = self._task_service.delete_all_tasks_by_user_id(user_id)
                if deleted_tasks != task_count:
                    self._probe.cascade_count_mismatch(
                        user_id=user_id.value,
                        expected=task_count,
                        deleted=deleted_tasks,
                    )

            deleted = self._user_repository.delete_by_id(user_id)

        if deleted:
            self._probe.user_deleted(
                user_id=user_id.value, deleted_task_count=deleted_tasks
            )
        return UserDeletionResult(
            user_id=user_id,
            deleted=deleted,
            deleted_task_count=deleted_tasks,
        )

    def get_users_by_first_name(self, text: str) -> list[User]:
        """Retrieve users whose first name contains ``text``, ignoring case."""
        require_text(text, "first_name", "First name")
        with self._guard("retrieve users by first name"):
            return self._user_repository.find_by_first_name_containing(text)

    def user_exists(self, user_id: UserId | int | None) -> bool:
        """Check whether a user exists.

        Never raises: a missing or malformed id and any lookup failure are
        all answered with False.
        """
        if user_id is None:
            return False
        try:
            return self._user_repository.exists_by_id(require_user_id(user_id))
        except Exception as e:
            self._probe.user_existence_check_failed(user_id=user_id, error=str(e))
            return False

    def get_user_count(self) -> int:
        with self._guard("count users"):
            return self._user_repository.count()

    def search_users(
        self,
        username: str | None = None,
        email: str | None = None,
        first_name: str | None = None,
    ) -> UserSearchResult:
        """Search users by the first non-blank criterion.

        Criteria are tried in order: username, email, first name. With no
        criterion every user is returned. Misses and invalid criteria are
        reported with ``success=False`` instead of raising.
        """
        try:
            if not is_blank(username):
                criteria = f"username: {username}"
                users = [self.get_user_by_username(username)]
            elif not is_blank(email):
                criteria = f"email: {email}"
                users = [self.get_user_by_email(email)]
            elif not is_blank(first_name):
                criteria = f"firstName: {first_name}"
                users = self.get_users_by_first_name(first_name)
            else:
                criteria = "all users"
                users = self.get_all_users()
        except (NotFoundError, InvalidArgumentError) as e:
            criteria = (
                f"username: {username}, email: {email}, firstName: {first_name}"
            )
            self._probe.user_search_failed(criteria=criteria, error=str(e))
            return UserSearchResult(
                users=[],
                criteria=criteria,
                success=False,
                message="No users found matching the search criteria",
            )

        return UserSearchResult(
            users=users,
            criteria=criteria,
            success=True,
            message="Search completed successfully",
        )
