"""Pydantic models for user API requests and responses.

Wire field names are camelCase (``firstName``, ``createdDate``). Request
models only check shape; field rules are enforced by UserService.
"""

from __future__ import annotations

from datetime import datetime

from pydantic import Field

from tracker.application.value_objects import UserDeletionResult, UserSearchResult
from tracker.domain.aggregates import User
from tracker.presentation.models import CamelModel


class UserRequest(CamelModel):
    """Request model for creating or replacing a user."""

    username: str | None = Field(None, description="Unique username (3-50 chars)")
    email: str | None = Field(None, description="Email address")
    first_name: str | None = Field(None, description="Given name")
    last_name: str | None = Field(None, description="Family name")

    def to_domain(self) -> User:
        """Convert to a User candidate without identity."""
        return User.new(
            username=self.username,
            email=self.email,
            first_name=self.first_name,
            last_name=self.last_name,
        )


class UserResponse(CamelModel):
    """Response model for user."""

    id: int = Field(..., description="User ID")
    username: str = Field(..., description="Username")
    email: str = Field(..., description="Email address")
    first_name: str = Field(..., description="Given name")
    last_name: str = Field(..., description="Family name")
    created_date: datetime | None = Field(None, description="Creation time (UTC)")
    updated_date: datetime | None = Field(None, description="Last update time (UTC)")

    @classmethod
    def from_domain(cls, user: User) -> UserResponse:
        """Convert domain User aggregate to API response.

        Args:
            user: User domain aggregate

        Returns:
            UserResponse
        """
        return cls(
            id=user.id.value,
            username=user.username,
            email=user.email,
            first_name=user.first_name,
            last_name=user.last_name,
            created_date=user.created_at,
            updated_date=user.updated_at,
        )


class UserDeletionResponse(CamelModel):
    """Response model for a cascading user deletion."""

    user_id: int
    deleted: bool
    deleted_task_count: int
    message: str

    @classmethod
    def from_result(cls, result: UserDeletionResult) -> UserDeletionResponse:
        return cls(
            user_id=result.user_id.value,
            deleted=result.deleted,
            deleted_task_count=result.deleted_task_count,
            message=(
                "User and all associated tasks successfully deleted"
                if result
                else "Failed to delete user"
            ),
        )


class UserExistenceResponse(CamelModel):
    """Response model for a user existence check."""

    user_id: int
    exists: bool
    message: str

    @classmethod
    def from_check(cls, user_id: int, exists: bool) -> UserExistenceResponse:
        return cls(
            user_id=user_id,
            exists=exists,
            message="User exists" if exists else "User does not exist",
        )


class UserStatsResponse(CamelModel):
    """Response model for user statistics."""

    total_users: int
    message: str

    @classmethod
    def from_count(cls, total_users: int) -> UserStatsResponse:
        return cls(
            total_users=total_users,
            message=f"Total registered users: {total_users}",
        )


class UserSearchResponse(CamelModel):
    """Response model for a criteria-based user search."""

    users: list[UserResponse]
    success: bool
    message: str
    search_criteria: str
    total_found: int

    @classmethod
    def from_result(cls, result: UserSearchResult) -> UserSearchResponse:
        return cls(
            users=[UserResponse.from_domain(user) for user in result.users],
            success=result.success,
            message=result.message,
            search_criteria=result.criteria,
            total_found=result.total_found,
        )
