"""HTTP routes for user management."""

from __future__ import annotations

from typing import Annotated

from fastapi import APIRouter, Depends, HTTPException, Query, status

from tracker.application.services import UserService
from tracker.dependencies import get_user_service
from tracker.presentation.errors import to_http_exception
from tracker.presentation.users.models import (
    UserDeletionResponse,
    UserExistenceResponse,
    UserRequest,
    UserResponse,
    UserSearchResponse,
    UserStatsResponse,
)

router = APIRouter(
    prefix="/users",
    tags=["users"],
)


@router.post(
    "",
    status_code=status.HTTP_201_CREATED,
)
def create_user(
    request: UserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Create a new user.

    Args:
        request: User creation request
        service: User service for orchestration

    Returns:
        UserResponse with created user details

    Raises:
        HTTPException: 400 if a field is missing or invalid
        HTTPException: 409 if the username or email is already taken
        HTTPException: 500 for unexpected errors
    """
    try:
        user = service.create_user(request.to_domain())
        return UserResponse.from_domain(user)
    except Exception as e:
        raise to_http_exception(e, "Failed to create user") from e


@router.get("")
def list_users(
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserResponse]:
    """List all users in ascending ID order."""
    try:
        return [UserResponse.from_domain(user) for user in service.get_all_users()]
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve users") from e


@router.get("/stats")
def get_user_stats(
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserStatsResponse:
    """Get the total number of registered users."""
    try:
        return UserStatsResponse.from_count(service.get_user_count())
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve user statistics") from e


@router.get("/search")
def search_users(
    service: Annotated[UserService, Depends(get_user_service)],
    username: str | None = None,
    email: str | None = None,
    first_name: Annotated[str | None, Query(alias="firstName")] = None,
) -> UserSearchResponse:
    """Search users by username, email or first name.

    The first non-blank criterion is used. A search that finds nothing is
    reported in the body with ``success`` false rather than as an error.
    """
    try:
        result = service.search_users(
            username=username,
            email=email,
            first_name=first_name,
        )
        return UserSearchResponse.from_result(result)
    except Exception as e:
        raise to_http_exception(e, "Failed to search users") from e


@router.get("/search/firstname")
def get_users_by_first_name(
    first_name: Annotated[str, Query(alias="firstName")],
    service: Annotated[UserService, Depends(get_user_service)],
) -> list[UserResponse]:
    """List users whose first name contains the given text, ignoring case."""
    try:
        users = service.get_users_by_first_name(first_name)
        return [UserResponse.from_domain(user) for user in users]
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve users by first name") from e


@router.get("/username/{username}")
def get_user_by_username(
    username: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Get user by exact username.

    Raises:
        HTTPException: 404 if no user has this username
    """
    try:
        return UserResponse.from_domain(service.get_user_by_username(username))
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve user") from e


@router.get("/email/{email}")
def get_user_by_email(
    email: str,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Get user by email, ignoring case.

    Raises:
        HTTPException: 404 if no user has this email
    """
    try:
        return UserResponse.from_domain(service.get_user_by_email(email))
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve user") from e


@router.get("/{user_id}")
def get_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Get user by ID.

    Raises:
        HTTPException: 400 if the ID is not positive
        HTTPException: 404 if user not found
    """
    try:
        return UserResponse.from_domain(service.get_user_by_id(user_id))
    except Exception as e:
        raise to_http_exception(e, "Failed to retrieve user") from e


@router.put("/{user_id}")
def update_user(
    user_id: int,
    request: UserRequest,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserResponse:
    """Replace every profile field of a user.

    Raises:
        HTTPException: 400 if a field is missing or invalid
        HTTPException: 404 if user not found
        HTTPException: 409 if the username or email belongs to another user
    """
    try:
        user = service.update_user(user_id, request.to_domain())
        return UserResponse.from_domain(user)
    except Exception as e:
        raise to_http_exception(e, "Failed to update user") from e


@router.delete("/{user_id}")
def delete_user(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserDeletionResponse:
    """Delete a user together with every task they own.

    Raises:
        HTTPException: 404 if user not found
        HTTPException: 500 if the user record could not be removed
    """
    try:
        result = service.delete_user(user_id)
    except Exception as e:
        raise to_http_exception(e, "Failed to delete user") from e

    if not result:
        raise HTTPException(
            status_code=status.HTTP_500_INTERNAL_SERVER_ERROR,
            detail="Failed to delete user",
        )
    return UserDeletionResponse.from_result(result)


@router.get("/{user_id}/exists")
def check_user_exists(
    user_id: int,
    service: Annotated[UserService, Depends(get_user_service)],
) -> UserExistenceResponse:
    """Check whether a user exists. Never fails for a missing user."""
    return UserExistenceResponse.from_check(user_id, service.user_exists(user_id))
