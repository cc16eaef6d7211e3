"""
Users Router

User profile management endpoints. All require authentication.

Endpoints:
- GET /users - All users (without password hashes)
- GET /users/{user_id} - One user
- PUT /users/{user_id} - Update username and/or email
- DELETE /users/{user_id} - Remove an account

Business Rules:
- Users can only update or delete their own account
- Username and email stay unique (case-insensitive)
- Deleting an account leaves the user's books in place
"""

import logging

from fastapi import APIRouter, HTTPException, Request, status

from app.config import get_settings
from app.dependencies import CurrentUser, UsersStore
from app.schemas.user import UserListResponse, UserResponse, UserUpdate
from app.services.rate_limiter import limiter
from app.services.store import index_of, merge_patch

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/users",
    tags=["Users"],
    responses={
        401: {"description": "Not authenticated"},
        403: {"description": "Invalid token or not the account owner"},
        404: {"description": "User not found"},
    },
)


def require_account_owner(current_user: CurrentUser, user_id: str, action: str) -> None:
    """Raise 403 unless the caller is the account being changed."""
    if current_user.user_id != user_id:
        raise HTTPException(
            status_code=status.HTTP_403_FORBIDDEN,
            detail=f"You can only {action} your own account",
        )


@router.get(
    "",
    response_model=UserListResponse,
    summary="List users",
)
@limiter.limit(settings.rate_limit_default)
def list_users(
    request: Request,
    current_user: CurrentUser,
    users: UsersStore,
) -> UserListResponse:
    records = users.find_all()
    return UserListResponse(
        items=[UserResponse.model_validate(user) for user in records],
        count=len(records),
    )


@router.get(
    "/{user_id}",
    response_model=UserResponse,
    summary="Get a user by ID",
)
@limiter.limit(settings.rate_limit_default)
def get_user(
    request: Request,
    user_id: str,
    current_user: CurrentUser,
    users: UsersStore,
) -> UserResponse:
    user = users.find_one(lambda u: u.id == user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return UserResponse.model_validate(user)


@router.put(
    "/{user_id}",
    response_model=UserResponse,
    summary="Update a user",
    description="Change username and/or email. Omitted fields are unchanged.",
)
@limiter.limit(settings.rate_limit_write)
def update_user(
    request: Request,
    user_id: str,
    user_data: UserUpdate,
    current_user: CurrentUser,
    users: UsersStore,
) -> UserResponse:
    """
    Update the caller's own profile.

    Raises:
        HTTPException: 404 if the user does not exist
        HTTPException: 403 if the caller is someone else
        HTTPException: 409 if the new username or email is taken
    """
    update_data = user_data.model_dump(exclude_unset=True)

    with users.transaction() as records:
        index = index_of(records, lambda u: u.id == user_id)
        if index == -1:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        require_account_owner(current_user, user_id, "update")

        others = [u for i, u in enumerate(records) if i != index]
        username = update_data.get("username")
        email = update_data.get("email")
        if any(
            (username and u.matches_username(username)) or (email and u.matches_email(email))
            for u in others
        ):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Username or email already exists",
            )

        updated = merge_patch(records[index], update_data)
        records[index] = updated

    logger.info(f"User updated: {user_id}")

    return UserResponse.model_validate(updated)


@router.delete(
    "/{user_id}",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Delete a user",
    description="Remove the caller's own account. Their books are kept.",
)
@limiter.limit(settings.rate_limit_write)
def delete_user(
    request: Request,
    user_id: str,
    current_user: CurrentUser,
    users: UsersStore,
) -> None:
    with users.transaction() as records:
        index = index_of(records, lambda u: u.id == user_id)
        if index == -1:
            raise HTTPException(
                status_code=status.HTTP_404_NOT_FOUND,
                detail="User not found",
            )

        require_account_owner(current_user, user_id, "delete")
        records.pop(index)

    logger.info(f"User deleted: {user_id}")
