"""
Authentication Router

Handles user authentication endpoints:
- Registration (username/email/password)
- Login (email/password -> JWT access token)
- Logout (clear the token cookie)
- Get current user (from JWT token)

Security:
=========
- Passwords are hashed with bcrypt before storage
- Plain text passwords are never logged or stored
- Access tokens last 24 hours and cannot be revoked
- The token is returned in the body AND set as an httpOnly cookie
"""

import logging

from fastapi import APIRouter, HTTPException, Request, Response, status

from app.config import get_settings
from app.dependencies import CurrentUser, UsersStore
from app.models import User
from app.schemas.user import LoginRequest, TokenResponse, UserCreate, UserResponse
from app.services.rate_limiter import limiter
from app.services.security import create_access_token, hash_password, verify_password

logger = logging.getLogger(__name__)
settings = get_settings()

router = APIRouter(
    prefix="/auth",
    tags=["Authentication"],
    responses={
        401: {"description": "Unauthorized"},
        409: {"description": "Conflict (email/username already exists)"},
    },
)


# -------------------------------------------------------------------------
# Registration Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/register",
    response_model=UserResponse,
    status_code=status.HTTP_201_CREATED,
    summary="Register a new user",
    description="""
    Create a new user account.

    **Password Requirements:**
    - Minimum 6 characters
    - At least 1 letter and 1 number
    - Only letters, numbers and @$!%*#?&

    **Username Requirements:**
    - 3-20 characters

    Email and username must be unique (case-insensitive).
    """,
)
@limiter.limit(settings.rate_limit_auth)
def register(
    request: Request,
    user_data: UserCreate,
    users: UsersStore,
) -> UserResponse:
    """
    Register a new user.

    1. Validates input (handled by Pydantic)
    2. Checks for duplicate email/username under the document lock
    3. Hashes the password with bcrypt
    4. Appends the user and rewrites users.json
    """
    hashed_password = hash_password(user_data.password)

    with users.transaction() as records:
        if any(u.matches_email(user_data.email) for u in records):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Email already registered",
            )

        if any(u.matches_username(user_data.username) for u in records):
            raise HTTPException(
                status_code=status.HTTP_409_CONFLICT,
                detail="Username already taken",
            )

        user = User(
            username=user_data.username,
            email=user_data.email,
            hashed_password=hashed_password,
        )
        records.append(user)

    logger.info(f"New user registered: {user.email}")

    return UserResponse.model_validate(user)


# -------------------------------------------------------------------------
# Login Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/login",
    response_model=TokenResponse,
    summary="Login with email and password",
    description="""
    Authenticate with email and password to receive a JWT access token.

    The token is also set as an httpOnly `token` cookie, so browsers are
    authenticated automatically. API clients can send it instead as:
    ```
    Authorization: Bearer <access_token>
    ```
    """,
)
@limiter.limit(settings.rate_limit_auth)
def login(
    request: Request,
    response: Response,
    credentials: LoginRequest,
    users: UsersStore,
) -> TokenResponse:
    """Authenticate a user and issue a 24-hour access token."""
    user = users.find_one(lambda u: u.matches_email(credentials.email))

    if user is None or not verify_password(credentials.password, user.hashed_password):
        logger.warning(f"Login failed for {credentials.email}")
        raise HTTPException(
            status_code=status.HTTP_401_UNAUTHORIZED,
            detail="Invalid email or password",
            headers={"WWW-Authenticate": "Bearer"},
        )

    access_token = create_access_token(user.id, user.email)
    expires_in = settings.access_token_expire_hours * 60 * 60

    response.set_cookie(
        key=settings.token_cookie_name,
        value=access_token,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
        max_age=expires_in,
    )

    logger.info(f"User logged in: {user.email}")

    return TokenResponse(
        access_token=access_token,
        token_type="bearer",
        expires_in=expires_in,
        user=UserResponse.model_validate(user),
    )


# -------------------------------------------------------------------------
# Logout Endpoint
# -------------------------------------------------------------------------
@router.post(
    "/logout",
    status_code=status.HTTP_204_NO_CONTENT,
    summary="Logout user",
    description="""
    Clear the token cookie.

    **Note:** The token itself stays valid until it expires.
    """,
)
def logout(
    response: Response,
    current_user: CurrentUser,
) -> None:
    response.delete_cookie(
        key=settings.token_cookie_name,
        httponly=True,
        secure=settings.is_production,
        samesite="lax",
    )

    logger.info(f"User logged out: {current_user.email}")


# -------------------------------------------------------------------------
# Get Current User Endpoint
# -------------------------------------------------------------------------
@router.get(
    "/me",
    response_model=UserResponse,
    summary="Get current user",
    description="Get the currently authenticated user's profile.",
)
def get_me(
    current_user: CurrentUser,
    users: UsersStore,
) -> UserResponse:
    """
    Return the caller's profile.

    A valid token can outlive its account; that case returns 404.
    """
    user = users.find_one(lambda u: u.id == current_user.user_id)
    if user is None:
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND,
            detail="User not found",
        )

    return UserResponse.model_validate(user)
