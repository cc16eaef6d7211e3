"""
Security Service

Handles password hashing and JWT token operations.

Security Features:
==================
1. Password hashing with bcrypt (passlib), fixed cost factor
2. JWT access tokens binding the user id and email
3. Signature + expiry verification

Tokens are valid for 24 hours and signed with a single shared secret.
There is no refresh flow and no revocation list: a token stays valid
until it expires.

Usage:
    from app.services.security import hash_password, verify_password

    hashed = hash_password("abc123")
    is_valid = verify_password("abc123", hashed)
"""

import logging
from dataclasses import dataclass
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from passlib.context import CryptContext

from app.config import get_settings

logger = logging.getLogger(__name__)
settings = get_settings()

# -------------------------------------------------------------------------
# Password Hashing Configuration
# -------------------------------------------------------------------------
# Stored hashes keep the cost factor they were created with.
pwd_context = CryptContext(
    schemes=["bcrypt"],
    bcrypt__rounds=settings.bcrypt_rounds,
)


def hash_password(password: str) -> str:
    """
    Hash a plain text password using bcrypt.

    Example:
        >>> hashed = hash_password("abc123")
        >>> hashed.startswith("$2b$")
        True
    """
    return pwd_context.hash(password)


def verify_password(plain_password: str, hashed_password: str) -> bool:
    """
    Verify a plain password against a stored bcrypt hash.

    Returns False (instead of raising) for malformed hashes.
    """
    try:
        return pwd_context.verify(plain_password, hashed_password)
    except ValueError:
        logger.warning("Stored password hash could not be parsed")
        return False


# -------------------------------------------------------------------------
# JWT Token Configuration
# -------------------------------------------------------------------------
ALGORITHM = "HS256"


class InvalidTokenError(Exception):
    """Raised when a token's signature, expiry or payload is invalid."""


@dataclass(frozen=True)
class TokenPayload:
    """The identity carried by a valid access token."""

    user_id: str
    email: str


def create_access_token(
    user_id: str,
    email: str,
    expires_delta: timedelta | None = None,
) -> str:
    """
    Create a JWT access token for a user.

    Args:
        user_id: Id of the authenticated user
        email: Email of the authenticated user
        expires_delta: Optional custom lifetime (defaults to settings)

    Returns:
        Encoded JWT token string
    """
    now = datetime.now(UTC)
    if expires_delta is None:
        expires_delta = timedelta(hours=settings.access_token_expire_hours)

    to_encode = {
        "userId": user_id,
        "email": email,
        "iat": now,
        "exp": now + expires_delta,
    }

    return jwt.encode(to_encode, settings.secret_key, algorithm=ALGORITHM)


def decode_access_token(token: str) -> TokenPayload:
    """
    Decode and validate a JWT access token.

    Raises:
        InvalidTokenError: If the signature is wrong, the token expired,
            or the payload does not carry a user id
    """
    try:
        payload = jwt.decode(token, settings.secret_key, algorithms=[ALGORITHM])
    except JWTError as e:
        logger.warning(f"JWT decode error: {e}")
        raise InvalidTokenError(str(e)) from e

    user_id = payload.get("userId")
    if not user_id:
        raise InvalidTokenError("Token payload has no userId")

    return TokenPayload(user_id=str(user_id), email=str(payload.get("email", "")))
