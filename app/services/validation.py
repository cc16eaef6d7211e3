"""
Validation Service

Pure predicate functions over primitive inputs. The Pydantic request
schemas call these from their field validators, so a request is rejected
with 422 before any document is read or written.

Rules:
======
- Email: non-space chars, "@", non-space chars, ".", non-space chars
- Password: 6+ chars, at least one ASCII letter and one ASCII digit, and only
  letters, digits and the symbols @$!%*#?& (anything else is rejected)
- Username: 3-20 chars
- Book title 1-200, author 1-100, genre 1-50 chars
- Published year: 1000 up to the current calendar year

Length checks apply to the value after stripping surrounding whitespace.
"""

import re
from datetime import UTC, datetime

EMAIL_PATTERN = re.compile(r"^[^\s@]+@[^\s@]+\.[^\s@]+$")
PASSWORD_PATTERN = re.compile(r"^(?=.*[A-Za-z])(?=.*\d)[A-Za-z\d@$!%*#?&]{6,}$", re.ASCII)

USERNAME_LENGTH = (3, 20)
TITLE_LENGTH = (1, 200)
AUTHOR_LENGTH = (1, 100)
GENRE_LENGTH = (1, 50)
MIN_PUBLISHED_YEAR = 1000


def current_year() -> int:
    """The calendar year at the time of the call (UTC)."""
    return datetime.now(UTC).year


def is_valid_email(email: str) -> bool:
    return EMAIL_PATTERN.fullmatch(email) is not None


def is_valid_password(password: str) -> bool:
    return PASSWORD_PATTERN.fullmatch(password) is not None


def is_valid_length(value: str, minimum: int, maximum: int) -> bool:
    """Check the stripped length of value is within [minimum, maximum]."""
    return minimum <= len(value.strip()) <= maximum


def is_valid_published_year(year: int) -> bool:
    return MIN_PUBLISHED_YEAR <= year <= current_year()
