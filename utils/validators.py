"""
Input checks applied before any store access.
"""

from __future__ import annotations

from typing import Optional

from bson import ObjectId
from email_validator import EmailNotValidError, validate_email

from utils.errors import InvalidId, ValidationError


def parse_object_id(value: str) -> ObjectId:
    """Return ``value`` as an ObjectId, raising ``InvalidId`` if malformed."""
    if not isinstance(value, str) or not ObjectId.is_valid(value):
        raise InvalidId(str(value))
    return ObjectId(value)


def clean_text(text: Optional[str]) -> str:
    """Trim todo text; reject missing or blank values."""
    if text is None or not text.strip():
        raise ValidationError("text", "Todo text is required")
    return text.strip()


def normalize_email(email: Optional[str]) -> str:
    """Trim and lower-case an address after checking it with email-validator.

    Deliverability (DNS) is not checked, only syntax.
    """
    cleaned = (email or "").strip().lower()
    try:
        validate_email(cleaned, check_deliverability=False)
    except EmailNotValidError as exc:
        raise ValidationError("email", f"'{email}' is not a valid email: {exc}")
    return cleaned


# bcrypt only looks at the first 72 bytes and newer releases refuse more.
_BCRYPT_MAX_BYTES = 72


def check_password(password: Optional[str], min_length: int) -> str:
    if password is None or len(password) < min_length:
        raise ValidationError(
            "password", f"Password must be at least {min_length} characters"
        )
    if len(password.encode()) > _BCRYPT_MAX_BYTES:
        raise ValidationError(
            "password", f"Password must be at most {_BCRYPT_MAX_BYTES} bytes"
        )
    return password
