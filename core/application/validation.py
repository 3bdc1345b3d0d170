"""
User field validation.

Simple predicates for registration data: email, password strength and
phone number format. Stateless; safe to call from anywhere.
"""
from dataclasses import dataclass
import re
from typing import Optional

from pydantic import EmailStr, TypeAdapter, ValidationError


_EMAIL_ADAPTER = TypeAdapter(EmailStr)

# 10 digits, optional separators, optional (area code), optional country code with or without +
PHONE_PATTERN = re.compile(r"^(\+?\d{1,3}[\s.-]?)?(\(\d{3}\)|\d{3})[\s.-]?\d{3}[\s.-]?\d{4}$")

SPECIAL_CHARACTERS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?`~"

MIN_PASSWORD_LENGTH = 8


@dataclass(frozen=True)
class PasswordValidationResult:
    """Outcome of a password check; ``error`` names the first failed rule."""
    valid: bool
    error: Optional[str] = None

    @classmethod
    def ok(cls) -> "PasswordValidationResult":
        return cls(valid=True)

    @classmethod
    def fail(cls, error: str) -> "PasswordValidationResult":
        return cls(valid=False, error=error)


def is_valid_email(email: Optional[str]) -> bool:
    """Bare addresses only; the ``Name <addr>`` form EmailStr also parses is refused."""
    if not email:
        return False
    email = email.strip()
    try:
        address = _EMAIL_ADAPTER.validate_python(email)
    except ValidationError:
        return False
    return address.lower() == email.lower()


def validate_password(password: Optional[str]) -> PasswordValidationResult:
    """Check password strength rules in order, reporting the first failure."""
    if password is None or len(password) < MIN_PASSWORD_LENGTH:
        return PasswordValidationResult.fail(
            f"Password must be at least {MIN_PASSWORD_LENGTH} characters long"
        )
    if not any(c.isupper() for c in password):
        return PasswordValidationResult.fail("Password must contain at least one uppercase letter")
    if not any(c.islower() for c in password):
        return PasswordValidationResult.fail("Password must contain at least one lowercase letter")
    if not any(c.isdigit() for c in password):
        return PasswordValidationResult.fail("Password must contain at least one number")
    if not any(c in SPECIAL_CHARACTERS for c in password):
        return PasswordValidationResult.fail("Password must contain at least one special character")
    return PasswordValidationResult.ok()


def is_valid_phone(phone: Optional[str]) -> bool:
    if not phone:
        return False
    return PHONE_PATTERN.match(phone.strip()) is not None
