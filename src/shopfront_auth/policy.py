"""Password strength policy.

Pure, deterministic checks on candidate passwords. Every rule is evaluated
independently so callers can report all violations at once.
"""

import re
from dataclasses import dataclass, field

MIN_LENGTH = 8
MAX_LENGTH = 128

SYMBOLS = "!@#$%^&*()_+-=[]{};':\"\\|,.<>/?"

COMMON_PASSWORDS = frozenset(
    {
        "password",
        "password123",
        "123456",
        "123456789",
        "qwerty",
        "abc123",
        "password1",
        "admin",
        "root",
        "user",
        "test",
    },
)

_LOWERCASE = re.compile(r"[a-z]")
_UPPERCASE = re.compile(r"[A-Z]")
_DIGIT = re.compile(r"[0-9]")


@dataclass(frozen=True)
class PasswordValidationResult:
    """Outcome of a policy check."""

    is_valid: bool
    reasons: list[str] = field(default_factory=list)


def validate_password(password: str | None) -> PasswordValidationResult:
    """Check a candidate password against the strength policy.

    Parameters
    ----------
    password
        The candidate plaintext password

    Returns
    -------
    PasswordValidationResult with one reason per violated rule
    """
    if not password:
        return PasswordValidationResult(
            is_valid=False,
            reasons=["Password is required"],
        )

    reasons: list[str] = []

    if len(password) < MIN_LENGTH:
        reasons.append(f"Password must be at least {MIN_LENGTH} characters long")
    if len(password) > MAX_LENGTH:
        reasons.append(f"Password must be at most {MAX_LENGTH} characters long")
    if not _LOWERCASE.search(password):
        reasons.append("Password must contain at least one lowercase letter")
    if not _UPPERCASE.search(password):
        reasons.append("Password must contain at least one uppercase letter")
    if not _DIGIT.search(password):
        reasons.append("Password must contain at least one number")
    if not any(char in SYMBOLS for char in password):
        reasons.append("Password must contain at least one special character")
    if password.lower() in COMMON_PASSWORDS:
        reasons.append(
            "Password is too common. Please choose a stronger password",
        )

    return PasswordValidationResult(is_valid=not reasons, reasons=reasons)
