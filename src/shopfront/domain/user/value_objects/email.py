"""Email value object."""

import re
from dataclasses import dataclass

from shopfront.domain.user.exceptions import InvalidEmailError

MAX_EMAIL_LENGTH = 254

_LOCAL_PART = r"[A-Za-z0-9._%+-]+"
_DOMAIN_PART = r"[A-Za-z0-9-]+(?:\.[A-Za-z0-9-]+)*\.[A-Za-z]{2,}"
EMAIL_PATTERN = re.compile(rf"^{_LOCAL_PART}@{_DOMAIN_PART}$")


@dataclass(frozen=True)
class Email:
    """A syntactically valid address, trimmed and lower-cased.

    Two emails compare equal when their normalized forms match, so
    ``Email("Alice@Example.com") == Email("alice@example.com")``.
    """

    value: str

    def __post_init__(self) -> None:
        normalized = (self.value or "").strip().lower()
        if not normalized:
            raise InvalidEmailError("Email cannot be empty")
        if len(normalized) > MAX_EMAIL_LENGTH or not EMAIL_PATTERN.match(normalized):
            raise InvalidEmailError(f"Invalid email format: {self.value}")
        object.__setattr__(self, "value", normalized)

    def __str__(self) -> str:
        return self.value
