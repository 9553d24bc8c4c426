"""Auth schemas and data structures.

These are simple data classes used for transferring token data
between components.
"""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID

ACCESS_TOKEN_TYPE = "access"
REFRESH_TOKEN_TYPE = "refresh"  # NOQA: S105
EMAIL_VERIFICATION_TOKEN_TYPE = "email_verification"  # NOQA: S105


@dataclass(frozen=True)
class TokenPayload:
    """Decoded JWT token payload.

    This represents the claims extracted from a verified JWT token.

    Attributes
    ----------
    user_id
        The unique identifier of the user
    email
        The user's email address
    role
        The user's role at the time the token was issued
    exp
        Token expiration timestamp
    token_type
        One of "access", "refresh" or "email_verification"
    """

    user_id: UUID
    email: str
    role: str
    exp: datetime
    token_type: str

    def is_expired(self) -> bool:
        """Check if the token has expired."""
        return datetime.now(tz=self.exp.tzinfo) > self.exp

    def is_access_token(self) -> bool:
        return self.token_type == ACCESS_TOKEN_TYPE

    def is_refresh_token(self) -> bool:
        return self.token_type == REFRESH_TOKEN_TYPE

    def is_email_verification_token(self) -> bool:
        return self.token_type == EMAIL_VERIFICATION_TOKEN_TYPE
