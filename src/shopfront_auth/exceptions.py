"""Authentication infrastructure exceptions.

These exceptions are raised by the shopfront_auth package and should be
caught and translated by the application layer (AuthenticationService,
AuthGate). They carry no HTTP semantics.
"""


class AuthError(Exception):
    """Base exception for all authentication infrastructure errors."""

    def __init__(self, message: str = "Authentication error"):
        self.message = message
        super().__init__(self.message)


class InvalidTokenError(AuthError):
    """Raised when a JWT token cannot be accepted."""

    def __init__(self, message: str = "Invalid or expired token"):
        super().__init__(message)


class ExpiredTokenError(InvalidTokenError):
    """The signature is valid but the token's expiry has passed."""

    def __init__(self, message: str = "Token expired"):
        super().__init__(message)


class InvalidSignatureError(InvalidTokenError):
    """The token signature does not verify against the signing secret."""

    def __init__(self, message: str = "Invalid token signature"):
        super().__init__(message)


class MalformedTokenError(InvalidTokenError):
    """The token could not be decoded or its claims are unusable."""

    def __init__(self, message: str = "Malformed token"):
        super().__init__(message)


class BearerHeaderError(AuthError):
    """Base for Authorization header parsing failures."""


class MissingHeaderError(BearerHeaderError):
    def __init__(self, message: str = "Authorization header missing"):
        super().__init__(message)


class MalformedHeaderError(BearerHeaderError):
    def __init__(
        self,
        message: str = "Invalid authorization format. Use: Bearer <token>",
    ):
        super().__init__(message)


class EmptyTokenError(BearerHeaderError):
    def __init__(self, message: str = "Token missing"):
        super().__init__(message)


class HashingError(AuthError):
    """Raised when the password hashing backend itself fails.

    Never carries the plaintext or the digest.
    """

    def __init__(self, message: str = "Password hashing failed"):
        super().__init__(message)
