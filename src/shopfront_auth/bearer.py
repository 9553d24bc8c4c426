"""Authorization header parsing."""

from shopfront_auth.exceptions import (
    EmptyTokenError,
    MalformedHeaderError,
    MissingHeaderError,
)

BEARER_PREFIX = "Bearer "


def extract_bearer_token(header_value: str | None) -> str:
    """Return the token from an ``Authorization: Bearer <token>`` value.

    Raises
    ------
    MissingHeaderError
        If the header is absent or empty
    MalformedHeaderError
        If the value does not start with ``"Bearer "``
    EmptyTokenError
        If nothing but whitespace follows the prefix
    """
    if not header_value:
        raise MissingHeaderError

    if not header_value.startswith(BEARER_PREFIX):
        raise MalformedHeaderError

    token = header_value[len(BEARER_PREFIX) :].strip()
    if not token:
        raise EmptyTokenError

    return token
