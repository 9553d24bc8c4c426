"""Password hashing service using bcrypt.

Provides salted, deliberately slow password hashing and verification.
Strength rules live in shopfront_auth.policy and are applied by the
caller before hashing.
"""

import bcrypt

from shopfront_auth.exceptions import HashingError

# bcrypt only consumes the first 72 bytes of its input
BCRYPT_MAX_BYTES = 72


def _encode(password: str) -> bytes:
    return password.encode("utf-8")[:BCRYPT_MAX_BYTES]


class PasswordHashingService:
    """bcrypt hashing with a fresh salt per call and a tunable cost.

    Tests construct it with ``rounds=4`` so registration stays fast.

    Examples
    --------
    >>> hasher = PasswordHashingService(rounds=4)
    >>> stored = hasher.hash("Passw0rd!")
    >>> hasher.verify("Passw0rd!", stored), hasher.verify("passw0rd!", stored)
    (True, False)
    """

    DEFAULT_ROUNDS = 12

    def __init__(self, rounds: int = DEFAULT_ROUNDS):
        """
        Parameters
        ----------
        rounds
            bcrypt cost (log2 of the key-expansion rounds), 4..31.
        """
        self._rounds = rounds

    @property
    def rounds(self) -> int:
        return self._rounds

    def hash(self, password: str) -> str:
        """Return the ``$2b$`` modular-crypt string for ``password``.

        Raises
        ------
        HashingError
            If the bcrypt backend fails
        """
        try:
            salt = bcrypt.gensalt(rounds=self._rounds)
            hashed = bcrypt.hashpw(_encode(password), salt)
        except (ValueError, TypeError) as e:
            raise HashingError from e
        return hashed.decode("utf-8")

    def verify(self, password: str, password_hash: str) -> bool:
        """Verify a password against a hash.

        A mismatch is a valid ``False``, never an error.
        """
        try:
            return bcrypt.checkpw(
                _encode(password),
                password_hash.encode("utf-8"),
            )
        except (ValueError, TypeError):
            # Invalid hash format
            return False

    def needs_rehash(self, password_hash: str) -> bool:
        """True when ``password_hash`` was made with a different cost."""
        try:
            # bcrypt format: $2b$XX$...
            parts = password_hash.split("$")
            if len(parts) >= 3:
                return int(parts[2]) != self._rounds
        except (ValueError, IndexError):
            pass
        return True
