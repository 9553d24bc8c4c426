"""Signed bearer tokens for the shop API (HS256 via PyJWT)."""

from datetime import datetime, timedelta, timezone
from uuid import UUID, uuid4

import jwt

from shopfront_auth.exceptions import (
    ExpiredTokenError,
    InvalidSignatureError,
    MalformedTokenError,
)
from shopfront_auth.schemas import (
    ACCESS_TOKEN_TYPE,
    EMAIL_VERIFICATION_TOKEN_TYPE,
    REFRESH_TOKEN_TYPE,
    TokenPayload,
)


class JWTService:
    """Issues and checks the three token kinds the API hands out.

    Handles access tokens (7 days by default), refresh tokens (30 days)
    and email verification tokens (24 hours). All tokens are signed with
    the same secret and carry the same issuer.

    Examples
    --------
    >>> tokens = JWTService(secret_key=settings.jwt_secret_key.get_secret_value())
    >>> access = tokens.create_access_token(user.id, "ada@example.com", "CUSTOMER")
    >>> tokens.verify_token(access).role
    'CUSTOMER'
    """

    DEFAULT_ACCESS_EXPIRE_HOURS = 7 * 24
    REFRESH_EXPIRE_DAYS = 30
    EMAIL_VERIFICATION_EXPIRE_HOURS = 24
    DEFAULT_ISSUER = "shopfront-api"
    ALGORITHM = "HS256"

    def __init__(
        self,
        secret_key: str,
        access_token_expire_hours: int = DEFAULT_ACCESS_EXPIRE_HOURS,
        issuer: str = DEFAULT_ISSUER,
    ):
        """
        Parameters
        ----------
        secret_key
            HMAC key shared by every token kind; never logged.
        access_token_expire_hours
            Hours until access token expires (default 168, i.e. 7 days)
        issuer
            Value of the ``iss`` claim, checked on verification
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._issuer = issuer
        self._access_expire = timedelta(hours=access_token_expire_hours)
        self._refresh_expire = timedelta(days=self.REFRESH_EXPIRE_DAYS)
        self._verification_expire = timedelta(
            hours=self.EMAIL_VERIFICATION_EXPIRE_HOURS,
        )

    @property
    def access_token_lifetime(self) -> timedelta:
        return self._access_expire

    def create_access_token(
        self,
        user_id: UUID,
        email: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Create an access token carrying user id, email and role.

        Parameters
        ----------
        user_id
            Becomes the ``sub`` claim
        email
            The user's email address
        role
            The user's role name
        expires_delta
            Override for the configured lifetime (tests use negative deltas)

        Returns
        -------
        Compact JWS string
        """
        return self._create_token(
            user_id=user_id,
            email=email,
            role=role,
            token_type=ACCESS_TOKEN_TYPE,
            expires_delta=expires_delta or self._access_expire,
        )

    def create_refresh_token(
        self,
        user_id: UUID,
        email: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        """Mint a 30-day refresh token.

        Refresh tokens carry the same claims as access tokens plus the
        ``type="refresh"`` discriminator, and are only exchanged for a new
        access token.
        """
        return self._create_token(
            user_id=user_id,
            email=email,
            role=role,
            token_type=REFRESH_TOKEN_TYPE,
            expires_delta=expires_delta or self._refresh_expire,
        )

    def create_email_verification_token(
        self,
        user_id: UUID,
        email: str,
        role: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        return self._create_token(
            user_id=user_id,
            email=email,
            role=role,
            token_type=EMAIL_VERIFICATION_TOKEN_TYPE,
            expires_delta=expires_delta or self._verification_expire,
        )

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a token, enforcing its signature and expiry.

        Parameters
        ----------
        token
            Compact JWS as received in the bearer header or request body

        Returns
        -------
        TokenPayload containing the decoded claims

        Raises
        ------
        ExpiredTokenError
            If the signature is valid but the token has expired
        InvalidSignatureError
            If the signature does not verify
        MalformedTokenError
            For any other decoding or claim failure
        """
        try:
            payload = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                issuer=self._issuer,
                options={"require": ["exp", "iat", "iss", "sub"]},
            )

            return TokenPayload(
                user_id=UUID(payload["sub"]),
                email=payload["email"],
                role=payload["role"],
                exp=datetime.fromtimestamp(payload["exp"], tz=timezone.utc),
                token_type=payload.get("type", ACCESS_TOKEN_TYPE),
            )

        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError from e
        except jwt.InvalidSignatureError as e:
            raise InvalidSignatureError from e
        except jwt.InvalidTokenError as e:
            raise MalformedTokenError(f"Invalid token: {e}") from e
        except (KeyError, TypeError, ValueError) as e:
            raise MalformedTokenError(f"Malformed token payload: {e}") from e

    def _create_token(
        self,
        user_id: UUID,
        email: str,
        role: str,
        token_type: str,
        expires_delta: timedelta,
    ) -> str:
        now = datetime.now(tz=timezone.utc)

        payload = {
            "sub": str(user_id),
            "email": email,
            "role": role,
            "type": token_type,
            "iss": self._issuer,
            "jti": uuid4().hex,
            "iat": now,
            "exp": now + expires_delta,
        }

        return jwt.encode(payload, self._secret_key, algorithm=self.ALGORITHM)
