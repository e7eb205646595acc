"""Signed session tokens (HS256 JWT)."""

from datetime import datetime, timedelta, timezone
from uuid import UUID

import jwt

from hostel_auth.exceptions import ExpiredTokenError, InvalidTokenError
from hostel_auth.schemas import TokenPayload


class JWTService:
    """Issues and checks session tokens.

    A token carries the account id (``sub``), the e-mail, a ``type`` claim
    and an expiry. Verification is purely cryptographic: there is no
    server-side session list, so logout cannot revoke a token.

    Examples
    --------
    >>> service = JWTService(secret_key="change-me")
    >>> token = service.create_session_token(account_id, "asha@nitm.ac.in")
    >>> service.verify_token(token).account_id == account_id
    True
    """

    ALGORITHM = "HS256"
    SESSION_TOKEN_TYPE = "session"
    DEFAULT_SESSION_EXPIRE_DAYS = 7
    _REQUIRED_CLAIMS = ("sub", "email", "exp")

    def __init__(
        self,
        secret_key: str,
        session_expire_days: int = DEFAULT_SESSION_EXPIRE_DAYS,
    ):
        """
        Parameters
        ----------
        secret_key
            HMAC key. Anyone holding it can mint sessions.
        session_expire_days
            Lifetime of new tokens, also used as the cookie max-age
        """
        if not secret_key:
            msg = "JWT secret key cannot be empty"
            raise ValueError(msg)

        self._secret_key = secret_key
        self._session_expire = timedelta(days=session_expire_days)

    @property
    def session_expire(self) -> timedelta:
        return self._session_expire

    def create_session_token(
        self,
        account_id: UUID,
        email: str,
        expires_delta: timedelta | None = None,
    ) -> str:
        issued_at = datetime.now(tz=timezone.utc)
        claims = {
            "sub": str(account_id),
            "email": email,
            "type": self.SESSION_TOKEN_TYPE,
            "iat": issued_at,
            "exp": issued_at + (expires_delta or self._session_expire),
        }
        return jwt.encode(claims, self._secret_key, algorithm=self.ALGORITHM)

    def verify_token(self, token: str) -> TokenPayload:
        """Decode a session token.

        Raises
        ------
        ExpiredTokenError
            The signature is valid but ``exp`` has passed
        InvalidTokenError
            Bad signature, wrong algorithm, or missing/garbled claims
        """
        try:
            claims = jwt.decode(
                token,
                self._secret_key,
                algorithms=[self.ALGORITHM],
                options={"require": list(self._REQUIRED_CLAIMS)},
            )
        except jwt.ExpiredSignatureError as e:
            raise ExpiredTokenError from e
        except jwt.InvalidTokenError as e:
            raise InvalidTokenError(f"Invalid token: {e}") from e

        try:
            account_id = UUID(claims["sub"])
        except (TypeError, ValueError) as e:
            raise InvalidTokenError(f"Malformed token payload: {e}") from e

        return TokenPayload(
            account_id=account_id,
            email=claims["email"],
            exp=datetime.fromtimestamp(claims["exp"], tz=timezone.utc),
            token_type=claims.get("type", self.SESSION_TOKEN_TYPE),
        )
