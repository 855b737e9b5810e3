"""HMAC-signed JWT codec backed by python-jose."""

from __future__ import annotations

from collections.abc import Callable
from datetime import UTC, datetime, timedelta

from jose import JWTError, jwt
from pydantic import ValidationError

from signage.adapters.auth.base import TokenCodec
from signage.schemas.auth import AuthPrincipal

DEFAULT_TOKEN_TTL = timedelta(hours=24)


def _utc_now() -> datetime:
    return datetime.now(UTC)


class JwtTokenCodec(TokenCodec):
    """Issues and verifies ``{userId, email, iat, exp}`` tokens.

    Expiry is checked against the injected clock rather than the library's
    wall clock, so tests can move time forward without sleeping.
    """

    def __init__(
        self,
        secret: str,
        *,
        algorithm: str = "HS256",
        ttl: timedelta = DEFAULT_TOKEN_TTL,
        clock: Callable[[], datetime] = _utc_now,
    ) -> None:
        if not secret:
            raise ValueError("JWT secret must not be empty")
        self._secret = secret
        self._algorithm = algorithm
        self._ttl = ttl
        self._clock = clock

    def issue(self, subject_id: str, subject_email: str) -> str:
        issued_at = int(self._clock().timestamp())
        payload = {
            "userId": subject_id,
            "email": subject_email,
            "iat": issued_at,
            "exp": issued_at + int(self._ttl.total_seconds()),
        }
        return jwt.encode(payload, self._secret, algorithm=self._algorithm)

    def verify(self, token: str) -> AuthPrincipal | None:
        try:
            claims = jwt.decode(
                token,
                self._secret,
                algorithms=[self._algorithm],
                options={"verify_exp": False, "verify_iat": False},
            )
        except JWTError:
            return None

        expires_at = claims.get("exp")
        if not isinstance(expires_at, int) or isinstance(expires_at, bool):
            return None
        if int(self._clock().timestamp()) > expires_at:
            return None

        try:
            return AuthPrincipal(user_id=claims.get("userId"), email=claims.get("email"))
        except ValidationError:
            return None


__all__ = ["DEFAULT_TOKEN_TTL", "JwtTokenCodec"]
