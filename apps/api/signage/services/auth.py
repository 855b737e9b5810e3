"""Login service layer."""

import logging

from signage.adapters.auth import TokenCodec
from signage.core.logging_safety import safe_email_domain, safe_log_identifier
from signage.errors import ApiError
from signage.repositories.memory import InMemoryStore, UserRecord
from signage.schemas.auth import LoginResponse, User

logger = logging.getLogger(__name__)


class AuthService:
    def __init__(self, store: InMemoryStore, codec: TokenCodec) -> None:
        self._store = store
        self._codec = codec

    def login(self, *, email: str | None, password: str | None) -> LoginResponse:
        if not email or not password:
            raise ApiError(status_code=400, code="VALIDATION_ERROR", message="Email and password are required")

        user = self._store.find_user_by_credentials(email, password)
        if user is None:
            logger.warning(
                "login.rejected email_domain=%s reason=invalid_credentials",
                safe_email_domain(email),
            )
            raise ApiError(status_code=401, code="UNAUTHORIZED", message="Invalid credentials")

        token = self._codec.issue(user.id, user.email)
        logger.info(
            "login.accepted principal_id=%s role=%s",
            safe_log_identifier(user.id, prefix="pid"),
            user.role.value,
        )
        return LoginResponse(token=token, user=self._to_user(user))

    @staticmethod
    def _to_user(record: UserRecord) -> User:
        return User(id=record.id, name=record.name, email=record.email, role=record.role)
