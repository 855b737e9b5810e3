"""Process-wide client session state."""

from __future__ import annotations

from collections.abc import Callable
from dataclasses import dataclass, replace
from enum import Enum
import logging

from signage.core.logging_safety import safe_log_identifier
from signage.schemas.auth import User
from signage_client.api import ApiClient

logger = logging.getLogger(__name__)


class SessionStatus(str, Enum):
    ANONYMOUS = "anonymous"
    AUTHENTICATING = "authenticating"
    AUTHENTICATED = "authenticated"


@dataclass(frozen=True, slots=True)
class SessionState:
    user: User | None = None
    token: str | None = None
    is_loading: bool = False

    @property
    def is_authenticated(self) -> bool:
        return self.token is not None

    @property
    def status(self) -> SessionStatus:
        if self.is_loading:
            return SessionStatus.AUTHENTICATING
        if self.is_authenticated:
            return SessionStatus.AUTHENTICATED
        return SessionStatus.ANONYMOUS


SessionListener = Callable[[SessionState], None]


class SessionManager:
    """Single owner of the current user, credential and loading flag.

    ``initialize`` trusts a persisted token without asking the server; a
    stale token is discovered on the first call that comes back 401, which
    resets the session and fires ``on_login_required``.
    """

    def __init__(
        self,
        api: ApiClient,
        *,
        on_login_required: Callable[[], None] | None = None,
    ) -> None:
        self._api = api
        self._on_login_required = on_login_required
        self._state = SessionState()
        self._listeners: list[SessionListener] = []
        self._remove_unauthorized_handler = api.add_unauthorized_handler(self._handle_unauthorized)

    @property
    def state(self) -> SessionState:
        return self._state

    def subscribe(self, listener: SessionListener) -> Callable[[], None]:
        self._listeners.append(listener)

        def unsubscribe() -> None:
            if listener in self._listeners:
                self._listeners.remove(listener)

        return unsubscribe

    def _set_state(self, state: SessionState) -> None:
        if state == self._state:
            return
        self._state = state
        for listener in list(self._listeners):
            listener(state)

    def initialize(self) -> SessionState:
        stored_token = self._api.token_storage.get()
        if stored_token:
            self._set_state(replace(self._state, token=stored_token, is_loading=False))
        return self._state

    async def login(self, email: str, password: str) -> User:
        self._set_state(replace(self._state, is_loading=True))
        try:
            response = await self._api.login(email, password)
        except BaseException:
            self._set_state(SessionState())
            raise

        self._set_state(SessionState(user=response.user, token=response.token, is_loading=False))
        logger.info(
            "session.authenticated principal_id=%s role=%s",
            safe_log_identifier(response.user.id, prefix="pid"),
            response.user.role.value,
        )
        return response.user

    def logout(self) -> None:
        self._api.logout()
        self._set_state(SessionState())
        logger.info("session.logged_out")

    def set_user(self, user: User | None) -> None:
        self._set_state(replace(self._state, user=user))

    def close(self) -> None:
        self._remove_unauthorized_handler()
        self._listeners.clear()

    def _handle_unauthorized(self) -> None:
        # Login failures are handled by ``login`` itself.
        if self._state.is_loading:
            return
        self._set_state(SessionState())
        logger.info("session.expired action=login_required")
        if self._on_login_required is not None:
            self._on_login_required()


__all__ = ["SessionListener", "SessionManager", "SessionState", "SessionStatus"]
