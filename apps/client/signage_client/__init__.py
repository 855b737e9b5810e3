"""Client-side session and list orchestration for the signage API."""

from .api import ApiClient
from .errors import ApiRequestError
from .queries import PlaylistListController, QueryCache, ScreenListController
from .session import SessionManager, SessionState, SessionStatus
from .storage import FileTokenStorage, MemoryTokenStorage, TokenStorage

__all__ = [
    "ApiClient",
    "ApiRequestError",
    "FileTokenStorage",
    "MemoryTokenStorage",
    "PlaylistListController",
    "QueryCache",
    "ScreenListController",
    "SessionManager",
    "SessionState",
    "SessionStatus",
    "TokenStorage",
]
