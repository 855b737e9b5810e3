"""Route modules."""

from .auth import router as auth_router
from .playlists import router as playlists_router
from .screens import router as screens_router

__all__ = ["auth_router", "playlists_router", "screens_router"]
