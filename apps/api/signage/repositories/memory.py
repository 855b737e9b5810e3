"""In-memory repositories backing the signage API and tests."""

from __future__ import annotations

from dataclasses import dataclass, field
import threading
from uuid import uuid4

from signage.schemas.auth import UserRole


def new_record_id() -> str:
    return uuid4().hex[:24]


@dataclass(slots=True)
class UserRecord:
    id: str
    name: str
    email: str
    password: str
    role: UserRole


@dataclass(slots=True)
class ScreenRecord:
    id: str
    name: str
    is_active: bool


@dataclass(slots=True)
class PlaylistRecord:
    id: str
    name: str
    item_count: int


@dataclass(slots=True)
class InMemoryStore:
    """Owned, injectable record store; one instance per application."""

    users: dict[str, UserRecord] = field(default_factory=dict)
    screens: dict[str, ScreenRecord] = field(default_factory=dict)
    playlists: dict[str, PlaylistRecord] = field(default_factory=dict)
    screen_write_count: int = 0
    playlist_write_count: int = 0
    _lock: threading.RLock = field(default_factory=threading.RLock, init=False, repr=False, compare=False)

    def add_user(self, *, name: str, email: str, password: str, role: UserRole, user_id: str | None = None) -> UserRecord:
        with self._lock:
            if self.find_user_by_email(email) is not None:
                raise ValueError(f"user email already registered: {email}")
            user = UserRecord(
                id=user_id or new_record_id(),
                name=name,
                email=email,
                password=password,
                role=role,
            )
            if user.id in self.users:
                raise ValueError(f"user id already registered: {user.id}")
            self.users[user.id] = user
            return user

    def find_user_by_email(self, email: str) -> UserRecord | None:
        for user in self.users.values():
            if user.email == email:
                return user
        return None

    def find_user_by_credentials(self, email: str, password: str) -> UserRecord | None:
        user = self.find_user_by_email(email)
        if user is None or user.password != password:
            return None
        return user

    def add_screen(self, *, name: str, is_active: bool, screen_id: str | None = None) -> ScreenRecord:
        with self._lock:
            screen = ScreenRecord(id=screen_id or new_record_id(), name=name, is_active=is_active)
            if screen.id in self.screens:
                raise ValueError(f"screen id already registered: {screen.id}")
            self.screens[screen.id] = screen
            self.screen_write_count += 1
            return screen

    def list_screens(self) -> list[ScreenRecord]:
        return list(self.screens.values())

    def get_screen(self, screen_id: str) -> ScreenRecord | None:
        return self.screens.get(screen_id)

    def set_screen_status(self, *, screen_id: str, is_active: bool) -> ScreenRecord | None:
        with self._lock:
            screen = self.screens.get(screen_id)
            if screen is None:
                return None
            screen.is_active = is_active
            self.screen_write_count += 1
            return screen

    def add_playlist(self, *, name: str, item_count: int, playlist_id: str | None = None) -> PlaylistRecord:
        if item_count < 0:
            raise ValueError("item_count must be >= 0")
        with self._lock:
            playlist = PlaylistRecord(id=playlist_id or new_record_id(), name=name, item_count=item_count)
            if playlist.id in self.playlists:
                raise ValueError(f"playlist id already registered: {playlist.id}")
            self.playlists[playlist.id] = playlist
            self.playlist_write_count += 1
            return playlist

    def list_playlists(self) -> list[PlaylistRecord]:
        return list(self.playlists.values())

    def get_playlist(self, playlist_id: str) -> PlaylistRecord | None:
        return self.playlists.get(playlist_id)
