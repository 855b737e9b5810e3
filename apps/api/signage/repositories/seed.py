"""Demo fixture loaded into a fresh store at startup."""

from signage.repositories.memory import InMemoryStore
from signage.schemas.auth import UserRole

DEMO_PASSWORD = "password123"

_DEMO_USERS = (
    ("6651f6e1c0e7a2b3dcdcf8a1", "Admin User", "admin@example.com", UserRole.ADMIN),
    ("6651f6e1c0e7a2b3dcdcf8a2", "Regular User", "user@example.com", UserRole.USER),
)

_DEMO_SCREENS = (
    ("6651f7f2e2e9a3c4dcdc3211", "Lobby Screen", True),
    ("6651f80ae2e9a3c4dcdc3212", "Conference Display", False),
    ("6651f80ae2e9a3c4dcdc3213", "Cafeteria Monitor", True),
    ("6651f80ae2e9a3c4dcdc3214", "Reception Screen", False),
    ("6651f80ae2e9a3c4dcdc3215", "Training Room Display", True),
)

_DEMO_PLAYLISTS = (
    ("6651f9d9e2e9a3c4dcdc3411", "Morning Playlist", 5),
    ("6651fa21e2e9a3c4dcdc3412", "Evening Playlist", 8),
    ("6651fa21e2e9a3c4dcdc3413", "Weekend Special", 12),
    ("6651fa21e2e9a3c4dcdc3414", "Holiday Celebration", 6),
)


def seed_demo_data(store: InMemoryStore) -> InMemoryStore:
    for user_id, name, email, role in _DEMO_USERS:
        store.add_user(user_id=user_id, name=name, email=email, password=DEMO_PASSWORD, role=role)
    for screen_id, name, is_active in _DEMO_SCREENS:
        store.add_screen(screen_id=screen_id, name=name, is_active=is_active)
    for playlist_id, name, item_count in _DEMO_PLAYLISTS:
        store.add_playlist(playlist_id=playlist_id, name=name, item_count=item_count)
    # Seeding is not a client write.
    store.screen_write_count = 0
    store.playlist_write_count = 0
    return store


__all__ = ["DEMO_PASSWORD", "seed_demo_data"]
