"""In-memory store, seed data and store injection tests."""

from __future__ import annotations

import os
import unittest

from fastapi.testclient import TestClient

from signage.adapters.auth import JwtTokenCodec
from signage.core.config import get_settings
from signage.main import create_app
from signage.repositories.memory import InMemoryStore
from signage.repositories.seed import seed_demo_data
from signage.schemas.auth import UserRole

_SECRET = "test-jwt-secret"


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = ("SIGNAGE_JWT_SECRET",)

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["SIGNAGE_JWT_SECRET"] = _SECRET
        get_settings.cache_clear()
        token = JwtTokenCodec(_SECRET).issue("6651f6e1c0e7a2b3dcdcf8a1", "admin@example.com")
        self.headers = {"Authorization": f"Bearer {token}"}

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class StoreInjectionApiTests(_SettingsEnvCase):
    def test_injected_store_is_used_without_seeding(self) -> None:
        store = InMemoryStore()
        store.add_screen(name="Only Screen", is_active=True)
        client = TestClient(create_app(store=store))

        response = client.get("/api/screens", headers=self.headers)

        self.assertEqual([screen["name"] for screen in response.json()["data"]], ["Only Screen"])

    def test_unseeded_app_has_no_users(self) -> None:
        client = TestClient(create_app(seed=False))

        response = client.post("/api/auth/login", json={"email": "admin@example.com", "password": "password123"})

        self.assertEqual(response.status_code, 401)


class InMemoryStoreTests(unittest.TestCase):
    def test_seed_loads_fixture_without_counting_writes(self) -> None:
        store = seed_demo_data(InMemoryStore())

        self.assertEqual(len(store.users), 2)
        self.assertEqual(len(store.list_screens()), 5)
        self.assertEqual(len(store.list_playlists()), 4)
        self.assertEqual(store.screen_write_count, 0)
        self.assertEqual(store.playlist_write_count, 0)

    def test_user_emails_are_unique(self) -> None:
        store = InMemoryStore()
        store.add_user(name="A", email="a@example.com", password="pw", role=UserRole.USER)

        with self.assertRaises(ValueError):
            store.add_user(name="B", email="a@example.com", password="pw", role=UserRole.ADMIN)

    def test_credentials_lookup_requires_exact_password(self) -> None:
        store = InMemoryStore()
        user = store.add_user(name="A", email="a@example.com", password="pw", role=UserRole.USER)

        self.assertIs(store.find_user_by_credentials("a@example.com", "pw"), user)
        self.assertIsNone(store.find_user_by_credentials("a@example.com", "PW"))

    def test_new_ids_are_unique_and_24_chars(self) -> None:
        store = InMemoryStore()
        ids = {store.add_playlist(name=f"P{index}", item_count=0).id for index in range(50)}

        self.assertEqual(len(ids), 50)
        self.assertTrue(all(len(record_id) == 24 for record_id in ids))

    def test_set_status_on_missing_screen_is_a_no_op(self) -> None:
        store = InMemoryStore()

        self.assertIsNone(store.set_screen_status(screen_id="missing", is_active=True))
        self.assertEqual(store.screen_write_count, 0)
