"""Access policy seam tests."""

from __future__ import annotations

import os
import unittest

from fastapi.testclient import TestClient

from signage.adapters.auth import JwtTokenCodec
from signage.core.config import get_settings
from signage.domain.access_policy import AccessPolicy, Action, AnyAuthenticatedPrincipal, Resource
from signage.main import create_app
from signage.schemas.auth import AuthPrincipal

_SECRET = "test-jwt-secret"


class _ReadOnlyPolicy(AccessPolicy):
    def is_allowed(self, principal: AuthPrincipal, resource: Resource, action: Action) -> bool:
        return action is Action.LIST


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


class AccessPolicyApiTests(_SettingsEnvCase):
    def test_default_policy_allows_every_resource_action(self) -> None:
        policy = AnyAuthenticatedPrincipal()
        principal = AuthPrincipal(user_id="u", email="u@example.com")

        for resource in Resource:
            for action in Action:
                with self.subTest(resource=resource, action=action):
                    self.assertTrue(policy.is_allowed(principal, resource, action))

    def test_restrictive_policy_blocks_mutation_without_touching_store(self) -> None:
        app = create_app(access_policy=_ReadOnlyPolicy())
        client = TestClient(app)

        listed = client.get("/api/screens", headers=self.headers)
        self.assertEqual(listed.status_code, 200)

        updated = client.put(
            "/api/screens/6651f7f2e2e9a3c4dcdc3211",
            headers=self.headers,
            json={"isActive": False},
        )
        self.assertEqual(updated.status_code, 403)
        self.assertEqual(updated.json(), {"error": "Forbidden", "code": "FORBIDDEN"})

        created = client.post("/api/playlists", headers=self.headers, json={"name": "Blocked"})
        self.assertEqual(created.status_code, 403)

        self.assertEqual(app.state.store.screen_write_count, 0)
        self.assertEqual(app.state.store.playlist_write_count, 0)
        self.assertEqual(len(app.state.store.list_playlists()), 4)
