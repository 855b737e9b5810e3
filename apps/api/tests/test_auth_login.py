"""Login endpoint and bearer authorization tests."""

from __future__ import annotations

from datetime import UTC, datetime, timedelta
import os
import unittest

from fastapi.testclient import TestClient

from signage.adapters.auth import JwtTokenCodec
from signage.core.config import get_settings
from signage.main import create_app
from signage.repositories.seed import DEMO_PASSWORD

_SECRET = "test-jwt-secret"


class _SettingsEnvCase(unittest.TestCase):
    _env_keys = ("SIGNAGE_JWT_SECRET", "SIGNAGE_JWT_ALGORITHM", "SIGNAGE_TOKEN_TTL_HOURS")

    def setUp(self) -> None:
        self._old_env = {k: os.environ.get(k) for k in self._env_keys}
        os.environ["SIGNAGE_JWT_SECRET"] = _SECRET
        os.environ.pop("SIGNAGE_JWT_ALGORITHM", None)
        os.environ.pop("SIGNAGE_TOKEN_TTL_HOURS", None)
        get_settings.cache_clear()

    def tearDown(self) -> None:
        for key, value in self._old_env.items():
            if value is None:
                os.environ.pop(key, None)
            else:
                os.environ[key] = value
        get_settings.cache_clear()


class LoginApiTests(_SettingsEnvCase):
    def test_login_returns_token_and_user_without_password(self) -> None:
        client = TestClient(create_app())

        response = client.post(
            "/api/auth/login",
            json={"email": "admin@example.com", "password": DEMO_PASSWORD},
        )

        self.assertEqual(response.status_code, 200)
        body = response.json()
        self.assertTrue(body["token"])
        self.assertEqual(
            body["user"],
            {
                "id": "6651f6e1c0e7a2b3dcdcf8a1",
                "name": "Admin User",
                "email": "admin@example.com",
                "role": "ADMIN",
            },
        )
        self.assertNotIn("password", body["user"])

    def test_issued_token_identifies_the_logged_in_user(self) -> None:
        client = TestClient(create_app())

        response = client.post(
            "/api/auth/login",
            json={"email": "user@example.com", "password": DEMO_PASSWORD},
        )

        principal = JwtTokenCodec(_SECRET).verify(response.json()["token"])
        self.assertIsNotNone(principal)
        assert principal is not None
        self.assertEqual(principal.user_id, "6651f6e1c0e7a2b3dcdcf8a2")
        self.assertEqual(principal.email, "user@example.com")

    def test_missing_fields_return_400(self) -> None:
        client = TestClient(create_app())

        for payload in ({}, {"email": "admin@example.com"}, {"password": DEMO_PASSWORD}, {"email": "", "password": ""}):
            with self.subTest(payload=payload):
                response = client.post("/api/auth/login", json=payload)
                self.assertEqual(response.status_code, 400)
                self.assertEqual(
                    response.json(),
                    {"error": "Email and password are required", "code": "VALIDATION_ERROR"},
                )

    def test_bad_credentials_return_401(self) -> None:
        client = TestClient(create_app())

        for payload in (
            {"email": "admin@example.com", "password": "wrong"},
            {"email": "nobody@example.com", "password": DEMO_PASSWORD},
        ):
            with self.subTest(payload=payload):
                response = client.post("/api/auth/login", json=payload)
                self.assertEqual(response.status_code, 401)
                self.assertEqual(response.json(), {"error": "Invalid credentials", "code": "UNAUTHORIZED"})

    def test_unparseable_body_returns_400(self) -> None:
        client = TestClient(create_app())

        response = client.post(
            "/api/auth/login",
            content=b"{not json",
            headers={"Content-Type": "application/json"},
        )

        self.assertEqual(response.status_code, 400)
        self.assertEqual(response.json(), {"error": "Invalid request body", "code": "VALIDATION_ERROR"})


class BearerAuthorizationTests(_SettingsEnvCase):
    def _login(self, client: TestClient) -> str:
        response = client.post(
            "/api/auth/login",
            json={"email": "admin@example.com", "password": DEMO_PASSWORD},
        )
        self.assertEqual(response.status_code, 200)
        return response.json()["token"]

    def test_login_then_list_screens_and_stripped_token_is_rejected(self) -> None:
        client = TestClient(create_app())
        token = self._login(client)

        authorized = client.get("/api/screens", headers={"Authorization": f"Bearer {token}"})
        self.assertEqual(authorized.status_code, 200)
        self.assertEqual(authorized.json()["pagination"]["total"], 5)

        stripped = client.get("/api/screens")
        self.assertEqual(stripped.status_code, 401)
        self.assertEqual(stripped.json(), {"error": "Unauthorized", "code": "UNAUTHORIZED"})

    def test_garbled_headers_are_rejected(self) -> None:
        client = TestClient(create_app())
        token = self._login(client)

        for header in (
            token,
            f"Token {token}",
            "Bearer",
            "Bearer not-a-token",
            f"Bearer {token}x",
        ):
            with self.subTest(header=header):
                response = client.get("/api/playlists", headers={"Authorization": header})
                self.assertEqual(response.status_code, 401)

    def test_expired_token_is_rejected(self) -> None:
        client = TestClient(create_app())
        issued_long_ago = JwtTokenCodec(
            _SECRET,
            clock=lambda: datetime.now(UTC) - timedelta(hours=25),
        ).issue("6651f6e1c0e7a2b3dcdcf8a1", "admin@example.com")

        response = client.get("/api/screens", headers={"Authorization": f"Bearer {issued_long_ago}"})

        self.assertEqual(response.status_code, 401)

    def test_token_from_foreign_secret_is_rejected(self) -> None:
        client = TestClient(create_app())
        foreign = JwtTokenCodec("some-other-secret").issue("6651f6e1c0e7a2b3dcdcf8a1", "admin@example.com")

        response = client.get("/api/screens", headers={"Authorization": f"Bearer {foreign}"})

        self.assertEqual(response.status_code, 401)

    def test_any_valid_token_grants_access_even_for_unknown_subject(self) -> None:
        client = TestClient(create_app())
        token = JwtTokenCodec(_SECRET).issue("not-a-seeded-user", "ghost@example.com")

        response = client.get("/api/playlists", headers={"Authorization": f"Bearer {token}"})

        self.assertEqual(response.status_code, 200)

    def test_configured_ttl_is_applied_to_issued_tokens(self) -> None:
        os.environ["SIGNAGE_TOKEN_TTL_HOURS"] = "1"
        get_settings.cache_clear()
        client = TestClient(create_app())

        token = self._login(client)

        later = JwtTokenCodec(_SECRET, clock=lambda: datetime.now(UTC) + timedelta(hours=2))
        self.assertIsNone(later.verify(token))
        self.assertIsNotNone(JwtTokenCodec(_SECRET).verify(token))
