"""Thin async wrapper over the signage HTTP API."""

from __future__ import annotations

from collections.abc import Callable
import logging
from typing import Any, TypeVar
from urllib.parse import quote

import httpx
from pydantic import BaseModel, ValidationError

from signage.schemas.auth import LoginRequest, LoginResponse
from signage.schemas.pagination import Page
from signage.schemas.playlist import CreatePlaylistRequest, CreatePlaylistResponse, Playlist
from signage.schemas.screen import Screen, UpdateScreenRequest, UpdateScreenResponse
from signage_client.config import ClientSettings, get_client_settings
from signage_client.errors import NETWORK_ERROR_MESSAGE, ApiRequestError
from signage_client.storage import FileTokenStorage, TokenStorage

logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

UnauthorizedHandler = Callable[[], None]


def _list_params(search: str | None, page: int | None, limit: int | None) -> dict[str, str]:
    params: dict[str, str] = {}
    if search:
        params["search"] = search
    if page:
        params["page"] = str(page)
    if limit:
        params["limit"] = str(limit)
    return params


class ApiClient:
    """Sends bearer-authenticated JSON requests and normalizes every failure.

    Any 401 purges the stored token and notifies the registered unauthorized
    handlers before raising; other non-2xx responses and transport failures
    become :class:`ApiRequestError`.
    """

    def __init__(
        self,
        *,
        base_url: str,
        storage: TokenStorage,
        timeout: float = 10.0,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> None:
        self._storage = storage
        self._unauthorized_handlers: list[UnauthorizedHandler] = []
        self._http = httpx.AsyncClient(base_url=base_url, timeout=timeout, transport=transport)

    @classmethod
    def from_settings(
        cls,
        settings: ClientSettings | None = None,
        *,
        storage: TokenStorage | None = None,
        transport: httpx.AsyncBaseTransport | None = None,
    ) -> ApiClient:
        settings = settings or get_client_settings()
        return cls(
            base_url=settings.api_base_url,
            storage=storage or FileTokenStorage(settings.token_storage_path),
            timeout=settings.request_timeout_seconds,
            transport=transport,
        )

    @property
    def token_storage(self) -> TokenStorage:
        return self._storage

    def add_unauthorized_handler(self, handler: UnauthorizedHandler) -> Callable[[], None]:
        self._unauthorized_handlers.append(handler)

        def remove() -> None:
            if handler in self._unauthorized_handlers:
                self._unauthorized_handlers.remove(handler)

        return remove

    async def aclose(self) -> None:
        await self._http.aclose()

    async def __aenter__(self) -> ApiClient:
        return self

    async def __aexit__(self, *exc_info: object) -> None:
        await self.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        json: Any = None,
        params: dict[str, str] | None = None,
    ) -> Any:
        headers = {"Content-Type": "application/json"}
        token = self._storage.get()
        if token:
            headers["Authorization"] = f"Bearer {token}"

        try:
            response = await self._http.request(method, path, json=json, params=params, headers=headers)
        except httpx.HTTPError as exc:
            logger.warning("api.transport_failed method=%s path=%s error=%s", method, path, type(exc).__name__)
            raise ApiRequestError(NETWORK_ERROR_MESSAGE, 0) from exc

        if response.status_code == 401:
            self._handle_unauthorized(method, path)
            raise ApiRequestError(self._error_message(response, default="Unauthorized"), 401)

        try:
            data = response.json()
        except ValueError as exc:
            logger.warning("api.invalid_body method=%s path=%s status=%s", method, path, response.status_code)
            raise ApiRequestError(NETWORK_ERROR_MESSAGE, 0) from exc

        if not response.is_success:
            raise ApiRequestError(self._error_message(response, default="An error occurred"), response.status_code)

        return data

    def _handle_unauthorized(self, method: str, path: str) -> None:
        logger.info("api.unauthorized method=%s path=%s action=purge_token", method, path)
        self._storage.remove()
        for handler in list(self._unauthorized_handlers):
            handler()

    @staticmethod
    def _error_message(response: httpx.Response, *, default: str) -> str:
        try:
            data = response.json()
        except ValueError:
            return default
        if isinstance(data, dict) and isinstance(data.get("error"), str) and data["error"]:
            return data["error"]
        return default

    @staticmethod
    def _parse(model: type[ModelT], data: Any) -> ModelT:
        try:
            return model.model_validate(data)
        except ValidationError as exc:
            raise ApiRequestError("Unexpected response from server", 0) from exc

    async def login(self, email: str, password: str) -> LoginResponse:
        payload = LoginRequest(email=email, password=password).model_dump()
        response = self._parse(LoginResponse, await self._request("POST", "/auth/login", json=payload))
        self._storage.set(response.token)
        return response

    def logout(self) -> None:
        self._storage.remove()

    async def get_screens(
        self,
        *,
        search: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[Screen]:
        data = await self._request("GET", "/screens", params=_list_params(search, page, limit))
        return self._parse(Page[Screen], data)

    async def update_screen(self, screen_id: str, *, is_active: bool) -> UpdateScreenResponse:
        payload = UpdateScreenRequest(is_active=is_active).model_dump(by_alias=True)
        data = await self._request("PUT", f"/screens/{quote(screen_id, safe='')}", json=payload)
        return self._parse(UpdateScreenResponse, data)

    async def get_playlists(
        self,
        *,
        search: str | None = None,
        page: int | None = None,
        limit: int | None = None,
    ) -> Page[Playlist]:
        data = await self._request("GET", "/playlists", params=_list_params(search, page, limit))
        return self._parse(Page[Playlist], data)

    async def create_playlist(self, name: str, item_urls: list[str] | None = None) -> CreatePlaylistResponse:
        payload = CreatePlaylistRequest(name=name, item_urls=item_urls).model_dump(by_alias=True, exclude_none=True)
        data = await self._request("POST", "/playlists", json=payload)
        return self._parse(CreatePlaylistResponse, data)


__all__ = ["ApiClient", "UnauthorizedHandler"]
