"""Query cache and paginated list controllers with optimistic mutations."""

from __future__ import annotations

import asyncio
from collections.abc import Awaitable, Callable
from dataclasses import dataclass
import logging
import time
from typing import Any, Generic, TypeVar

from signage.schemas.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, Page
from signage.schemas.playlist import CreatePlaylistResponse, Playlist
from signage.schemas.screen import Screen, UpdateScreenResponse
from signage_client.api import ApiClient
from signage_client.config import ClientSettings, get_client_settings
from signage_client.errors import ApiRequestError

logger = logging.getLogger(__name__)

ItemT = TypeVar("ItemT")
ResultT = TypeVar("ResultT")

QueryKey = tuple[str, str, int, int]
PageFetcher = Callable[[str, int, int], Awaitable[Page[Any]]]

SCREENS = "screens"
PLAYLISTS = "playlists"


@dataclass(slots=True)
class CacheEntry:
    data: Any
    updated_at: float
    invalidated: bool = False


class QueryCache:
    """Results keyed by ``(resource, search, page, limit)`` with in-flight de-duplication."""

    def __init__(self, *, stale_time: float = 30.0, clock: Callable[[], float] = time.monotonic) -> None:
        self._stale_time = stale_time
        self._clock = clock
        self._entries: dict[QueryKey, CacheEntry] = {}
        self._inflight: dict[QueryKey, asyncio.Task[Any]] = {}

    @classmethod
    def from_settings(cls, settings: ClientSettings | None = None) -> QueryCache:
        settings = settings or get_client_settings()
        return cls(stale_time=settings.stale_time_seconds)

    @property
    def stale_time(self) -> float:
        return self._stale_time

    def get_data(self, key: QueryKey) -> Any:
        entry = self._entries.get(key)
        return entry.data if entry is not None else None

    def set_data(self, key: QueryKey, data: Any) -> None:
        self._entries[key] = CacheEntry(data=data, updated_at=self._clock())

    def restore(self, key: QueryKey, entry: CacheEntry | None) -> None:
        if entry is None:
            self._entries.pop(key, None)
        else:
            self._entries[key] = entry

    def snapshot(self, key: QueryKey) -> CacheEntry | None:
        entry = self._entries.get(key)
        if entry is None:
            return None
        return CacheEntry(data=entry.data, updated_at=entry.updated_at, invalidated=entry.invalidated)

    def is_stale(self, key: QueryKey) -> bool:
        entry = self._entries.get(key)
        if entry is None or entry.invalidated:
            return True
        return self._clock() - entry.updated_at >= self._stale_time

    def invalidate(self, resource: str) -> None:
        for key, entry in self._entries.items():
            if key[0] == resource:
                entry.invalidated = True

    def keys(self, resource: str) -> list[QueryKey]:
        return [key for key in self._entries if key[0] == resource]

    async def fetch(self, key: QueryKey, fetcher: Callable[[], Awaitable[Any]]) -> Any:
        task = self._inflight.get(key)
        if task is None:
            task = asyncio.create_task(self._run_fetch(key, fetcher))
            self._inflight[key] = task
            task.add_done_callback(lambda done: self._forget(key, done))
        try:
            return await asyncio.shield(task)
        except asyncio.CancelledError:
            current = asyncio.current_task()
            # Fetch cancelled through ``cancel``; the caller keeps the cached view.
            if task.cancelled() and current is not None and not current.cancelling():
                return self.get_data(key)
            raise

    async def _run_fetch(self, key: QueryKey, fetcher: Callable[[], Awaitable[Any]]) -> Any:
        data = await fetcher()
        self.set_data(key, data)
        return data

    def _forget(self, key: QueryKey, task: asyncio.Task[Any]) -> None:
        if self._inflight.get(key) is task:
            del self._inflight[key]
        if not task.cancelled():
            # Mark the exception retrieved; awaiting callers still receive it.
            task.exception()

    async def cancel(self, resource: str) -> None:
        tasks = [task for key, task in self._inflight.items() if key[0] == resource]
        for task in tasks:
            task.cancel()
        if tasks:
            await asyncio.gather(*tasks, return_exceptions=True)


class PaginatedListController(Generic[ItemT]):
    """Search/page state for one list resource plus cache orchestration."""

    def __init__(
        self,
        resource: str,
        fetch_page: PageFetcher,
        cache: QueryCache,
        *,
        limit: int = DEFAULT_LIMIT,
    ) -> None:
        if limit < 1:
            raise ValueError("limit must be >= 1")
        self.resource = resource
        self._fetch_page = fetch_page
        self._cache = cache
        self.search = ""
        self.page = DEFAULT_PAGE
        self.limit = limit
        self.error: ApiRequestError | None = None
        self.mutation_error: ApiRequestError | None = None

    @property
    def key(self) -> QueryKey:
        return (self.resource, self.search, self.page, self.limit)

    @property
    def data(self) -> Page[ItemT] | None:
        return self._cache.get_data(self.key)

    @property
    def has_previous_page(self) -> bool:
        return self.page > 1

    @property
    def has_next_page(self) -> bool:
        current = self.data
        if current is None:
            return False
        return self.page * self.limit < current.pagination.total

    async def load(self, *, force: bool = False) -> Page[ItemT] | None:
        key = self.key
        if not force and not self._cache.is_stale(key):
            return self._cache.get_data(key)

        search, page, limit = key[1], key[2], key[3]
        try:
            result = await self._cache.fetch(key, lambda: self._fetch_page(search, page, limit))
        except ApiRequestError as exc:
            self.error = exc
            raise
        self.error = None
        return result

    async def submit_search(self, search: str) -> Page[ItemT] | None:
        self.search = search.strip()
        self.page = DEFAULT_PAGE
        return await self.load()

    async def go_to_page(self, page: int) -> Page[ItemT] | None:
        if page < 1:
            raise ValueError("page must be >= 1")
        self.page = page
        return await self.load()

    async def next_page(self) -> Page[ItemT] | None:
        return await self.go_to_page(self.page + 1)

    async def previous_page(self) -> Page[ItemT] | None:
        return await self.go_to_page(max(DEFAULT_PAGE, self.page - 1))

    async def mutate(
        self,
        mutation: Callable[[], Awaitable[ResultT]],
        *,
        optimistic: Callable[[Page[ItemT]], Page[ItemT]] | None = None,
    ) -> ResultT:
        """Run a mutation with optional optimistic update, rollback and reconciling refetch."""
        key = self.key
        self.mutation_error = None
        await self._cache.cancel(self.resource)
        snapshot = self._cache.snapshot(key)
        if optimistic is not None and snapshot is not None and snapshot.data is not None:
            self._cache.set_data(key, optimistic(snapshot.data))

        try:
            result = await mutation()
        except BaseException as exc:
            if optimistic is not None:
                self._cache.restore(key, snapshot)
            if isinstance(exc, ApiRequestError):
                self.mutation_error = exc
            raise
        finally:
            await self._reconcile()
        return result

    async def _reconcile(self) -> None:
        self._cache.invalidate(self.resource)
        try:
            await self.load(force=True)
        except ApiRequestError as exc:
            logger.warning(
                "list.refetch_failed resource=%s status=%s",
                self.resource,
                exc.status,
            )


class ScreenListController(PaginatedListController[Screen]):
    def __init__(self, api: ApiClient, cache: QueryCache, *, limit: int = DEFAULT_LIMIT) -> None:
        async def fetch_page(search: str, page: int, limit: int) -> Page[Screen]:
            return await api.get_screens(search=search, page=page, limit=limit)

        super().__init__(SCREENS, fetch_page, cache, limit=limit)
        self._api = api

    async def set_status(self, screen_id: str, is_active: bool) -> UpdateScreenResponse:
        def apply(current: Page[Screen]) -> Page[Screen]:
            return current.model_copy(
                update={
                    "data": [
                        screen.model_copy(update={"is_active": is_active}) if screen.id == screen_id else screen
                        for screen in current.data
                    ]
                }
            )

        return await self.mutate(
            lambda: self._api.update_screen(screen_id, is_active=is_active),
            optimistic=apply,
        )


class PlaylistListController(PaginatedListController[Playlist]):
    def __init__(self, api: ApiClient, cache: QueryCache, *, limit: int = DEFAULT_LIMIT) -> None:
        async def fetch_page(search: str, page: int, limit: int) -> Page[Playlist]:
            return await api.get_playlists(search=search, page=page, limit=limit)

        super().__init__(PLAYLISTS, fetch_page, cache, limit=limit)
        self._api = api

    async def create(self, name: str, item_urls: list[str] | None = None) -> CreatePlaylistResponse:
        return await self.mutate(lambda: self._api.create_playlist(name, item_urls))


__all__ = [
    "CacheEntry",
    "PLAYLISTS",
    "PaginatedListController",
    "PlaylistListController",
    "QueryCache",
    "QueryKey",
    "SCREENS",
    "ScreenListController",
]
