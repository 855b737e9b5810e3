"""Playlist service layer."""

import logging
import re

from signage.core.logging_safety import safe_log_identifier
from signage.errors import ApiError
from signage.repositories.memory import InMemoryStore, PlaylistRecord
from signage.schemas.pagination import Page, PaginationMeta
from signage.schemas.playlist import CreatePlaylistResponse, Playlist
from signage.services.pagination import filter_by_name, paginate

logger = logging.getLogger(__name__)

MAX_ITEM_URLS = 10
_ITEM_URL_PATTERN = re.compile(r"^https?://.+")


def _validation_error(message: str) -> ApiError:
    return ApiError(status_code=400, code="VALIDATION_ERROR", message=message)


def is_valid_item_url(url: str) -> bool:
    return _ITEM_URL_PATTERN.match(url) is not None


class PlaylistService:
    def __init__(self, store: InMemoryStore) -> None:
        self._store = store

    def list_playlists(self, *, search: str | None, page: int, limit: int) -> Page[Playlist]:
        matching = filter_by_name(self._store.list_playlists(), search, name_of=lambda record: record.name)
        return Page[Playlist](
            data=[self._to_playlist(record) for record in paginate(matching, page=page, limit=limit)],
            pagination=PaginationMeta(page=page, limit=limit, total=len(matching)),
        )

    def create_playlist(self, *, name: str | None, item_urls: list[str] | None) -> CreatePlaylistResponse:
        trimmed_name = (name or "").strip()
        if not trimmed_name:
            raise _validation_error("Playlist name is required")

        urls = item_urls or []
        if len(urls) > MAX_ITEM_URLS:
            raise _validation_error(f"Maximum {MAX_ITEM_URLS} URLs allowed")
        if not all(is_valid_item_url(url) for url in urls):
            raise _validation_error("All URLs must start with http:// or https://")

        record = self._store.add_playlist(name=trimmed_name, item_count=len(urls))
        logger.info(
            "playlist.created playlist_id=%s item_count=%s",
            safe_log_identifier(record.id, prefix="plid"),
            record.item_count,
        )
        return CreatePlaylistResponse(
            message="Playlist created successfully",
            playlist=self._to_playlist(record),
        )

    @staticmethod
    def _to_playlist(record: PlaylistRecord) -> Playlist:
        return Playlist(id=record.id, name=record.name, item_count=record.item_count)
