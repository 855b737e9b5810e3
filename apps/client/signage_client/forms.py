"""Client-side validation for the create-playlist form."""

from __future__ import annotations

from dataclasses import dataclass

from signage.schemas.playlist import CreatePlaylistRequest
from signage.services.playlists import MAX_ITEM_URLS, is_valid_item_url


@dataclass(frozen=True, slots=True)
class PlaylistForm:
    name_error: str | None = None
    urls_error: str | None = None
    request: CreatePlaylistRequest | None = None

    @property
    def is_valid(self) -> bool:
        return self.request is not None


def parse_item_urls(text: str) -> list[str]:
    """One URL per line; surrounding whitespace and blank lines are ignored."""
    return [line.strip() for line in text.splitlines() if line.strip()]


def validate_playlist_form(name: str, item_urls_text: str = "") -> PlaylistForm:
    name_error = None
    urls_error = None

    trimmed_name = name.strip()
    if not trimmed_name:
        name_error = "Playlist name is required"

    urls = parse_item_urls(item_urls_text)
    if len(urls) > MAX_ITEM_URLS:
        urls_error = f"Maximum {MAX_ITEM_URLS} URLs allowed"
    if not all(is_valid_item_url(url) for url in urls):
        urls_error = "All URLs must start with http:// or https://"

    if name_error or urls_error:
        return PlaylistForm(name_error=name_error, urls_error=urls_error)
    return PlaylistForm(request=CreatePlaylistRequest(name=trimmed_name, item_urls=urls or None))


__all__ = ["PlaylistForm", "parse_item_urls", "validate_playlist_form"]
