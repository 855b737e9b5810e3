"""Playlist API schemas."""

from pydantic import BaseModel, ConfigDict, Field


class Playlist(BaseModel):
    id: str
    name: str
    item_count: int = Field(alias="itemCount", ge=0)

    model_config = ConfigDict(populate_by_name=True)


class CreatePlaylistRequest(BaseModel):
    # Name and URL rules are enforced by the service so every violation maps to one message.
    name: str | None = None
    item_urls: list[str] | None = Field(default=None, alias="itemUrls")

    model_config = ConfigDict(populate_by_name=True)


class CreatePlaylistResponse(BaseModel):
    message: str
    playlist: Playlist
