"""Playlist routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Query

from signage.domain.access_policy import Action, Resource
from signage.routes.dependencies import get_playlist_service, require_access
from signage.schemas.auth import AuthPrincipal
from signage.schemas.error import UnauthorizedError, ValidationErrorResponse
from signage.schemas.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, Page
from signage.schemas.playlist import CreatePlaylistRequest, CreatePlaylistResponse, Playlist
from signage.services.playlists import PlaylistService

router = APIRouter(prefix="/playlists", tags=["Playlists"])


@router.get(
    "",
    response_model=Page[Playlist],
    responses={400: {"model": ValidationErrorResponse}, 401: {"model": UnauthorizedError}},
)
async def list_playlists(
    _: Annotated[AuthPrincipal, Depends(require_access(Resource.PLAYLISTS, Action.LIST))],
    service: Annotated[PlaylistService, Depends(get_playlist_service)],
    search: Annotated[str | None, Query()] = None,
    page: Annotated[int, Query(ge=1)] = DEFAULT_PAGE,
    limit: Annotated[int, Query(ge=1)] = DEFAULT_LIMIT,
) -> Page[Playlist]:
    return service.list_playlists(search=search, page=page, limit=limit)


@router.post(
    "",
    response_model=CreatePlaylistResponse,
    responses={400: {"model": ValidationErrorResponse}, 401: {"model": UnauthorizedError}},
)
async def create_playlist(
    payload: CreatePlaylistRequest,
    _: Annotated[AuthPrincipal, Depends(require_access(Resource.PLAYLISTS, Action.CREATE))],
    service: Annotated[PlaylistService, Depends(get_playlist_service)],
) -> CreatePlaylistResponse:
    return service.create_playlist(name=payload.name, item_urls=payload.item_urls)
