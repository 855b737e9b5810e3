"""Screen routes."""

from typing import Annotated

from fastapi import APIRouter, Depends, Path, Query

from signage.domain.access_policy import Action, Resource
from signage.routes.dependencies import get_screen_service, require_access
from signage.schemas.auth import AuthPrincipal
from signage.schemas.error import NotFoundError, UnauthorizedError, ValidationErrorResponse
from signage.schemas.pagination import DEFAULT_LIMIT, DEFAULT_PAGE, Page
from signage.schemas.screen import Screen, UpdateScreenRequest, UpdateScreenResponse
from signage.services.screens import ScreenService

router = APIRouter(prefix="/screens", tags=["Screens"])


@router.get(
    "",
    response_model=Page[Screen],
    responses={400: {"model": ValidationErrorResponse}, 401: {"model": UnauthorizedError}},
)
async def list_screens(
    _: Annotated[AuthPrincipal, Depends(require_access(Resource.SCREENS, Action.LIST))],
    service: Annotated[ScreenService, Depends(get_screen_service)],
    search: Annotated[str | None, Query()] = None,
    page: Annotated[int, Query(ge=1)] = DEFAULT_PAGE,
    limit: Annotated[int, Query(ge=1)] = DEFAULT_LIMIT,
) -> Page[Screen]:
    return service.list_screens(search=search, page=page, limit=limit)


@router.put(
    "/{screenId}",
    response_model=UpdateScreenResponse,
    responses={
        400: {"model": ValidationErrorResponse},
        401: {"model": UnauthorizedError},
        404: {"model": NotFoundError},
    },
)
async def update_screen(
    screen_id: Annotated[str, Path(alias="screenId")],
    payload: UpdateScreenRequest,
    _: Annotated[AuthPrincipal, Depends(require_access(Resource.SCREENS, Action.UPDATE))],
    service: Annotated[ScreenService, Depends(get_screen_service)],
) -> UpdateScreenResponse:
    return service.update_status(screen_id=screen_id, is_active=payload.is_active)
