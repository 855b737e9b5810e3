"""Authentication routes."""

from typing import Annotated

from fastapi import APIRouter, Depends

from signage.routes.dependencies import get_auth_service
from signage.schemas.auth import LoginRequest, LoginResponse
from signage.schemas.error import UnauthorizedError, ValidationErrorResponse
from signage.services.auth import AuthService

router = APIRouter(prefix="/auth", tags=["Auth"])


@router.post(
    "/login",
    response_model=LoginResponse,
    responses={400: {"model": ValidationErrorResponse}, 401: {"model": UnauthorizedError}},
)
async def login(
    payload: LoginRequest,
    service: Annotated[AuthService, Depends(get_auth_service)],
) -> LoginResponse:
    return service.login(email=payload.email, password=payload.password)
