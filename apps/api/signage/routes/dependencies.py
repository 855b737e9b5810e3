"""Dependency wiring for routes."""

from __future__ import annotations

from collections.abc import Awaitable, Callable
from datetime import timedelta
import logging
from typing import Annotated
from uuid import uuid4

from fastapi import Depends, Request, Security
from fastapi.security import HTTPAuthorizationCredentials, HTTPBearer

from signage.adapters.auth import JwtTokenCodec, TokenCodec
from signage.core.config import Settings, get_settings
from signage.core.logging_safety import safe_log_identifier
from signage.domain.access_policy import AccessPolicy, Action, AnyAuthenticatedPrincipal, Resource
from signage.errors import ApiError
from signage.repositories.memory import InMemoryStore
from signage.schemas.auth import AuthPrincipal
from signage.services.auth import AuthService
from signage.services.playlists import PlaylistService
from signage.services.screens import ScreenService

bearer_scheme = HTTPBearer(auto_error=False, scheme_name="bearerAuth")
logger = logging.getLogger(__name__)


def _auth_error(message: str) -> ApiError:
    return ApiError(status_code=401, code="UNAUTHORIZED", message=message)


def _request_correlation_id(request: Request) -> str:
    existing = getattr(request.state, "correlation_id", None)
    if isinstance(existing, str) and existing:
        return existing

    correlation_id = request.headers.get("X-Correlation-Id")
    if correlation_id:
        request.state.correlation_id = correlation_id
        return correlation_id

    generated = f"req-{uuid4()}"
    request.state.correlation_id = generated
    return generated


def get_token_codec(settings: Annotated[Settings, Depends(get_settings)]) -> TokenCodec:
    return JwtTokenCodec(
        settings.jwt_secret,
        algorithm=settings.jwt_algorithm,
        ttl=timedelta(hours=settings.token_ttl_hours),
    )


def get_access_policy(request: Request) -> AccessPolicy:
    return getattr(request.app.state, "access_policy", None) or AnyAuthenticatedPrincipal()


def principal_from_authorization(authorization: str | None, codec: TokenCodec) -> AuthPrincipal | None:
    """Parse an ``Authorization`` header value; ``None`` unless it carries a valid bearer token."""
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme != "Bearer" or not token.strip():
        return None
    return codec.verify(token.strip())


async def get_authenticated_principal(
    request: Request,
    credentials: Annotated[HTTPAuthorizationCredentials | None, Security(bearer_scheme)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthPrincipal:
    """Validate bearer token and attach the principal to request context."""
    correlation_id = _request_correlation_id(request)
    safe_correlation_id = safe_log_identifier(correlation_id, prefix="cid")
    if credentials is None or credentials.scheme != "Bearer" or not credentials.credentials:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=invalid_or_missing_bearer",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise _auth_error("Unauthorized")

    principal = codec.verify(credentials.credentials)
    if principal is None:
        logger.warning(
            "auth.rejected correlation_id=%s method=%s path=%s reason=token_verification_failed",
            safe_correlation_id,
            request.method,
            request.url.path,
        )
        raise _auth_error("Unauthorized")

    logger.info(
        "auth.accepted correlation_id=%s method=%s path=%s principal_id=%s",
        safe_correlation_id,
        request.method,
        request.url.path,
        safe_log_identifier(principal.user_id, prefix="pid"),
    )
    request.state.auth_principal = principal
    return principal


def require_access(resource: Resource, action: Action) -> Callable[..., Awaitable[AuthPrincipal]]:
    """Build a dependency that authenticates and then consults the access policy."""

    async def dependency(
        request: Request,
        principal: Annotated[AuthPrincipal, Depends(get_authenticated_principal)],
        policy: Annotated[AccessPolicy, Depends(get_access_policy)],
    ) -> AuthPrincipal:
        if not policy.is_allowed(principal, resource, action):
            logger.warning(
                "auth.forbidden correlation_id=%s principal_id=%s resource=%s action=%s",
                safe_log_identifier(_request_correlation_id(request), prefix="cid"),
                safe_log_identifier(principal.user_id, prefix="pid"),
                resource.value,
                action.value,
            )
            raise ApiError(status_code=403, code="FORBIDDEN", message="Forbidden")
        return principal

    return dependency


def get_store(request: Request) -> InMemoryStore:
    return request.app.state.store


def get_auth_service(
    store: Annotated[InMemoryStore, Depends(get_store)],
    codec: Annotated[TokenCodec, Depends(get_token_codec)],
) -> AuthService:
    return AuthService(store, codec)


def get_screen_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> ScreenService:
    return ScreenService(store)


def get_playlist_service(store: Annotated[InMemoryStore, Depends(get_store)]) -> PlaylistService:
    return PlaylistService(store)
