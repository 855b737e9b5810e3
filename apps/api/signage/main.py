"""FastAPI application entrypoint."""

from __future__ import annotations

import logging

from fastapi import FastAPI, Request
from fastapi.exceptions import RequestValidationError
from fastapi.openapi.utils import get_openapi
from fastapi.responses import JSONResponse

from signage.core.config import get_settings
from signage.domain.access_policy import AccessPolicy, AnyAuthenticatedPrincipal
from signage.errors import ApiError
from signage.repositories.memory import InMemoryStore
from signage.repositories.seed import seed_demo_data
from signage.routes import auth_router, playlists_router, screens_router
from signage.routes.dependencies import get_token_codec, principal_from_authorization
from signage.schemas.error import ErrorResponse

logger = logging.getLogger(__name__)

API_PREFIX = "/api"

_OPENAPI_RESPONSE_CODES: dict[str, dict[str, set[str]]] = {
    "/api/auth/login": {"post": {"200", "400", "401"}},
    "/api/screens": {"get": {"200", "400", "401"}},
    "/api/screens/{screenId}": {"put": {"200", "400", "401", "404"}},
    "/api/playlists": {"get": {"200", "400", "401"}, "post": {"200", "400", "401"}},
}

_PROTECTED_ROUTE_NAMES: frozenset[str] = frozenset(
    {"list_screens", "update_screen", "list_playlists", "create_playlist"}
)


def _apply_contract_response_codes(schema: dict) -> None:
    """Limit documented response codes to the ones each endpoint can return."""
    for path, methods in _OPENAPI_RESPONSE_CODES.items():
        path_item = schema.get("paths", {}).get(path)
        if not path_item:
            continue

        for method, allowed_codes in methods.items():
            operation = path_item.get(method)
            if not operation:
                continue

            responses = operation.setdefault("responses", {})
            for status_code in list(responses.keys()):
                if status_code not in allowed_codes:
                    responses.pop(status_code, None)

            for status_code in sorted(allowed_codes):
                responses.setdefault(status_code, {"description": "See API contract"})


def _is_authorized(request: Request) -> bool:
    codec = get_token_codec(get_settings())
    return principal_from_authorization(request.headers.get("Authorization"), codec) is not None


def create_app(
    *,
    store: InMemoryStore | None = None,
    seed: bool = True,
    access_policy: AccessPolicy | None = None,
) -> FastAPI:
    app = FastAPI(title="Signage API", version="1.0.0")
    if store is None:
        store = InMemoryStore()
        if seed:
            seed_demo_data(store)
    app.state.store = store
    app.state.access_policy = access_policy or AnyAuthenticatedPrincipal()

    @app.exception_handler(ApiError)
    async def handle_api_error(_, exc: ApiError) -> JSONResponse:
        return JSONResponse(
            status_code=exc.status_code,
            content=exc.payload.model_dump(mode="json", exclude_none=True),
        )

    @app.exception_handler(RequestValidationError)
    async def handle_validation_error(request: Request, exc: RequestValidationError) -> JSONResponse:
        route = request.scope.get("route")
        route_name = getattr(route, "name", None)
        # Unparseable bodies are rejected before auth dependencies run; keep 401 precedence.
        if route_name in _PROTECTED_ROUTE_NAMES and not _is_authorized(request):
            payload = ErrorResponse(error="Unauthorized", code="UNAUTHORIZED")
            return JSONResponse(status_code=401, content=payload.model_dump(exclude_none=True))

        logger.info(
            "request.invalid method=%s path=%s error_count=%s",
            request.method,
            request.url.path,
            len(exc.errors()),
        )
        payload = ErrorResponse(error="Invalid request body", code="VALIDATION_ERROR")
        return JSONResponse(status_code=400, content=payload.model_dump(exclude_none=True))

    app.include_router(auth_router, prefix=API_PREFIX)
    app.include_router(screens_router, prefix=API_PREFIX)
    app.include_router(playlists_router, prefix=API_PREFIX)

    def custom_openapi() -> dict:
        if app.openapi_schema:
            return app.openapi_schema
        schema = get_openapi(
            title=app.title,
            version=app.version,
            description=app.description,
            routes=app.routes,
        )
        _apply_contract_response_codes(schema)
        app.openapi_schema = schema
        return app.openapi_schema

    app.openapi = custom_openapi

    return app


app = create_app()
