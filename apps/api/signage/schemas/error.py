"""API error response schemas."""

from typing import Any
from typing import Literal

from pydantic import BaseModel


class ErrorResponse(BaseModel):
    error: str
    code: str
    details: dict[str, Any] | None = None


class UnauthorizedError(BaseModel):
    error: str
    code: Literal["UNAUTHORIZED"]


class ValidationErrorResponse(BaseModel):
    error: str
    code: Literal["VALIDATION_ERROR"]
    details: dict[str, Any] | None = None


class NotFoundError(BaseModel):
    error: str
    code: Literal["RESOURCE_NOT_FOUND"]
