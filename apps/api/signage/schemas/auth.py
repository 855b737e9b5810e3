"""Authentication schemas."""

from enum import Enum

from pydantic import BaseModel, Field


class UserRole(str, Enum):
    ADMIN = "ADMIN"
    USER = "USER"


class AuthPrincipal(BaseModel):
    """Normalized authenticated principal decoded from a bearer token."""

    user_id: str = Field(min_length=1)
    email: str = Field(min_length=1)


class User(BaseModel):
    """Public user view; the stored password never leaves the store."""

    id: str
    name: str
    email: str
    role: UserRole


class LoginRequest(BaseModel):
    # Optional so that missing fields surface as the login-specific 400 message.
    email: str | None = None
    password: str | None = None


class LoginResponse(BaseModel):
    token: str
    user: User
