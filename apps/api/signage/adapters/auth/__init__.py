"""Auth credential adapters."""

from .base import TokenCodec
from .jwt_codec import DEFAULT_TOKEN_TTL, JwtTokenCodec

__all__ = [
    "DEFAULT_TOKEN_TTL",
    "JwtTokenCodec",
    "TokenCodec",
]
