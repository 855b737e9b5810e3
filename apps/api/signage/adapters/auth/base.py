"""Authentication provider interfaces."""

from abc import ABC, abstractmethod

from signage.schemas.auth import AuthPrincipal


class TokenCodec(ABC):
    """Provider-neutral bearer credential interface.

    ``verify`` never raises: any failure is reported as ``None`` so callers
    branch on the absence of a principal.
    """

    @abstractmethod
    def issue(self, subject_id: str, subject_email: str) -> str:
        """Sign a time-limited credential for the given subject."""

    @abstractmethod
    def verify(self, token: str) -> AuthPrincipal | None:
        """Return the token's principal, or ``None`` if it is not valid."""


__all__ = ["TokenCodec"]
