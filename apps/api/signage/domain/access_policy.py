"""Resource access policies applied after bearer authentication."""

from __future__ import annotations

from abc import ABC, abstractmethod
from enum import Enum

from signage.schemas.auth import AuthPrincipal


class Resource(str, Enum):
    SCREENS = "screens"
    PLAYLISTS = "playlists"


class Action(str, Enum):
    LIST = "list"
    UPDATE = "update"
    CREATE = "create"


class AccessPolicy(ABC):
    """Decides whether an authenticated principal may act on a resource."""

    @abstractmethod
    def is_allowed(self, principal: AuthPrincipal, resource: Resource, action: Action) -> bool:
        """Return True when the principal may perform the action."""


class AnyAuthenticatedPrincipal(AccessPolicy):
    """Grants every action on every resource to any verified principal.

    No per-resource or per-role rules exist yet; swap this policy out to add them.
    """

    def is_allowed(self, principal: AuthPrincipal, resource: Resource, action: Action) -> bool:
        return True


__all__ = ["AccessPolicy", "Action", "AnyAuthenticatedPrincipal", "Resource"]
