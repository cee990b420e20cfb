"""Resolve request credentials through the hosted auth provider."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fridge_planner.errors import AuthorizationError


class AuthGateway(Protocol):
    """Interface to the hosted auth provider."""

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for a valid access token."""


@dataclass
class AuthService:
    """Turns bearer tokens into user ids."""

    gateway: AuthGateway

    def authenticate(self, authorization: str | None) -> UUID:
        """Return the caller's user id or raise AuthorizationError."""
        token = _bearer_token(authorization)
        if token is None:
            raise AuthorizationError()
        user_id = self.gateway.get_user_id(token)
        if user_id is None:
            raise AuthorizationError()
        return user_id

    def try_authenticate(self, authorization: str | None) -> UUID | None:
        """Return the caller's user id when the request carries a valid token."""
        try:
            return self.authenticate(authorization)
        except AuthorizationError:
            return None


def _bearer_token(authorization: str | None) -> str | None:
    if not authorization:
        return None
    scheme, _, token = authorization.partition(" ")
    if scheme.lower() != "bearer" or not token.strip():
        return None
    return token.strip()
