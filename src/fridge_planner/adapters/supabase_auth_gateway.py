"""Supabase Auth implementation of the auth gateway."""

import logging
from dataclasses import dataclass
from uuid import UUID

import httpx
from supabase import AuthError, Client

from fridge_planner.errors import UpstreamTransportError
from fridge_planner.services.auth import AuthGateway

_logger = logging.getLogger(__name__)


def is_rejected_token(exc: AuthError) -> bool:
    """Return True when Supabase refused the token itself (a 4xx answer)."""
    status = getattr(exc, "status", None)
    return isinstance(status, int) and 400 <= status < 500  # noqa: PLR2004


@dataclass
class SupabaseAuthGateway(AuthGateway):
    """Validates access tokens with Supabase Auth."""

    client: Client

    def get_user_id(self, access_token: str) -> UUID | None:
        """Return the user id for a valid access token.

        An invalid or expired token yields None. An unreachable or failing
        auth service raises UpstreamTransportError.
        """
        try:
            response = self.client.auth.get_user(access_token)
        except AuthError as exc:
            if is_rejected_token(exc):
                _logger.info("Rejected access token: %s", exc)
                return None
            _logger.warning("Supabase Auth failed: %s", exc)
            raise UpstreamTransportError() from exc
        except httpx.HTTPError as exc:
            _logger.warning("Supabase Auth unreachable: %s", exc)
            raise UpstreamTransportError() from exc
        user = getattr(response, "user", None)
        if user is None:
            return None
        return UUID(str(user.id))
