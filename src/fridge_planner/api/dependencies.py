"""Shared FastAPI dependencies."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import Header, Request

if TYPE_CHECKING:
    from fridge_planner.containers import AppContainer


async def require_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UUID:
    """Return the authenticated user id or fail with 401."""
    container: AppContainer = request.app.state.container
    return container.auth_service.authenticate(authorization)


async def optional_user(
    request: Request, authorization: str | None = Header(default=None)
) -> UUID | None:
    """Return the authenticated user id when present."""
    container: AppContainer = request.app.state.container
    return container.auth_service.try_authenticate(authorization)
