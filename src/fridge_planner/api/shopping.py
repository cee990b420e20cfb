"""Shopping list endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from fridge_planner.api.dependencies import optional_user, require_user
from fridge_planner.api.models import (
    ShoppingAddRequest,
    ShoppingItemCreate,
    ShoppingItemToggle,
)
from fridge_planner.errors import AuthorizationError, InvalidRequestError
from fridge_planner.services.shopping import EMPTY_ITEMS_MESSAGE, MissingIngredient

if TYPE_CHECKING:
    from fridge_planner.containers import AppContainer
    from fridge_planner.domain.shopping import ShoppingItem

router = APIRouter(prefix="/shopping", tags=["shopping"])


@router.post("/add")
async def add_missing_ingredients(
    body: ShoppingAddRequest,
    request: Request,
    user_id: UUID | None = Depends(optional_user),
) -> dict[str, object]:
    """Put a recipe's missing ingredients on the shopping list."""
    if not body.items:
        raise InvalidRequestError(EMPTY_ITEMS_MESSAGE)
    if user_id is None:
        raise AuthorizationError()
    container: AppContainer = request.app.state.container
    created = container.shopping_service.add_missing(
        user_id,
        [MissingIngredient(name=item.name, quantity=item.quantity) for item in body.items],
        recipe_id=body.recipe_id,
    )
    return {"success": True, "count": len(created)}


@router.get("")
async def list_shopping_items(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's shopping list."""
    container: AppContainer = request.app.state.container
    items = container.shopping_service.list_items(user_id)
    return {"items": [_item_json(item) for item in items]}


@router.post("/items", status_code=status.HTTP_201_CREATED)
async def add_shopping_item(
    body: ShoppingItemCreate, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Add a single item to the shopping list."""
    container: AppContainer = request.app.state.container
    item = container.shopping_service.add_item(
        user_id,
        body.name,
        quantity=body.quantity,
        unit=body.unit,
        recipe_id=body.recipe_id,
    )
    return _item_json(item)


@router.patch("/items/{item_id}")
async def toggle_shopping_item(
    item_id: UUID,
    body: ShoppingItemToggle,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Check or uncheck an item."""
    container: AppContainer = request.app.state.container
    item = container.shopping_service.set_checked(user_id, item_id, body.checked)
    return _item_json(item)


@router.delete("/items/{item_id}")
async def delete_shopping_item(
    item_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Delete an item."""
    container: AppContainer = request.app.state.container
    container.shopping_service.delete_item(user_id, item_id)
    return {"success": True}


@router.delete("/checked")
async def clear_checked_items(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Remove every checked item."""
    container: AppContainer = request.app.state.container
    removed = container.shopping_service.clear_checked(user_id)
    return {"success": True, "count": removed}


def _item_json(item: ShoppingItem) -> dict[str, object]:
    return {
        "id": str(item.id),
        "name": item.name,
        "quantity": item.quantity,
        "unit": item.unit,
        "checked": item.checked,
        "recipeId": item.recipe_id,
        "createdAt": item.created_at.isoformat() if item.created_at else None,
    }
