"""Fridge, ingredient and barcode endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Request, status

from fridge_planner.api.dependencies import require_user
from fridge_planner.api.models import FridgeCreate, IngredientCreate, IngredientUpdate

if TYPE_CHECKING:
    from fridge_planner.containers import AppContainer
    from fridge_planner.domain.inventory import Fridge, Ingredient
    from fridge_planner.domain.receipts import ProductInfo
    from fridge_planner.services.inventory import IngredientStatus

router = APIRouter(tags=["inventory"])


@router.get("/fridges")
async def list_fridges(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return the caller's fridges."""
    container: AppContainer = request.app.state.container
    fridges = container.inventory_service.list_fridges(user_id)
    return {"fridges": [_fridge_json(fridge) for fridge in fridges]}


@router.post("/fridges", status_code=status.HTTP_201_CREATED)
async def create_fridge(
    body: FridgeCreate, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Create a fridge for the caller."""
    container: AppContainer = request.app.state.container
    fridge = container.inventory_service.create_fridge(user_id, body.name, body.type)
    return _fridge_json(fridge)


@router.get("/ingredients")
async def list_ingredients(
    request: Request,
    fridge_id: UUID | None = None,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return the caller's ingredients, most urgent first."""
    container: AppContainer = request.app.state.container
    statuses = container.inventory_service.list_ingredients(user_id, fridge_id)
    return {"ingredients": [_status_json(item) for item in statuses]}


@router.get("/ingredients/expiring")
async def list_expiring_ingredients(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Return ingredients that expire within the urgent window."""
    container: AppContainer = request.app.state.container
    statuses = container.inventory_service.list_expiring(user_id)
    return {"ingredients": [_status_json(item) for item in statuses]}


@router.post("/ingredients", status_code=status.HTTP_201_CREATED)
async def add_ingredient(
    body: IngredientCreate, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Add an ingredient to one of the caller's fridges."""
    container: AppContainer = request.app.state.container
    ingredient = container.inventory_service.add_ingredient(user_id, body.model_dump())
    return _ingredient_json(ingredient)


@router.patch("/ingredients/{ingredient_id}")
async def update_ingredient(
    ingredient_id: UUID,
    body: IngredientUpdate,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Apply a partial update to an ingredient."""
    container: AppContainer = request.app.state.container
    ingredient = container.inventory_service.update_ingredient(
        user_id, ingredient_id, body.model_dump(exclude_unset=True)
    )
    return _ingredient_json(ingredient)


@router.delete("/ingredients/{ingredient_id}")
async def delete_ingredient(
    ingredient_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Delete an ingredient."""
    container: AppContainer = request.app.state.container
    container.inventory_service.delete_ingredient(user_id, ingredient_id)
    return {"success": True}


@router.post("/ingredients/purge-expired")
async def purge_expired_ingredients(
    request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Delete every expired ingredient the caller owns."""
    container: AppContainer = request.app.state.container
    removed = container.inventory_service.purge_expired(user_id)
    return {"success": True, "count": removed}


@router.get("/barcode/{barcode}")
async def lookup_barcode(barcode: str, request: Request) -> dict[str, object]:
    """Resolve a barcode into an ingredient candidate."""
    container: AppContainer = request.app.state.container
    product = await container.barcode_service.lookup(barcode)
    return {"product": _product_json(product) if product else None}


def _fridge_json(fridge: Fridge) -> dict[str, object]:
    return {
        "id": str(fridge.id),
        "name": fridge.name,
        "type": fridge.kind.value,
        "createdAt": fridge.created_at.isoformat() if fridge.created_at else None,
    }


def _ingredient_json(ingredient: Ingredient) -> dict[str, object]:
    return {
        "id": str(ingredient.id),
        "fridgeId": str(ingredient.fridge_id),
        "name": ingredient.name,
        "category": ingredient.category.value,
        "quantity": ingredient.quantity,
        "unit": ingredient.unit.value,
        "purchaseDate": (
            ingredient.purchase_date.isoformat() if ingredient.purchase_date else None
        ),
        "expiryDate": ingredient.expiry_date.isoformat(),
        "barcode": ingredient.barcode,
        "memo": ingredient.memo,
    }


def _status_json(item: IngredientStatus) -> dict[str, object]:
    return {
        **_ingredient_json(item.ingredient),
        "dday": item.dday,
        "band": item.band.value,
        "label": item.label,
    }


def _product_json(product: ProductInfo) -> dict[str, object]:
    return {
        "barcode": product.barcode,
        "name": product.name,
        "brand": product.brand,
        "category": product.category.value,
        "image": product.image,
        "quantity": product.quantity,
    }
