"""Recipe recommendation, saved recipe and receipt endpoints."""

from __future__ import annotations

from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, File, Request, UploadFile, status

from fridge_planner.api.dependencies import require_user
from fridge_planner.api.models import RecommendRequest, SavedRecipeCreate
from fridge_planner.services.recommendations import OwnedIngredient, RecommendMode

if TYPE_CHECKING:
    from fridge_planner.containers import AppContainer
    from fridge_planner.domain.recipes import RecommendationResult, SavedRecipe

router = APIRouter(tags=["recipes"])


@router.post("/recipes/recommend")
async def recommend_recipes(
    body: RecommendRequest, request: Request
) -> dict[str, object]:
    """Recommend recipes for the supplied ingredients."""
    container: AppContainer = request.app.state.container
    result = await container.recommendation_service.recommend(
        [
            OwnedIngredient(
                name=item.name, quantity=item.quantity, unit=item.unit, dday=item.dday
            )
            for item in body.ingredients
        ],
        mode=RecommendMode.URGENT if body.mode == "urgent" else RecommendMode.GENERAL,
        must_use=body.must_use,
        theme=body.theme,
    )
    return _recommendation_json(result)


@router.post("/receipt/scan")
async def scan_receipt(
    request: Request,
    image: UploadFile | None = File(default=None),
) -> dict[str, object]:
    """Extract ingredient candidates from an uploaded receipt photo."""
    container: AppContainer = request.app.state.container
    image_bytes = await image.read() if image is not None else b""
    items = await container.receipt_service.scan(image_bytes)
    return {"items": [item.model_dump(mode="json") for item in items]}


@router.get("/recipes/saved")
async def list_saved_recipes(
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return the caller's saved recipes."""
    container: AppContainer = request.app.state.container
    recipes = container.saved_recipe_service.list_recipes(user_id)
    return {"recipes": [_saved_recipe_json(recipe) for recipe in recipes]}


@router.post("/recipes/saved", status_code=status.HTTP_201_CREATED)
async def save_recipe(
    body: SavedRecipeCreate,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Save a recipe for the caller."""
    container: AppContainer = request.app.state.container
    recipe = container.saved_recipe_service.save(
        user_id,
        title=body.title,
        source=body.source,
        content=body.content,
        source_id=body.source_id,
    )
    return _saved_recipe_json(recipe)


@router.delete("/recipes/saved/{recipe_id}")
async def delete_saved_recipe(
    recipe_id: UUID,
    request: Request,
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Delete one of the caller's saved recipes."""
    container: AppContainer = request.app.state.container
    container.saved_recipe_service.delete(user_id, recipe_id)
    return {"success": True}


def _recommendation_json(result: RecommendationResult) -> dict[str, object]:
    return {
        "recipes": [
            recipe.model_dump(mode="json", by_alias=True) for recipe in result.recipes
        ],
        "publicRecipes": result.public_recipes,
        "matchedPublicRecipes": result.matched_public_recipes,
        "totalPublicRecipes": result.total_public_recipes,
    }


def _saved_recipe_json(recipe: SavedRecipe) -> dict[str, object]:
    return {
        "id": str(recipe.id),
        "title": recipe.title,
        "source": recipe.source.value,
        "sourceId": recipe.source_id,
        "content": recipe.content,
        "createdAt": recipe.created_at.isoformat() if recipe.created_at else None,
    }
