"""Pydantic models for HTTP request payloads."""

from datetime import date as Date
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field

from fridge_planner.domain.inventory import Category, FridgeKind, Unit
from fridge_planner.domain.meal_plans import IngredientHint, MealSlot
from fridge_planner.domain.recipes import SavedRecipeSource
from fridge_planner.services.recommendations import RecipeTheme


class CamelModel(BaseModel):
    """Base model accepting both camelCase aliases and field names."""

    model_config = ConfigDict(populate_by_name=True)


class OwnedIngredientPayload(BaseModel):
    """Ingredient sent with a recommendation request."""

    name: str
    quantity: float | None = None
    unit: str | None = None
    dday: int | None = None


class RecommendRequest(CamelModel):
    """Body of POST /recipes/recommend."""

    ingredients: list[OwnedIngredientPayload] = Field(default_factory=list)
    mode: str = "general"
    must_use: list[str] = Field(default_factory=list, alias="mustUse")
    theme: RecipeTheme | None = None


class PlannerSuggestRequest(BaseModel):
    """Body of POST /planner/suggest."""

    date: Date


class ShoppingAddEntry(BaseModel):
    """Missing ingredient to put on the shopping list."""

    name: str
    quantity: str | None = None


class ShoppingAddRequest(CamelModel):
    """Body of POST /shopping/add."""

    items: list[ShoppingAddEntry] = Field(default_factory=list)
    recipe_id: str | None = Field(default=None, alias="recipeId")


class ShoppingItemCreate(CamelModel):
    """Body for adding a single shopping item."""

    name: str
    quantity: float = Field(default=1, gt=0)
    unit: str = Unit.PIECE.value
    recipe_id: str | None = Field(default=None, alias="recipeId")


class ShoppingItemToggle(BaseModel):
    """Body for checking or unchecking a shopping item."""

    checked: bool


class FridgeCreate(BaseModel):
    """Body for creating a fridge."""

    name: str
    type: FridgeKind = FridgeKind.REFRIGERATOR


class IngredientCreate(CamelModel):
    """Body for adding an ingredient."""

    fridge_id: UUID = Field(alias="fridgeId")
    name: str = Field(min_length=1)
    category: Category = Category.OTHER
    quantity: float = Field(default=1, ge=0)
    unit: Unit = Unit.PIECE
    purchase_date: Date | None = Field(default=None, alias="purchaseDate")
    expiry_date: Date = Field(alias="expiryDate")
    barcode: str | None = None
    memo: str | None = None


class IngredientUpdate(CamelModel):
    """Body for a partial ingredient update."""

    name: str | None = Field(default=None, min_length=1)
    category: Category | None = None
    quantity: float | None = Field(default=None, ge=0)
    unit: Unit | None = None
    expiry_date: Date | None = Field(default=None, alias="expiryDate")
    memo: str | None = None


class MealPlanUpsert(CamelModel):
    """Body for creating or replacing a planned meal."""

    date: Date
    meal_type: MealSlot = Field(alias="mealType")
    title: str
    ingredients: list[IngredientHint] = Field(default_factory=list)
    memo: str | None = None


class SavedRecipeCreate(CamelModel):
    """Body for saving a recipe."""

    title: str
    source: SavedRecipeSource
    source_id: str | None = Field(default=None, alias="sourceId")
    content: dict[str, object] = Field(default_factory=dict)
