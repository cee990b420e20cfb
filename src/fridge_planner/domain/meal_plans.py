"""Domain models for the weekly meal planner."""

from dataclasses import dataclass, field
from datetime import date, datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field


class MealSlot(StrEnum):
    """Meal slot within a day, in display order."""

    BREAKFAST = "breakfast"
    LUNCH = "lunch"
    DINNER = "dinner"
    SNACK = "snack"


SLOT_ORDER = {slot: index for index, slot in enumerate(MealSlot)}


@dataclass(frozen=True)
class MealPlan:
    """A planned meal, unique per user, date and slot."""

    id: UUID
    user_id: UUID
    date: date
    meal_type: MealSlot
    title: str
    ingredients: list[dict[str, str]] = field(default_factory=list)
    memo: str | None = None
    created_at: datetime | None = None


class IngredientHint(BaseModel):
    """Ingredient name and free-form quantity hint."""

    name: str
    quantity: str = ""


class MealSuggestion(BaseModel):
    """Single generated meal suggestion."""

    meal_type: MealSlot = Field(alias="mealType")
    title: str
    ingredients: list[IngredientHint] = Field(default_factory=list)

    model_config = ConfigDict(populate_by_name=True)
