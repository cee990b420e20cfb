"""Recipe models: public corpus entries, generated recipes, saved recipes."""

from dataclasses import dataclass, field
from datetime import datetime
from enum import StrEnum
from uuid import UUID

from pydantic import BaseModel, ConfigDict, Field, field_validator


class Provenance(StrEnum):
    """Where a generated recipe came from."""

    PUBLIC_DB = "public_db"
    AI_GENERATED = "ai_generated"


class SavedRecipeSource(StrEnum):
    """Origin of a saved recipe."""

    API = "api"
    AI = "ai"
    MANUAL = "manual"


@dataclass(frozen=True)
class RecipeStep:
    """One instruction step of a public recipe."""

    text: str
    image: str | None = None


@dataclass(frozen=True)
class PublicRecipe:
    """Read-only entry of the public recipe corpus."""

    id: str
    name: str
    category: str
    method: str
    ingredients: str
    steps: list[RecipeStep] = field(default_factory=list)
    image: str | None = None
    tip: str | None = None
    calories: str | None = None


def _to_text(value: object) -> object:
    if isinstance(value, int | float) and not isinstance(value, bool):
        return str(value)
    return value


class RecipeIngredient(BaseModel):
    """Ingredient line of a generated recipe."""

    name: str
    quantity: str = ""
    have: bool = False

    @field_validator("quantity", mode="before")
    @classmethod
    def quantity_as_text(cls, value: object) -> object:
        return _to_text(value)


class AIRecipe(BaseModel):
    """Recipe returned by the generation service."""

    model_config = ConfigDict(populate_by_name=True)

    title: str
    time: str = ""
    difficulty: str = ""
    ingredients: list[RecipeIngredient] = Field(default_factory=list)
    steps: list[str] = Field(default_factory=list)
    tip: str = ""
    source: Provenance = Provenance.AI_GENERATED
    source_id: str | None = Field(default=None, alias="sourceId")

    @field_validator("source_id", mode="before")
    @classmethod
    def source_id_as_text(cls, value: object) -> object:
        return _to_text(value)


@dataclass(frozen=True)
class SavedRecipe:
    """A recipe bookmarked by a user."""

    id: UUID
    user_id: UUID
    title: str
    source: SavedRecipeSource
    source_id: str | None
    content: dict[str, object]
    created_at: datetime | None = None


@dataclass(frozen=True)
class RecommendationResult:
    """Generated recipes plus attribution for the public recipes used."""

    recipes: list[AIRecipe]
    public_recipes: dict[str, dict[str, object]]
    matched_public_recipes: int
    total_public_recipes: int
