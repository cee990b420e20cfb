"""Saved recipe bookmarks."""

from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fridge_planner.domain.recipes import SavedRecipe, SavedRecipeSource
from fridge_planner.errors import InvalidRequestError, NotFoundError


class SavedRecipeRepository(Protocol):
    """Persistence interface for saved recipes."""

    def list_recipes(self, user_id: UUID) -> list[SavedRecipe]:
        """Return saved recipes, newest first."""

    def get_recipe(self, recipe_id: UUID) -> SavedRecipe | None:
        """Return a saved recipe by id, if present."""

    def create_recipe(self, payload: dict[str, object]) -> SavedRecipe:
        """Insert a saved recipe and return it."""

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a saved recipe."""


@dataclass
class SavedRecipeService:
    """Application service for saved recipes."""

    repository: SavedRecipeRepository

    def list_recipes(self, user_id: UUID) -> list[SavedRecipe]:
        """Return the user's saved recipes."""
        return self.repository.list_recipes(user_id)

    def save(
        self,
        user_id: UUID,
        title: str,
        source: SavedRecipeSource,
        content: dict[str, object],
        source_id: str | None = None,
    ) -> SavedRecipe:
        """Save a recipe for later."""
        if not title.strip():
            raise InvalidRequestError("레시피 이름을 입력해주세요.")
        return self.repository.create_recipe(
            {
                "user_id": user_id,
                "title": title.strip(),
                "source": source,
                "source_id": source_id,
                "content": content,
            }
        )

    def delete(self, user_id: UUID, recipe_id: UUID) -> None:
        """Delete an owned saved recipe."""
        recipe = self.repository.get_recipe(recipe_id)
        if recipe is None or recipe.user_id != user_id:
            raise NotFoundError()
        self.repository.delete_recipe(recipe_id)
