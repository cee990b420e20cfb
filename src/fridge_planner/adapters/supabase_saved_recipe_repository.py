"""Supabase repository for saved recipes."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fridge_planner.adapters.supabase_rows import parse_datetime, to_row
from fridge_planner.domain.recipes import SavedRecipe, SavedRecipeSource
from fridge_planner.services.saved_recipes import SavedRecipeRepository


@dataclass
class SupabaseSavedRecipeRepository(SavedRecipeRepository):
    """Supabase-backed repository for saved recipes."""

    client: Client

    def list_recipes(self, user_id: UUID) -> list[SavedRecipe]:
        """Return saved recipes, newest first."""
        response = (
            self.client.table("saved_recipes")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_recipe(row) for row in response.data or []]

    def get_recipe(self, recipe_id: UUID) -> SavedRecipe | None:
        """Return a saved recipe by id, if present."""
        response = (
            self.client.table("saved_recipes")
            .select("*")
            .eq("id", str(recipe_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_recipe(response.data[0])

    def create_recipe(self, payload: dict[str, object]) -> SavedRecipe:
        """Insert a saved recipe and return it."""
        response = self.client.table("saved_recipes").insert(to_row(payload)).execute()
        if not response.data:
            raise RuntimeError("Failed to save recipe")
        return _parse_recipe(response.data[0])

    def delete_recipe(self, recipe_id: UUID) -> None:
        """Delete a saved recipe."""
        self.client.table("saved_recipes").delete().eq("id", str(recipe_id)).execute()


def _parse_recipe(row: dict[str, object]) -> SavedRecipe:
    """Parse a saved recipe row into a domain model."""
    return SavedRecipe(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        title=str(row.get("title", "")),
        source=SavedRecipeSource(row.get("source") or SavedRecipeSource.MANUAL),
        source_id=row.get("source_id") or None,
        content=dict(row.get("content") or {}),
        created_at=parse_datetime(row.get("created_at")),
    )
