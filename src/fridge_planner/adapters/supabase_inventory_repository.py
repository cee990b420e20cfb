"""Supabase repository for fridges and ingredients."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fridge_planner.adapters.supabase_rows import parse_date, parse_datetime, to_row
from fridge_planner.domain.inventory import (
    Fridge,
    FridgeKind,
    Ingredient,
    coerce_category,
    coerce_unit,
)
from fridge_planner.services.inventory import InventoryRepository


@dataclass
class SupabaseInventoryRepository(InventoryRepository):
    """Supabase-backed repository for fridges and ingredients."""

    client: Client

    def list_fridges(self, user_id: UUID) -> list[Fridge]:
        """Return the user's fridges in creation order."""
        response = (
            self.client.table("fridges")
            .select("*")
            .eq("user_id", str(user_id))
            .order("created_at")
            .execute()
        )
        return [_parse_fridge(row) for row in response.data or []]

    def create_fridge(self, user_id: UUID, name: str, kind: FridgeKind) -> Fridge:
        """Create a fridge and return it."""
        response = (
            self.client.table("fridges")
            .insert({"user_id": str(user_id), "name": name, "type": kind.value})
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to create fridge")
        return _parse_fridge(response.data[0])

    def list_ingredients(self, fridge_ids: list[UUID]) -> list[Ingredient]:
        """Return ingredients stored in any of the given fridges."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .in_("fridge_id", [str(fridge_id) for fridge_id in fridge_ids])
            .order("expiry_date")
            .execute()
        )
        return [_parse_ingredient(row) for row in response.data or []]

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""
        response = (
            self.client.table("ingredients")
            .select("*")
            .eq("id", str(ingredient_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_ingredient(response.data[0])

    def create_ingredient(self, payload: dict[str, object]) -> Ingredient:
        """Create an ingredient and return it."""
        response = self.client.table("ingredients").insert(to_row(payload)).execute()
        if not response.data:
            raise RuntimeError("Failed to create ingredient")
        return _parse_ingredient(response.data[0])

    def update_ingredient(
        self, ingredient_id: UUID, payload: dict[str, object]
    ) -> Ingredient:
        """Update an ingredient and return it."""
        response = (
            self.client.table("ingredients")
            .update(to_row(payload))
            .eq("id", str(ingredient_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update ingredient")
        return _parse_ingredient(response.data[0])

    def delete_ingredients(self, ingredient_ids: list[UUID]) -> None:
        """Delete ingredients by id."""
        self.client.table("ingredients").delete().in_(
            "id", [str(ingredient_id) for ingredient_id in ingredient_ids]
        ).execute()


def _parse_fridge(row: dict[str, object]) -> Fridge:
    """Parse a fridge row into a domain model."""
    return Fridge(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name", "")),
        kind=FridgeKind(row.get("type") or FridgeKind.REFRIGERATOR),
        created_at=parse_datetime(row.get("created_at")),
    )


def _parse_ingredient(row: dict[str, object]) -> Ingredient:
    """Parse an ingredient row into a domain model."""
    return Ingredient(
        id=UUID(row["id"]),
        fridge_id=UUID(row["fridge_id"]),
        name=str(row.get("name", "")),
        category=coerce_category(row.get("category")),
        quantity=float(row.get("quantity") or 0),
        unit=coerce_unit(row.get("unit")),
        purchase_date=parse_date(row.get("purchase_date")),
        expiry_date=date.fromisoformat(str(row["expiry_date"])[:10]),
        barcode=row.get("barcode") or None,
        memo=row.get("memo") or None,
        created_at=parse_datetime(row.get("created_at")),
    )
