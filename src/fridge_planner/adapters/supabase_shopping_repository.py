"""Supabase repository for shopping items."""

from dataclasses import dataclass
from uuid import UUID

from supabase import Client

from fridge_planner.adapters.supabase_rows import parse_datetime
from fridge_planner.domain.shopping import ShoppingItem
from fridge_planner.services.shopping import ShoppingRepository


@dataclass
class SupabaseShoppingRepository(ShoppingRepository):
    """Supabase-backed repository for shopping items."""

    client: Client

    def list_items(self, user_id: UUID) -> list[ShoppingItem]:
        """Return items, unchecked first, newest first."""
        response = (
            self.client.table("shopping_items")
            .select("*")
            .eq("user_id", str(user_id))
            .order("checked")
            .order("created_at", desc=True)
            .execute()
        )
        return [_parse_item(row) for row in response.data or []]

    def get_item(self, item_id: UUID) -> ShoppingItem | None:
        """Return an item by id, if present."""
        response = (
            self.client.table("shopping_items")
            .select("*")
            .eq("id", str(item_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_item(response.data[0])

    def create_items(self, rows: list[dict[str, object]]) -> list[ShoppingItem]:
        """Insert rows and return the created items."""
        response = self.client.table("shopping_items").insert(rows).execute()
        if not response.data:
            raise RuntimeError("Failed to create shopping items")
        return [_parse_item(row) for row in response.data]

    def set_checked(self, item_id: UUID, checked: bool) -> ShoppingItem:
        """Update the checked flag and return the item."""
        response = (
            self.client.table("shopping_items")
            .update({"checked": checked})
            .eq("id", str(item_id))
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to update shopping item")
        return _parse_item(response.data[0])

    def delete_item(self, item_id: UUID) -> None:
        """Delete one item."""
        self.client.table("shopping_items").delete().eq("id", str(item_id)).execute()

    def delete_checked(self, user_id: UUID) -> int:
        """Delete the user's checked items and return how many were removed."""
        response = (
            self.client.table("shopping_items")
            .delete()
            .eq("user_id", str(user_id))
            .eq("checked", True)
            .execute()
        )
        return len(response.data or [])


def _parse_item(row: dict[str, object]) -> ShoppingItem:
    """Parse a shopping row into a domain model."""
    return ShoppingItem(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        name=str(row.get("name", "")),
        quantity=float(row.get("quantity") or 0),
        unit=str(row.get("unit") or ""),
        checked=bool(row.get("checked", False)),
        recipe_id=row.get("recipe_id") or None,
        created_at=parse_datetime(row.get("created_at")),
    )
