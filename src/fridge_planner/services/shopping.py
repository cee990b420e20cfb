"""Shopping list service."""

from collections.abc import Sequence
from dataclasses import dataclass
from typing import Protocol
from uuid import UUID

from fridge_planner.domain.inventory import Unit
from fridge_planner.domain.shopping import ShoppingItem
from fridge_planner.errors import InvalidRequestError, NotFoundError

DEFAULT_UNIT = Unit.PIECE.value
EMPTY_ITEMS_MESSAGE = "추가할 재료가 없습니다."


class ShoppingRepository(Protocol):
    """Persistence interface for shopping items."""

    def list_items(self, user_id: UUID) -> list[ShoppingItem]:
        """Return items, unchecked first, newest first."""

    def get_item(self, item_id: UUID) -> ShoppingItem | None:
        """Return an item by id, if present."""

    def create_items(self, rows: list[dict[str, object]]) -> list[ShoppingItem]:
        """Insert rows and return the created items."""

    def set_checked(self, item_id: UUID, checked: bool) -> ShoppingItem:
        """Update the checked flag and return the item."""

    def delete_item(self, item_id: UUID) -> None:
        """Delete one item."""

    def delete_checked(self, user_id: UUID) -> int:
        """Delete the user's checked items and return how many were removed."""


@dataclass(frozen=True)
class MissingIngredient:
    """Recipe ingredient the user still has to buy."""

    name: str
    quantity: str | None = None


@dataclass
class ShoppingService:
    """Application service for the shopping list."""

    repository: ShoppingRepository

    def list_items(self, user_id: UUID) -> list[ShoppingItem]:
        """Return the user's shopping list."""
        return self.repository.list_items(user_id)

    def add_item(
        self,
        user_id: UUID,
        name: str,
        quantity: float = 1,
        unit: str = DEFAULT_UNIT,
        recipe_id: str | None = None,
    ) -> ShoppingItem:
        """Add a single item."""
        if not name.strip():
            raise InvalidRequestError("항목 이름을 입력해주세요.")
        row = {
            "user_id": str(user_id),
            "name": name.strip(),
            "quantity": quantity,
            "unit": unit or DEFAULT_UNIT,
            "checked": False,
            "recipe_id": recipe_id,
        }
        return self.repository.create_items([row])[0]

    def add_missing(
        self,
        user_id: UUID,
        items: Sequence[MissingIngredient],
        recipe_id: str | None = None,
    ) -> list[ShoppingItem]:
        """Add recipe ingredients the user lacks; the quantity hint becomes the unit."""
        rows = [
            {
                "user_id": str(user_id),
                "name": item.name.strip(),
                "quantity": 1,
                "unit": item.quantity or DEFAULT_UNIT,
                "checked": False,
                "recipe_id": recipe_id,
            }
            for item in items
            if item.name.strip()
        ]
        if not rows:
            raise InvalidRequestError(EMPTY_ITEMS_MESSAGE)
        return self.repository.create_items(rows)

    def set_checked(self, user_id: UUID, item_id: UUID, checked: bool) -> ShoppingItem:
        """Mark an item as bought or not."""
        self._owned(user_id, item_id)
        return self.repository.set_checked(item_id, checked)

    def delete_item(self, user_id: UUID, item_id: UUID) -> None:
        """Delete an owned item."""
        self._owned(user_id, item_id)
        self.repository.delete_item(item_id)

    def clear_checked(self, user_id: UUID) -> int:
        """Remove every checked item."""
        return self.repository.delete_checked(user_id)

    def _owned(self, user_id: UUID, item_id: UUID) -> ShoppingItem:
        item = self.repository.get_item(item_id)
        if item is None or item.user_id != user_id:
            raise NotFoundError()
        return item
