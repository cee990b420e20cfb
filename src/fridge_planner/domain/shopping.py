"""Domain models for the shopping list."""

from dataclasses import dataclass
from datetime import datetime
from uuid import UUID


@dataclass(frozen=True)
class ShoppingItem:
    """A single shopping list entry."""

    id: UUID
    user_id: UUID
    name: str
    quantity: float
    unit: str
    checked: bool
    recipe_id: str | None = None
    created_at: datetime | None = None
