"""Fridge and ingredient inventory services."""

import logging
from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fridge_planner.domain.expiry import (
    URGENT_WITHIN_DAYS,
    ExpiryBand,
    classify,
    days_until,
    dday_label,
    sort_by_urgency,
)
from fridge_planner.domain.inventory import Fridge, FridgeKind, Ingredient
from fridge_planner.errors import InvalidRequestError, NotFoundError

_UPDATABLE_FIELDS = ("name", "category", "quantity", "unit", "expiry_date", "memo")

_logger = logging.getLogger(__name__)


class InventoryRepository(Protocol):
    """Persistence interface for fridges and their ingredients."""

    def list_fridges(self, user_id: UUID) -> list[Fridge]:
        """Return the user's fridges in creation order."""

    def create_fridge(self, user_id: UUID, name: str, kind: FridgeKind) -> Fridge:
        """Create a fridge and return it."""

    def list_ingredients(self, fridge_ids: list[UUID]) -> list[Ingredient]:
        """Return ingredients stored in any of the given fridges."""

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        """Return an ingredient by id, if present."""

    def create_ingredient(self, payload: dict[str, object]) -> Ingredient:
        """Create an ingredient and return it."""

    def update_ingredient(
        self, ingredient_id: UUID, payload: dict[str, object]
    ) -> Ingredient:
        """Update an ingredient and return it."""

    def delete_ingredients(self, ingredient_ids: list[UUID]) -> None:
        """Delete ingredients by id."""


@dataclass(frozen=True)
class IngredientStatus:
    """Ingredient together with its expiry position relative to today."""

    ingredient: Ingredient
    dday: int
    band: ExpiryBand
    label: str


@dataclass
class InventoryService:
    """Application service for fridge inventory, scoped per user."""

    repository: InventoryRepository

    def list_fridges(self, user_id: UUID) -> list[Fridge]:
        """Return the user's fridges."""
        return self.repository.list_fridges(user_id)

    def create_fridge(
        self, user_id: UUID, name: str, kind: FridgeKind = FridgeKind.REFRIGERATOR
    ) -> Fridge:
        """Create a fridge for the user."""
        if not name.strip():
            raise InvalidRequestError("냉장고 이름을 입력해주세요.")
        return self.repository.create_fridge(user_id, name.strip(), kind)

    def list_ingredients(
        self,
        user_id: UUID,
        fridge_id: UUID | None = None,
        today: date | None = None,
    ) -> list[IngredientStatus]:
        """Return the user's ingredients, most urgent first."""
        fridge_ids = self._owned_fridge_ids(user_id)
        if fridge_id is not None:
            if fridge_id not in fridge_ids:
                raise NotFoundError()
            fridge_ids = [fridge_id]
        if not fridge_ids:
            return []
        reference = today or date.today()
        ingredients = sort_by_urgency(
            self.repository.list_ingredients(fridge_ids),
            lambda item: item.expiry_date,
            reference,
        )
        return [_status(item, reference) for item in ingredients]

    def list_expiring(
        self,
        user_id: UUID,
        within_days: int = URGENT_WITHIN_DAYS,
        today: date | None = None,
    ) -> list[IngredientStatus]:
        """Return ingredients whose D-day is at most ``within_days``."""
        return [
            status
            for status in self.list_ingredients(user_id, today=today)
            if status.dday <= within_days
        ]

    def add_ingredient(self, user_id: UUID, payload: dict[str, object]) -> Ingredient:
        """Add an ingredient to one of the user's fridges."""
        fridge_id = payload.get("fridge_id")
        if fridge_id not in self._owned_fridge_ids(user_id):
            raise NotFoundError("냉장고를 찾을 수 없습니다.")
        return self.repository.create_ingredient(payload)

    def update_ingredient(
        self, user_id: UUID, ingredient_id: UUID, payload: dict[str, object]
    ) -> Ingredient:
        """Apply a partial update to an owned ingredient."""
        self._owned_ingredient(user_id, ingredient_id)
        changes = {
            key: value
            for key, value in payload.items()
            if key in _UPDATABLE_FIELDS and (value is not None or key == "memo")
        }
        if not changes:
            raise InvalidRequestError("변경할 내용이 없습니다.")
        return self.repository.update_ingredient(ingredient_id, changes)

    def delete_ingredient(self, user_id: UUID, ingredient_id: UUID) -> None:
        """Delete an owned ingredient."""
        self._owned_ingredient(user_id, ingredient_id)
        self.repository.delete_ingredients([ingredient_id])

    def purge_expired(self, user_id: UUID, today: date | None = None) -> int:
        """Delete every expired ingredient and return how many were removed."""
        expired = [
            status.ingredient.id
            for status in self.list_ingredients(user_id, today=today)
            if status.band == ExpiryBand.EXPIRED
        ]
        if expired:
            self.repository.delete_ingredients(expired)
            _logger.info("Purged expired ingredients: count=%s", len(expired))
        return len(expired)

    def _owned_fridge_ids(self, user_id: UUID) -> list[UUID]:
        return [fridge.id for fridge in self.repository.list_fridges(user_id)]

    def _owned_ingredient(self, user_id: UUID, ingredient_id: UUID) -> Ingredient:
        ingredient = self.repository.get_ingredient(ingredient_id)
        if ingredient is None or ingredient.fridge_id not in self._owned_fridge_ids(
            user_id
        ):
            raise NotFoundError()
        return ingredient


def _status(ingredient: Ingredient, today: date) -> IngredientStatus:
    dday = days_until(ingredient.expiry_date, today)
    return IngredientStatus(
        ingredient=ingredient, dday=dday, band=classify(dday), label=dday_label(dday)
    )
