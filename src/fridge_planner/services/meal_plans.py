"""Meal planner: calendar CRUD and generated daily suggestions."""

from dataclasses import dataclass
from datetime import date
from typing import Protocol
from uuid import UUID

from fridge_planner.domain.meal_plans import (
    SLOT_ORDER,
    MealPlan,
    MealSlot,
    MealSuggestion,
)
from fridge_planner.errors import InvalidRequestError, NotFoundError
from fridge_planner.services.generation import GenerationService
from fridge_planner.services.inventory import InventoryService

SUGGESTED_SLOTS = (MealSlot.BREAKFAST, MealSlot.LUNCH, MealSlot.DINNER)

SUGGESTION_ITEM_SCHEMA: dict[str, object] = {
    "type": "object",
    "properties": {
        "mealType": {"type": "string", "enum": [slot.value for slot in SUGGESTED_SLOTS]},
        "title": {"type": "string"},
        "ingredients": {
            "type": "array",
            "items": {
                "type": "object",
                "properties": {
                    "name": {"type": "string"},
                    "quantity": {"type": "string"},
                },
                "required": ["name", "quantity"],
                "additionalProperties": False,
            },
        },
    },
    "required": ["mealType", "title", "ingredients"],
    "additionalProperties": False,
}


class MealPlanRepository(Protocol):
    """Persistence interface for meal plans."""

    def list_plans(self, user_id: UUID, start: date, end: date) -> list[MealPlan]:
        """Return plans within the inclusive date range."""

    def get_plan(self, plan_id: UUID) -> MealPlan | None:
        """Return a plan by id, if present."""

    def upsert_plan(self, payload: dict[str, object]) -> MealPlan:
        """Insert or replace the plan for (user, date, slot)."""

    def delete_plan(self, plan_id: UUID) -> None:
        """Delete a plan."""


@dataclass
class MealPlanService:
    """Application service for the weekly planner."""

    repository: MealPlanRepository
    inventory_service: InventoryService
    generation_service: GenerationService

    def list_plans(self, user_id: UUID, start: date, end: date) -> list[MealPlan]:
        """Return plans in range ordered by date, then slot."""
        if end < start:
            raise InvalidRequestError("기간이 올바르지 않습니다.")
        plans = self.repository.list_plans(user_id, start, end)
        return sorted(plans, key=lambda plan: (plan.date, SLOT_ORDER[plan.meal_type]))

    def save_plan(  # noqa: PLR0913
        self,
        user_id: UUID,
        day: date,
        meal_type: MealSlot,
        title: str,
        ingredients: list[dict[str, str]] | None = None,
        memo: str | None = None,
    ) -> MealPlan:
        """Create or replace the plan for one slot of one day."""
        if not title.strip():
            raise InvalidRequestError("메뉴 이름을 입력해주세요.")
        return self.repository.upsert_plan(
            {
                "user_id": user_id,
                "date": day,
                "meal_type": meal_type,
                "title": title.strip(),
                "ingredients": ingredients or [],
                "memo": memo,
            }
        )

    def delete_plan(self, user_id: UUID, plan_id: UUID) -> None:
        """Delete an owned plan."""
        plan = self.repository.get_plan(plan_id)
        if plan is None or plan.user_id != user_id:
            raise NotFoundError()
        self.repository.delete_plan(plan_id)

    async def suggest(self, user_id: UUID | None, day: date) -> list[MealSuggestion]:
        """Suggest breakfast, lunch and dinner for a day using current holdings."""
        holdings = ""
        if user_id is not None:
            statuses = self.inventory_service.list_ingredients(user_id)
            holdings = ", ".join(
                f"{status.ingredient.name}"
                f"({status.ingredient.quantity:g}{status.ingredient.unit})"
                for status in statuses
            )
        return await self.generation_service.generate_models(
            build_suggestion_prompt(day, holdings),
            MealSuggestion,
            action="planner_suggest",
            item_schema=SUGGESTION_ITEM_SCHEMA,
        )


def build_suggestion_prompt(day: date, holdings: str) -> str:
    """Build the daily menu suggestion instruction."""
    lines = [f"{day.isoformat()} 날짜의 하루 식단을 추천해주세요."]
    if holdings:
        lines.extend(
            ["", f"현재 냉장고 재료: {holdings}", "가능하면 이 재료를 활용해주세요."]
        )
    lines.extend(
        [
            "",
            "아침, 점심, 저녁 3끼를 추천해주세요.",
            "JSON 배열만 출력하세요:",
            "[",
            '  {"mealType": "breakfast", "title": "메뉴이름", '
            '"ingredients": [{"name": "재료", "quantity": "양"}]},',
            '  {"mealType": "lunch", "title": "메뉴이름", '
            '"ingredients": [{"name": "재료", "quantity": "양"}]},',
            '  {"mealType": "dinner", "title": "메뉴이름", '
            '"ingredients": [{"name": "재료", "quantity": "양"}]}',
            "]",
            "한국 가정식 위주로, 간단하고 현실적인 메뉴로 추천해주세요.",
        ]
    )
    return "\n".join(lines)
