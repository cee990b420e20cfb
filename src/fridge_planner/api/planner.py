"""Meal planner endpoints."""

from __future__ import annotations

from datetime import date
from typing import TYPE_CHECKING
from uuid import UUID  # noqa: TC003

from fastapi import APIRouter, Depends, Query, Request

from fridge_planner.api.dependencies import optional_user, require_user
from fridge_planner.api.models import MealPlanUpsert, PlannerSuggestRequest

if TYPE_CHECKING:
    from fridge_planner.containers import AppContainer
    from fridge_planner.domain.meal_plans import MealPlan

router = APIRouter(prefix="/planner", tags=["planner"])


@router.post("/suggest")
async def suggest_meals(
    body: PlannerSuggestRequest,
    request: Request,
    user_id: UUID | None = Depends(optional_user),
) -> dict[str, object]:
    """Suggest a day's meals, using the caller's holdings when signed in."""
    container: AppContainer = request.app.state.container
    suggestions = await container.meal_plan_service.suggest(user_id, body.date)
    return {
        "suggestions": [
            suggestion.model_dump(mode="json", by_alias=True)
            for suggestion in suggestions
        ]
    }


@router.get("")
async def list_meal_plans(
    request: Request,
    start: date = Query(),
    end: date = Query(),
    user_id: UUID = Depends(require_user),
) -> dict[str, object]:
    """Return planned meals between start and end, inclusive."""
    container: AppContainer = request.app.state.container
    plans = container.meal_plan_service.list_plans(user_id, start, end)
    return {"plans": [_plan_json(plan) for plan in plans]}


@router.put("")
async def save_meal_plan(
    body: MealPlanUpsert, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Create or replace the plan for one slot of one day."""
    container: AppContainer = request.app.state.container
    plan = container.meal_plan_service.save_plan(
        user_id,
        body.date,
        body.meal_type,
        body.title,
        ingredients=[hint.model_dump() for hint in body.ingredients],
        memo=body.memo,
    )
    return _plan_json(plan)


@router.delete("/{plan_id}")
async def delete_meal_plan(
    plan_id: UUID, request: Request, user_id: UUID = Depends(require_user)
) -> dict[str, object]:
    """Delete a planned meal."""
    container: AppContainer = request.app.state.container
    container.meal_plan_service.delete_plan(user_id, plan_id)
    return {"success": True}


def _plan_json(plan: MealPlan) -> dict[str, object]:
    return {
        "id": str(plan.id),
        "date": plan.date.isoformat(),
        "mealType": plan.meal_type.value,
        "title": plan.title,
        "ingredients": plan.ingredients,
        "memo": plan.memo,
    }
