"""Supabase repository for meal plans."""

from dataclasses import dataclass
from datetime import date
from uuid import UUID

from supabase import Client

from fridge_planner.adapters.supabase_rows import parse_datetime, to_row
from fridge_planner.domain.meal_plans import MealPlan, MealSlot
from fridge_planner.services.meal_plans import MealPlanRepository

_CONFLICT_COLUMNS = "user_id,date,meal_type"


@dataclass
class SupabaseMealPlanRepository(MealPlanRepository):
    """Supabase-backed repository for meal plans."""

    client: Client

    def list_plans(self, user_id: UUID, start: date, end: date) -> list[MealPlan]:
        """Return plans within the inclusive date range."""
        response = (
            self.client.table("meal_plans")
            .select("*")
            .eq("user_id", str(user_id))
            .gte("date", start.isoformat())
            .lte("date", end.isoformat())
            .order("date")
            .execute()
        )
        return [_parse_plan(row) for row in response.data or []]

    def get_plan(self, plan_id: UUID) -> MealPlan | None:
        """Return a plan by id, if present."""
        response = (
            self.client.table("meal_plans")
            .select("*")
            .eq("id", str(plan_id))
            .limit(1)
            .execute()
        )
        if not response.data:
            return None
        return _parse_plan(response.data[0])

    def upsert_plan(self, payload: dict[str, object]) -> MealPlan:
        """Insert or replace the plan for (user, date, slot)."""
        response = (
            self.client.table("meal_plans")
            .upsert(to_row(payload), on_conflict=_CONFLICT_COLUMNS)
            .execute()
        )
        if not response.data:
            raise RuntimeError("Failed to save meal plan")
        return _parse_plan(response.data[0])

    def delete_plan(self, plan_id: UUID) -> None:
        """Delete a plan."""
        self.client.table("meal_plans").delete().eq("id", str(plan_id)).execute()


def _parse_plan(row: dict[str, object]) -> MealPlan:
    """Parse a meal plan row into a domain model."""
    return MealPlan(
        id=UUID(row["id"]),
        user_id=UUID(row["user_id"]),
        date=date.fromisoformat(str(row["date"])[:10]),
        meal_type=MealSlot(row["meal_type"]),
        title=str(row.get("title", "")),
        ingredients=list(row.get("ingredients") or []),
        memo=row.get("memo") or None,
        created_at=parse_datetime(row.get("created_at")),
    )
