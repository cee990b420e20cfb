"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field
from datetime import date
from uuid import uuid4

import httpx
import pytest
from supabase import AuthError

from fridge_planner.adapters.supabase_auth_gateway import SupabaseAuthGateway
from fridge_planner.adapters.supabase_inventory_repository import (
    SupabaseInventoryRepository,
)
from fridge_planner.adapters.supabase_meal_plan_repository import (
    SupabaseMealPlanRepository,
)
from fridge_planner.adapters.supabase_saved_recipe_repository import (
    SupabaseSavedRecipeRepository,
)
from fridge_planner.adapters.supabase_shopping_repository import (
    SupabaseShoppingRepository,
)
from fridge_planner.domain.inventory import Category, FridgeKind, Unit
from fridge_planner.domain.meal_plans import MealSlot
from fridge_planner.domain.recipes import SavedRecipeSource
from fridge_planner.errors import UpstreamTransportError


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {
            "select": [],
            "insert": [],
            "update": [],
            "upsert": [],
            "delete": [],
        }
    )
    last_payload: object | None = None
    last_options: dict[str, object] = field(default_factory=dict)
    last_filters: list[tuple[str, object]] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def update(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "update"
        self.last_payload = payload
        return self

    def upsert(self, payload, **options) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "upsert"
        self.last_payload = payload
        self.last_options = options
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def gte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def lte(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def order(self, _column: str, desc: bool = False) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_inventory_repository() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    fridge_id = str(uuid4())
    ingredient_id = str(uuid4())
    fridges = client.table("fridges")
    fridges.queue(
        "select",
        [{"id": fridge_id, "user_id": str(user_id), "name": "냉동실", "type": "freezer"}],
    )
    ingredients = client.table("ingredients")
    ingredient_row = {
        "id": ingredient_id,
        "fridge_id": fridge_id,
        "name": "만두",
        "category": "냉동식품",
        "quantity": 1,
        "unit": "봉",
        "purchase_date": None,
        "expiry_date": "2025-06-01",
        "created_at": "2025-03-01T10:00:00+00:00",
    }
    ingredients.queue("insert", [ingredient_row])
    ingredients.queue("select", [ingredient_row])

    repository = SupabaseInventoryRepository(client)
    fridge = repository.list_fridges(user_id)[0]
    created = repository.create_ingredient(
        {"fridge_id": fridge.id, "name": "만두", "expiry_date": date(2025, 6, 1)}
    )
    listed = repository.list_ingredients([fridge.id])

    assert fridge.kind == FridgeKind.FREEZER
    assert ingredients.last_filters[-1] == ("fridge_id", [fridge_id])
    assert created.category == Category.FROZEN
    assert created.unit == Unit.BAG
    assert listed[0].expiry_date == date(2025, 6, 1)


def test_supabase_inventory_repository_serializes_payload() -> None:
    client = FakeSupabaseClient()
    fridge_id = uuid4()
    ingredients = client.table("ingredients")
    ingredients.queue(
        "insert",
        [
            {
                "id": str(uuid4()),
                "fridge_id": str(fridge_id),
                "name": "우유",
                "expiry_date": "2025-03-15",
            }
        ],
    )

    SupabaseInventoryRepository(client).create_ingredient(
        {"fridge_id": fridge_id, "name": "우유", "expiry_date": date(2025, 3, 15)}
    )

    assert ingredients.last_payload == {
        "fridge_id": str(fridge_id),
        "name": "우유",
        "expiry_date": "2025-03-15",
    }


def test_supabase_shopping_repository() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    items = client.table("shopping_items")
    row = {
        "id": str(uuid4()),
        "user_id": str(user_id),
        "name": "대파",
        "quantity": 1,
        "unit": "1대",
        "checked": False,
        "recipe_id": "28",
    }
    items.queue("insert", [row])
    items.queue("delete", [row, {**row, "id": str(uuid4())}])

    repository = SupabaseShoppingRepository(client)
    created = repository.create_items([{"user_id": str(user_id), "name": "대파"}])
    removed = repository.delete_checked(user_id)

    assert created[0].unit == "1대"
    assert created[0].recipe_id == "28"
    assert removed == 2
    assert ("checked", True) in items.last_filters


def test_supabase_meal_plan_repository_upserts_on_slot() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    plans = client.table("meal_plans")
    plans.queue(
        "upsert",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "date": "2025-03-10",
                "meal_type": "dinner",
                "title": "된장찌개",
                "ingredients": [{"name": "된장", "quantity": "1큰술"}],
            }
        ],
    )

    plan = SupabaseMealPlanRepository(client).upsert_plan(
        {
            "user_id": user_id,
            "date": date(2025, 3, 10),
            "meal_type": MealSlot.DINNER,
            "title": "된장찌개",
        }
    )

    assert plan.meal_type == MealSlot.DINNER
    assert plan.ingredients[0]["name"] == "된장"
    assert plans.last_options == {"on_conflict": "user_id,date,meal_type"}
    assert plans.last_payload["date"] == "2025-03-10"


def test_supabase_meal_plan_repository_filters_range() -> None:
    client = FakeSupabaseClient()
    plans = client.table("meal_plans")

    SupabaseMealPlanRepository(client).list_plans(
        uuid4(), date(2025, 3, 10), date(2025, 3, 16)
    )

    assert ("date", "2025-03-10") in plans.last_filters
    assert ("date", "2025-03-16") in plans.last_filters


def test_supabase_saved_recipe_repository() -> None:
    client = FakeSupabaseClient()
    user_id = uuid4()
    recipes = client.table("saved_recipes")
    recipes.queue(
        "insert",
        [
            {
                "id": str(uuid4()),
                "user_id": str(user_id),
                "title": "계란말이",
                "source": "api",
                "source_id": "1",
                "content": {"steps": []},
            }
        ],
    )

    recipe = SupabaseSavedRecipeRepository(client).create_recipe(
        {"user_id": user_id, "title": "계란말이", "source": SavedRecipeSource.API}
    )

    assert recipe.source == SavedRecipeSource.API
    assert recipe.content == {"steps": []}


class _AuthFailure(AuthError):
    def __init__(self, message: str, status: int | None) -> None:
        Exception.__init__(self, message)
        self.message = message
        self.status = status


@dataclass
class FakeAuth:
    user_id: object = None
    error: Exception | None = None

    def get_user(self, _token: str):  # type: ignore[no-untyped-def]
        if self.error is not None:
            raise self.error
        user = type("User", (), {"id": str(self.user_id)})()
        return type("UserResponse", (), {"user": user})()


@dataclass
class FakeAuthClient:
    auth: FakeAuth


def test_supabase_auth_gateway_resolves_user() -> None:
    user_id = uuid4()
    gateway = SupabaseAuthGateway(FakeAuthClient(FakeAuth(user_id=user_id)))

    assert gateway.get_user_id("good") == user_id


def test_supabase_auth_gateway_rejects_invalid_token() -> None:
    auth = FakeAuth(error=_AuthFailure("invalid JWT", 401))
    gateway = SupabaseAuthGateway(FakeAuthClient(auth))

    assert gateway.get_user_id("bad") is None


def test_supabase_auth_gateway_outage_is_transport_error() -> None:
    request = httpx.Request("GET", "https://example.supabase.co/auth/v1/user")
    failures = [
        _AuthFailure("service unavailable", 503),
        _AuthFailure("retryable", None),
        httpx.ConnectError("down", request=request),
    ]

    for failure in failures:
        gateway = SupabaseAuthGateway(FakeAuthClient(FakeAuth(error=failure)))
        with pytest.raises(UpstreamTransportError):
            gateway.get_user_id("token")
