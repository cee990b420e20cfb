"""Shared test fixtures."""

import asyncio
from dataclasses import dataclass, field
from datetime import date
from uuid import UUID, uuid4

import pytest

from fridge_planner.adapters.foodsafety_client import RecipeCorpusClient
from fridge_planner.adapters.openfoodfacts_client import ProductLookupClient
from fridge_planner.config import Settings
from fridge_planner.containers import AppContainer
from fridge_planner.domain.inventory import (
    Fridge,
    FridgeKind,
    Ingredient,
    coerce_category,
    coerce_unit,
)
from fridge_planner.domain.meal_plans import MealPlan, MealSlot
from fridge_planner.domain.recipes import SavedRecipe, SavedRecipeSource
from fridge_planner.domain.shopping import ShoppingItem
from fridge_planner.services.auth import AuthGateway, AuthService
from fridge_planner.services.barcode import BarcodeService
from fridge_planner.services.cache import InMemoryCache, SingleFlightCache
from fridge_planner.services.generation import GenerationService, TextGenerationClient
from fridge_planner.services.inventory import InventoryRepository, InventoryService
from fridge_planner.services.meal_plans import MealPlanRepository, MealPlanService
from fridge_planner.services.receipts import ReceiptScanService
from fridge_planner.services.recipe_corpus import RecipeCorpusService
from fridge_planner.services.recommendations import RecommendationService
from fridge_planner.services.saved_recipes import (
    SavedRecipeRepository,
    SavedRecipeService,
)
from fridge_planner.services.shopping import ShoppingRepository, ShoppingService

USER_TOKEN = "user-token"


class FakeStatusError(Exception):
    """Provider error carrying an HTTP status, like SDK API errors do."""

    def __init__(self, status_code: int) -> None:
        super().__init__(f"status {status_code}")
        self.status_code = status_code


@dataclass
class FakeTextClient(TextGenerationClient):
    """Fake generation client replaying queued replies or errors."""

    replies: list[object] = field(default_factory=list)
    prompts: list[str] = field(default_factory=list)
    schemas: list[dict[str, object] | None] = field(default_factory=list)
    images: list[str | None] = field(default_factory=list)

    async def generate(
        self,
        *,
        prompt: str,
        schema: dict[str, object] | None = None,
        image_data_url: str | None = None,
    ) -> str:
        self.prompts.append(prompt)
        self.schemas.append(schema)
        self.images.append(image_data_url)
        reply = self.replies.pop(0) if self.replies else "[]"
        if isinstance(reply, BaseException):
            raise reply
        return str(reply)


def recipe_row(seq: str, name: str, parts: str, steps: list[str] | None = None):
    """Build a raw COOKRCP01 row."""
    row = {
        "RCP_SEQ": seq,
        "RCP_NM": name,
        "RCP_PAT2": "반찬",
        "RCP_WAY2": "볶기",
        "RCP_PARTS_DTLS": parts,
        "ATT_FILE_NO_MAIN": f"http://img.test/{seq}.png",
        "RCP_NA_TIP": "",
        "INFO_ENG": "200",
    }
    for index, text in enumerate(steps or ["재료를 손질한다."], start=1):
        row[f"MANUAL{index:02d}"] = f"{index}. {text}"
    return row


@dataclass
class FakeCorpusClient(RecipeCorpusClient):
    """Fake public recipe API with call counting."""

    rows: list[dict[str, str]] = field(default_factory=list)
    calls: list[tuple[int, int]] = field(default_factory=list)
    error: Exception | None = None
    delay: float = 0.0

    async def fetch_rows(self, start: int, end: int) -> list[dict[str, str]]:
        self.calls.append((start, end))
        if self.delay:
            await asyncio.sleep(self.delay)
        if self.error is not None:
            raise self.error
        return self.rows[start - 1 : end]


@dataclass
class FakeProductClient(ProductLookupClient):
    """Fake Open Food Facts client."""

    products: dict[str, dict[str, object]] = field(default_factory=dict)
    error: Exception | None = None

    async def get_product(self, barcode: str) -> dict[str, object] | None:
        if self.error is not None:
            raise self.error
        return self.products.get(barcode)


@dataclass
class FakeAuthGateway(AuthGateway):
    """Auth gateway accepting a fixed set of tokens."""

    tokens: dict[str, UUID] = field(default_factory=dict)

    def get_user_id(self, access_token: str) -> UUID | None:
        return self.tokens.get(access_token)


@dataclass
class InMemoryInventoryRepository(InventoryRepository):
    """In-memory fridge and ingredient repository for tests."""

    fridges: dict[UUID, Fridge] = field(default_factory=dict)
    ingredients: dict[UUID, Ingredient] = field(default_factory=dict)

    def list_fridges(self, user_id: UUID) -> list[Fridge]:
        return [fridge for fridge in self.fridges.values() if fridge.user_id == user_id]

    def create_fridge(self, user_id: UUID, name: str, kind: FridgeKind) -> Fridge:
        fridge = Fridge(id=uuid4(), user_id=user_id, name=name, kind=kind)
        self.fridges[fridge.id] = fridge
        return fridge

    def list_ingredients(self, fridge_ids: list[UUID]) -> list[Ingredient]:
        return [
            item for item in self.ingredients.values() if item.fridge_id in fridge_ids
        ]

    def get_ingredient(self, ingredient_id: UUID) -> Ingredient | None:
        return self.ingredients.get(ingredient_id)

    def create_ingredient(self, payload: dict[str, object]) -> Ingredient:
        ingredient = Ingredient(
            id=uuid4(),
            fridge_id=payload["fridge_id"],
            name=str(payload["name"]),
            category=coerce_category(payload.get("category")),
            quantity=float(payload.get("quantity", 1)),
            unit=coerce_unit(payload.get("unit")),
            purchase_date=payload.get("purchase_date"),
            expiry_date=payload["expiry_date"],
            barcode=payload.get("barcode"),
            memo=payload.get("memo"),
        )
        self.ingredients[ingredient.id] = ingredient
        return ingredient

    def update_ingredient(
        self, ingredient_id: UUID, payload: dict[str, object]
    ) -> Ingredient:
        current = self.ingredients[ingredient_id]
        updated = Ingredient(
            id=current.id,
            fridge_id=current.fridge_id,
            name=str(payload.get("name", current.name)),
            category=coerce_category(payload.get("category", current.category)),
            quantity=float(payload.get("quantity", current.quantity)),
            unit=coerce_unit(payload.get("unit", current.unit)),
            purchase_date=current.purchase_date,
            expiry_date=payload.get("expiry_date", current.expiry_date),
            barcode=current.barcode,
            memo=payload.get("memo", current.memo),
        )
        self.ingredients[ingredient_id] = updated
        return updated

    def delete_ingredients(self, ingredient_ids: list[UUID]) -> None:
        for ingredient_id in ingredient_ids:
            self.ingredients.pop(ingredient_id, None)

    def add(
        self, fridge_id: UUID, name: str, expiry: date, quantity: float = 1
    ) -> Ingredient:
        return self.create_ingredient(
            {
                "fridge_id": fridge_id,
                "name": name,
                "quantity": quantity,
                "unit": "개",
                "expiry_date": expiry,
            }
        )


@dataclass
class InMemoryShoppingRepository(ShoppingRepository):
    """In-memory shopping repository for tests."""

    items: dict[UUID, ShoppingItem] = field(default_factory=dict)

    def list_items(self, user_id: UUID) -> list[ShoppingItem]:
        owned = [item for item in self.items.values() if item.user_id == user_id]
        return sorted(owned, key=lambda item: item.checked)

    def get_item(self, item_id: UUID) -> ShoppingItem | None:
        return self.items.get(item_id)

    def create_items(self, rows: list[dict[str, object]]) -> list[ShoppingItem]:
        created = []
        for row in rows:
            item = ShoppingItem(
                id=uuid4(),
                user_id=UUID(str(row["user_id"])),
                name=str(row["name"]),
                quantity=float(row["quantity"]),
                unit=str(row["unit"]),
                checked=bool(row.get("checked", False)),
                recipe_id=row.get("recipe_id"),
            )
            self.items[item.id] = item
            created.append(item)
        return created

    def set_checked(self, item_id: UUID, checked: bool) -> ShoppingItem:
        current = self.items[item_id]
        updated = ShoppingItem(
            id=current.id,
            user_id=current.user_id,
            name=current.name,
            quantity=current.quantity,
            unit=current.unit,
            checked=checked,
            recipe_id=current.recipe_id,
        )
        self.items[item_id] = updated
        return updated

    def delete_item(self, item_id: UUID) -> None:
        self.items.pop(item_id, None)

    def delete_checked(self, user_id: UUID) -> int:
        doomed = [
            item.id
            for item in self.items.values()
            if item.user_id == user_id and item.checked
        ]
        for item_id in doomed:
            self.items.pop(item_id)
        return len(doomed)


@dataclass
class InMemoryMealPlanRepository(MealPlanRepository):
    """In-memory meal plan repository with (user, date, slot) upserts."""

    plans: dict[UUID, MealPlan] = field(default_factory=dict)

    def list_plans(self, user_id: UUID, start: date, end: date) -> list[MealPlan]:
        return [
            plan
            for plan in self.plans.values()
            if plan.user_id == user_id and start <= plan.date <= end
        ]

    def get_plan(self, plan_id: UUID) -> MealPlan | None:
        return self.plans.get(plan_id)

    def upsert_plan(self, payload: dict[str, object]) -> MealPlan:
        existing = next(
            (
                plan
                for plan in self.plans.values()
                if plan.user_id == payload["user_id"]
                and plan.date == payload["date"]
                and plan.meal_type == payload["meal_type"]
            ),
            None,
        )
        plan = MealPlan(
            id=existing.id if existing else uuid4(),
            user_id=payload["user_id"],
            date=payload["date"],
            meal_type=MealSlot(payload["meal_type"]),
            title=str(payload["title"]),
            ingredients=list(payload.get("ingredients") or []),
            memo=payload.get("memo"),
        )
        self.plans[plan.id] = plan
        return plan

    def delete_plan(self, plan_id: UUID) -> None:
        self.plans.pop(plan_id, None)


@dataclass
class InMemorySavedRecipeRepository(SavedRecipeRepository):
    """In-memory saved recipe repository for tests."""

    recipes: dict[UUID, SavedRecipe] = field(default_factory=dict)

    def list_recipes(self, user_id: UUID) -> list[SavedRecipe]:
        return [r for r in self.recipes.values() if r.user_id == user_id][::-1]

    def get_recipe(self, recipe_id: UUID) -> SavedRecipe | None:
        return self.recipes.get(recipe_id)

    def create_recipe(self, payload: dict[str, object]) -> SavedRecipe:
        recipe = SavedRecipe(
            id=uuid4(),
            user_id=payload["user_id"],
            title=str(payload["title"]),
            source=SavedRecipeSource(payload["source"]),
            source_id=payload.get("source_id"),
            content=dict(payload.get("content") or {}),
        )
        self.recipes[recipe.id] = recipe
        return recipe

    def delete_recipe(self, recipe_id: UUID) -> None:
        self.recipes.pop(recipe_id, None)


@pytest.fixture
def settings() -> Settings:
    return Settings(
        supabase_url="https://example.supabase.co",
        supabase_service_key="header.payload.signature",
        openai_api_key="openai-key",
    )


@pytest.fixture
def user_id() -> UUID:
    return uuid4()


@pytest.fixture
def text_client() -> FakeTextClient:
    return FakeTextClient()


@pytest.fixture
def corpus_client() -> FakeCorpusClient:
    return FakeCorpusClient(
        rows=[
            recipe_row("1", "계란말이", "계란 3개, 대파 10g, 소금 약간"),
            recipe_row("2", "우유푸딩", "우유 200ml, 설탕 20g, 계란 1개"),
            recipe_row("3", "된장찌개", "된장 1큰술, 두부 100g, 애호박 50g"),
        ]
    )


@pytest.fixture
def generation_service(text_client: FakeTextClient) -> GenerationService:
    return GenerationService(
        client=text_client, retry_backoff_seconds=0, timeout_seconds=5
    )


@pytest.fixture
def corpus_service(corpus_client: FakeCorpusClient) -> RecipeCorpusService:
    return RecipeCorpusService(
        client=corpus_client, cache=SingleFlightCache(InMemoryCache())
    )


@pytest.fixture
def inventory_repository() -> InMemoryInventoryRepository:
    return InMemoryInventoryRepository()


@pytest.fixture
def shopping_repository() -> InMemoryShoppingRepository:
    return InMemoryShoppingRepository()


@pytest.fixture
def container(  # noqa: PLR0913
    settings: Settings,
    user_id: UUID,
    generation_service: GenerationService,
    corpus_service: RecipeCorpusService,
    inventory_repository: InMemoryInventoryRepository,
    shopping_repository: InMemoryShoppingRepository,
) -> AppContainer:
    inventory_service = InventoryService(inventory_repository)

    async def close_resources() -> None:
        return None

    return AppContainer(
        settings=settings,
        auth_service=AuthService(FakeAuthGateway({USER_TOKEN: user_id})),
        inventory_service=inventory_service,
        shopping_service=ShoppingService(shopping_repository),
        meal_plan_service=MealPlanService(
            repository=InMemoryMealPlanRepository(),
            inventory_service=inventory_service,
            generation_service=generation_service,
        ),
        saved_recipe_service=SavedRecipeService(InMemorySavedRecipeRepository()),
        corpus_service=corpus_service,
        recommendation_service=RecommendationService(
            generation_service=generation_service,
            corpus_service=corpus_service,
        ),
        receipt_service=ReceiptScanService(generation_service),
        barcode_service=BarcodeService(FakeProductClient()),
        close_resources=close_resources,
    )
