"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from fridge_planner.adapters.foodsafety_client import HttpxFoodSafetyClient
from fridge_planner.adapters.openai_text_client import OpenAITextClient
from fridge_planner.adapters.openfoodfacts_client import HttpxOpenFoodFactsClient
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
from fridge_planner.config import Settings
from fridge_planner.services.auth import AuthService
from fridge_planner.services.barcode import BarcodeService
from fridge_planner.services.cache import InMemoryCache, SingleFlightCache
from fridge_planner.services.generation import GenerationService
from fridge_planner.services.inventory import InventoryService
from fridge_planner.services.meal_plans import MealPlanService
from fridge_planner.services.receipts import ReceiptScanService
from fridge_planner.services.recipe_corpus import RecipeCorpusService
from fridge_planner.services.recommendations import RecommendationService
from fridge_planner.services.saved_recipes import SavedRecipeService
from fridge_planner.services.shopping import ShoppingService


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    auth_service: AuthService
    inventory_service: InventoryService
    shopping_service: ShoppingService
    meal_plan_service: MealPlanService
    saved_recipe_service: SavedRecipeService
    corpus_service: RecipeCorpusService
    recommendation_service: RecommendationService
    receipt_service: ReceiptScanService
    barcode_service: BarcodeService
    close_resources: Callable[[], Awaitable[None]]


def build_container(settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    supabase_client = create_client(
        resolved_settings.supabase_url, resolved_settings.supabase_service_key
    )
    text_client = (
        OpenAITextClient.create(
            api_key=resolved_settings.openai_api_key,
            model=resolved_settings.openai_model,
            reasoning_effort=resolved_settings.openai_reasoning_effort,
            store=resolved_settings.openai_store,
        )
        if resolved_settings.openai_api_key
        else None
    )
    generation_service = GenerationService(
        client=text_client,
        retry_attempts=resolved_settings.ai_retry_attempts,
        retry_backoff_seconds=resolved_settings.ai_retry_backoff_seconds,
        timeout_seconds=resolved_settings.ai_timeout_seconds,
        malformed_output_retries=resolved_settings.malformed_output_retries,
    )
    foodsafety_client = HttpxFoodSafetyClient.create(
        api_key=resolved_settings.foodsafety_api_key,
        base_url=resolved_settings.foodsafety_base_url,
    )
    corpus_service = RecipeCorpusService(
        client=foodsafety_client,
        cache=SingleFlightCache(InMemoryCache()),
        corpus_size=resolved_settings.recipe_corpus_size,
        ttl_seconds=resolved_settings.recipe_corpus_ttl_seconds,
    )
    openfoodfacts_client = HttpxOpenFoodFactsClient.create(
        resolved_settings.openfoodfacts_base_url
    )
    inventory_service = InventoryService(SupabaseInventoryRepository(supabase_client))

    async def close_resources() -> None:
        await foodsafety_client.close()
        await openfoodfacts_client.close()
        if text_client is not None:
            await text_client.close()

    return AppContainer(
        settings=resolved_settings,
        auth_service=AuthService(SupabaseAuthGateway(supabase_client)),
        inventory_service=inventory_service,
        shopping_service=ShoppingService(SupabaseShoppingRepository(supabase_client)),
        meal_plan_service=MealPlanService(
            repository=SupabaseMealPlanRepository(supabase_client),
            inventory_service=inventory_service,
            generation_service=generation_service,
        ),
        saved_recipe_service=SavedRecipeService(
            SupabaseSavedRecipeRepository(supabase_client)
        ),
        corpus_service=corpus_service,
        recommendation_service=RecommendationService(
            generation_service=generation_service,
            corpus_service=corpus_service,
        ),
        receipt_service=ReceiptScanService(generation_service),
        barcode_service=BarcodeService(openfoodfacts_client),
        close_resources=close_resources,
    )
