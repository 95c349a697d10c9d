"""Dependency container wiring for the application."""

from collections.abc import Awaitable, Callable
from dataclasses import dataclass

from supabase import create_client

from meal_composer.adapters.memory_preference_repository import (
    InMemoryPreferenceRepository,
)
from meal_composer.adapters.nutrition_api_client import HttpxNutritionApiClient
from meal_composer.adapters.supabase_preference_repository import (
    SupabasePreferenceRepository,
)
from meal_composer.app_logging import configure_logging
from meal_composer.config import Settings
from meal_composer.services.aggregation import MealAggregator
from meal_composer.services.basket import SelectionBasket
from meal_composer.services.cache import InMemoryCache
from meal_composer.services.catalog import FoodCatalogService
from meal_composer.services.meal_plan import MealPlanService
from meal_composer.services.meals import MealService
from meal_composer.services.preferences import LikedFoodRegistry, PreferenceStore
from meal_composer.services.users import UserService


@dataclass
class AppContainer:
    """Holds per-user application dependencies."""

    settings: Settings
    user_id: str
    api_client: HttpxNutritionApiClient
    liked_registry: LikedFoodRegistry
    catalog_service: FoodCatalogService
    meal_service: MealService
    meal_plan_service: MealPlanService
    user_service: UserService
    close_resources: Callable[[], Awaitable[None]]

    @property
    def basket(self) -> SelectionBasket:
        return self.meal_service.basket


def build_container(user_id: str, settings: Settings | None = None) -> AppContainer:
    """Create the default dependency container for a user."""
    resolved_settings = settings or Settings()
    configure_logging(debug=resolved_settings.debug)
    api_client = HttpxNutritionApiClient.create(
        base_url=resolved_settings.api_base_url,
        timeout_seconds=resolved_settings.request_timeout_seconds,
    )
    preference_store: PreferenceStore
    if resolved_settings.uses_supabase:
        supabase_client = create_client(
            resolved_settings.supabase_url, resolved_settings.supabase_service_key
        )
        preference_store = SupabasePreferenceRepository(supabase_client, user_id)
    else:
        preference_store = InMemoryPreferenceRepository()
    liked_registry = LikedFoodRegistry.load(preference_store)
    catalog_service = FoodCatalogService(
        client=api_client,
        registry=liked_registry,
        default_country=resolved_settings.default_country,
        default_city=resolved_settings.default_city,
    )
    basket = SelectionBasket(
        aggregator=MealAggregator(),
        default_quantity=resolved_settings.default_quantity,
    )
    meal_service = MealService(client=api_client, basket=basket)
    meal_plan_service = MealPlanService(
        client=api_client,
        cache=InMemoryCache(),
        ttl_seconds=resolved_settings.meal_plan_ttl_seconds,
    )

    async def close_resources() -> None:
        await api_client.close()

    return AppContainer(
        settings=resolved_settings,
        user_id=user_id,
        api_client=api_client,
        liked_registry=liked_registry,
        catalog_service=catalog_service,
        meal_service=meal_service,
        meal_plan_service=meal_plan_service,
        user_service=UserService(client=api_client),
        close_resources=close_resources,
    )
