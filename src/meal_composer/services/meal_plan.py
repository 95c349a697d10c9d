"""Daily meal plan retrieval with local caching."""

import logging
from dataclasses import dataclass
from datetime import datetime
from typing import Protocol

from meal_composer.domain.meal_plan import MealPlan
from meal_composer.domain.meals import SelectionLine
from meal_composer.services.basket import SelectionBasket
from meal_composer.services.cache import Cache

_logger = logging.getLogger(__name__)


class MealPlanClient(Protocol):
    """Remote meal plan interface."""

    async def get_daily_plan(self, user_id: str) -> MealPlan:
        """Return the generated daily plan for a user."""


@dataclass
class MealPlanService:
    """Serves the daily meal plan, reusing the cached copy when present."""

    client: MealPlanClient
    cache: Cache
    ttl_seconds: int = 86400

    async def get_daily_plan(
        self, user_id: str, force_refresh: bool = False
    ) -> MealPlan:
        """Return the user's plan, fetching only when uncached or forced."""
        cache_key = _cache_key(user_id)
        if not force_refresh:
            entry = self.cache.get_entry(cache_key)
            if entry is not None and isinstance(entry.value, MealPlan):
                return entry.value
        plan = await self.client.get_daily_plan(user_id)
        self.cache.set(cache_key, plan, ttl_seconds=self.ttl_seconds)
        _logger.info("Cached daily meal plan for user %s", user_id)
        return plan

    def last_fetched_at(self, user_id: str) -> datetime | None:
        entry = self.cache.get_entry(_cache_key(user_id))
        return None if entry is None else entry.stored_at

    @staticmethod
    def add_section_to_basket(
        basket: SelectionBasket, plan: MealPlan, section: str
    ) -> list[SelectionLine]:
        """Add every food of a plan section to the basket as absolute lines."""
        try:
            planned = plan.sections[section]
        except KeyError:
            raise ValueError(f"Unknown meal plan section: {section}") from None
        return [basket.add_from_meal_plan(food) for food in planned.foods]


def _cache_key(user_id: str) -> str:
    return f"meal_plan:{user_id}"
