"""Food catalog service applying liked-food ordering to listings."""

import logging
from dataclasses import dataclass
from typing import Protocol

from meal_composer.domain.nutrition import FoodProfile
from meal_composer.domain.preferences import FoodPreference
from meal_composer.domain.suggestions import FoodSuggestion
from meal_composer.services.preferences import LikedFoodRegistry

_logger = logging.getLogger(__name__)


class FoodCatalogClient(Protocol):
    """Remote food listing and preference interface."""

    async def list_foods(
        self,
        country: str,
        city: str,
        query: str | None = None,
        limit: int | None = None,
    ) -> list[FoodProfile]:
        """Return foods for a location, optionally filtered by a search query."""

    async def save_preference(
        self, user_id: str, food_id: str, preference: FoodPreference
    ) -> None:
        """Record a food preference for a user."""

    async def estimate_nutrition(
        self, food_name: str, user_id: str, portion: float
    ) -> tuple[FoodProfile, float]:
        """Return an estimated profile for a free-text food and its portion."""

    async def suggestions(self, user_id: str) -> list[FoodSuggestion]:
        """Return foods suggested for the user's remaining nutrition."""


@dataclass
class FoodCatalogService:
    """Food listing, search and preference operations."""

    client: FoodCatalogClient
    registry: LikedFoodRegistry
    default_country: str = "Vietnam"
    default_city: str = "Hanoi"

    async def list_foods(
        self, country: str | None = None, city: str | None = None
    ) -> list[FoodProfile]:
        """Return the location's foods with liked foods first."""
        foods = await self.client.list_foods(
            country or self.default_country, city or self.default_city
        )
        return self.registry.apply_and_sort(foods)

    async def search(
        self,
        query: str,
        country: str | None = None,
        city: str | None = None,
        limit: int = 10,
    ) -> list[FoodProfile]:
        """Search foods by name; an empty query returns no results."""
        if not query.strip():
            return []
        foods = await self.client.list_foods(
            country or self.default_country,
            city or self.default_city,
            query=query,
            limit=limit,
        )
        _logger.debug("Food search %r returned %s results", query, len(foods))
        return self.registry.apply_and_sort(foods)

    async def save_preference(
        self,
        user_id: str,
        food_id: str,
        preference: FoodPreference | None = None,
    ) -> FoodPreference:
        """Persist a preference remotely, then locally.

        Without an explicit preference the current liked state is flipped.
        """
        resolved = preference or FoodPreference.from_liked(
            not self.registry.is_liked(food_id)
        )
        await self.client.save_preference(user_id, food_id, resolved)
        self.registry.apply_preference(food_id, resolved)
        return resolved

    async def estimate_custom_food(
        self, food_name: str, user_id: str, portion: float = 100.0
    ) -> tuple[FoodProfile, float]:
        """Return an estimated profile for a food not in the catalog."""
        return await self.client.estimate_nutrition(food_name, user_id, portion)

    async def suggestions(self, user_id: str) -> list[FoodSuggestion]:
        """Return AI suggestions for the user's remaining daily nutrition."""
        suggestions = await self.client.suggestions(user_id)
        _logger.debug("Received %s suggestions for user %s", len(suggestions), user_id)
        return suggestions
