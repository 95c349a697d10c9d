"""Meal submission and history service."""

import logging
from dataclasses import dataclass, field
from datetime import date
from typing import Protocol

from meal_composer.domain.meals import (
    HistoryEntry,
    MealDetail,
    MealSubmission,
    MealType,
)
from meal_composer.domain.nutrition import DailyTarget
from meal_composer.services.aggregation import DailyNutrition
from meal_composer.services.basket import SelectionBasket

_logger = logging.getLogger(__name__)


class MealClient(Protocol):
    """Remote meal logging interface."""

    async def submit_meal(self, submission: MealSubmission) -> str:
        """Create a meal and return its id."""

    async def list_meals(self, user_id: str) -> list[HistoryEntry]:
        """Return the user's meal history."""

    async def get_meal(self, user_id: str, meal_id: str) -> MealDetail:
        """Return a logged meal with its items."""

    async def delete_meal(self, user_id: str, meal_id: str) -> None:
        """Delete a logged meal."""


@dataclass
class MealService:
    """Submits the selection basket and tracks the user's meal history."""

    client: MealClient
    basket: SelectionBasket = field(default_factory=SelectionBasket)
    history: list[HistoryEntry] = field(default_factory=list)

    async def submit(self, user_id: str, meal_type: MealType) -> str:
        """Submit the basket as a meal and clear it on success.

        The meal id is returned even when the follow-up history refresh fails;
        the stale history stays in place until the next fetch.
        """
        submission = self.basket.build_submission(user_id, meal_type)
        meal_id = await self.client.submit_meal(submission)
        _logger.info("Meal %s logged for user %s", meal_id, user_id)
        self.basket.clear()
        try:
            await self.fetch_history(user_id)
        except Exception:
            _logger.exception(
                "Failed to refresh meal history after logging meal %s", meal_id
            )
        return meal_id

    async def fetch_history(self, user_id: str) -> list[HistoryEntry]:
        """Reload the meal history from the backend."""
        self.history = await self.client.list_meals(user_id)
        return self.history

    async def delete_meal(self, user_id: str, meal_id: str) -> None:
        """Delete a meal and reload the history."""
        await self.client.delete_meal(user_id, meal_id)
        self.history = [entry for entry in self.history if entry.id != meal_id]
        await self.fetch_history(user_id)

    async def get_meal_detail(self, user_id: str, meal_id: str) -> MealDetail:
        return await self.client.get_meal(user_id, meal_id)

    def today_meals(self, reference_date: date | None = None) -> list[HistoryEntry]:
        return self.basket.aggregator.filter_today(self.history, reference_date)

    def daily_nutrition(
        self, target: DailyTarget, reference_date: date | None = None
    ) -> DailyNutrition:
        """Return today's consumed and remaining nutrition from the history."""
        return self.basket.aggregator.daily_nutrition(
            self.history, target, reference_date
        )
