"""HTTP client for the nutrition tracking backend."""

import logging
from dataclasses import dataclass
from datetime import datetime
from uuid import uuid4

import httpx

from meal_composer.adapters.api_models import (
    AISuggestionPayload,
    CreatedMealPayload,
    FoodNutritionPayload,
    FoodPayload,
    HistoryEntryPayload,
    MealDetailPayload,
    MealPlanPayload,
    UserPayload,
    decode_list,
    unwrap_list,
    unwrap_record,
)
from meal_composer.domain.meal_plan import MealPlan
from meal_composer.domain.meals import HistoryEntry, MealDetail, MealSubmission
from meal_composer.domain.nutrition import FoodProfile
from meal_composer.domain.preferences import FoodPreference
from meal_composer.domain.suggestions import FoodSuggestion
from meal_composer.domain.users import Goal, UserProfile, UserUpdate
from meal_composer.services.catalog import FoodCatalogClient
from meal_composer.services.meal_plan import MealPlanClient
from meal_composer.services.meals import MealClient
from meal_composer.services.users import UserClient

_logger = logging.getLogger(__name__)


def client_timestamp() -> str:
    """Local time without fractional seconds, as the backend expects."""
    return datetime.now().strftime("%Y-%m-%dT%H:%M:%S")


def submission_payload(submission: MealSubmission) -> dict[str, object]:
    """Serialize a meal submission to the backend's request body."""
    return {
        "user_id": _maybe_int(submission.user_id),
        "meal_name": submission.meal_type.value,
        "total_calories": submission.totals.calories,
        "total_protein": submission.totals.protein,
        "total_fat": submission.totals.fat,
        "total_carbs": submission.totals.carbs,
        "items": [
            {
                "food_id": _maybe_int(item.food_id),
                "quantity": item.quantity,
                "portion_size": item.portion_size,
                "calories": item.calories,
                "protein": item.protein,
                "fat": item.fat,
                "carbs": item.carbs,
                "food_name": item.food_name,
            }
            for item in submission.items
        ],
    }


def user_payload(profile: UserProfile) -> dict[str, object]:
    """Serialize a profile to the registration request body."""
    return {
        "name": profile.name,
        "gender": profile.gender.value,
        "age": profile.age,
        "weight": profile.weight,
        "height": profile.height,
        "activity_level": profile.activity_level.value,
        "goal": profile.goal.value if isinstance(profile.goal, Goal) else profile.goal,
        "country": profile.country,
        "city": profile.city,
        "language": profile.language.value,
    }


@dataclass
class HttpxNutritionApiClient(
    FoodCatalogClient, MealClient, MealPlanClient, UserClient
):
    """HTTPX-backed client for the nutrition tracking backend."""

    base_url: str
    http_client: httpx.AsyncClient
    timeout_seconds: float = 15

    @classmethod
    def create(
        cls, base_url: str, timeout_seconds: float = 15
    ) -> "HttpxNutritionApiClient":
        """Create a client with a managed httpx session."""
        return cls(
            base_url=base_url.rstrip("/"),
            http_client=httpx.AsyncClient(),
            timeout_seconds=timeout_seconds,
        )

    async def register_user(self, profile: UserProfile) -> UserProfile:
        """Register a user; the backend computes the daily targets."""
        payload = await self._request(
            "POST", "/users/register", json=user_payload(profile)
        )
        return UserPayload.model_validate(unwrap_record(payload)).to_domain()

    async def get_user(self, user_id: str) -> UserProfile:
        payload = await self._request("GET", f"/users/{user_id}")
        return UserPayload.model_validate(unwrap_record(payload)).to_domain()

    async def update_user(self, user_id: str, update: UserUpdate) -> UserProfile:
        """Apply a partial profile update."""
        payload = await self._request(
            "PUT", f"/users/{user_id}", json=update.changes()
        )
        return UserPayload.model_validate(unwrap_record(payload)).to_domain()

    async def list_foods(
        self,
        country: str,
        city: str,
        query: str | None = None,
        limit: int | None = None,
    ) -> list[FoodProfile]:
        """Return foods for a location, optionally filtered by a search query."""
        params: dict[str, object] = {"country": country, "city": city}
        if query:
            params["search"] = query
        if limit is not None:
            params["limit"] = limit
        payload = await self._request("GET", "/food/list", params=params)
        result = decode_list(FoodPayload, unwrap_list(payload))
        return [record.to_domain() for record in result.records]

    async def save_preference(
        self, user_id: str, food_id: str, preference: FoodPreference
    ) -> None:
        """Record a like or dislike for a food."""
        await self._request(
            "POST",
            "/ai/preferences",
            params={
                "user_id": _maybe_int(user_id),
                "food_id": _maybe_int(food_id),
                "preference": preference.value,
            },
        )

    async def estimate_nutrition(
        self, food_name: str, user_id: str, portion: float
    ) -> tuple[FoodProfile, float]:
        """Estimate macros for a free-text food at a portion size."""
        payload = await self._request(
            "GET",
            "/ai/food-nutrition",
            params={"food_name": food_name, "user_id": user_id, "portion": portion},
        )
        nutrition = FoodNutritionPayload.model_validate(payload)
        food = FoodProfile(
            id=f"custom_{uuid4().hex}",
            name=nutrition.food_name,
            description=nutrition.standard_serving,
            calories=nutrition.calories,
            protein=nutrition.protein,
            fat=nutrition.fat,
            carbs=nutrition.carbs,
            country="Custom",
            created_at=datetime.now(),
        )
        return food, nutrition.portion

    async def suggestions(self, user_id: str) -> list[FoodSuggestion]:
        """Return AI food suggestions for the user."""
        payload = await self._request(
            "GET", "/ai/suggest", params={"user_id": _maybe_int(user_id)}
        )
        result = decode_list(AISuggestionPayload, unwrap_list(payload))
        return [record.to_domain() for record in result.records]

    async def submit_meal(self, submission: MealSubmission) -> str:
        """Create a meal and return its id."""
        payload = await self._request(
            "POST", "/meals/add", json=submission_payload(submission)
        )
        return CreatedMealPayload.model_validate(payload).id

    async def list_meals(self, user_id: str) -> list[HistoryEntry]:
        """Return the user's meal history."""
        payload = await self._request("GET", f"/meals/list/{user_id}")
        result = decode_list(HistoryEntryPayload, unwrap_list(payload))
        return [record.to_domain() for record in result.records]

    async def get_meal(self, user_id: str, meal_id: str) -> MealDetail:
        """Return a logged meal with its items."""
        payload = await self._request(
            "GET", f"/meals/{meal_id}", params={"user_id": user_id}
        )
        return MealDetailPayload.model_validate(payload).to_domain()

    async def delete_meal(self, user_id: str, meal_id: str) -> None:
        """Delete a logged meal."""
        await self._request(
            "DELETE", f"/meals/{meal_id}", params={"user_id": user_id}
        )

    async def get_daily_plan(self, user_id: str) -> MealPlan:
        """Return the generated daily meal plan."""
        payload = await self._request("GET", f"/meals/daily-plan/{user_id}")
        return MealPlanPayload.model_validate(payload).to_domain()

    async def close(self) -> None:
        """Close the underlying HTTP session."""
        await self.http_client.aclose()

    async def _request(
        self,
        method: str,
        path: str,
        *,
        params: dict[str, object] | None = None,
        json: dict[str, object] | None = None,
    ) -> object:
        query = dict(params or {})
        query["client_timestamp"] = client_timestamp()
        response = await self.http_client.request(
            method,
            f"{self.base_url}{path}",
            params=query,
            json=json,
            timeout=self.timeout_seconds,
        )
        if response.is_error:
            _logger.warning(
                "Nutrition API %s %s failed with status %s",
                method,
                path,
                response.status_code,
            )
        response.raise_for_status()
        if not response.content:
            return None
        return response.json()


def _maybe_int(value: str) -> int | str:
    return int(value) if value.isdigit() else value
