"""Shared test fixtures."""

from dataclasses import dataclass, field, replace

import pytest

from meal_composer.adapters.memory_preference_repository import (
    InMemoryPreferenceRepository,
)
from meal_composer.config import Settings
from meal_composer.domain.meal_plan import MealPlan, MealPlanFood, MealPlanSection
from meal_composer.domain.meals import HistoryEntry, MealDetail, MealSubmission
from meal_composer.domain.nutrition import DailyTarget, FoodProfile, NutritionValue
from meal_composer.domain.preferences import FoodPreference
from meal_composer.domain.suggestions import FoodSuggestion
from meal_composer.domain.users import (
    ActivityLevel,
    Gender,
    UserProfile,
    UserUpdate,
)
from meal_composer.services.catalog import FoodCatalogClient
from meal_composer.services.meal_plan import MealPlanClient
from meal_composer.services.meals import MealClient
from meal_composer.services.preferences import LikedFoodRegistry
from meal_composer.services.users import UserClient


def make_food(  # noqa: PLR0913
    food_id: str = "1",
    name: str = "Chicken breast",
    calories: int = 165,
    protein: float = 31.0,
    fat: float = 3.6,
    carbs: float = 0.0,
    liked: bool = False,
) -> FoodProfile:
    return FoodProfile(
        id=food_id,
        name=name,
        calories=calories,
        protein=protein,
        fat=fat,
        carbs=carbs,
        country="Vietnam",
        city="Hanoi",
        liked=liked,
    )


def make_entry(  # noqa: PLR0913
    entry_id: str,
    created_at: str,
    calories: int = 500,
    protein: float = 30.0,
    fat: float = 10.0,
    carbs: float = 50.0,
) -> HistoryEntry:
    return HistoryEntry(
        id=entry_id,
        name="Lunch",
        total_calories=calories,
        total_protein=protein,
        total_fat=fat,
        total_carbs=carbs,
        created_at=created_at,
    )


def make_plan() -> MealPlan:
    empty = MealPlanSection(foods=[], totals=NutritionValue.zero())
    breakfast = MealPlanSection(
        foods=[
            MealPlanFood(
                name="Pho bo",
                quantity="350g",
                calories=420,
                protein=28.0,
                fat=9.5,
                carbs=55.0,
            ),
            MealPlanFood(
                name="Iced tea",
                quantity="1 glass",
                calories=5,
                protein=0.0,
                fat=0.0,
                carbs=1.0,
            ),
        ],
        totals=NutritionValue(calories=425, protein=28.0, fat=9.5, carbs=56.0),
    )
    return MealPlan(
        breakfast=breakfast,
        lunch=empty,
        dinner=empty,
        snacks=empty,
        daily_totals=NutritionValue(calories=425, protein=28.0, fat=9.5, carbs=56.0),
        dietary_restrictions=[],
    )



def make_profile(user_id: str | None = "7") -> UserProfile:
    return UserProfile(
        id=user_id,
        name="Linh",
        gender=Gender.FEMALE,
        age=29,
        weight=55.0,
        height=162.0,
        activity_level=ActivityLevel.MEDIUM,
        goal="Maintain",
        country="Vietnam",
        city="Hanoi",
        target=DailyTarget(calories=1900, protein=95.0, fat=63.0, carbs=238.0),
    )

@dataclass
class FakeCatalogClient(FoodCatalogClient):
    """Fake catalog client with in-memory foods."""

    foods: list[FoodProfile] = field(default_factory=list)
    preferences: list[tuple[str, str, FoodPreference]] = field(default_factory=list)
    calls: list[dict[str, object]] = field(default_factory=list)
    suggested: list[FoodSuggestion] = field(default_factory=list)

    async def list_foods(
        self,
        country: str,
        city: str,
        query: str | None = None,
        limit: int | None = None,
    ) -> list[FoodProfile]:
        self.calls.append(
            {"country": country, "city": city, "query": query, "limit": limit}
        )
        if query:
            return [food for food in self.foods if query.lower() in food.name.lower()]
        return list(self.foods)

    async def save_preference(
        self, user_id: str, food_id: str, preference: FoodPreference
    ) -> None:
        self.preferences.append((user_id, food_id, preference))

    async def estimate_nutrition(
        self, food_name: str, user_id: str, portion: float
    ) -> tuple[FoodProfile, float]:
        return make_food(food_id="custom_1", name=food_name), portion

    async def suggestions(self, user_id: str) -> list[FoodSuggestion]:
        return list(self.suggested)


@dataclass
class FakeMealClient(MealClient):
    """Fake meal client that records submissions."""

    history: list[HistoryEntry] = field(default_factory=list)
    submissions: list[MealSubmission] = field(default_factory=list)
    deleted: list[str] = field(default_factory=list)
    fail_submit: bool = False
    fail_list: bool = False

    async def submit_meal(self, submission: MealSubmission) -> str:
        if self.fail_submit:
            raise RuntimeError("backend unavailable")
        self.submissions.append(submission)
        meal_id = str(len(self.submissions))
        self.history.append(
            HistoryEntry(
                id=meal_id,
                name=submission.meal_type.value,
                total_calories=submission.totals.calories,
                total_protein=submission.totals.protein,
                total_fat=submission.totals.fat,
                total_carbs=submission.totals.carbs,
                created_at="2025-03-06T12:00:00.123456",
            )
        )
        return meal_id

    async def list_meals(self, user_id: str) -> list[HistoryEntry]:
        if self.fail_list:
            raise RuntimeError("history unavailable")
        return list(self.history)

    async def get_meal(self, user_id: str, meal_id: str) -> MealDetail:
        entry = next(item for item in self.history if item.id == meal_id)
        return MealDetail(
            id=entry.id,
            user_id=user_id,
            name=entry.name,
            totals=entry.totals,
            created_at=entry.created_at,
            items=[],
        )

    async def delete_meal(self, user_id: str, meal_id: str) -> None:
        self.deleted.append(meal_id)
        self.history = [entry for entry in self.history if entry.id != meal_id]


@dataclass
class FakeMealPlanClient(MealPlanClient):
    """Fake meal plan client counting fetches."""

    plan: MealPlan = field(default_factory=make_plan)
    calls: int = 0

    async def get_daily_plan(self, user_id: str) -> MealPlan:
        self.calls += 1
        return self.plan



@dataclass
class FakeUserClient(UserClient):
    """Fake user client keeping one stored profile."""

    stored: UserProfile | None = None
    updates: list[UserUpdate] = field(default_factory=list)

    async def register_user(self, profile: UserProfile) -> UserProfile:
        self.stored = replace(profile, id="7")
        return self.stored

    async def get_user(self, user_id: str) -> UserProfile:
        if self.stored is None or self.stored.id != user_id:
            raise RuntimeError("Nutrition API error: User not found")
        return self.stored

    async def update_user(self, user_id: str, update: UserUpdate) -> UserProfile:
        self.updates.append(update)
        current = await self.get_user(user_id)
        self.stored = replace(current, **update.changes())
        return self.stored

@pytest.fixture
def settings() -> Settings:
    return Settings(api_base_url="https://api.test")


@pytest.fixture
def preference_store() -> InMemoryPreferenceRepository:
    return InMemoryPreferenceRepository()


@pytest.fixture
def registry(preference_store: InMemoryPreferenceRepository) -> LikedFoodRegistry:
    return LikedFoodRegistry.load(preference_store)
