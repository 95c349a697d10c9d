"""Pydantic models for nutrition backend payloads.

The backend is inconsistent about numeric and identifier types, so the
validators here accept ints, floats and numeric strings and normalize them
before anything reaches the domain layer.
"""

import logging
import math
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import datetime
from enum import Enum
from typing import Annotated, Generic, TypeVar

from pydantic import (
    AliasChoices,
    BaseModel,
    Field,
    ValidationError,
    field_validator,
)

from meal_composer.domain.meal_plan import MealPlan, MealPlanFood, MealPlanSection
from meal_composer.domain.meals import HistoryEntry, MealDetail, MealItemSnapshot
from meal_composer.domain.nutrition import DailyTarget, FoodProfile, NutritionValue
from meal_composer.domain.suggestions import FoodSuggestion
from meal_composer.domain.users import (
    ActivityLevel,
    Gender,
    Goal,
    Language,
    UserProfile,
)

_logger = logging.getLogger(__name__)

ModelT = TypeVar("ModelT", bound=BaseModel)

Calories = Annotated[int, Field(ge=0)]
Grams = Annotated[float, Field(ge=0, allow_inf_nan=False)]


def _lenient_int(value: object) -> object:
    if value is None:
        return 0
    if isinstance(value, bool):
        return value
    if isinstance(value, float):
        return int(value) if math.isfinite(value) else value
    if isinstance(value, str):
        try:
            return int(float(value.strip()))
        except (ValueError, OverflowError):
            return value
    return value


def _lenient_float(value: object) -> object:
    if value is None:
        return 0.0
    if isinstance(value, str):
        try:
            return float(value.strip())
        except ValueError:
            return value
    return value


def _lenient_id(value: object) -> object:
    if isinstance(value, bool):
        return value
    if isinstance(value, int):
        return str(value)
    return value


def _enum_or_default(enum_type: type[Enum], value: object, default: Enum) -> object:
    if isinstance(value, enum_type):
        return value
    try:
        return enum_type(value)
    except ValueError:
        return default


def _lenient_datetime(value: object) -> datetime | None:
    if isinstance(value, datetime):
        return value
    if not isinstance(value, str) or not value:
        return None
    try:
        return datetime.fromisoformat(value.replace("Z", "+00:00"))
    except ValueError:
        return None


class MacrosPayload(BaseModel):
    """Calories and macros as sent by the backend."""

    calories: Calories = 0
    protein: Grams = 0.0
    fat: Grams = 0.0
    carbs: Grams = 0.0

    @field_validator("calories", mode="before")
    @classmethod
    def coerce_calories(cls, value: object) -> object:
        return _lenient_int(value)

    @field_validator("protein", "fat", "carbs", mode="before")
    @classmethod
    def coerce_macros(cls, value: object) -> object:
        return _lenient_float(value)

    def macros(self) -> NutritionValue:
        return NutritionValue(
            calories=self.calories,
            protein=self.protein,
            fat=self.fat,
            carbs=self.carbs,
        )


class FoodPayload(MacrosPayload):
    """Food record from the listing and search endpoints."""

    id: str
    name: str
    description: str | None = None
    country: str = ""
    city: str | None = None
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: object) -> object:
        return _lenient_id(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def coerce_created_at(cls, value: object) -> datetime | None:
        return _lenient_datetime(value)

    def to_domain(self) -> FoodProfile:
        return FoodProfile(
            id=self.id,
            name=self.name,
            description=self.description,
            calories=self.calories,
            protein=self.protein,
            fat=self.fat,
            carbs=self.carbs,
            country=self.country,
            city=self.city,
            created_at=self.created_at,
        )


class FoodNutritionPayload(MacrosPayload):
    """Estimated nutrition for a free-text food name."""

    food_name: str
    source: str = ""
    portion: float = 100.0
    original_portion_size: float = 100.0
    standard_serving: str | None = None
    specified_quantity: str | None = None
    food_description: str | None = None

    @field_validator("portion", "original_portion_size", mode="before")
    @classmethod
    def coerce_portion(cls, value: object) -> object:
        if value is None:
            return 100.0
        return _lenient_float(value)


class HistoryEntryPayload(BaseModel):
    """Meal history row; the backend sends the id as ``id`` or ``meal_id``."""

    id: str = Field(validation_alias=AliasChoices("id", "meal_id"))
    meal_name: str
    total_calories: Calories = 0
    total_protein: Grams = 0.0
    total_fat: Grams = 0.0
    total_carbs: Grams = 0.0
    created_at: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_ids(cls, value: object) -> object:
        return _lenient_id(value)

    @field_validator("total_calories", mode="before")
    @classmethod
    def coerce_calories(cls, value: object) -> object:
        return _lenient_int(value)

    @field_validator("total_protein", "total_fat", "total_carbs", mode="before")
    @classmethod
    def coerce_macros(cls, value: object) -> object:
        return _lenient_float(value)

    def to_domain(self) -> HistoryEntry:
        return HistoryEntry(
            id=self.id,
            name=self.meal_name,
            total_calories=self.total_calories,
            total_protein=self.total_protein,
            total_fat=self.total_fat,
            total_carbs=self.total_carbs,
            created_at=self.created_at,
        )


class MealItemPayload(MacrosPayload):
    """Line item of a logged meal."""

    food_id: str
    quantity: Grams = 0.0
    portion_size: Grams = 100.0
    food_name: str | None = None

    @field_validator("food_id", mode="before")
    @classmethod
    def coerce_food_id(cls, value: object) -> object:
        return _lenient_id(value)

    @field_validator("quantity", "portion_size", mode="before")
    @classmethod
    def coerce_amounts(cls, value: object) -> object:
        return _lenient_float(value)

    def to_domain(self) -> MealItemSnapshot:
        return MealItemSnapshot(
            food_id=self.food_id,
            food_name=self.food_name or "",
            quantity=self.quantity,
            portion_size=self.portion_size,
            calories=self.calories,
            protein=self.protein,
            fat=self.fat,
            carbs=self.carbs,
        )


class MealDetailPayload(BaseModel):
    """Logged meal with items."""

    id: str
    user_id: str
    meal_name: str
    total_calories: Calories = 0
    total_protein: Grams = 0.0
    total_fat: Grams = 0.0
    total_carbs: Grams = 0.0
    created_at: str = ""
    items: list[MealItemPayload] = Field(default_factory=list)

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def coerce_ids(cls, value: object) -> object:
        return _lenient_id(value)

    @field_validator("total_calories", mode="before")
    @classmethod
    def coerce_calories(cls, value: object) -> object:
        return _lenient_int(value)

    @field_validator("total_protein", "total_fat", "total_carbs", mode="before")
    @classmethod
    def coerce_macros(cls, value: object) -> object:
        return _lenient_float(value)

    def to_domain(self) -> MealDetail:
        return MealDetail(
            id=self.id,
            user_id=self.user_id,
            name=self.meal_name,
            totals=NutritionValue(
                calories=self.total_calories,
                protein=self.total_protein,
                fat=self.total_fat,
                carbs=self.total_carbs,
            ),
            created_at=self.created_at,
            items=[item.to_domain() for item in self.items],
        )


class CreatedMealPayload(BaseModel):
    """Response of the meal creation endpoint."""

    id: str

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: object) -> object:
        return _lenient_id(value)


class AISuggestionPayload(MacrosPayload):
    """Suggested food sized to the user's remaining nutrition."""

    id: str
    user_id: str | None = None
    suggested_food: str
    portion_size: Grams | None = None
    created_at: str | None = None

    @field_validator("id", "user_id", mode="before")
    @classmethod
    def coerce_ids(cls, value: object) -> object:
        return _lenient_id(value)

    @field_validator("portion_size", mode="before")
    @classmethod
    def coerce_portion(cls, value: object) -> object:
        if value is None:
            return None
        return _lenient_float(value)

    def to_domain(self) -> FoodSuggestion:
        return FoodSuggestion(
            id=self.id,
            food_name=self.suggested_food,
            macros=self.macros(),
            user_id=self.user_id,
            portion_size=self.portion_size,
            created_at=self.created_at,
        )


class MealPlanFoodPayload(MacrosPayload):
    name: str
    quantity: str = ""

    def to_domain(self) -> MealPlanFood:
        return MealPlanFood(
            name=self.name,
            quantity=self.quantity,
            calories=self.calories,
            protein=self.protein,
            fat=self.fat,
            carbs=self.carbs,
        )


class MealPlanSectionPayload(BaseModel):
    foods: list[MealPlanFoodPayload] = Field(default_factory=list)
    totals: MacrosPayload = Field(default_factory=MacrosPayload)

    def to_domain(self) -> MealPlanSection:
        return MealPlanSection(
            foods=[food.to_domain() for food in self.foods],
            totals=self.totals.macros(),
        )


class MealPlanBodyPayload(BaseModel):
    daily_totals: MacrosPayload = Field(default_factory=MacrosPayload)
    breakfast: MealPlanSectionPayload = Field(default_factory=MealPlanSectionPayload)
    lunch: MealPlanSectionPayload = Field(default_factory=MealPlanSectionPayload)
    dinner: MealPlanSectionPayload = Field(default_factory=MealPlanSectionPayload)
    snacks: MealPlanSectionPayload = Field(default_factory=MealPlanSectionPayload)


class MealPlanPayload(BaseModel):
    """Generated daily meal plan."""

    dietary_restrictions: list[str] = Field(default_factory=list)
    meal_plan: MealPlanBodyPayload

    def to_domain(self) -> MealPlan:
        body = self.meal_plan
        return MealPlan(
            breakfast=body.breakfast.to_domain(),
            lunch=body.lunch.to_domain(),
            dinner=body.dinner.to_domain(),
            snacks=body.snacks.to_domain(),
            daily_totals=body.daily_totals.macros(),
            dietary_restrictions=list(self.dietary_restrictions),
        )


class UserPayload(BaseModel):
    """User profile with the backend-computed daily targets."""

    id: str | None = None
    name: str
    gender: Gender = Gender.MALE
    age: int = 0
    weight: Grams = 0.0
    height: Grams = 0.0
    activity_level: ActivityLevel = ActivityLevel.MEDIUM
    goal: str = Goal.MAINTAIN.value
    country: str = ""
    city: str = ""
    language: Language = Language.ENGLISH
    daily_calories: Calories = 0
    daily_protein: Grams = 0.0
    daily_fat: Grams = 0.0
    daily_carbs: Grams = 0.0
    created_at: datetime | None = None

    @field_validator("id", mode="before")
    @classmethod
    def coerce_id(cls, value: object) -> object:
        return _lenient_id(value)

    @field_validator("gender", mode="before")
    @classmethod
    def coerce_gender(cls, value: object) -> object:
        return _enum_or_default(Gender, value, Gender.MALE)

    @field_validator("activity_level", mode="before")
    @classmethod
    def coerce_activity_level(cls, value: object) -> object:
        return _enum_or_default(ActivityLevel, value, ActivityLevel.MEDIUM)

    @field_validator("language", mode="before")
    @classmethod
    def coerce_language(cls, value: object) -> object:
        return _enum_or_default(Language, value, Language.ENGLISH)

    @field_validator("age", "daily_calories", mode="before")
    @classmethod
    def coerce_ints(cls, value: object) -> object:
        return _lenient_int(value)

    @field_validator(
        "weight", "height", "daily_protein", "daily_fat", "daily_carbs", mode="before"
    )
    @classmethod
    def coerce_floats(cls, value: object) -> object:
        return _lenient_float(value)

    @field_validator("created_at", mode="before")
    @classmethod
    def coerce_created_at(cls, value: object) -> datetime | None:
        return _lenient_datetime(value)

    def to_domain(self) -> UserProfile:
        return UserProfile(
            id=self.id,
            name=self.name,
            gender=self.gender,
            age=self.age,
            weight=self.weight,
            height=self.height,
            activity_level=self.activity_level,
            goal=self.goal,
            country=self.country,
            city=self.city,
            language=self.language,
            target=DailyTarget(
                calories=self.daily_calories,
                protein=self.daily_protein,
                fat=self.daily_fat,
                carbs=self.daily_carbs,
            ),
            created_at=self.created_at,
        )


@dataclass
class DecodeFailure:
    """A record that failed validation."""

    index: int
    raw: object
    error: str


@dataclass
class DecodeResult(Generic[ModelT]):
    """Records that validated and the ones that did not."""

    records: list[ModelT] = field(default_factory=list)
    failures: list[DecodeFailure] = field(default_factory=list)

    @property
    def ok(self) -> bool:
        return not self.failures


def decode_list(model: type[ModelT], rows: Iterable[object]) -> DecodeResult[ModelT]:
    """Validate each row independently, collecting failures instead of raising."""
    result: DecodeResult[ModelT] = DecodeResult()
    for index, row in enumerate(rows):
        try:
            result.records.append(model.model_validate(row))
        except ValidationError as exc:
            result.failures.append(DecodeFailure(index=index, raw=row, error=str(exc)))
    if result.failures:
        _logger.warning(
            "Dropped %s of %s %s records that failed validation",
            len(result.failures),
            len(result.records) + len(result.failures),
            model.__name__,
        )
    return result


def unwrap_list(payload: object) -> list[object]:
    """Return the record list from a bare array or a ``{"data": [...]}`` body."""
    if isinstance(payload, list):
        return payload
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, list):
            return data
        detail = payload.get("detail")
        if isinstance(detail, str):
            raise RuntimeError(f"Nutrition API error: {detail}")
    raise RuntimeError("Unexpected list payload from nutrition API")


def unwrap_record(payload: object) -> dict[str, object]:
    """Return a single record from a bare object or a ``{"data": {...}}`` body."""
    if isinstance(payload, dict):
        data = payload.get("data")
        if isinstance(data, dict):
            return data
        detail = payload.get("detail")
        if isinstance(detail, str):
            raise RuntimeError(f"Nutrition API error: {detail}")
        return payload
    raise RuntimeError("Unexpected record payload from nutrition API")
