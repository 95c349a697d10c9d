"""Domain models for meal composition and history."""

from dataclasses import dataclass
from enum import Enum

from meal_composer.domain.nutrition import FoodProfile, NutritionValue


class MealType(str, Enum):
    """Meal slot a submitted meal is logged under."""

    BREAKFAST = "Breakfast"
    LUNCH = "Lunch"
    DINNER = "Dinner"
    SNACK = "Snack"


@dataclass(frozen=True)
class SelectionLine:
    """A food selected for a meal with its quantity.

    When ``absolute`` is set the food's macros already describe the whole
    portion and are summed as-is.
    """

    food: FoodProfile
    quantity: float
    absolute: bool = False


@dataclass(frozen=True)
class HistoryEntry:
    """Summary of a logged meal as listed in the meal history."""

    id: str
    name: str
    total_calories: int
    total_protein: float
    total_fat: float
    total_carbs: float
    created_at: str

    @property
    def totals(self) -> NutritionValue:
        return NutritionValue(
            calories=self.total_calories,
            protein=self.total_protein,
            fat=self.total_fat,
            carbs=self.total_carbs,
        )


@dataclass(frozen=True)
class MealItemSnapshot:
    """Submitted line item with the macros it contributes."""

    food_id: str
    food_name: str
    quantity: float
    portion_size: float
    calories: int
    protein: float
    fat: float
    carbs: float


@dataclass(frozen=True)
class MealSubmission:
    """Meal handed to the submission collaborator."""

    user_id: str
    meal_type: MealType
    totals: NutritionValue
    items: list[MealItemSnapshot]


@dataclass(frozen=True)
class MealDetail:
    """Logged meal with items."""

    id: str
    user_id: str
    name: str
    totals: NutritionValue
    created_at: str
    items: list[MealItemSnapshot]
