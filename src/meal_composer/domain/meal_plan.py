"""Domain models for the generated daily meal plan."""

from dataclasses import dataclass

from meal_composer.domain.nutrition import NutritionValue


@dataclass(frozen=True)
class MealPlanFood:
    """Food suggested by the meal plan.

    Macros describe the suggested portion, not 100 reference units.
    """

    name: str
    quantity: str
    calories: int
    protein: float
    fat: float
    carbs: float


@dataclass(frozen=True)
class MealPlanSection:
    """Foods planned for one meal slot."""

    foods: list[MealPlanFood]
    totals: NutritionValue


@dataclass(frozen=True)
class MealPlan:
    """Daily meal plan generated for a user."""

    breakfast: MealPlanSection
    lunch: MealPlanSection
    dinner: MealPlanSection
    snacks: MealPlanSection
    daily_totals: NutritionValue
    dietary_restrictions: list[str]

    @property
    def sections(self) -> dict[str, MealPlanSection]:
        return {
            "breakfast": self.breakfast,
            "lunch": self.lunch,
            "dinner": self.dinner,
            "snacks": self.snacks,
        }
