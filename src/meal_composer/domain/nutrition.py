"""Nutrition domain models."""

import math
from collections.abc import Iterable
from dataclasses import dataclass, field, replace
from datetime import datetime


@dataclass(frozen=True)
class NutritionValue:
    """Calories and macronutrients for a food, meal or day."""

    calories: int = 0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0

    @classmethod
    def zero(cls) -> "NutritionValue":
        """Return an all-zero value."""
        return cls(calories=0, protein=0.0, fat=0.0, carbs=0.0)

    @classmethod
    def total(cls, values: Iterable["NutritionValue"]) -> "NutritionValue":
        """Sum values component-wise."""
        result = cls.zero()
        for value in values:
            result = result + value
        return result

    def __add__(self, other: "NutritionValue") -> "NutritionValue":
        if not isinstance(other, NutritionValue):
            return NotImplemented
        return NutritionValue(
            calories=self.calories + other.calories,
            protein=self.protein + other.protein,
            fat=self.fat + other.fat,
            carbs=self.carbs + other.carbs,
        )

    def __sub__(self, other: "NutritionValue") -> "NutritionValue":
        if not isinstance(other, NutritionValue):
            return NotImplemented
        return NutritionValue(
            calories=self.calories - other.calories,
            protein=self.protein - other.protein,
            fat=self.fat - other.fat,
            carbs=self.carbs - other.carbs,
        )


@dataclass(frozen=True, eq=False)
class FoodProfile:
    """Food with macros per 100 reference units.

    Identity is the food id; ``liked`` is a display flag derived from the
    liked-food registry.
    """

    id: str
    name: str
    calories: int
    protein: float
    fat: float
    carbs: float
    description: str | None = None
    country: str = ""
    city: str | None = None
    created_at: datetime | None = None
    liked: bool = field(default=False)

    def __post_init__(self) -> None:
        for label in ("calories", "protein", "fat", "carbs"):
            value = getattr(self, label)
            if not math.isfinite(value) or value < 0:
                raise ValueError(f"{label} must be a finite non-negative number")

    def __eq__(self, other: object) -> bool:
        if not isinstance(other, FoodProfile):
            return NotImplemented
        return self.id == other.id

    def __hash__(self) -> int:
        return hash(self.id)

    @property
    def macros(self) -> NutritionValue:
        """Return the stored macro values."""
        return NutritionValue(
            calories=self.calories,
            protein=self.protein,
            fat=self.fat,
            carbs=self.carbs,
        )

    def with_liked(self, liked: bool) -> "FoodProfile":
        """Return a copy with the liked flag set."""
        if self.liked == liked:
            return self
        return replace(self, liked=liked)


@dataclass(frozen=True)
class DailyTarget:
    """A user's daily calorie and macro goals."""

    calories: int = 0
    protein: float = 0.0
    fat: float = 0.0
    carbs: float = 0.0

    def as_value(self) -> NutritionValue:
        return NutritionValue(
            calories=self.calories,
            protein=self.protein,
            fat=self.fat,
            carbs=self.carbs,
        )
