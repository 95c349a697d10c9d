"""AI food suggestions for the remaining daily budget."""

from dataclasses import dataclass

from meal_composer.domain.nutrition import FoodProfile, NutritionValue


@dataclass(frozen=True)
class FoodSuggestion:
    """A food the backend suggests to fill the user's remaining nutrition."""

    id: str
    food_name: str
    macros: NutritionValue
    user_id: str | None = None
    portion_size: float | None = None
    created_at: str | None = None

    def to_food(self, country: str = "", city: str | None = None) -> FoodProfile:
        """Return the suggestion as a catalog food at the user's location."""
        return FoodProfile(
            id=self.id,
            name=self.food_name,
            calories=self.macros.calories,
            protein=self.macros.protein,
            fat=self.macros.fat,
            carbs=self.macros.carbs,
            country=country,
            city=city,
        )
