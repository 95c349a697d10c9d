"""Selection basket for assembling a meal before submission."""

import logging
import re
from dataclasses import dataclass, field
from uuid import uuid4

from meal_composer.domain.errors import EmptyBasketError
from meal_composer.domain.meal_plan import MealPlanFood
from meal_composer.domain.meals import (
    MealItemSnapshot,
    MealSubmission,
    MealType,
    SelectionLine,
)
from meal_composer.domain.nutrition import FoodProfile, NutritionValue
from meal_composer.domain.suggestions import FoodSuggestion
from meal_composer.services.aggregation import MealAggregator
from meal_composer.services.portions import REFERENCE_AMOUNT, validate_quantity

_logger = logging.getLogger(__name__)

_QUANTITY_PATTERN = re.compile(r"\d+(?:[.,]\d+)?")


def parse_quantity_text(text: str, default: float = REFERENCE_AMOUNT) -> float:
    """Return the first number in a quantity label such as ``"150g"``."""
    match = _QUANTITY_PATTERN.search(text or "")
    if match is None:
        return default
    return float(match.group().replace(",", "."))


@dataclass
class SelectionBasket:
    """Foods and quantities selected for a single meal.

    Lines keep insertion order and each food id appears at most once.
    """

    aggregator: MealAggregator = field(default_factory=MealAggregator)
    default_quantity: float = REFERENCE_AMOUNT
    _lines: dict[str, SelectionLine] = field(default_factory=dict, init=False)

    def __len__(self) -> int:
        return len(self._lines)

    def __contains__(self, food_id: object) -> bool:
        return food_id in self._lines

    @property
    def lines(self) -> tuple[SelectionLine, ...]:
        return tuple(self._lines.values())

    @property
    def is_empty(self) -> bool:
        return not self._lines

    def get(self, food_id: str) -> SelectionLine | None:
        return self._lines.get(food_id)

    def add(
        self,
        food: FoodProfile,
        quantity: float | None = None,
        absolute: bool = False,
    ) -> SelectionLine:
        """Insert a food or update the quantity of its existing line."""
        value = validate_quantity(
            self.default_quantity if quantity is None else quantity
        )
        existing = self._lines.get(food.id)
        if existing is None:
            line = SelectionLine(food=food, quantity=value, absolute=absolute)
        else:
            line = SelectionLine(
                food=existing.food,
                quantity=value,
                absolute=existing.absolute or absolute,
            )
        self._lines[food.id] = line
        return line

    def remove(self, food_id: str) -> None:
        self._lines.pop(food_id, None)

    def update_quantity(self, food_id: str, quantity: float) -> None:
        """Change a line's quantity; absolute and unknown lines are left as is."""
        value = validate_quantity(quantity)
        line = self._lines.get(food_id)
        if line is None or line.absolute:
            return
        self._lines[food_id] = SelectionLine(
            food=line.food, quantity=value, absolute=False
        )

    def clear(self) -> None:
        self._lines.clear()

    def snapshot_totals(self) -> NutritionValue:
        """Return the live nutrition preview of the basket."""
        return self.aggregator.totalize(self._lines.values())

    def add_from_meal_plan(self, plan_food: MealPlanFood) -> SelectionLine:
        """Add a meal-plan food whose macros describe the whole portion."""
        food = FoodProfile(
            id=uuid4().hex,
            name=plan_food.name,
            calories=plan_food.calories,
            protein=plan_food.protein,
            fat=plan_food.fat,
            carbs=plan_food.carbs,
        )
        quantity = parse_quantity_text(plan_food.quantity, self.default_quantity)
        return self.add(food, quantity, absolute=True)

    def add_suggestion(
        self,
        suggestion: FoodSuggestion,
        country: str = "",
        city: str | None = None,
        quantity: float | None = None,
    ) -> SelectionLine:
        """Add an AI suggestion as a per-100 food at the user's location."""
        return self.add(suggestion.to_food(country, city), quantity)

    def add_custom_food(  # noqa: PLR0913
        self,
        name: str,
        calories: int,
        protein: float,
        fat: float,
        carbs: float,
        portion: float | None = None,
        description: str | None = None,
    ) -> SelectionLine:
        """Add a user-entered food whose macros are per 100 reference units."""
        food = FoodProfile(
            id=f"custom_{uuid4().hex}",
            name=name,
            description=description,
            calories=calories,
            protein=protein,
            fat=fat,
            carbs=carbs,
            country="Custom",
        )
        return self.add(food, portion)

    def build_submission(self, user_id: str, meal_type: MealType) -> MealSubmission:
        """Return the basket's line items and totals for submission."""
        if self.is_empty:
            raise EmptyBasketError()
        items: list[MealItemSnapshot] = []
        for line in self._lines.values():
            portion = self.aggregator.scaler.scale(
                line.food, line.quantity, line.absolute
            )
            items.append(
                MealItemSnapshot(
                    food_id=line.food.id,
                    food_name=line.food.name,
                    quantity=line.quantity,
                    portion_size=self.aggregator.scaler.reference_amount,
                    calories=portion.calories,
                    protein=portion.protein,
                    fat=portion.fat,
                    carbs=portion.carbs,
                )
            )
        totals = self.snapshot_totals()
        _logger.info(
            "Built %s submission with %s items, %s kcal",
            meal_type.value,
            len(items),
            totals.calories,
        )
        return MealSubmission(
            user_id=user_id,
            meal_type=meal_type,
            totals=totals,
            items=items,
        )
