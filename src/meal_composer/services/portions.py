"""Portion scaling of per-100-unit macro profiles."""

import math
from dataclasses import dataclass

from meal_composer.domain.errors import MalformedQuantityError
from meal_composer.domain.nutrition import FoodProfile, NutritionValue

REFERENCE_AMOUNT = 100.0


def validate_quantity(quantity: object) -> float:
    """Return the quantity as a float or raise MalformedQuantityError."""
    if isinstance(quantity, bool) or not isinstance(quantity, int | float):
        raise MalformedQuantityError(quantity)
    value = float(quantity)
    if not math.isfinite(value) or value < 0:
        raise MalformedQuantityError(quantity)
    return value


def round_calories(value: float) -> int:
    """Round half away from zero."""
    return int(math.copysign(math.floor(abs(value) + 0.5), value))


@dataclass(frozen=True)
class PortionScaler:
    """Scales food macros to a quantity in reference units."""

    reference_amount: float = REFERENCE_AMOUNT

    def scale(
        self, profile: FoodProfile, quantity: float, absolute: bool = False
    ) -> NutritionValue:
        """Return the macros a quantity of the food contributes.

        Absolute profiles already describe the portion, so only the quantity
        is validated.
        """
        validate_quantity(quantity)
        if absolute:
            return profile.macros
        ratio = quantity / self.reference_amount
        return NutritionValue(
            calories=round_calories(profile.calories * ratio),
            protein=profile.protein * ratio,
            fat=profile.fat * ratio,
            carbs=profile.carbs * ratio,
        )
