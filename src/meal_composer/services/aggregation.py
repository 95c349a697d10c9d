"""Meal and daily nutrition aggregation."""

import logging
from collections.abc import Iterable
from dataclasses import dataclass, field
from datetime import date

from meal_composer.domain.meals import HistoryEntry, SelectionLine
from meal_composer.domain.nutrition import DailyTarget, FoodProfile, NutritionValue
from meal_composer.services.portions import PortionScaler

_logger = logging.getLogger(__name__)

LineLike = SelectionLine | tuple[FoodProfile, float, bool]


@dataclass(frozen=True)
class DailyNutrition:
    """Consumed nutrition for a day against the user's target."""

    day: date
    target: NutritionValue
    consumed: NutritionValue
    remaining: NutritionValue
    meals: list[HistoryEntry]


def parse_month_day(created_at: str) -> tuple[int, int] | None:
    """Extract (month, day) from a loosely formatted timestamp.

    Only the dash-separated date portion before any ``T`` is inspected, and
    the day is read from the first two characters of the third component.
    """
    date_part = created_at.split("T", 1)[0]
    components = date_part.split("-")
    if len(components) < 3:
        return None
    try:
        month = int(components[1])
        day = int(components[2][:2])
    except ValueError:
        return None
    return month, day


@dataclass
class MealAggregator:
    """Sums scaled line items into meal and day totals."""

    scaler: PortionScaler = field(default_factory=PortionScaler)

    def totalize(self, lines: Iterable[LineLike]) -> NutritionValue:
        """Return the summed nutrition of the given lines."""
        total = NutritionValue.zero()
        for line in lines:
            food, quantity, absolute = _unpack(line)
            total = total + self.scaler.scale(food, quantity, absolute)
        return total

    def filter_today(
        self, history: Iterable[HistoryEntry], reference_date: date | None = None
    ) -> list[HistoryEntry]:
        """Return entries logged on the reference date's month and day.

        The year is not compared. Entries with unparseable timestamps are
        skipped.
        """
        reference = reference_date or date.today()
        today: list[HistoryEntry] = []
        for entry in history:
            month_day = parse_month_day(entry.created_at)
            if month_day is None:
                _logger.debug(
                    "Skipping meal %s with unparseable timestamp %r",
                    entry.id,
                    entry.created_at,
                )
                continue
            if month_day == (reference.month, reference.day):
                today.append(entry)
        return today

    def daily_totals(
        self, history: Iterable[HistoryEntry], reference_date: date | None = None
    ) -> NutritionValue:
        """Sum the stored totals of today's entries."""
        return NutritionValue.total(
            entry.totals for entry in self.filter_today(history, reference_date)
        )

    def daily_nutrition(
        self,
        history: Iterable[HistoryEntry],
        target: DailyTarget,
        reference_date: date | None = None,
    ) -> DailyNutrition:
        """Return consumed and remaining nutrition for the reference day."""
        reference = reference_date or date.today()
        meals = self.filter_today(history, reference)
        consumed = NutritionValue.total(entry.totals for entry in meals)
        goal = target.as_value()
        return DailyNutrition(
            day=reference,
            target=goal,
            consumed=consumed,
            remaining=goal - consumed,
            meals=meals,
        )


def _unpack(line: LineLike) -> tuple[FoodProfile, float, bool]:
    if isinstance(line, SelectionLine):
        return line.food, line.quantity, line.absolute
    food, quantity, absolute = line
    return food, quantity, absolute
