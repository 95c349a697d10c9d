"""Liked-food tracking and preference-aware ordering."""

from collections.abc import Iterable
from dataclasses import dataclass, field
from typing import Protocol

from meal_composer.domain.nutrition import FoodProfile
from meal_composer.domain.preferences import FoodPreference


class PreferenceStore(Protocol):
    """Persistence interface for the liked-food id set."""

    def load_liked_ids(self) -> set[str]:
        """Return the persisted liked food ids."""

    def save_liked_ids(self, food_ids: set[str]) -> None:
        """Persist the liked food ids."""


@dataclass
class LikedFoodRegistry:
    """Authoritative liked state for foods."""

    store: PreferenceStore
    _liked: set[str] = field(default_factory=set, init=False)

    @classmethod
    def load(cls, store: PreferenceStore) -> "LikedFoodRegistry":
        """Create a registry seeded from the store."""
        registry = cls(store)
        registry._liked = set(store.load_liked_ids())
        return registry

    @property
    def liked_ids(self) -> frozenset[str]:
        return frozenset(self._liked)

    def is_liked(self, food_id: str) -> bool:
        return food_id in self._liked

    def set_preference(self, food_id: str, liked: bool) -> None:
        """Record a like or dislike, keeping local state only once it is saved."""
        updated = set(self._liked)
        if liked:
            updated.add(food_id)
        else:
            updated.discard(food_id)
        self.store.save_liked_ids(set(updated))
        self._liked = updated

    def apply_preference(self, food_id: str, preference: FoodPreference) -> None:
        self.set_preference(food_id, preference is FoodPreference.LIKE)

    def toggle(self, food_id: str) -> FoodPreference:
        """Flip the liked state of a food and return the new preference."""
        preference = FoodPreference.from_liked(not self.is_liked(food_id))
        self.apply_preference(food_id, preference)
        return preference

    def apply_and_sort(self, foods: Iterable[FoodProfile]) -> list[FoodProfile]:
        """Return foods flagged from registry state, liked first then by name."""
        flagged = [food.with_liked(food.id in self._liked) for food in foods]
        return sorted(flagged, key=lambda food: (not food.liked, food.name))
