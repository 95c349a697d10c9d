"""Tests for the liked-food registry."""

import pytest

from meal_composer.adapters.memory_preference_repository import (
    InMemoryPreferenceRepository,
)
from meal_composer.domain.preferences import FoodPreference
from meal_composer.services.preferences import LikedFoodRegistry
from tests.conftest import make_food


def test_apply_and_sort_puts_liked_first_then_by_name() -> None:
    store = InMemoryPreferenceRepository(liked_ids={"a", "c"})
    registry = LikedFoodRegistry.load(store)
    foods = [
        make_food("b", "Banana"),
        make_food("a", "Apple"),
        make_food("c", "Cherry"),
    ]

    ordered = registry.apply_and_sort(foods)

    assert [food.name for food in ordered] == ["Apple", "Cherry", "Banana"]
    assert [food.liked for food in ordered] == [True, True, False]


def test_apply_and_sort_overrides_stale_liked_flag() -> None:
    registry = LikedFoodRegistry.load(InMemoryPreferenceRepository())
    stale = make_food("x", "Durian", liked=True)

    ordered = registry.apply_and_sort([stale, make_food("y", "Avocado")])

    assert [food.name for food in ordered] == ["Avocado", "Durian"]
    assert not ordered[1].liked
    assert stale.liked


def test_name_ordering_is_case_sensitive() -> None:
    registry = LikedFoodRegistry.load(InMemoryPreferenceRepository())

    ordered = registry.apply_and_sort(
        [make_food("1", "apple"), make_food("2", "Banana")]
    )

    assert [food.name for food in ordered] == ["Banana", "apple"]


def test_set_preference_persists_after_every_call(
    registry: LikedFoodRegistry, preference_store: InMemoryPreferenceRepository
) -> None:
    registry.set_preference("42", True)
    assert preference_store.liked_ids == {"42"}
    assert registry.is_liked("42")

    registry.set_preference("42", False)
    registry.set_preference("missing", False)

    assert preference_store.liked_ids == set()
    assert preference_store.saves == 3
    assert not registry.is_liked("42")


def test_toggle_flips_state(registry: LikedFoodRegistry) -> None:
    assert registry.toggle("7") is FoodPreference.LIKE
    assert registry.is_liked("7")
    assert registry.toggle("7") is FoodPreference.DISLIKE
    assert registry.liked_ids == frozenset()


def test_load_reads_existing_state() -> None:
    store = InMemoryPreferenceRepository(liked_ids={"1", "2"})

    registry = LikedFoodRegistry.load(store)

    assert registry.liked_ids == frozenset({"1", "2"})
    assert store.saves == 0


def test_apply_preference_maps_enum_to_liked_state(
    registry: LikedFoodRegistry,
) -> None:
    registry.apply_preference("3", FoodPreference.LIKE)
    assert registry.is_liked("3")

    registry.apply_preference("3", FoodPreference.DISLIKE)
    assert not registry.is_liked("3")


def test_failed_save_leaves_registry_unchanged() -> None:
    class FailingStore(InMemoryPreferenceRepository):
        def save_liked_ids(self, food_ids: set[str]) -> None:
            raise RuntimeError("Failed to store liked foods")

    registry = LikedFoodRegistry.load(FailingStore(liked_ids={"1"}))

    with pytest.raises(RuntimeError):
        registry.set_preference("2", True)
    with pytest.raises(RuntimeError):
        registry.toggle("1")

    assert registry.liked_ids == frozenset({"1"})
