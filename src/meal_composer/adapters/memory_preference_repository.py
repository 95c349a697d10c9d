"""In-process store for liked food ids."""

from dataclasses import dataclass, field

from meal_composer.services.preferences import PreferenceStore


@dataclass
class InMemoryPreferenceRepository(PreferenceStore):
    """Keeps liked food ids for the lifetime of the process."""

    liked_ids: set[str] = field(default_factory=set)
    saves: int = 0

    def load_liked_ids(self) -> set[str]:
        return set(self.liked_ids)

    def save_liked_ids(self, food_ids: set[str]) -> None:
        self.liked_ids = set(food_ids)
        self.saves += 1
