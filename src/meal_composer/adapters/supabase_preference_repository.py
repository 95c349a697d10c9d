"""Supabase repository for liked food ids."""

from dataclasses import dataclass
from datetime import UTC, datetime

from supabase import Client

from meal_composer.services.preferences import PreferenceStore


@dataclass
class SupabasePreferenceRepository(PreferenceStore):
    """Supabase implementation storing one row per liked food."""

    client: Client
    user_id: str
    table_name: str = "liked_foods"

    def load_liked_ids(self) -> set[str]:
        """Return the user's liked food ids."""
        response = (
            self.client.table(self.table_name)
            .select("food_id")
            .eq("user_id", self.user_id)
            .execute()
        )
        return {str(row["food_id"]) for row in response.data or []}

    def save_liked_ids(self, food_ids: set[str]) -> None:
        """Reconcile stored rows with the given liked set."""
        current = self.load_liked_ids()
        added = sorted(food_ids - current)
        removed = sorted(current - food_ids)
        if added:
            now = datetime.now(tz=UTC).isoformat()
            response = (
                self.client.table(self.table_name)
                .insert(
                    [
                        {"user_id": self.user_id, "food_id": food_id, "liked_at": now}
                        for food_id in added
                    ]
                )
                .execute()
            )
            if not response.data:
                raise RuntimeError("Failed to store liked foods")
        if removed:
            (
                self.client.table(self.table_name)
                .delete()
                .eq("user_id", self.user_id)
                .in_("food_id", removed)
                .execute()
            )
