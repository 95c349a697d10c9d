"""Tests for Supabase adapter implementations."""

from dataclasses import dataclass, field

import pytest

from meal_composer.adapters.supabase_preference_repository import (
    SupabasePreferenceRepository,
)


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    response_queue: dict[str, list[list[dict[str, object]]]] = field(
        default_factory=lambda: {"select": [], "insert": [], "delete": []}
    )
    last_payload: object | None = None
    last_filters: list[tuple[str, object]] = field(default_factory=list)
    actions: list[str] = field(default_factory=list)

    def queue(self, action: str, data: list[dict[str, object]]) -> None:
        self.response_queue[action].append(data)

    def select(self, *_args) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "select"
        return self

    def insert(self, payload) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._action = "insert"
        self.last_payload = payload
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def in_(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self.last_filters.append((column, value))
        return self

    def execute(self) -> FakeResponse:
        action = getattr(self, "_action", "select")
        self.actions.append(action)
        queue = self.response_queue.get(action, [])
        data = queue.pop(0) if queue else []
        return FakeResponse(data=data)


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_load_liked_ids_normalizes_to_strings() -> None:
    client = FakeSupabaseClient()
    table = client.table("liked_foods")
    table.queue("select", [{"food_id": 12}, {"food_id": "custom_ab"}])

    repository = SupabasePreferenceRepository(client, user_id="7")

    assert repository.load_liked_ids() == {"12", "custom_ab"}
    assert table.last_filters == [("user_id", "7")]


def test_save_liked_ids_inserts_and_deletes_difference() -> None:
    client = FakeSupabaseClient()
    table = client.table("liked_foods")
    table.queue("select", [{"food_id": "1"}, {"food_id": "2"}])
    table.queue("insert", [{"food_id": "3"}])

    repository = SupabasePreferenceRepository(client, user_id="7")
    repository.save_liked_ids({"2", "3"})

    assert table.actions == ["select", "insert", "delete"]
    assert isinstance(table.last_payload, list)
    assert [row["food_id"] for row in table.last_payload] == ["3"]
    assert table.last_filters[-1] == ("food_id", ["1"])


def test_save_liked_ids_without_changes_only_reads() -> None:
    client = FakeSupabaseClient()
    table = client.table("liked_foods")
    table.queue("select", [{"food_id": "1"}])

    SupabasePreferenceRepository(client, user_id="7").save_liked_ids({"1"})

    assert table.actions == ["select"]


def test_save_liked_ids_raises_when_insert_returns_nothing() -> None:
    client = FakeSupabaseClient()
    client.table("liked_foods").queue("select", [])

    repository = SupabasePreferenceRepository(client, user_id="7")

    with pytest.raises(RuntimeError):
        repository.save_liked_ids({"5"})
