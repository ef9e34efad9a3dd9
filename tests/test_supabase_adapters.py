"""Tests for the Supabase key-value store."""

import asyncio
from dataclasses import dataclass, field

import pytest

from fitness_tracker.adapters.supabase_key_value_store import SupabaseKeyValueStore


@dataclass
class FakeResponse:
    data: list[dict[str, object]] | None


@dataclass
class FakeTable:
    name: str
    rows: dict[str, dict[str, object]] = field(default_factory=dict)
    reject_writes: bool = False
    last_upsert_conflict: str | None = None

    def select(self, *_args) -> "FakeTable":
        self._action = "select"
        self._filters: list[tuple[str, object]] = []
        return self

    def upsert(self, payload, on_conflict: str = "") -> "FakeTable":  # noqa: ANN001
        self._action = "upsert"
        self._payload = payload
        self.last_upsert_conflict = on_conflict
        return self

    def delete(self) -> "FakeTable":
        self._action = "delete"
        self._filters = []
        return self

    def eq(self, column: str, value) -> "FakeTable":  # type: ignore[no-untyped-def]
        self._filters.append((column, value))
        return self

    def limit(self, _count: int) -> "FakeTable":
        return self

    def execute(self) -> FakeResponse:
        if self._action == "upsert":
            if self.reject_writes:
                return FakeResponse(data=[])
            self.rows[self._payload["key"]] = dict(self._payload)
            return FakeResponse(data=[self._payload])
        key = dict(self._filters).get("key")
        if self._action == "delete":
            self.rows.pop(key, None)
            return FakeResponse(data=[])
        row = self.rows.get(key)
        return FakeResponse(data=[row] if row else [])


@dataclass
class FakeSupabaseClient:
    tables: dict[str, FakeTable] = field(default_factory=dict)

    def table(self, name: str) -> FakeTable:
        if name not in self.tables:
            self.tables[name] = FakeTable(name=name)
        return self.tables[name]


def test_supabase_store_roundtrip() -> None:
    client = FakeSupabaseClient()
    store = SupabaseKeyValueStore(client)

    asyncio.run(store.set("workout_logs", "[]"))
    value = asyncio.run(store.get("workout_logs"))
    asyncio.run(store.remove("workout_logs"))

    assert value == "[]"
    assert asyncio.run(store.get("workout_logs")) is None
    table = client.tables["key_value_store"]
    assert table.last_upsert_conflict == "key"


def test_supabase_store_uses_configured_table() -> None:
    client = FakeSupabaseClient()
    store = SupabaseKeyValueStore(client, table="fitness_kv")

    asyncio.run(store.set("nutrition_goals", "{}"))

    assert "nutrition_goals" in client.tables["fitness_kv"].rows
    assert client.tables["fitness_kv"].rows["nutrition_goals"]["updated_at"]


def test_supabase_store_raises_when_write_returns_nothing() -> None:
    client = FakeSupabaseClient()
    client.table("key_value_store").reject_writes = True
    store = SupabaseKeyValueStore(client)

    with pytest.raises(RuntimeError):
        asyncio.run(store.set("exercise_weights", "{}"))
