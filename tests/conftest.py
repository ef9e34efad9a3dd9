"""Shared test fixtures."""

from dataclasses import dataclass, field
from datetime import UTC, datetime

import pytest

from fitness_tracker.config import Settings
from fitness_tracker.containers import AppContainer, build_container
from fitness_tracker.services.dates import DayClock
from fitness_tracker.services.nutrition import NutritionLedger
from fitness_tracker.services.schedule import WorkoutScheduleService
from fitness_tracker.services.storage import InMemoryKeyValueStore, KeyValueStore
from fitness_tracker.services.weights import ExerciseWeightRegistry
from fitness_tracker.services.workout_log import WorkoutLogService

MONDAY_NOON = datetime(2024, 5, 6, 12, 0, tzinfo=UTC)


@dataclass
class FakeKeyValueStore(KeyValueStore):
    """Dict-backed store that can be told to fail reads or writes."""

    entries: dict[str, str] = field(default_factory=dict)
    fail_reads: bool = False
    fail_writes: bool = False
    writes: list[str] = field(default_factory=list)

    async def get(self, key: str) -> str | None:
        if self.fail_reads:
            raise RuntimeError("storage unavailable")
        return self.entries.get(key)

    async def set(self, key: str, value: str) -> None:
        if self.fail_writes:
            raise RuntimeError("storage unavailable")
        self.writes.append(key)
        self.entries[key] = value

    async def remove(self, key: str) -> None:
        if self.fail_writes:
            raise RuntimeError("storage unavailable")
        self.entries.pop(key, None)


@dataclass
class ManualClock:
    """Callable returning a settable instant."""

    current: datetime = MONDAY_NOON

    def __call__(self) -> datetime:
        return self.current


def make_clock(manual: ManualClock | None = None) -> DayClock:
    return DayClock(timezone_name="UTC", now=manual or ManualClock())


def make_schedule_service(
    store: KeyValueStore, clock: DayClock | None = None
) -> WorkoutScheduleService:
    return WorkoutScheduleService(
        store=store,
        weights=ExerciseWeightRegistry(store),
        log=WorkoutLogService(store),
        clock=clock or make_clock(),
    )


@pytest.fixture
def settings() -> Settings:
    return Settings(timezone="UTC")


@pytest.fixture
def store() -> FakeKeyValueStore:
    return FakeKeyValueStore()


@pytest.fixture
def ledger(store: FakeKeyValueStore) -> NutritionLedger:
    return NutritionLedger(store=store, clock=make_clock())


@pytest.fixture
def container(settings: Settings) -> AppContainer:
    container = build_container(settings, store=InMemoryKeyValueStore())
    container.clock.now = ManualClock()
    return container
