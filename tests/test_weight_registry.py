"""Tests for the exercise weight registry."""

import asyncio
import json

import pytest

from fitness_tracker.services.weights import ExerciseWeightRegistry
from tests.conftest import FakeKeyValueStore


def test_get_weight_absent_when_never_recorded() -> None:
    registry = ExerciseWeightRegistry(FakeKeyValueStore())

    assert asyncio.run(registry.get_weight("Bench Press")) is None


def test_save_weight_last_write_wins() -> None:
    store = FakeKeyValueStore()
    registry = ExerciseWeightRegistry(store)

    asyncio.run(registry.save_weight("Bench Press", 135))
    asyncio.run(registry.save_weight("Squat", 185))
    asyncio.run(registry.save_weight("Bench Press", 140))

    assert asyncio.run(registry.get_weight("Bench Press")) == 140
    assert json.loads(store.entries["exercise_weights"]) == {
        "Bench Press": 140,
        "Squat": 185,
    }


def test_lookup_is_exact_name_match() -> None:
    registry = ExerciseWeightRegistry(FakeKeyValueStore())
    asyncio.run(registry.save_weight("Bench Press", 135))

    assert asyncio.run(registry.get_weight("bench press")) is None


def test_get_all_weights_empty_on_failure() -> None:
    registry = ExerciseWeightRegistry(FakeKeyValueStore(fail_reads=True))

    assert asyncio.run(registry.get_all_weights()) == {}
    assert asyncio.run(registry.get_weight("Squat")) is None


def test_get_all_weights_skips_malformed_values() -> None:
    store = FakeKeyValueStore()
    store.entries["exercise_weights"] = json.dumps({"Squat": 100, "Row": "heavy"})
    registry = ExerciseWeightRegistry(store)

    assert asyncio.run(registry.get_all_weights()) == {"Squat": 100}


def test_save_weight_raises_on_write_failure() -> None:
    registry = ExerciseWeightRegistry(FakeKeyValueStore(fail_writes=True))

    with pytest.raises(RuntimeError):
        asyncio.run(registry.save_weight("Squat", 100))


def test_save_weight_raises_when_existing_weights_unreadable() -> None:
    store = FakeKeyValueStore(fail_reads=True)
    registry = ExerciseWeightRegistry(store)

    with pytest.raises(RuntimeError):
        asyncio.run(registry.save_weight("Squat", 100))
    assert store.writes == []


@pytest.mark.parametrize("weight", [-5, "heavy", None])
def test_save_weight_rejects_invalid_weight_and_keeps_previous(weight) -> None:
    store = FakeKeyValueStore()
    registry = ExerciseWeightRegistry(store)
    asyncio.run(registry.save_weight("Squat", 100))

    with pytest.raises(ValueError):
        asyncio.run(registry.save_weight("Squat", weight))

    assert asyncio.run(registry.get_weight("Squat")) == 100
    assert json.loads(store.entries["exercise_weights"]) == {"Squat": 100}
