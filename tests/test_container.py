"""Tests for container wiring."""

from zoneinfo import ZoneInfoNotFoundError

import pytest

from fitness_tracker.config import Settings
from fitness_tracker.containers import build_container
from fitness_tracker.services.storage import InMemoryKeyValueStore


def test_build_container_defaults_to_in_memory_store(settings) -> None:
    container = build_container(settings)

    assert isinstance(container.store, InMemoryKeyValueStore)
    assert container.schedule_service.weights is container.weight_registry
    assert container.schedule_service.log is container.workout_log


def test_build_container_applies_goal_settings() -> None:
    settings = Settings(
        timezone="UTC", default_calorie_goal=2400, default_protein_goal=180
    )

    container = build_container(settings)

    assert container.nutrition_ledger.default_goals.calorie_goal == 2400
    assert container.nutrition_ledger.default_goals.protein_goal == 180
    assert container.clock.timezone_name == "UTC"


def test_build_container_rejects_unknown_timezone() -> None:
    settings = Settings(timezone="Nowhere/Land")

    with pytest.raises(ZoneInfoNotFoundError):
        build_container(settings)
