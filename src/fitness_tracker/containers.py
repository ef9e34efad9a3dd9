"""Dependency container wiring for the application."""

import logging
from dataclasses import dataclass

from supabase import create_client

from fitness_tracker.adapters.supabase_key_value_store import SupabaseKeyValueStore
from fitness_tracker.config import Settings
from fitness_tracker.domain.nutrition import NutritionGoals
from fitness_tracker.services.dates import DayClock
from fitness_tracker.services.nutrition import NutritionLedger
from fitness_tracker.services.schedule import WorkoutScheduleService
from fitness_tracker.services.storage import InMemoryKeyValueStore, KeyValueStore
from fitness_tracker.services.weights import ExerciseWeightRegistry
from fitness_tracker.services.workout_log import WorkoutLogService

_logger = logging.getLogger(__name__)


@dataclass
class AppContainer:
    """Holds application-wide dependencies."""

    settings: Settings
    store: KeyValueStore
    clock: DayClock
    nutrition_ledger: NutritionLedger
    weight_registry: ExerciseWeightRegistry
    workout_log: WorkoutLogService
    schedule_service: WorkoutScheduleService


def build_container(
    settings: Settings | None = None, store: KeyValueStore | None = None
) -> AppContainer:
    """Create the default dependency container."""
    resolved_settings = settings or Settings()
    resolved_store = store if store is not None else _build_store(resolved_settings)
    clock = DayClock(timezone_name=resolved_settings.timezone)
    nutrition_ledger = NutritionLedger(
        store=resolved_store,
        clock=clock,
        default_goals=NutritionGoals(
            calorie_goal=resolved_settings.default_calorie_goal,
            protein_goal=resolved_settings.default_protein_goal,
        ),
    )
    weight_registry = ExerciseWeightRegistry(resolved_store)
    workout_log = WorkoutLogService(resolved_store)
    schedule_service = WorkoutScheduleService(
        store=resolved_store,
        weights=weight_registry,
        log=workout_log,
        clock=clock,
    )

    return AppContainer(
        settings=resolved_settings,
        store=resolved_store,
        clock=clock,
        nutrition_ledger=nutrition_ledger,
        weight_registry=weight_registry,
        workout_log=workout_log,
        schedule_service=schedule_service,
    )


def _build_store(settings: Settings) -> KeyValueStore:
    if not settings.uses_supabase:
        _logger.warning("Supabase is not configured; using in-memory storage")
        return InMemoryKeyValueStore()
    client = create_client(settings.supabase_url, settings.supabase_service_key)
    return SupabaseKeyValueStore(client=client, table=settings.storage_table)
