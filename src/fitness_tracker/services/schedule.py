"""Weekly workout schedule reconciled with the weight registry."""

import logging
from dataclasses import dataclass, field, replace
from uuid import uuid4

from fitness_tracker.domain.inputs import parse_non_negative
from fitness_tracker.domain.workouts import (
    EXERCISE_FIELDS,
    WEEKDAYS,
    Exercise,
    WorkoutLogEntry,
    empty_schedule,
    exercise_to_payload,
    exercises_from_payload,
    is_weekday,
)
from fitness_tracker.services.dates import DayClock
from fitness_tracker.services.storage import (
    KeyValueStore,
    ReadStatus,
    read_json,
    write_json,
)
from fitness_tracker.services.weights import ExerciseWeightRegistry
from fitness_tracker.services.workout_log import WorkoutLogService

SCHEDULE_KEY = "workout_schedule"
DEFAULT_SETS = 3
DEFAULT_REPS = 10

_logger = logging.getLogger(__name__)


@dataclass
class WorkoutScheduleService:
    """Owns the weekday to exercise list mapping.

    Each write replaces the whole stored schedule, so two overlapping edits
    to different days can lose one of them.
    """

    store: KeyValueStore
    weights: ExerciseWeightRegistry
    log: WorkoutLogService
    clock: DayClock = field(default_factory=DayClock)

    async def get_schedule(self) -> dict[str, list[Exercise]]:
        """Return the schedule with an entry for every weekday."""
        stored = await read_json(self.store, SCHEDULE_KEY)
        if not stored.found:
            return empty_schedule()
        return _parse_schedule(stored.payload)

    async def save_schedule(self, schedule: dict[str, list[Exercise]]) -> None:
        """Persist the whole schedule."""
        payload = {
            day: [exercise_to_payload(exercise) for exercise in schedule.get(day, [])]
            for day in WEEKDAYS
        }
        await write_json(self.store, SCHEDULE_KEY, payload)

    async def get_exercises_for_day(self, day: str) -> list[Exercise]:
        """Return the exercises scheduled on day."""
        if not is_weekday(day):
            return []
        schedule = await self.get_schedule()
        return schedule[day]

    async def save_exercises_for_day(self, day: str, exercises: list[Exercise]) -> None:
        """Replace the exercise list for day."""
        _require_weekday(day)
        stored = await read_json(self.store, SCHEDULE_KEY)
        if stored.status is ReadStatus.FAILED:
            raise RuntimeError("Failed to read workout schedule")
        schedule = _parse_schedule(stored.payload) if stored.found else empty_schedule()
        schedule[day] = list(exercises)
        await self.save_schedule(schedule)

    async def add_exercise_to_day(self, day: str, name: str) -> Exercise | None:
        """Append a new exercise to day unless one with that name exists.

        The starting weight comes from the weight registry. Returns the new
        exercise, or None when nothing was added.
        """
        _require_weekday(day)
        cleaned = name.strip()
        if not cleaned:
            return None
        exercises = await self.get_exercises_for_day(day)
        if any(exercise.name == cleaned for exercise in exercises):
            return None
        exercise = Exercise(
            id=uuid4().hex,
            name=cleaned,
            weight=await self.weights.get_weight(cleaned),
            sets=DEFAULT_SETS,
            reps=DEFAULT_REPS,
        )
        exercises.append(exercise)
        await self.save_exercises_for_day(day, exercises)
        return exercise

    async def update_exercise(
        self,
        exercises: list[Exercise],
        exercise_id: str,
        field_name: str,
        raw_value: object,
    ) -> list[Exercise]:
        """Apply a user edit to one exercise field.

        Invalid input leaves the list unchanged. Weight edits are recorded
        in the weight registry immediately; the list itself is not saved.
        """
        if field_name not in EXERCISE_FIELDS:
            raise ValueError(f"Unknown exercise field: {field_name}")
        value = parse_non_negative(raw_value)
        if value is None:
            _logger.info("Ignoring invalid %s value: %r", field_name, raw_value)
            return list(exercises)
        updated = []
        for exercise in exercises:
            if exercise.id != exercise_id:
                updated.append(exercise)
                continue
            if field_name == "weight":
                await self.weights.save_weight(exercise.name, value)
            updated.append(replace(exercise, **{field_name: value}))
        return updated

    def remove_exercise(
        self, exercises: list[Exercise], exercise_id: str
    ) -> list[Exercise]:
        """Return exercises without the one matching exercise_id."""
        return [exercise for exercise in exercises if exercise.id != exercise_id]

    async def delete_exercise_from_day(self, day: str, exercise_id: str) -> bool:
        """Remove an exercise from day and persist. Returns True if removed."""
        exercises = await self.get_exercises_for_day(day)
        remaining = self.remove_exercise(exercises, exercise_id)
        if len(remaining) == len(exercises):
            return False
        await self.save_exercises_for_day(day, remaining)
        return True

    async def get_exercises_with_latest_weights(self, day: str) -> list[Exercise]:
        """Return day's exercises with weights refreshed from the registry."""
        exercises = await self.get_exercises_for_day(day)
        latest = await self.weights.get_all_weights()
        return [
            replace(exercise, weight=latest.get(exercise.name, exercise.weight))
            for exercise in exercises
        ]

    async def complete_workout(
        self, day: str, exercises: list[Exercise]
    ) -> WorkoutLogEntry:
        """Save day's exercises and record the session in the workout log."""
        await self.save_exercises_for_day(day, exercises)
        entry = WorkoutLogEntry(
            date=self.clock.today(), day=day, exercises=list(exercises)
        )
        await self.log.append(entry)
        return entry


def _require_weekday(day: str) -> None:
    if not is_weekday(day):
        raise ValueError(f"Unknown weekday: {day}")


def _parse_schedule(payload: object) -> dict[str, list[Exercise]]:
    schedule = empty_schedule()
    if not isinstance(payload, dict):
        _logger.warning("Ignoring malformed workout schedule")
        return schedule
    for day in WEEKDAYS:
        schedule[day] = exercises_from_payload(payload.get(day))
    return schedule
