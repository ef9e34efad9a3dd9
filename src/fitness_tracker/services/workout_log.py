"""Append-only history of completed workouts."""

import logging
from dataclasses import dataclass

from fitness_tracker.domain.workouts import (
    WorkoutLogEntry,
    exercise_to_payload,
    exercises_from_payload,
)
from fitness_tracker.services.storage import (
    KeyValueStore,
    ReadStatus,
    read_json,
    write_json,
)

LOGS_KEY = "workout_logs"

_logger = logging.getLogger(__name__)


@dataclass
class WorkoutLogService:
    """Stores completed workout sessions in insertion order.

    Entries are never pruned; the log grows with every saved workout.
    """

    store: KeyValueStore

    async def append(self, entry: WorkoutLogEntry) -> None:
        """Add an entry to the end of the log."""
        stored = await read_json(self.store, LOGS_KEY)
        if stored.status is ReadStatus.FAILED:
            raise RuntimeError("Failed to read workout logs")
        payload = stored.payload if stored.found else []
        if not isinstance(payload, list):
            _logger.warning("Replacing malformed workout log")
            payload = []
        payload.append(_entry_payload(entry))
        await write_json(self.store, LOGS_KEY, payload)

    async def get_logs(self) -> list[WorkoutLogEntry]:
        """Return every logged workout, oldest first."""
        stored = await read_json(self.store, LOGS_KEY)
        if not stored.found or not isinstance(stored.payload, list):
            return []
        entries = []
        for item in stored.payload:
            entry = _parse_entry(item)
            if entry is not None:
                entries.append(entry)
        return entries


def _entry_payload(entry: WorkoutLogEntry) -> dict[str, object]:
    return {
        "date": entry.date,
        "day": entry.day,
        "exercises": [exercise_to_payload(exercise) for exercise in entry.exercises],
    }


def _parse_entry(payload: object) -> WorkoutLogEntry | None:
    if not isinstance(payload, dict):
        return None
    date = payload.get("date")
    day = payload.get("day")
    if not isinstance(date, str) or not isinstance(day, str):
        return None
    return WorkoutLogEntry(
        date=date,
        day=day,
        exercises=exercises_from_payload(payload.get("exercises")),
    )
