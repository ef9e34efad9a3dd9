"""Domain models for the weekly workout schedule."""

from dataclasses import dataclass, field

WEEKDAYS = (
    "Monday",
    "Tuesday",
    "Wednesday",
    "Thursday",
    "Friday",
    "Saturday",
    "Sunday",
)

EXERCISE_FIELDS = ("weight", "sets", "reps")


@dataclass(frozen=True)
class Exercise:
    """An exercise scheduled on a weekday."""

    id: str
    name: str
    weight: float | None = None
    sets: float | None = None
    reps: float | None = None


@dataclass(frozen=True)
class WorkoutLogEntry:
    """A completed workout session."""

    date: str
    day: str
    exercises: list[Exercise] = field(default_factory=list)


def is_weekday(day: str) -> bool:
    """Return True when day is one of the canonical weekday names."""
    return day in WEEKDAYS


def empty_schedule() -> dict[str, list[Exercise]]:
    """Return a schedule with an empty list for every weekday."""
    return {day: [] for day in WEEKDAYS}


def exercise_to_payload(exercise: Exercise) -> dict[str, object]:
    """Serialize an exercise into its stored JSON shape."""
    payload: dict[str, object] = {"id": exercise.id, "name": exercise.name}
    for name in EXERCISE_FIELDS:
        value = getattr(exercise, name)
        if value is not None:
            payload[name] = value
    return payload


def exercise_from_payload(payload: object) -> Exercise | None:
    """Parse a stored exercise, returning None for malformed entries."""
    if not isinstance(payload, dict):
        return None
    exercise_id = payload.get("id")
    name = payload.get("name")
    if not isinstance(exercise_id, str) or not isinstance(name, str):
        return None
    return Exercise(
        id=exercise_id,
        name=name,
        weight=_optional_number(payload.get("weight")),
        sets=_optional_number(payload.get("sets")),
        reps=_optional_number(payload.get("reps")),
    )


def exercises_from_payload(payload: object) -> list[Exercise]:
    """Parse a stored exercise list, skipping malformed entries."""
    if not isinstance(payload, list):
        return []
    exercises = []
    for item in payload:
        exercise = exercise_from_payload(item)
        if exercise is not None:
            exercises.append(exercise)
    return exercises


def _optional_number(value: object) -> float | None:
    if isinstance(value, bool) or not isinstance(value, int | float):
        return None
    return float(value)
