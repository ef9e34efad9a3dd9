"""Daily nutrition totals with day rollover."""

import logging
from dataclasses import dataclass, field

from fitness_tracker.domain.inputs import parse_non_negative
from fitness_tracker.domain.nutrition import (
    NutritionGoals,
    NutritionProgress,
    NutritionRecord,
)
from fitness_tracker.services.dates import DayClock
from fitness_tracker.services.storage import (
    KeyValueStore,
    ReadStatus,
    StoredValue,
    read_json,
    write_json,
)

GOALS_KEY = "nutrition_goals"
DEFAULT_GOALS = NutritionGoals(calorie_goal=2000, protein_goal=150)

_logger = logging.getLogger(__name__)


def day_key(date: str) -> str:
    """Return the storage key for a day's nutrition record."""
    return f"nutrition_{date}"


@dataclass
class NutritionLedger:
    """Owns today's calorie/protein totals and the nutrition goals."""

    store: KeyValueStore
    clock: DayClock = field(default_factory=DayClock)
    default_goals: NutritionGoals = DEFAULT_GOALS

    async def get_today(self) -> NutritionRecord:
        """Return today's record, replacing missing or stale data with zeros.

        Storage failures are logged and answered with an unsaved zeroed
        record so the counter keeps working.
        """
        today = self.clock.today()
        stored = await read_json(self.store, day_key(today))
        if stored.status is ReadStatus.FAILED:
            return NutritionRecord(calories=0, protein=0, date=today)
        return await self._settle_today(today, stored)

    async def save_today(self, calories: object, protein: object) -> NutritionRecord:
        """Overwrite today's totals.

        Raises ValueError for negative or non-numeric totals.
        """
        checked_calories = parse_non_negative(calories)
        checked_protein = parse_non_negative(protein)
        if checked_calories is None or checked_protein is None:
            raise ValueError("Nutrition totals must be non-negative numbers")
        record = NutritionRecord(
            calories=checked_calories, protein=checked_protein, date=self.clock.today()
        )
        await write_json(self.store, day_key(record.date), _record_payload(record))
        return record

    async def add_meal(self, calories: object, protein: object) -> NutritionRecord:
        """Add a meal's calories and protein to today's totals.

        Negative or non-numeric amounts are dropped and the current totals
        are returned unchanged. Raises RuntimeError when today's totals
        cannot be read, so they are never overwritten with a partial sum.
        """
        delta_calories = parse_non_negative(calories)
        delta_protein = parse_non_negative(protein)
        today = self.clock.today()
        stored = await read_json(self.store, day_key(today))
        if stored.status is ReadStatus.FAILED:
            raise RuntimeError("Failed to read nutrition data")
        current = await self._settle_today(today, stored)
        if delta_calories is None or delta_protein is None:
            _logger.info(
                "Ignoring invalid meal: calories=%r protein=%r", calories, protein
            )
            return current
        return await self.save_today(
            current.calories + delta_calories, current.protein + delta_protein
        )

    async def _settle_today(self, today: str, stored: StoredValue) -> NutritionRecord:
        if stored.found:
            record = _parse_record(stored.payload)
            if record is not None and record.date == today:
                return record
            _logger.info("Nutrition rollover: resetting totals for %s", today)
        fresh = NutritionRecord(calories=0, protein=0, date=today)
        try:
            await write_json(self.store, day_key(today), _record_payload(fresh))
        except Exception:
            _logger.warning("Returning unsaved zeroed record for %s", today)
        return fresh

    async def reset_today(self) -> NutritionRecord:
        """Clear today's totals and persist a zeroed record."""
        today = self.clock.today()
        try:
            await self.store.remove(day_key(today))
        except Exception:
            _logger.exception("Failed to remove nutrition record for %s", today)
            raise
        record = NutritionRecord(calories=0, protein=0, date=today)
        await write_json(self.store, day_key(today), _record_payload(record))
        return record

    async def get_goals(self) -> NutritionGoals:
        """Return saved goals, or the defaults when none are readable."""
        stored = await read_json(self.store, GOALS_KEY)
        if not stored.found:
            return self.default_goals
        goals = _parse_goals(stored.payload)
        if goals is None:
            _logger.warning("Ignoring malformed nutrition goals")
            return self.default_goals
        return goals

    async def save_goals(self, goals: NutritionGoals) -> None:
        """Persist the nutrition goals."""
        if goals.calorie_goal <= 0 or goals.protein_goal <= 0:
            raise ValueError("Nutrition goals must be positive")
        await write_json(
            self.store,
            GOALS_KEY,
            {"calorieGoal": goals.calorie_goal, "proteinGoal": goals.protein_goal},
        )

    async def get_progress(self) -> NutritionProgress:
        """Return today's totals with the goals and what remains of them."""
        today = await self.get_today()
        goals = await self.get_goals()
        return NutritionProgress(
            today=today,
            goals=goals,
            calories_remaining=max(goals.calorie_goal - today.calories, 0),
            protein_remaining=max(goals.protein_goal - today.protein, 0),
        )


def _record_payload(record: NutritionRecord) -> dict[str, object]:
    return {
        "calories": record.calories,
        "protein": record.protein,
        "date": record.date,
    }


def _parse_record(payload: object) -> NutritionRecord | None:
    if not isinstance(payload, dict):
        return None
    calories = parse_non_negative(payload.get("calories"))
    protein = parse_non_negative(payload.get("protein"))
    date = payload.get("date")
    if calories is None or protein is None or not isinstance(date, str):
        return None
    return NutritionRecord(calories=calories, protein=protein, date=date)


def _parse_goals(payload: object) -> NutritionGoals | None:
    if not isinstance(payload, dict):
        return None
    calorie_goal = parse_non_negative(payload.get("calorieGoal"))
    protein_goal = parse_non_negative(payload.get("proteinGoal"))
    if not calorie_goal or not protein_goal:
        return None
    return NutritionGoals(calorie_goal=calorie_goal, protein_goal=protein_goal)
