"""Pydantic models for API request bodies."""

from pydantic import BaseModel, Field

from fitness_tracker.domain.workouts import Exercise


class NutritionTotalsPayload(BaseModel):
    """Replacement totals for today."""

    calories: float = Field(ge=0)
    protein: float = Field(ge=0)


class MealPayload(BaseModel):
    """A meal as entered by the user; invalid amounts are ignored."""

    calories: float | str | None = None
    protein: float | str | None = 0


class GoalsPayload(BaseModel):
    """Daily nutrition goals."""

    calorie_goal: float = Field(gt=0)
    protein_goal: float = Field(gt=0)


class ExercisePayload(BaseModel):
    """Exercise as sent by a client."""

    id: str
    name: str
    weight: float | None = Field(default=None, ge=0)
    sets: float | None = Field(default=None, ge=0)
    reps: float | None = Field(default=None, ge=0)

    def to_domain(self) -> Exercise:
        """Convert into the domain exercise."""
        return Exercise(
            id=self.id,
            name=self.name,
            weight=self.weight,
            sets=self.sets,
            reps=self.reps,
        )


class DayExercisesPayload(BaseModel):
    """Full exercise list for a weekday."""

    exercises: list[ExercisePayload]


class NewExercisePayload(BaseModel):
    """Name of an exercise to add to a weekday."""

    name: str


class ExerciseUpdatePayload(BaseModel):
    """A single field edit; the value is kept as entered."""

    field: str = Field(pattern="^(weight|sets|reps)$")
    value: float | str | None = None


class WeightPayload(BaseModel):
    """Latest weight for an exercise."""

    weight: float = Field(ge=0)


class CompleteWorkoutPayload(BaseModel):
    """Exercises performed; defaults to the stored list for the day."""

    exercises: list[ExercisePayload] | None = None
