"""Nutrition domain models."""

from dataclasses import dataclass


@dataclass(frozen=True)
class NutritionRecord:
    """Calorie and protein totals for a single calendar day."""

    calories: float
    protein: float
    date: str


@dataclass(frozen=True)
class NutritionGoals:
    """Daily calorie and protein targets."""

    calorie_goal: float
    protein_goal: float


@dataclass(frozen=True)
class NutritionProgress:
    """Today's totals measured against the goals."""

    today: NutritionRecord
    goals: NutritionGoals
    calories_remaining: float
    protein_remaining: float
