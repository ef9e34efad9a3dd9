"""FastAPI application factory."""

import logging
from collections.abc import Awaitable
from dataclasses import asdict
from typing import TypeVar

from fastapi import FastAPI, HTTPException, Request, Response, status

from fitness_tracker.api.models import (
    CompleteWorkoutPayload,
    DayExercisesPayload,
    ExerciseUpdatePayload,
    GoalsPayload,
    MealPayload,
    NewExercisePayload,
    NutritionTotalsPayload,
    WeightPayload,
)
from fitness_tracker.app_logging import configure_logging
from fitness_tracker.containers import AppContainer
from fitness_tracker.domain.nutrition import NutritionGoals
from fitness_tracker.domain.workouts import Exercise, is_weekday

T = TypeVar("T")


def create_app(container: AppContainer) -> FastAPI:  # noqa: PLR0915
    """Create a FastAPI app configured with dependencies."""
    configure_logging()
    logger = logging.getLogger(__name__)

    app = FastAPI()
    app.state.container = container

    async def persist(action: Awaitable[T], failure: str) -> T:
        try:
            return await action
        except ValueError as exc:
            raise HTTPException(
                status_code=status.HTTP_400_BAD_REQUEST, detail=str(exc)
            ) from exc
        except Exception as exc:
            logger.warning("%s: %s", failure, exc)
            raise HTTPException(
                status_code=status.HTTP_503_SERVICE_UNAVAILABLE,
                detail=f"{failure}. Please try again.",
            ) from exc

    @app.get("/health")
    async def health() -> dict[str, str]:
        """Simple health check endpoint."""
        return {"status": "ok"}

    @app.get("/nutrition/today")
    async def get_today(request: Request) -> dict[str, object]:
        """Return today's totals."""
        ledger = _container(request).nutrition_ledger
        return asdict(await ledger.get_today())

    @app.put("/nutrition/today")
    async def save_today(
        payload: NutritionTotalsPayload, request: Request
    ) -> dict[str, object]:
        """Overwrite today's totals."""
        ledger = _container(request).nutrition_ledger
        record = await persist(
            ledger.save_today(payload.calories, payload.protein),
            "Failed to save nutrition data",
        )
        return asdict(record)

    @app.post("/nutrition/meals")
    async def add_meal(payload: MealPayload, request: Request) -> dict[str, object]:
        """Add a meal to today's totals."""
        ledger = _container(request).nutrition_ledger
        record = await persist(
            ledger.add_meal(payload.calories, payload.protein),
            "Failed to add meal",
        )
        return asdict(record)

    @app.post("/nutrition/reset")
    async def reset_today(request: Request) -> dict[str, object]:
        """Clear today's totals."""
        ledger = _container(request).nutrition_ledger
        record = await persist(ledger.reset_today(), "Failed to reset today")
        return asdict(record)

    @app.get("/nutrition/goals")
    async def get_goals(request: Request) -> dict[str, object]:
        """Return the nutrition goals."""
        ledger = _container(request).nutrition_ledger
        return asdict(await ledger.get_goals())

    @app.put("/nutrition/goals")
    async def save_goals(payload: GoalsPayload, request: Request) -> dict[str, object]:
        """Replace the nutrition goals."""
        ledger = _container(request).nutrition_ledger
        goals = NutritionGoals(
            calorie_goal=payload.calorie_goal, protein_goal=payload.protein_goal
        )
        await persist(ledger.save_goals(goals), "Failed to save goals")
        return asdict(goals)

    @app.get("/nutrition/progress")
    async def get_progress(request: Request) -> dict[str, object]:
        """Return today's totals against the goals."""
        ledger = _container(request).nutrition_ledger
        return asdict(await ledger.get_progress())

    @app.get("/workouts/schedule")
    async def get_schedule(request: Request) -> dict[str, object]:
        """Return the weekly schedule."""
        schedule = await _container(request).schedule_service.get_schedule()
        return {
            day: [asdict(exercise) for exercise in exercises]
            for day, exercises in schedule.items()
        }

    @app.get("/workouts/schedule/{day}")
    async def get_day(
        day: str, request: Request, latest_weights: bool = False
    ) -> dict[str, object]:
        """Return the exercises for a weekday."""
        _require_weekday(day)
        service = _container(request).schedule_service
        if latest_weights:
            exercises = await service.get_exercises_with_latest_weights(day)
        else:
            exercises = await service.get_exercises_for_day(day)
        return _day_response(day, exercises)

    @app.put("/workouts/schedule/{day}")
    async def save_day(
        day: str, payload: DayExercisesPayload, request: Request
    ) -> dict[str, object]:
        """Replace the exercises for a weekday."""
        _require_weekday(day)
        exercises = [item.to_domain() for item in payload.exercises]
        service = _container(request).schedule_service
        await persist(
            service.save_exercises_for_day(day, exercises),
            "Failed to save exercises",
        )
        return _day_response(day, exercises)

    @app.post("/workouts/schedule/{day}/exercises")
    async def add_exercise(
        day: str, payload: NewExercisePayload, request: Request, response: Response
    ) -> dict[str, object]:
        """Add an exercise by name unless the day already has it."""
        _require_weekday(day)
        service = _container(request).schedule_service
        exercise = await persist(
            service.add_exercise_to_day(day, payload.name),
            "Failed to add exercise",
        )
        if exercise is None:
            return {"added": False, "exercise": None}
        response.status_code = status.HTTP_201_CREATED
        return {"added": True, "exercise": asdict(exercise)}

    @app.patch("/workouts/schedule/{day}/exercises/{exercise_id}")
    async def update_exercise(
        day: str, exercise_id: str, payload: ExerciseUpdatePayload, request: Request
    ) -> dict[str, object]:
        """Edit one field of an exercise; invalid values are ignored."""
        _require_weekday(day)
        service = _container(request).schedule_service
        exercises = await service.get_exercises_for_day(day)
        if not any(exercise.id == exercise_id for exercise in exercises):
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        updated = await persist(
            service.update_exercise(
                exercises, exercise_id, payload.field, payload.value
            ),
            "Failed to save exercise weight",
        )
        if updated != exercises:
            await persist(
                service.save_exercises_for_day(day, updated),
                "Failed to save exercises",
            )
        return _day_response(day, updated)

    @app.delete("/workouts/schedule/{day}/exercises/{exercise_id}")
    async def delete_exercise(
        day: str, exercise_id: str, request: Request
    ) -> dict[str, object]:
        """Remove an exercise from a weekday."""
        _require_weekday(day)
        service = _container(request).schedule_service
        removed = await persist(
            service.delete_exercise_from_day(day, exercise_id),
            "Failed to delete exercise",
        )
        if not removed:
            raise HTTPException(status_code=status.HTTP_404_NOT_FOUND)
        return _day_response(day, await service.get_exercises_for_day(day))

    @app.post("/workouts/schedule/{day}/complete")
    async def complete_workout(
        day: str, payload: CompleteWorkoutPayload, request: Request
    ) -> dict[str, object]:
        """Save a day's workout and append it to the log."""
        _require_weekday(day)
        service = _container(request).schedule_service
        if payload.exercises is None:
            exercises = await service.get_exercises_for_day(day)
        else:
            exercises = [item.to_domain() for item in payload.exercises]
        entry = await persist(
            service.complete_workout(day, exercises),
            "Failed to save workout",
        )
        return asdict(entry)

    @app.get("/workouts/weights")
    async def get_weights(request: Request) -> dict[str, float]:
        """Return the latest weight for every exercise name."""
        return await _container(request).weight_registry.get_all_weights()

    @app.get("/workouts/weights/{name}")
    async def get_weight(name: str, request: Request) -> dict[str, object]:
        """Return the latest weight for an exercise name."""
        weight = await _container(request).weight_registry.get_weight(name)
        return {"name": name, "weight": weight}

    @app.put("/workouts/weights/{name}")
    async def save_weight(
        name: str, payload: WeightPayload, request: Request
    ) -> dict[str, object]:
        """Record the latest weight for an exercise name."""
        registry = _container(request).weight_registry
        await persist(
            registry.save_weight(name, payload.weight),
            "Failed to save exercise weight",
        )
        return {"name": name, "weight": payload.weight}

    @app.get("/workouts/logs")
    async def get_logs(request: Request) -> dict[str, object]:
        """Return every logged workout, oldest first."""
        logs = await _container(request).workout_log.get_logs()
        return {"logs": [asdict(entry) for entry in logs]}

    return app


def _container(request: Request) -> AppContainer:
    return request.app.state.container


def _require_weekday(day: str) -> None:
    if not is_weekday(day):
        raise HTTPException(
            status_code=status.HTTP_404_NOT_FOUND, detail=f"Unknown weekday: {day}"
        )


def _day_response(day: str, exercises: list[Exercise]) -> dict[str, object]:
    return {"day": day, "exercises": [asdict(exercise) for exercise in exercises]}
