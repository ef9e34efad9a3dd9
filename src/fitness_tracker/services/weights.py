"""Last-used weight per exercise name."""

import logging
from dataclasses import dataclass

from fitness_tracker.domain.inputs import parse_non_negative
from fitness_tracker.services.storage import (
    KeyValueStore,
    ReadStatus,
    read_json,
    write_json,
)

WEIGHTS_KEY = "exercise_weights"

_logger = logging.getLogger(__name__)


@dataclass
class ExerciseWeightRegistry:
    """Maps exercise names to the most recently recorded weight.

    Keyed by name rather than exercise id so that an exercise removed from
    the schedule and added again later recovers its working weight.
    """

    store: KeyValueStore

    async def get_weight(self, name: str) -> float | None:
        """Return the last weight recorded for name, if any."""
        weights = await self.get_all_weights()
        return weights.get(name)

    async def save_weight(self, name: str, weight: object) -> None:
        """Record weight as the latest for name.

        Raises ValueError for a negative or non-numeric weight.
        """
        checked = parse_non_negative(weight)
        if checked is None:
            raise ValueError(f"Invalid weight for {name}: {weight!r}")
        stored = await read_json(self.store, WEIGHTS_KEY)
        if stored.status is ReadStatus.FAILED:
            raise RuntimeError("Failed to read exercise weights")
        weights = _parse_weights(stored.payload) if stored.found else {}
        weights[name] = checked
        await write_json(self.store, WEIGHTS_KEY, weights)

    async def get_all_weights(self) -> dict[str, float]:
        """Return a snapshot of every recorded weight."""
        stored = await read_json(self.store, WEIGHTS_KEY)
        if not stored.found:
            return {}
        return _parse_weights(stored.payload)


def _parse_weights(payload: object) -> dict[str, float]:
    if not isinstance(payload, dict):
        _logger.warning("Ignoring malformed exercise weights")
        return {}
    weights = {}
    for name, raw in payload.items():
        weight = parse_non_negative(raw)
        if weight is not None:
            weights[str(name)] = weight
    return weights
