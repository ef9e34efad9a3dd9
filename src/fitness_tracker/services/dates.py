"""Calendar-day keys derived from the wall clock."""

from collections.abc import Callable
from dataclasses import dataclass, field
from datetime import UTC, datetime
from zoneinfo import ZoneInfo

from fitness_tracker.domain.workouts import WEEKDAYS


def _utc_now() -> datetime:
    return datetime.now(tz=UTC)


@dataclass
class DayClock:
    """Derives day keys (YYYY-MM-DD) in a fixed timezone."""

    timezone_name: str = "UTC"
    now: Callable[[], datetime] = field(default=_utc_now)
    _zone: ZoneInfo = field(init=False, repr=False)

    def __post_init__(self) -> None:
        self._zone = ZoneInfo(self.timezone_name)

    def current(self) -> datetime:
        """Return the current instant in the configured timezone."""
        return self.now().astimezone(self._zone)

    def today(self) -> str:
        """Return today's day key."""
        return self.current().date().isoformat()

    def weekday(self) -> str:
        """Return today's canonical weekday name."""
        return WEEKDAYS[self.current().weekday()]
