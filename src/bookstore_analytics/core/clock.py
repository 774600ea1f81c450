"""Clock abstraction for mode-agnostic time.

WallClock: real wall-clock time
SimClock: deterministic simulated time (tests, replays)

The engine never calls datetime.now() directly; "current year" comes from
an injected clock.
"""

from __future__ import annotations

from datetime import datetime, timedelta, timezone
from typing import Protocol


class IClock(Protocol):
    """Clock interface used by all time-dependent code."""

    def now(self) -> datetime:
        """Current time as timezone-aware UTC datetime."""
        ...

    def current_year(self) -> int:
        """Calendar year of :meth:`now`."""
        ...


class WallClock:
    """Real wall-clock time."""

    def now(self) -> datetime:
        return datetime.now(timezone.utc)

    def current_year(self) -> int:
        return self.now().year


class SimClock:
    """Simulated clock.

    Time advances only when explicitly set.
    """

    def __init__(self, start: datetime | None = None) -> None:
        self._time = start or datetime(2024, 1, 1, tzinfo=timezone.utc)

    def now(self) -> datetime:
        return self._time

    def current_year(self) -> int:
        return self._time.year

    def set_time(self, t: datetime) -> None:
        """Advance time. Must be monotonically increasing."""
        if t < self._time:
            raise ValueError(
                f"SimClock cannot go backwards: {t} < {self._time}"
            )
        self._time = t

    def advance_days(self, days: int) -> None:
        """Advance time by whole days."""
        self.set_time(self._time + timedelta(days=days))
