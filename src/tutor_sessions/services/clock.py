"""Time source and timestamp helpers for the session rules."""

from dataclasses import dataclass
from datetime import UTC, datetime, timedelta
from typing import Protocol

_MINUTE = timedelta(minutes=1)


class Clock(Protocol):
    """Source of the current time."""

    def now(self) -> datetime:
        """Return the current timezone-aware UTC time."""


@dataclass(frozen=True)
class SystemClock(Clock):
    """Clock backed by the system time."""

    def now(self) -> datetime:
        """Return the current UTC time."""
        return datetime.now(tz=UTC)


def parse_timestamp(value: object) -> datetime | None:
    """Interpret a stored timestamp, returning None when malformed.

    Accepts datetimes and ISO-8601 strings. Naive values are read as UTC.
    """
    if isinstance(value, datetime):
        parsed = value
    elif isinstance(value, str) and value.strip():
        try:
            parsed = datetime.fromisoformat(value.strip().replace("Z", "+00:00"))
        except ValueError:
            return None
    else:
        return None
    if parsed.tzinfo is None:
        return parsed.replace(tzinfo=UTC)
    return parsed


def elapsed_minutes(start: datetime, end: datetime) -> int:
    """Return whole minutes between two instants, never negative."""
    return max(0, (end - start) // _MINUTE)
