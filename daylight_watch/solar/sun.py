"""Sun event calculation and minute-granularity comparison.

The ephemeris (suncalc) works in UTC. Event instants are converted into the
reference instant's own clock before their hour/minute fields are compared,
so an aware reference is read in its timezone and a naive one in local time.
"""

from datetime import UTC, datetime
from typing import Literal

from suncalc import get_times  # type: ignore[import-untyped]

SUNRISE = "sunrise"
SUNSET = "sunset"

EventKind = Literal["sunrise", "sunset"]


def _as_utc(value: object) -> datetime | None:
    """Normalize a suncalc event to an aware UTC datetime, None if it did not occur."""
    # suncalc yields NaT instead of a datetime when the sun never crosses the horizon
    if not isinstance(value, datetime) or value != value:
        return None
    # suncalc returns naive datetimes - treat them as UTC
    if value.tzinfo is None:
        return value.replace(tzinfo=UTC)
    return value.astimezone(UTC)


def get_sun_times(date: datetime, latitude: float, longitude: float) -> dict[str, datetime | None]:
    """Get sunrise and sunset times for a given date and location.

    Args:
        date: Instant whose calendar day is used (naive datetimes are local time)
        latitude: Latitude in degrees
        longitude: Longitude in degrees

    Returns:
        Dictionary with 'sunrise' and 'sunset' as UTC datetime objects, or None
        for an event that does not happen that day (polar day or night)
    """
    date = date.astimezone(UTC)

    times = get_times(date, longitude, latitude)

    return {
        SUNRISE: _as_utc(times[SUNRISE]),
        SUNSET: _as_utc(times[SUNSET]),
    }


def to_reference_clock(event: datetime, reference: datetime) -> datetime:
    """Express an event instant on the same wall clock as the reference instant."""
    if reference.tzinfo is None:
        return event.astimezone().replace(tzinfo=None)
    return event.astimezone(reference.tzinfo)


def is_at_or_after(reference: datetime, event: datetime) -> bool:
    """Check if the reference is at or after the event, to the minute.

    Seconds and calendar days are ignored: only hour then minute are compared,
    and an identical hour and minute counts as after.
    """
    if reference.hour > event.hour:
        return True
    if reference.hour == event.hour:
        return reference.minute >= event.minute
    return False
