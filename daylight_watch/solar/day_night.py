"""Day/night predicates built on the sunrise/sunset comparison."""

import asyncio
import logging
import os
from dataclasses import dataclass
from datetime import datetime

from ..core.config import SunlightOptions
from .geolocation import (
    Geolocator,
    IpApiGeolocator,
    LocationSource,
    ResolvedLocation,
    resolve_location,
)
from .sun import SUNRISE, SUNSET, EventKind, get_sun_times, is_at_or_after, to_reference_clock

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class SunlightResult:
    """Result of a sunlight predicate, tagged with the location it used."""

    value: bool
    location: ResolvedLocation

    @property
    def source(self) -> LocationSource:
        """Where the coordinates came from."""
        return self.location.source

    @property
    def used_fallback(self) -> bool:
        """True if the default origin coordinates were used."""
        return self.location.source == "default"

    def __bool__(self) -> bool:
        return self.value


def get_default_geolocator() -> Geolocator:
    """Return the geolocation capability used when none is supplied."""
    return IpApiGeolocator()


def _reference_time(options: SunlightOptions) -> datetime:
    if options.reference_time is not None:
        return options.reference_time
    return datetime.now().astimezone()


def _pinned(options: SunlightOptions) -> SunlightOptions:
    """Capture "now" once so that paired checks see the same instant."""
    if options.reference_time is not None:
        return options
    return options.model_copy(update={"reference_time": _reference_time(options)})


async def check_after_event(
    event: EventKind,
    options: SunlightOptions | None = None,
    geolocator: Geolocator | None = None,
) -> SunlightResult:
    """Check if the reference instant is at or after a sun event.

    Args:
        event: "sunrise" or "sunset"
        options: Evaluation options (defaults: origin coordinates, now)
        geolocator: Geolocation capability, only used when options request it

    Returns:
        SunlightResult with the comparison and the resolved location
    """
    if options is None:
        options = SunlightOptions()
    if options.use_geolocation and geolocator is None:
        geolocator = get_default_geolocator()

    reference = _reference_time(options)
    location = await resolve_location(options, geolocator)

    event_instant = get_sun_times(reference, location.latitude, location.longitude)[event]
    if event_instant is None:
        # No such event today (polar day or night): never "after" it
        logger.warning(
            "No %s at %s, %s on %s",
            event,
            location.latitude,
            location.longitude,
            reference.date(),
        )
        return SunlightResult(value=False, location=location)

    event_time = to_reference_clock(event_instant, reference)
    return SunlightResult(value=is_at_or_after(reference, event_time), location=location)


async def check_after_sunrise(
    options: SunlightOptions | None = None, geolocator: Geolocator | None = None
) -> SunlightResult:
    """Check if it is at or after sunrise, with location provenance."""
    return await check_after_event(SUNRISE, options, geolocator)


async def check_after_sunset(
    options: SunlightOptions | None = None, geolocator: Geolocator | None = None
) -> SunlightResult:
    """Check if it is at or after sunset, with location provenance."""
    return await check_after_event(SUNSET, options, geolocator)


async def check_daylight(
    options: SunlightOptions | None = None, geolocator: Geolocator | None = None
) -> SunlightResult:
    """Check if it is daylight: after sunrise and not yet after sunset.

    Both comparisons run concurrently on the same reference instant. The
    reported location is the sunrise check's.
    """
    options = _pinned(options or SunlightOptions())
    if options.use_geolocation and geolocator is None:
        geolocator = get_default_geolocator()
    after_sunrise, after_sunset = await asyncio.gather(
        check_after_sunrise(options, geolocator),
        check_after_sunset(options, geolocator),
    )
    return SunlightResult(
        value=after_sunrise.value and not after_sunset.value,
        location=after_sunrise.location,
    )


async def check_night_time(
    options: SunlightOptions | None = None, geolocator: Geolocator | None = None
) -> SunlightResult:
    """Check if it is night time, which is defined as after sunset.

    Before sunrise is not night time by this definition, even though it is
    not daylight either.
    """
    return await check_after_sunset(options, geolocator)


async def is_after_sunrise(
    options: SunlightOptions | None = None, geolocator: Geolocator | None = None
) -> bool:
    """Return True if it is at or after sunrise at the given location."""
    return (await check_after_sunrise(options, geolocator)).value


async def is_after_sunset(
    options: SunlightOptions | None = None, geolocator: Geolocator | None = None
) -> bool:
    """Return True if it is at or after sunset at the given location."""
    return (await check_after_sunset(options, geolocator)).value


async def is_daylight(
    options: SunlightOptions | None = None, geolocator: Geolocator | None = None
) -> bool:
    """Return True if it is currently daylight."""
    return (await check_daylight(options, geolocator)).value


async def is_night_time(
    options: SunlightOptions | None = None, geolocator: Geolocator | None = None
) -> bool:
    """Return True if it is currently night time (after sunset)."""
    return (await check_night_time(options, geolocator)).value


async def get_day_night_mode(
    options: SunlightOptions | None = None, geolocator: Geolocator | None = None
) -> bool:
    """Get day/night mode with optional debug override.

    Checks DEBUG_DAY_NIGHT_MODE env var first. If set to "day" or "night",
    returns that mode. Otherwise uses the daylight check.

    Returns:
        True if day time, False if night time
    """
    debug_mode = os.getenv("DEBUG_DAY_NIGHT_MODE", "").lower()
    if debug_mode == "day":
        return True
    if debug_mode == "night":
        return False
    return await is_daylight(options, geolocator)
