"""Sun events, location resolution and day/night predicates."""

from .day_night import (
    SunlightResult,
    check_after_sunrise,
    check_after_sunset,
    check_daylight,
    check_night_time,
    is_after_sunrise,
    is_after_sunset,
    is_daylight,
    is_night_time,
)
from .geolocation import GeolocationError, Geolocator, IpApiGeolocator, ResolvedLocation
from .sun import get_sun_times, is_at_or_after

__all__ = [
    "GeolocationError",
    "Geolocator",
    "IpApiGeolocator",
    "ResolvedLocation",
    "SunlightResult",
    "check_after_sunrise",
    "check_after_sunset",
    "check_daylight",
    "check_night_time",
    "get_sun_times",
    "is_after_sunrise",
    "is_after_sunset",
    "is_at_or_after",
    "is_daylight",
    "is_night_time",
]
