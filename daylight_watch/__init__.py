"""Daylight and night detection with transition callbacks."""

__version__ = "1.0.0"

from .core.config import Config, SunlightOptions, load_config
from .core.watcher import SunlightWatcher, on_sunlight_change
from .solar.day_night import (
    SunlightResult,
    check_after_sunrise,
    check_after_sunset,
    check_daylight,
    check_night_time,
    get_day_night_mode,
    is_after_sunrise,
    is_after_sunset,
    is_daylight,
    is_night_time,
)
from .solar.geolocation import GeolocationError, Geolocator, IpApiGeolocator, ResolvedLocation
from .solar.sun import get_sun_times

__all__ = [
    "__version__",
    "Config",
    "SunlightOptions",
    "load_config",
    "SunlightWatcher",
    "on_sunlight_change",
    "SunlightResult",
    "check_after_sunrise",
    "check_after_sunset",
    "check_daylight",
    "check_night_time",
    "get_day_night_mode",
    "is_after_sunrise",
    "is_after_sunset",
    "is_daylight",
    "is_night_time",
    "GeolocationError",
    "Geolocator",
    "IpApiGeolocator",
    "ResolvedLocation",
    "get_sun_times",
]
