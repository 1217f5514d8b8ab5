"""Location resolution with optional IP geolocation."""

import logging
from dataclasses import dataclass
from typing import Any, Literal, Protocol

import httpx

from ..core.config import DEFAULT_GEOLOCATION_URL, SunlightOptions
from ..core.debug import debug_print

logger = logging.getLogger(__name__)

USER_AGENT = "daylight-watch/1.0"

DEFAULT_LATITUDE = 0.0
DEFAULT_LONGITUDE = 0.0

LocationSource = Literal["explicit", "geolocation", "default"]


class GeolocationError(Exception):
    """Raised when the current position cannot be determined."""


class Geolocator(Protocol):
    """Capability that reports the host's current position."""

    async def get_current_position(self) -> tuple[float, float]:
        """Return (latitude, longitude) or raise GeolocationError."""
        ...


@dataclass(frozen=True)
class ResolvedLocation:
    """Fully resolved coordinates and where they came from."""

    latitude: float
    longitude: float
    source: LocationSource


class IpApiGeolocator:
    """Geolocator backed by an ip-api.com compatible HTTP endpoint."""

    def __init__(
        self,
        api_url: str = DEFAULT_GEOLOCATION_URL,
        timeout_seconds: float = 5.0,
    ) -> None:
        self.api_url = api_url
        self.timeout_seconds = timeout_seconds

    async def get_current_position(self) -> tuple[float, float]:
        """Query the endpoint and return (latitude, longitude)."""
        debug_print(f"Geolocation request: {self.api_url}")

        try:
            async with httpx.AsyncClient(timeout=self.timeout_seconds) as client:
                response = await client.get(self.api_url, headers={"User-Agent": USER_AGENT})
        except httpx.HTTPError as e:
            raise GeolocationError(f"Geolocation request failed: {e}") from e

        if not response.is_success:
            raise GeolocationError(f"Geolocation API error: HTTP {response.status_code}")

        try:
            payload: Any = response.json()
        except ValueError as e:
            raise GeolocationError("Geolocation response is not valid JSON") from e

        if not isinstance(payload, dict):
            raise GeolocationError("Geolocation response is not a JSON object")

        # ip-api.com reports failures in-band with HTTP 200
        if payload.get("status") == "fail":
            message = payload.get("message", "unknown")
            raise GeolocationError(f"Geolocation lookup failed: {message}")

        latitude = payload.get("lat", payload.get("latitude"))
        longitude = payload.get("lon", payload.get("longitude"))
        if latitude is None or longitude is None:
            raise GeolocationError("Geolocation response has no coordinates")

        try:
            return float(latitude), float(longitude)
        except (TypeError, ValueError) as e:
            raise GeolocationError("Geolocation response has malformed coordinates") from e


def _fallback(options: SunlightOptions) -> ResolvedLocation:
    """Use explicit coordinates where given, the origin otherwise."""
    explicit = options.latitude is not None or options.longitude is not None
    return ResolvedLocation(
        latitude=options.latitude if options.latitude is not None else DEFAULT_LATITUDE,
        longitude=options.longitude if options.longitude is not None else DEFAULT_LONGITUDE,
        source="explicit" if explicit else "default",
    )


async def resolve_location(
    options: SunlightOptions, geolocator: Geolocator | None = None
) -> ResolvedLocation:
    """Resolve the coordinates for an evaluation.

    Geolocation is only attempted when requested and a geolocator is
    available. Explicit coordinates override geolocated ones field by field,
    and a location with both explicit coordinates is tagged "explicit" even
    when geolocation succeeded. Any geolocation failure is logged and
    degrades to the fallback.

    Args:
        options: Evaluation options
        geolocator: Geolocation capability, None when the host has none

    Returns:
        Resolved location, never partially filled
    """
    if not options.use_geolocation or geolocator is None:
        return _fallback(options)

    try:
        geo_latitude, geo_longitude = await geolocator.get_current_position()
    except Exception as e:
        logger.warning(
            "Geolocation not allowed or failed, using default or provided coords: %s", e
        )
        return _fallback(options)

    overridden = options.latitude is not None and options.longitude is not None
    return ResolvedLocation(
        latitude=options.latitude if options.latitude is not None else geo_latitude,
        longitude=options.longitude if options.longitude is not None else geo_longitude,
        source="explicit" if overridden else "geolocation",
    )
