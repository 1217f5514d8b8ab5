"""Shared test fixtures and helpers."""

from collections.abc import Iterator
from datetime import UTC, datetime
from unittest.mock import AsyncMock, MagicMock, patch

import pytest

from daylight_watch.core.config import SunlightOptions

# Naive UTC datetimes, as suncalc returns them
SUNRISE = datetime(2026, 6, 21, 6, 30, 0)
SUNSET = datetime(2026, 6, 21, 18, 45, 0)


def at(hour: int, minute: int, second: int = 0) -> SunlightOptions:
    """Options for a UTC reference instant on the test day, with explicit coordinates."""
    return SunlightOptions(
        latitude=49.18,
        longitude=-0.37,
        reference_time=datetime(2026, 6, 21, hour, minute, second, tzinfo=UTC),
    )


class FakeGeolocator:
    """Geolocator returning a fixed position or raising a given error."""

    def __init__(
        self,
        position: tuple[float, float] = (49.18, -0.37),
        error: Exception | None = None,
    ) -> None:
        self.get_current_position = AsyncMock(return_value=position, side_effect=error)


@pytest.fixture
def mock_sun_times() -> Iterator[MagicMock]:
    """Patch suncalc so sunrise is 06:30 UTC and sunset 18:45 UTC."""
    with patch(
        "daylight_watch.solar.sun.get_times",
        return_value={
            "sunrise": SUNRISE,
            "sunset": SUNSET,
            "solarNoon": datetime(2026, 6, 21, 12, 37),
        },
    ) as mock_get_times:
        yield mock_get_times
