"""Sunlight state watcher with edge-triggered callbacks."""

import inspect
import logging
from collections.abc import Awaitable, Callable
from itertools import count
from typing import Literal

from apscheduler.schedulers.asyncio import AsyncIOScheduler  # type: ignore[import-untyped]
from apscheduler.triggers.interval import IntervalTrigger  # type: ignore[import-untyped]

from ..solar.day_night import get_day_night_mode
from ..solar.geolocation import Geolocator
from .config import SunlightOptions
from .debug import debug_print

logger = logging.getLogger(__name__)

TransitionCallback = Callable[[], Awaitable[None] | None]
ToggleCallback = Callable[[bool], Awaitable[None] | None]
ListenerKind = Literal["night", "daylight", "toggle"]

_job_ids = count(1)


class MisfireWarningFilter(logging.Filter):
    """Filter to suppress APScheduler misfire warnings."""

    def filter(self, record: logging.LogRecord) -> bool:
        """Filter out misfire warnings from APScheduler."""
        # A slow tick makes the next one late; coalescing already handles it
        if "was missed by" in record.getMessage():
            return False
        return True


def _configure_scheduler_logger() -> None:
    """Configure APScheduler logger to suppress misfire warnings."""
    apscheduler_logger = logging.getLogger("apscheduler")
    if not any(isinstance(f, MisfireWarningFilter) for f in apscheduler_logger.filters):
        apscheduler_logger.addFilter(MisfireWarningFilter())


class SunlightWatcher:
    """Handle that polls daylight state and notifies on transitions.

    One scheduled job per handle evaluates daylight once per tick and fans
    the result out to every registered callback. Callbacks fire only when
    the state changes, in registration order.
    """

    def __init__(
        self,
        interval_seconds: float,
        options: SunlightOptions,
        had_daylight: bool,
        geolocator: Geolocator | None = None,
    ) -> None:
        if interval_seconds <= 0:
            raise ValueError("interval_seconds must be positive")
        self.interval_seconds = interval_seconds
        self.options = options
        self.geolocator = geolocator
        self.job_id = f"sunlight_watch_{next(_job_ids)}"
        self._had_daylight = had_daylight
        self._listeners: list[tuple[ListenerKind, Callable[..., Awaitable[None] | None]]] = []
        self._scheduler: AsyncIOScheduler | None = None
        self._owns_scheduler = False

    @property
    def had_daylight(self) -> bool:
        """Last recorded daylight state."""
        return self._had_daylight

    def on_night(self, callback: TransitionCallback) -> "SunlightWatcher":
        """Call callback on every daylight to night transition."""
        self._listeners.append(("night", callback))
        return self

    def on_daylight(self, callback: TransitionCallback) -> "SunlightWatcher":
        """Call callback on every night to daylight transition."""
        self._listeners.append(("daylight", callback))
        return self

    def on_toggle(self, callback: ToggleCallback) -> "SunlightWatcher":
        """Call callback(is_daylight_now) on every transition."""
        self._listeners.append(("toggle", callback))
        return self

    async def tick(self) -> None:
        """Re-evaluate daylight and dispatch callbacks if the state changed."""
        has_daylight = await get_day_night_mode(self.options, self.geolocator)
        if has_daylight == self._had_daylight:
            return

        self._had_daylight = has_daylight
        debug_print(f"Sunlight changed: {'daylight' if has_daylight else 'night'}")

        edge: ListenerKind = "daylight" if has_daylight else "night"
        for kind, callback in list(self._listeners):
            if kind == "toggle":
                await self._dispatch(callback, has_daylight)
            elif kind == edge:
                await self._dispatch(callback)

    async def _dispatch(self, callback: Callable[..., Awaitable[None] | None], *args: bool) -> None:
        try:
            result = callback(*args)
            if inspect.isawaitable(result):
                await result
        except Exception:
            logger.exception("Sunlight callback %r failed", callback)

    def start(self, scheduler: AsyncIOScheduler | None = None) -> AsyncIOScheduler:
        """Schedule the polling job.

        Args:
            scheduler: APScheduler instance (will be created and started if None)

        Returns:
            APScheduler instance running the job
        """
        if scheduler is None:
            _configure_scheduler_logger()
            scheduler = AsyncIOScheduler()
            scheduler.start()
            self._owns_scheduler = True

        scheduler.add_job(
            self.tick,
            trigger=IntervalTrigger(seconds=self.interval_seconds),
            id=self.job_id,
            max_instances=1,  # A tick runs to completion before the next one
            coalesce=True,  # Run at most once if multiple runs are missed
            misfire_grace_time=max(1, int(self.interval_seconds)),
        )
        self._scheduler = scheduler
        return scheduler

    def close(self) -> None:
        """Stop polling; shut the scheduler down if this handle created it."""
        scheduler = self._scheduler
        if scheduler is None:
            return
        self._scheduler = None

        if scheduler.get_job(self.job_id) is not None:
            scheduler.remove_job(self.job_id)
        if self._owns_scheduler:
            scheduler.shutdown(wait=False)
            self._owns_scheduler = False


async def on_sunlight_change(
    interval_seconds: float = 1,
    options: SunlightOptions | None = None,
    scheduler: AsyncIOScheduler | None = None,
    geolocator: Geolocator | None = None,
) -> SunlightWatcher:
    """Start watching for day/night transitions.

    The initial state is evaluated once before the handle is returned, so
    the first callback can only fire on a real transition.

    Args:
        interval_seconds: Polling interval in seconds
        options: Evaluation options; leave reference_time unset to follow the clock
        scheduler: Optional running APScheduler instance to add the job to
        geolocator: Geolocation capability, only used when options request it

    Returns:
        Watcher handle with chainable on_night/on_daylight/on_toggle
    """
    if interval_seconds <= 0:
        raise ValueError("interval_seconds must be positive")
    if options is None:
        options = SunlightOptions()

    had_daylight = await get_day_night_mode(options, geolocator)
    watcher = SunlightWatcher(interval_seconds, options, had_daylight, geolocator)
    debug_print(
        f"Watching sunlight every {interval_seconds}s, "
        f"initially {'daylight' if had_daylight else 'night'}"
    )
    watcher.start(scheduler)
    return watcher
