"""Command-line entry point for daylight-watch."""

import argparse
import asyncio
import os
import signal
import sys
from datetime import datetime

from ..solar.day_night import get_day_night_mode, is_after_sunrise, is_after_sunset
from ..solar.geolocation import IpApiGeolocator, resolve_location
from .config import Config, load_config
from .debug import configure_logging, debug_print
from .watcher import on_sunlight_change

_shutdown_event: asyncio.Event | None = None


def shutdown(signum: int, frame: object) -> None:  # noqa: ARG001
    """Graceful shutdown handler."""
    print("\nStopping watcher...")
    if _shutdown_event:
        _shutdown_event.set()
    else:
        sys.exit(0)


def resolve_config(config_path: str | None) -> Config:
    """Load the config file; fall back to defaults if the default path is absent.

    Exits with status 1 if an explicitly requested file is missing or invalid.
    """
    explicit = config_path is not None or "CONFIG_PATH" in os.environ
    try:
        return load_config(config_path)
    except FileNotFoundError as e:
        if explicit:
            print(f"Failed to load config: {e}")
            sys.exit(1)
        debug_print("No config file found, using defaults")
        return Config()
    except Exception as e:
        print(f"Failed to load config: {e}")
        sys.exit(1)


def apply_overrides(config: Config, args: argparse.Namespace) -> Config:
    """Apply command-line coordinate overrides to the loaded config."""
    location = config.location
    updates: dict[str, object] = {}
    if args.lat is not None:
        updates["latitude"] = args.lat
    if args.lon is not None:
        updates["longitude"] = args.lon
    if args.geolocate:
        updates["use_geolocation"] = True
    if not updates:
        return config
    return config.model_copy(update={"location": location.model_copy(update=updates)})


def _print_transition(is_daylight_now: bool) -> None:
    now = datetime.now().astimezone().strftime("%Y-%m-%dT%H:%M:%S%z")
    print(f"{now} {'daylight' if is_daylight_now else 'night'}")


async def print_status(config: Config) -> bool:
    """Print the current sunlight state and return whether it is daylight."""
    options = config.to_options(reference_time=datetime.now().astimezone())
    geolocator = IpApiGeolocator(config.geolocation.api_url, config.geolocation.timeout_seconds)

    # Resolve once so the three checks share one geolocation lookup
    location = await resolve_location(options, geolocator)
    pinned = options.model_copy(
        update={
            "latitude": location.latitude,
            "longitude": location.longitude,
            "use_geolocation": False,
        }
    )

    after_sunrise, after_sunset = await asyncio.gather(
        is_after_sunrise(pinned), is_after_sunset(pinned)
    )
    is_day_time = await get_day_night_mode(pinned)

    print(f"Location: {location.latitude}, {location.longitude} ({location.source})")
    print(f"  After sunrise: {'yes' if after_sunrise else 'no'}")
    print(f"  After sunset:  {'yes' if after_sunset else 'no'}")
    print(f"  Mode: {'daylight' if is_day_time else 'night'}")
    return is_day_time


async def run_watch(config: Config) -> None:
    """Watch for transitions until shutdown is requested."""
    global _shutdown_event
    _shutdown_event = asyncio.Event()

    loop = asyncio.get_running_loop()
    if hasattr(loop, "add_signal_handler"):
        try:
            loop.add_signal_handler(signal.SIGINT, shutdown, signal.SIGINT, None)
            loop.add_signal_handler(signal.SIGTERM, shutdown, signal.SIGTERM, None)
        except (ValueError, OSError, NotImplementedError):
            # Not available on this platform; main() installs fallbacks
            pass

    geolocator = IpApiGeolocator(config.geolocation.api_url, config.geolocation.timeout_seconds)
    watcher = await on_sunlight_change(
        config.watch.interval_seconds, config.to_options(), geolocator=geolocator
    )
    watcher.on_toggle(_print_transition)
    print(f"Watching every {config.watch.interval_seconds}s (Ctrl+C to stop)")

    try:
        await _shutdown_event.wait()
    finally:
        watcher.close()


async def run(config_path: str | None, args: argparse.Namespace) -> None:
    """Print the current state, then watch unless --once was given."""
    config = apply_overrides(resolve_config(config_path), args)
    debug_print(f"Configuration: {config.model_dump()}")
    await print_status(config)
    if not args.once:
        await run_watch(config)


def build_parser() -> argparse.ArgumentParser:
    """Build the command-line argument parser."""
    parser = argparse.ArgumentParser(
        description="Report whether it is daylight or night and watch for transitions"
    )
    parser.add_argument(
        "--config",
        "-c",
        type=str,
        default=None,
        help="Path to configuration file (overrides CONFIG_PATH environment variable)",
    )
    parser.add_argument("--lat", type=float, default=None, help="Latitude in degrees")
    parser.add_argument("--lon", type=float, default=None, help="Longitude in degrees")
    parser.add_argument(
        "--geolocate", action="store_true", help="Resolve the position via IP geolocation"
    )
    parser.add_argument(
        "--once", action="store_true", help="Print the current state and exit"
    )
    return parser


def main(argv: list[str] | None = None) -> None:
    """Main entry point."""
    args = build_parser().parse_args(argv)
    configure_logging()

    if hasattr(signal, "SIGTERM"):
        signal.signal(signal.SIGTERM, shutdown)
    if hasattr(signal, "SIGINT"):
        signal.signal(signal.SIGINT, shutdown)

    try:
        asyncio.run(run(args.config, args))
    except KeyboardInterrupt:
        print("\nStopping watcher...")
        sys.exit(0)


if __name__ == "__main__":
    main()
