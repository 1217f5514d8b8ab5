"""Debug output and logging setup."""

import logging
import os

LOG_FORMAT = "%(asctime)s %(levelname)s [%(name)s] %(message)s"


def _is_debug_mode() -> bool:
    """Check if debug mode is enabled."""
    return os.getenv("DEBUG_MODE", "false").lower() == "true"


def debug_print(*args: object, **kwargs: object) -> None:
    """Print only if DEBUG_MODE is enabled."""
    if _is_debug_mode():
        print(*args, **kwargs)  # type: ignore[call-overload]


def configure_logging() -> None:
    """Configure root logging; DEBUG level when DEBUG_MODE is enabled."""
    level = logging.DEBUG if _is_debug_mode() else logging.INFO
    logging.basicConfig(level=level, format=LOG_FORMAT)
