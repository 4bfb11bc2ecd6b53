"""
Configuration constants and environment setup.
"""

import logging
import os

from dotenv import load_dotenv

logger = logging.getLogger(__name__)

load_dotenv()


def env_int(name: str, default: int) -> int:
    """Read a positive integer from the environment, falling back to ``default``."""
    raw = os.environ.get(name)
    if raw is None:
        return default
    try:
        value = int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer, using %d", name, raw, default)
        return default
    if value < 1:
        logger.warning("Ignoring %s=%r: must be at least 1, using %d", name, raw, default)
        return default
    return value


def env_log_level(name: str, default: str) -> str:
    """Read a logging level name from the environment, falling back to ``default``."""
    level = os.environ.get(name, default).upper()
    if not isinstance(logging.getLevelName(level), int):
        logger.warning("Ignoring %s=%r: unknown log level, using %s", name, level, default)
        return default
    return level


CALENDAR_NAME = os.environ.get("TRACS2CAL_CALENDAR_NAME", "TRACS Converter")
LOG_LEVEL = env_log_level("TRACS2CAL_LOG_LEVEL", "WARNING")
PREVIEW_ROWS = env_int("TRACS2CAL_PREVIEW_ROWS", 5)

ICS_FILENAME = "tracs_schedule.ics"
