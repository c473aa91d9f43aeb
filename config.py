# /// script
# requires-python = ">=3.12"
# dependencies = []
# ///
"""Centralized configuration for environment variables."""

import logging
import os

SEED_ENV = "BASEBALL_SEED"
LOG_LEVEL_ENV = "BASEBALL_LOG_LEVEL"
DEFAULT_LOG_LEVEL = "WARNING"

logger = logging.getLogger(__name__)


def get_seed() -> int | None:
    """Return the simulator seed, or None if not set or not an integer."""
    raw = os.environ.get(SEED_ENV, "").strip()
    if not raw:
        return None
    try:
        return int(raw)
    except ValueError:
        logger.warning("Ignoring %s=%r: not an integer", SEED_ENV, raw)
        return None


def get_log_level() -> str:
    """Return the configured logging level name (default WARNING)."""
    raw = os.environ.get(LOG_LEVEL_ENV, "").strip().upper()
    if not raw:
        return DEFAULT_LOG_LEVEL
    if not isinstance(logging.getLevelName(raw), int):
        logger.warning("Ignoring %s=%r: unknown logging level", LOG_LEVEL_ENV, raw)
        return DEFAULT_LOG_LEVEL
    return raw


def configure_logging(level: str | None = None) -> None:
    """Configure root logging for command-line entry points."""
    logging.basicConfig(
        level=level or get_log_level(),
        format="%(levelname)s: %(name)s: %(message)s",
    )
