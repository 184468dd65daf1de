"""
Configuration - Game constants and environment-driven settings.

Game constants are fixed by the rules and shared by the engine, the
driver and the CLI. Runtime settings come from the environment.
"""

import logging
import os

# Rules
TARGET_DISTANCE = 1000
INITIAL_HAND_SIZE = 5
EVENT_LOG_CAPACITY = 50
MIN_PLAYERS = 2
MAX_PLAYERS = 4

# Environment configuration
ROADRACE_LOG_LEVEL = os.getenv("ROADRACE_LOG_LEVEL", "WARNING")
ROADRACE_SEED = os.getenv("ROADRACE_SEED", None)


def default_seed() -> int | None:
    """Seed from ROADRACE_SEED, or None for an unseeded game."""
    from .engine_core.errors import ConfigurationError

    if ROADRACE_SEED is None or ROADRACE_SEED == "":
        return None
    try:
        return int(ROADRACE_SEED)
    except ValueError:
        raise ConfigurationError(
            f"ROADRACE_SEED must be an integer, got {ROADRACE_SEED!r}"
        ) from None


def configure_logging(level: str | None = None) -> None:
    """Install a root handler. Only entry points call this."""
    logging.basicConfig(
        level=(level or ROADRACE_LOG_LEVEL).upper(),
        format="[%(levelname)s] %(name)s: %(message)s",
    )
