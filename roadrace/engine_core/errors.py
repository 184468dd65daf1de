"""
Engine Errors - Exceptions raised by the rule engine.

Only two conditions are raised as exceptions:
- ConfigurationError: a game cannot be created as requested
- InvariantViolation: the data model is malformed (a defect, not user error)

Illegal moves and unknown card ids are NOT errors. They are reported
in-band through the returned state and its event log.
"""


class RoadRaceError(Exception):
    """Base class for all engine errors."""


class ConfigurationError(RoadRaceError, ValueError):
    """Raised when game setup receives an invalid configuration."""


class InvariantViolation(RoadRaceError):
    """Raised when the game data model breaks one of its invariants."""
