"""
Strategy Factory - Create AI strategies by name.

Seat configurations name their strategy as a string; this module maps
those names to strategy classes.
"""

from __future__ import annotations

from .aggressor import AggressorStrategy
from .heuristic import HeuristicStrategy
from .policy import AIPlayer, AIStrategy
from ..engine_core.errors import ConfigurationError

STRATEGIES: dict[str, type[AIStrategy]] = {
    "Heuristic": HeuristicStrategy,
    "Aggressor": AggressorStrategy,
}

STRATEGY_NAMES: tuple[str, ...] = tuple(STRATEGIES)


def create_ai_strategy(name: str) -> AIStrategy:
    """Create the strategy registered under name."""
    try:
        return STRATEGIES[name]()
    except KeyError:
        raise ConfigurationError(f"Unknown AI strategy: {name}") from None


def create_ai_player(name: str) -> AIPlayer:
    """Create an AIPlayer driven by the named strategy."""
    return AIPlayer(create_ai_strategy(name))
