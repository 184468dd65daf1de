"""
Bots module - AI strategies for computer-controlled seats.

Provides:
- AIStrategy: Interface for decision-making
- AIPlayer: Delegating wrapper around one strategy
- HeuristicStrategy: Fixed priority list
- AggressorStrategy: Blocks the leader first
- create_ai_strategy: Factory by strategy name
"""

from .policy import AIPlayer, AIStrategy
from .heuristic import HeuristicStrategy
from .aggressor import AggressorStrategy
from .factory import STRATEGIES, STRATEGY_NAMES, create_ai_player, create_ai_strategy

__all__ = [
    "AIPlayer",
    "AIStrategy",
    "HeuristicStrategy",
    "AggressorStrategy",
    "STRATEGIES",
    "STRATEGY_NAMES",
    "create_ai_player",
    "create_ai_strategy",
]
