"""
Bot Policy - Interface for AI decision-making.

An AIStrategy looks at one player and the table and returns the Action
that player should take. Strategies must be:
- Pure: no state is kept between calls and the inputs are not modified
- Total: an Action is returned for any non-empty hand
- Deterministic: no randomness, ties go to the first card in hand order
  and the first opponent in seat order
"""

from __future__ import annotations
from abc import ABC, abstractmethod
from typing import TYPE_CHECKING

from ..engine_core.errors import InvariantViolation

if TYPE_CHECKING:
    from ..engine_core.action import Action
    from ..engine_core.state import GameState, PlayerState


class AIStrategy(ABC):
    """
    Abstract base class for AI strategies.

    Implementations range from a fixed priority list to targeted
    aggression; all of them consult the rule engine for legality.
    """

    @abstractmethod
    def decide_move(self, player: PlayerState, state: GameState) -> Action:
        """
        Select the action for player.

        Args:
            player: The seat the decision is for
            state: Current game state

        Returns:
            Action to play or discard a card from player's hand
        """
        pass

    def get_name(self) -> str:
        """Get the strategy's name/identifier."""
        return self.__class__.__name__.removesuffix("Strategy")


class AIPlayer:
    """
    An AI-controlled seat.

    Holds one strategy and forwards every decision to it.
    """

    def __init__(self, strategy: AIStrategy):
        self.strategy = strategy

    def decide_move(self, player: PlayerState, state: GameState) -> Action:
        return self.strategy.decide_move(player, state)

    def get_name(self) -> str:
        return self.strategy.get_name()


def require_hand(player: PlayerState) -> None:
    """A decision needs at least one card to play or discard."""
    if not player.hand:
        raise InvariantViolation(f"{player.display_name} has no cards to decide on")
