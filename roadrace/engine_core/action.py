"""
Action System - What a seat does on its turn.

An action is either playing a card (optionally at a target player) or
discarding a card. Human input and AI strategies both produce Actions;
the rule engine consumes them through rules.apply_action().
"""

from __future__ import annotations
from dataclasses import dataclass
from enum import Enum


class ActionType(Enum):
    """Types of turn actions."""
    PLAY_CARD = "play_card"
    DISCARD_CARD = "discard_card"


@dataclass(frozen=True)
class Action:
    """
    A complete turn action.

    target_id is only meaningful for Block cards played on an opponent.
    """
    action_type: ActionType
    card_id: str
    target_id: str | None = None

    @classmethod
    def play(cls, card_id: str, target_id: str | None = None) -> Action:
        """Factory for play action."""
        return cls(action_type=ActionType.PLAY_CARD, card_id=card_id, target_id=target_id)

    @classmethod
    def discard(cls, card_id: str) -> Action:
        """Factory for discard action."""
        return cls(action_type=ActionType.DISCARD_CARD, card_id=card_id)

    @property
    def is_play(self) -> bool:
        return self.action_type == ActionType.PLAY_CARD
