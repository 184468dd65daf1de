"""
Engine Core - Immutable game state and the rules that transform it.

The engine is the runtime that:
1. Models cards, players and the table (state)
2. Builds, shuffles and draws the deck (deck)
3. Decides legality and resolves card effects (rules)
4. Applies one action per turn, leaving turn order to the driver
"""

from .errors import ConfigurationError, InvariantViolation, RoadRaceError
from .state import (
    ActionState,
    BlockKind,
    Card,
    CardName,
    CardType,
    EventType,
    GameEvent,
    GameState,
    InPlay,
    PlayerState,
)
from .action import Action, ActionType
from .deck import DrawResult, create_deck, draw, shuffle
from .rules import (
    add_game_event,
    advance_turn,
    apply_action,
    apply_card_to_player,
    begin_target_selection,
    check_win_condition,
    discard_card,
    draw_card,
    is_card_playable,
    is_card_playable_for,
    play_card,
)

__all__ = [
    "ConfigurationError",
    "InvariantViolation",
    "RoadRaceError",
    "ActionState",
    "BlockKind",
    "Card",
    "CardName",
    "CardType",
    "EventType",
    "GameEvent",
    "GameState",
    "InPlay",
    "PlayerState",
    "Action",
    "ActionType",
    "DrawResult",
    "create_deck",
    "draw",
    "shuffle",
    "add_game_event",
    "advance_turn",
    "apply_action",
    "apply_card_to_player",
    "begin_target_selection",
    "check_win_condition",
    "discard_card",
    "draw_card",
    "is_card_playable",
    "is_card_playable_for",
    "play_card",
]
