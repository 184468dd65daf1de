"""
Race Game Setup - Creates initial game state.

This module handles:
- Validating the seat configuration (2-4 players)
- Shuffling a fresh deck
- Dealing the opening hands in seat order
- Assigning stable player ids

The returned state has turn_index 0, an empty discard pile, an empty
event log and no pending target selection.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass
from typing import Sequence

from ..bots.factory import STRATEGY_NAMES
from ..config import INITIAL_HAND_SIZE, MAX_PLAYERS, MIN_PLAYERS
from ..engine_core import deck
from ..engine_core.errors import ConfigurationError
from ..engine_core.state import GameState, PlayerState

logger = logging.getLogger(__name__)


@dataclass(frozen=True)
class PlayerConfig:
    """Per-seat configuration. ai_strategy None means a human seat."""
    ai_strategy: str | None = None


def create_initial_game_state(
    player_configs: Sequence[PlayerConfig],
    rng: random.Random | None = None,
    hand_size: int = INITIAL_HAND_SIZE,
) -> GameState:
    """
    Set up a new race.

    Args:
        player_configs: One entry per seat, in turn order (2-4 seats)
        rng: Optional seeded generator for a reproducible deal
        hand_size: Cards dealt to each seat

    Returns:
        Initial GameState ready for the first turn

    Raises:
        ConfigurationError: wrong number of seats or unknown AI strategy
    """
    if not MIN_PLAYERS <= len(player_configs) <= MAX_PLAYERS:
        raise ConfigurationError(
            f"A race needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(player_configs)}"
        )
    for config in player_configs:
        if config.ai_strategy is not None and config.ai_strategy not in STRATEGY_NAMES:
            raise ConfigurationError(f"Unknown AI strategy: {config.ai_strategy}")

    working_deck = tuple(deck.shuffle(deck.create_deck(), rng))
    working_discard = ()

    players: list[PlayerState] = []
    for seat, config in enumerate(player_configs):
        result = deck.draw(working_deck, working_discard, hand_size, rng)
        working_deck = result.new_deck
        working_discard = result.new_discard
        players.append(PlayerState(
            player_id=str(seat + 1),
            hand=result.drawn,
            ai_strategy=config.ai_strategy,
        ))

    logger.info(f"New race with {len(players)} players, {len(working_deck)} cards left in deck")

    return GameState(
        deck=working_deck,
        discard=working_discard,
        players=tuple(players),
        turn_index=0,
        action_state=None,
        events=(),
    )


def configs_for(strategies: Sequence[str | None]) -> list[PlayerConfig]:
    """Build seat configs from a list of strategy names (None for humans)."""
    return [PlayerConfig(ai_strategy=name) for name in strategies]
