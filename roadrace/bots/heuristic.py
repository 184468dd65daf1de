"""
Heuristic Strategy - A fixed priority list.

In order:
1. Blocked: play the Remedy for the first active block
2. Gate card not played yet: play it
3. Ready to drive: play the highest Progress card
4. Block the leading opponent with a card they are not immune to
5. Play an Immunity for a kind not already covered
6. Discard the first card in hand
"""

from __future__ import annotations
import logging
from typing import TYPE_CHECKING

from .policy import AIStrategy, require_hand
from ..engine_core.action import Action
from ..engine_core.errors import InvariantViolation
from ..engine_core.state import (
    CardType,
    get_highest_progress_card,
    get_leader,
    get_opponents,
    get_remedy_for_block,
    has_immunity,
    has_played_gate_card,
    is_blocked,
    is_immune_to,
)

if TYPE_CHECKING:
    from ..engine_core.state import GameState, PlayerState

logger = logging.getLogger(__name__)


class HeuristicStrategy(AIStrategy):
    """Drive when possible, repair when stopped, attack the leader otherwise."""

    def decide_move(self, player: PlayerState, state: GameState) -> Action:
        require_hand(player)
        blocked = is_blocked(player)

        if blocked:
            remedy = get_remedy_for_block(player, player.in_play.blocks[0])
            if remedy is not None:
                logger.debug(f"{player.display_name}: remedy {remedy.name.value}")
                return Action.play(remedy.id)

        if not has_played_gate_card(player):
            gate = next((c for c in player.hand if c.is_gate), None)
            if gate is not None:
                return Action.play(gate.id)
        elif not blocked:
            progress = get_highest_progress_card(player)
            if progress is not None:
                return Action.play(progress.id)

        opponents = get_opponents(player, state)
        if not opponents:
            raise InvariantViolation(f"{player.display_name} has no opponent to block")
        leader = get_leader(opponents)
        for card in player.hand:
            if card.type == CardType.BLOCK and not is_immune_to(leader, card):
                logger.debug(f"{player.display_name}: {card.name.value} on leader {leader.display_name}")
                return Action.play(card.id, leader.player_id)

        for card in player.hand:
            if card.type == CardType.IMMUNITY and not has_immunity(player, card.remedies_type):
                return Action.play(card.id)

        return Action.discard(player.hand[0].id)
