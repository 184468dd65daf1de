"""
Aggressor Strategy - Attack first, drive second.

Blocks the leading opponent whenever a Block card in hand can land on
them; otherwise plays the first legal card, and only discards when
nothing in hand is playable.
"""

from __future__ import annotations
from typing import TYPE_CHECKING

from .policy import AIStrategy, require_hand
from ..engine_core.action import Action
from ..engine_core.rules import get_valid_block_targets, is_card_playable_for
from ..engine_core.state import CardType, get_leader, get_opponents, is_immune_to

if TYPE_CHECKING:
    from ..engine_core.state import GameState, PlayerState


class AggressorStrategy(AIStrategy):

    def decide_move(self, player: PlayerState, state: GameState) -> Action:
        require_hand(player)

        leader = get_leader(get_opponents(player, state))
        if leader is not None:
            for card in player.hand:
                if card.type == CardType.BLOCK and not is_immune_to(leader, card):
                    return Action.play(card.id, leader.player_id)

        for card in player.hand:
            if card.type == CardType.BLOCK:
                targets = get_valid_block_targets(player, card, state)
                if targets:
                    return Action.play(card.id, targets[0].player_id)
            elif is_card_playable_for(card, player, state):
                return Action.play(card.id)

        return Action.discard(player.hand[0].id)
