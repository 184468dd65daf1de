"""
Rules - Legality, card effects and turn state transitions.

The rules module is the single point of state change.
Every public function takes a GameState and returns a GameState.

Design principles:
- Pure functions: (state, input) -> new_state, inputs never modified
- No-ops return the input object itself
- Illegal plays are not errors: the card is lost and the log says so
- Turn advancement is a separate, explicit call; nothing here advances
  the turn as a side effect
"""

from __future__ import annotations
import logging
import random
from dataclasses import replace

from .action import Action, ActionType
from .deck import draw
from .errors import InvariantViolation
from .state import (
    ActionState,
    BlockKind,
    Card,
    CardType,
    EventType,
    GameState,
    PlayerState,
    compute_ready,
    get_card_from_hand,
    get_opponents,
    has_played_gate_card,
    is_blocked_by,
    is_immune_to,
)
from ..config import EVENT_LOG_CAPACITY, TARGET_DISTANCE

logger = logging.getLogger(__name__)


# ============================================================================
# Legality
# ============================================================================

def is_card_playable(card: Card, state: GameState) -> bool:
    """Whether the player whose turn it is may legally play card."""
    return is_card_playable_for(card, state.current_player, state)


def is_card_playable_for(card: Card, player: PlayerState, state: GameState) -> bool:
    """
    Whether player may legally play card in state.

    - Progress: gate card played and no active blocks
    - Gate card: not played yet, or replayed to clear a Stop block
    - Other Remedy: an active block of the same kind
    - Block: always, unless a chosen target holds the matching Immunity
    - Immunity: always
    """
    if card.type == CardType.PROGRESS:
        return compute_ready(player)

    if card.type == CardType.REMEDY:
        if card.is_gate:
            return not has_played_gate_card(player) or is_blocked_by(player, BlockKind.STOP)
        if card.remedies_type is None:
            return False
        return is_blocked_by(player, card.remedies_type)

    if card.type == CardType.BLOCK:
        pending = state.action_state
        if pending is None or pending.target_id is None:
            return True
        target = state.require_player(pending.target_id)
        return not is_immune_to(target, card)

    return card.type == CardType.IMMUNITY


def get_valid_block_targets(
    player: PlayerState, card: Card, state: GameState
) -> list[PlayerState]:
    """Opponents of player, in seat order, not immune to the Block card."""
    if card.type != CardType.BLOCK:
        return []
    return [p for p in get_opponents(player, state) if not is_immune_to(p, card)]


# ============================================================================
# Card effects
# ============================================================================

def _split_blocks(
    blocks: tuple[Card, ...], kind: BlockKind | None
) -> tuple[tuple[Card, ...], tuple[Card, ...]]:
    """Return (blocks kept, blocks of the given kind)."""
    kept = tuple(b for b in blocks if b.blocks_type != kind)
    removed = tuple(b for b in blocks if b.blocks_type == kind)
    return kept, removed


def resolve_card(player: PlayerState, card: Card) -> tuple[PlayerState, tuple[Card, ...]]:
    """
    Apply card's effect to player.

    Returns the new player and the cards the effect took off the table
    (blocks cleared by a Remedy), which belong on the discard pile.
    Legality is the caller's concern.
    """
    in_play = player.in_play
    total_km = player.total_km
    cleared: tuple[Card, ...] = ()

    if card.type == CardType.PROGRESS:
        if card.value is None:
            raise InvariantViolation(f"Invalid state: progress card {card.id} has no value")
        in_play = replace(in_play, progress=in_play.progress + (card,))
        total_km += card.value

    elif card.type == CardType.REMEDY:
        if card.is_gate:
            kept, cleared = _split_blocks(in_play.blocks, BlockKind.STOP)
            in_play = replace(in_play, progress=in_play.progress + (card,), blocks=kept)
        else:
            kept, cleared = _split_blocks(in_play.blocks, card.remedies_type)
            in_play = replace(in_play, blocks=kept)

    elif card.type == CardType.BLOCK:
        # Same-kind blocks stack; one Remedy clears them all
        in_play = replace(in_play, blocks=in_play.blocks + (card,))

    elif card.type == CardType.IMMUNITY:
        in_play = replace(in_play, immunities=in_play.immunities + (card,))

    new_player = replace(player, in_play=in_play, total_km=total_km)
    return replace(new_player, is_ready=compute_ready(new_player)), cleared


def apply_card_to_player(player: PlayerState, card: Card) -> PlayerState:
    """Apply card's effect to player and return the new player state."""
    new_player, _ = resolve_card(player, card)
    return new_player


def _stays_in_play(card: Card) -> bool:
    """Cards that remain on the table in front of a player once played."""
    return card.type != CardType.REMEDY or card.is_gate


# ============================================================================
# Actions
# ============================================================================

def _resolve_target_id(
    state: GameState, actor: PlayerState, card: Card, target_player_id: str | None
) -> str:
    if card.type != CardType.BLOCK:
        if target_player_id is not None and target_player_id != actor.player_id:
            logger.debug(f"Ignoring target {target_player_id} for {card.type.value} card {card.id}")
        return actor.player_id

    if target_player_id is None:
        pending = state.action_state
        if pending is not None and pending.card_id == card.id and pending.target_id is not None:
            target_player_id = pending.target_id
        else:
            target_player_id = actor.player_id

    # Unknown ids are a defect in the caller
    state.require_player(target_player_id)
    return target_player_id


def play_card(
    state: GameState, card_id: str, target_player_id: str | None = None
) -> GameState:
    """
    Play a card from the current player's hand.

    The card always leaves the hand. If it is not playable it goes to the
    discard pile and the attempt is logged. Otherwise its effect is applied
    to the target (the named player for Block cards, else the actor). Cards
    that stay in play land in the target's zones; other Remedies and the
    blocks they clear go to the discard pile. Any pending target selection
    is cleared. The turn does not advance.
    """
    actor = state.current_player
    card = get_card_from_hand(actor, card_id)
    if card is None:
        logger.debug(f"{actor.display_name} has no card {card_id} in hand")
        return state

    target_id = _resolve_target_id(state, actor, card, target_player_id)

    legality_state = state
    if card.type == CardType.BLOCK:
        legality_state = state._copy_with(
            action_state=ActionState(card_id=card.id, target_id=target_id)
        )
    playable = is_card_playable_for(card, actor, legality_state)

    new_state = state.with_player(actor.without_card(card.id))

    if not playable:
        new_state = new_state._copy_with(
            discard=new_state.discard + (card,),
            action_state=None,
        )
        return new_state.with_event(
            EventType.SYSTEM,
            f"{actor.display_name} tried to play {card.name.value} but it was not playable",
        )

    target = new_state.require_player(target_id)
    new_target, cleared = resolve_card(target, card)
    new_state = new_state.with_player(new_target)

    to_discard = cleared if _stays_in_play(card) else (card,) + cleared
    new_state = new_state._copy_with(
        discard=new_state.discard + to_discard,
        action_state=None,
    )

    message = f"{actor.display_name} played {card.name.value}"
    if target.player_id != actor.player_id:
        message += f" on {target.display_name}"
    return new_state.with_event(EventType.PLAY, message)


def discard_card(state: GameState, card_id: str) -> GameState:
    """Move a card from the current player's hand to the discard pile."""
    actor = state.current_player
    card = get_card_from_hand(actor, card_id)
    if card is None:
        logger.warning(f"{actor.display_name} tried to discard {card_id} but it is not in hand")
        return state

    new_state = state.with_player(actor.without_card(card.id))
    action_state = state.action_state
    if action_state is not None and action_state.card_id == card.id:
        action_state = None
    new_state = new_state._copy_with(
        discard=new_state.discard + (card,),
        action_state=action_state,
    )
    return new_state.with_event(
        EventType.DISCARD, f"{actor.display_name} discarded {card.name.value}"
    )


def begin_target_selection(state: GameState, card_id: str) -> GameState:
    """Mark a Block card in the current player's hand as awaiting a target."""
    actor = state.current_player
    card = get_card_from_hand(actor, card_id)
    if card is None or card.type != CardType.BLOCK:
        logger.debug(f"Card {card_id} cannot start target selection")
        return state

    new_state = state._copy_with(action_state=ActionState(card_id=card.id))
    return new_state.with_event(
        EventType.SYSTEM,
        f"{actor.display_name} is choosing a target for {card.name.value}.",
    )


def apply_action(state: GameState, action: Action) -> GameState:
    """Apply a turn action produced by a human or an AI strategy."""
    if action.action_type == ActionType.PLAY_CARD:
        return play_card(state, action.card_id, action.target_id)
    if action.action_type == ActionType.DISCARD_CARD:
        return discard_card(state, action.card_id)
    raise InvariantViolation(f"Unknown action type: {action.action_type}")


def draw_card(state: GameState, rng: random.Random | None = None) -> GameState:
    """The current player draws one card, reshuffling the discard pile if needed."""
    player = state.current_player
    result = draw(state.deck, state.discard, 1, rng)

    new_state = state.with_player(player.with_hand(player.hand + result.drawn))
    new_state = new_state._copy_with(deck=result.new_deck, discard=result.new_discard)

    if not result.drawn:
        return new_state.with_event(
            EventType.SYSTEM, f"{player.display_name} could not draw: no cards left."
        )
    return new_state.with_event(EventType.DRAW, f"{player.display_name} drew a card.")


def add_game_event(state: GameState, event_type: EventType, message: str) -> GameState:
    """Log an event, newest first, keeping at most EVENT_LOG_CAPACITY entries."""
    return state.with_event(event_type, message, capacity=EVENT_LOG_CAPACITY)


# ============================================================================
# Turn and win
# ============================================================================

def advance_turn(state: GameState) -> GameState:
    """Pass the turn to the next seat."""
    if not state.players:
        raise InvariantViolation("Cannot advance the turn of a game without players")
    return state._copy_with(turn_index=(state.turn_index + 1) % state.num_players)


def check_win_condition(state: GameState) -> PlayerState | None:
    """First player in seat order who reached TARGET_DISTANCE, if any."""
    for player in state.players:
        if player.total_km >= TARGET_DISTANCE:
            return player
    return None
