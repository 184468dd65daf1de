"""
Game State - Cards, players and the table snapshot.

Design principles:
- Immutable: every container is a frozen dataclass holding tuples,
  all changes return a new snapshot
- Serializable: plain values only, see roadrace.storage
- Queryable: the pure helpers at the bottom answer every rules question
  (gated, blocked, immune) so the engine and the bots agree
"""

from __future__ import annotations
from dataclasses import dataclass, field, replace
from enum import Enum

from .errors import InvariantViolation
from ..config import EVENT_LOG_CAPACITY


class CardType(Enum):
    """The four card families."""
    PROGRESS = "Progress"
    BLOCK = "Block"
    REMEDY = "Remedy"
    IMMUNITY = "Immunity"


class BlockKind(Enum):
    """Hazard categories a Block card imposes and a Remedy clears."""
    STOP = "Stop"
    ACCIDENT = "Accident"
    FLAT_TIRE = "Flat Tire"
    OUT_OF_GAS = "Out of Gas"
    SPEED_LIMIT = "Speed Limit"


class CardName(Enum):
    """Every card name that exists in the catalog."""
    # Progress
    KM_25 = "25km"
    KM_50 = "50km"
    KM_75 = "75km"
    KM_100 = "100km"
    KM_200 = "200km"

    # Block
    RED_LIGHT = "Red Light"
    FLAT_TIRE = "Flat Tire"
    OUT_OF_GAS = "Out of Gas"
    ACCIDENT = "Accident"
    SPEED_LIMIT = "Speed Limit"

    # Remedy
    GREEN_LIGHT = "Green Light"
    SPARE_TIRE = "Spare Tire"
    GASOLINE = "Gasoline"
    REPAIR = "Repair"

    # Immunity
    RIGHT_OF_WAY = "Right of Way"
    PUNCTURE_PROOF_TIRES = "Puncture-Proof Tires"
    FUEL_TANK = "Fuel Tank"
    DRIVING_ACE = "Driving Ace"


class EventType(Enum):
    """Categories of game log entries."""
    PLAY = "play"
    DISCARD = "discard"
    DRAW = "draw"
    SYSTEM = "system"


# Fields each card type may carry beyond id/type/name
_ALLOWED_FIELDS: dict[CardType, frozenset[str]] = {
    CardType.PROGRESS: frozenset({"value"}),
    CardType.BLOCK: frozenset({"blocks_type"}),
    CardType.REMEDY: frozenset({"remedies_type"}),
    CardType.IMMUNITY: frozenset({"remedies_type"}),
}


@dataclass(frozen=True)
class Card:
    """
    A physical card.

    Ids are unique across the whole catalog. Type-specific fields are
    None unless the card's type uses them.
    """
    id: str
    type: CardType
    name: CardName
    value: int | None = None  # Progress only
    blocks_type: BlockKind | None = None  # Block only
    remedies_type: BlockKind | None = None  # Remedy / Immunity only

    def __post_init__(self):
        allowed = _ALLOWED_FIELDS[self.type]
        for name in ("value", "blocks_type", "remedies_type"):
            if getattr(self, name) is not None and name not in allowed:
                raise InvariantViolation(
                    f"{self.type.value} card {self.id} cannot carry '{name}'"
                )
        if self.value is not None and self.value <= 0:
            raise InvariantViolation(f"Progress card {self.id} has non-positive value")

    @classmethod
    def progress(cls, card_id: str, name: CardName, value: int | None) -> Card:
        return cls(id=card_id, type=CardType.PROGRESS, name=name, value=value)

    @classmethod
    def block(cls, card_id: str, name: CardName, kind: BlockKind) -> Card:
        return cls(id=card_id, type=CardType.BLOCK, name=name, blocks_type=kind)

    @classmethod
    def remedy(cls, card_id: str, name: CardName, kind: BlockKind) -> Card:
        return cls(id=card_id, type=CardType.REMEDY, name=name, remedies_type=kind)

    @classmethod
    def immunity(cls, card_id: str, name: CardName, kind: BlockKind) -> Card:
        return cls(id=card_id, type=CardType.IMMUNITY, name=name, remedies_type=kind)

    @property
    def is_gate(self) -> bool:
        """True for the Remedy every player must play before any Progress."""
        return self.type == CardType.REMEDY and self.name == CardName.GREEN_LIGHT


@dataclass(frozen=True)
class InPlay:
    """The three independent zones in front of a player."""
    progress: tuple[Card, ...] = ()
    blocks: tuple[Card, ...] = ()
    immunities: tuple[Card, ...] = ()

    def all_cards(self) -> tuple[Card, ...]:
        return self.progress + self.blocks + self.immunities


@dataclass(frozen=True)
class PlayerState:
    """
    State for a single seat.

    is_ready is a cache of compute_ready(); the engine refreshes it on
    every effect so renderers can read it directly.
    """
    player_id: str
    hand: tuple[Card, ...] = ()
    in_play: InPlay = field(default_factory=InPlay)
    total_km: int = 0
    is_ready: bool = False
    ai_strategy: str | None = None  # None means human-controlled

    @property
    def is_human(self) -> bool:
        return self.ai_strategy is None

    @property
    def display_name(self) -> str:
        return f"Player {self.player_id}"

    def with_hand(self, hand: tuple[Card, ...]) -> PlayerState:
        """Return new player state with a different hand."""
        return replace(self, hand=tuple(hand))

    def without_card(self, card_id: str) -> PlayerState:
        """Return new player state with the first card matching card_id removed."""
        hand = list(self.hand)
        for index, card in enumerate(hand):
            if card.id == card_id:
                del hand[index]
                break
        return replace(self, hand=tuple(hand))


@dataclass(frozen=True)
class GameEvent:
    """One entry in the game log."""
    type: EventType
    message: str


@dataclass(frozen=True)
class ActionState:
    """A Block card waiting for its target to be chosen."""
    card_id: str
    target_id: str | None = None


@dataclass(frozen=True)
class GameState:
    """
    Complete game state at a point in time.

    This is the canonical snapshot the rule engine operates on.
    All state changes go through roadrace.engine_core.rules.
    """
    deck: tuple[Card, ...] = ()
    discard: tuple[Card, ...] = ()
    players: tuple[PlayerState, ...] = ()
    turn_index: int = 0
    action_state: ActionState | None = None
    events: tuple[GameEvent, ...] = ()  # newest first

    def __post_init__(self):
        if self.players and not 0 <= self.turn_index < len(self.players):
            raise InvariantViolation(
                f"turn_index {self.turn_index} out of range for {len(self.players)} players"
            )

    @property
    def current_player(self) -> PlayerState:
        """Get the player whose turn it is."""
        return self.players[self.turn_index]

    @property
    def num_players(self) -> int:
        return len(self.players)

    def get_player(self, player_id: str) -> PlayerState | None:
        """Get player by ID."""
        for p in self.players:
            if p.player_id == player_id:
                return p
        return None

    def require_player(self, player_id: str) -> PlayerState:
        """Get player by ID, treating an unknown ID as a defect."""
        player = self.get_player(player_id)
        if player is None:
            raise InvariantViolation(f"Player {player_id} not found")
        return player

    def with_player(self, player: PlayerState) -> GameState:
        """Return new state with updated player."""
        self.require_player(player.player_id)
        new_players = tuple(
            player if p.player_id == player.player_id else p
            for p in self.players
        )
        return self._copy_with(players=new_players)

    def with_event(
        self,
        event_type: EventType,
        message: str,
        capacity: int = EVENT_LOG_CAPACITY,
    ) -> GameState:
        """Return new state with an event prepended, dropping the oldest past capacity."""
        events = (GameEvent(type=event_type, message=message),) + self.events
        return self._copy_with(events=events[:capacity])

    def card_ids(self) -> list[str]:
        """Every card id on the table: deck, discard, hands and in-play zones."""
        ids = [c.id for c in self.deck] + [c.id for c in self.discard]
        for p in self.players:
            ids.extend(c.id for c in p.hand)
            ids.extend(c.id for c in p.in_play.all_cards())
        return ids

    def _copy_with(self, **kwargs) -> GameState:
        """Create a copy with some fields replaced."""
        return replace(self, **kwargs)


# ============================================================================
# Query helpers
# ============================================================================

def has_played_gate_card(player: PlayerState) -> bool:
    return any(c.is_gate for c in player.in_play.progress)


def is_blocked(player: PlayerState) -> bool:
    """True while any Block card sits in the player's blocks zone."""
    return len(player.in_play.blocks) > 0


def is_blocked_by(player: PlayerState, kind: BlockKind) -> bool:
    return any(b.blocks_type == kind for b in player.in_play.blocks)


def has_immunity(player: PlayerState, kind: BlockKind | None) -> bool:
    """True if the player has an Immunity in play for the given kind."""
    if kind is None:
        return False
    return any(i.remedies_type == kind for i in player.in_play.immunities)


def is_immune_to(player: PlayerState, card: Card) -> bool:
    """True if the player is protected against this Block card."""
    if card.type != CardType.BLOCK:
        return False
    return has_immunity(player, card.blocks_type)


def compute_ready(player: PlayerState) -> bool:
    return has_played_gate_card(player) and not is_blocked(player)


def get_card_from_hand(player: PlayerState, card_id: str) -> Card | None:
    for card in player.hand:
        if card.id == card_id:
            return card
    return None


def get_progress_cards(player: PlayerState) -> list[Card]:
    return [c for c in player.hand if c.type == CardType.PROGRESS]


def get_highest_progress_card(player: PlayerState) -> Card | None:
    """
    Highest-value Progress card in hand.

    Ties go to the card earliest in hand order.
    """
    best: Card | None = None
    for card in get_progress_cards(player):
        if best is None or (card.value or 0) > (best.value or 0):
            best = card
    return best


def get_remedy_for_block(player: PlayerState, block: Card) -> Card | None:
    """First Remedy in hand that clears the given Block card."""
    for card in player.hand:
        if card.type == CardType.REMEDY and card.remedies_type == block.blocks_type:
            return card
    return None


def get_opponents(player: PlayerState, state: GameState) -> list[PlayerState]:
    """Every other seat, in seat order."""
    return [p for p in state.players if p.player_id != player.player_id]


def get_leader(players: list[PlayerState]) -> PlayerState | None:
    """
    Player with the highest total_km.

    If several share the lead, the first in seat order is returned.
    """
    leader: PlayerState | None = None
    for p in players:
        if leader is None or p.total_km > leader.total_km:
            leader = p
    return leader
