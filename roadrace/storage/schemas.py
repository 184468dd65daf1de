"""
Pydantic Schemas for snapshots - The persisted shape of a GameState.

These models define the exact contract between the engine and any
collaborator that stores or transmits a game (for example a URL token).
Conversion back to engine objects re-checks the data-model invariants:
seat count, unique player ids, exactly the catalog cards once each,
distance totals, the is_ready cache, the turn index and the pending
target.
"""

from typing import Optional

from pydantic import BaseModel, Field

from ..config import MAX_PLAYERS, MIN_PLAYERS
from ..engine_core.errors import InvariantViolation
from ..engine_core.state import (
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
    compute_ready,
)
from ..game.cards import FULL_DECK


# =============================================================================
# Cards and zones
# =============================================================================

class CardModel(BaseModel):
    """A single card."""
    id: str
    type: CardType
    name: CardName
    value: Optional[int] = Field(None, gt=0, description="Progress cards only")
    blocks_type: Optional[BlockKind] = Field(None, description="Block cards only")
    remedies_type: Optional[BlockKind] = Field(None, description="Remedy and Immunity cards only")

    model_config = {"from_attributes": True}

    @classmethod
    def from_card(cls, card: Card) -> "CardModel":
        return cls(
            id=card.id,
            type=card.type,
            name=card.name,
            value=card.value,
            blocks_type=card.blocks_type,
            remedies_type=card.remedies_type,
        )

    def to_card(self) -> Card:
        return Card(
            id=self.id,
            type=self.type,
            name=self.name,
            value=self.value,
            blocks_type=self.blocks_type,
            remedies_type=self.remedies_type,
        )


_CATALOG: dict[str, Card] = {c.id: c for c in FULL_DECK}


def _cards(models: list[CardModel]) -> tuple[Card, ...]:
    return tuple(m.to_card() for m in models)


def _all_cards(state: GameState) -> list[Card]:
    cards = list(state.deck) + list(state.discard)
    for p in state.players:
        cards.extend(p.hand)
        cards.extend(p.in_play.all_cards())
    return cards


class InPlayModel(BaseModel):
    """The three zones in front of a player."""
    progress: list[CardModel] = Field(default_factory=list)
    blocks: list[CardModel] = Field(default_factory=list)
    immunities: list[CardModel] = Field(default_factory=list)


# =============================================================================
# Players and game
# =============================================================================

class PlayerModel(BaseModel):
    """One seat."""
    player_id: str
    hand: list[CardModel] = Field(default_factory=list)
    in_play: InPlayModel = Field(default_factory=InPlayModel)
    total_km: int = Field(0, ge=0)
    is_ready: bool = False
    ai_strategy: Optional[str] = Field(None, description="Strategy name, null for a human seat")

    @classmethod
    def from_player(cls, player: PlayerState) -> "PlayerModel":
        return cls(
            player_id=player.player_id,
            hand=[CardModel.from_card(c) for c in player.hand],
            in_play=InPlayModel(
                progress=[CardModel.from_card(c) for c in player.in_play.progress],
                blocks=[CardModel.from_card(c) for c in player.in_play.blocks],
                immunities=[CardModel.from_card(c) for c in player.in_play.immunities],
            ),
            total_km=player.total_km,
            is_ready=player.is_ready,
            ai_strategy=player.ai_strategy,
        )

    def to_player(self) -> PlayerState:
        progress = _cards(self.in_play.progress)
        distance = sum(c.value or 0 for c in progress)
        if distance != self.total_km:
            raise InvariantViolation(
                f"Player {self.player_id} total_km {self.total_km} != progress sum {distance}"
            )
        player = PlayerState(
            player_id=self.player_id,
            hand=_cards(self.hand),
            in_play=InPlay(
                progress=progress,
                blocks=_cards(self.in_play.blocks),
                immunities=_cards(self.in_play.immunities),
            ),
            total_km=self.total_km,
            is_ready=self.is_ready,
            ai_strategy=self.ai_strategy,
        )
        if player.is_ready != compute_ready(player):
            raise InvariantViolation(f"Player {self.player_id} has a stale is_ready flag")
        return player


class EventModel(BaseModel):
    """A game log entry."""
    type: EventType
    message: str


class ActionStateModel(BaseModel):
    """A Block card waiting for its target."""
    card_id: str
    target_id: Optional[str] = None


class GameStateModel(BaseModel):
    """Complete snapshot of a game."""
    deck: list[CardModel] = Field(default_factory=list)
    discard: list[CardModel] = Field(default_factory=list)
    players: list[PlayerModel] = Field(default_factory=list)
    turn_index: int = Field(0, ge=0)
    action_state: Optional[ActionStateModel] = None
    events: list[EventModel] = Field(default_factory=list, description="Newest first")

    @classmethod
    def from_state(cls, state: GameState) -> "GameStateModel":
        action_state = None
        if state.action_state is not None:
            action_state = ActionStateModel(
                card_id=state.action_state.card_id,
                target_id=state.action_state.target_id,
            )
        return cls(
            deck=[CardModel.from_card(c) for c in state.deck],
            discard=[CardModel.from_card(c) for c in state.discard],
            players=[PlayerModel.from_player(p) for p in state.players],
            turn_index=state.turn_index,
            action_state=action_state,
            events=[EventModel(type=e.type, message=e.message) for e in state.events],
        )

    def to_state(self) -> GameState:
        """Rebuild the engine snapshot. Raises InvariantViolation on inconsistent data."""
        if not MIN_PLAYERS <= len(self.players) <= MAX_PLAYERS:
            raise InvariantViolation(
                f"A race needs {MIN_PLAYERS}-{MAX_PLAYERS} players, got {len(self.players)}"
            )
        player_ids = [p.player_id for p in self.players]
        if len(player_ids) != len(set(player_ids)):
            raise InvariantViolation(f"Duplicate player ids: {player_ids}")

        action_state = None
        if self.action_state is not None:
            action_state = ActionState(
                card_id=self.action_state.card_id,
                target_id=self.action_state.target_id,
            )
        state = GameState(
            deck=_cards(self.deck),
            discard=_cards(self.discard),
            players=tuple(p.to_player() for p in self.players),
            turn_index=self.turn_index,
            action_state=action_state,
            events=tuple(GameEvent(type=e.type, message=e.message) for e in self.events),
        )
        ids = state.card_ids()
        if len(ids) != len(set(ids)):
            raise InvariantViolation("A card appears in more than one zone")
        if sorted(ids) != sorted(_CATALOG):
            raise InvariantViolation("Snapshot does not hold exactly the full deck")
        for c in _all_cards(state):
            if c != _CATALOG[c.id]:
                raise InvariantViolation(f"Card {c.id} does not match the catalog")
        if action_state is not None and action_state.target_id is not None:
            state.require_player(action_state.target_id)
        return state
