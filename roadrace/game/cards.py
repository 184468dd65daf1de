"""
Race Cards - The deck blueprint.

Each CardBlueprint describes one card name and how many copies of it
the deck holds. FULL_DECK expands the blueprints into concrete cards
with stable ids ("<Name_With_Underscores>_<copy index>").

Composition:
- Progress: distance cards, the only way to score
- Block: hazards placed on opponents
- Remedy: clear a hazard; Green Light is also the gate card
- Immunity: permanent protection against one hazard kind
"""

from __future__ import annotations
from dataclasses import dataclass

from ..engine_core.state import BlockKind, Card, CardName, CardType


@dataclass(frozen=True)
class CardBlueprint:
    """
    Definition of one card name in the deck.

    Gets expanded into `count` Card instances.
    """
    name: CardName
    type: CardType
    count: int
    value: int | None = None
    kind: BlockKind | None = None  # blocks_type or remedies_type, by card type

    def make(self, card_id: str) -> Card:
        """Create a card instance of this blueprint with the given id."""
        if self.type == CardType.PROGRESS:
            return Card.progress(card_id, self.name, self.value)
        if self.type == CardType.BLOCK:
            return Card.block(card_id, self.name, self.kind)
        if self.type == CardType.REMEDY:
            return Card.remedy(card_id, self.name, self.kind)
        return Card.immunity(card_id, self.name, self.kind)

    def expand(self) -> list[Card]:
        prefix = self.name.value.replace(" ", "_")
        return [self.make(f"{prefix}_{i}") for i in range(self.count)]


# ============================================================================
# Blueprints
# ============================================================================

CATALOG: tuple[CardBlueprint, ...] = (
    # Progress cards (advance the player's total)
    CardBlueprint(CardName.KM_25, CardType.PROGRESS, 10, value=25),
    CardBlueprint(CardName.KM_50, CardType.PROGRESS, 10, value=50),
    CardBlueprint(CardName.KM_75, CardType.PROGRESS, 10, value=75),
    CardBlueprint(CardName.KM_100, CardType.PROGRESS, 12, value=100),
    CardBlueprint(CardName.KM_200, CardType.PROGRESS, 4, value=200),

    # Block cards (hinder opponents)
    CardBlueprint(CardName.RED_LIGHT, CardType.BLOCK, 5, kind=BlockKind.STOP),
    CardBlueprint(CardName.FLAT_TIRE, CardType.BLOCK, 4, kind=BlockKind.FLAT_TIRE),
    CardBlueprint(CardName.OUT_OF_GAS, CardType.BLOCK, 4, kind=BlockKind.OUT_OF_GAS),
    CardBlueprint(CardName.ACCIDENT, CardType.BLOCK, 3, kind=BlockKind.ACCIDENT),
    # Speed Limit halts the car like a red light: Green Light clears it
    CardBlueprint(CardName.SPEED_LIMIT, CardType.BLOCK, 2, kind=BlockKind.STOP),

    # Remedy cards (cancel Block cards)
    CardBlueprint(CardName.GREEN_LIGHT, CardType.REMEDY, 14, kind=BlockKind.STOP),
    CardBlueprint(CardName.SPARE_TIRE, CardType.REMEDY, 5, kind=BlockKind.FLAT_TIRE),
    CardBlueprint(CardName.GASOLINE, CardType.REMEDY, 5, kind=BlockKind.OUT_OF_GAS),
    CardBlueprint(CardName.REPAIR, CardType.REMEDY, 2, kind=BlockKind.ACCIDENT),

    # Immunity cards (permanent protection)
    CardBlueprint(CardName.RIGHT_OF_WAY, CardType.IMMUNITY, 1, kind=BlockKind.STOP),
    CardBlueprint(CardName.PUNCTURE_PROOF_TIRES, CardType.IMMUNITY, 1, kind=BlockKind.FLAT_TIRE),
    CardBlueprint(CardName.FUEL_TANK, CardType.IMMUNITY, 1, kind=BlockKind.OUT_OF_GAS),
    CardBlueprint(CardName.DRIVING_ACE, CardType.IMMUNITY, 1, kind=BlockKind.ACCIDENT),
)

_BLUEPRINTS_BY_NAME: dict[CardName, CardBlueprint] = {bp.name: bp for bp in CATALOG}


def _build_full_deck() -> tuple[Card, ...]:
    cards: list[Card] = []
    for blueprint in CATALOG:
        cards.extend(blueprint.expand())
    return tuple(cards)


# Canonical order: blueprint order, then copy index
FULL_DECK: tuple[Card, ...] = _build_full_deck()


def get_blueprint(name: CardName) -> CardBlueprint:
    """Get the blueprint for a card name."""
    return _BLUEPRINTS_BY_NAME[name]


def create_card(card_id: str, name: CardName) -> Card:
    """Create a standalone card of the given name (used by tests and tools)."""
    return get_blueprint(name).make(card_id)


def get_card_by_id(card_id: str) -> Card | None:
    """Look up a catalog card by its id."""
    for card in FULL_DECK:
        if card.id == card_id:
            return card
    return None
