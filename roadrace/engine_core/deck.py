"""
Deck - Building, shuffling and drawing.

All functions are pure: inputs are never modified and new sequences
are returned. Drawing reshuffles the discard pile into the deck when
the deck cannot cover the request.
"""

from __future__ import annotations
import random
from dataclasses import dataclass
from typing import Sequence

from .state import Card


@dataclass(frozen=True)
class DrawResult:
    """Outcome of a draw: the cards taken and the two piles afterwards."""
    drawn: tuple[Card, ...]
    new_deck: tuple[Card, ...]
    new_discard: tuple[Card, ...]


def create_deck() -> list[Card]:
    """Return a fresh copy of the full catalog in canonical order."""
    from ..game.cards import FULL_DECK

    return list(FULL_DECK)


def shuffle(cards: Sequence[Card], rng: random.Random | None = None) -> list[Card]:
    """
    Return a uniformly shuffled copy of cards.

    Uses Fisher-Yates (random.shuffle). Pass a seeded rng for
    reproducible games; the module-level generator is used otherwise.
    """
    shuffled = list(cards)
    (rng or random).shuffle(shuffled)
    return shuffled


def draw(
    deck: Sequence[Card],
    discard: Sequence[Card],
    count: int,
    rng: random.Random | None = None,
) -> DrawResult:
    """
    Draw count cards from the front of the deck.

    If the deck holds fewer than count cards, the shuffled discard pile
    is appended to it first and the discard pile is emptied. Draws as
    many cards as are available, never more.
    """
    current_deck = list(deck)
    current_discard = list(discard)

    if len(current_deck) < count:
        current_deck.extend(shuffle(current_discard, rng))
        current_discard = []

    num_to_draw = max(0, min(count, len(current_deck)))
    return DrawResult(
        drawn=tuple(current_deck[:num_to_draw]),
        new_deck=tuple(current_deck[num_to_draw:]),
        new_discard=tuple(current_discard),
    )
