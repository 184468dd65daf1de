"""
Tests for the card catalog and the deck manager.

Tests:
- Catalog composition and id uniqueness
- Shuffle is a fresh permutation
- Drawing with and without reshuffling
"""

import random
from collections import Counter

from ..engine_core.deck import create_deck, draw, shuffle
from ..engine_core.state import CardName, CardType
from ..game.cards import CATALOG, FULL_DECK, get_blueprint
from ..game.cards import get_card_by_id
from .factories import card


class TestCatalog:
    """Tests for the fixed deck blueprint."""

    def test_deck_size(self):
        assert len(FULL_DECK) == 94
        assert sum(bp.count for bp in CATALOG) == 94

    def test_ids_unique(self):
        ids = [c.id for c in FULL_DECK]
        assert len(ids) == len(set(ids))

    def test_multiplicities(self):
        counts = Counter(c.name for c in FULL_DECK)
        assert counts[CardName.GREEN_LIGHT] == 14
        assert counts[CardName.KM_100] == 12
        assert counts[CardName.KM_200] == 4
        assert counts[CardName.RED_LIGHT] == 5
        assert counts[CardName.REPAIR] == 2
        assert counts[CardName.DRIVING_ACE] == 1

    def test_type_totals(self):
        counts = Counter(c.type for c in FULL_DECK)
        assert counts[CardType.PROGRESS] == 46
        assert counts[CardType.BLOCK] == 18
        assert counts[CardType.REMEDY] == 26
        assert counts[CardType.IMMUNITY] == 4

    def test_id_format(self):
        assert get_card_by_id("Green_Light_0").name == CardName.GREEN_LIGHT
        assert get_card_by_id("Puncture-Proof_Tires_0").type == CardType.IMMUNITY
        assert get_card_by_id("nope") is None

    def test_blueprint_lookup(self):
        assert get_blueprint(CardName.KM_75).value == 75


class TestShuffle:
    """Tests for shuffle()."""

    def test_create_deck_is_fresh_copy(self):
        first = create_deck()
        first.pop()
        assert len(create_deck()) == 94

    def test_shuffle_is_permutation(self, rng):
        cards = create_deck()
        shuffled = shuffle(cards, rng)

        assert sorted(c.id for c in shuffled) == sorted(c.id for c in cards)
        assert shuffled is not cards

    def test_shuffle_leaves_input_alone(self, rng):
        cards = create_deck()
        before = list(cards)
        shuffle(cards, rng)
        assert cards == before

    def test_shuffle_has_no_ordering_bias(self):
        """Each of the 24 orders of four cards turns up about equally often."""
        cards = [card(CardName.KM_25, str(i)) for i in range(4)]
        rng = random.Random(2024)
        trials = 24000

        counts = Counter(tuple(c.id for c in shuffle(cards, rng)) for _ in range(trials))

        assert len(counts) == 24
        expected = trials / 24
        for order, seen in counts.items():
            assert abs(seen - expected) < expected * 0.2, order

    def test_each_card_reaches_each_position(self):
        cards = [card(CardName.KM_50, str(i)) for i in range(3)]
        rng = random.Random(99)
        trials = 6000
        positions = Counter()
        for _ in range(trials):
            for index, c in enumerate(shuffle(cards, rng)):
                positions[(c.id, index)] += 1

        expected = trials / 3
        for key in [(str(i), p) for i in range(3) for p in range(3)]:
            assert abs(positions[key] - expected) < expected * 0.1, key

    def test_seeded_shuffle_is_reproducible(self):
        a = shuffle(create_deck(), random.Random(7))
        b = shuffle(create_deck(), random.Random(7))
        assert a == b


class TestDraw:
    """Tests for draw()."""

    def test_draw_from_front(self):
        deck = [card(CardName.KM_25, str(i)) for i in range(5)]
        result = draw(deck, [], 3)

        assert [c.id for c in result.drawn] == ["0", "1", "2"]
        assert [c.id for c in result.new_deck] == ["3", "4"]
        assert result.new_discard == ()

    def test_reshuffle_when_short(self, rng):
        deck = [card(CardName.KM_25, "d0")]
        discard = [card(CardName.KM_50, f"x{i}") for i in range(3)]
        result = draw(deck, discard, 2, rng)

        assert len(result.drawn) == 2
        assert result.drawn[0].id == "d0"
        assert result.new_discard == ()
        assert len(result.new_deck) == 2
        all_ids = {c.id for c in result.drawn + result.new_deck}
        assert all_ids == {"d0", "x0", "x1", "x2"}

    def test_draw_caps_at_available(self):
        deck = [card(CardName.KM_25, "a")]
        discard = [card(CardName.KM_25, "b")]
        result = draw(deck, discard, 5)

        assert {c.id for c in result.drawn} == {"a", "b"}
        assert result.new_deck == ()
        assert result.new_discard == ()

    def test_draw_from_empty_piles(self):
        result = draw([], [], 1)
        assert result.drawn == ()
        assert result.new_deck == ()

    def test_draw_zero(self):
        deck = [card(CardName.KM_25)]
        discard = [card(CardName.KM_50)]
        result = draw(deck, discard, 0)

        assert result.drawn == ()
        assert len(result.new_deck) == 1
        assert len(result.new_discard) == 1

    def test_draw_conserves_cards(self, rng):
        deck = create_deck()[:10]
        discard = create_deck()[10:30]
        result = draw(deck, discard, 15, rng)

        after = result.drawn + result.new_deck + result.new_discard
        assert sorted(c.id for c in after) == sorted(c.id for c in deck + discard)
