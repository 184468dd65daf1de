"""
Integration tests for setup and the turn driver.

Tests:
- Initial setup and configuration errors
- Human and AI turns through the loop
- Full AI games keep every card accounted for
"""

import random

import pytest

from ..engine_core.action import Action
from ..engine_core.errors import ConfigurationError
from ..engine_core.state import CardName, EventType
from ..game.setup import PlayerConfig, configs_for, create_initial_game_state
from ..session import GameLoop, LoopState
from .factories import card, driving, game, player


def _assert_conserved(state):
    ids = state.card_ids()
    assert len(ids) == 94
    assert len(set(ids)) == 94


class TestSetup:
    """Tests for create_initial_game_state()."""

    def test_deal(self, identity_shuffle):
        state = create_initial_game_state(configs_for(["Heuristic", None, "Aggressor"]))

        assert [p.player_id for p in state.players] == ["1", "2", "3"]
        assert all(len(p.hand) == 5 for p in state.players)
        assert len(state.deck) == 94 - 15
        assert state.players[0].hand[0].id == "25km_0"
        assert state.players[1].is_human
        assert state.players[2].ai_strategy == "Aggressor"
        assert state.action_state is None

    def test_seeded_deal_is_reproducible(self, four_ai_configs):
        a = create_initial_game_state(four_ai_configs, rng=random.Random(5))
        b = create_initial_game_state(four_ai_configs, rng=random.Random(5))
        assert a == b

    @pytest.mark.parametrize("seats", [0, 1, 5])
    def test_player_count_enforced(self, seats):
        with pytest.raises(ConfigurationError):
            create_initial_game_state([PlayerConfig()] * seats)

    def test_unknown_strategy(self):
        with pytest.raises(ConfigurationError, match="Unknown AI strategy"):
            create_initial_game_state([PlayerConfig(), PlayerConfig("Cautious")])


class TestGameLoop:
    """Tests for GameLoop turn handling."""

    def test_new_game_logs_start(self):
        loop = GameLoop.new_game(configs_for([None, "Heuristic"]), rng=random.Random(1))

        assert loop.loop_state == LoopState.NOT_STARTED
        assert loop.state.events[0].message == "Game started with 2 players."

    def test_human_turn(self):
        loop = GameLoop.new_game(configs_for([None, "Heuristic"]), rng=random.Random(2))
        assert loop.start() == LoopState.WAITING_HUMAN_ACTION

        human = loop.state.current_player
        assert len(human.hand) == 6
        assert loop.state.events[0].type == EventType.DRAW

        rejected = loop.submit_action(Action.discard("not_a_card"))
        assert not rejected.success
        assert loop.state.current_player.player_id == "1"

        result = loop.submit_action(Action.discard(human.hand[0].id))
        assert result.success
        assert result.player_id == "1"
        assert loop.loop_state == LoopState.WAITING_AI_ACTION
        assert loop.state.current_player.player_id == "2"
        assert len(loop.state.current_player.hand) == 6

    def test_ai_turn_returns_to_human(self):
        loop = GameLoop.new_game(configs_for([None, "Aggressor"]), rng=random.Random(3))
        loop.start()

        assert not loop.run_ai_turn().success

        loop.submit_action(Action.discard(loop.state.current_player.hand[0].id))
        result = loop.run_ai_turn()

        assert result.success
        assert result.action is not None
        assert loop.loop_state == LoopState.WAITING_HUMAN_ACTION
        _assert_conserved(loop.state)

    def test_run_ai_game_stops_at_human(self):
        loop = GameLoop.new_game(configs_for(["Heuristic", None]), rng=random.Random(4))

        results = loop.run_ai_game()

        assert len(results) == 1
        assert loop.loop_state == LoopState.WAITING_HUMAN_ACTION

    def test_winner_ends_game(self):
        state = game(
            driving("1", km=975, hand=[card(CardName.KM_25)], ai_strategy="Heuristic"),
            driving("2", ai_strategy="Heuristic"),
            deck=[card(CardName.KM_50)],
        )
        loop = GameLoop(state)
        loop.start()

        result = loop.run_ai_turn()

        assert result.winner == "1"
        assert loop.is_over
        assert loop.state.get_player("1").total_km == 1025
        assert loop.state.events[0].message == "Player 1 wins!"
        assert loop.state.turn_index == 0

    def test_empty_hand_passes(self):
        state = game(
            player("1", ai_strategy="Heuristic"),
            player("2", ai_strategy="Heuristic"),
        )
        loop = GameLoop(state)
        loop.start()

        result = loop.run_ai_turn()

        assert result.success
        assert result.action is None
        assert loop.state.current_player.player_id == "2"
        messages = [e.message for e in loop.state.events]
        assert "Player 1 has no cards and passes." in messages

    def test_pass_before_start_rejected(self):
        loop = GameLoop(game(player("1"), player("2")))
        assert not loop.pass_turn().success


class TestFullGames:
    """All-AI games from deal to finish."""

    @pytest.mark.parametrize("seed", [0, 1, 2])
    def test_cards_conserved_every_turn(self, seed, four_ai_configs):
        loop = GameLoop.new_game(four_ai_configs, rng=random.Random(seed))
        loop.start()

        turns = 0
        while not loop.is_over and turns < 400:
            loop.run_ai_turn()
            _assert_conserved(loop.state)
            for p in loop.state.players:
                assert p.total_km == sum(c.value or 0 for c in p.in_play.progress)
            turns += 1

    def test_game_finishes_with_valid_winner(self):
        loop = GameLoop.new_game(configs_for(["Heuristic", "Heuristic"]), rng=random.Random(42))

        results = loop.run_ai_game(max_turns=2000)

        assert results
        if loop.is_over:
            winner = loop.state.get_player(loop.winner)
            assert winner.total_km >= 1000
            assert results[-1].winner == loop.winner
        assert len(loop.state.events) <= 50
