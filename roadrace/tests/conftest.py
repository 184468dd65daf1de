"""
Pytest fixtures for RoadRace tests.
"""

import random

import pytest

from ..engine_core import deck
from ..engine_core.state import GameState
from ..game.setup import PlayerConfig, create_initial_game_state


@pytest.fixture
def identity_shuffle(monkeypatch):
    """Make every shuffle keep the input order."""
    monkeypatch.setattr(deck, "shuffle", lambda cards, rng=None: list(cards))


@pytest.fixture
def rng() -> random.Random:
    return random.Random(1234)


@pytest.fixture
def two_player_state(identity_shuffle) -> GameState:
    """A fresh 2-player game dealt from the unshuffled deck: one human, one Heuristic."""
    return create_initial_game_state([PlayerConfig(), PlayerConfig("Heuristic")])


@pytest.fixture
def four_ai_configs() -> list[PlayerConfig]:
    return [
        PlayerConfig("Heuristic"),
        PlayerConfig("Aggressor"),
        PlayerConfig("Heuristic"),
        PlayerConfig("Aggressor"),
    ]
