"""
Storage - Snapshot schemas and the URL-safe state codec.

Nothing here is durable: a token captures one game state so a
presentation shell can put it in a URL and restore it later.
"""

from .schemas import (
    ActionStateModel,
    CardModel,
    EventModel,
    GameStateModel,
    InPlayModel,
    PlayerModel,
)
from .codec import decode_state, encode_state

__all__ = [
    "ActionStateModel",
    "CardModel",
    "EventModel",
    "GameStateModel",
    "InPlayModel",
    "PlayerModel",
    "decode_state",
    "encode_state",
]
