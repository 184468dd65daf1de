"""
State Codec - GameState to and from a URL-safe text token.

Encoding: snapshot schema -> JSON -> URL-safe base64 with the padding
stripped. Decoding reverses the steps and fails closed: any malformed
token yields None instead of an exception.
"""

from __future__ import annotations
import base64
import logging

from .schemas import GameStateModel
from ..engine_core.errors import InvariantViolation
from ..engine_core.state import GameState

logger = logging.getLogger(__name__)


def encode_state(state: GameState) -> str:
    """Encode a game state into a URL-safe token."""
    payload = GameStateModel.from_state(state).model_dump_json()
    token = base64.urlsafe_b64encode(payload.encode("utf-8")).decode("ascii")
    return token.rstrip("=")


def decode_state(token: str) -> GameState | None:
    """
    Decode a token produced by encode_state().

    Returns None if the token is empty, not valid base64, not valid JSON,
    does not match the snapshot schema, or describes an inconsistent game.
    """
    if not isinstance(token, str) or not token:
        return None
    try:
        padded = token + "=" * (-len(token) % 4)
        raw = base64.urlsafe_b64decode(padded.encode("ascii"))
        return GameStateModel.model_validate_json(raw).to_state()
    except (ValueError, InvariantViolation) as e:
        logger.warning(f"Failed to decode game state: {e}")
        return None
