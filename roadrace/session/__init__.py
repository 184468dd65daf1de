"""
Session module - Drives a game turn by turn.

The game loop:
1. Deals a new game
2. Draws for the current seat
3. Asks the AI or waits for the human
4. Applies the action, checks for a winner, advances the turn
"""

from .game_loop import GameLoop, LoopState, TurnResult

__all__ = [
    "GameLoop",
    "LoopState",
    "TurnResult",
]
