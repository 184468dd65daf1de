"""
Game Loop - The reference turn driver.

The loop:
1. Current player draws a card
2. AI seats decide through their strategy; human seats submit an Action
3. The rule engine applies the action
4. If someone reached the target distance the game is over
5. Otherwise the turn passes to the next seat
6. Repeat

The loop owns turn advancement: end_turn() is the only place the
turn index moves.
"""

from __future__ import annotations
import logging
import random
from dataclasses import dataclass, field
from enum import Enum
from typing import Sequence

from ..bots.factory import create_ai_player
from ..bots.policy import AIPlayer
from ..engine_core.action import Action
from ..engine_core.rules import (
    add_game_event,
    advance_turn,
    apply_action,
    check_win_condition,
    draw_card,
)
from ..engine_core.state import EventType, GameState, get_card_from_hand
from ..game.setup import PlayerConfig, create_initial_game_state

logger = logging.getLogger(__name__)


class LoopState(Enum):
    """State of the game loop."""
    NOT_STARTED = "not_started"
    WAITING_HUMAN_ACTION = "waiting_human_action"
    WAITING_AI_ACTION = "waiting_ai_action"
    GAME_OVER = "game_over"


@dataclass
class TurnResult:
    """
    Result of processing one action.

    Contains the action taken, the loop state afterwards
    and the winner once the game is over.
    """
    success: bool
    loop_state: LoopState
    player_id: str | None = None
    action: Action | None = None
    winner: str | None = None
    errors: list[str] = field(default_factory=list)


class GameLoop:
    """
    The main game loop driver.

    Usage:
        loop = GameLoop.new_game([PlayerConfig(), PlayerConfig("Heuristic")])
        loop.start()

        while not loop.is_over:
            if loop.loop_state == LoopState.WAITING_AI_ACTION:
                loop.run_ai_turn()
            else:
                loop.submit_action(get_human_action(loop.state))
    """

    def __init__(self, state: GameState, rng: random.Random | None = None):
        self.state = state
        self.rng = rng
        self.loop_state = LoopState.NOT_STARTED
        self.winner: str | None = None
        self._ai_players: dict[str, AIPlayer] = {}

    @classmethod
    def new_game(
        cls,
        player_configs: Sequence[PlayerConfig],
        rng: random.Random | None = None,
    ) -> GameLoop:
        """Create a loop around a freshly dealt game."""
        state = create_initial_game_state(player_configs, rng=rng)
        state = add_game_event(
            state, EventType.SYSTEM, f"Game started with {state.num_players} players."
        )
        return cls(state, rng=rng)

    @property
    def is_over(self) -> bool:
        return self.loop_state == LoopState.GAME_OVER

    def start(self) -> LoopState:
        """Begin the first turn."""
        if self.loop_state != LoopState.NOT_STARTED:
            return self.loop_state
        self._start_turn()
        return self.loop_state

    def _start_turn(self) -> None:
        self.state = draw_card(self.state, self.rng)
        player = self.state.current_player
        if player.is_human:
            self.loop_state = LoopState.WAITING_HUMAN_ACTION
        else:
            self.loop_state = LoopState.WAITING_AI_ACTION
        logger.info(f"{player.display_name}'s turn ({player.ai_strategy or 'human'})")

    def _ai_player(self, name: str) -> AIPlayer:
        if name not in self._ai_players:
            self._ai_players[name] = create_ai_player(name)
        return self._ai_players[name]

    def run_ai_turn(self) -> TurnResult:
        """Let the current AI seat decide and act, then end the turn."""
        if self.loop_state != LoopState.WAITING_AI_ACTION:
            return self._rejected(f"No AI turn pending (state: {self.loop_state.value})")

        player = self.state.current_player
        if not player.hand:
            return self.pass_turn()

        action = self._ai_player(player.ai_strategy).decide_move(player, self.state)
        logger.debug(f"{player.display_name} decided {action.action_type.value} {action.card_id}")
        return self._act(action)

    def submit_action(self, action: Action) -> TurnResult:
        """Apply a human seat's action, then end the turn."""
        if self.loop_state != LoopState.WAITING_HUMAN_ACTION:
            return self._rejected(f"No human turn pending (state: {self.loop_state.value})")

        player = self.state.current_player
        if get_card_from_hand(player, action.card_id) is None:
            # Caller may retry with a valid card
            return self._rejected(f"Card {action.card_id} is not in {player.display_name}'s hand")
        return self._act(action)

    def pass_turn(self) -> TurnResult:
        """Skip the current seat, used when its hand is empty."""
        if self.is_over or self.loop_state == LoopState.NOT_STARTED:
            return self._rejected("No turn in progress")
        player = self.state.current_player
        self.state = add_game_event(
            self.state, EventType.SYSTEM, f"{player.display_name} has no cards and passes."
        )
        return self.end_turn(player_id=player.player_id)

    def _act(self, action: Action) -> TurnResult:
        player = self.state.current_player
        self.state = apply_action(self.state, action)
        return self.end_turn(player_id=player.player_id, action=action)

    def end_turn(self, player_id: str | None = None, action: Action | None = None) -> TurnResult:
        """Check for a winner; otherwise pass the turn and start the next one."""
        winner = check_win_condition(self.state)
        if winner is not None:
            self.winner = winner.player_id
            self.loop_state = LoopState.GAME_OVER
            self.state = add_game_event(
                self.state, EventType.SYSTEM, f"{winner.display_name} wins!"
            )
            logger.info(f"{winner.display_name} wins with {winner.total_km} km")
            return TurnResult(
                success=True,
                loop_state=self.loop_state,
                player_id=player_id,
                action=action,
                winner=self.winner,
            )

        self.state = advance_turn(self.state)
        self.state = add_game_event(
            self.state,
            EventType.SYSTEM,
            f"It's now {self.state.current_player.display_name}'s turn.",
        )
        self._start_turn()
        return TurnResult(
            success=True,
            loop_state=self.loop_state,
            player_id=player_id,
            action=action,
        )

    def run_ai_game(self, max_turns: int = 1000) -> list[TurnResult]:
        """
        Play AI turns until the game ends, a human must act, or max_turns is hit.

        Returns the results of every turn played.
        """
        self.start()
        results: list[TurnResult] = []
        while self.loop_state == LoopState.WAITING_AI_ACTION and len(results) < max_turns:
            results.append(self.run_ai_turn())
        if not self.is_over and len(results) >= max_turns:
            logger.warning(f"Stopped after {max_turns} turns without a winner")
        return results

    def _rejected(self, message: str) -> TurnResult:
        logger.debug(message)
        return TurnResult(success=False, loop_state=self.loop_state, errors=[message])
