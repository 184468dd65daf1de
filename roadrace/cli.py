"""
RoadRace CLI - Command-line interface for the engine.

Usage:
    roadrace simulate [--players N] [--strategy NAME ...]   Play an all-AI race
    roadrace encode [--players N]                            Print a fresh game token
"""

import argparse
import itertools
import logging
import random
import sys

from .bots.factory import STRATEGY_NAMES
from .config import MAX_PLAYERS, MIN_PLAYERS, configure_logging, default_seed
from .engine_core.errors import ConfigurationError
from .game.setup import configs_for, create_initial_game_state
from .session import GameLoop
from .storage import encode_state

logger = logging.getLogger(__name__)


def main(argv=None):
    """Main CLI entry point."""
    parser = argparse.ArgumentParser(
        description="RoadRace - Race card game engine",
        prog="roadrace",
    )
    common = argparse.ArgumentParser(add_help=False)
    common.add_argument("--log-level", help="Logging level (default: ROADRACE_LOG_LEVEL or WARNING)")
    subparsers = parser.add_subparsers(dest="command", help="Commands")

    # Simulate command
    simulate_parser = subparsers.add_parser(
        "simulate", help="Play an all-AI race", parents=[common]
    )
    simulate_parser.add_argument(
        "--players", type=int, default=2, help=f"Number of seats ({MIN_PLAYERS}-{MAX_PLAYERS})"
    )
    simulate_parser.add_argument(
        "--strategy",
        action="append",
        choices=STRATEGY_NAMES,
        help="Strategy per seat, repeated in seat order (default: Heuristic)",
    )
    simulate_parser.add_argument("--seed", type=int, help="Seed for a reproducible race")
    simulate_parser.add_argument("--max-turns", type=int, default=1000, help="Turn limit")

    # Encode command
    encode_parser = subparsers.add_parser(
        "encode", help="Print the token of a fresh game", parents=[common]
    )
    encode_parser.add_argument("--players", type=int, default=2, help="Number of seats")
    encode_parser.add_argument("--seed", type=int, help="Seed for a reproducible deal")

    args = parser.parse_args(argv)
    configure_logging(getattr(args, "log_level", None))

    try:
        if args.command == "simulate":
            return cmd_simulate(args)
        elif args.command == "encode":
            return cmd_encode(args)
    except ConfigurationError as e:
        print(f"Error: {e}")
        sys.exit(1)

    parser.print_help()
    sys.exit(1)


def _rng(seed):
    if seed is None:
        seed = default_seed()
    return random.Random(seed) if seed is not None else None


def cmd_simulate(args):
    """Play an all-AI race and print the log."""
    names = args.strategy or ["Heuristic"]
    strategies = list(itertools.islice(itertools.cycle(names), args.players))
    logger.info(f"Simulating {args.players} seats: {', '.join(strategies)}")

    loop = GameLoop.new_game(configs_for(strategies), rng=_rng(args.seed))
    results = loop.run_ai_game(max_turns=args.max_turns)

    # Log is newest first
    for event in reversed(loop.state.events):
        print(f"[{event.type.value}] {event.message}")

    print()
    print(f"Turns played: {len(results)}")
    for player in loop.state.players:
        print(f"  {player.display_name} ({player.ai_strategy}): {player.total_km} km")
    if loop.winner is not None:
        print(f"Winner: Player {loop.winner}")
    else:
        print("No winner")
    return 0


def cmd_encode(args):
    """Deal a fresh game of AI seats and print its token."""
    state = create_initial_game_state(
        configs_for(["Heuristic"] * args.players), rng=_rng(args.seed)
    )
    print(encode_state(state))
    return 0


if __name__ == "__main__":
    main()
