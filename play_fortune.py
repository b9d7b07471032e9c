#!/usr/bin/env python3
"""
Minimal CLI for simulating Fortune Street games.

Runs a game between bot agents, writes the event stream to a JSONL log
and prints a short summary.
"""

import argparse
import json
import logging
import os
from datetime import datetime
from typing import Optional

from fortune.core.game import Board, Player, create_game
from fortune.services import GameRunner, build_agents
from fortune.settings import get_engine_settings
from game_logger import GameLogger
from snapshot import leaderboard

logger = logging.getLogger(__name__)

PLAYER_NAMES = ["Alice", "Bob", "Charlie", "Diana", "Eve", "Frank", "Grace", "Hank"]


def print_game_state(game):
    """Print current game state."""
    print("\n" + "=" * 60)
    print(f"ROUND {game.round_number} / TURN {game.turn_number}")
    print("=" * 60)

    for player_id, player in sorted(game.players.items()):
        if player.is_bankrupt:
            status = "BANKRUPT"
        else:
            tile = game.board.tile_at(player.position)
            status = f"at {tile.name}"
        suits = "".join(s.icon for s in sorted(player.suits, key=lambda s: s.value))

        print(
            f"Player {player_id} ({player.name}): ${player.cash} | "
            f"L{player.level} | {len(game.shops_owned_by(player_id))} shops | "
            f"suits [{suits}] | {status}"
        )


def print_game_summary(game):
    """Print final game summary."""
    print("\n" + "=" * 60)
    print("GAME OVER")
    print("=" * 60)

    if game.winner is not None:
        winner = game.players[game.winner]
        print(f"\nWinner: {winner.name}")
        print(f"Net Worth: ${game.net_worth(game.winner)}")
        print(f"Shops Owned: {len(game.shops_owned_by(game.winner))}")

    print("\nFinal Standings:")
    for entry in leaderboard(game):
        status = "BANKRUPT" if entry["is_bankrupt"] else f"${entry['net_worth']}"
        print(f"  {entry['rank']}. {entry['name']}: {status}")

    print(f"\nRounds: {game.round_number} | Turns: {game.turn_number}")


def default_log_path(log_dir: str, seed: Optional[int]) -> str:
    """Log path for a run: named after the seed, or timestamped when unseeded."""
    if seed is None:
        stamp = datetime.now().strftime("%Y%m%d_%H%M%S_%f")
        return os.path.join(log_dir, f"fortune_game_{stamp}.jsonl")
    return os.path.join(log_dir, f"fortune_game_seed{seed}.jsonl")


def simulate_game(
    num_players: int = 4,
    agent_type: str = "greedy",
    seed: Optional[int] = None,
    verbose: bool = True,
    max_rounds: Optional[int] = None,
    target_net_worth: Optional[int] = None,
    board_file: Optional[str] = None,
    log_file: Optional[str] = None,
):
    """
    Simulate a complete game between bots.

    Args:
        num_players: Number of players (2-8)
        agent_type: Type of AI ('random' or 'greedy')
        seed: Random seed for reproducibility
        verbose: Whether to print detailed output
        max_rounds: Round limit (None = settings default)
        target_net_worth: Net worth that ends the game
        board_file: JSON board definition (None = standard board)
        log_file: Path to JSONL log file (None = auto-generate)

    Returns:
        The finished GameState.
    """
    settings = get_engine_settings()
    if log_file is None:
        log_file = default_log_path(settings.event_log_dir, seed)
    game_logger = GameLogger(log_file)

    board = Board()
    if board_file is not None:
        with open(board_file) as f:
            board = Board.from_dict(json.load(f))

    config = settings.to_game_config(seed=seed, max_rounds=max_rounds, target_net_worth=target_net_worth)
    players = [Player(i, PLAYER_NAMES[i]) for i in range(num_players)]
    game = create_game(config, players, board)
    runner = GameRunner("cli", game, build_agents(game, [agent_type] * num_players))

    if verbose:
        print(f"Starting game with {num_players} players using {agent_type} agents")
        print(f"Seed: {seed}")
        print(f"Logging to: {game_logger.log_file}")

    # Safety limit for decisions, not rounds
    max_iterations = 20000
    iteration_count = 0
    last_turn_number = -1

    while not game.game_over and iteration_count < max_iterations:
        iteration_count += 1

        if game.turn_number != last_turn_number:
            last_turn_number = game.turn_number
            game_logger.flush_engine_events(game)
            game_logger.log_turn_snapshot(game)
            if verbose and game.turn_number % (10 * num_players) == 0:
                print_game_state(game)

        if not runner.step_bot():
            logger.warning(f"No decision applied at turn {game.turn_number}, stopping")
            break

        game_logger.flush_engine_events(game)

    if iteration_count >= max_iterations:
        print(f"\n!!! SAFETY LIMIT HIT ({max_iterations} decisions) !!!")
        print(f"Game state: round={game.round_number}, turn={game.turn_number}, phase={game.phase.value}")

    game_logger.flush_engine_events(game)

    if verbose:
        print_game_summary(game)
        print(f"\nGame logged to: {game_logger.log_file}")

    return game


def main():
    """Main entry point for CLI."""
    parser = argparse.ArgumentParser(description="Simulate a Fortune Street game")
    parser.add_argument(
        "--players",
        type=int,
        default=4,
        choices=range(2, 9),
        help="Number of players (2-8)",
    )
    parser.add_argument(
        "--agent",
        type=str,
        default="greedy",
        choices=["random", "greedy"],
        help="AI agent type",
    )
    parser.add_argument("--seed", type=int, default=None, help="Random seed")
    parser.add_argument("--quiet", action="store_true", help="Reduce output verbosity")
    parser.add_argument("--max-rounds", type=int, default=None, help="Round limit")
    parser.add_argument("--target-net-worth", type=int, default=None, help="Net worth that ends the game")
    parser.add_argument("--board", type=str, default=None, help="Path to a JSON board definition")
    parser.add_argument(
        "--log-file",
        type=str,
        default=None,
        help="Path to JSONL log file (default: named after the seed, or timestamped)",
    )

    args = parser.parse_args()
    logging.basicConfig(level=get_engine_settings().log_level)

    simulate_game(
        num_players=args.players,
        agent_type=args.agent,
        seed=args.seed,
        verbose=not args.quiet,
        max_rounds=args.max_rounds,
        target_net_worth=args.target_net_worth,
        board_file=args.board,
        log_file=args.log_file,
    )


if __name__ == "__main__":
    main()
