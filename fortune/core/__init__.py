"""
Core domain layer for Fortune Street.

Exposes game engine primitives and built-in agents.
"""

from fortune.core.game import Board, GameConfig, GameState, Player, PlayerState, create_game
from fortune.core.agents import Agent, GreedyAgent, RandomAgent

__all__ = [
    "Board",
    "GameConfig",
    "GameState",
    "Player",
    "PlayerState",
    "create_game",
    "Agent",
    "GreedyAgent",
    "RandomAgent",
]
