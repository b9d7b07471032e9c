from fortune.core.agents.base import Agent
from fortune.core.agents.random import RandomAgent
from fortune.core.agents.greedy import GreedyAgent

__all__ = [
    "Agent",
    "RandomAgent",
    "GreedyAgent",
]
