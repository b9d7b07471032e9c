"""
Application services layer.

Provides use-case oriented services that glue the core engine to its
callers (the HTTP server and the CLI).
"""

from .runner import AGENT_ROLES, GameRunner, build_agents

__all__ = ["AGENT_ROLES", "GameRunner", "build_agents"]
