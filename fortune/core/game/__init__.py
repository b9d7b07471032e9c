from fortune.core.game.game import GameState, TurnPhase, create_game
from fortune.core.game.player import Player, PlayerState
from fortune.core.game.board import Board
from fortune.core.game.config import GameConfig, SuitAwardPolicy
from fortune.core.game.layout import BoardDefinition, standard_board_definition

__all__ = [
    "GameState",
    "TurnPhase",
    "create_game",
    "Player",
    "PlayerState",
    "Board",
    "GameConfig",
    "SuitAwardPolicy",
    "BoardDefinition",
    "standard_board_definition",
]
