"""Reversi rule engine and CPU players."""

from .engine import BLACK, EMPTY, WHITE, GameMode, GameStatus, Position, ReversiGame
from .cpu import CPULevel, CPUPlayer
from .controller import CPUController
from .session import GameResult, GameSession

__all__ = [
    "BLACK",
    "EMPTY",
    "WHITE",
    "GameMode",
    "GameStatus",
    "Position",
    "ReversiGame",
    "CPULevel",
    "CPUPlayer",
    "CPUController",
    "GameResult",
    "GameSession",
]
