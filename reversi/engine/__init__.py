"""Reversi rules: board primitives and the game state machine."""

from .board import (
    count_stones,
    get_flippable_pieces,
    get_result_board,
    get_valid_moves,
    initial_board,
    is_valid_move,
    new_board,
)
from .constants import (
    BLACK,
    BOARD_SIZE,
    CORNERS,
    DIRECTIONS,
    EMPTY,
    WHITE,
    GameMode,
    GameStatus,
    Position,
    opponent,
)
from .game_logic import ReversiGame

__all__ = [
    "BLACK",
    "BOARD_SIZE",
    "CORNERS",
    "DIRECTIONS",
    "EMPTY",
    "WHITE",
    "GameMode",
    "GameStatus",
    "Position",
    "opponent",
    "ReversiGame",
    "count_stones",
    "get_flippable_pieces",
    "get_result_board",
    "get_valid_moves",
    "initial_board",
    "is_valid_move",
    "new_board",
]
