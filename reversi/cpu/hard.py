"""Hard CPU: static positional evaluation with a material-count endgame."""

from typing import List, Optional

import numpy as np

from ..config import settings
from ..engine.board import count_stones, get_flippable_pieces, get_result_board, get_valid_moves
from ..engine.constants import EMPTY, Position, opponent
from .base import CPULevel, CPUStrategy

WEIGHTS = np.array(
    [
        [100, -20, 10, 5, 5, 10, -20, 100],
        [-20, -30, 1, 1, 1, 1, -30, -20],
        [10, 1, 5, 2, 2, 5, 1, 10],
        [5, 1, 2, 1, 1, 2, 1, 5],
        [5, 1, 2, 1, 1, 2, 1, 5],
        [10, 1, 5, 2, 2, 5, 1, 10],
        [-20, -30, 1, 1, 1, 1, -30, -20],
        [100, -20, 10, 5, 5, 10, -20, 100],
    ],
    dtype=np.int32,
)

MOBILITY_PENALTY = 2


def is_endgame(board: np.ndarray, threshold: Optional[int] = None) -> bool:
    threshold = settings.ENDGAME_EMPTY_THRESHOLD if threshold is None else threshold
    return count_stones(board, EMPTY) < threshold


def score_move(board: np.ndarray, player: int, move: Position, endgame: bool) -> int:
    """
    Score a single move for the Hard CPU.

    In the endgame the score is the mover's stone count after the move.
    Otherwise it is the cell weight plus the number of flips, minus twice
    the number of replies left to the opponent.
    """
    row, col = move
    result = get_result_board(board, player, move)
    if endgame:
        return count_stones(result, player)

    score = int(WEIGHTS[row, col])
    score += len(get_flippable_pieces(board, player, row, col))
    score -= MOBILITY_PENALTY * len(get_valid_moves(result, opponent(player)))
    return score


def hard_choice(board: np.ndarray, player: int, valid_moves: List[Position]) -> Position:
    """Return the highest scoring move; ties go to the earliest in valid_moves."""
    endgame = is_endgame(board)
    best_move, best_score = valid_moves[0], None
    for move in valid_moves:
        score = score_move(board, player, move, endgame)
        if best_score is None or score > best_score:
            best_move, best_score = move, score
    return best_move


class HardStrategy(CPUStrategy):
    level = CPULevel.HARD

    async def select_from(
        self, board: np.ndarray, current_player: int, valid_moves: List[Position]
    ) -> Position:
        return hard_choice(board, current_player, valid_moves)
