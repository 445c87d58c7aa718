from typing import List

import numpy as np

from ..engine.board import get_flippable_pieces
from ..engine.constants import CORNERS, Position
from .base import CPULevel, CPUStrategy

# Two flanking cells and the diagonal neighbour of every corner
DANGER_CELLS = frozenset({
    (0, 1), (1, 0), (1, 1),
    (0, 6), (1, 6), (1, 7),
    (6, 0), (6, 1), (7, 1),
    (6, 6), (6, 7), (7, 6),
})

DANGER_SCORE = -10


def medium_choice(board: np.ndarray, player: int, valid_moves: List[Position]) -> Position:
    """Take the first available corner, otherwise the move flipping the most.

    Danger cells score -10. Ties go to the earliest move in valid_moves.
    """
    for move in valid_moves:
        if move in CORNERS:
            return move

    best_move, best_score = valid_moves[0], None
    for move in valid_moves:
        if move in DANGER_CELLS:
            score = DANGER_SCORE
        else:
            score = len(get_flippable_pieces(board, player, *move))
        if best_score is None or score > best_score:
            best_move, best_score = move, score
    return best_move


class MediumStrategy(CPUStrategy):
    level = CPULevel.MEDIUM

    async def select_from(
        self, board: np.ndarray, current_player: int, valid_moves: List[Position]
    ) -> Position:
        return medium_choice(board, current_player, valid_moves)
