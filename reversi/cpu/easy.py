from typing import List, Optional

import numpy as np

from ..engine.constants import Position
from .base import CPULevel, CPUStrategy


class EasyStrategy(CPUStrategy):
    """Plays a uniformly random legal move."""

    level = CPULevel.EASY

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()

    async def select_from(
        self, board: np.ndarray, current_player: int, valid_moves: List[Position]
    ) -> Position:
        return valid_moves[int(self.rng.integers(len(valid_moves)))]
