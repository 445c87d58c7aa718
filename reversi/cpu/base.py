"""Common interface for the CPU move-selection strategies."""

from abc import ABC, abstractmethod
from enum import Enum
from typing import List, Optional

import numpy as np

from ..engine.board import get_valid_moves
from ..engine.constants import Position


class CPULevel(str, Enum):
    """CPU difficulty tiers."""
    EASY = "easy"  # uniform random legal move
    MEDIUM = "medium"  # corners first, then greedy flips
    HARD = "hard"  # positional weights / endgame material
    ULTIMATE = "ultimate"  # learned model, falls back to HARD


class CPUStrategy(ABC):
    """A CPU that picks a move for a board and mover.

    Strategies hold no game state between calls. ``select_move`` returns
    None when the mover has no legal move, which callers treat as a pass.
    """

    level: CPULevel

    def get_level(self) -> CPULevel:
        return self.level

    async def select_move(self, board, current_player: int) -> Optional[Position]:
        board = np.asarray(board, dtype=np.int8)
        valid_moves = get_valid_moves(board, current_player)
        if not valid_moves:
            return None
        return await self.select_from(board, current_player, valid_moves)

    @abstractmethod
    async def select_from(
        self, board: np.ndarray, current_player: int, valid_moves: List[Position]
    ) -> Position:
        """Pick one of valid_moves (never empty)."""
