"""Cell values, directions and enumerations shared by the engine and CPUs."""

from enum import Enum
from typing import NamedTuple, Tuple

BOARD_SIZE = 8

EMPTY = 0
BLACK = 1
WHITE = 2

# (row delta, col delta), scanned in this order
DIRECTIONS: Tuple[Tuple[int, int], ...] = (
    (-1, -1), (-1, 0), (-1, 1),
    (0, -1),           (0, 1),
    (1, -1),  (1, 0),  (1, 1),
)

CORNERS: Tuple[Tuple[int, int], ...] = ((0, 0), (0, 7), (7, 0), (7, 7))


class Position(NamedTuple):
    row: int
    col: int


class GameStatus(str, Enum):
    PLAYING = "playing"
    ENDED = "ended"


class GameMode(str, Enum):
    TWO_PLAYERS = "twoPlayers"
    PLAYER_VS_CPU = "playerVsCPU"
    CPU_VS_CPU = "cpuVsCpu"


def opponent(player: int) -> int:
    """Return the other color."""
    return WHITE if player == BLACK else BLACK
