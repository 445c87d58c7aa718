"""Reversi game state: board ownership, turn order and end detection."""

from typing import List, Optional, Sequence, Union

import numpy as np

from .board import (
    count_stones,
    get_flippable_pieces,
    get_valid_moves,
    initial_board,
    is_valid_move,
    new_board,
)
from .constants import BLACK, BOARD_SIZE, EMPTY, WHITE, GameStatus, Position, opponent

BoardLike = Union[np.ndarray, Sequence[Sequence[int]]]


class ReversiGame:
    """Owns the 8x8 board and applies the rules of Reversi.

    The board array never leaves this object: every accessor hands out a
    copy, and the only writers are the methods below.
    """

    def __init__(self, rng: Optional[np.random.Generator] = None):
        self.rng = rng if rng is not None else np.random.default_rng()
        self._board = new_board()
        self._current_player = BLACK
        self._status = GameStatus.PLAYING
        self.initialize()

    def initialize(self) -> None:
        """Reset to the starting position with Black to move."""
        self._board = initial_board()
        self._current_player = BLACK
        self._status = GameStatus.PLAYING

    def get_board(self) -> np.ndarray:
        return self._board.copy()

    def get_current_player(self) -> int:
        return self._current_player

    def get_game_status(self) -> GameStatus:
        return self._status

    def can_place_at(self, row: int, col: int, player: Optional[int] = None) -> bool:
        player = self._current_player if player is None else player
        return is_valid_move(self._board, player, row, col)

    def get_flippable_pieces(self, row: int, col: int, player: Optional[int] = None) -> List[Position]:
        player = self._current_player if player is None else player
        return get_flippable_pieces(self._board, player, row, col)

    def get_valid_moves(self, player: Optional[int] = None) -> List[Position]:
        player = self._current_player if player is None else player
        return get_valid_moves(self._board, player)

    def has_valid_move(self, player: Optional[int] = None) -> bool:
        return len(self.get_valid_moves(player)) > 0

    def place_stone(self, row: int, col: int) -> List[Position]:
        """
        Place a stone for the current player.

        Returns:
            The flipped positions, or an empty list if the move is illegal
            (the board is left untouched in that case).
        """
        if not self.can_place_at(row, col):
            return []

        flipped = self.get_flippable_pieces(row, col)
        self._board[row, col] = self._current_player
        for r, c in flipped:
            self._board[r, c] = self._current_player
        return flipped

    def next_turn(self) -> bool:
        """
        Hand the move to the other player, passing back if they cannot move.

        Returns:
            bool: False if neither player can move (the game is now ended).
        """
        self._current_player = opponent(self._current_player)
        if not self.has_valid_move():
            if not self.has_valid_move(opponent(self._current_player)):
                self._status = GameStatus.ENDED
                return False
            self._current_player = opponent(self._current_player)
        return True

    def is_game_over(self) -> bool:
        return self._status == GameStatus.ENDED

    def end_game(self) -> None:
        """Force the game into the ended state (debug/testing hook)."""
        self._status = GameStatus.ENDED

    def get_stone_count(self, player: int) -> int:
        return count_stones(self._board, player)

    def get_black_count(self) -> int:
        return count_stones(self._board, BLACK)

    def get_white_count(self) -> int:
        return count_stones(self._board, WHITE)

    def get_empty_count(self) -> int:
        return count_stones(self._board, EMPTY)

    def get_winner(self) -> Optional[int]:
        """Return the color with more stones, or None on a tie."""
        black, white = self.get_black_count(), self.get_white_count()
        if black > white:
            return BLACK
        if white > black:
            return WHITE
        return None

    def set_board(self, board: BoardLike) -> None:
        """Replace the board with a copy of an 8x8 grid."""
        try:
            grid = np.array(board)
        except ValueError as e:
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}") from e
        if grid.shape != (BOARD_SIZE, BOARD_SIZE):
            raise ValueError(f"Board must be {BOARD_SIZE}x{BOARD_SIZE}")
        if not np.isin(grid, (EMPTY, BLACK, WHITE)).all():
            raise ValueError(f"Board cells must be {EMPTY} (empty), {BLACK} (black) or {WHITE} (white)")
        self._board = grid.astype(np.int8)

    def set_current_player(self, player: int) -> None:
        if player not in (BLACK, WHITE):
            raise ValueError(f"Player must be {BLACK} (black) or {WHITE} (white), got {player!r}")
        self._current_player = player

    def generate_end_game_position(self, empty_count: int, favored_player: Optional[int] = None) -> None:
        """
        Fill the board with a random late-game position (debug utility).

        Colors are assigned by a coin flip per cell until one color's budget
        runs out; the resulting position is not guaranteed to be reachable
        from a real game.

        Args:
            empty_count: Number of cells to leave empty
            favored_player: Color that gets one stone more than an even split
        """
        total = BOARD_SIZE * BOARD_SIZE
        if not 0 <= empty_count <= total:
            raise ValueError(f"empty_count must be between 0 and {total}")
        if favored_player not in (None, BLACK, WHITE):
            raise ValueError(f"Favored player must be None, {BLACK} (black) or {WHITE} (white), got {favored_player!r}")

        stones = total - empty_count
        if favored_player == BLACK:
            black_count = stones // 2 + 1
            white_count = stones - black_count
        elif favored_player == WHITE:
            white_count = stones // 2 + 1
            black_count = stones - white_count
        else:
            black_count = stones // 2
            white_count = stones - black_count

        self._board = new_board()

        empty_cells = set()
        while len(empty_cells) < empty_count:
            row, col = (int(v) for v in self.rng.integers(0, BOARD_SIZE, size=2))
            empty_cells.add((row, col))

        remaining_black = black_count
        remaining_white = white_count
        for r in range(BOARD_SIZE):
            for c in range(BOARD_SIZE):
                if (r, c) in empty_cells:
                    continue
                if remaining_black <= 0 and remaining_white <= 0:
                    break
                if self.rng.random() < 0.5 and remaining_black > 0:
                    self._board[r, c] = BLACK
                    remaining_black -= 1
                elif remaining_white > 0:
                    self._board[r, c] = WHITE
                    remaining_white -= 1
                elif remaining_black > 0:
                    self._board[r, c] = BLACK
                    remaining_black -= 1

        self._status = GameStatus.PLAYING
        if self.has_valid_move(BLACK):
            self._current_player = BLACK
        elif self.has_valid_move(WHITE):
            self._current_player = WHITE
        else:
            self._status = GameStatus.ENDED
