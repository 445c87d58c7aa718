"""Board scanning primitives.

These functions work on any 8x8 board array and never mutate their input.
Both the rule engine and every CPU strategy are built on them.
"""

from typing import List

import numpy as np

from .constants import BLACK, BOARD_SIZE, DIRECTIONS, EMPTY, WHITE, Position, opponent


def new_board() -> np.ndarray:
    """Return an empty 8x8 board."""
    return np.zeros((BOARD_SIZE, BOARD_SIZE), dtype=np.int8)


def initial_board() -> np.ndarray:
    """Return the standard starting position."""
    board = new_board()
    board[3, 3] = WHITE
    board[3, 4] = BLACK
    board[4, 3] = BLACK
    board[4, 4] = WHITE
    return board


def in_bounds(row: int, col: int) -> bool:
    return 0 <= row < BOARD_SIZE and 0 <= col < BOARD_SIZE


def get_flippable_pieces(board: np.ndarray, player: int, row: int, col: int) -> List[Position]:
    """Return the opponent pieces that a stone at (row, col) would flip.

    Runs are collected per direction in DIRECTIONS order and only kept when
    closed by one of the player's own stones inside the board.
    """
    if not in_bounds(row, col) or board[row, col] != EMPTY:
        return []

    other = opponent(player)
    flippable: List[Position] = []

    for dr, dc in DIRECTIONS:
        r, c = row + dr, col + dc
        run: List[Position] = []
        while in_bounds(r, c) and board[r, c] == other:
            run.append(Position(r, c))
            r, c = r + dr, c + dc
        if run and in_bounds(r, c) and board[r, c] == player:
            flippable.extend(run)

    return flippable


def is_valid_move(board: np.ndarray, player: int, row: int, col: int) -> bool:
    """Check whether placing at (row, col) flips at least one piece."""
    if not in_bounds(row, col) or board[row, col] != EMPTY:
        return False
    return len(get_flippable_pieces(board, player, row, col)) > 0


def get_valid_moves(board: np.ndarray, player: int) -> List[Position]:
    """Return every legal move for player in row-major order."""
    return [
        Position(r, c)
        for r in range(BOARD_SIZE)
        for c in range(BOARD_SIZE)
        if board[r, c] == EMPTY and is_valid_move(board, player, r, c)
    ]


def get_result_board(board: np.ndarray, player: int, move: Position) -> np.ndarray:
    """Return a copy of board with move applied for player."""
    result = board.copy()
    row, col = move
    for r, c in get_flippable_pieces(board, player, row, col):
        result[r, c] = player
    result[row, col] = player
    return result


def count_stones(board: np.ndarray, value: int) -> int:
    """Count cells holding value (a color or EMPTY)."""
    return int(np.count_nonzero(board == value))
