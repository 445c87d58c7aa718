"""Tests for the Easy, Medium and Hard CPU strategies and the CPUPlayer facade."""

import asyncio

import numpy as np
import pytest

from reversi.cpu import (
    CPULevel,
    CPUPlayer,
    EasyStrategy,
    HardStrategy,
    MediumStrategy,
    UltimateStrategy,
    create_strategy,
    hard_choice,
    medium_choice,
)
from reversi.cpu.hard import WEIGHTS, is_endgame, score_move
from reversi.engine import (
    BLACK,
    EMPTY,
    WHITE,
    ReversiGame,
    count_stones,
    get_result_board,
    get_valid_moves,
    opponent,
)


def select(strategy, board, player):
    return asyncio.run(strategy.select_move(board, player))


class FixedRng:
    """Stand-in for a numpy Generator that always returns the same index."""

    def __init__(self, index):
        self.index = index
        self.calls = []

    def integers(self, high):
        self.calls.append(high)
        return self.index


class TestNoMoves:

    @pytest.mark.parametrize("strategy_cls", [EasyStrategy, MediumStrategy, HardStrategy])
    def test_returns_none_without_moves(self, strategy_cls, full_black_board):
        assert select(strategy_cls(), full_black_board, WHITE) is None
        assert select(strategy_cls(), full_black_board, BLACK) is None

    def test_accepts_nested_lists(self, initial_board):
        board = initial_board.tolist()
        assert select(MediumStrategy(), board, BLACK) == (2, 3)


class TestEasyStrategy:

    def test_uses_injected_rng(self, initial_board):
        rng = FixedRng(2)
        move = select(EasyStrategy(rng=rng), initial_board, BLACK)
        assert move == (4, 5)
        assert rng.calls == [4]

    def test_seeded_choice_is_reproducible(self, initial_board):
        first = [select(EasyStrategy(np.random.default_rng(9)), initial_board, BLACK) for _ in range(3)]
        second = [select(EasyStrategy(np.random.default_rng(9)), initial_board, BLACK) for _ in range(3)]
        assert first == second

    def test_always_legal(self, initial_board):
        strategy = EasyStrategy(np.random.default_rng(0))
        legal = set(get_valid_moves(initial_board, WHITE))
        for _ in range(20):
            assert select(strategy, initial_board, WHITE) in legal


class TestMediumStrategy:

    def test_takes_corner_over_bigger_flip(self, corner_board):
        # (4, 0) flips four pieces, the corner flips one
        assert get_valid_moves(corner_board, BLACK) == [(0, 0), (4, 0)]
        assert select(MediumStrategy(), corner_board, BLACK) == (0, 0)

    def test_corner_found_late_in_scan_order(self, make_board):
        board = make_board(
            "........",
            "........",
            "...BWWW.",
            "........",
            "........",
            "........",
            ".......B",
            ".......W",
        )
        # open the (7, 7) corner: Black (5, 7), White (6, 7)
        board[7, 7] = EMPTY
        board[6, 7] = WHITE
        board[5, 7] = BLACK
        moves = get_valid_moves(board, BLACK)
        assert moves[0] == (2, 7)
        assert (7, 7) in moves
        assert select(MediumStrategy(), board, BLACK) == (7, 7)

    def test_avoids_danger_cells(self, make_board):
        # (0, 1) would flip three pieces but sits next to a corner
        board = make_board(
            "..WWWB..",
            "........",
            "........",
            "........",
            "...BW...",
        )
        assert get_valid_moves(board, BLACK) == [(0, 1), (4, 5)]
        assert select(MediumStrategy(), board, BLACK) == (4, 5)

    def test_ties_go_to_first_move(self, initial_board):
        # every opening move flips exactly one piece
        assert select(MediumStrategy(), initial_board, BLACK) == (2, 3)
        assert select(MediumStrategy(), initial_board, WHITE) == (2, 4)

    def test_medium_choice_prefers_most_flips(self, make_board):
        board = make_board(
            "........",
            "........",
            "..BWWW..",
            "........",
            "....WB..",
        )
        moves = get_valid_moves(board, BLACK)
        assert moves == [(2, 6), (4, 3)]
        assert medium_choice(board, BLACK, moves) == (2, 6)


class TestHardStrategy:

    def test_opening_tie_break(self, initial_board):
        assert select(HardStrategy(), initial_board, BLACK) == (2, 3)

    def test_prefers_corner_weight(self, corner_board):
        assert select(HardStrategy(), corner_board, BLACK) == (0, 0)

    def test_positional_score(self, initial_board):
        move = (2, 3)
        result = get_result_board(initial_board, BLACK, move)
        expected = WEIGHTS[2, 3] + 1 - 2 * len(get_valid_moves(result, WHITE))
        assert score_move(initial_board, BLACK, move, endgame=False) == expected

    def test_endgame_threshold(self, initial_board):
        assert not is_endgame(initial_board)
        board = np.full((8, 8), BLACK, dtype=np.int8)
        board.flat[:15] = EMPTY
        assert is_endgame(board)
        board.flat[15] = EMPTY
        assert not is_endgame(board)

    def test_endgame_maximizes_material(self):
        checked = 0
        for seed in range(50):
            game = ReversiGame(rng=np.random.default_rng(seed))
            game.generate_end_game_position(10)
            if game.is_game_over():
                continue
            board = game.get_board()
            player = game.get_current_player()
            moves = get_valid_moves(board, player)
            if len(moves) < 2:
                continue

            assert count_stones(board, EMPTY) == 10
            expected = max(moves, key=lambda m: count_stones(get_result_board(board, player, m), player))
            assert select(HardStrategy(), board, player) == expected
            checked += 1

        assert checked > 0

    def test_hard_choice_matches_strategy(self, corner_board):
        moves = get_valid_moves(corner_board, BLACK)
        assert hard_choice(corner_board, BLACK, moves) == select(HardStrategy(), corner_board, BLACK)

    def test_does_not_mutate_board(self, initial_board):
        before = initial_board.copy()
        select(HardStrategy(), initial_board, BLACK)
        assert np.array_equal(initial_board, before)


class TestCPUPlayer:

    @pytest.mark.parametrize(
        "level,cls",
        [
            (CPULevel.EASY, EasyStrategy),
            (CPULevel.MEDIUM, MediumStrategy),
            (CPULevel.HARD, HardStrategy),
            ("ultimate", UltimateStrategy),
        ],
    )
    def test_create_strategy(self, level, cls):
        strategy = create_strategy(level)
        assert isinstance(strategy, cls)
        assert strategy.get_level() == CPULevel(level)

    def test_unknown_level_rejected(self):
        with pytest.raises(ValueError):
            create_strategy("impossible")

    def test_default_level_is_medium(self):
        assert CPUPlayer().get_level() == CPULevel.MEDIUM

    def test_set_level_replaces_strategy(self):
        player = CPUPlayer(CPULevel.EASY)
        old = player.strategy
        player.set_level(CPULevel.HARD)

        assert player.get_level() == CPULevel.HARD
        assert player.strategy is not old
        assert isinstance(player.strategy, HardStrategy)

    def test_select_move_delegates(self, corner_board):
        player = CPUPlayer(CPULevel.MEDIUM)
        assert asyncio.run(player.select_move(corner_board, BLACK)) == (0, 0)

    def test_easy_player_uses_rng(self, initial_board):
        player = CPUPlayer(CPULevel.EASY, rng=FixedRng(3))
        assert asyncio.run(player.select_move(initial_board, BLACK)) == (5, 4)

    def test_opponent_helper(self):
        assert opponent(BLACK) == WHITE
