"""Headless CPU-vs-CPU matches for comparing difficulty levels."""

import asyncio
from dataclasses import dataclass, field
from typing import List, Optional, Union

import numpy as np
from tqdm.auto import tqdm

from ..cpu.base import CPULevel, CPUStrategy
from ..cpu.player import create_strategy
from ..engine.constants import BLACK, WHITE, Position
from ..engine.game_logic import ReversiGame


@dataclass
class GameRecord:
    """Outcome of one arena game."""
    black_count: int
    white_count: int
    winner: Optional[int]
    moves: List[Position] = field(default_factory=list)
    passes: int = 0


@dataclass
class ArenaResult:
    """Tally from level_a's point of view."""
    level_a: CPULevel
    level_b: CPULevel
    wins: int = 0
    losses: int = 0
    draws: int = 0
    games: List[GameRecord] = field(default_factory=list)

    @property
    def total_games(self) -> int:
        return self.wins + self.losses + self.draws

    @property
    def win_rate(self) -> float:
        return self.wins / self.total_games if self.total_games else 0.0


async def play_game(
    black: CPUStrategy, white: CPUStrategy, game: Optional[ReversiGame] = None
) -> GameRecord:
    """Play one game between two strategies with no delays."""
    game = game or ReversiGame()
    game.initialize()
    record = GameRecord(black_count=0, white_count=0, winner=None)

    while not game.is_game_over():
        current = game.get_current_player()
        strategy = black if current == BLACK else white
        move = await strategy.select_move(game.get_board(), current)

        if move is None or not game.place_stone(*move):
            # Treat a missing or rejected move as a pass
            record.passes += 1
        else:
            record.moves.append(Position(*move))
        game.next_turn()

    record.black_count = game.get_black_count()
    record.white_count = game.get_white_count()
    record.winner = game.get_winner()
    return record


def run_arena(
    level_a: Union[CPULevel, str],
    level_b: Union[CPULevel, str],
    num_games: int = 10,
    seed: Optional[int] = None,
    show_progress: bool = True,
) -> ArenaResult:
    """Play num_games between two levels, swapping colors every game."""
    if num_games < 0:
        raise ValueError("num_games must be non-negative")

    level_a, level_b = CPULevel(level_a), CPULevel(level_b)
    rng = np.random.default_rng(seed)
    result = ArenaResult(level_a=level_a, level_b=level_b)

    async def _play_all() -> None:
        strategy_a = create_strategy(level_a, rng=rng)
        strategy_b = create_strategy(level_b, rng=rng)
        game = ReversiGame(rng=rng)

        pbar = tqdm(
            range(num_games),
            desc=f"{level_a.value} vs {level_b.value}",
            disable=not show_progress,
        )
        for game_idx in pbar:
            a_is_black = game_idx % 2 == 0
            if a_is_black:
                record = await play_game(strategy_a, strategy_b, game)
            else:
                record = await play_game(strategy_b, strategy_a, game)
            result.games.append(record)

            a_color = BLACK if a_is_black else WHITE
            if record.winner is None:
                result.draws += 1
            elif record.winner == a_color:
                result.wins += 1
            else:
                result.losses += 1
            pbar.set_postfix(wins=result.wins, losses=result.losses, draws=result.draws)

    asyncio.run(_play_all())
    return result
