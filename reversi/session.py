"""One game session: human input, CPU turns and animation gating."""

import asyncio
from dataclasses import dataclass
from typing import Awaitable, Callable, Optional, Union

from .animation.flip_animation import FlipAnimationManager
from .config import TimingConfig
from .controller.cpu_controller import CPUController
from .cpu.base import CPULevel
from .cpu.player import CPUPlayer
from .engine.constants import BLACK, WHITE, GameMode, Position
from .engine.game_logic import ReversiGame
from .utils.debug_logger import Logger, NoOpLogger


@dataclass(frozen=True)
class GameResult:
    black_count: int
    white_count: int
    winner: Optional[int]  # None on a draw


class GameSession:
    """Drives a ReversiGame the way the board UI does.

    Only one board-changing action runs at a time: clicks are refused while
    a flip animation plays or a CPU is to move. Every restart bumps the
    session generation, and continuations that resume after a restart stop
    without touching the new game.
    """

    def __init__(
        self,
        game: Optional[ReversiGame] = None,
        timing: Optional[TimingConfig] = None,
        logger: Optional[Logger] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        cpu_factory: Callable[[CPULevel], CPUPlayer] = CPUPlayer,
    ):
        self.game = game or ReversiGame()
        self.logger = logger or NoOpLogger()
        self.animation = FlipAnimationManager(timing=timing, sleep=sleep)
        self.controller = CPUController(
            self.game, timing=timing, logger=self.logger, sleep=sleep, cpu_factory=cpu_factory
        )
        self.player_color = BLACK
        self._generation = 0
        # Generation whose CPU loop is running, if any
        self._cpu_generation: Optional[int] = None

    @property
    def generation(self) -> int:
        return self._generation

    def configure(
        self,
        game_mode: Union[GameMode, str],
        player_color: int = BLACK,
        cpu_level: Union[CPULevel, str] = CPULevel.MEDIUM,
        cpu2_level: Union[CPULevel, str] = CPULevel.MEDIUM,
    ) -> None:
        """Set mode, human color and CPU levels, then start a new game."""
        if player_color not in (BLACK, WHITE):
            raise ValueError(f"Player color must be {BLACK} or {WHITE}, got {player_color!r}")
        self.player_color = player_color
        self.controller.update_settings(game_mode, cpu_level, cpu2_level)
        self.restart()

    def restart(self) -> None:
        self._generation += 1
        self.animation.reset()
        self.game.initialize()
        self.logger.debug(f"Session restarted (generation {self._generation})")

    def skip_to_end_game(self, empty_count: int = 2, favored_player: Optional[int] = None) -> None:
        """Jump to a random late position (debug hook)."""
        self._generation += 1
        self.animation.reset()
        self.game.generate_end_game_position(empty_count, favored_player)

    def is_cpu_turn(self) -> bool:
        return self.controller.is_opponent_turn(self.player_color, self.game.get_current_player())

    def is_input_locked(self) -> bool:
        return self.game.is_game_over() or self.animation.is_animating or self.is_cpu_turn()

    async def handle_cell_click(self, row: int, col: int) -> bool:
        """
        Apply a human move.

        Returns:
            bool: True if the move was accepted. Clicks during animation,
            on a CPU turn, after the game ended or on illegal cells are
            ignored.
        """
        if self.is_input_locked():
            return False
        return await self._play(row, col)

    async def play_cpu_turns(self) -> int:
        """Let CPUs move until a human is to move or the game ends.

        Returns:
            Number of CPU moves played.
        """
        generation = self._generation
        if self._cpu_generation == generation:
            return 0

        self._cpu_generation = generation
        played = 0
        try:
            while not self.game.is_game_over() and self.is_cpu_turn():
                current = self.game.get_current_player()
                move = await self.controller.decide_cpu_move(current)
                if generation != self._generation:
                    break
                if move is None:
                    if self.controller.get_active_cpu(current) is None:
                        break
                    self.game.next_turn()
                    continue

                await self._play(*move)
                if generation != self._generation:
                    break
                played += 1
        finally:
            if self._cpu_generation == generation:
                self._cpu_generation = None
        return played

    def result(self) -> GameResult:
        return GameResult(
            black_count=self.game.get_black_count(),
            white_count=self.game.get_white_count(),
            winner=self.game.get_winner(),
        )

    async def _play(self, row: int, col: int) -> bool:
        generation = self._generation
        flipped = self.game.place_stone(row, col)
        if not flipped:
            return False

        await self.animation.animate_flip(Position(row, col), flipped)
        if generation == self._generation:
            self.game.next_turn()
        return True
