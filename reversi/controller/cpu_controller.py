"""Decides which seats are CPU-controlled and asks the right CPU for a move."""

import asyncio
from typing import Awaitable, Callable, Optional, Union

from ..config import TimingConfig, settings
from ..cpu.base import CPULevel
from ..cpu.player import CPUPlayer
from ..engine.constants import BLACK, GameMode, Position
from ..engine.game_logic import ReversiGame
from ..utils.debug_logger import Logger, NoOpLogger


class CPUController:
    """Mode-aware CPU orchestration for one game.

    In PLAYER_VS_CPU a single CPU plays whichever color the human does not.
    In CPU_VS_CPU the first CPU plays Black and the second plays White.
    """

    def __init__(
        self,
        game: ReversiGame,
        timing: Optional[TimingConfig] = None,
        logger: Optional[Logger] = None,
        sleep: Callable[[float], Awaitable[None]] = asyncio.sleep,
        cpu_factory: Callable[[CPULevel], CPUPlayer] = CPUPlayer,
    ):
        self.game = game
        self.timing = timing or settings.TIMING
        self.logger = logger or NoOpLogger()
        self._sleep = sleep
        self._cpu_factory = cpu_factory

        self._game_mode = GameMode.TWO_PLAYERS
        self._cpu_player: Optional[CPUPlayer] = None
        self._cpu2_player: Optional[CPUPlayer] = None

    @property
    def game_mode(self) -> GameMode:
        return self._game_mode

    @property
    def cpu_player(self) -> Optional[CPUPlayer]:
        return self._cpu_player

    @property
    def cpu2_player(self) -> Optional[CPUPlayer]:
        return self._cpu2_player

    def update_settings(
        self,
        game_mode: Union[GameMode, str],
        cpu_level: Union[CPULevel, str] = CPULevel.MEDIUM,
        cpu2_level: Union[CPULevel, str] = CPULevel.MEDIUM,
    ) -> None:
        """Replace the CPU players to match the mode."""
        game_mode = GameMode(game_mode)
        self._game_mode = game_mode

        if game_mode == GameMode.PLAYER_VS_CPU:
            self._cpu_player = self._cpu_factory(CPULevel(cpu_level))
            self._cpu2_player = None
        elif game_mode == GameMode.CPU_VS_CPU:
            self._cpu_player = self._cpu_factory(CPULevel(cpu_level))
            self._cpu2_player = self._cpu_factory(CPULevel(cpu2_level))
        else:
            self._cpu_player = None
            self._cpu2_player = None

        self.logger.debug(
            f"CPU settings: mode={game_mode.value} "
            f"cpu1={self._level_name(self._cpu_player)} cpu2={self._level_name(self._cpu2_player)}"
        )

    def is_opponent_turn(self, player_color: int, current_player: int) -> bool:
        """Check whether the side to move is played by a CPU."""
        if self._game_mode == GameMode.CPU_VS_CPU:
            return True
        if self._game_mode == GameMode.PLAYER_VS_CPU:
            return current_player != player_color
        return False

    def get_active_cpu(self, current_player: int) -> Optional[CPUPlayer]:
        if self._game_mode == GameMode.PLAYER_VS_CPU:
            return self._cpu_player
        if self._game_mode == GameMode.CPU_VS_CPU:
            return self._cpu_player if current_player == BLACK else self._cpu2_player
        return None

    def thinking_time_s(self) -> float:
        if self._game_mode == GameMode.CPU_VS_CPU:
            return self.timing.cpu_vs_cpu_thinking_time_ms / 1000
        return self.timing.thinking_time_ms / 1000

    async def decide_cpu_move(self, current_player: int) -> Optional[Position]:
        """
        Wait the thinking time, then ask the seat's CPU for a move.

        Returns:
            The chosen move, or None if no CPU plays this seat or it has no
            legal move.
        """
        cpu = self.get_active_cpu(current_player)
        if cpu is None:
            return None

        await self._sleep(self.thinking_time_s())

        move = await cpu.select_move(self.game.get_board(), current_player)
        self.logger.debug(f"CPU ({cpu.get_level().value}) for player {current_player} chose {move}")
        return move

    def is_cpu_vs_cpu_mode(self) -> bool:
        return (
            self._game_mode == GameMode.CPU_VS_CPU
            and self._cpu_player is not None
            and self._cpu2_player is not None
        )

    def is_player_vs_cpu_mode(self) -> bool:
        return self._game_mode == GameMode.PLAYER_VS_CPU and self._cpu_player is not None

    @staticmethod
    def _level_name(cpu: Optional[CPUPlayer]) -> str:
        return cpu.get_level().value if cpu is not None else "-"
