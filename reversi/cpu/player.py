from typing import Optional, Union

import numpy as np

from ..config import ModelConfig
from ..engine.constants import Position
from ..utils.debug_logger import Logger
from .base import CPULevel, CPUStrategy
from .easy import EasyStrategy
from .hard import HardStrategy
from .medium import MediumStrategy
from .ultimate import UltimateStrategy


def create_strategy(
    level: Union[CPULevel, str],
    rng: Optional[np.random.Generator] = None,
    model_config: Optional[ModelConfig] = None,
    logger: Optional[Logger] = None,
) -> CPUStrategy:
    """Build a fresh strategy object for a difficulty level."""
    level = CPULevel(level)
    if level == CPULevel.EASY:
        return EasyStrategy(rng=rng)
    if level == CPULevel.MEDIUM:
        return MediumStrategy()
    if level == CPULevel.HARD:
        return HardStrategy()
    return UltimateStrategy(model_config=model_config, logger=logger)


class CPUPlayer:
    """A CPU seat bound to one difficulty level.

    Changing the level replaces the strategy object instead of mutating it.
    """

    def __init__(
        self,
        level: Union[CPULevel, str] = CPULevel.MEDIUM,
        rng: Optional[np.random.Generator] = None,
        model_config: Optional[ModelConfig] = None,
        logger: Optional[Logger] = None,
    ):
        self._rng = rng
        self._model_config = model_config
        self._logger = logger
        self.strategy = create_strategy(level, rng, model_config, logger)

    def get_level(self) -> CPULevel:
        return self.strategy.get_level()

    def set_level(self, level: Union[CPULevel, str]) -> None:
        self.strategy = create_strategy(level, self._rng, self._model_config, self._logger)

    async def select_move(self, board, current_player: int) -> Optional[Position]:
        return await self.strategy.select_move(board, current_player)
