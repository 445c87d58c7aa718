"""CPU move-selection strategies."""

from .base import CPULevel, CPUStrategy
from .easy import EasyStrategy
from .hard import HardStrategy, hard_choice
from .medium import MediumStrategy, medium_choice
from .player import CPUPlayer, create_strategy
from .ultimate import LoadState, ModelLoader, UltimateStrategy

__all__ = [
    "CPULevel",
    "CPUStrategy",
    "CPUPlayer",
    "create_strategy",
    "EasyStrategy",
    "MediumStrategy",
    "HardStrategy",
    "UltimateStrategy",
    "ModelLoader",
    "LoadState",
    "hard_choice",
    "medium_choice",
]
